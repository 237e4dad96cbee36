"""Motion analyzer: ring-buffer smoothing of player positions."""
from __future__ import annotations

import logging

from redlight import vec
from redlight.types import Point3

logger = logging.getLogger(__name__)


class MotionAnalyzer:
    """Reports how far the newest sample sits from the smoothed average.

    The buffer is pre-filled with the first observed position, so it is
    always full. The mean is taken relative to the newest sample, which
    makes a stationary player report exactly ``0.0``.
    """

    def __init__(self, window: int = 5, ignore_vertical: bool = True) -> None:
        if window < 1:
            logger.warning("smoothing window %d too small, using 1", window)
            window = 1
        self._window = window
        self.ignore_vertical = ignore_vertical
        self._buffer: list[Point3] = []
        self._index = 0
        self._last_displacement = 0.0

    @property
    def window(self) -> int:
        return self._window

    @property
    def primed(self) -> bool:
        return bool(self._buffer)

    @property
    def last_displacement(self) -> float:
        return self._last_displacement

    def prime(self, position: Point3) -> None:
        self._buffer = [position] * self._window
        self._index = 0

    def reset(self) -> None:
        self._buffer = []
        self._index = 0
        self._last_displacement = 0.0

    def mean(self) -> Point3:
        if not self._buffer:
            return vec.ZERO
        n = len(self._buffer)
        sx = sy = sz = 0.0
        for x, y, z in self._buffer:
            sx += x
            sy += y
            sz += z
        return (sx / n, sy / n, sz / n)

    def observe(self, position: Point3) -> float:
        if not self._buffer:
            self.prime(position)
        self._buffer[self._index] = position
        self._index = (self._index + 1) % self._window

        n = self._window
        ox = oy = oz = 0.0
        for p in self._buffer:
            ox += p[0] - position[0]
            oy += p[1] - position[1]
            oz += p[2] - position[2]
        offset: Point3 = (ox / n, oy / n, oz / n)
        if self.ignore_vertical:
            offset = vec.flatten(offset)
        self._last_displacement = vec.magnitude(offset)
        return self._last_displacement
