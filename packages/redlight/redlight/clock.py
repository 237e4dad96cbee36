"""Clock and TickContext for a variable-timestep round loop."""

from typing import Callable

from redlight.types import TickContext


class Clock:
    def __init__(self, tps: int) -> None:
        if tps <= 0:
            raise ValueError("tps must be positive")
        self._tps = tps
        self._default_dt = 1.0 / tps
        self._dt = self._default_dt
        self._tick_number = 0
        self._elapsed = 0.0

    @property
    def tps(self) -> int:
        return self._tps

    @property
    def default_dt(self) -> float:
        return self._default_dt

    @property
    def dt(self) -> float:
        """Length of the most recent tick."""
        return self._dt

    @property
    def tick_number(self) -> int:
        return self._tick_number

    @property
    def elapsed(self) -> float:
        return self._elapsed

    def advance(self, dt: float | None = None) -> int:
        """Advance one tick of ``dt`` seconds (default 1/tps). Negative dt counts as 0."""
        if dt is None:
            dt = self._default_dt
        self._dt = max(0.0, dt)
        self._elapsed += self._dt
        self._tick_number += 1
        return self._tick_number

    def context(self, stop_fn: Callable[[], None]) -> TickContext:
        return TickContext(
            tick_number=self._tick_number,
            dt=self._dt,
            elapsed=self._elapsed,
            request_stop=stop_fn,
        )

    def reset(self) -> None:
        self._tick_number = 0
        self._elapsed = 0.0
        self._dt = self._default_dt
