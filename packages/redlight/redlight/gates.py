"""Line gate: directed-plane crossing with a rectangle fallback."""
from __future__ import annotations

import logging

from redlight import vec
from redlight.types import GateResult, Point3

logger = logging.getLogger(__name__)


class LineGate:
    """A one-way boundary at ``anchor`` facing ``normal``.

    The plane test latches when the player goes from the non-positive side
    to the positive side. The rectangle test (``half_width`` across,
    ``depth`` along the normal, centered on the anchor) catches players who
    skip over the plane between ticks. Once latched the gate stays crossed
    until ``reset``.
    """

    def __init__(
        self,
        name: str,
        anchor: Point3,
        normal: Point3,
        half_width: float = 6.0,
        depth: float = 0.5,
        use_fallback: bool = True,
    ) -> None:
        self.name = name
        self.anchor = anchor
        if vec.magnitude(normal) <= 1e-3:
            logger.warning("gate %r has a zero-length normal, facing +Z", name)
        self.normal = vec.normalize_or(normal, vec.FORWARD)
        self.right = vec.normalize_or(vec.cross(vec.UP, self.normal), vec.RIGHT)
        self.half_width = max(0.0, half_width)
        self.depth = max(0.0, depth)
        self.use_fallback = use_fallback
        self.last_side = 0.0
        self._crossed = False

    @property
    def crossed(self) -> bool:
        return self._crossed

    def signed_distance(self, position: Point3) -> float:
        return vec.dot(vec.sub(position, self.anchor), self.normal)

    def side(self, position: Point3) -> float:
        return vec.sign(self.signed_distance(position))

    def local(self, position: Point3) -> tuple[float, float]:
        """(x, z) of ``position`` in the gate frame."""
        rel = vec.sub(position, self.anchor)
        return vec.dot(rel, self.right), vec.dot(rel, self.normal)

    def inside_rect(self, position: Point3) -> bool:
        x, z = self.local(position)
        return abs(x) <= self.half_width and abs(z) <= self.depth * 0.5

    def prime(self, position: Point3) -> None:
        """Record the starting side so a spawn on the far side is not a crossing."""
        self.last_side = self.side(position)

    def evaluate(self, position: Point3) -> GateResult:
        current = self.side(position)
        plane_hit = self.last_side <= 0.0 and current > 0.0
        self.last_side = current

        inside = self.use_fallback and self.inside_rect(position)

        if self._crossed or not (plane_hit or inside):
            return GateResult(crossed_this_tick=False, inside_fallback_region=inside)

        self._crossed = True
        reason = "plane" if plane_hit else "rect_fallback"
        logger.info("gate %r crossed (%s)", self.name, reason)
        return GateResult(
            crossed_this_tick=True, inside_fallback_region=inside, reason=reason
        )

    def force(self, reason: str = "forced") -> bool:
        """Latch the gate manually. Returns False if it was already crossed."""
        if self._crossed:
            return False
        self._crossed = True
        logger.info("gate %r crossed (%s)", self.name, reason)
        return True

    def reset(self) -> None:
        self._crossed = False
        self.last_side = 0.0
