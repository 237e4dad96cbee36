"""One-shot delayed actions keyed by absolute due time."""
from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from redlight.round import RedLightRound
    from redlight.types import System, TickContext

logger = logging.getLogger(__name__)

# Accumulated dt drifts below exact boundaries; anything this close is due.
_EPS = 1e-9


@dataclass
class Delay:
    """A pending action. Fires once when the timeline reaches ``due``."""

    name: str
    due: float
    action: Callable[[], None] = field(repr=False)
    cancelled: bool = False
    fired: bool = False

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)


class Timeline:
    """Elapsed-time bookkeeping for every suspended task in a round.

    While an action runs, ``now`` equals that action's due time, so a
    delay booked from inside an action starts from the exact boundary
    rather than from the end of the tick that happened to reach it.
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._seq = 0
        self._heap: list[tuple[float, int, Delay]] = []

    @property
    def now(self) -> float:
        return self._now

    def after(self, seconds: float, name: str, action: Callable[[], None]) -> Delay:
        """Book ``action`` to run ``seconds`` from now. Non-positive delays clamp to 0."""
        if seconds < 0:
            logger.debug("delay %r of %.3fs clamped to 0", name, seconds)
            seconds = 0.0
        delay = Delay(name=name, due=self._now + seconds, action=action)
        heapq.heappush(self._heap, (delay.due, self._seq, delay))
        self._seq += 1
        return delay

    def cancel(self, delay: Delay | None) -> None:
        if delay is not None:
            delay.cancelled = True

    def pending(self, name: str | None = None) -> list[Delay]:
        """Active delays in due order, optionally filtered by name."""
        return [
            d for _, _, d in sorted(self._heap)
            if d.active and (name is None or d.name == name)
        ]

    def advance(self, dt: float) -> int:
        """Move time forward by ``dt`` and run every action now due. Returns the count fired."""
        target = self._now + max(0.0, dt)
        fired = 0
        while self._heap and self._heap[0][0] <= target + _EPS:
            due, _, delay = heapq.heappop(self._heap)
            if not delay.active:
                continue
            self._now = max(self._now, due)
            delay.fired = True
            fired += 1
            delay.action()
        self._now = max(self._now, target)
        return fired

    def cancel_all(self) -> None:
        for _, _, delay in self._heap:
            delay.cancelled = True
        self._heap.clear()

    def clear(self) -> None:
        self.cancel_all()
        self._now = 0.0


def make_timeline_system(timeline: Timeline) -> System:
    """Return a system that resumes due delays once per tick."""

    def timeline_system(round_: RedLightRound, ctx: TickContext) -> None:
        timeline.advance(ctx.dt)

    return timeline_system
