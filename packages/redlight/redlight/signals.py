"""Round signals: queued during a tick, dispatched at the flush points."""
from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from redlight.round import RedLightRound
    from redlight.types import System, TickContext

logger = logging.getLogger(__name__)

Handler = Callable[[str, dict[str, Any]], None]

PHASE_CHANGED = "phase_changed"
START_CROSSED = "start_crossed"
FINISHED = "finished"
GUNSHOT = "gunshot"
DIED = "died"
TIME_EXPIRED = "time_expired"

ROUND_SIGNALS = frozenset(
    {PHASE_CHANGED, START_CROSSED, FINISHED, GUNSHOT, DIED, TIME_EXPIRED}
)


class SignalBus:
    """Queue of round signals with explicit flush points.

    ``publish`` never calls a handler directly. The round flushes twice per
    tick, once after the timeline and once after the ambient update.
    Handlers run in subscription order; whatever they publish lands in the
    next flush.
    """

    def __init__(self) -> None:
        self._handlers: defaultdict[str, list[Handler]] = defaultdict(list)
        self._queued: list[tuple[str, dict[str, Any]]] = []

    @property
    def pending(self) -> int:
        return len(self._queued)

    def subscribe(self, name: str, handler: Handler) -> None:
        if name not in ROUND_SIGNALS:
            logger.debug("subscribing to non-round signal %r", name)
        self._handlers[name].append(handler)

    def unsubscribe(self, name: str, handler: Handler) -> None:
        """Remove one registration of ``handler``. Unknown pairs are ignored."""
        handlers = self._handlers.get(name, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, name: str, **data: Any) -> None:
        logger.debug("queued %s %s", name, data)
        self._queued.append((name, data))

    def flush(self) -> int:
        """Dispatch what was queued before this call. Returns the number of handler calls."""
        batch, self._queued = self._queued, []
        calls = 0
        for name, data in batch:
            for handler in tuple(self._handlers.get(name, ())):
                handler(name, data)
                calls += 1
        return calls

    def clear(self) -> None:
        """Drop queued signals without dispatching them. Subscriptions stay."""
        self._queued = []


def make_signal_system(bus: SignalBus) -> System:
    def signal_system(round_: RedLightRound, ctx: TickContext) -> None:
        bus.flush()

    return signal_system
