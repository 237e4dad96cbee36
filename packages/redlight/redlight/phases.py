"""Phase scheduler: the GREEN/RED timeline of a round."""
from __future__ import annotations

import logging

from redlight.signals import PHASE_CHANGED, SignalBus
from redlight.timeline import Delay, Timeline
from redlight.types import RoundPhase

logger = logging.getLogger(__name__)

# A zero-length cycle would never let the timeline catch up.
MIN_PHASE_DURATION = 0.01


def _phase_length(name: str, seconds: float) -> float:
    if seconds < MIN_PHASE_DURATION:
        logger.warning(
            "%s phase of %.3fs too short, using %.2fs", name, seconds, MIN_PHASE_DURATION
        )
        return MIN_PHASE_DURATION
    return seconds


class PhaseScheduler:
    """INIT -> (start_delay) -> GREEN -> RED -> GREEN ... until stopped.

    Each phase is one booked delay on the timeline. Transitions publish
    ``phase_changed`` with ``phase`` and ``duration``.
    """

    def __init__(
        self,
        timeline: Timeline,
        bus: SignalBus,
        start_delay: float,
        green_duration: float,
        red_duration: float,
    ) -> None:
        self._timeline = timeline
        self._bus = bus
        self.start_delay = max(0.0, start_delay)
        self.green_duration = _phase_length("green", green_duration)
        self.red_duration = _phase_length("red", red_duration)
        self._phase: RoundPhase | None = None
        self._pending: Delay | None = None
        self._started = False
        self._stopped = False
        self._transitions = 0

    @property
    def phase(self) -> RoundPhase | None:
        """Current phase, or None before the start delay has elapsed."""
        return self._phase

    @property
    def is_red(self) -> bool:
        return self._phase is RoundPhase.RED

    @property
    def running(self) -> bool:
        return self._started and not self._stopped

    @property
    def stopped(self) -> bool:
        return self._stopped

    @property
    def transitions(self) -> int:
        return self._transitions

    def duration_of(self, phase: RoundPhase) -> float:
        return self.green_duration if phase is RoundPhase.GREEN else self.red_duration

    def start(self) -> None:
        if self._started or self._stopped:
            return
        self._started = True
        self._pending = self._timeline.after(
            self.start_delay, "phase:start", lambda: self._enter(RoundPhase.GREEN)
        )

    def stop(self) -> None:
        if self._stopped:
            return
        self._stopped = True
        self._timeline.cancel(self._pending)
        self._pending = None
        logger.info("phase scheduler stopped in %s", self._phase)

    def force_phase(self, phase: RoundPhase) -> None:
        """Apply ``phase`` now without moving the booked timeline."""
        if self._stopped:
            return
        self._apply(phase)

    def _enter(self, phase: RoundPhase) -> None:
        if self._stopped:
            return
        self._apply(phase)
        following = RoundPhase.RED if phase is RoundPhase.GREEN else RoundPhase.GREEN
        self._pending = self._timeline.after(
            self.duration_of(phase),
            f"phase:{following.value}",
            lambda: self._enter(following),
        )

    def _apply(self, phase: RoundPhase) -> None:
        self._phase = phase
        self._transitions += 1
        duration = self.duration_of(phase)
        logger.info("phase -> %s (%.2fs) at t=%.2f", phase.name, duration, self._timeline.now)
        self._bus.publish(PHASE_CHANGED, phase=phase, duration=duration)
