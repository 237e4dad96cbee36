"""Round timer: wall-clock budget for one round."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from redlight.hooks import END_CLIP, TICK_CLIP
from redlight.signals import TIME_EXPIRED, SignalBus
from redlight.timeline import Delay, Timeline
from redlight.types import Color, PlayerRoundState

if TYPE_CHECKING:
    from redlight.config import RoundConfig
    from redlight.hooks import AudioCues, Display

logger = logging.getLogger(__name__)

_EPS = 1e-9

NORMAL_COLOR: Color = (1.0, 1.0, 1.0)
WARNING_COLOR: Color = (1.0, 0.0, 0.0)
WIN_TEXT = "You Win!"
WIN_COLOR: Color = (0.0, 1.0, 0.0)


def format_remaining(seconds: float) -> str:
    seconds = max(0.0, seconds)
    return f"{int(seconds // 60):02d}:{int(seconds % 60):02d}"


class RoundTimer:
    """Counts the round budget down and settles the round at zero or on finish.

    At zero, a round that is not finished gets ``on_expire`` after the
    grace delay. ``on_finish`` stops the clock and books ``on_next_round``.
    """

    def __init__(
        self,
        config: RoundConfig,
        state: PlayerRoundState,
        timeline: Timeline,
        bus: SignalBus,
        on_expire: Callable[[str], object] | None = None,
        on_next_round: Callable[[], None] | None = None,
        audio: AudioCues | None = None,
        display: Display | None = None,
    ) -> None:
        self._config = config
        self._state = state
        self._timeline = timeline
        self._bus = bus
        self._on_expire = on_expire
        self._on_next_round = on_next_round
        self._audio = audio
        self._display = display
        self.total_time = max(0.0, config.round_total_time)
        self._remaining = self.total_time
        self._running = False
        self._expired = False
        self._finished = False
        self._tick_accumulator = 0.0
        self._grace: Delay | None = None
        self._advance: Delay | None = None

    @property
    def remaining(self) -> float:
        return self._remaining

    @property
    def running(self) -> bool:
        return self._running

    @property
    def expired(self) -> bool:
        return self._expired

    @property
    def finished(self) -> bool:
        return self._finished

    def start(self) -> None:
        self._remaining = self.total_time
        self._running = True
        self._expired = False
        self._finished = False
        self._tick_accumulator = 0.0
        self._show()
        logger.info("round timer started: %.1fs", self._remaining)

    def stop(self) -> None:
        self._running = False

    def update(self, dt: float) -> None:
        if not self._running or self._finished:
            return
        dt = max(0.0, dt)
        self._remaining = max(0.0, self._remaining - dt)

        if self._config.play_tick:
            self._tick_accumulator += dt
            while self._tick_accumulator >= 1.0 - _EPS:
                self._tick_accumulator -= 1.0
                if self._audio is not None:
                    self._audio.play_cue_local(TICK_CLIP, self._config.tick_volume)

        self._show()

        if self._remaining <= _EPS:
            self._remaining = 0.0
            self._running = False
            self._expire()

    def on_finish(self) -> None:
        if self._finished:
            logger.debug("finish already handled")
            return
        self._finished = True
        self._running = False
        logger.info("finish reached with %.1fs left", self._remaining)
        if self._display is not None:
            self._display.set_status_text(WIN_TEXT, WIN_COLOR)
        self._advance = self._timeline.after(
            self._config.finish_advance_delay, "timer:next_round", self._next_round
        )

    def _expire(self) -> None:
        if self._expired:
            return
        self._expired = True
        logger.info("round time expired")
        if self._audio is not None:
            self._audio.play_cue_local(END_CLIP, self._config.end_volume)
        self._bus.publish(TIME_EXPIRED, finished=self._state.has_finished)
        if self._state.has_finished or self._finished:
            return
        self._grace = self._timeline.after(
            self._config.timer_grace_delay, "timer:grace", self._eliminate
        )

    def _eliminate(self) -> None:
        if self._state.has_finished:
            return
        if self._on_expire is not None:
            self._on_expire("time_expired")

    def _next_round(self) -> None:
        logger.info("loading next round")
        if self._on_next_round is not None:
            self._on_next_round()

    def _show(self) -> None:
        if self._display is None:
            return
        color = WARNING_COLOR if self._remaining <= self._config.warning_time else NORMAL_COLOR
        self._display.set_timer_text(format_remaining(self._remaining), color)
