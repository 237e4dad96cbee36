"""Death sequencer: ALIVE -> GUNSHOT_PENDING -> DEAD."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from redlight import vec
from redlight.hooks import DEATH_CLIP, GUNSHOT_CLIP
from redlight.signals import DIED, GUNSHOT, SignalBus
from redlight.timeline import Delay, Timeline
from redlight.types import DeathState, PlayerRoundState, Point3, RoundPhase

if TYPE_CHECKING:
    from redlight.config import RoundConfig
    from redlight.hooks import AudioCues, Disableable, Display, FallBody

logger = logging.getLogger(__name__)

LOSE_TEXT = "Detected! You Lose"
LOSE_COLOR = (1.0, 0.0, 0.0)


class DeathSequencer:
    """Turns motion during RED into a delayed, irrevocable elimination.

    ``check`` is the per-tick gate. ``force_death`` skips the gunshot
    delay for out-of-band eliminations such as timer expiry. Both entry
    points are idempotent; a pending death cannot be cancelled.
    """

    def __init__(
        self,
        config: RoundConfig,
        state: PlayerRoundState,
        timeline: Timeline,
        bus: SignalBus,
        audio: AudioCues | None = None,
        display: Display | None = None,
        body: FallBody | None = None,
        gunshot_origin: Point3 | None = None,
        on_restart: Callable[[], None] | None = None,
    ) -> None:
        self._config = config
        self._state = state
        self._timeline = timeline
        self._bus = bus
        self._audio = audio
        self._display = display
        self._body = body
        self.gunshot_origin = gunshot_origin
        self._on_restart = on_restart
        self._disable: list[Disableable] = []
        self._status = DeathState.ALIVE
        self._pending: Delay | None = None
        self._restart: Delay | None = None
        self.cause: str | None = None

    @property
    def status(self) -> DeathState:
        return self._status

    @property
    def alive(self) -> bool:
        return self._status is DeathState.ALIVE

    def register_disable(self, target: Disableable) -> None:
        self._disable.append(target)

    def check(
        self, phase: RoundPhase | None, state: PlayerRoundState, displacement: float
    ) -> bool:
        """Start the gunshot if the player moved during RED inside the course."""
        if phase is not RoundPhase.RED or not self.alive:
            return False
        if not state.has_crossed_start or state.has_finished or state.is_dead:
            return False
        if displacement <= self._config.move_threshold:
            return False
        logger.info(
            "movement on RED: moved=%.3f threshold=%.3f",
            displacement, self._config.move_threshold,
        )
        return self.trigger()

    def trigger(self) -> bool:
        """ALIVE -> GUNSHOT_PENDING. Returns False if already pending or dead."""
        if self._status is not DeathState.ALIVE:
            return False
        self._status = DeathState.GUNSHOT_PENDING
        self._play_gunshot()
        self._bus.publish(GUNSHOT, delay=self._config.gunshot_to_death_delay)
        self._pending = self._timeline.after(
            self._config.gunshot_to_death_delay,
            "death:gunshot",
            lambda: self._enter_dead("gunshot"),
        )
        return True

    def force_death(self, reason: str = "forced") -> bool:
        """Go straight to DEAD from ALIVE or GUNSHOT_PENDING."""
        return self._enter_dead(reason)

    def _play_gunshot(self) -> None:
        logger.info("player detected on RED, gunshot")
        if self.gunshot_origin is None:
            logger.warning("no gunshot origin set, gunshot cue skipped")
            return
        if self._audio is not None:
            self._audio.play_cue_at(
                self.gunshot_origin,
                GUNSHOT_CLIP,
                self._config.gunshot_volume,
                self._config.gunshot_min_distance,
                self._config.gunshot_max_distance,
            )

    def _enter_dead(self, reason: str) -> bool:
        if self._status is DeathState.DEAD:
            return False
        self._status = DeathState.DEAD
        self._state.is_dead = True
        self.cause = reason
        logger.info("player dead (%s)", reason)

        for target in self._disable:
            target.disable()
        if self._body is not None:
            self._body.apply_fall_impulse(vec.DOWN, self._config.fall_impulse)
        if self._audio is not None:
            self._audio.play_cue_local(DEATH_CLIP, 1.0)
        if self._display is not None:
            self._display.set_status_text(LOSE_TEXT, LOSE_COLOR)

        self._bus.publish(DIED, reason=reason)
        self._restart = self._timeline.after(
            self._config.death_restart_delay, "death:restart", self._restart_round
        )
        return True

    def _restart_round(self) -> None:
        logger.info("restarting round after death")
        if self._on_restart is not None:
            self._on_restart()
