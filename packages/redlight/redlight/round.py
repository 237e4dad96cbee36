"""RedLightRound - builds and wires one round of red-light/green-light."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Iterable

from redlight import vec
from redlight.ambient import AmbientBlender
from redlight.config import RoundConfig
from redlight.death import DeathSequencer
from redlight.doll import Doll
from redlight.engine import Engine
from redlight.gates import LineGate
from redlight.motion import MotionAnalyzer
from redlight.phases import PhaseScheduler
from redlight.round_timer import RoundTimer
from redlight.signals import (
    DIED,
    FINISHED,
    GUNSHOT,
    PHASE_CHANGED,
    START_CROSSED,
    SignalBus,
    make_signal_system,
)
from redlight.systems import (
    make_ambient_system,
    make_death_check_system,
    make_display_system,
    make_gate_system,
    make_motion_system,
    make_round_timer_system,
)
from redlight.timeline import Timeline, make_timeline_system
from redlight.types import DeathState, PlayerRoundState, Point3, RoundPhase

if TYPE_CHECKING:
    from redlight.hooks import (
        AudioCues,
        Disableable,
        Display,
        DollRig,
        FallBody,
        Light,
        PositionSource,
        RoundProgression,
    )

logger = logging.getLogger(__name__)

Line = tuple[Point3, Point3]

GREEN_TEXT = "GREEN - Move!"
RED_TEXT = "RED - Stop!"
STARTED_TEXT = "Started!"
FINISHED_TEXT = "Finished!"
STATUS_GREEN = (0.0, 1.0, 0.0)
STATUS_RED = (1.0, 0.0, 0.0)
STATUS_WHITE = (1.0, 1.0, 1.0)


class RedLightRound:
    """One round: gates, motion, phases, light, death and timer on one engine.

    ``start_line`` and ``finish_line`` are ``(anchor, normal)`` pairs; a
    missing line never crosses. Every collaborator is passed in. After
    ``restart_round`` or ``load_next_round`` is invoked the engine halts
    and the round does nothing more until ``reset``.
    """

    def __init__(
        self,
        source: PositionSource,
        config: RoundConfig | None = None,
        start_line: Line | None = None,
        finish_line: Line | None = None,
        gunshot_origin: Point3 | None = None,
        light: Light | None = None,
        audio: AudioCues | None = None,
        display: Display | None = None,
        progression: RoundProgression | None = None,
        body: FallBody | None = None,
        doll_rig: DollRig | None = None,
        disable_on_death: Iterable[Disableable] = (),
    ) -> None:
        self.config = (config or RoundConfig()).sanitized()
        self._source = source
        self._start_line = start_line
        self._finish_line = finish_line
        self._gunshot_origin = gunshot_origin
        self._light = light
        self._audio = audio
        self._display = display
        self._progression = progression
        self._body = body
        self._doll_rig = doll_rig
        self._disable_on_death = list(disable_on_death)
        self.movement_log: list[str] = []
        self._build()

    # -- Construction --

    def _build(self) -> None:
        cfg = self.config
        self.state = PlayerRoundState()
        self.bus = SignalBus()
        self.timeline = Timeline()
        self.engine = Engine(self, tps=cfg.tps)
        self.position: Point3 = vec.ZERO
        self.displacement = 0.0
        self._started = False
        self._terminated = False

        self.analyzer = MotionAnalyzer(cfg.smoothing_frames, cfg.ignore_vertical)
        self.start_gate = self._make_gate(
            "start", self._start_line, cfg.start_rect_half_width, cfg.start_rect_depth
        )
        self.finish_gate = self._make_gate(
            "finish", self._finish_line, cfg.finish_rect_half_width, cfg.finish_rect_depth
        )
        self.scheduler = PhaseScheduler(
            self.timeline, self.bus, cfg.start_delay, cfg.green_duration, cfg.red_duration
        )
        self.blender = AmbientBlender(self._light)
        self.doll = Doll(self._doll_rig, self._audio, cfg.doll_turn_speed, cfg.doll_back_yaw)
        self.sequencer = DeathSequencer(
            cfg,
            self.state,
            self.timeline,
            self.bus,
            audio=self._audio,
            display=self._display,
            body=self._body,
            gunshot_origin=self._gunshot_origin,
            on_restart=self._restart,
        )
        for target in self._disable_on_death:
            self.sequencer.register_disable(target)
        self.timer = RoundTimer(
            cfg,
            self.state,
            self.timeline,
            self.bus,
            on_expire=self.sequencer.force_death,
            on_next_round=self._next_round,
            audio=self._audio,
            display=self._display,
        )

        self.bus.subscribe(PHASE_CHANGED, self._on_phase_changed)
        self.bus.subscribe(START_CROSSED, self._on_start_crossed)
        self.bus.subscribe(FINISHED, self._on_finished)
        self.bus.subscribe(GUNSHOT, self._on_outcome)
        self.bus.subscribe(DIED, self._on_outcome)

        self._gate_system = make_gate_system(
            self._source,
            self.state,
            self.bus,
            self.sequencer,
            self.start_gate,
            self.finish_gate,
        )
        store = self.movement_log if cfg.store_movement_log else None

        # Order matters: see redlight.systems.
        self.engine.add_system(make_timeline_system(self.timeline))
        self.engine.add_system(make_signal_system(self.bus))
        self.engine.add_system(self._gate_system)
        self.engine.add_system(
            make_motion_system(self.analyzer, cfg.log_interval, cfg.movement_logging, store)
        )
        self.engine.add_system(
            make_death_check_system(self.sequencer, self.scheduler, self.state)
        )
        self.engine.add_system(make_round_timer_system(self.timer))
        self.engine.add_system(make_ambient_system(self.blender, self.doll))
        self.engine.add_system(make_signal_system(self.bus))
        if self._display is not None:
            self.engine.add_system(make_display_system(self._display))

    def _make_gate(
        self, name: str, line: Line | None, half_width: float, depth: float
    ) -> LineGate | None:
        if line is None:
            logger.warning("no %s line configured, %s never crosses", name, name)
            return None
        anchor, normal = line
        return LineGate(
            name, anchor, normal, half_width, depth, self.config.use_rect_fallback
        )

    # -- Lifecycle --

    @property
    def started(self) -> bool:
        return self._started

    @property
    def terminated(self) -> bool:
        return self._terminated

    @property
    def phase(self) -> RoundPhase | None:
        return self.scheduler.phase

    @property
    def death_state(self) -> DeathState:
        return self.sequencer.status

    def start(self) -> None:
        """Prime the filters from the spawn position and start both clocks."""
        if self._started:
            return
        self._started = True
        self.position = self._source.get_player_position()
        self.analyzer.prime(self.position)
        if self.start_gate is not None:
            self.start_gate.prime(self.position)
        if self.finish_gate is not None:
            self.finish_gate.prime(self.position)
        self.scheduler.start()
        self.timer.start()
        logger.info("round started at %s", self.position)

    def step(self, dt: float | None = None) -> None:
        self.start()
        self.engine.step(dt)

    def advance(self, seconds: float, dt: float | None = None) -> None:
        self.start()
        self.engine.advance(seconds, dt)

    def run_forever(self) -> None:
        self.start()
        self.engine.run_forever()

    def reset(self) -> None:
        """Discard everything, including a pending death, and build a fresh round."""
        logger.info("round reset")
        self.timeline.clear()
        self.bus.clear()
        self._build()

    def _terminate(self, action: Callable[[], Any] | None, label: str) -> None:
        if self._terminated:
            return
        self._terminated = True
        if self.movement_log:
            logger.info("movement log entries: %d", len(self.movement_log))
            for line in self.movement_log:
                logger.info(line)
        self.timeline.cancel_all()
        self.engine.stop()
        logger.info("round over: %s", label)
        if action is not None:
            action()

    def _restart(self) -> None:
        action = self._progression.restart_round if self._progression else None
        self._terminate(action, "restart")

    def _next_round(self) -> None:
        action = self._progression.load_next_round if self._progression else None
        self._terminate(action, "next_round")

    # -- Signal handlers --

    def _on_phase_changed(self, signal: str, data: dict[str, Any]) -> None:
        phase: RoundPhase = data["phase"]
        cfg = self.config
        red = phase is RoundPhase.RED
        self.blender.on_phase_change(
            cfg.red_color if red else cfg.green_color,
            cfg.red_intensity if red else cfg.green_intensity,
            cfg.light_blend_duration,
        )
        self.doll.set_watching(red)
        if self._display is not None and not self.state.terminal:
            self._display.set_status_text(
                RED_TEXT if red else GREEN_TEXT, STATUS_RED if red else STATUS_GREEN
            )

    def _on_start_crossed(self, signal: str, data: dict[str, Any]) -> None:
        logger.info("start crossed (%s)", data.get("reason"))
        if self._display is not None:
            self._display.set_status_text(STARTED_TEXT, STATUS_WHITE)

    def _on_finished(self, signal: str, data: dict[str, Any]) -> None:
        logger.info("finish crossed (%s)", data.get("reason"))
        if self._display is not None:
            self._display.set_status_text(FINISHED_TEXT, STATUS_WHITE)
        self.scheduler.stop()
        self.timer.on_finish()

    def _on_outcome(self, signal: str, data: dict[str, Any]) -> None:
        self.scheduler.stop()

    # -- Debug entry points --

    def force_start(self) -> bool:
        """Mark the start line as crossed through the normal signal path."""
        if self.state.has_crossed_start or self.state.terminal:
            return False
        if self.start_gate is not None:
            self.start_gate.force("forced")
        self.state.has_crossed_start = True
        self.bus.publish(START_CROSSED, reason="forced")
        return True

    def force_finish(self) -> bool:
        if self.state.terminal or not self.sequencer.alive:
            return False
        if self.finish_gate is not None:
            self.finish_gate.force("forced")
        self.state.has_finished = True
        self.bus.publish(FINISHED, reason="forced")
        return True

    def force_death(self) -> bool:
        return self.sequencer.force_death("forced")

    def force_phase(self, phase: RoundPhase) -> None:
        self.scheduler.force_phase(phase)

    def manual_check(self) -> None:
        """Run the gate tests against the current position outside the tick loop."""
        self.start()
        self._gate_system(self, self.engine.clock.context(self.engine.stop))

    def debug_state(self) -> str:
        pos = self._source.get_player_position()
        parts = [f"player_pos=({pos[0]:.3f}, {pos[1]:.3f}, {pos[2]:.3f})"]
        if self.start_gate is not None:
            parts.append(
                f"start_dot={self.start_gate.signed_distance(pos):.4f} "
                f"last_start_side={self.start_gate.last_side}"
            )
        if self.finish_gate is not None:
            parts.append(f"finish_dot={self.finish_gate.signed_distance(pos):.4f}")
        phase = self.scheduler.phase
        parts.append(
            f"crossed_start={self.state.has_crossed_start} "
            f"finished={self.state.has_finished} "
            f"phase={phase.name if phase else 'INIT'} "
            f"death={self.sequencer.status.name}"
        )
        text = ", ".join(parts)
        logger.info(text)
        return text

    def clear_movement_log(self) -> None:
        self.movement_log.clear()
