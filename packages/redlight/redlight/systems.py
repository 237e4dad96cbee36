"""System factories for the per-tick round pipeline.

Registered order: timeline, signals, gates, motion, death check,
round timer, ambient, signals, display. Death detection reads the
crossed/finished flags and displacement written earlier in the same tick.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from redlight.signals import FINISHED, START_CROSSED, SignalBus
from redlight.types import RoundPhase, System

if TYPE_CHECKING:
    from redlight.ambient import AmbientBlender
    from redlight.death import DeathSequencer
    from redlight.doll import Doll
    from redlight.gates import LineGate
    from redlight.hooks import Display, PositionSource
    from redlight.motion import MotionAnalyzer
    from redlight.phases import PhaseScheduler
    from redlight.round import RedLightRound
    from redlight.round_timer import RoundTimer
    from redlight.types import PlayerRoundState, TickContext

logger = logging.getLogger(__name__)


def make_gate_system(
    source: PositionSource,
    state: PlayerRoundState,
    bus: SignalBus,
    sequencer: DeathSequencer,
    start_gate: LineGate | None = None,
    finish_gate: LineGate | None = None,
) -> System:
    """Sample the player and latch start/finish crossings.

    Gates stop evaluating once the round is terminal or a death is pending.
    A missing gate never crosses.
    """

    def gate_system(round_: RedLightRound, ctx: TickContext) -> None:
        position = source.get_player_position()
        round_.position = position

        if state.terminal or not sequencer.alive:
            return

        if start_gate is not None:
            result = start_gate.evaluate(position)
            if result.crossed_this_tick and not state.has_crossed_start:
                state.has_crossed_start = True
                bus.publish(START_CROSSED, reason=result.reason)

        if finish_gate is not None:
            result = finish_gate.evaluate(position)
            if result.crossed_this_tick and not state.has_finished:
                state.has_finished = True
                bus.publish(FINISHED, reason=result.reason)

    return gate_system


def make_motion_system(
    analyzer: MotionAnalyzer,
    log_interval: float = 0.5,
    enabled: bool = True,
    store: list[str] | None = None,
) -> System:
    """Observe the sampled position and write the periodic movement log."""
    interval = max(0.01, log_interval)
    countdown = 0.0

    def motion_system(round_: RedLightRound, ctx: TickContext) -> None:
        nonlocal countdown
        round_.displacement = analyzer.observe(round_.position)

        if not enabled:
            return
        countdown -= ctx.dt
        if countdown > 0.0:
            return
        countdown = interval
        phase = round_.scheduler.phase
        line = (
            f"t={ctx.elapsed:.2f} moved={round_.displacement:.4f} "
            f"phase={phase.name if phase else 'INIT'} "
            f"crossed_start={round_.state.has_crossed_start} "
            f"finished={round_.state.has_finished}"
        )
        logger.debug(line)
        if store is not None:
            store.append(line)

    return motion_system


def make_death_check_system(
    sequencer: DeathSequencer,
    scheduler: PhaseScheduler,
    state: PlayerRoundState,
) -> System:
    def death_check_system(round_: RedLightRound, ctx: TickContext) -> None:
        sequencer.check(scheduler.phase, state, round_.displacement)

    return death_check_system


def make_round_timer_system(timer: RoundTimer) -> System:
    def round_timer_system(round_: RedLightRound, ctx: TickContext) -> None:
        timer.update(ctx.dt)

    return round_timer_system


def make_ambient_system(blender: AmbientBlender, doll: Doll | None = None) -> System:
    def ambient_system(round_: RedLightRound, ctx: TickContext) -> None:
        blender.update(ctx.dt)
        if doll is not None:
            doll.update(ctx.dt)

    return ambient_system


def make_display_system(display: Display) -> System:
    def display_system(round_: RedLightRound, ctx: TickContext) -> None:
        phase = round_.scheduler.phase
        display.set_debug_text(
            f"green={phase is RoundPhase.GREEN}\n"
            f"crossedStart={round_.state.has_crossed_start}\n"
            f"finished={round_.state.has_finished}\n"
            f"moved={round_.displacement:.3f}"
        )

    return display_system
