"""Tests for DeathSequencer gating, gunshot delay and forced death."""
from __future__ import annotations

import logging

import pytest

from redlight import (
    DeathSequencer,
    DeathState,
    MotionAnalyzer,
    PlayerRoundState,
    RoundConfig,
    RoundPhase,
    SignalBus,
    Timeline,
)

ORIGIN = (0.0, 0.0, 50.0)


class FakeAudio:
    def __init__(self) -> None:
        self.at: list[tuple] = []
        self.local: list[tuple[str, float]] = []

    def play_cue_at(self, position, clip_id, volume, min_distance, max_distance) -> None:
        self.at.append((position, clip_id, volume, min_distance, max_distance))

    def play_cue_local(self, clip_id: str, volume: float) -> None:
        self.local.append((clip_id, volume))


class FakeControl:
    def __init__(self) -> None:
        self.disabled = 0

    def disable(self) -> None:
        self.disabled += 1


class FakeBody:
    def __init__(self) -> None:
        self.impulses: list[tuple] = []

    def apply_fall_impulse(self, direction, magnitude) -> None:
        self.impulses.append((direction, magnitude))


class FakeDisplay:
    def __init__(self) -> None:
        self.status: list[tuple[str, tuple]] = []

    def set_status_text(self, text, color) -> None:
        self.status.append((text, color))

    def set_timer_text(self, text, color) -> None:
        pass

    def set_debug_text(self, text) -> None:
        pass


def _setup(config=None, origin=ORIGIN):
    config = config or RoundConfig()
    state = PlayerRoundState(has_crossed_start=True)
    timeline = Timeline()
    bus = SignalBus()
    audio = FakeAudio()
    display = FakeDisplay()
    body = FakeBody()
    restarts = []
    seq = DeathSequencer(
        config, state, timeline, bus,
        audio=audio, display=display, body=body,
        gunshot_origin=origin, on_restart=lambda: restarts.append(timeline.now),
    )
    signals = []
    bus.subscribe("gunshot", lambda n, d: signals.append(n))
    bus.subscribe("died", lambda n, d: signals.append((n, d["reason"])))
    return seq, state, timeline, bus, audio, display, body, restarts, signals


def _displacement_after_step(offset: float) -> float:
    analyzer = MotionAnalyzer(window=5, ignore_vertical=True)
    for _ in range(5):
        analyzer.observe((1.0, 1.6, 1.0))
    return analyzer.observe((1.0 + offset, 1.6, 1.0))


class TestGating:
    def test_motion_during_red_after_start_triggers_gunshot(self) -> None:
        seq, state, *_ = _setup(RoundConfig(move_threshold=0.06))
        moved = _displacement_after_step(0.10)
        assert seq.check(RoundPhase.RED, state, moved)
        assert seq.status is DeathState.GUNSHOT_PENDING

    def test_no_trigger_before_start_crossed(self) -> None:
        seq, state, *_ = _setup(RoundConfig(move_threshold=0.06))
        state.has_crossed_start = False
        moved = _displacement_after_step(0.10)
        assert not seq.check(RoundPhase.RED, state, moved)
        assert seq.status is DeathState.ALIVE

    def test_no_trigger_during_green(self) -> None:
        seq, state, *_ = _setup()
        assert not seq.check(RoundPhase.GREEN, state, 5.0)
        assert not seq.check(None, state, 5.0)
        assert seq.alive

    def test_no_trigger_after_finish(self) -> None:
        seq, state, *_ = _setup()
        state.has_finished = True
        assert not seq.check(RoundPhase.RED, state, 5.0)
        assert seq.alive

    def test_below_threshold_is_safe(self) -> None:
        seq, state, *_ = _setup(RoundConfig(move_threshold=0.06))
        assert not seq.check(RoundPhase.RED, state, 0.06)
        assert seq.alive

    def test_triggers_once_per_round(self) -> None:
        seq, state, timeline, bus, audio, *_ , signals = _setup()
        assert seq.check(RoundPhase.RED, state, 1.0)
        assert not seq.check(RoundPhase.RED, state, 1.0)
        assert not seq.trigger()
        bus.flush()
        assert signals.count("gunshot") == 1
        assert len(audio.at) == 1

    def test_pending_death_skips_motion_check(self, caplog) -> None:
        seq, state, *_ = _setup()
        assert seq.check(RoundPhase.RED, state, 1.0)
        caplog.clear()
        with caplog.at_level(logging.INFO, logger="redlight.death"):
            for _ in range(5):
                assert not seq.check(RoundPhase.RED, state, 1.0)
        assert "movement on RED" not in caplog.text
        assert seq.status is DeathState.GUNSHOT_PENDING


class TestGunshot:
    def test_gunshot_cue_plays_from_origin(self) -> None:
        cfg = RoundConfig(gunshot_volume=0.9, gunshot_min_distance=8.0, gunshot_max_distance=80.0)
        seq, state, timeline, bus, audio, *_ = _setup(cfg)
        seq.trigger()
        assert audio.at == [(ORIGIN, "gunshot", 0.9, 8.0, 80.0)]

    def test_missing_origin_skips_cue_with_warning(self, caplog) -> None:
        seq, state, timeline, bus, audio, *_ = _setup(origin=None)
        with caplog.at_level(logging.WARNING, logger="redlight.death"):
            assert seq.trigger()
        assert audio.at == []
        assert "gunshot origin" in caplog.text
        assert seq.status is DeathState.GUNSHOT_PENDING

    def test_death_follows_delay_exactly_once(self) -> None:
        seq, state, timeline, bus, audio, display, body, restarts, signals = _setup(
            RoundConfig(gunshot_to_death_delay=0.8)
        )
        control = FakeControl()
        seq.register_disable(control)
        seq.check(RoundPhase.RED, state, 1.0)

        timeline.advance(0.79)
        assert seq.status is DeathState.GUNSHOT_PENDING
        assert not state.is_dead

        timeline.advance(0.02)
        assert seq.status is DeathState.DEAD
        assert state.is_dead

        timeline.advance(0.5)
        bus.flush()
        assert signals == ["gunshot", ("died", "gunshot")]
        assert control.disabled == 1


class TestDeadState:
    def test_death_side_effects(self) -> None:
        seq, state, timeline, bus, audio, display, body, restarts, signals = _setup(
            RoundConfig(fall_impulse=2.0)
        )
        control_a, control_b = FakeControl(), FakeControl()
        seq.register_disable(control_a)
        seq.register_disable(control_b)
        assert seq.force_death("test")
        assert control_a.disabled == control_b.disabled == 1
        assert body.impulses == [((0.0, -1.0, 0.0), 2.0)]
        assert ("death", 1.0) in audio.local
        assert display.status[-1][0] == "Detected! You Lose"
        assert seq.cause == "test"

    def test_force_death_is_idempotent(self) -> None:
        seq, state, timeline, bus, *_ , signals = _setup()
        control = FakeControl()
        seq.register_disable(control)
        assert seq.force_death()
        assert not seq.force_death()
        bus.flush()
        assert signals == [("died", "forced")]
        assert control.disabled == 1

    def test_force_death_short_circuits_pending_gunshot(self) -> None:
        seq, state, timeline, bus, audio, display, body, restarts, signals = _setup(
            RoundConfig(gunshot_to_death_delay=0.8)
        )
        seq.trigger()
        timeline.advance(0.1)
        assert seq.force_death("time_expired")
        assert seq.status is DeathState.DEAD
        timeline.advance(1.0)
        bus.flush()
        assert signals == ["gunshot", ("died", "time_expired")]
        assert seq.cause == "time_expired"

    def test_trigger_after_death_is_noop(self) -> None:
        seq, state, timeline, bus, audio, *_ = _setup()
        seq.force_death()
        assert not seq.trigger()
        assert audio.at == []

    def test_restart_after_delay(self) -> None:
        seq, state, timeline, bus, audio, display, body, restarts, signals = _setup(
            RoundConfig(death_restart_delay=2.0)
        )
        seq.force_death()
        timeline.advance(1.9)
        assert restarts == []
        timeline.advance(0.2)
        assert restarts == [pytest.approx(2.0)]
        timeline.advance(5.0)
        assert len(restarts) == 1

    def test_zero_restart_delay_runs_on_next_drain(self) -> None:
        seq, state, timeline, bus, audio, display, body, restarts, signals = _setup(
            RoundConfig(death_restart_delay=0.0)
        )
        seq.force_death()
        timeline.advance(0.0)
        assert len(restarts) == 1
