"""Tests for PhaseScheduler timeline and phase_changed signals."""
from __future__ import annotations

import pytest

from redlight import PhaseScheduler, RoundPhase, SignalBus, Timeline
from redlight.phases import MIN_PHASE_DURATION


def _scheduler(start=2.0, green=7.0, red=4.0):
    timeline = Timeline()
    bus = SignalBus()
    events = []
    bus.subscribe("phase_changed", lambda n, d: events.append((d["phase"], d["duration"])))
    scheduler = PhaseScheduler(timeline, bus, start, green, red)
    return scheduler, timeline, bus, events


class TestTimeline:
    def test_init_has_no_phase(self) -> None:
        scheduler, timeline, bus, events = _scheduler()
        scheduler.start()
        timeline.advance(1.99)
        assert scheduler.phase is None
        assert not scheduler.is_red

    def test_start_delay_then_green_then_red(self) -> None:
        scheduler, timeline, bus, events = _scheduler(start=2.0, green=7.0, red=4.0)
        scheduler.start()
        timeline.advance(2.01)
        assert scheduler.phase is RoundPhase.GREEN
        timeline.advance(7.01)
        assert scheduler.phase is RoundPhase.RED
        assert scheduler.is_red

    def test_loops_back_to_green(self) -> None:
        scheduler, timeline, bus, events = _scheduler(start=2.0, green=7.0, red=4.0)
        scheduler.start()
        timeline.advance(13.5)
        bus.flush()
        assert scheduler.phase is RoundPhase.GREEN
        assert events == [
            (RoundPhase.GREEN, 7.0),
            (RoundPhase.RED, 4.0),
            (RoundPhase.GREEN, 7.0),
        ]

    def test_boundaries_independent_of_tick_size(self) -> None:
        coarse, tl_coarse, _, _ = _scheduler(start=1.0, green=1.0, red=1.0)
        fine, tl_fine, _, _ = _scheduler(start=1.0, green=1.0, red=1.0)
        coarse.start()
        fine.start()
        tl_coarse.advance(2.7)
        for _ in range(27):
            tl_fine.advance(0.1)
        assert coarse.phase is fine.phase is RoundPhase.RED
        assert coarse.transitions == fine.transitions == 2

    def test_start_is_idempotent(self) -> None:
        scheduler, timeline, bus, events = _scheduler(start=1.0)
        scheduler.start()
        scheduler.start()
        assert len(timeline.pending()) == 1


class TestStop:
    def test_stop_prevents_further_transitions(self) -> None:
        scheduler, timeline, bus, events = _scheduler(start=1.0, green=1.0, red=1.0)
        scheduler.start()
        timeline.advance(1.5)
        scheduler.stop()
        scheduler.stop()
        timeline.advance(10.0)
        bus.flush()
        assert scheduler.phase is RoundPhase.GREEN
        assert events == [(RoundPhase.GREEN, 1.0)]
        assert scheduler.stopped
        assert not scheduler.running

    def test_start_after_stop_is_noop(self) -> None:
        scheduler, timeline, bus, events = _scheduler()
        scheduler.stop()
        scheduler.start()
        assert timeline.pending() == []


class TestForcePhase:
    def test_force_phase_applies_immediately(self) -> None:
        scheduler, timeline, bus, events = _scheduler()
        scheduler.force_phase(RoundPhase.RED)
        bus.flush()
        assert scheduler.phase is RoundPhase.RED
        assert events == [(RoundPhase.RED, 4.0)]

    def test_force_phase_when_stopped_is_noop(self) -> None:
        scheduler, timeline, bus, events = _scheduler()
        scheduler.stop()
        scheduler.force_phase(RoundPhase.RED)
        assert scheduler.phase is None


def test_zero_durations_clamped(caplog):
    scheduler, timeline, bus, events = _scheduler(start=0.0, green=0.0, red=-1.0)
    assert scheduler.green_duration == pytest.approx(MIN_PHASE_DURATION)
    assert scheduler.red_duration == pytest.approx(MIN_PHASE_DURATION)
    scheduler.start()
    timeline.advance(0.0)
    assert scheduler.phase is RoundPhase.GREEN
    assert "too short" in caplog.text


def test_boundaries_exact_at_sixty_hz():
    scheduler, timeline, bus, events = _scheduler(start=2.0, green=7.0, red=4.0)
    scheduler.start()
    for _ in range(119):
        timeline.advance(1 / 60)
    assert scheduler.phase is None
    timeline.advance(1 / 60)
    assert scheduler.phase is RoundPhase.GREEN
    for _ in range(420):
        timeline.advance(1 / 60)
    assert scheduler.phase is RoundPhase.RED
    assert scheduler.transitions == 2
