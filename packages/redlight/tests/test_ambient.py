"""Tests for AmbientBlender blend tasks and the watcher Doll."""
from __future__ import annotations

from dataclasses import dataclass

import pytest

from redlight import AmbientBlender, Doll

BLACK = (0.0, 0.0, 0.0)
WHITE = (1.0, 1.0, 1.0)


@dataclass
class FakeLight:
    color: tuple = (0.5, 0.5, 0.5)
    intensity: float = 2.0


class TestBlend:
    def test_reaches_target_exactly(self) -> None:
        blender = AmbientBlender(color=BLACK, intensity=0.0)
        blender.on_phase_change(WHITE, 1.0, 0.5)
        blender.update(0.3)
        blender.update(0.3)
        assert blender.color == WHITE
        assert blender.intensity == 1.0
        assert not blender.active

    def test_intermediate_strictly_between(self) -> None:
        blender = AmbientBlender(color=BLACK, intensity=0.0)
        blender.on_phase_change(WHITE, 1.0, 0.5)
        blender.update(0.2)
        assert blender.color == pytest.approx((0.4, 0.4, 0.4))
        assert blender.intensity == pytest.approx(0.4)
        for c in blender.color:
            assert 0.0 < c < 1.0
        assert blender.active

    def test_elapsed_zero_equals_start(self) -> None:
        blender = AmbientBlender(color=BLACK, intensity=0.0)
        blender.on_phase_change(WHITE, 1.0, 0.5)
        blender.update(0.0)
        assert blender.color == BLACK
        assert blender.intensity == 0.0

    def test_many_small_ticks(self) -> None:
        blender = AmbientBlender(color=BLACK, intensity=0.0)
        blender.on_phase_change((1.0, 0.6, 0.6), 0.8, 0.5)
        for _ in range(40):
            blender.update(1 / 60)
        assert blender.color == (1.0, 0.6, 0.6)
        assert blender.intensity == 0.8

    def test_new_task_starts_from_live_values(self) -> None:
        blender = AmbientBlender(color=BLACK, intensity=0.0)
        first = blender.on_phase_change(WHITE, 1.0, 1.0)
        blender.update(0.5)
        second = blender.on_phase_change(BLACK, 0.0, 1.0)
        assert second is blender.task
        assert second is not first
        assert second.start_color == pytest.approx((0.5, 0.5, 0.5))
        assert second.start_intensity == pytest.approx(0.5)
        blender.update(0.5)
        assert blender.color == pytest.approx((0.25, 0.25, 0.25))

    def test_zero_duration_pins_immediately(self) -> None:
        blender = AmbientBlender(color=BLACK, intensity=0.0)
        blender.on_phase_change(WHITE, 1.0, 0.0)
        assert blender.color == WHITE
        assert not blender.active

    def test_cancel_keeps_live_values(self) -> None:
        blender = AmbientBlender(color=BLACK, intensity=0.0)
        blender.on_phase_change(WHITE, 1.0, 1.0)
        blender.update(0.25)
        blender.cancel()
        blender.update(1.0)
        assert blender.color == pytest.approx((0.25, 0.25, 0.25))


class TestLightSink:
    def test_light_seeds_and_receives_values(self) -> None:
        light = FakeLight()
        blender = AmbientBlender(light)
        assert blender.color == (0.5, 0.5, 0.5)
        assert blender.intensity == 2.0
        blender.on_phase_change(WHITE, 1.0, 0.5)
        blender.update(0.25)
        assert light.color == pytest.approx((0.75, 0.75, 0.75))
        assert light.intensity == pytest.approx(1.5)
        blender.update(1.0)
        assert light.color == WHITE
        assert light.intensity == 1.0


class FakeRig:
    def __init__(self) -> None:
        self.yaws: list[float] = []

    def set_yaw(self, yaw: float) -> None:
        self.yaws.append(yaw)


class FakeAudio:
    def __init__(self) -> None:
        self.local: list[tuple[str, float]] = []

    def play_cue_local(self, clip_id: str, volume: float) -> None:
        self.local.append((clip_id, volume))


class TestDoll:
    def test_cue_only_on_change(self) -> None:
        audio = FakeAudio()
        doll = Doll(audio=audio)
        doll.set_watching(True)
        doll.set_watching(True)
        doll.set_watching(False)
        assert [c for c, _ in audio.local] == ["doll_red", "doll_green"]

    def test_turns_toward_back_yaw(self) -> None:
        rig = FakeRig()
        doll = Doll(rig=rig, turn_speed=6.0, back_yaw=180.0)
        doll.set_watching(True)
        doll.update(0.1)
        assert doll.yaw == pytest.approx(108.0)
        doll.update(1.0)
        assert doll.yaw == pytest.approx(180.0)
        assert rig.yaws[-1] == pytest.approx(180.0)


def test_sixty_hz_ticks_land_on_target():
    # 30 ticks of 1/60 s sum to just under 0.5 in floating point.
    blender = AmbientBlender(color=BLACK, intensity=0.0)
    blender.on_phase_change((1.0, 0.6, 0.6), 0.8, 0.5)
    for _ in range(30):
        blender.update(1 / 60)
    assert blender.color == (1.0, 0.6, 0.6)
    assert blender.intensity == 0.8
    assert not blender.active
