"""Collaborator interfaces the round core talks to.

Everything except the position source is optional. The round receives
each collaborator explicitly and never looks one up on its own.
"""
from __future__ import annotations

from typing import Protocol

from redlight.types import Color, Point3

GUNSHOT_CLIP = "gunshot"
DEATH_CLIP = "death"
TICK_CLIP = "tick"
END_CLIP = "end"
DOLL_RED_CLIP = "doll_red"
DOLL_GREEN_CLIP = "doll_green"


class PositionSource(Protocol):
    def get_player_position(self) -> Point3: ...


class Disableable(Protocol):
    """Anything the player-control layer can switch off on death."""

    def disable(self) -> None: ...


class FallBody(Protocol):
    def apply_fall_impulse(self, direction: Point3, magnitude: float) -> None: ...


class AudioCues(Protocol):
    def play_cue_at(
        self,
        position: Point3,
        clip_id: str,
        volume: float,
        min_distance: float,
        max_distance: float,
    ) -> None: ...

    def play_cue_local(self, clip_id: str, volume: float) -> None: ...


class RoundProgression(Protocol):
    def load_next_round(self) -> None: ...

    def restart_round(self) -> None: ...


class Display(Protocol):
    def set_status_text(self, text: str, color: Color) -> None: ...

    def set_timer_text(self, text: str, color: Color) -> None: ...

    def set_debug_text(self, text: str) -> None: ...


class Light(Protocol):
    color: Color
    intensity: float


class DollRig(Protocol):
    def set_yaw(self, yaw: float) -> None: ...
