"""Collaborators the round talks to, backed by plain demo state."""
from __future__ import annotations

import logging

from redlight.types import Color, Point3

from ui.constants import FIELD_HALF_W, FIELD_MAX_Z, FIELD_MIN_Z, SPAWN_Z

logger = logging.getLogger(__name__)


class FieldPlayer:
    """Top-down walker. Position source, control switch and fall body in one."""

    def __init__(self) -> None:
        self.x = 0.0
        self.z = SPAWN_Z
        self.enabled = True
        self.fallen = False

    def get_player_position(self) -> Point3:
        return (self.x, 1.6, self.z)

    def walk(self, dx: float, dz: float) -> None:
        if not self.enabled:
            return
        self.x = max(-FIELD_HALF_W, min(FIELD_HALF_W, self.x + dx))
        self.z = max(FIELD_MIN_Z, min(FIELD_MAX_Z, self.z + dz))

    def disable(self) -> None:
        self.enabled = False

    def apply_fall_impulse(self, direction: Point3, magnitude: float) -> None:
        self.fallen = True
        logger.info("player falls (impulse %.1f)", magnitude)


class CueLog:
    """Audio stand-in: records cues and flashes the screen."""

    def __init__(self, max_lines: int) -> None:
        self.lines: list[str] = []
        self.flash = 0.0
        self._max = max_lines

    def play_cue_at(
        self,
        position: Point3,
        clip_id: str,
        volume: float,
        min_distance: float,
        max_distance: float,
    ) -> None:
        self._record(f"{clip_id} @({position[0]:.0f},{position[2]:.0f}) v={volume:.1f}")
        self.flash = 1.0

    def play_cue_local(self, clip_id: str, volume: float) -> None:
        self._record(f"{clip_id} v={volume:.1f}")

    def _record(self, line: str) -> None:
        self.lines.append(line)
        del self.lines[: -self._max]


class HudText:
    def __init__(self) -> None:
        self.status = ""
        self.status_color: Color = (1.0, 1.0, 1.0)
        self.timer = ""
        self.timer_color: Color = (1.0, 1.0, 1.0)
        self.debug = ""

    def set_status_text(self, text: str, color: Color) -> None:
        self.status = text
        self.status_color = color

    def set_timer_text(self, text: str, color: Color) -> None:
        self.timer = text
        self.timer_color = color

    def set_debug_text(self, text: str) -> None:
        self.debug = text


class FieldLight:
    def __init__(self) -> None:
        self.color: Color = (1.0, 1.0, 1.0)
        self.intensity = 1.0


class DollHead:
    def __init__(self) -> None:
        self.yaw = 0.0

    def set_yaw(self, yaw: float) -> None:
        self.yaw = yaw


class Progression:
    """Remembers what the round asked for; the main loop acts on it."""

    def __init__(self) -> None:
        self.pending: str | None = None
        self.round_number = 1

    def load_next_round(self) -> None:
        self.pending = "next"

    def restart_round(self) -> None:
        self.pending = "restart"
