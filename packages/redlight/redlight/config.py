"""Round configuration dataclass."""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Mapping

from redlight.types import Color

logger = logging.getLogger(__name__)

_DURATION_FIELDS = (
    "start_delay",
    "green_duration",
    "red_duration",
    "light_blend_duration",
    "gunshot_to_death_delay",
    "death_restart_delay",
    "round_total_time",
    "warning_time",
    "timer_grace_delay",
    "finish_advance_delay",
    "log_interval",
)

_VOLUME_FIELDS = ("gunshot_volume", "tick_volume", "end_volume")

_COLOR_FIELDS = ("green_color", "red_color")


@dataclass(frozen=True)
class RoundConfig:
    """Immutable tuning for one red-light round.

    Attributes:
        start_delay: Seconds before the first GREEN phase.
        green_duration: Length of a GREEN phase in seconds.
        red_duration: Length of a RED phase in seconds.
        smoothing_frames: Motion analyzer window size (>= 1).
        move_threshold: Smoothed displacement, in meters, that counts as motion.
        ignore_vertical: Compare horizontal (XZ) displacement only.
        use_rect_fallback: OR the gate rectangle test with the plane test.
        gunshot_to_death_delay: Seconds between the gunshot cue and death.
        death_restart_delay: Seconds between death and ``restart_round``.
        round_total_time: Round countdown budget in seconds.
        warning_time: Remaining seconds at which the timer text turns red.
        timer_grace_delay: Seconds between timer expiry and forced death.
        finish_advance_delay: Seconds between finishing and ``load_next_round``.
        log_interval: Seconds between movement log lines.
        tps: Default ticks per second when the engine steps without an explicit dt.
    """

    start_delay: float = 1.5
    green_duration: float = 7.0
    red_duration: float = 4.0

    smoothing_frames: int = 5
    move_threshold: float = 0.06
    ignore_vertical: bool = True

    use_rect_fallback: bool = True
    start_rect_half_width: float = 6.0
    start_rect_depth: float = 0.5
    finish_rect_half_width: float = 6.0
    finish_rect_depth: float = 0.5

    green_color: Color = (0.7, 1.0, 0.7)
    red_color: Color = (1.0, 0.6, 0.6)
    green_intensity: float = 1.2
    red_intensity: float = 0.8
    light_blend_duration: float = 0.5
    doll_turn_speed: float = 6.0
    doll_back_yaw: float = 180.0

    gunshot_to_death_delay: float = 0.8
    gunshot_volume: float = 1.0
    gunshot_min_distance: float = 8.0
    gunshot_max_distance: float = 80.0
    fall_impulse: float = 2.0
    death_restart_delay: float = 2.0

    round_total_time: float = 180.0
    warning_time: float = 30.0
    timer_grace_delay: float = 0.5
    finish_advance_delay: float = 1.0
    play_tick: bool = True
    tick_volume: float = 0.6
    end_volume: float = 1.0

    movement_logging: bool = True
    log_interval: float = 0.5
    store_movement_log: bool = False

    tps: int = 60

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RoundConfig:
        """Build a config from a plain mapping. Unknown keys raise ValueError."""
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown RoundConfig keys: {unknown}")
        values = dict(data)
        for name in _COLOR_FIELDS:
            if name in values:
                values[name] = tuple(float(c) for c in values[name])
        return cls(**values)

    def sanitized(self) -> RoundConfig:
        """Return a copy with out-of-range values replaced by safe defaults."""
        changes: dict[str, Any] = {}
        for name in _DURATION_FIELDS:
            value = getattr(self, name)
            if value < 0:
                changes[name] = 0.0
        for name in _VOLUME_FIELDS:
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                changes[name] = max(0.0, min(1.0, value))
        if self.smoothing_frames < 1:
            changes["smoothing_frames"] = 1
        if self.move_threshold < 0:
            changes["move_threshold"] = 0.0
        if self.gunshot_max_distance < self.gunshot_min_distance:
            changes["gunshot_max_distance"] = self.gunshot_min_distance
        if self.tps < 1:
            changes["tps"] = 1
        if not changes:
            return self
        for name, value in changes.items():
            logger.warning(
                "RoundConfig.%s=%r out of range, using %r",
                name, getattr(self, name), value,
            )
        return dataclasses.replace(self, **changes)
