"""Watcher doll that turns to face the field during RED."""
from __future__ import annotations

from typing import TYPE_CHECKING

from redlight.hooks import DOLL_GREEN_CLIP, DOLL_RED_CLIP

if TYPE_CHECKING:
    from redlight.hooks import AudioCues, DollRig


class Doll:
    def __init__(
        self,
        rig: DollRig | None = None,
        audio: AudioCues | None = None,
        turn_speed: float = 6.0,
        back_yaw: float = 180.0,
    ) -> None:
        self._rig = rig
        self._audio = audio
        self.turn_speed = turn_speed
        self.back_yaw = back_yaw
        self.yaw = 0.0
        self._watching = False

    @property
    def watching(self) -> bool:
        return self._watching

    @property
    def target_yaw(self) -> float:
        return self.back_yaw if self._watching else 0.0

    def set_watching(self, watch: bool) -> None:
        """Turn toward (True) or away from (False) the field; cue only on change."""
        if watch == self._watching:
            return
        self._watching = watch
        if self._audio is not None:
            self._audio.play_cue_local(DOLL_RED_CLIP if watch else DOLL_GREEN_CLIP, 1.0)

    def update(self, dt: float) -> None:
        t = min(1.0, max(0.0, dt * self.turn_speed))
        self.yaw += (self.target_yaw - self.yaw) * t
        if self._rig is not None:
            self._rig.set_yaw(self.yaw)
