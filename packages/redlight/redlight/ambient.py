"""Ambient blender: restartable color/intensity interpolation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from redlight import vec
from redlight.types import Color

# Tick sums like 30 x 1/60 land a hair under the duration they add up to.
_EPS = 1e-9

if TYPE_CHECKING:
    from redlight.hooks import Light


@dataclass
class BlendTask:
    start_color: Color
    start_intensity: float
    target_color: Color
    target_intensity: float
    duration: float
    elapsed: float = 0.0

    @property
    def progress(self) -> float:
        if self.duration <= 0:
            return 1.0
        return vec.clamp01(self.elapsed / self.duration)

    @property
    def done(self) -> bool:
        return self.elapsed >= self.duration - _EPS


class AmbientBlender:
    """Owns the live ambient signal and at most one in-flight BlendTask.

    New tasks start from the live values, not from the previous target,
    so a phase change mid-blend never jumps. If a light is given its
    current values seed the signal and every update is written back to it.
    """

    def __init__(
        self,
        light: Light | None = None,
        color: Color = (1.0, 1.0, 1.0),
        intensity: float = 1.0,
    ) -> None:
        self._light = light
        if light is not None:
            color = tuple(light.color)
            intensity = light.intensity
        self.color: Color = color
        self.intensity: float = intensity
        self._task: BlendTask | None = None

    @property
    def task(self) -> BlendTask | None:
        return self._task

    @property
    def active(self) -> bool:
        return self._task is not None

    def on_phase_change(
        self, target_color: Color, target_intensity: float, duration: float
    ) -> BlendTask:
        self._task = BlendTask(
            start_color=self.color,
            start_intensity=self.intensity,
            target_color=target_color,
            target_intensity=target_intensity,
            duration=max(0.0, duration),
        )
        if self._task.duration == 0:
            task = self._task
            self._finish()
            return task
        return self._task

    def update(self, dt: float) -> None:
        task = self._task
        if task is None:
            return
        task.elapsed += max(0.0, dt)
        if task.done:
            self._finish()
            return
        f = task.progress
        self._write(
            vec.lerp_color(task.start_color, task.target_color, f),
            vec.lerp(task.start_intensity, task.target_intensity, f),
        )

    def cancel(self) -> None:
        self._task = None

    def _finish(self) -> None:
        task = self._task
        if task is None:
            return
        self._write(task.target_color, task.target_intensity)
        self._task = None

    def _write(self, color: Color, intensity: float) -> None:
        self.color = color
        self.intensity = intensity
        if self._light is not None:
            self._light.color = color
            self._light.intensity = intensity
