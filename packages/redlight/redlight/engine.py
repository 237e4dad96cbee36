"""Engine - ordered per-tick systems, pacing, and lifecycle hooks."""
from __future__ import annotations

import logging
import time
from typing import Any, Callable

from redlight.clock import Clock
from redlight.types import TickContext

logger = logging.getLogger(__name__)

_EPS = 1e-9

_Hook = Callable[[Any, TickContext], None]


class Engine:
    """Runs systems in registration order against a single subject.

    Once a system calls ``ctx.request_stop()`` the engine halts: the rest
    of that tick is skipped and later ``step`` calls do nothing until
    ``reset``.
    """

    def __init__(self, subject: Any, tps: int = 60) -> None:
        self._subject = subject
        self._clock = Clock(tps)
        self._systems: list[Callable[[Any, TickContext], None]] = []
        self._start_hooks: list[_Hook] = []
        self._stop_hooks: list[_Hook] = []
        self._halted = False

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def halted(self) -> bool:
        return self._halted

    def add_system(self, system: Callable[[Any, TickContext], None]) -> None:
        self._systems.append(system)

    def on_start(self, hook: _Hook) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: _Hook) -> None:
        self._stop_hooks.append(hook)

    def stop(self) -> None:
        if self._halted:
            return
        self._halted = True
        logger.debug("engine halted at tick %d", self._clock.tick_number)

    def reset(self) -> None:
        self._halted = False
        self._clock.reset()

    def _tick(self, dt: float | None) -> None:
        self._clock.advance(dt)
        ctx = self._clock.context(self.stop)
        for system in self._systems:
            system(self._subject, ctx)
            if self._halted:
                break

    def _run_hooks(self, hooks: list[_Hook]) -> None:
        ctx = self._clock.context(self.stop)
        for hook in hooks:
            hook(self._subject, ctx)

    def step(self, dt: float | None = None) -> None:
        if self._halted:
            return
        self._tick(dt)

    def run(self, n: int, dt: float | None = None) -> None:
        if self._halted:
            return
        self._run_hooks(self._start_hooks)
        for _ in range(n):
            self._tick(dt)
            if self._halted:
                break
        self._run_hooks(self._stop_hooks)

    def advance(self, seconds: float, dt: float | None = None) -> None:
        """Step in ``dt`` chunks until ``seconds`` of simulated time have passed.

        The final chunk is shortened so the total lands exactly on ``seconds``.
        """
        step_dt = self._clock.default_dt if dt is None else dt
        if step_dt <= 0:
            step_dt = self._clock.default_dt
        remaining = seconds
        while remaining > _EPS and not self._halted:
            chunk = min(step_dt, remaining)
            self._tick(chunk)
            remaining -= chunk

    def run_forever(self, now: Callable[[], float] = time.monotonic) -> None:
        """Real-time loop: each tick uses the measured wall-clock dt."""
        if self._halted:
            return
        self._run_hooks(self._start_hooks)
        target = self._clock.default_dt
        last = now()
        while not self._halted:
            start = now()
            self._tick(start - last)
            last = start
            if self._halted:
                break
            sleep_time = target - (now() - start)
            if sleep_time > 0:
                time.sleep(sleep_time)
        self._run_hooks(self._stop_hooks)
