"""Shared types and protocols for the red-light round core."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

Point3 = tuple[float, float, float]
Color = tuple[float, float, float]


class RoundPhase(enum.Enum):
    GREEN = "green"
    RED = "red"


class DeathState(enum.Enum):
    ALIVE = "alive"
    GUNSHOT_PENDING = "gunshot_pending"
    DEAD = "dead"


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    dt: float
    elapsed: float
    request_stop: Callable[[], None]


@dataclass(frozen=True, slots=True)
class GateResult:
    """Outcome of one gate evaluation. ``reason`` is set only on the latching tick."""

    crossed_this_tick: bool
    inside_fallback_region: bool
    reason: str | None = None


@dataclass
class PlayerRoundState:
    """Per-round player flags. Gates write crossed/finished, the sequencer writes is_dead."""

    has_crossed_start: bool = False
    has_finished: bool = False
    is_dead: bool = False

    @property
    def terminal(self) -> bool:
        return self.is_dead or self.has_finished


if TYPE_CHECKING:
    from redlight.round import RedLightRound

System = Callable[["RedLightRound", TickContext], None]
