"""redlight - Red-light/green-light round core on a tick engine."""

from redlight.ambient import AmbientBlender, BlendTask
from redlight.clock import Clock
from redlight.config import RoundConfig
from redlight.death import DeathSequencer
from redlight.doll import Doll
from redlight.engine import Engine
from redlight.gates import LineGate
from redlight.motion import MotionAnalyzer
from redlight.phases import PhaseScheduler
from redlight.round import RedLightRound
from redlight.round_timer import RoundTimer
from redlight.signals import SignalBus
from redlight.timeline import Delay, Timeline
from redlight.types import (
    DeathState,
    GateResult,
    PlayerRoundState,
    RoundPhase,
    TickContext,
)

__all__ = [
    "RedLightRound",
    "RoundConfig",
    "Engine",
    "Clock",
    "TickContext",
    "Timeline",
    "Delay",
    "SignalBus",
    "MotionAnalyzer",
    "LineGate",
    "GateResult",
    "PhaseScheduler",
    "RoundPhase",
    "AmbientBlender",
    "BlendTask",
    "Doll",
    "DeathSequencer",
    "DeathState",
    "PlayerRoundState",
    "RoundTimer",
]
