"""tick-blocks - Arcade session engine: phases, falling blocks, and an event bus."""
from __future__ import annotations

from tick_blocks.bus import SignalBus
from tick_blocks.clock import Clock
from tick_blocks.config import GameConfig
from tick_blocks.engine import Engine
from tick_blocks.fsm import PhaseMachine
from tick_blocks.game import Game
from tick_blocks.highscores import HighScore, HighScoreTable
from tick_blocks.pool import Pool
from tick_blocks.schedule import Scheduler, Timer
from tick_blocks.session import GameSession
from tick_blocks.simulator import EntitySimulator
from tick_blocks.sound import SoundBoard
from tick_blocks.systems import (
    make_level_timer_system,
    make_schedule_system,
    make_simulation_system,
)
from tick_blocks.timer import LevelTimer, TimerState
from tick_blocks.types import (
    ConfigurationError,
    Entity,
    InputProfile,
    InvariantViolation,
    Phase,
    TickContext,
    Variant,
)

__all__ = [
    "SignalBus",
    "Clock",
    "GameConfig",
    "Engine",
    "PhaseMachine",
    "Game",
    "HighScore",
    "HighScoreTable",
    "Pool",
    "Scheduler",
    "Timer",
    "GameSession",
    "EntitySimulator",
    "SoundBoard",
    "make_level_timer_system",
    "make_schedule_system",
    "make_simulation_system",
    "LevelTimer",
    "TimerState",
    "ConfigurationError",
    "Entity",
    "InputProfile",
    "InvariantViolation",
    "Phase",
    "TickContext",
    "Variant",
]
