"""Shared types, enums, and errors for the blocks session engine."""

from __future__ import annotations

import enum
import random as _random
from dataclasses import dataclass


class Variant(str, enum.Enum):
    SCORE = "score"
    DANGER = "danger"


class Phase(str, enum.Enum):
    MAIN_MENU = "main_menu"
    INSTRUCTIONS = "instructions"
    PLAYING = "playing"
    PAUSED = "paused"
    LEVEL_TRANSITION = "level_transition"
    GAME_OVER = "game_over"


class InputProfile(str, enum.Enum):
    """Device class used to tune the per-level speed ramp."""

    POINTER = "pointer"
    TOUCH = "touch"


@dataclass(eq=False, slots=True)
class Entity:
    """A pooled falling block. Compared and hashed by identity."""

    variant: Variant
    position: float = 0.0
    column: int = 0
    active: bool = False


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    dt: float
    elapsed: float
    random: _random.Random


class ConfigurationError(RuntimeError):
    """Raised at startup when a required external surface is missing."""


class InvariantViolation(RuntimeError):
    """Raised on core bookkeeping bugs (double release, foreign entity)."""
