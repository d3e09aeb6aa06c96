"""Composition root: builds and wires the bus, simulator, session, and engine."""
from __future__ import annotations

from typing import Any

from tick_blocks import topics
from tick_blocks.bus import SignalBus
from tick_blocks.config import GameConfig
from tick_blocks.engine import Engine
from tick_blocks.schedule import Scheduler
from tick_blocks.session import GameSession
from tick_blocks.simulator import EntitySimulator
from tick_blocks.systems import (
    make_level_timer_system,
    make_schedule_system,
    make_simulation_system,
)
from tick_blocks.types import Entity, InputProfile, Phase


class Game:
    """One playable game: every core component sharing a single bus.

    Presentation code talks to the game through :attr:`bus` intents and the
    narrow setters below; it never touches the simulator or session state
    directly.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        surface: Any = None,
        seed: int | None = None,
        profile: InputProfile = InputProfile.POINTER,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.bus = SignalBus()
        self.engine = Engine(tps=self.config.tps, seed=seed)
        self.scheduler = Scheduler()
        self.simulator = EntitySimulator(
            self.bus,
            self.scheduler,
            config=self.config,
            rng=self.engine.random,
            profile=profile,
        )
        self.session = GameSession(self.bus, config=self.config, surface=surface)

        # Order matters: blocks move before any spawn in the same tick.
        self.engine.add_system(make_simulation_system(self.simulator))
        self.engine.add_system(make_schedule_system(self.scheduler))
        self.engine.add_system(make_level_timer_system(self.session.timer))

    def initialize(self) -> None:
        self.session.initialize()

    # -- Read-only state for presentation --

    @property
    def phase(self) -> Phase:
        return self.session.phase

    @property
    def level(self) -> int:
        return self.session.level

    @property
    def score(self) -> int:
        return self.session.score

    @property
    def progress(self) -> float:
        return self.session.progress

    @property
    def active_entities(self) -> tuple[Entity, ...]:
        return self.simulator.active_entities

    # -- Collaborator interface --

    def set_scores(self, score_amount: int, danger_amount: int) -> None:
        self.session.set_scores(score_amount, danger_amount)

    def set_danger_zone_position(self, offset: float) -> None:
        self.simulator.set_threshold_position(offset)

    def intercept(self, entity: Entity) -> None:
        """Report a click/tap on ``entity``."""
        self.bus.publish(topics.ENTITY_INTERCEPTED, entity=entity)

    def step(self) -> None:
        self.engine.step()

    def frame(self, frame_seconds: float) -> int:
        return self.engine.frame(frame_seconds)
