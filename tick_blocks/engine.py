"""Engine - core loop driving systems once per tick."""

import os
import random
from typing import Callable

from tick_blocks.clock import Clock
from tick_blocks.types import TickContext

System = Callable[[TickContext], None]


class Engine:
    """Runs registered systems in order, once per tick.

    Registration order is execution order; the composition root relies on
    this to advance entities before spawn timers fire.
    """

    def __init__(self, tps: int = 60, seed: int | None = None) -> None:
        self._clock = Clock(tps)
        self._systems: list[System] = []

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def random(self) -> random.Random:
        return self._rng

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def step(self) -> None:
        self._clock.advance()
        ctx = self._clock.context(self._rng)
        for system in self._systems:
            system(ctx)

    def run(self, n: int) -> None:
        for _ in range(n):
            self.step()

    def frame(self, frame_seconds: float) -> int:
        """Run the ticks owed for one display frame. Returns the count run."""
        steps = self._clock.due(frame_seconds)
        for _ in range(steps):
            self.step()
        return steps
