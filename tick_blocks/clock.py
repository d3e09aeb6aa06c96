"""Fixed-timestep clock fed by display frames."""

import random

from tick_blocks.types import TickContext


class Clock:
    """Counts simulation ticks and converts frame time into whole ticks.

    ``max_catch_up`` bounds the ticks produced by one long frame, so a stall
    (window drag, debugger) never turns into a burst of simulation steps.
    """

    def __init__(self, tps: int, max_catch_up: int = 5) -> None:
        if tps <= 0:
            raise ValueError("tps must be positive")
        if max_catch_up < 1:
            raise ValueError("max_catch_up must be >= 1")
        self._tps = tps
        self._dt = 1.0 / tps
        self._tick_number = 0
        self._accumulator = 0.0
        self._max_catch_up = max_catch_up

    @property
    def tps(self) -> int:
        return self._tps

    @property
    def dt(self) -> float:
        return self._dt

    @property
    def tick_number(self) -> int:
        return self._tick_number

    def advance(self) -> int:
        self._tick_number += 1
        return self._tick_number

    def due(self, frame_seconds: float) -> int:
        """Add one frame's duration and return how many ticks should run now."""
        self._accumulator += max(0.0, frame_seconds)
        steps = int(self._accumulator // self._dt)
        if steps > self._max_catch_up:
            steps = self._max_catch_up
            self._accumulator = 0.0
        else:
            self._accumulator -= steps * self._dt
        return steps

    def context(self, rng: random.Random) -> TickContext:
        return TickContext(
            tick_number=self._tick_number,
            dt=self._dt,
            elapsed=self._tick_number * self._dt,
            random=rng,
        )
