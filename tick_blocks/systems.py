"""System factories wiring components into the engine loop."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from tick_blocks.schedule import Scheduler
    from tick_blocks.simulator import EntitySimulator
    from tick_blocks.timer import LevelTimer
    from tick_blocks.types import TickContext


def make_simulation_system(simulator: EntitySimulator) -> Callable[[TickContext], None]:
    """Return a system that advances falling blocks once per tick."""

    def simulation_system(ctx: TickContext) -> None:
        simulator.tick()

    return simulation_system


def make_schedule_system(scheduler: Scheduler) -> Callable[[TickContext], None]:
    """Return a system that counts one-shot timers down by the tick length."""

    def schedule_system(ctx: TickContext) -> None:
        scheduler.advance(ctx.dt)

    return schedule_system


def make_level_timer_system(timer: LevelTimer) -> Callable[[TickContext], None]:
    """Return a system that samples the level timer at the tick's timestamp."""

    def level_timer_system(ctx: TickContext) -> None:
        timer.sample(ctx.elapsed, ctx.dt)

    return level_timer_system
