"""Pausable level timer driven by tick timestamps.

The timer never reads a clock itself. Each tick hands it a timestamp (engine
time in seconds) through :meth:`LevelTimer.sample`, which keeps it
deterministic under test. Elapsed time excludes paused intervals exactly:
the first sample after :meth:`LevelTimer.resume` shifts the start time by the
gap since the last sample taken before the pause, less the tick that ran
after the resume.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from tick_blocks import topics
from tick_blocks.bus import SignalBus

logger = logging.getLogger(__name__)


@dataclass
class TimerState:
    start_time: float | None = None
    last_time: float | None = None
    running: bool = False
    resuming: bool = False
    progress: float = 0.0


def elapsed_at(state: TimerState, now: float) -> float:
    """Elapsed level time at ``now``, ignoring any pending resume shift."""
    if state.start_time is None:
        return 0.0
    return max(0.0, now - state.start_time)


def shifted_start(state: TimerState, now: float, dt: float = 0.0) -> float | None:
    """Start time moved forward by the paused gap since the last sample.

    ``dt`` is the length of the tick ending at ``now``; that tick ran after
    the resume, so it counts as elapsed level time.
    """
    if state.start_time is None or state.last_time is None:
        return state.start_time
    return state.start_time + max(0.0, now - state.last_time - dt)


def progress_for(elapsed: float, duration: float) -> float:
    return min(elapsed / duration, 1.0)


class LevelTimer:
    """Tracks progress through the current level and reports expiry."""

    def __init__(
        self,
        bus: SignalBus,
        duration: float,
        on_expire: Callable[[], None] | None = None,
    ) -> None:
        if duration <= 0:
            raise ValueError(f"duration must be > 0, got {duration}")
        self._bus = bus
        self._duration = duration
        self._on_expire = on_expire
        self._state = TimerState()

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def progress(self) -> float:
        return self._state.progress

    @property
    def running(self) -> bool:
        return self._state.running

    @property
    def duration(self) -> float:
        return self._duration

    def start(self) -> None:
        self._state = TimerState(running=True)

    def stop(self) -> None:
        self._state.running = False
        self._state.resuming = False

    def resume(self) -> None:
        if self._state.running:
            return
        self._state.running = True
        self._state.resuming = self._state.start_time is not None

    def reset(self) -> None:
        self._state = TimerState()
        self._bus.publish(topics.SESSION_TIMER_PROGRESS, progress=0.0)

    def sample(self, now: float, dt: float = 0.0) -> None:
        state = self._state
        if not state.running:
            return
        if state.start_time is None:
            state.start_time = now
        elif state.resuming:
            state.start_time = shifted_start(state, now, dt)
            state.resuming = False
        state.last_time = now

        # max() keeps progress monotone against float drift in the shift.
        progress = max(state.progress, progress_for(elapsed_at(state, now), self._duration))
        state.progress = progress
        self._bus.publish(topics.SESSION_TIMER_PROGRESS, progress=progress)

        if progress >= 1.0:
            self.stop()
            logger.debug("level timer expired after %.2fs", self._duration)
            if self._on_expire is not None:
                self._on_expire()
