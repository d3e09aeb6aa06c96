"""One-shot timers measured in engine time."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable


@dataclass(eq=False)
class Timer:
    """One-shot countdown. Fires when remaining reaches 0, unless cancelled."""

    name: str
    remaining: float
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler:
    """Holds pending one-shot timers and fires them as engine time advances.

    Recurring work reschedules itself from its callback, so every period can
    use a freshly computed interval.
    """

    def __init__(self) -> None:
        self._timers: list[Timer] = []

    def call_later(self, name: str, delay: float, callback: Callable[[], None]) -> Timer:
        timer = Timer(name=name, remaining=delay, callback=callback)
        self._timers.append(timer)
        return timer

    def pending(self, name: str | None = None) -> list[Timer]:
        return [
            t for t in self._timers
            if not t.cancelled and (name is None or t.name == name)
        ]

    def advance(self, dt: float) -> None:
        """Count every timer down by ``dt`` and fire the expired ones in order."""
        due: list[Timer] = []
        remaining: list[Timer] = []
        for timer in self._timers:
            if timer.cancelled:
                continue
            timer.remaining -= dt
            if timer.remaining <= 1e-9:
                due.append(timer)
            else:
                remaining.append(timer)
        # Callbacks may schedule new timers; keep those for the next advance.
        self._timers = remaining
        for timer in due:
            if not timer.cancelled:
                timer.callback()
