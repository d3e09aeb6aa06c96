"""Finite state machine for session phases."""
from __future__ import annotations

from typing import Callable, Generic, Hashable, TypeVar

S = TypeVar("S", bound=Hashable)


class PhaseMachine(Generic[S]):
    """Event-driven state machine over a transition table.

    ``transitions`` maps a state to ``{event: target}``. Firing an event that
    the current state has no edge for is rejected and leaves the state
    untouched; callers decide whether that is worth reporting.
    """

    def __init__(
        self,
        state: S,
        transitions: dict[S, dict[str, S]],
        on_transition: Callable[[S, S, str], None] | None = None,
    ) -> None:
        self._state = state
        self._transitions = transitions
        self._on_transition = on_transition

    @property
    def state(self) -> S:
        return self._state

    def can(self, event: str) -> bool:
        return event in self._transitions.get(self._state, {})

    def events(self) -> list[str]:
        """Events accepted from the current state."""
        return list(self._transitions.get(self._state, {}))

    def fire(self, event: str) -> bool:
        target = self._transitions.get(self._state, {}).get(event)
        if target is None:
            return False
        old = self._state
        self._state = target
        if self._on_transition is not None:
            self._on_transition(old, target, event)
        return True
