"""In-process pub/sub event bus with synchronous, depth-first dispatch."""
from __future__ import annotations

from typing import Any, Callable

_Handler = Callable[[str, dict[str, Any]], None]


class SignalBus:
    """Delivers each publish to its handlers immediately, in registration order.

    A handler that publishes another signal sees that nested dispatch run to
    completion before the remaining handlers of the outer signal are called.
    Handler exceptions propagate to the publisher.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[_Handler]] = {}

    def subscribe(self, signal_name: str, handler: _Handler) -> None:
        self._subscribers.setdefault(signal_name, []).append(handler)

    def unsubscribe(self, signal_name: str, handler: _Handler) -> None:
        handlers = self._subscribers.get(signal_name)
        if handlers is None:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            pass

    def publish(self, signal_name: str, **data: Any) -> None:
        # Snapshot so (un)subscribing mid-dispatch only affects later publishes.
        for handler in tuple(self._subscribers.get(signal_name, ())):
            handler(signal_name, data)

    def handler_count(self, signal_name: str) -> int:
        return len(self._subscribers.get(signal_name, ()))

    def clear(self) -> None:
        self._subscribers.clear()

    on = subscribe
    off = unsubscribe
    emit = publish
