"""Reuse container for short-lived objects."""
from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

from tick_blocks.types import InvariantViolation

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Pool(Generic[T]):
    """Hands out objects from a free list, growing through ``factory`` on demand.

    Objects must be hashable by identity. Every object returned by ``get()``
    is tracked as outstanding until ``put_back()`` releases it.
    """

    def __init__(self, factory: Callable[[], T], name: str = "pool") -> None:
        self._factory = factory
        self._name = name
        self._free: list[T] = []
        self._outstanding: set[T] = set()
        self._allocated = 0

    @property
    def free_count(self) -> int:
        return len(self._free)

    @property
    def outstanding_count(self) -> int:
        return len(self._outstanding)

    @property
    def allocated(self) -> int:
        """Total objects ever created by the factory."""
        return self._allocated

    def add(self, n: int) -> None:
        if n < 0:
            raise ValueError(f"n must be >= 0, got {n}")
        for _ in range(n):
            self._free.append(self._create())

    def get(self) -> T:
        if self._free:
            obj = self._free.pop()
        else:
            obj = self._create()
            logger.debug("%s grew to %d objects", self._name, self._allocated)
        self._outstanding.add(obj)
        return obj

    def put_back(self, obj: T) -> None:
        if obj not in self._outstanding:
            raise InvariantViolation(
                f"{self._name}: release of an object that is not outstanding"
            )
        self._outstanding.remove(obj)
        self._free.append(obj)

    def owns(self, obj: T) -> bool:
        return obj in self._outstanding

    def _create(self) -> T:
        self._allocated += 1
        return self._factory()
