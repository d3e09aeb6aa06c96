"""In-memory high score ranking."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

_SNAPSHOT_VERSION = 1


@dataclass
class HighScore:
    name: str
    score: int


class HighScoreTable:
    """Keeps the top ``capacity`` scores, best first.

    Ties keep the earlier entry ahead. Persistence is left to the caller
    through :meth:`snapshot` and :meth:`restore`.
    """

    def __init__(self, capacity: int = 10) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._entries: list[HighScore] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    def entries(self) -> list[HighScore]:
        return list(self._entries)

    def rank_for(self, score: int) -> int | None:
        """Index a new ``score`` would take, or None if it does not qualify."""
        for i, entry in enumerate(self._entries):
            if entry.score < score:
                return i
        if len(self._entries) < self._capacity:
            return len(self._entries)
        return None

    def qualifies(self, score: int) -> bool:
        return self.rank_for(score) is not None

    def insert(self, name: str, score: int) -> int | None:
        index = self.rank_for(score)
        if index is None:
            return None
        self._entries.insert(index, HighScore(name=name, score=score))
        del self._entries[self._capacity:]
        return index

    def rename(self, index: int, name: str) -> None:
        self._entries[index].name = name

    def snapshot(self) -> dict[str, Any]:
        return {
            "version": _SNAPSHOT_VERSION,
            "capacity": self._capacity,
            "entries": [asdict(e) for e in self._entries],
        }

    def restore(self, data: dict[str, Any]) -> None:
        version = data.get("version")
        if version != _SNAPSHOT_VERSION:
            raise ValueError(
                f"Unsupported snapshot version {version!r}, expected {_SNAPSHOT_VERSION}"
            )
        entries = sorted(
            (HighScore(**e) for e in data["entries"]),
            key=lambda e: e.score,
            reverse=True,
        )
        self._entries = entries[: self._capacity]
