"""Pairwise player locks serializing result settlement."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field


@dataclass
class _LockEntry:
    lock: threading.Lock = field(default_factory=threading.Lock)
    holders: int = 0


class PairLockCoordinator:
    """Hands out per-player locks, always acquired in ascending id order.

    Two callers naming the same pair in opposite order therefore never
    deadlock. Entries are reference counted and dropped once unused.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: dict[int, _LockEntry] = {}

    def _checkout(self, player_id: int) -> _LockEntry:
        with self._guard:
            entry = self._entries.get(player_id)
            if entry is None:
                entry = self._entries[player_id] = _LockEntry()
            entry.holders += 1
            return entry

    def _checkin(self, player_id: int) -> None:
        with self._guard:
            entry = self._entries[player_id]
            entry.holders -= 1
            if entry.holders == 0:
                del self._entries[player_id]

    @contextmanager
    def hold(self, player_id: int, other_player_id: int) -> Iterator[None]:
        ordered = sorted({player_id, other_player_id})
        acquired: list[tuple[int, _LockEntry]] = []
        try:
            for pid in ordered:
                entry = self._checkout(pid)
                try:
                    entry.lock.acquire()
                except BaseException:
                    self._checkin(pid)
                    raise
                acquired.append((pid, entry))
            yield
        finally:
            for pid, entry in reversed(acquired):
                entry.lock.release()
                self._checkin(pid)

    def tracked_player_count(self) -> int:
        with self._guard:
            return len(self._entries)


__all__ = ["PairLockCoordinator"]
