"""Per-game mutual exclusion: at most one join / turn is being processed for a given game at any time."""

import threading
from contextlib import contextmanager
from typing import Iterator
from uuid import UUID


class GameLockRegistry:
    """
    Thread-safe registry of one lock per game ID.

    A game's lock only exists while some request holds or waits for it.
    The last one to leave removes it, so unknown or abandoned game IDs leave nothing behind.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._game_locks: dict[UUID, threading.Lock] = {}
        self._holders: dict[UUID, int] = {}

    def __len__(self) -> int:
        """Number of games with a lock right now."""
        with self._lock:
            return len(self._game_locks)

    @contextmanager
    def hold(self, game_id: UUID) -> Iterator[None]:
        lock = self._enter(game_id)
        try:
            with lock:
                yield
        finally:
            self._leave(game_id)

    # -- Internal helpers --
    def _enter(self, game_id: UUID) -> threading.Lock:
        with self._lock:
            if game_id not in self._game_locks:
                self._game_locks[game_id] = threading.Lock()
                self._holders[game_id] = 0
            self._holders[game_id] += 1
            return self._game_locks[game_id]

    def _leave(self, game_id: UUID) -> None:
        with self._lock:
            self._holders[game_id] -= 1
            if self._holders[game_id] == 0:
                del self._holders[game_id]
                del self._game_locks[game_id]
