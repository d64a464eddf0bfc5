"""Per-depot mutual exclusion for ingestions."""
from __future__ import annotations

import threading
import weakref
from contextlib import contextmanager
from typing import Iterator


class DepotLocks:
    """Hands out one lock per depot id; distinct depots never block each other.

    The registry only keeps locks that someone still references, so depots
    that are no longer being ingested do not accumulate.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: weakref.WeakValueDictionary[str, threading.Lock] = weakref.WeakValueDictionary()

    def __len__(self) -> int:
        return len(self._locks)

    def lock_for(self, depot_id: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(depot_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[depot_id] = lock
            return lock

    @contextmanager
    def hold(self, depot_id: str) -> Iterator[None]:
        lock = self.lock_for(depot_id)
        with lock:
            yield
