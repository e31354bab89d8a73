# apps/domain/services/key_locks.py
"""
Per-key mutual exclusion

Serializes work on the same key while leaving distinct keys independent.
Locks are reference counted and dropped once no caller holds or waits on
them, so the registry doesn't grow with every key ever seen.
"""
import threading
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator, List


class KeyedLock:
    """Registry of threading locks indexed by key"""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[Hashable, threading.Lock] = {}
        self._refcounts: Dict[Hashable, int] = {}

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        """
        Hold the lock for a key for the duration of the block

        Args:
            key: Any hashable key, e.g. (prompt_id, owner_id)
        """
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
                self._refcounts[key] = 0
            self._refcounts[key] += 1

        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                self._refcounts[key] -= 1
                if self._refcounts[key] == 0:
                    del self._refcounts[key]
                    del self._locks[key]

    def active_keys(self) -> List[Hashable]:
        """Keys currently held or waited on"""
        with self._guard:
            return list(self._locks.keys())
