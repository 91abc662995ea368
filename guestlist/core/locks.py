"""
Per-key mutual exclusion for check-ins.

The sheet offers no compare-and-set, so two concurrent requests for the same
identifier can both read "not checked" and both write. KeyedLock serializes
the read/decide/write sequence per identifier inside one process. Requests
for different identifiers never wait on each other.

Entries are reference counted and dropped once no thread holds or waits on
them, so the registry does not grow with the guest list.

This does not help across processes or hosts; multiple workers still race
and the sheet's last-write-wins behavior applies.
"""
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List


class KeyedLock:
    """Registry of reentrant locks keyed by string."""

    def __init__(self):
        self._guard = threading.Lock()
        # key -> [lock, number of holders + waiters]
        self._entries: Dict[str, List] = {}

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        """Hold the lock for ``key`` for the duration of the block."""
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = [threading.RLock(), 0]
                self._entries[key] = entry
            entry[1] += 1

        lock = entry[0]
        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._entries[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)


# Shared by all request threads in this process
checkin_locks = KeyedLock()
