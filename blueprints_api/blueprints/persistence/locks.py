import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Tuple


class IdentityLocks:
    """
    One lock per (author, name). Different identities never share a lock.

    An entry only lives while some caller holds or waits on it, so the map
    is bounded by in-flight requests, not by every name ever asked about.
    """

    def __init__(self):
        self._guard = threading.Lock()
        # key -> [lock, number of holders and waiters]
        self._locks: Dict[Tuple[str, str], List] = {}

    @contextmanager
    def hold(self, author: str, name: str) -> Iterator[None]:
        key = (author, name)
        with self._guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]

    def __len__(self) -> int:
        return len(self._locks)
