"""
Process-wide record of URLs already claimed for fetching.
"""
from __future__ import annotations

import threading
from typing import Iterable, Iterator, Set


class VisitedSet:
    """Set of absolute URLs with an atomic test-and-insert.

    A URL is inserted at most once; whoever inserts it owns the right to fetch it.
    The lock makes ``claim`` safe from threads as well as from asyncio tasks.
    """

    def __init__(self, urls: Iterable[str] = ()) -> None:
        self._urls: Set[str] = set(urls)
        self._lock = threading.Lock()

    def claim(self, url: str) -> bool:
        """Insert *url* and return True, or return False if it was already present."""
        with self._lock:
            if url in self._urls:
                return False
            self._urls.add(url)
            return True

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._urls

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            snapshot = list(self._urls)
        return iter(snapshot)
