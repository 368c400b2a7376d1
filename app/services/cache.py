from __future__ import annotations

import time
from dataclasses import dataclass
from threading import Lock
from typing import Any, Callable


@dataclass
class _CacheEntry:
    data: Any
    expiry: float


class TTLCache:
    """Thread-safe, process-local key/value cache with lazy expiry.

    Entries are only dropped when a ``get`` finds them expired or when they are
    cleared explicitly; there is no background sweep and no size bound.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._lock = Lock()
        self._clock = clock
        self._entries: dict[str, _CacheEntry] = {}

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() > entry.expiry:
                del self._entries[key]
                return None
            return entry.data

    def set(self, key: str, value: Any, ttl_seconds: float = 60.0) -> None:
        with self._lock:
            self._entries[key] = _CacheEntry(data=value, expiry=self._clock() + ttl_seconds)

    def clear_by_prefix(self, prefix: str) -> int:
        with self._lock:
            doomed = [key for key in self._entries if key.startswith(prefix)]
            for key in doomed:
                del self._entries[key]
            return len(doomed)

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear_all(self) -> None:
        with self._lock:
            self._entries.clear()


_CACHE = TTLCache()


def get_cache() -> TTLCache:
    return _CACHE


def reset_cache() -> None:
    """Drop every cached entry (used by tests)."""

    get_cache().clear_all()
