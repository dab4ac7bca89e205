"""In-memory key/value cache with per-entry expiry."""

import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable


@dataclass(frozen=True)
class CacheEntry:
    key: str
    value: Any
    expires_at: float


class TtlCache:
    """Thread-safe TTL cache.

    Expiry is checked lazily: an expired entry is dropped the next time it is
    read. Timestamps come from a monotonic clock, injectable for tests.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        """Return the live value for key, or default."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            if self._clock() >= entry.expires_at:
                del self._entries[key]
                return default
            return entry.value

    def set(self, key: str, value: Any, ttl: timedelta | float) -> None:
        """Store value under key for ttl (a timedelta or seconds)."""
        seconds = ttl.total_seconds() if isinstance(ttl, timedelta) else float(ttl)
        with self._lock:
            self._entries[key] = CacheEntry(key=key, value=value, expires_at=self._clock() + seconds)

    def contains(self, key: str) -> bool:
        sentinel = object()
        return self.get(key, sentinel) is not sentinel

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(1 for entry in self._entries.values() if now < entry.expires_at)
