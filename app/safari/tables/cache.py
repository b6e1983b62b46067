from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    value: list[dict[str, Any]]
    expires_at: float


class ListingCache:
    """Small in-memory TTL cache for rows fetched per table.

    One instance is shared by request threads, so every access to the entry
    map holds ``_lock``. Loaders run outside the lock.
    """

    def __init__(self, ttl_seconds: float = 20.0, now: Callable[[], float] | None = None) -> None:
        self.ttl_seconds = max(1.0, ttl_seconds)
        self._now = now or time.monotonic
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> list[dict[str, Any]] | None:
        with self._lock:
            entry = self._entries.get(key)
            if not entry:
                return None
            if entry.expires_at <= self._now():
                self._entries.pop(key, None)
                return None
            return entry.value

    def set(self, key: str, value: list[dict[str, Any]]) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(value=value, expires_at=self._now() + self.ttl_seconds)

    def get_or_load(self, key: str, loader: Callable[[], list[dict[str, Any]]]) -> list[dict[str, Any]]:
        cached = self.get(key)
        if cached is not None:
            return cached
        value = loader()
        self.set(key, value)
        return value

    def invalidate_prefix(self, prefix: str) -> None:
        with self._lock:
            stale_keys = [key for key in self._entries if key.startswith(prefix)]
            for key in stale_keys:
                self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
