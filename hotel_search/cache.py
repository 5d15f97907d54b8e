import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 43200  # 12 hours


@dataclass
class CacheEntry:
    value: Any
    expires_at: float


@dataclass
class ResponseCache:
    """In-memory response cache with per-entry expiry.

    Used by the feed client to avoid hitting the same endpoint on every
    query. Entries expire lazily: an expired entry is only removed when a
    lookup finds it, there is no background sweep.

    ``clock`` returns the current time in seconds and can be swapped for a
    fake one in tests. One lock guards every read-check-write so the cache
    can be shared between server threads.
    """

    ttl_seconds: int = DEFAULT_TTL_SECONDS
    clock: Callable[[], float] = time.time
    _entries: Dict[str, CacheEntry] = field(default_factory=dict, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self.clock() < entry.expires_at:
                return entry.value
            logger.debug("Cache entry expired: %s", key)
            del self._entries[key]
            return None

    def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        with self._lock:
            self._entries[key] = CacheEntry(value=value, expires_at=self.clock() + ttl)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
