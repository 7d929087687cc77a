"""Process-local bounded LRU store."""

from __future__ import annotations

import threading
import time
from collections import OrderedDict

import structlog

from digitcaptcha.store.base import ExpiringStore

logger = structlog.get_logger(__name__)


class MemoryStore(ExpiringStore):
    """In-process store with LRU eviction and lazy TTL expiry.

    Entries may be evicted before their TTL once ``max_entries`` is reached,
    and nothing survives a restart or is shared between instances. Use the
    Redis backend when challenges must outlive either.
    """

    def __init__(self, max_entries: int = 10000) -> None:
        if max_entries < 1:
            msg = "max_entries must be positive"
            raise ValueError(msg)
        self._max_entries = max_entries
        self._store: OrderedDict[str, tuple[str, float]] = OrderedDict()  # key -> (value, expires_at)
        self._lock = threading.Lock()

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        with self._lock:
            self._store[key] = (value, time.time() + ttl_seconds)
            self._store.move_to_end(key)
            while len(self._store) > self._max_entries:
                evicted, _ = self._store.popitem(last=False)
                logger.debug("memory_store_evicted", key=evicted)

    async def get(self, key: str) -> str | None:
        with self._lock:
            return self._lookup(key)

    async def exists(self, key: str) -> bool:
        with self._lock:
            return self._lookup(key) is not None

    def __len__(self) -> int:
        return len(self._store)

    def _lookup(self, key: str) -> str | None:
        """Return a live value and mark it recently used. Caller holds the lock."""
        entry = self._store.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if time.time() >= expires_at:
            del self._store[key]
            return None
        self._store.move_to_end(key)
        return value
