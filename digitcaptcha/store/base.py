"""Abstract expiring key-value store interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from digitcaptcha.config.settings import Settings


class ExpiringStore(ABC):
    """Key-value store whose entries expire after a time-to-live.

    Implementations must be safe under concurrent calls from in-flight
    requests and raise ``StoreError`` on transport failures.
    """

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store ``value`` under ``key``, replacing any previous value and TTL."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the value for ``key``, or None if missing or expired."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Return whether ``key`` holds a live value."""

    async def ping(self) -> None:
        """Check the backend is reachable. Raises ``StoreError`` if not."""

    async def close(self) -> None:
        """Release backend resources."""


def create_store(settings: Settings) -> ExpiringStore:
    """Factory: create the configured ExpiringStore backend."""
    if settings.store_backend == "redis":
        from digitcaptcha.store.redis_store import RedisStore

        return RedisStore.from_settings(settings)

    from digitcaptcha.store.memory_store import MemoryStore

    return MemoryStore(max_entries=settings.memory_max_entries)
