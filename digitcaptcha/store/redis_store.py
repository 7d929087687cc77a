"""Redis-backed shared store."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from redis.asyncio import Redis
from redis.exceptions import RedisError

from digitcaptcha.exceptions import StoreError
from digitcaptcha.store.base import ExpiringStore

if TYPE_CHECKING:
    from digitcaptcha.config.settings import Settings

logger = structlog.get_logger(__name__)


class RedisStore(ExpiringStore):
    """Store backed by Redis. Expiry is enforced by the server."""

    def __init__(self, client: Redis) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> RedisStore:
        client = Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            password=settings.redis_password,
            db=settings.redis_db,
            decode_responses=True,
        )
        return cls(client)

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self._client.set(key, value, ex=ttl_seconds)
        except RedisError as e:
            logger.error("redis_set_failed", error=str(e))
            raise StoreError(str(e)) from e

    async def get(self, key: str) -> str | None:
        try:
            value = await self._client.get(key)
        except RedisError as e:
            logger.error("redis_get_failed", error=str(e))
            raise StoreError(str(e)) from e
        if isinstance(value, bytes):
            return value.decode()
        return value

    async def exists(self, key: str) -> bool:
        try:
            return await self._client.exists(key) == 1
        except RedisError as e:
            logger.error("redis_exists_failed", error=str(e))
            raise StoreError(str(e)) from e

    async def ping(self) -> None:
        try:
            await self._client.ping()
        except (RedisError, OSError) as e:
            raise StoreError(f"Fail to connect to redis: {e}") from e

    async def close(self) -> None:
        await self._client.aclose()
        logger.info("redis_store_closed")
