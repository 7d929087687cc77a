"""Health check endpoint logic."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from digitcaptcha import __version__
from digitcaptcha.exceptions import StoreError

if TYPE_CHECKING:
    from digitcaptcha.store.base import ExpiringStore

logger = structlog.get_logger(__name__)


async def check_health(store: ExpiringStore) -> dict[str, object]:
    """Return application health status with a store probe."""
    result: dict[str, object] = {
        "status": "healthy",
        "version": __version__,
        "store": "connected",
    }
    try:
        await store.ping()
    except StoreError as exc:
        logger.warning("health_check_store_failed", error=str(exc))
        result["store"] = "unavailable"
        result["status"] = "degraded"
    return result
