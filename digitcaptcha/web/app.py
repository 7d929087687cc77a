"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import structlog
from fastapi import FastAPI

from digitcaptcha import __version__
from digitcaptcha.captcha.manager import ChallengeManager
from digitcaptcha.config.logging import setup_logging
from digitcaptcha.config.settings import Settings, get_settings
from digitcaptcha.exceptions import CaptchaError, StoreError
from digitcaptcha.store.base import ExpiringStore, create_store
from digitcaptcha.web.health import check_health
from digitcaptcha.web.middleware import RequestIDMiddleware
from digitcaptcha.web.responses import captcha_error_handler, unhandled_error_handler
from digitcaptcha.web.routes.captcha import router as captcha_router

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Fail fast on an unreachable store; close it once requests have drained."""
    store: ExpiringStore = app.state.store
    try:
        await store.ping()
    except StoreError:
        logger.error("store_unreachable")
        await store.close()
        raise
    logger.info("store_connected", backend=type(store).__name__)
    try:
        yield
    finally:
        await store.close()
        logger.info("store_closed")


def create_app(
    settings: Settings | None = None,
    store: ExpiringStore | None = None,
    **manager_options: Any,
) -> FastAPI:
    """Create and configure the FastAPI application.

    The store handle is built once here and shared by every request.
    ``manager_options`` are passed through to ``ChallengeManager``.
    """
    settings = settings or get_settings()
    setup_logging(log_level=settings.log_level, json_output=not settings.debug)

    app = FastAPI(
        title="DigitCaptcha",
        description="Short-lived digit captcha service",
        version=__version__,
        lifespan=lifespan,
    )

    if store is None:
        store = create_store(settings)
    app.state.store = store
    app.state.manager = ChallengeManager(store, settings.secret_phrase, **manager_options)

    app.add_exception_handler(CaptchaError, captcha_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
    app.add_middleware(RequestIDMiddleware)

    app.include_router(captcha_router)

    @app.get("/health")
    async def health_check() -> dict[str, object]:
        return await check_health(app.state.store)

    logger.info("app_created", store_backend=settings.store_backend)
    return app
