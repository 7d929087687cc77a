"""Shared test fixtures."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from digitcaptcha.captcha.manager import ChallengeManager
from digitcaptcha.config.settings import Settings
from digitcaptcha.store.memory_store import MemoryStore
from digitcaptcha.web.app import create_app

TEST_SECRET = "right-secret"
FIXED_DIGITS = "13579"
FAKE_JPEG = b"\xff\xd8\xff\xe0fake-jpeg\xff\xd9"


def fake_renderer(digits: str, size: object) -> bytes:
    return FAKE_JPEG


@pytest.fixture()
def settings() -> Settings:
    return Settings(secret_phrase=TEST_SECRET, store_backend="memory", debug=True)


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore(max_entries=1000)


@pytest.fixture()
def manager(store: MemoryStore) -> ChallengeManager:
    """Manager with deterministic digits and no real image rendering."""
    return ChallengeManager(
        store,
        TEST_SECRET,
        digit_source=lambda: FIXED_DIGITS,
        renderer=fake_renderer,
    )


@pytest.fixture()
def app(settings: Settings, store: MemoryStore):
    """Create a fresh app instance backed by an in-memory store."""
    return create_app(settings=settings, store=store)


@pytest.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
