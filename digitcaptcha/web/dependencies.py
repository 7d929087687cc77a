"""FastAPI dependency injection for the shared manager."""

from __future__ import annotations

from fastapi import Request

from digitcaptcha.captcha.manager import ChallengeManager


def get_manager(request: Request) -> ChallengeManager:
    """Return the ChallengeManager built at startup."""
    manager: ChallengeManager = request.app.state.manager
    return manager
