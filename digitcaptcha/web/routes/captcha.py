"""Captcha routes: issue, verify, confirm and query challenges."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse  # noqa: TC002 - FastAPI resolves return types

from digitcaptcha.captcha.manager import ChallengeManager  # noqa: TC001 - used by Depends
from digitcaptcha.models.api import CaptchaData, CaptchaRes, ConfirmRes, StatusRes
from digitcaptcha.web.dependencies import get_manager
from digitcaptcha.web.responses import write_result

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/captcha", tags=["captcha"])


@router.get("")
async def create_captcha(
    scope: str = "",
    width: str | None = None,
    height: str | None = None,
    manager: ChallengeManager = Depends(get_manager),
) -> JSONResponse:
    """Issue a new challenge. Malformed width/height fall back to 150x40."""
    challenge = await manager.create_challenge(scope, width, height)
    payload = CaptchaRes(
        captcha_id=challenge.id,
        expire_time=challenge.expires_at,
        captcha_data=CaptchaData(
            width=challenge.size.width,
            height=challenge.size.height,
            jpeg_base64=challenge.image_base64,
            phrase_len=challenge.phrase_length,
        ),
    )
    return write_result(payload.model_dump(by_alias=True), status_code=201)


@router.get("/{captcha_id}/submitResult")
async def submit_result(
    captcha_id: str,
    phrase: str = "",
    manager: ChallengeManager = Depends(get_manager),
) -> JSONResponse:
    """Check the end user's answer. Does not consume the challenge."""
    await manager.verify_answer(captcha_id, phrase)
    return write_result()


@router.get("/{captcha_id}/submitStatus")
async def submit_status(
    captcha_id: str,
    secret_phrase: str = "",
    manager: ChallengeManager = Depends(get_manager),
) -> JSONResponse:
    """Privileged confirmation, gated by the shared secret."""
    scope = await manager.confirm_submission(captcha_id, secret_phrase)
    return write_result(ConfirmRes(scope=scope).model_dump())


@router.get("/{captcha_id}/status")
async def submission_status(
    captcha_id: str,
    manager: ChallengeManager = Depends(get_manager),
) -> JSONResponse:
    """Public read of the confirmation flag."""
    status = await manager.query_submission_status(captcha_id)
    return write_result(
        StatusRes(scope=status.scope, submit_success=status.confirmed).model_dump(by_alias=True)
    )
