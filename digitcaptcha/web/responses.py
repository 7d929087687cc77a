"""Envelope rendering and error mapping for the HTTP surface."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from fastapi.responses import JSONResponse

from digitcaptcha.exceptions import (
    CaptchaError,
    CredentialMismatch,
    InternalError,
    InvalidParameter,
    NotFound,
)
from digitcaptcha.models.api import GeneralResult

if TYPE_CHECKING:
    from fastapi import Request

logger = structlog.get_logger(__name__)

_HTTP_STATUS: dict[type[CaptchaError], int] = {
    InvalidParameter: 400,
    NotFound: 404,
    CredentialMismatch: 403,
    InternalError: 500,
}


def write_result(data: Any = None, status_code: int = 200) -> JSONResponse:
    """Wrap a successful payload in the envelope."""
    return JSONResponse(GeneralResult(data=data).render(), status_code=status_code)


def error_result(exc: CaptchaError) -> GeneralResult:
    """Build the envelope for a failure, naming the field at fault."""
    result = GeneralResult(error_code=exc.code, error_description=exc.description)
    if isinstance(exc, InvalidParameter):
        result.error_param = exc.field
    elif isinstance(exc, CredentialMismatch):
        result.credential = exc.field
    elif isinstance(exc, NotFound):
        result.item = exc.field
    return result


async def captcha_error_handler(request: Request, exc: CaptchaError) -> JSONResponse:
    """Render any CaptchaError raised by a route into the envelope."""
    status_code = _HTTP_STATUS.get(type(exc), 500)
    if status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=exc.description)
    else:
        logger.info("request_rejected", path=request.url.path, code=exc.code, field=exc.field)
    return JSONResponse(error_result(exc).render(), status_code=status_code)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render anything else as an internal error, keeping the envelope shape."""
    logger.error(
        "request_crashed", path=request.url.path, error_type=type(exc).__name__, exc_info=exc
    )
    return JSONResponse(error_result(InternalError()).render(), status_code=500)
