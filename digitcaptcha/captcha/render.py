"""Digit image rendering."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

import structlog
from captcha.image import ImageCaptcha

if TYPE_CHECKING:
    from digitcaptcha.models.domain import ImageSize

logger = structlog.get_logger(__name__)

JPEG_QUALITY = 75


def render_jpeg(digits: str, size: ImageSize) -> bytes:
    """Draw ``digits`` as a distorted captcha image and return JPEG bytes."""
    generator = ImageCaptcha(width=size.width, height=size.height)
    image = generator.generate_image(digits)
    buf = io.BytesIO()
    image.convert("RGB").save(buf, format="JPEG", quality=JPEG_QUALITY)
    data = buf.getvalue()
    logger.debug("captcha_rendered", width=size.width, height=size.height, size=len(data))
    return data
