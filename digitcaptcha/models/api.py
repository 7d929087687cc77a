"""Response envelope and payload schemas for the HTTP surface."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class GeneralResult(BaseModel):
    """Envelope wrapping every response. Unset fields are omitted."""

    error_code: int = Field(0, serialization_alias="errorCode")
    error_description: str | None = Field(None, serialization_alias="errorDescription")
    error_param: str | None = Field(None, serialization_alias="errorParam")
    item: str | None = None
    credential: str | None = None
    data: Any = None

    def render(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class CaptchaData(BaseModel):
    width: int
    height: int
    jpeg_base64: str = Field(serialization_alias="jpegBase64")
    phrase_len: int = Field(serialization_alias="phraseLen")


class CaptchaRes(BaseModel):
    captcha_id: str
    expire_time: int
    captcha_data: CaptchaData


class ConfirmRes(BaseModel):
    scope: str


class StatusRes(BaseModel):
    scope: str
    submit_success: bool = Field(serialization_alias="submitSuccess")
