"""Exception hierarchy for digitcaptcha.

Every failure a caller can observe is a ``CaptchaError`` carrying the numeric
envelope code, a short description and, where relevant, the field at fault.
"""

from __future__ import annotations

UNKNOWN_INNER_ERROR = 1
ITEM_DOES_NOT_EXIST = 2
CREDENTIAL_NOT_MATCH = 14
REQUEST_PARAM_FORMAT_ERROR = 20


class CaptchaError(Exception):
    """Base exception for all errors reported to callers."""

    code: int = UNKNOWN_INNER_ERROR
    default_description: str = "Unknown Inner Error"

    def __init__(self, field: str | None = None, description: str | None = None) -> None:
        self.field = field
        self.description = description or self.default_description
        super().__init__(self.description)


class InvalidParameter(CaptchaError):
    """Raised when caller input is missing or unparseable."""

    code = REQUEST_PARAM_FORMAT_ERROR
    default_description = "No Enough Params"


class NotFound(CaptchaError):
    """Raised when the referenced challenge is absent or expired."""

    code = ITEM_DOES_NOT_EXIST
    default_description = "Items Not Exists"


class CredentialMismatch(CaptchaError):
    """Raised when a phrase or secret does not match."""

    code = CREDENTIAL_NOT_MATCH
    default_description = "Credential Not Match"


class InternalError(CaptchaError):
    """Raised when the store or the renderer fails."""

    code = UNKNOWN_INNER_ERROR


class StoreError(Exception):
    """Raised by store backends on transport failures."""


class PhraseFormatError(ValueError):
    """Raised when a submitted phrase contains a forbidden character."""
