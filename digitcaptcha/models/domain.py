"""Core domain types for challenges."""

from __future__ import annotations

import base64
from dataclasses import dataclass

DEFAULT_WIDTH = 150
DEFAULT_HEIGHT = 40


def _positive_int(value: str | int | None) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if value is None or not (value.isascii() and value.isdigit()):
        return None
    parsed = int(value)
    return parsed if parsed > 0 else None


@dataclass(frozen=True)
class ImageSize:
    """Rendering dimensions of a challenge image."""

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT

    @classmethod
    def parse(cls, width: str | int | None, height: str | int | None) -> ImageSize:
        """Build a size from optional caller input.

        Both values are used verbatim when they are positive integers.
        Otherwise, whether missing or malformed, the defaults apply.
        """
        w = _positive_int(width)
        h = _positive_int(height)
        if w is None or h is None:
            return cls()
        return cls(width=w, height=h)


@dataclass(frozen=True)
class Challenge:
    """A freshly issued challenge, as returned to the caller."""

    id: str
    digits: str
    image: bytes
    size: ImageSize
    expires_at: int  # Unix seconds

    @property
    def image_base64(self) -> str:
        return base64.b64encode(self.image).decode("ascii")

    @property
    def phrase_length(self) -> int:
        return len(self.digits)


@dataclass(frozen=True)
class SubmissionStatus:
    """Public view of whether a challenge was confirmed."""

    scope: str
    confirmed: bool
