"""Random digit generation and submitted phrase normalization."""

from __future__ import annotations

import secrets

from digitcaptcha.exceptions import PhraseFormatError

PHRASE_LENGTH = 5

_DIGITS = "0123456789"
_SEPARATORS = frozenset(" ,")


def random_digits(length: int = PHRASE_LENGTH) -> str:
    """Return ``length`` uniformly random decimal digits."""
    return "".join(secrets.choice(_DIGITS) for _ in range(length))


def normalize_phrase(phrase: str) -> str:
    """Strip separators from a submitted phrase.

    Spaces and commas are dropped. Any character that is neither an ASCII
    digit nor a separator rejects the whole phrase.

    Raises:
        PhraseFormatError: if the phrase contains a forbidden character.
    """
    digits: list[str] = []
    for ch in phrase:
        if ch in _DIGITS:
            digits.append(ch)
        elif ch not in _SEPARATORS:
            msg = f"Unexpected character at position {len(digits)}"
            raise PhraseFormatError(msg)
    return "".join(digits)
