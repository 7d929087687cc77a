"""Timing-safe shared secret comparison."""

from __future__ import annotations

import hashlib
import hmac
import secrets

# Per-process key so digests of equal inputs match but reveal nothing else
_DIGEST_KEY = secrets.token_bytes(32)


def _digest(value: bytes) -> bytes:
    return hmac.new(_DIGEST_KEY, value, hashlib.sha256).digest()


def secrets_match(expected: str | bytes, supplied: str | bytes) -> bool:
    """Compare two secrets in constant time.

    Both values are reduced to fixed-length HMAC digests before
    ``hmac.compare_digest``, so neither the position of the first differing
    byte nor a difference in length changes the run time.
    """
    if isinstance(expected, str):
        expected = expected.encode()
    if isinstance(supplied, str):
        supplied = supplied.encode()
    return hmac.compare_digest(_digest(expected), _digest(supplied))
