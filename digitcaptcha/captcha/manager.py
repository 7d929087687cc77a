"""Challenge lifecycle: creation, answer verification and submission confirmation."""

from __future__ import annotations

import asyncio
import time
import uuid
from typing import TYPE_CHECKING

import structlog

from digitcaptcha.captcha.digits import normalize_phrase, random_digits
from digitcaptcha.captcha.render import render_jpeg
from digitcaptcha.captcha.secret import secrets_match
from digitcaptcha.exceptions import (
    CredentialMismatch,
    InternalError,
    InvalidParameter,
    NotFound,
    PhraseFormatError,
    StoreError,
)
from digitcaptcha.models.domain import Challenge, ImageSize, SubmissionStatus

if TYPE_CHECKING:
    from collections.abc import Callable

    from digitcaptcha.store.base import ExpiringStore

logger = structlog.get_logger(__name__)

# Lifetime of every challenge record. Not configurable.
CHALLENGE_TTL = 10 * 60

SCOPE_SUFFIX = ".scope"
STATUS_SUFFIX = ".status"
CONFIRMED = "1"


class ChallengeManager:
    """Orchestrates the challenge lifecycle on top of an ExpiringStore.

    Records for a challenge ``id``:

    - ``id`` holds the answer digits
    - ``id.scope`` holds the caller's scope tag
    - ``id.status`` is ``"1"`` once a privileged caller confirmed it
    """

    def __init__(
        self,
        store: ExpiringStore,
        secret: str,
        *,
        digit_source: Callable[[], str] = random_digits,
        renderer: Callable[[str, ImageSize], bytes] = render_jpeg,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            msg = "secret must not be empty"
            raise ValueError(msg)
        self._store = store
        self._secret = secret
        self._digit_source = digit_source
        self._renderer = renderer
        self._clock = clock

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    async def create_challenge(
        self,
        scope: str,
        width: str | int | None = None,
        height: str | int | None = None,
    ) -> Challenge:
        """Issue a new challenge tied to ``scope``."""
        if not scope:
            raise InvalidParameter("scope")

        captcha_id = str(uuid.uuid4())
        digits = self._digit_source()
        size = ImageSize.parse(width, height)

        # Render before writing so a failed render leaves no live challenge
        try:
            image = await asyncio.to_thread(self._renderer, digits, size)
        except (OSError, ValueError, MemoryError) as e:
            logger.error("captcha_render_failed", captcha_id=captcha_id, error=str(e))
            raise InternalError(description=str(e)) from e

        try:
            await self._store.set(captcha_id, digits, CHALLENGE_TTL)
            await self._store.set(captcha_id + SCOPE_SUFFIX, scope, CHALLENGE_TTL)
        except StoreError as e:
            raise InternalError(description=str(e)) from e
        expires_at = int(self._clock() + CHALLENGE_TTL)

        logger.info(
            "captcha_created",
            captcha_id=captcha_id,
            scope=scope,
            width=size.width,
            height=size.height,
        )
        return Challenge(
            id=captcha_id,
            digits=digits,
            image=image,
            size=size,
            expires_at=expires_at,
        )

    # ------------------------------------------------------------------
    # Untrusted verification
    # ------------------------------------------------------------------

    async def verify_answer(self, captcha_id: str, phrase: str) -> bool:
        """Check a submitted phrase against the stored answer.

        Read only: the challenge stays live and its status is untouched.
        Returns True on a match and raises otherwise.
        """
        if not captcha_id:
            raise InvalidParameter("captcha_id")
        if not phrase:
            raise InvalidParameter("phrase")

        if not await self._challenge_exists(captcha_id):
            raise NotFound("captcha_id")
        answer = await self._read(captcha_id)
        if not answer:
            raise NotFound("captcha_id")

        try:
            submitted = normalize_phrase(phrase)
        except PhraseFormatError as e:
            raise InvalidParameter("phrase", description="Phrase Format Error") from e

        if submitted != answer:
            logger.info("captcha_phrase_mismatch", captcha_id=captcha_id)
            raise CredentialMismatch("phrase", description="Phrase Not correct")

        logger.info("captcha_phrase_matched", captcha_id=captcha_id)
        return True

    # ------------------------------------------------------------------
    # Privileged confirmation
    # ------------------------------------------------------------------

    async def confirm_submission(self, captcha_id: str, secret: str) -> str:
        """Mark a challenge as confirmed and return its scope.

        The secret is checked before the store is touched, so an
        unauthenticated caller learns nothing about which ids exist.
        The digit answer is not checked here.
        """
        if not captcha_id:
            raise InvalidParameter("captcha_id")
        if not secret:
            raise InvalidParameter("secret_phrase")

        if not secrets_match(self._secret, secret):
            logger.warning("captcha_secret_mismatch", captcha_id=captcha_id)
            raise CredentialMismatch("secret_phrase", description="Secret Phrase Not correct")

        if not await self._challenge_exists(captcha_id):
            raise NotFound("captcha_id")
        scope = await self._read(captcha_id + SCOPE_SUFFIX)
        if scope is None:
            raise NotFound("captcha_id")

        try:
            await self._store.set(captcha_id + STATUS_SUFFIX, CONFIRMED, CHALLENGE_TTL)
        except StoreError as e:
            raise InternalError(description=str(e)) from e

        logger.info("captcha_confirmed", captcha_id=captcha_id, scope=scope)
        return scope

    # ------------------------------------------------------------------
    # Public status
    # ------------------------------------------------------------------

    async def query_submission_status(self, captcha_id: str) -> SubmissionStatus:
        """Report whether a challenge was confirmed. Never raises NotFound."""
        if not captcha_id:
            raise InvalidParameter("captcha_id")

        try:
            confirmed = await self._store.get(captcha_id + STATUS_SUFFIX) == CONFIRMED
        except StoreError as e:
            logger.warning("captcha_status_read_failed", captcha_id=captcha_id, error=str(e))
            confirmed = False

        try:
            scope = await self._store.get(captcha_id + SCOPE_SUFFIX) or ""
        except StoreError as e:
            logger.warning("captcha_scope_read_failed", captcha_id=captcha_id, error=str(e))
            scope = ""

        return SubmissionStatus(scope=scope, confirmed=confirmed)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _challenge_exists(self, captcha_id: str) -> bool:
        """A challenge is live only while both its answer and scope records exist."""
        try:
            return await self._store.exists(captcha_id) and await self._store.exists(
                captcha_id + SCOPE_SUFFIX
            )
        except StoreError as e:
            raise InternalError(description=str(e)) from e

    async def _read(self, key: str) -> str | None:
        try:
            return await self._store.get(key)
        except StoreError as e:
            raise InternalError(description=str(e)) from e
