# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Symmetric session tokens.

A token is a Fernet token (AES-CBC plus HMAC-SHA256) over the JSON claims of a
:class:`TokenPayload`. The Fernet key is derived from the configured secret
with HKDF, so any secret string of sufficient length works and the raw secret
is never kept around.
"""

from __future__ import annotations

import base64
import binascii
import json
import re
import uuid
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, NoReturn

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from notes_backend.domain.auth.entities import TokenPayload
from notes_backend.domain.auth.exceptions import (
    ExpiredTokenError,
    InvalidTokenError,
    TokenCreationError,
)
from notes_backend.shared.context import check_deadline
from notes_backend.shared.logging import get_logger

if TYPE_CHECKING:
    from loguru import Logger

    from notes_backend.shared.context import Deadline

MIN_SECRET_LENGTH = 32
MAX_TOKEN_LENGTH = 4096

_KDF_INFO = b"notes-backend/session-token/v1"
_TOKEN_RE = re.compile(r"[A-Za-z0-9_-]+={0,2}")


def _utcnow() -> datetime:
    return datetime.now(UTC)


def derive_fernet_key(secret: str) -> bytes:
    if len(secret) < MIN_SECRET_LENGTH:
        raise ValueError(f"token secret must be at least {MIN_SECRET_LENGTH} characters")
    raw = HKDF(
        algorithm=hashes.SHA256(),
        length=32,
        salt=None,
        info=_KDF_INFO,
    ).derive(secret.encode("utf-8"))
    return base64.urlsafe_b64encode(raw)


class TokenManager:
    def __init__(
        self,
        secret: str,
        *,
        clock: Callable[[], datetime] | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._fernet = Fernet(derive_fernet_key(secret))
        self._clock = clock or _utcnow
        self._logger = logger or get_logger("token_manager")

    def create_token(
        self,
        subject: str,
        duration: timedelta,
        *,
        deadline: Deadline | None = None,
    ) -> tuple[str, TokenPayload]:
        if not isinstance(subject, str) or not subject:
            raise ValueError("subject must be a non-empty string")
        if duration <= timedelta(0):
            raise ValueError("duration must be positive")
        check_deadline(deadline, "token.create")

        issued_at = self._clock()
        try:
            expires_at = issued_at + duration
        except OverflowError as exc:
            raise ValueError("duration out of range") from exc
        payload = TokenPayload(
            token_id=uuid.uuid4(),
            subject=subject,
            issued_at=issued_at,
            expires_at=expires_at,
        )
        claims = json.dumps(payload.to_claims(), separators=(",", ":"), sort_keys=True)
        try:
            token = self._fernet.encrypt_at_time(
                claims.encode("utf-8"), int(issued_at.timestamp())
            ).decode("ascii")
        except (OSError, ValueError, TypeError) as exc:
            self._logger.error(f"token.create: encryption failed ({type(exc).__name__})")
            raise TokenCreationError() from exc

        self._logger.debug(
            f"token.create: issued jti={payload.token_id} sub={subject} "
            f"exp={payload.expires_at.isoformat()}"
        )
        return token, payload

    def verify_token(self, token: str, *, deadline: Deadline | None = None) -> TokenPayload:
        check_deadline(deadline, "token.verify")

        if not self._is_well_formed(token):
            self._reject("malformed")

        try:
            claims_raw = self._fernet.decrypt(token.encode("ascii"))
        except InvalidToken:
            self._reject("authentication failed")

        try:
            claims = json.loads(claims_raw.decode("utf-8"))
            payload = TokenPayload.from_claims(claims)
        except (ValueError, KeyError, TypeError, UnicodeDecodeError):
            self._reject("unreadable claims")

        if payload.is_expired(self._clock()):
            self._logger.info(
                f"token.verify: expired jti={payload.token_id} "
                f"exp={payload.expires_at.isoformat()}"
            )
            raise ExpiredTokenError()

        return payload

    @staticmethod
    def _is_well_formed(token: object) -> bool:
        if not isinstance(token, str) or not token or len(token) > MAX_TOKEN_LENGTH:
            return False
        if not _TOKEN_RE.fullmatch(token):
            return False
        # Reject non-canonical base64 so that unused trailing bits cannot be
        # flipped without changing the decoded bytes.
        try:
            decoded = base64.urlsafe_b64decode(token)
        except (binascii.Error, ValueError):
            return False
        return base64.urlsafe_b64encode(decoded).decode("ascii") == token

    def _reject(self, reason: str) -> NoReturn:
        self._logger.warning(f"token.verify: rejected ({reason})")
        raise InvalidTokenError()


__all__ = ["MAX_TOKEN_LENGTH", "MIN_SECRET_LENGTH", "TokenManager", "derive_fernet_key"]
