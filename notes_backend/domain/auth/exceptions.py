# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Error families of the authentication core.

Every token verification failure shares one public code so clients cannot
tell tampered, expired and missing tokens apart. ``reason`` keeps the
distinction for logs.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import ClassVar

from notes_backend.shared.errors.base import DomainError, InfrastructureError


# Password hashing ------------------------------------------------------------


class PasswordTooShortError(DomainError):
    code = "password_too_short"
    status = HTTPStatus.BAD_REQUEST

    def __init__(self, min_length: int) -> None:
        super().__init__(context={"min_length": min_length})


class PasswordMismatchError(DomainError):
    code = "password_mismatch"
    status = HTTPStatus.UNAUTHORIZED


class PasswordHashingError(InfrastructureError):
    code = "password_hashing_failed"


# Session tokens --------------------------------------------------------------


class TokenError(DomainError):
    code = "unauthenticated"
    status = HTTPStatus.UNAUTHORIZED
    reason: ClassVar[str] = "unauthenticated"


class InvalidTokenError(TokenError):
    reason = "invalid"


class ExpiredTokenError(TokenError):
    reason = "expired"


class MissingTokenError(TokenError):
    reason = "missing"


class TokenCreationError(InfrastructureError):
    code = "token_creation_failed"
