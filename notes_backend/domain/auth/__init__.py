# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import TokenPayload
from .exceptions import (
    ExpiredTokenError,
    InvalidTokenError,
    MissingTokenError,
    PasswordHashingError,
    PasswordMismatchError,
    PasswordTooShortError,
    TokenCreationError,
    TokenError,
)

__all__ = [
    "ExpiredTokenError",
    "InvalidTokenError",
    "MissingTokenError",
    "PasswordHashingError",
    "PasswordMismatchError",
    "PasswordTooShortError",
    "TokenCreationError",
    "TokenError",
    "TokenPayload",
]
