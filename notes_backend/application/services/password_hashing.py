# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Password hashing strategies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from werkzeug.security import check_password_hash, generate_password_hash

from notes_backend.domain.auth.exceptions import (
    PasswordHashingError,
    PasswordMismatchError,
    PasswordTooShortError,
)
from notes_backend.domain.users.repositories import PasswordHasher
from notes_backend.shared.context import check_deadline
from notes_backend.shared.logging import get_logger

if TYPE_CHECKING:
    from loguru import Logger

    from notes_backend.shared.context import Deadline

DEFAULT_MIN_LENGTH = 5
# werkzeug's scrypt defaults (N=32768, r=8, p=1) are the brute-force deterrent;
# do not lower them outside of tests.
DEFAULT_METHOD = "scrypt"
DEFAULT_SALT_LENGTH = 16


class WerkzeugPasswordHasher(PasswordHasher):
    """Hashes passwords into self-describing ``method$salt$hash`` strings.

    The algorithm and cost parameters travel inside the hash, so a stored
    hash can be validated without knowing how this instance is configured.
    """

    def __init__(
        self,
        *,
        min_length: int = DEFAULT_MIN_LENGTH,
        method: str = DEFAULT_METHOD,
        salt_length: int = DEFAULT_SALT_LENGTH,
        logger: Logger | None = None,
    ) -> None:
        if min_length < 1:
            raise ValueError("min_length must be positive")
        self._min_length = min_length
        self._method = method
        self._salt_length = salt_length
        self._logger = logger or get_logger("password_hasher")

    @property
    def min_length(self) -> int:
        return self._min_length

    def hash(self, password: str, *, deadline: Deadline | None = None) -> str:
        check_deadline(deadline, "password.hash")
        self._check_length(password)
        try:
            return str(
                generate_password_hash(
                    password, method=self._method, salt_length=self._salt_length
                )
            )
        except (ValueError, TypeError, OSError) as exc:
            self._logger.error(f"password.hash: {type(exc).__name__} from {self._method}")
            raise PasswordHashingError() from exc

    def validate(
        self, stored_hash: str, candidate: str, *, deadline: Deadline | None = None
    ) -> None:
        check_deadline(deadline, "password.validate")
        self._check_length(candidate)

        if not isinstance(stored_hash, str) or stored_hash.count("$") < 2:
            self._logger.error("password.validate: stored hash is malformed")
            raise PasswordHashingError()

        try:
            matches = check_password_hash(stored_hash, candidate)
        except (ValueError, TypeError) as exc:
            self._logger.error(
                f"password.validate: cannot evaluate stored hash ({type(exc).__name__})"
            )
            raise PasswordHashingError() from exc

        if not matches:
            raise PasswordMismatchError()

    def _check_length(self, password: str) -> None:
        if len(password) < self._min_length:
            raise PasswordTooShortError(self._min_length)


__all__ = ["DEFAULT_METHOD", "DEFAULT_MIN_LENGTH", "WerkzeugPasswordHasher"]
