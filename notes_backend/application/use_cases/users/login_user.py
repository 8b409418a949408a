# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from datetime import timedelta
from typing import TYPE_CHECKING

from notes_backend.domain.auth.entities import TokenPayload
from notes_backend.domain.auth.exceptions import PasswordMismatchError, PasswordTooShortError
from notes_backend.domain.users.exceptions import InvalidCredentialsError, UserNotFoundError
from notes_backend.domain.users.repositories import PasswordHasher, UserLookup
from notes_backend.shared.logging import get_logger

if TYPE_CHECKING:
    from loguru import Logger

    from notes_backend.infrastructure.auth.token_manager import TokenManager
    from notes_backend.shared.context import Deadline


class LoginUserUseCase:
    """Checks a username/password pair and issues a session token.

    Unknown users, wrong passwords and candidates below the length policy all
    end in the same :class:`InvalidCredentialsError`, so a caller cannot probe
    which usernames exist. Unknown users are checked against a placeholder hash
    from the same hasher so both paths pay the same hashing cost.
    """

    def __init__(
        self,
        *,
        users: UserLookup,
        password_hasher: PasswordHasher,
        tokens: TokenManager,
        token_duration: timedelta,
        logger: Logger | None = None,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._tokens = tokens
        self._token_duration = token_duration
        self._logger = logger or get_logger("login_user")
        self._placeholder_hash = password_hasher.hash(secrets.token_urlsafe(32))

    def execute(self, deadline: Deadline, username: str, password: str) -> tuple[str, TokenPayload]:
        try:
            credential = self._users.get_user(deadline, username)
        except UserNotFoundError as exc:
            self._logger.info(f"auth.login: unknown user {username}")
            self._burn_hash(deadline, password)
            raise InvalidCredentialsError() from exc

        try:
            self._password_hasher.validate(credential.password_hash, password, deadline=deadline)
        except (PasswordMismatchError, PasswordTooShortError) as exc:
            self._logger.info(f"auth.login: wrong password for user {username}")
            raise InvalidCredentialsError() from exc

        token, payload = self._tokens.create_token(
            credential.username, self._token_duration, deadline=deadline
        )
        self._logger.info(
            f"auth.login: ok username={credential.username} exp={payload.expires_at.isoformat()}"
        )
        return token, payload

    def _burn_hash(self, deadline: Deadline, password: str) -> None:
        try:
            self._password_hasher.validate(self._placeholder_hash, password, deadline=deadline)
        except (PasswordMismatchError, PasswordTooShortError):
            # Never matches, only the cost counts
            return
