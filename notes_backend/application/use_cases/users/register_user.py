# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import TYPE_CHECKING

from notes_backend.domain.users.entities import NewUser
from notes_backend.domain.users.repositories import PasswordHasher, UserRegistrar
from notes_backend.shared.logging import get_logger

if TYPE_CHECKING:
    from loguru import Logger

    from notes_backend.shared.context import Deadline


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRegistrar,
        password_hasher: PasswordHasher,
        logger: Logger | None = None,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._logger = logger or get_logger("register_user")

    def execute(self, deadline: Deadline, username: str, password: str, email: str) -> str:
        hashed = self._password_hasher.hash(password, deadline=deadline)
        registered = self._users.register_user(
            deadline, NewUser(username=username, password_hash=hashed, email=email)
        )
        self._logger.info(f"auth.register: ok username={registered}")
        return registered
