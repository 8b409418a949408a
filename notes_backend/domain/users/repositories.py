# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from .entities import Credential, NewUser

if TYPE_CHECKING:
    from notes_backend.shared.context import Deadline


class UserLookup(Protocol):
    def get_user(self, deadline: Deadline, username: str) -> Credential: ...


class UserRegistrar(Protocol):
    def register_user(self, deadline: Deadline, new_user: NewUser) -> str: ...


class PasswordHasher(Protocol):
    def hash(self, password: str, *, deadline: Deadline | None = None) -> str: ...
    def validate(
        self, stored_hash: str, candidate: str, *, deadline: Deadline | None = None
    ) -> None: ...


class UserStore(UserLookup, UserRegistrar, Protocol):
    pass
