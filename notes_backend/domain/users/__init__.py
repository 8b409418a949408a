# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Credential, NewUser
from .exceptions import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
    UserStoreError,
)
from .repositories import PasswordHasher, UserLookup, UserRegistrar, UserStore

__all__ = [
    "Credential",
    "InvalidCredentialsError",
    "NewUser",
    "PasswordHasher",
    "UserAlreadyExistsError",
    "UserLookup",
    "UserNotFoundError",
    "UserRegistrar",
    "UserStore",
    "UserStoreError",
]
