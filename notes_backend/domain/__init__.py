# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .auth import TokenError, TokenPayload
from .users import Credential, NewUser, PasswordHasher, UserLookup, UserRegistrar, UserStore

__all__ = [
    "Credential",
    "NewUser",
    "PasswordHasher",
    "TokenError",
    "TokenPayload",
    "UserLookup",
    "UserRegistrar",
    "UserStore",
]
