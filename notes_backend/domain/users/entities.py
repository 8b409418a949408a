# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class Credential:
    """Stored login data for one user, as read back from the user store."""

    username: str
    password_hash: str = field(repr=False)
    email: str = ""


@dataclass(slots=True, frozen=True)
class NewUser:
    """Registration data handed to the user store."""

    username: str
    password_hash: str = field(repr=False)
    email: str
