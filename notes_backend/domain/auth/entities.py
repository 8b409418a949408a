# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any


@dataclass(slots=True, frozen=True)
class TokenPayload:
    """Claims carried inside a session token.

    Built once by the token manager at login and rebuilt from the token on
    every protected request. Nothing about it is stored server-side.
    """

    token_id: uuid.UUID
    subject: str
    issued_at: datetime
    expires_at: datetime

    @property
    def lifetime(self) -> timedelta:
        return self.expires_at - self.issued_at

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def to_claims(self) -> dict[str, str]:
        return {
            "jti": str(self.token_id),
            "sub": self.subject,
            "iat": self.issued_at.isoformat(),
            "exp": self.expires_at.isoformat(),
        }

    @classmethod
    def from_claims(cls, claims: Mapping[str, Any]) -> TokenPayload:
        subject = claims["sub"]
        if not isinstance(subject, str) or not subject:
            raise ValueError("subject claim must be a non-empty string")
        issued_at = _parse_timestamp(claims["iat"])
        expires_at = _parse_timestamp(claims["exp"])
        if expires_at < issued_at:
            raise ValueError("token expires before it was issued")
        return cls(
            token_id=uuid.UUID(str(claims["jti"])),
            subject=subject,
            issued_at=issued_at,
            expires_at=expires_at,
        )


def _parse_timestamp(value: Any) -> datetime:
    if not isinstance(value, str):
        raise ValueError("timestamp claims must be ISO-8601 strings")
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        raise ValueError("timestamp claims must carry a timezone")
    return parsed.astimezone(UTC)
