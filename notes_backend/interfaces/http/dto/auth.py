from __future__ import annotations

import re
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _check_printable(value: str) -> str:
    if not value.isprintable() or value != value.strip():
        raise ValueError("username must be printable without surrounding whitespace")
    return value


class RegisterRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    # Length policy is enforced by the password hasher so it stays configurable
    password: str = Field(min_length=1, max_length=128)
    email: str = Field(min_length=3, max_length=255)

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        return _check_printable(value)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        if not _EMAIL_RE.match(value):
            raise ValueError("email must look like name@domain.tld")
        return value


class LoginRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)


class AuthSuccessDTO(BaseModel):
    ok: bool = True
    username: str | None = None
    expires_at: datetime | None = None


class WhoAmIDTO(BaseModel):
    username: str
    issued_at: datetime
    expires_at: datetime
