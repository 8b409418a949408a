# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from flask import Request, Response

SESSION_COOKIE_NAME = "paseto"
SESSION_COOKIE_PATH = "/"
_EPOCH = datetime.fromtimestamp(0, tz=UTC)


class SessionCookieCodec:
    """Carries the session token in an ``HttpOnly`` + ``Secure`` cookie.

    Clearing only tells the browser to drop the cookie. The token itself stays
    valid until it expires.
    """

    def __init__(
        self,
        name: str = SESSION_COOKIE_NAME,
        *,
        samesite: str = "Strict",
        path: str = SESSION_COOKIE_PATH,
    ) -> None:
        if samesite not in ("Strict", "Lax"):
            raise ValueError("samesite must be Strict or Lax")
        self._name = name
        self._samesite = samesite
        self._path = path

    @property
    def name(self) -> str:
        return self._name

    def write(self, response: Response, token: str, expires_at: datetime) -> None:
        response.set_cookie(
            self._name,
            token,
            expires=expires_at,
            path=self._path,
            httponly=True,
            secure=True,
            samesite=self._samesite,
        )

    def clear(self, response: Response) -> None:
        response.set_cookie(
            self._name,
            "",
            expires=_EPOCH,
            path=self._path,
            httponly=True,
            secure=True,
            samesite=self._samesite,
        )

    def read(self, request: Request) -> str | None:
        return request.cookies.get(self._name) or None


__all__ = ["SESSION_COOKIE_NAME", "SessionCookieCodec"]
