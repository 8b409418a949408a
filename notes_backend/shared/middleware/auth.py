# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Gate for protected routes.

Each request moves from "no token" to "extracting" and ends either verified
(the view runs with ``g.username`` set) or rejected (401 raised before the
view). Only the session cookie is accepted as the token carrier.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta
from functools import wraps
from typing import TYPE_CHECKING, Any

from flask import Blueprint, g, request

from notes_backend.domain.auth.entities import TokenPayload
from notes_backend.domain.auth.exceptions import (
    InvalidTokenError,
    MissingTokenError,
    TokenError,
)
from notes_backend.shared.context import current_deadline
from notes_backend.shared.logging import get_logger

if TYPE_CHECKING:
    from loguru import Logger

    from notes_backend.infrastructure.auth.token_manager import TokenManager
    from notes_backend.interfaces.http.cookies import SessionCookieCodec


class AuthMiddleware:
    def __init__(
        self,
        token_manager: TokenManager,
        token_duration: timedelta,
        *,
        cookies: SessionCookieCodec,
        logger: Logger | None = None,
    ) -> None:
        if token_duration <= timedelta(0):
            raise ValueError("token_duration must be positive")
        self._tokens = token_manager
        self._token_duration = token_duration
        self._cookies = cookies
        self._logger = logger or get_logger("auth_middleware")

    def authenticate(self) -> TokenPayload:
        token = self._cookies.read(request)
        if not token:
            self._logger.info(f"auth: rejected (missing) on {request.method} {request.path}")
            raise MissingTokenError()

        try:
            payload = self._tokens.verify_token(token, deadline=current_deadline())
            if payload.lifetime > self._token_duration:
                self._logger.warning(
                    f"auth: token lifetime {payload.lifetime} exceeds policy "
                    f"{self._token_duration} jti={payload.token_id}"
                )
                raise InvalidTokenError()
        except TokenError as exc:
            self._logger.info(
                f"auth: rejected ({exc.reason}) on {request.method} {request.path}"
            )
            raise

        g.auth = payload
        g.username = payload.subject
        self._logger.debug(f"auth: ok user={payload.subject} {request.method} {request.path}")
        return payload

    def __call__(self, view: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(view)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            self.authenticate()
            return view(*args, **kwargs)

        return wrapper

    def protect(self, blueprint: Blueprint) -> Blueprint:
        @blueprint.before_request
        def _require_session() -> None:
            self.authenticate()

        return blueprint


def current_subject() -> str:
    username = getattr(g, "username", None)
    if not username:
        raise MissingTokenError()
    return username


def current_payload() -> TokenPayload:
    payload = getattr(g, "auth", None)
    if payload is None:
        raise MissingTokenError()
    return payload


__all__ = ["AuthMiddleware", "current_payload", "current_subject"]
