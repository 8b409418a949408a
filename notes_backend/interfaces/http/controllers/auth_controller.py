# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import TYPE_CHECKING

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from notes_backend.application.use_cases.users.login_user import LoginUserUseCase
from notes_backend.application.use_cases.users.register_user import RegisterUserUseCase
from notes_backend.interfaces.http.cookies import SessionCookieCodec
from notes_backend.interfaces.http.dto.auth import (
    AuthSuccessDTO,
    LoginRequestDTO,
    RegisterRequestDTO,
    WhoAmIDTO,
)
from notes_backend.shared.context import DEFAULT_REQUEST_TIMEOUT, Deadline, current_deadline
from notes_backend.shared.errors.validation import raise_validation_error
from notes_backend.shared.logging import get_logger
from notes_backend.shared.middleware.auth import AuthMiddleware, current_payload

if TYPE_CHECKING:
    from loguru import Logger


def _request_deadline() -> Deadline:
    # Blueprints mounted without the request hooks fall back to the default budget
    return current_deadline() or Deadline.after(DEFAULT_REQUEST_TIMEOUT)


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        cookies: SessionCookieCodec,
        auth_middleware: AuthMiddleware,
        logger: Logger | None = None,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._cookies = cookies
        self._auth_middleware = auth_middleware
        self._logger = logger or get_logger("auth_controller")

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        username = self._register_use_case.execute(
            _request_deadline(), dto.username, dto.password, dto.email
        )

        payload = AuthSuccessDTO(username=username).model_dump(mode="json", exclude_none=True)
        return jsonify(payload), 201

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        token, token_payload = self._login_use_case.execute(
            _request_deadline(), dto.username, dto.password
        )

        payload = AuthSuccessDTO(
            username=token_payload.subject, expires_at=token_payload.expires_at
        ).model_dump(mode="json", exclude_none=True)
        response = jsonify(payload)
        self._cookies.write(response, token, token_payload.expires_at)
        return response, 200

    def logout(self) -> tuple[Response, int]:
        response = jsonify(AuthSuccessDTO().model_dump(mode="json", exclude_none=True))
        self._cookies.clear(response)
        self._logger.info("auth.logout: ok")
        return response, 200

    def whoami(self) -> tuple[Response, int]:
        token_payload = current_payload()
        payload = WhoAmIDTO(
            username=token_payload.subject,
            issued_at=token_payload.issued_at,
            expires_at=token_payload.expires_at,
        ).model_dump(mode="json")
        return jsonify(payload), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule(
            "/me", endpoint="whoami", view_func=self._auth_middleware(self.whoami), methods=["GET"]
        )
        return bp
