# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from notes_backend.application.services.password_hashing import WerkzeugPasswordHasher
from notes_backend.application.use_cases.users.login_user import LoginUserUseCase
from notes_backend.application.use_cases.users.register_user import RegisterUserUseCase
from notes_backend.domain.users.repositories import PasswordHasher, UserStore
from notes_backend.infrastructure.auth.token_manager import TokenManager
from notes_backend.infrastructure.db import build_engine, build_session_factory
from notes_backend.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from notes_backend.interfaces.http.controllers.auth_controller import AuthController
from notes_backend.interfaces.http.cookies import SessionCookieCodec
from notes_backend.shared.config import AppConfig
from notes_backend.shared.logging import get_logger
from notes_backend.shared.middleware.auth import AuthMiddleware


class Container:
    def __init__(
        self,
        config: AppConfig,
        *,
        clock: Callable[[], datetime] | None = None,
        password_hasher: PasswordHasher | None = None,
        users: UserStore | None = None,
    ) -> None:
        self._config = config
        self._clock = clock
        self._password_hasher_override = password_hasher
        self._users_override = users

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def uses_database(self) -> bool:
        return self._users_override is None

    @cached_property
    def engine(self) -> Engine:
        return build_engine(self._config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return build_session_factory(self.engine)

    @cached_property
    def password_hasher(self) -> PasswordHasher:
        if self._password_hasher_override is not None:
            return self._password_hasher_override
        return WerkzeugPasswordHasher(
            min_length=self._config.min_password_length,
            logger=get_logger("password_hasher"),
        )

    @cached_property
    def token_manager(self) -> TokenManager:
        return TokenManager(
            self._config.token_secret,
            clock=self._clock,
            logger=get_logger("token_manager"),
        )

    @cached_property
    def session_cookies(self) -> SessionCookieCodec:
        return SessionCookieCodec(samesite=self._config.security.cookie_samesite)

    @cached_property
    def auth_middleware(self) -> AuthMiddleware:
        return AuthMiddleware(
            self.token_manager,
            self._config.access_token_duration,
            cookies=self.session_cookies,
            logger=get_logger("auth_middleware"),
        )

    @cached_property
    def user_repository(self) -> UserStore:
        if self._users_override is not None:
            return self._users_override
        return SqlAlchemyUserRepository(self.session_factory, logger=get_logger("user_repository"))

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            logger=get_logger("register_user"),
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            tokens=self.token_manager,
            token_duration=self._config.access_token_duration,
            logger=get_logger("login_user"),
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            cookies=self.session_cookies,
            auth_middleware=self.auth_middleware,
            logger=get_logger("auth_controller"),
        )
