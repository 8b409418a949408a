# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select, text
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from notes_backend.domain.users.entities import Credential, NewUser
from notes_backend.domain.users.exceptions import (
    UserAlreadyExistsError,
    UserNotFoundError,
    UserStoreError,
)
from notes_backend.domain.users.repositories import UserStore
from notes_backend.infrastructure.db.models import User
from notes_backend.infrastructure.db.session import session_scope
from notes_backend.shared.errors.base import DeadlineExceededError
from notes_backend.shared.logging import get_logger

if TYPE_CHECKING:
    from loguru import Logger

    from notes_backend.shared.context import Deadline


class SqlAlchemyUserRepository(UserStore):
    def __init__(
        self, session_factory: sessionmaker[Session], *, logger: Logger | None = None
    ) -> None:
        self._session_factory = session_factory
        self._logger = logger or get_logger("user_repository")

    def register_user(self, deadline: Deadline, new_user: NewUser) -> str:
        deadline.check("users.register")
        try:
            with session_scope(self._session_factory, self._logger) as session:
                self._bound_statement_time(session, deadline)
                row = User(
                    username=new_user.username,
                    email=new_user.email,
                    password_hash=new_user.password_hash,
                )
                session.add(row)
                session.flush()
                username = row.username
        except IntegrityError as exc:
            self._logger.info(f"users.register: duplicate username or email for {new_user.username}")
            raise UserAlreadyExistsError() from exc
        except SQLAlchemyError as exc:
            raise self._store_error("users.register", deadline, exc) from exc

        deadline.check("users.register")
        return username

    def get_user(self, deadline: Deadline, username: str) -> Credential:
        deadline.check("users.get")
        try:
            with session_scope(self._session_factory, self._logger) as session:
                self._bound_statement_time(session, deadline)
                row = session.scalars(select(User).where(User.username == username)).first()
                credential = (
                    Credential(
                        username=row.username,
                        password_hash=row.password_hash,
                        email=row.email,
                    )
                    if row is not None
                    else None
                )
        except SQLAlchemyError as exc:
            raise self._store_error("users.get", deadline, exc) from exc

        deadline.check("users.get")
        if credential is None:
            raise UserNotFoundError(context={"username": username})
        return credential

    @staticmethod
    def _bound_statement_time(session: Session, deadline: Deadline) -> None:
        # SQLite has no statement timeout; its busy timeout comes from the engine config.
        if session.get_bind().dialect.name == "postgresql":
            timeout_ms = max(1, int(deadline.remaining() * 1000))
            session.execute(text(f"SET LOCAL statement_timeout = {timeout_ms}"))

    def _store_error(
        self, operation: str, deadline: Deadline, exc: SQLAlchemyError
    ) -> DeadlineExceededError | UserStoreError:
        if deadline.expired or (
            isinstance(exc, OperationalError) and "statement timeout" in str(exc.orig)
        ):
            self._logger.warning(f"{operation}: deadline exceeded")
            return DeadlineExceededError(context={"operation": operation})
        self._logger.error(f"{operation}: {type(exc).__name__}")
        return UserStoreError()


__all__ = ["SqlAlchemyUserRepository"]
