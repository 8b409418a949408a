# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from notes_backend.shared.errors.base import DomainError, InfrastructureError


class UserAlreadyExistsError(DomainError):
    code = "user_already_exists"
    status = HTTPStatus.FORBIDDEN


class UserNotFoundError(DomainError):
    code = "user_not_found"
    status = HTTPStatus.NOT_FOUND


class UserStoreError(InfrastructureError):
    code = "user_store_error"


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
