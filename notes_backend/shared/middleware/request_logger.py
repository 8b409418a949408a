# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
import time
from typing import TYPE_CHECKING, Any

from flask import Flask, g, request

from notes_backend.shared.context import Deadline
from notes_backend.shared.logging import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)

if TYPE_CHECKING:
    from loguru import Logger


def _get_client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()

    return request.remote_addr or "unknown"


def _get_username() -> str | None:
    return getattr(g, "username", None)


def _sanitize_headers(headers: dict[str, str]) -> dict[str, str]:
    sensitive_headers = {"authorization", "cookie", "set-cookie", "x-api-key", "x-auth-token"}

    sanitized = {}
    for key, value in headers.items():
        if key.lower() in sensitive_headers:
            sanitized[key] = f"<hashed:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"
        else:
            sanitized[key] = value

    return sanitized


def _sanitize_query_params(params: dict[str, Any]) -> dict[str, Any]:
    sensitive_params = {"password", "token", "key", "secret", "auth", "paseto"}

    sanitized = {}
    for key, value in params.items():
        key_lower = key.lower()
        if any(sensitive in key_lower for sensitive in sensitive_params):
            sanitized[key] = "<redacted>"
        else:
            sanitized[key] = value

    return sanitized


def configure_request_logging(
    app: Flask,
    logger: Logger,
    *,
    request_timeout: float,
    debug_mode: bool = False,
) -> None:

    @app.before_request
    def _before_request() -> None:
        correlation_id = request.headers.get("X-Request-ID") or secrets.token_urlsafe(8)
        set_correlation_id(correlation_id)

        g.request_start_time = time.perf_counter()
        g.deadline = Deadline.after(request_timeout)

        if debug_mode:
            logger.info(
                f"Request started: {request.method} {request.path} "
                f"from {_get_client_ip()}, "
                f"query={_sanitize_query_params(dict(request.args))}, "
                f"headers={_sanitize_headers(dict(request.headers))}, "
                f"body_size={len(request.data)}"
            )
        else:
            logger.info(f"Request: {request.method} {request.path} from {_get_client_ip()}")

    @app.after_request
    def _after_request(response):
        start_time = getattr(g, "request_start_time", time.perf_counter())
        duration = time.perf_counter() - start_time
        response.headers.setdefault("X-Request-ID", get_correlation_id())

        logger.info(
            f"Response: {request.method} {request.path} "
            f"status={response.status_code}, duration={duration:.3f}s, user={_get_username()}"
        )
        return response

    @app.teardown_request
    def _teardown_request(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(
                f"Request error: {type(exc).__name__} on {request.method} {request.path}"
            )

        clear_correlation_id()


__all__ = ["configure_request_logging"]
