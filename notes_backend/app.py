# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask

from notes_backend.infrastructure.container import Container
from notes_backend.infrastructure.db import init_db
from notes_backend.shared.config import AppConfig, load_config
from notes_backend.shared.logging import get_logger, setup_logging
from notes_backend.shared.middleware.error_handler import configure_error_handling
from notes_backend.shared.middleware.request_logger import configure_request_logging


def create_app(
    config: AppConfig | None = None,
    *,
    container: Container | None = None,
    configure_logging: bool = True,
) -> Flask:
    config = config or (container.config if container else load_config())
    container = container or Container(config)

    if configure_logging:
        setup_logging(config.log_level, log_file=config.log_file)
    logger = get_logger("app")

    if container.uses_database:
        init_db(container.engine, logger)

    app = Flask(__name__)
    app.extensions["notes_backend.container"] = container
    configure_error_handling(app, get_logger("http"), debug_mode=config.debug_logging)
    configure_request_logging(
        app,
        get_logger("http"),
        request_timeout=config.request_timeout,
        debug_mode=config.debug_logging,
    )

    app.register_blueprint(container.auth_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cache-Control", "no-store")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )

        return resp

    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    create_app().run(host="127.0.0.1", port=5000)
