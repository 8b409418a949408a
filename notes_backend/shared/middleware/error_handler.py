# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import TYPE_CHECKING

from flask import Flask

from notes_backend.shared.errors import register_error_handler

if TYPE_CHECKING:
    from loguru import Logger


def configure_error_handling(app: Flask, logger: Logger, *, debug_mode: bool = False) -> None:
    register_error_handler(app, logger, debug_mode=debug_mode)
