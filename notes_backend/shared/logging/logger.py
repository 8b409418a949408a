"""Structured logging utilities.

Components never import a module-level logger. The application factory calls
:func:`setup_logging` once and hands every component its own handle built
with :func:`get_logger`, bound to the component name.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

if TYPE_CHECKING:
    from loguru import Logger

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<yellow>{extra[component]}</yellow> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_CORRELATION_ID: ContextVar[str] = ContextVar("correlation_id", default="-")


class _InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = _logger.level(record.levelname).name
        except ValueError:
            level = str(record.levelno)
        _logger.bind(component=record.name).opt(
            depth=6, exception=record.exc_info
        ).log(level, record.getMessage())


def _patch_record(record: dict[str, Any]) -> None:
    record["extra"].setdefault("component", "app")
    record["extra"]["correlation_id"] = _CORRELATION_ID.get()
    sanitize_record(record)


def set_correlation_id(value: str | None) -> None:
    _CORRELATION_ID.set(value or "-")


def get_correlation_id() -> str:
    return _CORRELATION_ID.get()


def clear_correlation_id() -> None:
    _CORRELATION_ID.set("-")


def get_logger(component: str) -> Logger:
    return _logger.bind(component=component)


def setup_logging(level: str | None = None, *, log_file: str | None = None) -> None:
    level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()

    _logger.remove()
    _logger.configure(patcher=_patch_record)
    _logger.add(
        sys.stderr,
        level=level,
        format=_FMT,
        colorize=True,
        backtrace=False,
        diagnose=False,
    )
    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        _logger.add(
            log_file,
            level=level,
            format=_FMT,
            colorize=False,
            backtrace=False,
            diagnose=False,
            enqueue=True,
            encoding="utf-8",
        )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    logging.getLogger("werkzeug").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)


__all__ = [
    "clear_correlation_id",
    "get_correlation_id",
    "get_logger",
    "set_correlation_id",
    "setup_logging",
]
