# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Per-request deadlines.

A :class:`Deadline` is created for every request and passed explicitly as the
first argument to operations that do I/O. CPU-bound operations accept it as
an optional keyword and only use it to bail out when it has already elapsed.
"""

from __future__ import annotations

import time
from dataclasses import dataclass

from flask import g, has_app_context

from notes_backend.shared.errors.base import DeadlineExceededError

DEFAULT_REQUEST_TIMEOUT = 5.0


@dataclass(slots=True, frozen=True)
class Deadline:
    expires_at: float

    @classmethod
    def after(cls, seconds: float) -> Deadline:
        return cls(expires_at=time.monotonic() + seconds)

    def remaining(self) -> float:
        return max(0.0, self.expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        return time.monotonic() >= self.expires_at

    def check(self, operation: str = "request") -> None:
        if self.expired:
            raise DeadlineExceededError(context={"operation": operation})


def check_deadline(deadline: Deadline | None, operation: str) -> None:
    if deadline is not None:
        deadline.check(operation)


def current_deadline() -> Deadline | None:
    if not has_app_context():
        return None
    return getattr(g, "deadline", None)


__all__ = ["DEFAULT_REQUEST_TIMEOUT", "Deadline", "check_deadline", "current_deadline"]
