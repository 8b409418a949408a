# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .session import (
    Base,
    build_engine,
    build_session_factory,
    init_db,
    session_scope,
)
from .models import User  # noqa: E402

__all__ = ["Base", "User", "build_engine", "build_session_factory", "init_db", "session_scope"]
