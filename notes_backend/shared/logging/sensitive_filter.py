# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any

SENSITIVE_PATTERNS = [
    # Session cookie and raw session tokens (Fernet tokens start with version byte 0x80)
    (r"(paseto=)([^;\s]+)", r"\1***REDACTED***"),
    (r"gAAAAA[A-Za-z0-9_\-]{20,}={0,2}", r"***TOKEN***"),

    # Secrets and keys
    (r"(secret[_-]?key\s*[:=]\s*['\"]?)([^\s'\"]{8,})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),
    (r"(token[_-]?secret\s*[:=]\s*['\"]?)([^\s'\"]{8,})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),

    # Tokens
    (r"(bearer\s+)([a-zA-Z0-9_\-\.=]{20,})", r"\1***REDACTED***", re.IGNORECASE),
    (r"(token\s*[:=]\s*['\"]?)([a-zA-Z0-9_\-\.=]{20,})(['\"]?)", r"\1***REDACTED***\3"),

    # Passwords and password hashes
    (r"(password\s*[:=]\s*['\"]?)([^'\"\s,}]{1,})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),
    (r"(pwd\s*[:=]\s*['\"]?)([^'\"\s,}]{1,})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),
    (r"\b(scrypt|pbkdf2)(:[\w:]+)?\$[^\s$]+\$[0-9a-f]+", r"\1$***REDACTED***"),

    # Database URLs with credentials
    (r"(postgres(?:ql)?(?:\+\w+)?|mysql(?:\+\w+)?)://([^:/]+):([^@]+)@", r"\1://\2:***REDACTED***@"),

    # Email addresses (partial masking)
    (r"([a-zA-Z0-9._%+-]+)@([a-zA-Z0-9.-]+\.[a-zA-Z]{2,})", r"***@\2"),
]

_COMPILED = [
    (re.compile(entry[0], entry[2] if len(entry) > 2 else 0), entry[1])
    for entry in SENSITIVE_PATTERNS
]


def sanitize_message(message: str) -> str:
    sanitized = message
    for pattern, replacement in _COMPILED:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized


def sanitize_record(record: dict[str, Any]) -> None:
    if "message" in record:
        record["message"] = sanitize_message(record["message"])


__all__ = ["SENSITIVE_PATTERNS", "sanitize_message", "sanitize_record"]
