from __future__ import annotations

from collections.abc import Iterator

import pytest
from loguru import logger

from notes_backend.shared.logging import (
    clear_correlation_id,
    get_logger,
    sanitize_message,
    set_correlation_id,
    setup_logging,
)


@pytest.fixture()
def captured() -> Iterator[list[str]]:
    setup_logging("DEBUG")
    clear_correlation_id()
    messages: list[str] = []
    sink_id = logger.add(
        messages.append,
        level="DEBUG",
        format="{extra[correlation_id]}|{extra[component]}|{message}",
    )
    yield messages
    logger.remove(sink_id)
    clear_correlation_id()


@pytest.mark.parametrize(
    ("raw", "leaked"),
    [
        ("Set-Cookie: paseto=gAAAAABlongtokenvalue; HttpOnly", "gAAAAABlongtokenvalue"),
        ("verifying gAAAAABn0123456789abcdefghijklmnop==", "gAAAAABn0123456789abcdefghijklmnop"),
        ("login password=hunter22 for alice", "hunter22"),
        ("TOKEN_SECRET=averysecretvalue123", "averysecretvalue123"),
        ("stored scrypt:32768:8:1$abcdEFGH$0123abcdef", "0123abcdef"),
        ("connect postgresql://notes:pa55word@db/notes", "pa55word"),
        ("register alice@example.com", "alice@example.com"),
    ],
)
def test_sanitize_message_redacts_secrets(raw: str, leaked: str) -> None:
    assert leaked not in sanitize_message(raw)


def test_plain_messages_pass_through() -> None:
    assert sanitize_message("auth.login: ok username=alice") == "auth.login: ok username=alice"


def test_records_carry_component_and_correlation_id(captured: list[str]) -> None:
    set_correlation_id("req-42")

    get_logger("token_manager").info("token.verify: rejected (malformed)")

    assert captured[-1].strip() == "req-42|token_manager|token.verify: rejected (malformed)"


def test_records_are_sanitized(captured: list[str]) -> None:
    get_logger("auth_controller").warning("cookie was paseto=gAAAAABsecretsecretsecret")

    assert "gAAAAABsecretsecretsecret" not in captured[-1]
    assert captured[-1].startswith("-|auth_controller|")
