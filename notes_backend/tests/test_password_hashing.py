from __future__ import annotations

import pytest

from notes_backend.application.services.password_hashing import WerkzeugPasswordHasher
from notes_backend.domain.auth.exceptions import (
    PasswordHashingError,
    PasswordMismatchError,
    PasswordTooShortError,
)
from notes_backend.shared.context import Deadline
from notes_backend.shared.errors import DeadlineExceededError


def test_hash_rejects_password_below_minimum(fast_hasher: WerkzeugPasswordHasher) -> None:
    with pytest.raises(PasswordTooShortError) as exc_info:
        fast_hasher.hash("abcd")

    assert exc_info.value.context == {"min_length": 5}
    assert exc_info.value.to_dict() == {
        "error": "password_too_short",
        "context": {"min_length": 5},
    }


def test_hash_then_validate_accepts_same_password(fast_hasher: WerkzeugPasswordHasher) -> None:
    stored = fast_hasher.hash("abcde")

    assert "abcde" not in stored
    fast_hasher.validate(stored, "abcde")


def test_validate_rejects_other_password(fast_hasher: WerkzeugPasswordHasher) -> None:
    stored = fast_hasher.hash("abcde")

    with pytest.raises(PasswordMismatchError):
        fast_hasher.validate(stored, "abcdf")


def test_validate_checks_candidate_length_first(fast_hasher: WerkzeugPasswordHasher) -> None:
    stored = fast_hasher.hash("abcde")

    with pytest.raises(PasswordTooShortError):
        fast_hasher.validate(stored, "abc")


def test_hashes_are_salted(fast_hasher: WerkzeugPasswordHasher) -> None:
    first = fast_hasher.hash("password1")
    second = fast_hasher.hash("password1")

    assert first != second
    fast_hasher.validate(first, "password1")
    fast_hasher.validate(second, "password1")


def test_default_hasher_uses_scrypt() -> None:
    hasher = WerkzeugPasswordHasher()

    stored = hasher.hash("password1")

    assert stored.startswith("scrypt:")
    hasher.validate(stored, "password1")


def test_hash_from_other_configuration_still_validates(
    fast_hasher: WerkzeugPasswordHasher,
) -> None:
    other = WerkzeugPasswordHasher(min_length=5, method="pbkdf2:sha256:2000", salt_length=8)
    stored = other.hash("password1")

    fast_hasher.validate(stored, "password1")


@pytest.mark.parametrize("stored", ["", "not-a-hash", "plain$text"])
def test_malformed_stored_hash_is_a_hashing_failure(
    fast_hasher: WerkzeugPasswordHasher, stored: str
) -> None:
    with pytest.raises(PasswordHashingError) as exc_info:
        fast_hasher.validate(stored, "password1")

    assert exc_info.value.status == 500


def test_unknown_hash_method_is_a_hashing_failure(fast_hasher: WerkzeugPasswordHasher) -> None:
    with pytest.raises(PasswordHashingError):
        fast_hasher.validate("md5$salt$deadbeef", "password1")


def test_unsupported_method_fails_at_hash_time() -> None:
    hasher = WerkzeugPasswordHasher(method="rot13")

    with pytest.raises(PasswordHashingError):
        hasher.hash("password1")


def test_elapsed_deadline_short_circuits(fast_hasher: WerkzeugPasswordHasher) -> None:
    expired = Deadline(expires_at=0.0)

    with pytest.raises(DeadlineExceededError):
        fast_hasher.hash("password1", deadline=expired)
    with pytest.raises(DeadlineExceededError):
        fast_hasher.validate("pbkdf2:sha256:1000$x$y", "password1", deadline=expired)


def test_min_length_must_be_positive() -> None:
    with pytest.raises(ValueError):
        WerkzeugPasswordHasher(min_length=0)
