from __future__ import annotations

from datetime import timedelta

import pytest

from notes_backend.application.use_cases.users.login_user import LoginUserUseCase
from notes_backend.application.use_cases.users.register_user import RegisterUserUseCase
from notes_backend.domain.auth.exceptions import (
    PasswordHashingError,
    PasswordMismatchError,
    PasswordTooShortError,
)
from notes_backend.domain.users.entities import Credential, NewUser
from notes_backend.domain.users.exceptions import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from notes_backend.domain.users.repositories import PasswordHasher, UserStore
from notes_backend.infrastructure.auth.token_manager import TokenManager
from notes_backend.shared.context import Deadline


class InMemoryUserStore(UserStore):
    def __init__(self) -> None:
        self._users: dict[str, NewUser] = {}
        self.calls: list[tuple[str, Deadline]] = []

    def register_user(self, deadline: Deadline, new_user: NewUser) -> str:
        self.calls.append(("register", deadline))
        taken = any(
            user.username == new_user.username or user.email == new_user.email
            for user in self._users.values()
        )
        if taken:
            raise UserAlreadyExistsError()
        self._users[new_user.username] = new_user
        return new_user.username

    def get_user(self, deadline: Deadline, username: str) -> Credential:
        self.calls.append(("get", deadline))
        user = self._users.get(username)
        if user is None:
            raise UserNotFoundError(context={"username": username})
        return Credential(
            username=user.username, password_hash=user.password_hash, email=user.email
        )


class DeterministicHasher(PasswordHasher):
    def __init__(self, min_length: int = 5) -> None:
        self._min_length = min_length

    def hash(self, password: str, *, deadline: Deadline | None = None) -> str:
        if len(password) < self._min_length:
            raise PasswordTooShortError(self._min_length)
        return f"hashed:{password}"

    def validate(
        self, stored_hash: str, candidate: str, *, deadline: Deadline | None = None
    ) -> None:
        if len(candidate) < self._min_length:
            raise PasswordTooShortError(self._min_length)
        if not stored_hash.startswith("hashed:"):
            raise PasswordHashingError()
        if stored_hash != f"hashed:{candidate}":
            raise PasswordMismatchError()


@pytest.fixture()
def users() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture()
def deadline() -> Deadline:
    return Deadline.after(5.0)


@pytest.fixture()
def register(users: InMemoryUserStore) -> RegisterUserUseCase:
    return RegisterUserUseCase(users=users, password_hasher=DeterministicHasher())


@pytest.fixture()
def login(users: InMemoryUserStore, token_manager: TokenManager) -> LoginUserUseCase:
    return LoginUserUseCase(
        users=users,
        password_hasher=DeterministicHasher(),
        tokens=token_manager,
        token_duration=timedelta(minutes=15),
    )


def test_register_user_success(
    register: RegisterUserUseCase, users: InMemoryUserStore, deadline: Deadline
) -> None:
    username = register.execute(deadline, "alice", "secret123", "alice@example.com")

    assert username == "alice"
    stored = users.get_user(deadline, "alice")
    assert stored.password_hash == "hashed:secret123"
    assert stored.email == "alice@example.com"
    assert users.calls[0] == ("register", deadline)


def test_register_user_duplicate_raises(
    register: RegisterUserUseCase, deadline: Deadline
) -> None:
    register.execute(deadline, "alice", "secret123", "alice@example.com")

    with pytest.raises(UserAlreadyExistsError):
        register.execute(deadline, "alice", "other123", "other@example.com")
    with pytest.raises(UserAlreadyExistsError):
        register.execute(deadline, "alicia", "other123", "alice@example.com")


def test_register_user_short_password_stores_nothing(
    register: RegisterUserUseCase, users: InMemoryUserStore, deadline: Deadline
) -> None:
    with pytest.raises(PasswordTooShortError):
        register.execute(deadline, "alice", "abcd", "alice@example.com")

    assert users.calls == []


def test_login_user_success(
    register: RegisterUserUseCase,
    login: LoginUserUseCase,
    token_manager: TokenManager,
    deadline: Deadline,
) -> None:
    register.execute(deadline, "alice", "secret123", "alice@example.com")

    token, payload = login.execute(deadline, "alice", "secret123")

    assert payload.subject == "alice"
    assert payload.lifetime == timedelta(minutes=15)
    assert token_manager.verify_token(token) == payload


@pytest.mark.parametrize(
    ("username", "password"),
    [
        ("alice", "wrong-password"),
        ("alice", "abc"),
        ("mallory", "secret123"),
    ],
)
def test_login_user_invalid_credentials(
    register: RegisterUserUseCase,
    login: LoginUserUseCase,
    deadline: Deadline,
    username: str,
    password: str,
) -> None:
    register.execute(deadline, "alice", "secret123", "alice@example.com")

    with pytest.raises(InvalidCredentialsError) as exc_info:
        login.execute(deadline, username, password)

    assert exc_info.value.status == 401
    assert exc_info.value.to_dict() == {"error": "invalid_credentials"}


def test_login_hashing_failure_is_not_disguised(
    users: InMemoryUserStore, login: LoginUserUseCase, deadline: Deadline
) -> None:
    users.register_user(
        deadline, NewUser(username="alice", password_hash="garbage", email="a@example.com")
    )

    with pytest.raises(PasswordHashingError):
        login.execute(deadline, "alice", "secret123")


class RecordingHasher(DeterministicHasher):
    def __init__(self) -> None:
        super().__init__()
        self.validated: list[tuple[str, str]] = []

    def validate(
        self, stored_hash: str, candidate: str, *, deadline: Deadline | None = None
    ) -> None:
        self.validated.append((stored_hash, candidate))
        super().validate(stored_hash, candidate, deadline=deadline)


def test_unknown_user_still_pays_for_a_hash_check(
    users: InMemoryUserStore, token_manager: TokenManager, deadline: Deadline
) -> None:
    hasher = RecordingHasher()
    login = LoginUserUseCase(
        users=users,
        password_hasher=hasher,
        tokens=token_manager,
        token_duration=timedelta(minutes=15),
    )

    with pytest.raises(InvalidCredentialsError):
        login.execute(deadline, "mallory", "secret123")

    assert len(hasher.validated) == 1
    stored_hash, candidate = hasher.validated[0]
    assert stored_hash.startswith("hashed:")
    assert candidate == "secret123"


def test_unknown_and_known_users_do_the_same_hash_work(
    users: InMemoryUserStore, token_manager: TokenManager, deadline: Deadline
) -> None:
    hasher = RecordingHasher()
    RegisterUserUseCase(users=users, password_hasher=hasher).execute(
        deadline, "alice", "secret123", "alice@example.com"
    )
    login = LoginUserUseCase(
        users=users,
        password_hasher=hasher,
        tokens=token_manager,
        token_duration=timedelta(minutes=15),
    )

    with pytest.raises(InvalidCredentialsError):
        login.execute(deadline, "alice", "wrong-password")
    with pytest.raises(InvalidCredentialsError):
        login.execute(deadline, "mallory", "wrong-password")

    assert [candidate for _, candidate in hasher.validated] == ["wrong-password"] * 2
