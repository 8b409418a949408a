from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from notes_backend.app import create_app
from notes_backend.application.services.password_hashing import WerkzeugPasswordHasher
from notes_backend.infrastructure.auth.token_manager import TokenManager
from notes_backend.infrastructure.container import Container
from notes_backend.shared.config import AppConfig, DatabaseConfig, SecurityConfig

TEST_SECRET = "test-token-secret-0123456789-abcdefghij"
TEST_DURATION = timedelta(minutes=15)


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime.now(UTC).replace(microsecond=0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def token_secret() -> str:
    return TEST_SECRET


@pytest.fixture()
def token_manager(clock: FakeClock, token_secret: str) -> TokenManager:
    return TokenManager(token_secret, clock=clock)


@pytest.fixture()
def fast_hasher() -> WerkzeugPasswordHasher:
    # Low pbkdf2 cost keeps the suite quick; production uses scrypt defaults
    return WerkzeugPasswordHasher(min_length=5, method="pbkdf2:sha256:1000")


@pytest.fixture()
def config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        APP_ENV="testing",
        TOKEN_SECRET=TEST_SECRET,
        ACCESS_TOKEN_DURATION=TEST_DURATION,
        MIN_PASSWORD_LENGTH=5,
        REQUEST_TIMEOUT=5.0,
        LOG_LEVEL="DEBUG",
        database=DatabaseConfig(DATABASE_URL=f"sqlite:///{tmp_path / 'notes.db'}"),
        security=SecurityConfig(COOKIE_SAMESITE="Strict", ENABLE_HSTS=False),
    )


@pytest.fixture()
def container(
    config: AppConfig, clock: FakeClock, fast_hasher: WerkzeugPasswordHasher
) -> Iterator[Container]:
    built = Container(config, clock=clock, password_hasher=fast_hasher)
    yield built
    if "engine" in vars(built):
        built.engine.dispose()


@pytest.fixture()
def app(container: Container) -> Flask:
    flask_app = create_app(container=container)
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture()
def client(app: Flask) -> Iterator[FlaskClient]:
    with app.test_client() as test_client:
        yield test_client
