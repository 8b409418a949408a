# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from datetime import timedelta
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_TOKEN_SECRET_LENGTH = 32
_DEV_TOKEN_SECRET = "dev-token-secret-do-not-use-in-production"


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///notes.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", validate_by_name=True, extra="ignore"
    )


class SecurityConfig(BaseSettings):
    # Secure and HttpOnly are always set on the session cookie
    cookie_samesite: str = Field("Strict", alias="COOKIE_SAMESITE")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", validate_by_name=True, extra="ignore"
    )

    @field_validator("cookie_samesite", mode="after")
    @classmethod
    def _check_samesite(cls, value: str) -> str:
        normalized = value.strip().capitalize()
        if normalized not in ("Strict", "Lax"):
            raise ValueError("COOKIE_SAMESITE must be Strict or Lax")
        return normalized

    @field_validator("enable_hsts", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    token_secret: str = Field(_DEV_TOKEN_SECRET, alias="TOKEN_SECRET", repr=False)
    access_token_duration: timedelta = Field(
        timedelta(minutes=15), alias="ACCESS_TOKEN_DURATION"
    )
    min_password_length: int = Field(5, ge=1, alias="MIN_PASSWORD_LENGTH")
    request_timeout: float = Field(5.0, gt=0, alias="REQUEST_TIMEOUT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: str | None = Field(None, alias="LOG_FILE")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
        validate_assignment=True,
    )

    @field_validator("token_secret", mode="after")
    @classmethod
    def _check_secret_length(cls, value: str) -> str:
        if len(value) < MIN_TOKEN_SECRET_LENGTH:
            raise ValueError(
                f"TOKEN_SECRET must be at least {MIN_TOKEN_SECRET_LENGTH} characters"
            )
        return value

    @field_validator("access_token_duration", mode="after")
    @classmethod
    def _check_duration(cls, value: timedelta) -> timedelta:
        if value <= timedelta(0):
            raise ValueError("ACCESS_TOKEN_DURATION must be positive")
        return value

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.token_secret == _DEV_TOKEN_SECRET:
            print(
                "\nCRITICAL SECURITY ERROR: development TOKEN_SECRET detected in production!\n"
                "   TOKEN_SECRET must be a strong random value in production.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(48))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        if not self.security.enable_hsts:
            print(
                "\nPRODUCTION SECURITY WARNING: HSTS is DISABLED (recommended for HTTPS)\n",
                file=sys.stderr,
            )

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = ["AppConfig", "DatabaseConfig", "SecurityConfig", "load_config"]
