# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import re
import sys
from functools import lru_cache
from typing import Annotated
from urllib.parse import quote_plus

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$", re.IGNORECASE)
_DURATION_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}

_PLACEHOLDER_SECRETS = ("dev", "development", "test", "secret", "changeme", "change-me")


def parse_duration(value: str | int | float) -> int:
    """Parse a TTL such as ``3600``, ``"90s"``, ``"15m"``, ``"1h"`` or ``"7d"`` into seconds."""
    if isinstance(value, bool):
        raise ValueError("duration must be a number of seconds or <n>s/m/h/d")
    if isinstance(value, (int, float)):
        seconds = int(value)
    else:
        match = _DURATION_RE.match(value)
        if not match:
            raise ValueError(f"invalid duration: {value!r}")
        seconds = int(match.group(1)) * _DURATION_UNITS[match.group(2).lower()]
    if seconds <= 0:
        raise ValueError("duration must be positive")
    return seconds


def _parse_bool(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


_SECTION_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    validate_by_name=True,
)


class DatabaseConfig(BaseSettings):
    url: str | None = Field(None, alias="DATABASE_URL")
    host: str | None = Field(None, alias="DB_HOST")
    port: int | None = Field(None, alias="DB_PORT")
    user: str | None = Field(None, alias="DB_USER")
    password: str | None = Field(None, alias="DB_PASSWORD")
    name: str | None = Field(None, alias="DB_NAME")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _SECTION_CONFIG

    def sqlalchemy_url(self) -> str:
        if self.url:
            return self.url
        if self.host:
            credentials = quote_plus(self.user or "")
            if self.password:
                credentials += ":" + quote_plus(self.password)
            netloc = f"{credentials}@{self.host}" if credentials else self.host
            if self.port:
                netloc += f":{self.port}"
            return f"mysql+pymysql://{netloc}/{self.name or ''}"
        return "sqlite:///tokengate.db"


class AuthConfig(BaseSettings):
    jwt_secret: str = Field(..., alias="JWT_SECRET")
    token_ttl_seconds: int = Field(3600, alias="JWT_EXPIRES_IN")

    model_config = _SECTION_CONFIG

    @field_validator("jwt_secret", mode="after")
    @classmethod
    def _require_secret(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("JWT_SECRET must not be blank")
        return value

    @field_validator("token_ttl_seconds", mode="before")
    @classmethod
    def _parse_ttl(cls, value: str | int) -> int:
        return parse_duration(value)


class PasswordConfig(BaseSettings):
    # Readable without JWT_SECRET so the hashing script works standalone
    bcrypt_rounds: int = Field(10, ge=4, le=31, alias="BCRYPT_ROUNDS")

    model_config = _SECTION_CONFIG


class SecurityConfig(BaseSettings):
    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    # Login rate limiting
    login_rate_limit_max: int = Field(10, ge=1, alias="LOGIN_RATE_LIMIT_MAX")
    login_rate_limit_window: float = Field(15 * 60, gt=0, alias="LOGIN_RATE_LIMIT_WINDOW")

    # Key the limiter on X-Forwarded-For; only safe behind a trusted proxy
    trust_proxy: bool = Field(False, alias="TRUST_PROXY")

    model_config = _SECTION_CONFIG

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("trust_proxy", mode="before")
    @classmethod
    def _parse_trust_proxy(cls, value: str | bool) -> bool:
        return _parse_bool(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _auth_config_factory() -> AuthConfig:
    return AuthConfig()  # type: ignore[call-arg]


def _password_config_factory() -> PasswordConfig:
    return PasswordConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("production", alias="APP_ENV")
    port: int = Field(3001, ge=1, le=65535, alias="PORT")
    expose_error_details: bool = Field(False, alias="EXPOSE_ERROR_DETAILS")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    auth: AuthConfig = Field(default_factory=_auth_config_factory)
    password: PasswordConfig = Field(default_factory=_password_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_assignment=True,
        validate_by_name=True,
    )

    @field_validator("expose_error_details", mode="before")
    @classmethod
    def _parse_expose(cls, value: str | bool) -> bool:
        return _parse_bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.auth.jwt_secret.strip().lower() in _PLACEHOLDER_SECRETS:
            print(
                "\n❌ CRITICAL SECURITY ERROR: Insecure JWT_SECRET detected in production!\n"
                "   JWT_SECRET must be a strong random value in production.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        if "*" in self.security.allowed_origins:
            print(
                "\n⚠️  PRODUCTION SECURITY WARNING: CORS allows wildcard (*) origins\n",
                file=sys.stderr,
            )
        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")

    def is_development(self) -> bool:
        return self.app_env.lower() in ("development", "dev")

    @property
    def debug_logging(self) -> bool:
        return self.is_development()

    @property
    def show_error_details(self) -> bool:
        # Never honored outside development.
        return self.expose_error_details and self.is_development()


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AppConfig",
    "AuthConfig",
    "DatabaseConfig",
    "PasswordConfig",
    "SecurityConfig",
    "load_config",
    "parse_duration",
]
