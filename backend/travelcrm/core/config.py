"""Environment-driven settings, one class per ``APP_ENV`` value."""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

ENV_VAR: Final[str] = "APP_ENV"  # development | testing | production

ACCESS_TOKEN_LIFETIME: Final[timedelta] = timedelta(hours=24)

_TRUTHY = frozenset({"1", "true", "yes", "y", "on"})

# A missing .env file is fine
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    return default if raw is None else raw.strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    """Integer from the environment; unset, blank or malformed values give ``default``."""
    raw = (os.getenv(name) or "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


class BaseConfig:
    """Settings shared by every environment.

    Routes hang off ``API_BASE_PREFIX`` (empty, so ``/customers`` and friends
    sit at the root). Listings default to ``DEFAULT_PAGE_LIMIT`` rows and cap
    ``limit`` at ``MAX_PAGE_LIMIT``. The travel history PDF prints times in
    ``HISTORY_TIMEZONE``.
    """

    APP_ENV = os.getenv(ENV_VAR, "development").strip().lower()
    APP_VERSION = os.getenv("APP_VERSION", "dev")
    API_BASE_PREFIX = os.getenv("API_BASE_PREFIX", "")

    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT")
    JWT_ACCESS_TOKEN_EXPIRES = ACCESS_TOKEN_LIFETIME
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_HEADER_NAME = "Authorization"
    JWT_HEADER_TYPE = "Bearer"

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./travelcrm.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    DEFAULT_PAGE_LIMIT = env_int("DEFAULT_PAGE_LIMIT", 5)
    MAX_PAGE_LIMIT = env_int("MAX_PAGE_LIMIT", 100)

    HISTORY_TIMEZONE = os.getenv("HISTORY_TIMEZONE", "Asia/Jakarta")

    RATELIMIT_ENABLED = env_bool("RATELIMIT_ENABLED", True)
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    AUTH_LOGIN_RATE_LIMIT = os.getenv("AUTH_LOGIN_RATE_LIMIT", "5 per minute")

    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    CORS_MAX_AGE = env_int("CORS_MAX_AGE", 600)

    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    DEBUG = env_bool("FLASK_DEBUG", True)


class TestingConfig(BaseConfig):
    """In-memory SQLite (unless ``TEST_DATABASE_URL``), no rate limiting, quiet logs."""

    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    JWT_SECRET_KEY = "test-jwt-secret-key-with-enough-length"
    RATELIMIT_ENABLED = False
    LOG_LEVEL = "WARNING"


class ProductionConfig(BaseConfig):
    SQLALCHEMY_ECHO = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Settings class for the current ``APP_ENV``; unknown names mean development."""
    return CONFIG_MAP.get(os.getenv(ENV_VAR, "development").strip().lower(), DevelopmentConfig)
