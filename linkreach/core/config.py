"""Configuration module for the LinkReach application."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import urlparse

from dotenv import load_dotenv

from linkreach.core.exceptions import ConfigurationError

load_dotenv()


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Config:
    """Runtime configuration with validation."""

    APP_NAME: str
    APP_VERSION: str
    ENV: str
    DEBUG: bool
    DATABASE_URL: str
    DB_CONNECTIVITY_REQUIRED: bool
    DB_AUTO_CREATE: bool
    JWT_SECRET: str
    JWT_ACCESS_TTL_MINUTES: int
    JWT_REFRESH_TTL_DAYS: int
    PASSWORD_PEPPER: str
    ANTHROPIC_API_KEY: str | None
    ANTHROPIC_API_URL: str
    ANTHROPIC_VERSION: str
    LLM_MODEL: str
    LLM_TIMEOUT_SECONDS: int
    APOLLO_API_KEY: str | None
    APOLLO_API_URL: str
    PEOPLE_SEARCH_TIMEOUT_SECONDS: int
    DISCOVERY_SEARCH_LIMIT: int
    DISCOVERY_DEFAULT_ENRICH_LIMIT: int
    ENRICH_BATCH_SIZE: int
    ENRICH_BATCH_DELAY_SECONDS: float
    SCRAPINGDOG_API_KEY: str | None
    SCRAPINGDOG_API_URL: str
    SCRAPE_TIMEOUT_SECONDS: int
    API_HOST: str
    API_PORT: int
    API_PREFIX: str
    LOG_LEVEL: str
    LOG_FILE: str

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"


def _build_config(env: str | None = None) -> Config:
    resolved_env = (env or os.getenv("ENV", "development")).strip().lower()
    debug = _as_bool(os.getenv("DEBUG"), default=(resolved_env != "production"))

    config = Config(
        APP_NAME="LinkReach",
        APP_VERSION=os.getenv("APP_VERSION", "1.0.0"),
        ENV=resolved_env,
        DEBUG=debug if resolved_env != "production" else False,
        DATABASE_URL=os.getenv("DATABASE_URL", "sqlite:///./linkreach.db"),
        DB_CONNECTIVITY_REQUIRED=_as_bool(
            os.getenv("DB_CONNECTIVITY_REQUIRED"), default=(resolved_env == "production")
        ),
        DB_AUTO_CREATE=_as_bool(os.getenv("DB_AUTO_CREATE"), default=(resolved_env != "production")),
        JWT_SECRET=os.getenv("JWT_SECRET", "change_me_jwt_secret"),
        JWT_ACCESS_TTL_MINUTES=int(os.getenv("JWT_ACCESS_TTL_MINUTES", "60")),
        JWT_REFRESH_TTL_DAYS=int(os.getenv("JWT_REFRESH_TTL_DAYS", "14")),
        PASSWORD_PEPPER=os.getenv("PASSWORD_PEPPER", ""),
        ANTHROPIC_API_KEY=os.getenv("ANTHROPIC_API_KEY"),
        ANTHROPIC_API_URL=os.getenv("ANTHROPIC_API_URL", "https://api.anthropic.com"),
        ANTHROPIC_VERSION=os.getenv("ANTHROPIC_VERSION", "2023-06-01"),
        LLM_MODEL=os.getenv("LLM_MODEL", "claude-sonnet-4-20250514"),
        LLM_TIMEOUT_SECONDS=int(os.getenv("LLM_TIMEOUT_SECONDS", "60")),
        APOLLO_API_KEY=os.getenv("APOLLO_API_KEY"),
        APOLLO_API_URL=os.getenv("APOLLO_API_URL", "https://api.apollo.io/v1"),
        PEOPLE_SEARCH_TIMEOUT_SECONDS=int(os.getenv("PEOPLE_SEARCH_TIMEOUT_SECONDS", "30")),
        DISCOVERY_SEARCH_LIMIT=int(os.getenv("DISCOVERY_SEARCH_LIMIT", "50")),
        DISCOVERY_DEFAULT_ENRICH_LIMIT=int(os.getenv("DISCOVERY_DEFAULT_ENRICH_LIMIT", "10")),
        ENRICH_BATCH_SIZE=int(os.getenv("ENRICH_BATCH_SIZE", "10")),
        ENRICH_BATCH_DELAY_SECONDS=float(os.getenv("ENRICH_BATCH_DELAY_SECONDS", "0.5")),
        SCRAPINGDOG_API_KEY=os.getenv("SCRAPINGDOG_API_KEY"),
        SCRAPINGDOG_API_URL=os.getenv("SCRAPINGDOG_API_URL", "https://api.scrapingdog.com/linkedin"),
        SCRAPE_TIMEOUT_SECONDS=int(os.getenv("SCRAPE_TIMEOUT_SECONDS", "30")),
        API_HOST=os.getenv("API_HOST", "0.0.0.0"),
        API_PORT=int(os.getenv("API_PORT", "8000")),
        API_PREFIX=os.getenv("API_PREFIX", "/api/v1"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        LOG_FILE=os.getenv("LOG_FILE", ""),
    )
    _validate_config(config)
    return config


def _validate_database_url(database_url: str) -> None:
    parsed = urlparse(database_url)
    if parsed.scheme not in {"sqlite", "postgresql", "postgresql+psycopg2"}:
        raise ConfigurationError(
            "DATABASE_URL must use sqlite:// or postgresql:// style URL."
        )
    if parsed.scheme.startswith("postgresql") and not parsed.hostname:
        raise ConfigurationError("PostgreSQL DATABASE_URL is missing hostname.")


def _validate_config(config: Config) -> None:
    _validate_database_url(config.DATABASE_URL)

    if config.LLM_TIMEOUT_SECONDS < 1:
        raise ConfigurationError("LLM_TIMEOUT_SECONDS must be >= 1.")
    if config.PEOPLE_SEARCH_TIMEOUT_SECONDS < 1:
        raise ConfigurationError("PEOPLE_SEARCH_TIMEOUT_SECONDS must be >= 1.")
    if config.SCRAPE_TIMEOUT_SECONDS < 1:
        raise ConfigurationError("SCRAPE_TIMEOUT_SECONDS must be >= 1.")
    if not 1 <= config.DISCOVERY_SEARCH_LIMIT <= 100:
        raise ConfigurationError("DISCOVERY_SEARCH_LIMIT must be between 1 and 100.")
    if config.DISCOVERY_DEFAULT_ENRICH_LIMIT < 0:
        raise ConfigurationError("DISCOVERY_DEFAULT_ENRICH_LIMIT must be >= 0.")
    if config.ENRICH_BATCH_SIZE < 1:
        raise ConfigurationError("ENRICH_BATCH_SIZE must be >= 1.")
    if config.ENRICH_BATCH_DELAY_SECONDS < 0:
        raise ConfigurationError("ENRICH_BATCH_DELAY_SECONDS must be >= 0.")
    if config.JWT_ACCESS_TTL_MINUTES < 1:
        raise ConfigurationError("JWT_ACCESS_TTL_MINUTES must be >= 1.")
    if config.JWT_REFRESH_TTL_DAYS < 1:
        raise ConfigurationError("JWT_REFRESH_TTL_DAYS must be >= 1.")
    if config.LOG_LEVEL not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise ConfigurationError("LOG_LEVEL must be one of DEBUG/INFO/WARNING/ERROR/CRITICAL.")
    if config.is_production and "change_me" in config.JWT_SECRET:
        raise ConfigurationError("Production JWT_SECRET uses the placeholder value.")
    if config.is_production and "change_me" in config.DATABASE_URL.lower():
        raise ConfigurationError("Production DATABASE_URL uses placeholder credentials.")


@lru_cache(maxsize=8)
def get_config(env: str | None = None) -> Config:
    """Get validated configuration for the requested environment."""
    return _build_config(env)
