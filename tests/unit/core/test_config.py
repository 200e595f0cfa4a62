from __future__ import annotations

import json
import logging

import pytest

from linkreach.core import config as config_module
from linkreach.core.exceptions import ConfigurationError
from linkreach.core.logging_config import JsonFormatter


@pytest.fixture(autouse=True)
def _clear_config_cache():
    config_module.get_config.cache_clear()
    yield
    config_module.get_config.cache_clear()


def test_development_defaults(monkeypatch):
    for key in ("DATABASE_URL", "DB_CONNECTIVITY_REQUIRED", "DB_AUTO_CREATE", "ENRICH_BATCH_SIZE"):
        monkeypatch.delenv(key, raising=False)
    cfg = config_module.get_config("development")

    assert cfg.DATABASE_URL.startswith("sqlite")
    assert cfg.DB_CONNECTIVITY_REQUIRED is False
    assert cfg.DB_AUTO_CREATE is True
    assert cfg.ENRICH_BATCH_SIZE == 10
    assert cfg.ENRICH_BATCH_DELAY_SECONDS == 0.5
    assert cfg.DISCOVERY_DEFAULT_ENRICH_LIMIT == 10
    assert cfg.API_PREFIX == "/api/v1"


def test_production_rejects_placeholder_jwt_secret(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg2://app:secret@db:5432/linkreach")
    with pytest.raises(ConfigurationError, match="JWT_SECRET"):
        config_module.get_config("production")


def test_production_defaults_require_database(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "a-real-secret")
    monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg2://app:secret@db:5432/linkreach")
    monkeypatch.delenv("DB_CONNECTIVITY_REQUIRED", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)
    cfg = config_module.get_config("production")

    assert cfg.is_production is True
    assert cfg.DEBUG is False
    assert cfg.DB_CONNECTIVITY_REQUIRED is True


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("DATABASE_URL", "mysql://root@localhost/app"),
        ("ENRICH_BATCH_SIZE", "0"),
        ("DISCOVERY_SEARCH_LIMIT", "500"),
        ("LOG_LEVEL", "chatty"),
    ],
)
def test_invalid_settings_are_rejected(monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    with pytest.raises(ConfigurationError):
        config_module.get_config("development")


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord("linkreach.test", logging.INFO, __file__, 1, "discovery.completed", None, None)
    record.event = "discovery.completed"
    record.enriched = 3
    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "discovery.completed"
    assert payload["event"] == "discovery.completed"
    assert payload["enriched"] == 3
    assert payload["level"] == "INFO"
