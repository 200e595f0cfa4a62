from __future__ import annotations

from dataclasses import replace

import pytest
from fastapi.testclient import TestClient

from linkreach.core.config import get_config
from linkreach.database.db import Database
from linkreach.main import create_app


@pytest.fixture
def test_config():
    return replace(
        get_config(),
        JWT_SECRET="test-secret",
        ENRICH_BATCH_DELAY_SECONDS=0.0,
        DB_AUTO_CREATE=False,
        DB_CONNECTIVITY_REQUIRED=False,
    )


@pytest.fixture
def database():
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def make_client(test_config, database):
    def _make_client(llm_client=None, people_search=None, profile_scraper=None, raise_server_exceptions=True) -> TestClient:
        app = create_app(
            config=test_config,
            database=database,
            llm_client=llm_client,
            people_search=people_search,
            profile_scraper=profile_scraper,
        )
        return TestClient(app, raise_server_exceptions=raise_server_exceptions)

    return _make_client
