from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient

# Ensure settings are set before app import
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ.setdefault("ENV", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("CREATE_SCHEMA_ON_STARTUP", "false")

from devevent.db import get_provider, reset_provider  # noqa: E402
from devevent.main import app  # noqa: E402


@pytest.fixture
def provider():
    # Fresh in-memory database per test: closing the provider drops it.
    reset_provider()
    provider = get_provider()
    provider.create_schema()
    yield provider
    reset_provider()


@pytest.fixture
def db_session(provider):
    db = provider.session()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(provider) -> TestClient:
    return TestClient(app)
