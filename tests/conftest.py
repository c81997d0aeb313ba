from __future__ import annotations

import pytest
from fastapi.testclient import TestClient


def _test_env(monkeypatch) -> None:
    # Minimal env for Settings() to load during import.
    monkeypatch.setenv("DATABASE_URL", "sqlite+pysqlite:///:memory:")
    monkeypatch.setenv("WAIT_FOR_DB_ON_STARTUP", "0")
    monkeypatch.setenv("CREATE_SCHEMA_ON_STARTUP", "0")


@pytest.fixture()
def schema(monkeypatch):
    _test_env(monkeypatch)

    from helpcenter.core.db import engine
    from helpcenter.models import Base

    # Create schema (SQLite tests don't run Alembic). The in-memory database is
    # shared for the whole process, so start every test from empty tables.
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture()
def client(schema) -> TestClient:
    import helpcenter.main

    return TestClient(helpcenter.main.app)


@pytest.fixture()
def tutorial_id(client: TestClient) -> int:
    project = client.post("/projects", json={"name": "Billing"}).json()
    tutorial = client.post(f"/projects/{project['id']}/tutorials", json={"name": "Getting started"}).json()
    return tutorial["id"]
