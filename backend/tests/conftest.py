from __future__ import annotations

import datetime as dt
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from winter_tracker import models
from winter_tracker.auth import AccessGuard
from winter_tracker.database import get_db
from winter_tracker.main import app
from winter_tracker.tracks import TrackerConfig

EDIT_SECRET = "winter-secret"


@pytest.fixture(scope="session")
def temp_db_path() -> Generator[Path, None, None]:
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "test.db"
        yield path


@pytest.fixture(scope="session")
def engine(temp_db_path: Path):
    url = f"sqlite:///{temp_db_path}"
    engine = create_engine(url, connect_args={"check_same_thread": False}, future=True)
    models.Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture(scope="function")
def session(engine) -> Generator[Session, None, None]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionTesting = sessionmaker(bind=connection, autoflush=False, autocommit=False, future=True)
    session = SessionTesting()
    try:
        yield session
    finally:
        session.close()
        transaction.rollback()
        connection.close()


@pytest.fixture()
def guard() -> AccessGuard:
    return AccessGuard(EDIT_SECRET)


@pytest.fixture(scope="function")
def client(session: Session, guard: AccessGuard, monkeypatch) -> Generator[TestClient, None, None]:
    def override_get_db():
        yield session

    monkeypatch.setattr(app.state, "access_guard", guard)
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def editor_client(client: TestClient) -> TestClient:
    response = client.post("/auth", json={"password": EDIT_SECRET})
    assert response.status_code == 200
    return client


@pytest.fixture()
def ten_day_config() -> TrackerConfig:
    return TrackerConfig.model_validate(
        {
            "title": "Sprint",
            "startDate": "2026-03-01",
            "endDate": "2026-03-10",
            "tracks": [{"id": "x", "name": "Focus", "hoursPerDay": 2, "startDay": 1, "duration": 5}],
        }
    )
