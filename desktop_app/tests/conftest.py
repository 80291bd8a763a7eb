from __future__ import annotations

import datetime as dt
from typing import Any, Optional

import pytest

from winter_desktop.api_client import ApiError
from winter_tracker.tracks import TrackerConfig


class FakeApiClient:
    """Records saves and serves a fixed document."""

    def __init__(self, document: Optional[dict[str, Any]] = None, *, authenticated: bool = True,
                 password: str = "secret") -> None:
        self.document = document or {"hours": {}, "notes": {}, "highlights": {}, "misc": {}}
        self.authenticated = authenticated
        self.password = password
        self.saved: list[dict[str, Any]] = []
        self.fail_saves = False
        self.fail_logins = False

    def check_auth(self) -> bool:
        return self.authenticated

    def login(self, password: str) -> bool:
        if self.fail_logins:
            raise ApiError("API error 502: Bad Gateway")
        self.authenticated = password == self.password
        return self.authenticated

    def logout(self) -> None:
        self.authenticated = False

    def get_data(self) -> dict[str, Any]:
        return self.document

    def save_data(self, document: dict[str, Any]) -> None:
        if self.fail_saves:
            raise ApiError("API error 500: Failed to save")
        self.saved.append(document)


@pytest.fixture()
def tracker_config() -> TrackerConfig:
    return TrackerConfig.model_validate(
        {
            "startDate": "2026-03-01",
            "endDate": "2026-03-10",
            "tracks": [
                {"id": "x", "name": "Focus", "hoursPerDay": 2, "startDay": 1, "duration": 5},
                {"id": "ref", "name": "Reading list", "hoursPerDay": 0},
            ],
            "features": {"incrementAmount": 0.5},
        }
    )


@pytest.fixture()
def fake_api() -> FakeApiClient:
    return FakeApiClient()


@pytest.fixture()
def today() -> dt.date:
    return dt.date(2026, 3, 2)
