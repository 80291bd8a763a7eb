"""HTTP client for the Winter Tracker API."""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import urljoin

import requests

from winter_tracker.store import with_sections
from winter_tracker.tracks import TrackerConfig


class ApiError(RuntimeError):
    """Raised when the API cannot be reached or answers with an error."""

    def __init__(self, message: str, *, response: Optional[requests.Response] = None) -> None:
        super().__init__(message)
        self.response = response

    @property
    def status_code(self) -> Optional[int]:
        return self.response.status_code if self.response is not None else None


class ApiClient:
    """Wraps the HTTP calls; the edit session lives in the cookie jar."""

    def __init__(self, base_url: str, timeout: int = 15, session: Optional[requests.Session] = None) -> None:
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _request(self, method: str, path: str, **kwargs):
        url = urljoin(self.base_url, path.lstrip("/"))
        kwargs.setdefault("timeout", self.timeout)
        headers = kwargs.setdefault("headers", {})
        headers.setdefault("Accept", "application/json")
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as exc:  # pragma: no cover - network failure
            raise ApiError(str(exc)) from exc

        if response.status_code >= 400:
            message = self._error_message(response)
            raise ApiError(f"API error {response.status_code}: {message}", response=response)

        if response.headers.get("Content-Type", "").startswith("application/json"):
            return response.json()
        return response.content

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return response.text
        if isinstance(data, dict) and data.get("error"):
            return str(data["error"])
        return response.text

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------
    def check_auth(self) -> bool:
        data = self._request("GET", "/auth/check") or {}
        return bool(data.get("authenticated"))

    def login(self, password: str) -> bool:
        """Returns ``False`` for a wrong password; other failures raise."""
        try:
            data = self._request("POST", "/auth", json={"password": password}) or {}
        except ApiError as exc:
            if exc.status_code == 401:
                return False
            raise
        return bool(data.get("success"))

    def logout(self) -> None:
        self._request("POST", "/auth/logout")

    # ------------------------------------------------------------------
    # Tracker data
    # ------------------------------------------------------------------
    def get_config(self) -> TrackerConfig:
        return TrackerConfig.model_validate(self._request("GET", "/config"))

    def get_data(self) -> dict[str, Any]:
        data = self._request("GET", "/data")
        return with_sections(data if isinstance(data, dict) else None)

    def save_data(self, document: dict[str, Any]) -> None:
        self._request("POST", "/data", json=document)


__all__ = ["ApiClient", "ApiError"]
