from __future__ import annotations

import datetime as dt

import pytest
from fastapi.testclient import TestClient

from winter_tracker.auth import AccessGuard
from winter_tracker.errors import InvalidCredentials

EDIT_SECRET = "winter-secret"


def test_login_issues_token_that_checks_out(guard: AccessGuard):
    token = guard.login(EDIT_SECRET)
    assert guard.check(token)
    assert EDIT_SECRET not in token


def test_wrong_password_raises(guard: AccessGuard):
    with pytest.raises(InvalidCredentials):
        guard.login("nope")
    with pytest.raises(InvalidCredentials):
        guard.login(None)


def test_expired_token_is_rejected(guard: AccessGuard):
    issued_at = dt.datetime(2026, 1, 1, tzinfo=dt.timezone.utc)
    token = guard.login(EDIT_SECRET, now=issued_at)
    assert guard.check(token, now=issued_at + dt.timedelta(days=6))
    assert not guard.check(token, now=issued_at + dt.timedelta(days=7, seconds=1))


def test_tampered_or_foreign_tokens_are_rejected(guard: AccessGuard):
    token = guard.login(EDIT_SECRET)
    expires, _, signature = token.partition(".")
    assert not guard.check(f"{int(expires) + 3600}.{signature}")
    assert not guard.check(EDIT_SECRET)
    assert not guard.check("")
    assert not guard.check(None)
    assert not AccessGuard("other-secret").check(token)


def test_unset_secret_disables_editing():
    guard = AccessGuard(None)
    assert not guard.enabled
    with pytest.raises(InvalidCredentials):
        guard.login("")
    assert not guard.check("123.abc")


def test_check_reports_anonymous(client: TestClient):
    response = client.get("/auth/check")
    assert response.status_code == 200
    assert response.json() == {"authenticated": False}


def test_login_sets_cookie_and_check_succeeds(client: TestClient):
    response = client.post("/auth", json={"password": EDIT_SECRET})
    assert response.status_code == 200
    assert response.json() == {"success": True}
    set_cookie = response.headers["set-cookie"].lower()
    assert "edit_token=" in set_cookie
    assert "httponly" in set_cookie
    assert "samesite=strict" in set_cookie
    assert "max-age=604800" in set_cookie

    assert client.get("/auth/check").json() == {"authenticated": True}


def test_wrong_password_leaves_session_untouched(editor_client: TestClient):
    response = editor_client.post("/auth", json={"password": "wrong"})
    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Invalid password"}
    assert "set-cookie" not in response.headers
    assert editor_client.get("/auth/check").json() == {"authenticated": True}


def test_missing_body_is_a_failed_login(client: TestClient):
    response = client.post("/auth")
    assert response.status_code == 401
    assert response.json()["success"] is False


@pytest.mark.parametrize(
    "body",
    [
        {"json": {"password": 123}},
        {"json": ["winter-secret"]},
        {"content": b"{bad", "headers": {"Content-Type": "application/json"}},
    ],
)
def test_malformed_login_answers_in_auth_shape(client: TestClient, body):
    response = client.post("/auth", **body)
    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Invalid password"}
    assert "set-cookie" not in response.headers


def test_logout_clears_cookie(editor_client: TestClient):
    response = editor_client.post("/auth/logout")
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert editor_client.get("/auth/check").json() == {"authenticated": False}


def test_secure_flag_follows_guard(client: TestClient, monkeypatch):
    monkeypatch.setattr(client.app.state, "access_guard", AccessGuard(EDIT_SECRET, secure=True))
    response = client.post("/auth", json={"password": EDIT_SECRET})
    assert "secure" in response.headers["set-cookie"].lower()


def test_routes_are_served_under_api_prefix(client: TestClient):
    response = client.post("/api/auth", json={"password": EDIT_SECRET})
    assert response.status_code == 200
    assert client.get("/api/auth/check").json() == {"authenticated": True}
