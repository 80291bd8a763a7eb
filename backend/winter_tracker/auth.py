"""Shared-secret edit access.

There is exactly one credential. A successful login hands out a cookie holding
``"<expires>.<signature>"`` where the signature is an HMAC of the expiry keyed
with the edit secret. Nothing is kept server-side: logout only clears the
cookie, and a copied cookie stays valid until it expires. Rotating the secret
invalidates every outstanding session.
"""

from __future__ import annotations

import datetime as dt
import hashlib
import hmac
import logging
from typing import Optional

from fastapi import Request, Response

from .config import Settings
from .errors import InvalidCredentials

logger = logging.getLogger(__name__)

SESSION_SCOPE = "edit"


def _now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def _signature(secret: str, expires: int) -> str:
    digest = hmac.new(secret.encode(), msg=f"{SESSION_SCOPE}:{expires}".encode(), digestmod=hashlib.sha256)
    return digest.hexdigest()


class AccessGuard:
    """Issues and verifies edit sessions for the single configured secret."""

    def __init__(
        self,
        secret: Optional[str],
        *,
        session_days: int = 7,
        cookie_name: str = "edit_token",
        secure: bool = False,
    ) -> None:
        self._secret = secret or None
        self.max_age = int(dt.timedelta(days=session_days).total_seconds())
        self.cookie_name = cookie_name
        self.secure = secure

    @classmethod
    def from_settings(cls, base_settings: Settings) -> "AccessGuard":
        return cls(
            base_settings.edit_password,
            session_days=base_settings.session_days,
            cookie_name=base_settings.session_cookie_name,
            secure=base_settings.secure_cookies,
        )

    @property
    def enabled(self) -> bool:
        return self._secret is not None

    def issue(self, now: Optional[dt.datetime] = None) -> str:
        if self._secret is None:
            raise InvalidCredentials()
        expires = int(((now or _now()) + dt.timedelta(seconds=self.max_age)).timestamp())
        return f"{expires}.{_signature(self._secret, expires)}"

    def login(self, supplied: Optional[str], now: Optional[dt.datetime] = None) -> str:
        """Return a fresh session token when ``supplied`` matches the secret."""
        if self._secret is None or not isinstance(supplied, str):
            logger.info("Rejected login: editing is %s", "enabled" if self.enabled else "disabled")
            raise InvalidCredentials()
        if not hmac.compare_digest(supplied.encode(), self._secret.encode()):
            logger.info("Rejected login: wrong password")
            raise InvalidCredentials()
        return self.issue(now)

    def check(self, token: Optional[str], now: Optional[dt.datetime] = None) -> bool:
        if self._secret is None or not token:
            return False
        expires_raw, _, signature = token.partition(".")
        try:
            expires = int(expires_raw)
        except ValueError:
            return False
        if not hmac.compare_digest(signature.encode(), _signature(self._secret, expires).encode()):
            return False
        return expires > int((now or _now()).timestamp())

    # ------------------------------------------------------------------
    def set_cookie(self, response: Response, token: str) -> None:
        response.set_cookie(
            self.cookie_name,
            token,
            max_age=self.max_age,
            httponly=True,
            secure=self.secure,
            samesite="strict",
        )

    def logout(self, response: Response) -> None:
        response.delete_cookie(self.cookie_name, httponly=True, secure=self.secure, samesite="strict")

    def is_authenticated(self, request: Request) -> bool:
        return self.check(request.cookies.get(self.cookie_name))
