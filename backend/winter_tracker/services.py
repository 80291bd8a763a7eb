from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from .aggregator import StatsSnapshot, recompute_stats
from .auth import AccessGuard
from .errors import Unauthorized
from .store import read_document, write_document
from .tracks import TrackerConfig

logger = logging.getLogger(__name__)


def load_tracker_data(db: Session) -> Dict[str, Any]:
    return read_document(db)


def save_tracker_data(db: Session, guard: AccessGuard, token: Optional[str], payload: Any) -> None:
    """Replace the stored document after checking the edit session.

    The authorization check runs first so an anonymous caller never learns
    anything about payload validation.
    """
    if not guard.check(token):
        logger.info("Rejected save without a valid edit session")
        raise Unauthorized()
    write_document(db, payload)
    logger.debug("Saved tracker document")


def login(guard: AccessGuard, payload: Any) -> str:
    """Log in with the ``password`` field of a decoded request body.

    Anything but a JSON object carrying a string password is a failed login.
    """
    password = payload.get("password") if isinstance(payload, dict) else None
    return guard.login(password)


def tracker_stats(db: Session, config: TrackerConfig, today: Optional[dt.date] = None) -> StatsSnapshot:
    return recompute_stats(config, read_document(db), today or dt.date.today())
