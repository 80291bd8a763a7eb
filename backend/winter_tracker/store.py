"""Single-key persistence of the tracker document."""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import BackendUnavailable, InvalidShape
from .models import KeyValueEntry

logger = logging.getLogger(__name__)

DOCUMENT_KEY = "tracker-data"
DOCUMENT_SECTIONS = ("hours", "notes", "highlights", "misc")


def empty_document() -> Dict[str, Dict[str, Any]]:
    return {section: {} for section in DOCUMENT_SECTIONS}


def with_sections(value: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Copy of ``value`` with every missing or malformed section reset to empty."""
    document = copy.deepcopy(dict(value or {}))
    for section in DOCUMENT_SECTIONS:
        if not isinstance(document.get(section), Mapping):
            document[section] = {}
    return document


def read_document(db: Session) -> Dict[str, Any]:
    """Return the stored document, falling back to empty maps on any failure."""
    try:
        entry = db.get(KeyValueEntry, DOCUMENT_KEY)
    except SQLAlchemyError as exc:
        logger.warning("Failed to fetch data: %s", exc)
        return empty_document()
    if entry is None or not isinstance(entry.value, Mapping):
        return empty_document()
    return with_sections(entry.value)


def write_document(db: Session, document: Any) -> None:
    """Replace the stored document wholesale."""
    if not isinstance(document, Mapping):
        raise InvalidShape()
    value = copy.deepcopy(dict(document))
    try:
        entry = db.get(KeyValueEntry, DOCUMENT_KEY)
        if entry is None:
            db.add(KeyValueEntry(key=DOCUMENT_KEY, value=value))
        else:
            entry.value = value
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to save data")
        raise BackendUnavailable() from exc
