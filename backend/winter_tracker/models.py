from __future__ import annotations

import datetime as dt

from sqlalchemy import Column, DateTime, String
from sqlalchemy.dialects.sqlite import JSON as SQLiteJSON
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class KeyValueEntry(Base):
    """A single JSON blob addressed by a fixed key."""

    __tablename__ = "kv_entries"

    key = Column(String(120), primary_key=True)
    value = Column(SQLiteJSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
