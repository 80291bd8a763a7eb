"""Data models for the desktop companion."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class CellPixels:
    """How a grid cell draws its logged hours: one pixel per target hour."""

    total: int
    filled: int
    half: bool = False

    @property
    def has_progress(self) -> bool:
        return self.filled > 0 or self.half


@dataclass(slots=True)
class MiscEntry:
    """Free-standing time entry for a day, not tied to any track."""

    time: str = ""
    comment: str = ""

    def as_dict(self) -> dict[str, str]:
        return {"time": self.time, "comment": self.comment}


__all__ = ["CellPixels", "MiscEntry"]
