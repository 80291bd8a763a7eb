"""Static description of the tracker: date range, tracks, theme and features.

The configuration is loaded once at start-up and passed around explicitly.
All models are frozen so nothing can mutate it afterwards.
"""

from __future__ import annotations

import datetime as dt
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

logger = logging.getLogger(__name__)


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Resource(_Frozen):
    name: str
    url: str


class Track(_Frozen):
    id: str
    name: str
    icon: str = ""
    color: str = "#a1a1aa"
    hours_per_day: float = Field(default=0, ge=0, alias="hoursPerDay")
    priority: int = 1
    notes: str = ""
    start_day: Optional[int] = Field(default=None, ge=1, le=31, alias="startDay")
    duration: Optional[int] = Field(default=None, ge=1)
    target_end_day: Optional[int] = Field(default=None, ge=1, le=31, alias="targetEndDay")
    resources: Tuple[Resource, ...] = ()

    def is_active(self, day: int) -> bool:
        """Whether hours may be logged for ``day``.

        ``duration`` only bounds the window when ``start_day`` is set.
        """
        if self.start_day is None:
            return True
        if day < self.start_day:
            return False
        if self.duration is not None and day >= self.start_day + self.duration:
            return False
        return True

    def is_editable(self, day: int) -> bool:
        """Reference-only tracks (no daily hours) never take input."""
        return self.hours_per_day > 0 and self.is_active(day)

    def counts_toward_target(self, day: int) -> bool:
        if not self.is_active(day):
            return False
        if self.target_end_day is not None and day > self.target_end_day:
            return False
        return True

    def target_for(self, day: int) -> float:
        return self.hours_per_day if self.counts_toward_target(day) else 0.0


class Theme(_Frozen):
    accent: str = "#ff1493"
    background: str = "#08090a"
    background_secondary: str = Field(default="#0f1012", alias="backgroundSecondary")
    background_tertiary: str = Field(default="#161719", alias="backgroundTertiary")
    border: str = "#232527"
    text_primary: str = Field(default="#f4f4f5", alias="textPrimary")
    text_secondary: str = Field(default="#a1a1aa", alias="textSecondary")
    text_muted: str = Field(default="#52525b", alias="textMuted")


class Features(_Frozen):
    show_summary_cards: bool = Field(default=True, alias="showSummaryCards")
    show_total_progress: bool = Field(default=True, alias="showTotalProgress")
    increment_amount: float = Field(default=0.5, gt=0, alias="incrementAmount")
    show_priority: bool = Field(default=False, alias="showPriority")
    show_notes: bool = Field(default=True, alias="showNotes")


class TrackerConfig(_Frozen):
    title: str = "Tracker"
    subtitle: str = ""
    start_date: dt.date = Field(alias="startDate")
    end_date: dt.date = Field(alias="endDate")
    tracks: Tuple[Track, ...] = ()
    theme: Theme = Field(default_factory=Theme)
    features: Features = Field(default_factory=Features)

    @model_validator(mode="after")
    def _check_range(self) -> "TrackerConfig":
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        seen_days: set[int] = set()
        for date in self._iter_dates():
            if date.day in seen_days:
                raise ValueError("date range must not repeat a day of the month")
            seen_days.add(date.day)
        seen_ids: set[str] = set()
        for track in self.tracks:
            if track.id in seen_ids:
                raise ValueError(f"duplicate track id: {track.id}")
            seen_ids.add(track.id)
        return self

    def _iter_dates(self):
        current = self.start_date
        while current <= self.end_date:
            yield current
            current += dt.timedelta(days=1)

    @property
    def days(self) -> List[int]:
        return [date.day for date in self._iter_dates()]

    def day_for(self, date: dt.date) -> Optional[int]:
        """Day-of-month for ``date`` or ``None`` when it lies outside the range."""
        if self.start_date <= date <= self.end_date:
            return date.day
        return None

    def track(self, track_id: str) -> Optional[Track]:
        for track in self.tracks:
            if track.id == track_id:
                return track
        return None

    def to_public(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


DEFAULT_TRACKER_CONFIG = TrackerConfig.model_validate(
    {
        "title": "Winter *Deep* Work",
        "subtitle": "January 6–31, 2026 // Building foundations",
        "startDate": "2026-01-06",
        "endDate": "2026-01-31",
        "tracks": [
            {
                "id": "karpathy",
                "name": "Karpathy's 0→Hero",
                "icon": "🧠",
                "color": "#10b981",
                "hoursPerDay": 4,
                "priority": 1,
                "notes": "Complete the full neural networks series",
                "startDay": 6,
                # Logging stays open until Jan 31, the target stops at Jan 19.
                "duration": 26,
                "targetEndDay": 19,
                "resources": [
                    {
                        "name": "YouTube Playlist",
                        "url": "https://www.youtube.com/playlist?list=PLAqhIrjkxbuWI23v9cThsA9GvCAUhRvKZ",
                    }
                ],
            },
            {
                "id": "apply",
                "name": "Research Outreach",
                "icon": "📝",
                "color": "#f97316",
                "hoursPerDay": 2,
                "priority": 1,
            },
            {
                "id": "collab",
                "name": "Project collaboration",
                "icon": "🤝",
                "color": "#eab308",
                "hoursPerDay": 2,
                "priority": 2,
                "notes": "Research project collaboration",
                "resources": [{"name": "Airtable", "url": "https://airtable.com"}],
            },
            {
                "id": "ytresources",
                "name": "Learning from Curated Content",
                "icon": "📺",
                "color": "#06b6d4",
                "hoursPerDay": 2,
                "priority": 3,
                "notes": "Stay updated with AI research content",
                "resources": [
                    {"name": "Shaily99 Research", "url": "https://github.com/shaily99/advice?tab=readme-ov-file#research"},
                    {"name": "Neel Nanda", "url": "https://x.com/NeelNanda5"},
                    {"name": "No Priors Podcast", "url": "https://www.youtube.com/@NoPriorsPodcast"},
                    {"name": "Dwarkesh Patel", "url": "https://www.youtube.com/@DwarkeshPatel"},
                    {"name": "Noam Brown", "url": "https://www.youtube.com/watch?v=3PT82ivnc9Y"},
                ],
            },
            {
                "id": "posts",
                "name": "Share Work & Updates",
                "icon": "✨",
                "color": "#a855f7",
                "hoursPerDay": 1,
                "priority": 4,
                "notes": "Build in public, share learnings",
            },
            {
                "id": "courses",
                "name": "Courses",
                "icon": "📚",
                "color": "#ec4899",
                "hoursPerDay": 2,
                "priority": 2,
                "notes": "RL and deep learning fundamentals",
                "resources": [
                    {"name": "RL Playlist", "url": "https://www.youtube.com/playlist?list=PLir0BWtR5vRp5dqaouyMU-oTSzaU5LK9r"},
                    {"name": "Berkeley CS", "url": "https://www.youtube.com/playlist?list=PLS01nW3RtgogGkm4UeqNeZLccW-OGc1fJ"},
                    {
                        "name": "PyTorch Deep Learning",
                        "url": "https://www.coursera.org/professional-certificates/pytorch-for-deep-learning",
                    },
                    {"name": "LM from Scratch", "url": "https://www.youtube.com/playlist?list=PLoROMvodv4rOY23Y0BoGoBGgQ1zmU_MT_"},
                ],
            },
            {
                "id": "ilya",
                "name": "Ilya's Reading List (to start later)",
                "icon": "📄",
                "color": "#6366f1",
                # Reference only, no daily target
                "hoursPerDay": 0,
                "priority": 5,
                "notes": "Classic papers to read when time permits",
                "resources": [{"name": "Top 30 Papers", "url": "https://aman.ai/primers/ai/top-30-papers/"}],
            },
        ],
    }
)


def load_tracker_config(path: Optional[Path] = None) -> TrackerConfig:
    """Read the tracker description from a JSON file, or return the built-in one."""
    if path is None:
        return DEFAULT_TRACKER_CONFIG
    with path.open("r", encoding="utf-8") as handle:
        raw = json.load(handle)
    config = TrackerConfig.model_validate(raw)
    logger.info("Loaded %d tracks from %s", len(config.tracks), path)
    return config
