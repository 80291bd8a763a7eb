"""Derived statistics for the tracker grid.

Everything here is a pure function of the tracker configuration, the stored
document and (where needed) the current date. Nothing is cached: callers
recompute after every change.
"""

from __future__ import annotations

import datetime as dt
import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional

from .tracks import Track, TrackerConfig

IDEAL_FLOOR_RATIO = 0.8


@dataclass(slots=True)
class TrackStats:
    track_id: str
    total_target: float = 0.0
    total_logged: float = 0.0

    @property
    def percentage(self) -> int:
        return percentage(self.total_logged, self.total_target)


@dataclass(slots=True)
class DailyStats:
    day: Optional[int]
    target: float = 0.0
    logged: float = 0.0

    @property
    def percentage(self) -> int:
        return percentage(self.logged, self.target)


@dataclass(slots=True)
class CumulativePoint:
    day: int
    ideal_cumulative: float
    actual_cumulative: float
    ideal80_cumulative: float


@dataclass(slots=True)
class StatsSnapshot:
    today: dt.date
    total: TrackStats
    tracks: List[TrackStats] = field(default_factory=list)
    daily: DailyStats = field(default_factory=lambda: DailyStats(day=None))
    cumulative: List[CumulativePoint] = field(default_factory=list)
    avoidance_debt: float = 0.0

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["total"]["percentage"] = self.total.percentage
        for item, stats in zip(data["tracks"], self.tracks):
            item["percentage"] = stats.percentage
        data["daily"]["percentage"] = self.daily.percentage
        return data


def parse_hours(value: Any) -> float:
    """Interpret a stored hour value, treating anything non-numeric as zero."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def percentage(logged: float, target: float) -> int:
    if target <= 0:
        return 0
    return int(math.floor(logged / target * 100 + 0.5))


def _section(document: Mapping[str, Any], name: str) -> Mapping[Any, Any]:
    value = document.get(name) if isinstance(document, Mapping) else None
    return value if isinstance(value, Mapping) else {}


def _day_entry(section: Mapping[Any, Any], day: int) -> Any:
    # JSON turns integer keys into strings; accept both spellings.
    if str(day) in section:
        return section[str(day)]
    return section.get(day)


def composite_key(track_id: str, day: int) -> str:
    return f"{track_id}-{day}"


def logged_hours(document: Mapping[str, Any], track_id: str, day: int) -> float:
    return parse_hours(_section(document, "hours").get(composite_key(track_id, day)))


def misc_hours(document: Mapping[str, Any], day: int) -> float:
    entry = _day_entry(_section(document, "misc"), day)
    if not isinstance(entry, Mapping):
        return 0.0
    return parse_hours(entry.get("time"))


def track_stats(config: TrackerConfig, track: Track, document: Mapping[str, Any]) -> TrackStats:
    stats = TrackStats(track_id=track.id)
    for day in config.days:
        if not track.is_active(day):
            continue
        stats.total_target += track.target_for(day)
        stats.total_logged += logged_hours(document, track.id, day)
    return stats


def total_stats(config: TrackerConfig, document: Mapping[str, Any]) -> TrackStats:
    total = TrackStats(track_id="*")
    for track in config.tracks:
        stats = track_stats(config, track, document)
        total.total_target += stats.total_target
        total.total_logged += stats.total_logged
    return total


def daily_stats(config: TrackerConfig, document: Mapping[str, Any], today: dt.date) -> DailyStats:
    day = config.day_for(today)
    if day is None:
        return DailyStats(day=None)
    stats = DailyStats(day=day)
    for track in config.tracks:
        stats.target += track.target_for(day)
        stats.logged += logged_hours(document, track.id, day)
    stats.logged += misc_hours(document, day)
    return stats


def cumulative_series(config: TrackerConfig, document: Mapping[str, Any]) -> Iterator[CumulativePoint]:
    """Yield running ideal/actual totals, one point per day of the range."""
    ideal = 0.0
    actual = 0.0
    for day in config.days:
        ideal += sum(track.target_for(day) for track in config.tracks)
        actual += sum(logged_hours(document, track.id, day) for track in config.tracks)
        actual += misc_hours(document, day)
        yield CumulativePoint(
            day=day,
            ideal_cumulative=ideal,
            actual_cumulative=actual,
            ideal80_cumulative=ideal * IDEAL_FLOOR_RATIO,
        )


def _point_for(config: TrackerConfig, series: List[CumulativePoint], today: dt.date) -> Optional[CumulativePoint]:
    if not series or today < config.start_date:
        return None
    if today > config.end_date:
        return series[-1]
    day = today.day
    for point in series:
        if point.day == day:
            return point
    return None


def avoidance_debt(
    config: TrackerConfig,
    document: Mapping[str, Any],
    today: dt.date,
    series: Optional[List[CumulativePoint]] = None,
) -> float:
    """Cumulative shortfall as of ``today``; zero unless behind the ideal line."""
    if series is None:
        series = list(cumulative_series(config, document))
    point = _point_for(config, series, today)
    if point is None:
        return 0.0
    debt = point.ideal_cumulative - point.actual_cumulative
    return debt if debt > 0 else 0.0


def recompute_stats(config: TrackerConfig, document: Mapping[str, Any], today: dt.date) -> StatsSnapshot:
    series = list(cumulative_series(config, document))
    return StatsSnapshot(
        today=today,
        total=total_stats(config, document),
        tracks=[track_stats(config, track, document) for track in config.tracks],
        daily=daily_stats(config, document, today),
        cumulative=series,
        avoidance_debt=avoidance_debt(config, document, today, series),
    )
