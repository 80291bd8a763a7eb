from __future__ import annotations

import datetime as dt
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from winter_tracker.tracks import DEFAULT_TRACKER_CONFIG, TrackerConfig, load_tracker_config


def test_default_config_covers_january_range():
    config = load_tracker_config()
    assert config is DEFAULT_TRACKER_CONFIG
    assert config.days[0] == 6
    assert config.days[-1] == 31
    assert len(config.days) == 26
    karpathy = config.track("karpathy")
    assert karpathy is not None
    assert karpathy.target_end_day == 19
    assert karpathy.is_active(31)
    assert not karpathy.counts_toward_target(20)


def test_config_is_immutable():
    with pytest.raises(ValidationError):
        DEFAULT_TRACKER_CONFIG.title = "Changed"


def test_track_window_bounds():
    config = TrackerConfig.model_validate(
        {
            "startDate": "2026-03-01",
            "endDate": "2026-03-10",
            "tracks": [{"id": "x", "name": "X", "hoursPerDay": 2, "startDay": 3, "duration": 2}],
        }
    )
    track = config.track("x")
    assert [day for day in config.days if track.is_active(day)] == [3, 4]
    assert track.target_for(3) == 2
    assert track.target_for(5) == 0
    assert track.is_editable(3)
    assert not track.is_editable(5)


def test_reference_track_is_never_editable():
    ilya = DEFAULT_TRACKER_CONFIG.track("ilya")
    assert ilya.is_active(10)
    assert not any(ilya.is_editable(day) for day in DEFAULT_TRACKER_CONFIG.days)


def test_duration_without_start_day_keeps_track_open():
    config = TrackerConfig.model_validate(
        {
            "startDate": "2026-03-01",
            "endDate": "2026-03-05",
            "tracks": [{"id": "x", "name": "X", "hoursPerDay": 1, "duration": 2}],
        }
    )
    track = config.track("x")
    assert all(track.is_active(day) for day in config.days)


def test_day_for_maps_dates_inside_range_only():
    config = DEFAULT_TRACKER_CONFIG
    assert config.day_for(dt.date(2026, 1, 6)) == 6
    assert config.day_for(dt.date(2026, 1, 5)) is None
    assert config.day_for(dt.date(2026, 2, 6)) is None


def test_range_repeating_a_day_of_month_is_rejected():
    with pytest.raises(ValidationError):
        TrackerConfig.model_validate({"startDate": "2026-01-06", "endDate": "2026-02-10", "tracks": []})


def test_reversed_range_is_rejected():
    with pytest.raises(ValidationError):
        TrackerConfig.model_validate({"startDate": "2026-01-10", "endDate": "2026-01-01", "tracks": []})


def test_duplicate_track_ids_are_rejected():
    with pytest.raises(ValidationError):
        TrackerConfig.model_validate(
            {
                "startDate": "2026-01-01",
                "endDate": "2026-01-02",
                "tracks": [{"id": "a", "name": "A"}, {"id": "a", "name": "B"}],
            }
        )


def test_load_from_json_file(tmp_path: Path):
    path = tmp_path / "tracker.json"
    path.write_text(
        json.dumps(
            {
                "title": "Spring",
                "startDate": "2026-04-01",
                "endDate": "2026-04-30",
                "tracks": [{"id": "run", "name": "Running", "hoursPerDay": 1, "icon": "🏃"}],
                "features": {"incrementAmount": 0.25},
            }
        ),
        encoding="utf-8",
    )
    config = load_tracker_config(path)
    assert config.title == "Spring"
    assert config.features.increment_amount == 0.25
    assert config.track("run").icon == "🏃"
    public = config.to_public()
    assert public["startDate"] == "2026-04-01"
    assert public["tracks"][0]["hoursPerDay"] == 1
    assert public["features"]["incrementAmount"] == 0.25
