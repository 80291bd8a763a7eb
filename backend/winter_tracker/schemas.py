from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AuthStatusResponse(BaseModel):
    authenticated: bool


class AuthResultResponse(BaseModel):
    success: bool
    error: Optional[str] = None


class SaveResultResponse(BaseModel):
    success: bool


class TrackerDocumentResponse(BaseModel):
    # Unknown top-level keys are stored and returned untouched.
    model_config = ConfigDict(extra="allow")
    hours: Dict[str, Any] = Field(default_factory=dict)
    notes: Dict[str, Any] = Field(default_factory=dict)
    highlights: Dict[str, Any] = Field(default_factory=dict)
    misc: Dict[str, Any] = Field(default_factory=dict)


class TrackStatsResponse(BaseModel):
    track_id: str
    total_target: float
    total_logged: float
    percentage: int


class DailyStatsResponse(BaseModel):
    day: Optional[int]
    target: float
    logged: float
    percentage: int


class CumulativePointResponse(BaseModel):
    day: int
    ideal_cumulative: float
    actual_cumulative: float
    ideal80_cumulative: float


class StatsResponse(BaseModel):
    today: dt.date
    total: TrackStatsResponse
    tracks: List[TrackStatsResponse]
    daily: DailyStatsResponse
    cumulative: List[CumulativePointResponse]
    avoidance_debt: float
