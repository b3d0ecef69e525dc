"""schemas/fixture.py — Fixture request/response schemas.

A fixture response embeds its sport (with the owning university) and its
result, if one has been recorded.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from db.enums import GameStatus, Gender
from schemas.shared import ApiModel, PaginatedResponse
from schemas.sport import SportSummary
from schemas.university import UniversitySummary


class FixtureSummary(ApiModel):
    id: str
    sport_id: str
    home_team: str
    away_team: str
    date: datetime
    venue: Optional[str] = None
    gender: Gender


class FixtureSport(SportSummary):
    university: Optional[UniversitySummary] = None


class FixtureResultItem(ApiModel):
    id: str
    home_score: int
    away_score: int
    status: GameStatus
    current_period: Optional[str] = None
    time_elapsed: Optional[int] = None


class FixtureResponse(FixtureSummary):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    sport: Optional[FixtureSport] = None
    result: Optional[FixtureResultItem] = None


class FixtureListResponse(PaginatedResponse):
    data: list[FixtureResponse]


class FixtureCreate(ApiModel):
    sport_id: str
    home_team: str = Field(..., min_length=1, max_length=255)
    away_team: str = Field(..., min_length=1, max_length=255)
    date: datetime
    venue: Optional[str] = Field(None, max_length=255)
    gender: Gender


class FixtureUpdate(ApiModel):
    sport_id: Optional[str] = None
    home_team: Optional[str] = Field(None, min_length=1, max_length=255)
    away_team: Optional[str] = Field(None, min_length=1, max_length=255)
    date: Optional[datetime] = None
    venue: Optional[str] = Field(None, max_length=255)
    gender: Optional[Gender] = None
