"""schemas/sport.py — Sport request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from db.enums import Gender, SportType
from schemas.shared import ApiModel, PaginatedResponse
from schemas.university import UniversitySummary


class SportSummary(ApiModel):
    id: str
    name: str
    type: SportType
    university_id: Optional[str] = None


class SportFixtureItem(ApiModel):
    id: str
    home_team: str
    away_team: str
    date: datetime
    venue: Optional[str] = None
    gender: Gender


class SportResponse(SportSummary):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    university: Optional[UniversitySummary] = None
    fixtures: list[SportFixtureItem] = []


class SportListResponse(PaginatedResponse):
    data: list[SportResponse]


class SportCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: SportType
    university_id: Optional[str] = None


class SportUpdate(ApiModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[SportType] = None
    university_id: Optional[str] = None
