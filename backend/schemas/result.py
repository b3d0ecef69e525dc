"""schemas/result.py — Result request/response schemas.

Results are written through multipart forms (an image may ride along), so the
scorer lists arrive as JSON-encoded strings, e.g. homeScorers='["Ada", "Bea"]'.
The same ResultResponse payload is pushed to live subscribers as resultUpdate.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator

from db.enums import GameStatus
from schemas.fixture import FixtureSummary
from schemas.shared import ApiModel, PaginatedResponse


def _parse_scorers(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    if not value.strip():
        return []
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        raise ValueError("must be a JSON array of player names") from None
    if not isinstance(parsed, list):
        raise ValueError("must be a JSON array of player names")
    return parsed


class ResultResponse(ApiModel):
    id: str
    fixture_id: str
    home_score: int
    away_score: int
    home_scorers: list[str] = []
    away_scorers: list[str] = []
    status: GameStatus
    current_period: Optional[str] = None
    time_elapsed: Optional[int] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    fixture: Optional[FixtureSummary] = None


class ResultListResponse(PaginatedResponse):
    data: list[ResultResponse]


class ResultCreate(ApiModel):
    fixture_id: str
    home_score: int = Field(0, ge=0)
    away_score: int = Field(0, ge=0)
    home_scorers: list[str] = []
    away_scorers: list[str] = []
    status: GameStatus = GameStatus.NOT_STARTED
    current_period: Optional[str] = Field(None, max_length=50)
    time_elapsed: Optional[int] = Field(None, ge=0)

    @field_validator("home_scorers", "away_scorers", mode="before")
    @classmethod
    def _decode_scorers(cls, v: Any) -> Any:
        return _parse_scorers(v)


class ResultUpdate(ApiModel):
    home_score: Optional[int] = Field(None, ge=0)
    away_score: Optional[int] = Field(None, ge=0)
    home_scorers: Optional[list[str]] = None
    away_scorers: Optional[list[str]] = None
    status: Optional[GameStatus] = None
    current_period: Optional[str] = Field(None, max_length=50)
    time_elapsed: Optional[int] = Field(None, ge=0)

    @field_validator("home_scorers", "away_scorers", mode="before")
    @classmethod
    def _decode_scorers(cls, v: Any) -> Any:
        return _parse_scorers(v)
