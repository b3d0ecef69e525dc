"""schemas/university.py — University request/response schemas.

Create/update arrive as multipart form fields (name, location, image), so the
request models are built by the endpoint from Form values.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from db.enums import Role, SportType
from schemas.shared import ApiModel, PaginatedResponse


class UniversitySummary(ApiModel):
    id: str
    name: str
    location: Optional[str] = None
    image_url: Optional[str] = None


class UniversitySportItem(ApiModel):
    id: str
    name: str
    type: SportType


class UniversityUserItem(ApiModel):
    """Public slice of a user shown on the university page."""
    id: str
    name: str
    email: str
    role: Role


class UniversityResponse(UniversitySummary):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    sports: list[UniversitySportItem] = []
    users: list[UniversityUserItem] = []


class UniversityListResponse(PaginatedResponse):
    data: list[UniversityResponse]


class UniversityCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=255)
    location: Optional[str] = Field(None, max_length=255)


class UniversityUpdate(ApiModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    location: Optional[str] = Field(None, max_length=255)
