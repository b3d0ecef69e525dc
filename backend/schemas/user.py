"""schemas/user.py — User request/response schemas.

The password is write-only: accepted on create, stored as a bcrypt hash,
never included in any response.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from db.enums import Gender, Role
from schemas.shared import ApiModel, PaginatedResponse

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserUniversity(ApiModel):
    name: str


class UserResponse(ApiModel):
    id: str
    name: str
    email: str
    role: Role
    gender: Optional[Gender] = None
    university_id: Optional[str] = None
    university: Optional[UserUniversity] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserListResponse(PaginatedResponse):
    data: list[UserResponse]


class UserCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., max_length=255, pattern=_EMAIL_PATTERN)
    password: str = Field(..., min_length=1)
    role: Role = Role.STUDENT
    gender: Optional[Gender] = None
    university_id: Optional[str] = None


class UserUpdate(ApiModel):
    """Profile fields only; passwords are not changed through PUT."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255, pattern=_EMAIL_PATTERN)
    role: Optional[Role] = None
    gender: Optional[Gender] = None
    university_id: Optional[str] = None
