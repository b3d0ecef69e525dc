"""schemas/shared.py — Reusable building blocks shared across schema modules.

All API payloads use camelCase on the wire (homeTeam, imageUrl, ...) while
the Python side stays snake_case; ApiModel handles the translation.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PaginatedResponse(ApiModel):
    """List envelope fields; subclasses add a typed `data` list."""

    total: int
    page: int
    limit: int


class ErrorResponse(BaseModel):
    """Body of every non-2xx response (see the exception handlers in api/main.py)."""

    error: str
    status_code: int
    request_id: str | None = None
    details: Any = None
