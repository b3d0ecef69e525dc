from schemas.shared import ApiModel, ErrorResponse, PaginatedResponse
from schemas.university import (
    UniversityCreate, UniversityListResponse, UniversityResponse, UniversitySummary, UniversityUpdate,
)
from schemas.sport import SportCreate, SportListResponse, SportResponse, SportSummary, SportUpdate
from schemas.fixture import FixtureCreate, FixtureListResponse, FixtureResponse, FixtureSummary, FixtureUpdate
from schemas.result import ResultCreate, ResultListResponse, ResultResponse, ResultUpdate
from schemas.user import UserCreate, UserListResponse, UserResponse, UserUpdate

__all__ = [
    "ApiModel", "ErrorResponse", "PaginatedResponse",
    "UniversityCreate", "UniversityListResponse", "UniversityResponse", "UniversitySummary", "UniversityUpdate",
    "SportCreate", "SportListResponse", "SportResponse", "SportSummary", "SportUpdate",
    "FixtureCreate", "FixtureListResponse", "FixtureResponse", "FixtureSummary", "FixtureUpdate",
    "ResultCreate", "ResultListResponse", "ResultResponse", "ResultUpdate",
    "UserCreate", "UserListResponse", "UserResponse", "UserUpdate",
]
