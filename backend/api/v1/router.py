"""api/v1/router.py — Aggregates all v1 endpoint routers.

Included in api/main.py under the prefix /api/v1, so final paths are:
    /api/v1/universities
    /api/v1/sports
    /api/v1/fixtures
    /api/v1/results
    /api/v1/users
"""

from fastapi import APIRouter

from api.v1.endpoints import fixtures, results, sports, universities, users
from schemas.shared import ErrorResponse

# Documented on every v1 route; the bodies come from the handlers in api/main.py
ERROR_RESPONSES = {
    status: {"model": ErrorResponse, "description": description}
    for status, description in (
        (404, "Not found"),
        (409, "Conflict with an existing row"),
        (422, "Validation failed"),
        (500, "Storage failure"),
    )
}

v1_router = APIRouter(responses=ERROR_RESPONSES)

v1_router.include_router(universities.router, prefix="/universities", tags=["universities"])
v1_router.include_router(sports.router,       prefix="/sports",       tags=["sports"])
v1_router.include_router(fixtures.router,     prefix="/fixtures",     tags=["fixtures"])
v1_router.include_router(results.router,      prefix="/results",      tags=["results"])
v1_router.include_router(users.router,        prefix="/users",        tags=["users"])
