"""
dependencies.py — FastAPI dependency injection

Provides:
    get_db()             request-scoped SQLAlchemy session
    list_query_params()  the shared list-endpoint query parameters, as raw strings
    get_broadcaster()    the application's live results channel (Publisher)
    get_image_store()    image upload backend (Cloudinary)

Tests swap any of these through app.dependency_overrides.

Usage in a route handler:
    from fastapi import Depends
    from sqlalchemy.orm import Session
    from api.dependencies import get_db, list_query_params

    @router.get("")
    def example(params: dict = Depends(list_query_params), db: Session = Depends(get_db)):
        ...
"""

from functools import lru_cache
from typing import Generator, Optional

from fastapi import Query, Request
from sqlalchemy import text
from sqlalchemy.orm import Session

from core.broadcast import BroadcastChannel
from core.config import settings
from core.images import CloudinaryImageStore, ImageStore
from db.database import SessionLocal


def get_db() -> Generator[Session, None, None]:
    """Yield a database session, guaranteed to close after the request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connectivity(db: Session) -> bool:
    """Execute SELECT 1 to verify the database is reachable.

    Raises:
        RuntimeError: with a descriptive message if the connection fails.
    """
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception as exc:
        raise RuntimeError(f"Database connectivity check failed: {exc}") from exc


def list_query_params(
    page: Optional[str] = Query(None, description="Page number (1-indexed, default 1)"),
    limit: Optional[str] = Query(None, description=f"Items per page (default 10, max {settings.max_page_size})"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="Field to sort by, e.g. name or date"),
    sort_order: Optional[str] = Query(None, alias="sortOrder", description="asc (default) or desc"),
    search: Optional[str] = Query(None, description="Case-insensitive substring match on the resource's text fields"),
    gender: Optional[str] = Query(None, description="Exact gender: MALE, FEMALE, OTHER"),
    role: Optional[str] = Query(None, description="Exact role: ADMIN, COACH, STUDENT, STAFF"),
    sport_id: Optional[str] = Query(None, alias="sportId", description="Exact sport id"),
    university_id: Optional[str] = Query(None, alias="universityId", description="University id, matched through the sport relation"),
) -> dict[str, str]:
    """Collect the list parameters untouched; core.query.build_query does the parsing."""
    raw = {
        "page": page,
        "limit": limit,
        "sortBy": sort_by,
        "sortOrder": sort_order,
        "search": search,
        "gender": gender,
        "role": role,
        "sportId": sport_id,
        "universityId": university_id,
    }
    return {key: value for key, value in raw.items() if value is not None}


def get_broadcaster(request: Request) -> BroadcastChannel:
    return request.app.state.broadcaster


@lru_cache
def get_image_store() -> ImageStore:
    return CloudinaryImageStore(settings)
