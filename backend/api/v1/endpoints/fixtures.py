"""api/v1/endpoints/fixtures.py — Fixture endpoints.

Routes:
    GET    /fixtures          Paginated list; search matches homeTeam, awayTeam, venue;
                              filters: gender, sportId, universityId (via the fixture's sport)
    POST   /fixtures          Create
    GET    /fixtures/{id}     Single fixture + sport (with university) + result
    PUT    /fixtures/{id}     Partial update
    DELETE /fixtures/{id}     Hard delete (its result goes with it)
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session, selectinload

from api.dependencies import get_db, list_query_params
from core.config import settings
from core.query import build_query
from db.crud import apply_changes, commit, get_or_404, require_reference
from db.filters import paginate
from db.models import Fixture, Sport
from schemas.fixture import FixtureCreate, FixtureListResponse, FixtureResponse, FixtureUpdate

logger = logging.getLogger(__name__)

router = APIRouter()

SEARCH_FIELDS = ["homeTeam", "awayTeam", "venue"]

_LOAD = (
    selectinload(Fixture.sport).selectinload(Sport.university),
    selectinload(Fixture.result),
)


@router.get("", response_model=FixtureListResponse, summary="List fixtures")
def list_fixtures(
    params: dict = Depends(list_query_params),
    db: Session = Depends(get_db),
):
    query = build_query(params, SEARCH_FIELDS, max_limit=settings.max_page_size)
    items, total = paginate(db, Fixture, query, *_LOAD)
    return FixtureListResponse(
        data=[FixtureResponse.model_validate(f) for f in items],
        total=total,
        page=query.page,
        limit=query.limit,
    )


@router.post("", response_model=FixtureResponse, status_code=201, summary="Create fixture")
def create_fixture(payload: FixtureCreate, db: Session = Depends(get_db)):
    require_reference(db, Sport, payload.sport_id, "sportId")
    fixture = Fixture(**payload.model_dump())
    db.add(fixture)
    commit(db, "creating the fixture")

    logger.info(
        "fixture created",
        extra={"fixture_id": fixture.id, "sport_id": fixture.sport_id, "date": fixture.date.isoformat()},
    )
    return FixtureResponse.model_validate(fixture)


@router.get("/{fixture_id}", response_model=FixtureResponse, summary="Get fixture")
def get_fixture(fixture_id: str, db: Session = Depends(get_db)):
    return FixtureResponse.model_validate(get_or_404(db, Fixture, fixture_id, "Fixture", *_LOAD))


@router.put("/{fixture_id}", response_model=FixtureResponse, summary="Update fixture")
def update_fixture(fixture_id: str, payload: FixtureUpdate, db: Session = Depends(get_db)):
    fixture = get_or_404(db, Fixture, fixture_id, "Fixture")
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    require_reference(db, Sport, changes.get("sport_id"), "sportId")

    apply_changes(fixture, changes)
    commit(db, "updating the fixture")
    return FixtureResponse.model_validate(fixture)


@router.delete("/{fixture_id}", status_code=204, response_class=Response, summary="Delete fixture")
def delete_fixture(fixture_id: str, db: Session = Depends(get_db)):
    fixture = get_or_404(db, Fixture, fixture_id, "Fixture")
    db.delete(fixture)
    commit(db, "deleting the fixture")

    logger.info("fixture deleted", extra={"fixture_id": fixture_id})
    return Response(status_code=204)
