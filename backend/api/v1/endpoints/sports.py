"""api/v1/endpoints/sports.py — Sport endpoints.

Routes:
    GET    /sports            Paginated list; search matches name; universityId filter
    POST   /sports            Create
    GET    /sports/{id}       Single sport + university + fixtures
    PUT    /sports/{id}       Partial update
    DELETE /sports/{id}       Hard delete (fixtures and their results go with it)
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
from db.models import Sport, University
from schemas.sport import SportCreate, SportListResponse, SportResponse, SportUpdate

logger = logging.getLogger(__name__)

router = APIRouter()

SEARCH_FIELDS = ["name"]

_LOAD = (selectinload(Sport.university), selectinload(Sport.fixtures))


@router.get("", response_model=SportListResponse, summary="List sports")
def list_sports(
    params: dict = Depends(list_query_params),
    db: Session = Depends(get_db),
):
    query = build_query(params, SEARCH_FIELDS, max_limit=settings.max_page_size)
    items, total = paginate(db, Sport, query, *_LOAD)
    return SportListResponse(
        data=[SportResponse.model_validate(s) for s in items],
        total=total,
        page=query.page,
        limit=query.limit,
    )


@router.post("", response_model=SportResponse, status_code=201, summary="Create sport")
def create_sport(payload: SportCreate, db: Session = Depends(get_db)):
    require_reference(db, University, payload.university_id, "universityId")
    sport = Sport(**payload.model_dump())
    db.add(sport)
    commit(db, "creating the sport")

    logger.info("sport created", extra={"sport_id": sport.id, "university_id": sport.university_id})
    return SportResponse.model_validate(sport)


@router.get("/{sport_id}", response_model=SportResponse, summary="Get sport")
def get_sport(sport_id: str, db: Session = Depends(get_db)):
    return SportResponse.model_validate(get_or_404(db, Sport, sport_id, "Sport", *_LOAD))


@router.put("/{sport_id}", response_model=SportResponse, summary="Update sport")
def update_sport(sport_id: str, payload: SportUpdate, db: Session = Depends(get_db)):
    sport = get_or_404(db, Sport, sport_id, "Sport")
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    require_reference(db, University, changes.get("university_id"), "universityId")

    apply_changes(sport, changes)
    commit(db, "updating the sport")
    return SportResponse.model_validate(sport)


@router.delete("/{sport_id}", status_code=204, response_class=Response, summary="Delete sport")
def delete_sport(sport_id: str, db: Session = Depends(get_db)):
    sport = get_or_404(db, Sport, sport_id, "Sport")
    db.delete(sport)
    commit(db, "deleting the sport")

    logger.info("sport deleted", extra={"sport_id": sport_id})
    return Response(status_code=204)
