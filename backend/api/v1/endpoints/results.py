"""api/v1/endpoints/results.py — Result endpoints with live broadcast.

Routes:
    GET    /results           Paginated list; search matches homeScore, awayScore, status
    POST   /results           Create (multipart; one result per fixture, 409 otherwise)
    GET    /results/{id}      Single result + fixture
    PUT    /results/{id}      Partial update (multipart, optional new image)
    DELETE /results/{id}      Hard delete

Every successful create/update pushes `resultUpdate` (the full ResultResponse)
and every successful delete pushes `resultDelete` (the id) to subscribers of
/ws/results. The push is queued as a background task once the commit has
succeeded, so it runs after the response is sent and a failed write never
broadcasts anything.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, Response, UploadFile
from sqlalchemy.orm import Session, selectinload

from api.dependencies import get_broadcaster, get_db, get_image_store, list_query_params
from api.forms import parse_form, upload_image
from core.broadcast import RESULT_DELETE, RESULT_UPDATE, Publisher
from core.config import settings
from core.images import ImageStore
from core.query import build_query
from db.crud import apply_changes, commit, get_or_404, require_reference
from db.filters import paginate
from db.models import Fixture, Result
from schemas.result import ResultCreate, ResultListResponse, ResultResponse, ResultUpdate

logger = logging.getLogger(__name__)

router = APIRouter()

SEARCH_FIELDS = ["homeScore", "awayScore", "status"]

_LOAD = (selectinload(Result.fixture),)


def _announce(background: BackgroundTasks, broadcaster: Publisher, result: Result) -> ResultResponse:
    response = ResultResponse.model_validate(result)
    background.add_task(
        broadcaster.publish, RESULT_UPDATE, response.model_dump(mode="json", by_alias=True)
    )
    return response


@router.get("", response_model=ResultListResponse, summary="List results")
def list_results(
    params: dict = Depends(list_query_params),
    db: Session = Depends(get_db),
):
    query = build_query(params, SEARCH_FIELDS, max_limit=settings.max_page_size)
    items, total = paginate(db, Result, query, *_LOAD)
    return ResultListResponse(
        data=[ResultResponse.model_validate(r) for r in items],
        total=total,
        page=query.page,
        limit=query.limit,
    )


@router.post("", response_model=ResultResponse, status_code=201, summary="Create result")
def create_result(
    background: BackgroundTasks,
    fixture_id: Optional[str] = Form(None, alias="fixtureId"),
    home_score: Optional[str] = Form(None, alias="homeScore"),
    away_score: Optional[str] = Form(None, alias="awayScore"),
    home_scorers: Optional[str] = Form(None, alias="homeScorers", description='JSON array, e.g. ["Ada", "Bea"]'),
    away_scorers: Optional[str] = Form(None, alias="awayScorers", description="JSON array"),
    status: Optional[str] = Form(None),
    current_period: Optional[str] = Form(None, alias="currentPeriod"),
    time_elapsed: Optional[str] = Form(None, alias="timeElapsed"),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    images: ImageStore = Depends(get_image_store),
    broadcaster: Publisher = Depends(get_broadcaster),
):
    payload = parse_form(ResultCreate, {
        "fixture_id": fixture_id,
        "home_score": home_score,
        "away_score": away_score,
        "home_scorers": home_scorers,
        "away_scorers": away_scorers,
        "status": status,
        "current_period": current_period,
        "time_elapsed": time_elapsed,
    })
    require_reference(db, Fixture, payload.fixture_id, "fixtureId")

    result = Result(**payload.model_dump(), image_url=upload_image(images, image))
    db.add(result)
    commit(db, "creating the result", conflict_message="A result already exists for this fixture")

    logger.info("result created", extra={"result_id": result.id, "fixture_id": result.fixture_id})
    return _announce(background, broadcaster, result)


@router.get("/{result_id}", response_model=ResultResponse, summary="Get result")
def get_result(result_id: str, db: Session = Depends(get_db)):
    return ResultResponse.model_validate(get_or_404(db, Result, result_id, "Result", *_LOAD))


@router.put("/{result_id}", response_model=ResultResponse, summary="Update result")
def update_result(
    result_id: str,
    background: BackgroundTasks,
    home_score: Optional[str] = Form(None, alias="homeScore"),
    away_score: Optional[str] = Form(None, alias="awayScore"),
    home_scorers: Optional[str] = Form(None, alias="homeScorers", description="JSON array"),
    away_scorers: Optional[str] = Form(None, alias="awayScorers", description="JSON array"),
    status: Optional[str] = Form(None),
    current_period: Optional[str] = Form(None, alias="currentPeriod"),
    time_elapsed: Optional[str] = Form(None, alias="timeElapsed"),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    images: ImageStore = Depends(get_image_store),
    broadcaster: Publisher = Depends(get_broadcaster),
):
    result = get_or_404(db, Result, result_id, "Result")
    payload = parse_form(ResultUpdate, {
        "home_score": home_score,
        "away_score": away_score,
        "home_scorers": home_scorers,
        "away_scorers": away_scorers,
        "status": status,
        "current_period": current_period,
        "time_elapsed": time_elapsed,
    })
    changes = payload.model_dump(exclude_unset=True)

    image_url = upload_image(images, image)
    if image_url:
        changes["image_url"] = image_url

    apply_changes(result, changes)
    commit(db, "updating the result")

    logger.info("result updated", extra={"result_id": result_id, "fields": sorted(changes)})
    return _announce(background, broadcaster, result)


@router.delete("/{result_id}", status_code=204, response_class=Response, summary="Delete result")
def delete_result(
    result_id: str,
    background: BackgroundTasks,
    db: Session = Depends(get_db),
    broadcaster: Publisher = Depends(get_broadcaster),
):
    result = get_or_404(db, Result, result_id, "Result")
    db.delete(result)
    commit(db, "deleting the result")

    logger.info("result deleted", extra={"result_id": result_id})
    background.add_task(broadcaster.publish, RESULT_DELETE, result_id)
    return Response(status_code=204)
