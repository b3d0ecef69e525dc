"""api/v1/endpoints/universities.py — University endpoints.

Routes:
    GET    /universities          Paginated list; search matches name, location
    POST   /universities          Create (multipart: name, location, image)
    GET    /universities/{id}     Single university + its sports and users
    PUT    /universities/{id}     Partial update (multipart, optional new image)
    DELETE /universities/{id}     Hard delete; sports and users are detached
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile
from sqlalchemy.orm import Session, selectinload

from api.dependencies import get_db, get_image_store, list_query_params
from api.forms import parse_form, upload_image
from core.config import settings
from core.images import ImageStore
from core.query import build_query
from db.crud import apply_changes, commit, get_or_404
from db.filters import paginate
from db.models import University
from schemas.university import (
    UniversityCreate,
    UniversityListResponse,
    UniversityResponse,
    UniversityUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter()

SEARCH_FIELDS = ["name", "location"]

_LOAD = (selectinload(University.sports), selectinload(University.users))


@router.get("", response_model=UniversityListResponse, summary="List universities")
def list_universities(
    params: dict = Depends(list_query_params),
    db: Session = Depends(get_db),
):
    query = build_query(params, SEARCH_FIELDS, max_limit=settings.max_page_size)
    items, total = paginate(db, University, query, *_LOAD)
    return UniversityListResponse(
        data=[UniversityResponse.model_validate(u) for u in items],
        total=total,
        page=query.page,
        limit=query.limit,
    )


@router.post("", response_model=UniversityResponse, status_code=201, summary="Create university")
def create_university(
    name: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    images: ImageStore = Depends(get_image_store),
):
    payload = parse_form(UniversityCreate, {"name": name, "location": location})
    university = University(**payload.model_dump(), image_url=upload_image(images, image))
    db.add(university)
    commit(db, "creating the university")

    logger.info("university created", extra={"university_id": university.id})
    return UniversityResponse.model_validate(university)


@router.get("/{university_id}", response_model=UniversityResponse, summary="Get university")
def get_university(university_id: str, db: Session = Depends(get_db)):
    university = get_or_404(db, University, university_id, "University", *_LOAD)
    return UniversityResponse.model_validate(university)


@router.put("/{university_id}", response_model=UniversityResponse, summary="Update university")
def update_university(
    university_id: str,
    name: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    images: ImageStore = Depends(get_image_store),
):
    university = get_or_404(db, University, university_id, "University")
    payload = parse_form(UniversityUpdate, {"name": name, "location": location})
    changes = payload.model_dump(exclude_unset=True)

    image_url = upload_image(images, image)
    if image_url:
        changes["image_url"] = image_url

    apply_changes(university, changes)
    commit(db, "updating the university")
    return UniversityResponse.model_validate(university)


@router.delete("/{university_id}", status_code=204, response_class=Response, summary="Delete university")
def delete_university(university_id: str, db: Session = Depends(get_db)):
    university = get_or_404(db, University, university_id, "University")
    db.delete(university)
    commit(db, "deleting the university")

    logger.info("university deleted", extra={"university_id": university_id})
    return Response(status_code=204)
