"""api/v1/endpoints/users.py — User endpoints.

Routes:
    GET    /users             Paginated list; search matches name, email, role, gender;
                              filters: role, gender
    POST   /users             Create (password stored as a bcrypt hash)
    GET    /users/{id}        Single user + university name
    PUT    /users/{id}        Partial profile update (no password changes)
    DELETE /users/{id}        Hard delete
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session, selectinload

from api.dependencies import get_db, list_query_params
from core.config import settings
from core.query import build_query
from core.security import hash_password
from db.crud import apply_changes, commit, get_or_404, require_reference
from db.filters import paginate
from db.models import University, User
from schemas.user import UserCreate, UserListResponse, UserResponse, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter()

SEARCH_FIELDS = ["name", "email", "role", "gender"]

_LOAD = (selectinload(User.university),)

_EMAIL_TAKEN = "A user with this email already exists"


@router.get("", response_model=UserListResponse, summary="List users")
def list_users(
    params: dict = Depends(list_query_params),
    db: Session = Depends(get_db),
):
    query = build_query(params, SEARCH_FIELDS, max_limit=settings.max_page_size)
    items, total = paginate(db, User, query, *_LOAD)
    return UserListResponse(
        data=[UserResponse.model_validate(u) for u in items],
        total=total,
        page=query.page,
        limit=query.limit,
    )


@router.post("", response_model=UserResponse, status_code=201, summary="Create user")
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    require_reference(db, University, payload.university_id, "universityId")

    data = payload.model_dump(exclude={"password"})
    user = User(**data, password=hash_password(payload.password))
    db.add(user)
    commit(db, "creating the user", conflict_message=_EMAIL_TAKEN)

    logger.info("user created", extra={"user_id": user.id, "role": user.role.value})
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse, summary="Get user")
def get_user(user_id: str, db: Session = Depends(get_db)):
    return UserResponse.model_validate(get_or_404(db, User, user_id, "User", *_LOAD))


@router.put("/{user_id}", response_model=UserResponse, summary="Update user")
def update_user(user_id: str, payload: UserUpdate, db: Session = Depends(get_db)):
    user = get_or_404(db, User, user_id, "User")
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    require_reference(db, University, changes.get("university_id"), "universityId")

    apply_changes(user, changes)
    commit(db, "updating the user", conflict_message=_EMAIL_TAKEN)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", status_code=204, response_class=Response, summary="Delete user")
def delete_user(user_id: str, db: Session = Depends(get_db)):
    user = get_or_404(db, User, user_id, "User")
    db.delete(user)
    commit(db, "deleting the user")

    logger.info("user deleted", extra={"user_id": user_id})
    return Response(status_code=204)
