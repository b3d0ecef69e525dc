"""Small helpers shared by the resource endpoints.

Keeps the lookup / commit / error-mapping rules identical across the five
resources: missing rows become NotFoundError, dangling references become
ValidationFailure, unique-constraint violations become ConflictError and any
other database failure becomes StorageFailure after a rollback.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import ConflictError, NotFoundError, StorageFailure, ValidationFailure

logger = logging.getLogger(__name__)


def _read(db: Session, model, obj_id: str, options=None) -> Any:
    try:
        return db.get(model, obj_id, options=options)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(
            "read failed",
            extra={"table": model.__tablename__, "error": str(exc)},
            exc_info=True,
        )
        raise StorageFailure(f"An error occurred while reading {model.__tablename__}") from exc


def get_or_404(db: Session, model, obj_id: str, label: str, *options) -> Any:
    obj = _read(db, model, obj_id, options or None)
    if obj is None:
        raise NotFoundError(f"{label} not found")
    return obj


def require_reference(db: Session, model, obj_id: Optional[str], field: str) -> None:
    """Reject writes that point at a row that does not exist."""
    if obj_id is not None and _read(db, model, obj_id) is None:
        raise ValidationFailure(f"{field} '{obj_id}' does not exist")


def apply_changes(obj: Any, changes: dict[str, Any]) -> Any:
    for attr, value in changes.items():
        setattr(obj, attr, value)
    return obj


def commit(db: Session, action: str, conflict_message: str = "Resource already exists") -> None:
    """Commit the session, translating database errors into the app taxonomy.

    Args:
        action: Human phrase for the failure message, e.g. "creating the result".
        conflict_message: Message returned with a 409 on unique violations.
    """
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.info("write rejected by constraint", extra={"action": action, "error": str(exc.orig)})
        raise ConflictError(conflict_message) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("write failed", extra={"action": action, "error": str(exc)}, exc_info=True)
        raise StorageFailure(f"An error occurred while {action}") from exc
