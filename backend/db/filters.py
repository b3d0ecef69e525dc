"""Compile a core.query.QueryDescriptor into SQLAlchemy statements.

Field names in the descriptor are the API's camelCase names; they are mapped
onto model attributes with pydantic's to_snake ("homeTeam" -> home_team).

Predicate shapes understood by compile_where():

    {"OR": [p1, p2, ...]}                           any of (empty list matches nothing)
    {"name": {"contains": "x", "mode": "insensitive"}}  substring match
    {"gender": "FEMALE"}                            equality (enum values validated)
    {"sport": {"universityId": "…"}}                through the `sport` relationship

A nested predicate keyed by the model's own name ("sport" on Sport) is applied
to the model itself, so `universityId` works when listing sports directly.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic.alias_generators import to_snake
from sqlalchemy import Enum as SAEnum
from sqlalchemy import String, and_, cast, false, func, inspect, or_, select, true
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import StorageFailure, ValidationFailure
from core.query import SORT_DESC, QueryDescriptor

logger = logging.getLogger(__name__)


def _resource(model) -> str:
    return model.__tablename__


# Write-only columns: never filterable or sortable
_HIDDEN_COLUMNS = frozenset({"password"})


def _column(model, name: str):
    attr = to_snake(name)
    if attr in _HIDDEN_COLUMNS or attr not in inspect(model).column_attrs:
        return None
    return getattr(model, attr)


def _enum_value(column, key: str, value: Any):
    enum_class = column.type.enum_class
    try:
        return enum_class(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_class)
        raise ValidationFailure(
            f"Invalid value '{value}' for {key}; expected one of: {allowed}"
        ) from None


def _match(model, column, key: str, condition: Mapping[str, Any]):
    if "contains" not in condition:
        raise ValidationFailure(f"Unsupported condition for {key} on {_resource(model)}")
    expr = column
    if not isinstance(column.type, String) or isinstance(column.type, SAEnum):
        # scores and statuses are searched by their text form
        expr = cast(column, String)
    needle = str(condition["contains"])
    if condition.get("mode") == "insensitive":
        return expr.icontains(needle, autoescape=True)
    return expr.contains(needle, autoescape=True)


def _field_clause(model, key: str, value: Any):
    mapper = inspect(model)
    attr = to_snake(key)

    if attr in mapper.relationships and isinstance(value, Mapping):
        relation = mapper.relationships[attr]
        inner = compile_where(relation.mapper.class_, value)
        related = getattr(model, attr)
        return related.any(inner) if relation.uselist else related.has(inner)

    column = _column(model, key)
    if column is not None:
        if isinstance(value, Mapping):
            return _match(model, column, key, value)
        if isinstance(column.type, SAEnum):
            return column == _enum_value(column, key, value)
        return column == value

    if attr == to_snake(model.__name__) and isinstance(value, Mapping):
        return compile_where(model, value)

    raise ValidationFailure(f"Cannot filter {_resource(model)} by '{key}'")


def compile_where(model, where: Mapping[str, Any]):
    """Return a boolean SQL expression for `where`; an empty mapping is always true."""
    clauses = []
    for key, value in where.items():
        if key == "OR":
            branches = [compile_where(model, branch) for branch in value]
            clauses.append(or_(*branches) if branches else false())
        else:
            clauses.append(_field_clause(model, key, value))
    return and_(*clauses) if clauses else true()


def compile_order_by(model, order_by: Mapping[str, str]) -> list:
    """ORDER BY clauses for `order_by`, always ending in created_at, id for stable pages."""
    clauses = []
    used = set()
    for key, direction in order_by.items():
        column = _column(model, key)
        if column is None:
            raise ValidationFailure(f"Cannot sort {_resource(model)} by '{key}'")
        clauses.append(column.desc() if direction == SORT_DESC else column.asc())
        used.add(column.key)

    for tiebreak in (model.created_at, model.id):
        if tiebreak.key not in used:
            clauses.append(tiebreak.asc())
    return clauses


def paginate(db: Session, model, descriptor: QueryDescriptor, *options) -> tuple[list, int]:
    """Fetch one page and the total count, both filtered by the same predicate."""
    where = compile_where(model, descriptor.where)

    stmt = (
        select(model)
        .where(where)
        .order_by(*compile_order_by(model, descriptor.order_by))
        .offset(descriptor.skip)
        .limit(descriptor.take)
        .options(*options)
    )
    try:
        items = list(db.scalars(stmt).unique().all())
        total = db.scalar(select(func.count()).select_from(model).where(where)) or 0
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(
            "list query failed",
            extra={"resource": _resource(model), "error": str(exc)},
            exc_info=True,
        )
        raise StorageFailure(f"An error occurred while listing {_resource(model)}") from exc

    logger.debug(
        "list query executed",
        extra={
            "resource": _resource(model),
            "skip": descriptor.skip,
            "take": descriptor.take,
            "filters": sorted(descriptor.where),
            "returned": len(items),
            "total": total,
        },
    )
    return items, total
