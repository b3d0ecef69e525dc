"""core/query.py — Turns loose list-endpoint query parameters into a query descriptor.

Every list endpoint accepts the same flat, string-typed parameters:

    page, limit, sortBy, sortOrder, search, gender, role, sportId, universityId

build_query() normalizes them into a QueryDescriptor (skip / take / order_by /
where) that db/filters.py compiles into SQLAlchemy. The builder knows nothing
about models or sessions; it is a pure function of its inputs.

The `where` mapping uses API (camelCase) field names:

    {
        "OR": [{"name": {"contains": "alpha", "mode": "insensitive"}}, ...],
        "gender": "FEMALE",
        "sportId": "…",
        "sport": {"universityId": "…"},
    }

`universityId` always reaches through the `sport` relation, whichever
resource is being listed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

# Largest OFFSET a database will bind (signed 64-bit)
MAX_OFFSET = 2**63 - 1

SORT_ASC = "asc"
SORT_DESC = "desc"

# Exact-match filters copied straight into `where`
_EXACT_FILTERS = ("gender", "role", "sportId")


@dataclass(frozen=True)
class QueryDescriptor:
    skip: int
    take: int
    order_by: dict[str, str] = field(default_factory=dict)
    where: dict[str, Any] = field(default_factory=dict)

    @property
    def page(self) -> int:
        return self.skip // self.take + 1

    @property
    def limit(self) -> int:
        return self.take


def _positive_int(value: Any, default: int) -> int:
    """Parse a page/limit value; anything missing, non-numeric or < 1 gives `default`."""
    if value is None or value == "":
        return default
    try:
        parsed = int(str(value).strip())
    except ValueError:
        return default
    return parsed if parsed >= 1 else default


def _sort_order(value: Any) -> str:
    if isinstance(value, str) and value.strip().lower() == SORT_DESC:
        return SORT_DESC
    return SORT_ASC


def build_query(
    params: Mapping[str, Any],
    searchable_fields: Sequence[str],
    max_limit: Optional[int] = MAX_LIMIT,
) -> QueryDescriptor:
    """Build the descriptor for one list request.

    Args:
        params:            Raw query parameters; unknown keys are ignored and
                           empty strings count as absent.
        searchable_fields: Fields matched case-insensitively by `search`.
        max_limit:         Upper bound for `limit`; None leaves it unbounded.
    """
    page = _positive_int(params.get("page"), DEFAULT_PAGE)
    limit = _positive_int(params.get("limit"), DEFAULT_LIMIT)
    if max_limit is not None:
        limit = min(limit, max_limit)
    # OFFSET and LIMIT are bound as 64-bit integers; later pages are simply empty
    limit = min(limit, MAX_OFFSET)
    page = min(page, MAX_OFFSET // limit + 1)

    order_by: dict[str, str] = {}
    sort_by = params.get("sortBy")
    if sort_by:
        order_by[sort_by] = _sort_order(params.get("sortOrder"))

    where: dict[str, Any] = {}
    search = params.get("search")
    if search:
        where["OR"] = [
            {name: {"contains": search, "mode": "insensitive"}}
            for name in searchable_fields
        ]

    for key in _EXACT_FILTERS:
        if params.get(key):
            where[key] = params[key]

    if params.get("universityId"):
        where["sport"] = {"universityId": params["universityId"]}

    return QueryDescriptor(
        skip=(page - 1) * limit,
        take=limit,
        order_by=order_by,
        where=where,
    )
