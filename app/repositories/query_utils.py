"""Small helpers shared by repositories that build filtered listings."""
from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy.orm import Query

LIKE_ESCAPE = "\\"


def like_pattern(text: str) -> str:
    """Case-insensitive substring pattern with LIKE wildcards escaped."""
    escaped = (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def apply_sort(
    query: Query,
    columns: Mapping[str, Any],
    field: str,
    order: str,
    tiebreaker: Any,
) -> Query:
    """
    Order by a whitelisted column, then by the tiebreaker in the same direction.

    Raises:
        ValueError: If field is not one of the sortable columns
    """
    if field not in columns:
        raise ValueError(f"Cannot sort by '{field}'; allowed: {', '.join(sorted(columns))}")
    column = columns[field]
    if order == "asc":
        return query.order_by(column.asc(), tiebreaker.asc())
    return query.order_by(column.desc(), tiebreaker.desc())
