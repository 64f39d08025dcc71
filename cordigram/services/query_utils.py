from __future__ import annotations

from typing import Any, Iterable
from uuid import UUID

from sqlalchemy import case
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from ..core.config import get_settings

settings = get_settings()

# Dialects with INSERT ... ON CONFLICT DO NOTHING support
_CONFLICT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

LIKE_ESCAPE = "\\"


def clamp_limit(limit: Any, default: int | None = None, maximum: int | None = None) -> int:
    """
    Coerce a user supplied page size into [1, maximum].

    Missing, zero or non-numeric values fall back to the default.
    """
    default = default or settings.SEARCH_DEFAULT_LIMIT
    maximum = maximum or settings.SEARCH_MAX_LIMIT
    try:
        value = int(limit)
    except (TypeError, ValueError):
        return default
    if not value:
        return default
    return max(1, min(value, maximum))


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so user input only ever matches literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def as_uuid(value: Any) -> UUID | None:
    if isinstance(value, UUID):
        return value
    if not value:
        return None
    try:
        return UUID(str(value).strip())
    except (TypeError, ValueError):
        return None


def insert_ignoring_conflicts(
    db: Session,
    model: Any,
    values: dict[str, Any],
    conflict_columns: Iterable[str],
) -> int:
    """
    INSERT ... ON CONFLICT (conflict_columns) DO NOTHING.

    Returns the number of inserted rows: 1 when this call created the row,
    0 when a row with the same key already existed (including one committed
    by a concurrent request).
    """
    dialect = db.get_bind().dialect.name
    insert = _CONFLICT_INSERTS.get(dialect)
    if insert is None:
        raise RuntimeError(f"Unsupported database dialect for conflict-free insert: {dialect}")

    stmt = (
        insert(model.__table__)
        .values(**values)
        .on_conflict_do_nothing(index_elements=list(conflict_columns))
    )
    return db.execute(stmt).rowcount


def atomic_increment(db: Session, column: Any, criterion: Any, delta: int) -> int:
    """
    Single-statement counter update that never goes below zero.

    Returns the number of matched rows.
    """
    bumped = column + delta
    return (
        db.query(column.class_)
        .filter(criterion)
        .update(
            {column: case((bumped < 0, 0), else_=bumped)},
            synchronize_session=False,
        )
    )
