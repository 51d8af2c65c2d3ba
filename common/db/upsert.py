"""Conditional-write helpers (INSERT ... ON CONFLICT DO UPDATE) across dialects."""

from typing import Any, Dict, Iterable

from sqlalchemy import and_
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def build_upsert(
    session: AsyncSession,
    entity_class: Any,
    values: Dict[str, Any],
    conflict_columns: Iterable[str],
    update_columns: Iterable[str],
    match_columns: Iterable[str] = (),
):
    """
    Build an upsert keyed on a unique constraint.

    The database resolves the conflict atomically, so two concurrent callers
    with the same key can never both insert.

    Args:
        session: Session whose bind decides the SQL dialect
        entity_class: Mapped entity to write
        values: Column values for the insert
        conflict_columns: Columns of the unique constraint
        update_columns: Columns overwritten from the proposed row on conflict
        match_columns: Columns that must already equal the proposed row for the
            update to apply. When they differ nothing is written and the
            statement returns no row.

    Returns:
        Insert statement returning the id of the inserted or updated row
    """
    dialect_name = session.get_bind().dialect.name
    insert_fn = _INSERTS.get(dialect_name)
    if insert_fn is None:
        raise NotImplementedError(f"Upsert not supported for dialect {dialect_name}")

    stmt = insert_fn(entity_class).values(**values)
    set_ = {column: stmt.excluded[column] for column in update_columns}
    if hasattr(entity_class, "updated_at"):
        set_["updated_at"] = func.now()

    where = None
    match_columns = list(match_columns)
    if match_columns:
        where = and_(
            *(
                getattr(entity_class, column) == stmt.excluded[column]
                for column in match_columns
            )
        )

    return stmt.on_conflict_do_update(
        index_elements=list(conflict_columns), set_=set_, where=where
    ).returning(entity_class.id)
