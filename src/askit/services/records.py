# src/askit/services/records.py
"""CRUD-style helpers shared by the endpoint modules."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

from askit.core.errors import NotFoundError
from askit.db.session import Base

__all__ = [
    "get_or_404",
    "list_rows",
    "save",
    "remove",
]

ModelT = TypeVar("ModelT", bound=Base)


def get_or_404(db: Session, model: type[ModelT], row_id: int, label: str | None = None) -> ModelT:
    """Return a row by primary key or raise NotFoundError."""
    row = db.get(model, row_id)
    if row is None:
        raise NotFoundError(f"{label or model.__name__} {row_id} not found")
    return row


def list_rows(db: Session, model: type[ModelT], **filters: Any) -> Sequence[ModelT]:
    """Return rows ordered by id, filtered on the given non-None column values."""
    stmt = select(model)
    active = {key: value for key, value in filters.items() if value is not None}
    if active:
        stmt = stmt.filter_by(**active)
    return db.execute(stmt.order_by(model.id)).scalars().all()  # type: ignore[attr-defined]


def save(db: Session, row: ModelT) -> ModelT:
    """Persist ``row``, commit and reload it."""
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def remove(db: Session, row: ModelT) -> ModelT:
    """Delete ``row`` and commit, returning the deleted instance."""
    db.delete(row)
    db.commit()
    return row
