# src/askit/services/upsert.py
"""Idempotent upserts keyed on a natural key, with tag-set reconciliation.

Reactions and reports are unique per ``(author, target)``: posting the same
pair again overwrites the existing row instead of adding a second one. Tags are
unique per ``(key, category_id)`` and are resolved with find-or-create.

All writes for one upsert happen inside a single SAVEPOINT. A concurrent
insert of the same natural key surfaces as an ``IntegrityError``; the savepoint
is rolled back and, when the natural key turns out to be taken, the operation
is retried against the row that won. Other constraint failures propagate.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from askit.core.errors import ConflictError, NotFoundError
from askit.core.settings import settings
from askit.db.session import Base
from askit.models.tag import Tag, TagCategory

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


@dataclass(frozen=True)
class TagRef:
    """Natural key of a tag."""

    key: str
    category_id: int


@dataclass
class UpsertResult(Generic[ModelT]):
    """Row produced by an upsert and whether it was newly inserted."""

    row: ModelT
    created: bool


def _find_by_natural_key(
    db: Session,
    model: type[ModelT],
    natural_key: Mapping[str, Any],
) -> ModelT | None:
    """Return the row matching ``natural_key``, locking it where supported."""
    stmt = select(model).filter_by(**natural_key).with_for_update()
    return db.execute(stmt).scalars().first()


def _natural_key_taken(
    db: Session,
    model: type[ModelT],
    natural_key: Mapping[str, Any],
) -> bool:
    """Return True if a committed row already holds ``natural_key``."""
    stmt = select(model.id).filter_by(**natural_key)  # type: ignore[attr-defined]
    return db.execute(stmt).first() is not None


def _select_tag(db: Session, key: str, category_id: int) -> Tag | None:
    stmt = select(Tag).where(Tag.key == key, Tag.category_id == category_id)
    return db.execute(stmt).scalars().first()


def find_or_create_tag(db: Session, key: str, category_id: int) -> Tag:
    """Return the tag for ``(key, category_id)``, inserting it if needed.

    Raises:
        NotFoundError: If the category does not exist.
    """
    tag = _select_tag(db, key, category_id)
    if tag is not None:
        return tag

    if db.get(TagCategory, category_id) is None:
        raise NotFoundError(f"Tag category {category_id} not found")

    try:
        with db.begin_nested():
            tag = Tag(key=key, category_id=category_id)
            db.add(tag)
            db.flush()
    except IntegrityError:
        # Another writer inserted the same key first; use their row.
        tag = _select_tag(db, key, category_id)
        if tag is None:
            raise
    return tag


def reconcile_tags(db: Session, row: Any, refs: Iterable[TagRef]) -> None:
    """Replace ``row.tags`` with exactly the tags named by ``refs``.

    Duplicate references collapse to one attachment.
    """
    resolved: list[Tag] = []
    for ref in dict.fromkeys(refs):
        tag = find_or_create_tag(db, ref.key, ref.category_id)
        if tag not in resolved:
            resolved.append(tag)
    row.tags.clear()
    row.tags.extend(resolved)


def upsert_by_natural_key(
    db: Session,
    model: type[ModelT],
    natural_key: Mapping[str, Any],
    values: Mapping[str, Any],
    tags: Iterable[TagRef] | None = None,
) -> UpsertResult[ModelT]:
    """Insert or overwrite the ``model`` row identified by ``natural_key``.

    Args:
        db: Active session; the caller commits.
        model: Mapped class with a unique constraint over ``natural_key``.
        natural_key: Column values that identify the row.
        values: Scalar columns to write on insert or overwrite on update.
        tags: When given, the row's tag set is replaced by these tags.

    Returns:
        The persisted row and whether it was created.

    Raises:
        ConflictError: If racing writers kept colliding after
            ``UPSERT_MAX_ATTEMPTS`` attempts.
        IntegrityError: If a constraint other than the natural key failed,
            such as a foreign key to a missing row.
        NotFoundError: If a tag references an unknown category.
    """
    tag_refs = list(tags) if tags is not None else None
    attempts = settings.upsert_max_attempts
    last_error: IntegrityError | None = None

    for attempt in range(1, attempts + 1):
        try:
            with db.begin_nested():
                row = _find_by_natural_key(db, model, natural_key)
                created = row is None
                if row is None:
                    row = model(**natural_key, **values)
                    db.add(row)
                else:
                    for field, value in values.items():
                        setattr(row, field, value)
                db.flush()
                if tag_refs is not None:
                    reconcile_tags(db, row, tag_refs)
                    db.flush()
        except IntegrityError as err:
            if not _natural_key_taken(db, model, natural_key):
                # Not a race on the natural key: a foreign key or other constraint.
                raise
            last_error = err
            logger.warning(
                "Upsert of %s on %s collided (attempt %d of %d)",
                model.__name__,
                dict(natural_key),
                attempt,
                attempts,
            )
            continue
        return UpsertResult(row=row, created=created)

    raise ConflictError(
        f"Could not write {model.__name__} after {attempts} attempts"
    ) from last_error
