# src/askit/models/tag.py
"""SQLAlchemy models for tag categories, tags and their join tables."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from askit.db.session import Base
from askit.db.time import utcnow

# Join tables: a tag may be attached to many targets and a target to many tags.
post_tag = Table(
    "post_tag",
    Base.metadata,
    Column("post_id", ForeignKey("post.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", ForeignKey("tag.id", ondelete="CASCADE"), primary_key=True),
)

comment_tag = Table(
    "comment_tag",
    Base.metadata,
    Column("comment_id", ForeignKey("comment.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", ForeignKey("tag.id", ondelete="CASCADE"), primary_key=True),
)

post_report_tag = Table(
    "post_report_tag",
    Base.metadata,
    Column("report_id", ForeignKey("post_report.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", ForeignKey("tag.id", ondelete="CASCADE"), primary_key=True),
)

comment_report_tag = Table(
    "comment_report_tag",
    Base.metadata,
    Column(
        "report_id", ForeignKey("comment_report.id", ondelete="CASCADE"), primary_key=True
    ),
    Column("tag_id", ForeignKey("tag.id", ondelete="CASCADE"), primary_key=True),
)


class TagCategory(Base):
    """Namespace for tags, e.g. "subject" or "report reason"."""

    __tablename__ = "tag_category"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    tags: Mapped[list[Tag]] = relationship(
        "Tag", back_populates="category", cascade="all, delete-orphan"
    )


class Tag(Base):
    """Label identified by its ``(key, category_id)`` pair."""

    __tablename__ = "tag"
    __table_args__ = (UniqueConstraint("key", "category_id", name="uq_tag_key_category"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    key: Mapped[str] = mapped_column(String(255), nullable=False)
    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tag_category.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    category: Mapped[TagCategory] = relationship("TagCategory", back_populates="tags")
