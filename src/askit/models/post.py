# src/askit/models/post.py
"""SQLAlchemy models for posts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from askit.db.session import Base
from askit.db.time import utcnow

from .tag import post_tag

if TYPE_CHECKING:
    from .comment import Comment
    from .file import File
    from .reaction import PostReaction
    from .report import PostReport
    from .tag import Tag
    from .user import User


class Post(Base):
    """Question or topic opened by a user.

    Deleting a post removes its comments, files, reactions and reports.
    """

    __tablename__ = "post"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    author: Mapped[User] = relationship("User", back_populates="posts")
    tags: Mapped[list[Tag]] = relationship("Tag", secondary=post_tag, order_by="Tag.id")
    files: Mapped[list[File]] = relationship(
        "File",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="File.id",
    )
    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.id",
    )
    reactions: Mapped[list[PostReaction]] = relationship(
        "PostReaction", back_populates="target", cascade="all, delete-orphan"
    )
    reports: Mapped[list[PostReport]] = relationship(
        "PostReport", back_populates="target", cascade="all, delete-orphan"
    )
