# src/askit/models/comment.py
"""SQLAlchemy models for comments and threaded replies."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from askit.db.session import Base
from askit.db.time import utcnow

from .tag import comment_tag

if TYPE_CHECKING:
    from .file import File
    from .post import Post
    from .reaction import CommentReaction
    from .report import CommentReport
    from .tag import Tag
    from .user import User


class Comment(Base):
    """Answer to a post, or a reply to another comment on the same post."""

    __tablename__ = "comment"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    category: Mapped[str] = mapped_column(String(255), nullable=False)
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Top-level comments have parent_comment_id = NULL.
    parent_comment_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("comment.id", ondelete="CASCADE"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    author: Mapped[User] = relationship("User", back_populates="comments")
    post: Mapped[Post] = relationship("Post", back_populates="comments")
    parent: Mapped[Comment | None] = relationship(
        "Comment", back_populates="replies", remote_side="Comment.id"
    )
    replies: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="parent",
        cascade="all, delete-orphan",
        order_by="Comment.id",
    )
    tags: Mapped[list[Tag]] = relationship("Tag", secondary=comment_tag, order_by="Tag.id")
    files: Mapped[list[File]] = relationship(
        "File",
        back_populates="comment",
        cascade="all, delete-orphan",
        order_by="File.id",
    )
    reactions: Mapped[list[CommentReaction]] = relationship(
        "CommentReaction", back_populates="target", cascade="all, delete-orphan"
    )
    reports: Mapped[list[CommentReport]] = relationship(
        "CommentReport", back_populates="target", cascade="all, delete-orphan"
    )
