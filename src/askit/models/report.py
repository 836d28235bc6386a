# src/askit/models/report.py
"""SQLAlchemy models for user reports filed against posts and comments."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, synonym

from askit.db.session import Base
from askit.db.time import utcnow

from .tag import comment_report_tag, post_report_tag

if TYPE_CHECKING:
    from .comment import Comment
    from .post import Post
    from .tag import Tag
    from .user import User


class PostReport(Base):
    """A user's single report against a post, classified by tags."""

    __tablename__ = "post_report"
    __table_args__ = (
        UniqueConstraint("author_id", "post_id", name="uq_post_report_author_post"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reason: Mapped[str] = mapped_column(String(1000), nullable=False)
    author_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user_account.id", ondelete="CASCADE"), nullable=False
    )
    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("post.id", ondelete="CASCADE"), nullable=False
    )
    target_id: Mapped[int] = synonym("post_id")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    author: Mapped[User] = relationship("User", back_populates="post_reports")
    target: Mapped[Post] = relationship("Post", back_populates="reports")
    tags: Mapped[list[Tag]] = relationship(
        "Tag", secondary=post_report_tag, order_by="Tag.id"
    )


class CommentReport(Base):
    """A user's single report against a comment, classified by tags."""

    __tablename__ = "comment_report"
    __table_args__ = (
        UniqueConstraint("author_id", "comment_id", name="uq_comment_report_author_comment"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reason: Mapped[str] = mapped_column(String(1000), nullable=False)
    author_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user_account.id", ondelete="CASCADE"), nullable=False
    )
    comment_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("comment.id", ondelete="CASCADE"), nullable=False
    )
    target_id: Mapped[int] = synonym("comment_id")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    author: Mapped[User] = relationship("User", back_populates="comment_reports")
    target: Mapped[Comment] = relationship("Comment", back_populates="reports")
    tags: Mapped[list[Tag]] = relationship(
        "Tag", secondary=comment_report_tag, order_by="Tag.id"
    )
