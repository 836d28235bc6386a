# src/askit/models/reaction.py
"""SQLAlchemy models for up/down reactions on posts and comments."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship, synonym

from askit.db.session import Base
from askit.db.time import utcnow

if TYPE_CHECKING:
    from .comment import Comment
    from .post import Post
    from .user import User


class ReactionType(str, Enum):
    """Direction of a reaction."""

    UPVOTE = "UPVOTE"
    DOWNVOTE = "DOWNVOTE"


class PostReaction(Base):
    """A user's single reaction to a post."""

    __tablename__ = "post_reaction"
    __table_args__ = (
        UniqueConstraint("author_id", "post_id", name="uq_post_reaction_author_post"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[ReactionType] = mapped_column(
        SAEnum(ReactionType, name="reaction_type"), nullable=False
    )
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

    author: Mapped[User] = relationship("User", back_populates="post_reactions")
    target: Mapped[Post] = relationship("Post", back_populates="reactions")


class CommentReaction(Base):
    """A user's single reaction to a comment."""

    __tablename__ = "comment_reaction"
    __table_args__ = (
        UniqueConstraint("author_id", "comment_id", name="uq_comment_reaction_author_comment"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[ReactionType] = mapped_column(
        SAEnum(ReactionType, name="reaction_type"), nullable=False
    )
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

    author: Mapped[User] = relationship("User", back_populates="comment_reactions")
    target: Mapped[Comment] = relationship("Comment", back_populates="reactions")
