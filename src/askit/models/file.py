# src/askit/models/file.py
"""SQLAlchemy model for hosted attachments."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from askit.db.session import Base
from askit.db.time import utcnow

if TYPE_CHECKING:
    from .comment import Comment
    from .post import Post


class File(Base):
    """Image uploaded to the file host and attached to a post or one of its comments."""

    __tablename__ = "file"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    # Secure URL returned by the file host; bytes never touch our database.
    remote_url: Mapped[str] = mapped_column(String(1000), nullable=False)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    comment_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("comment.id", ondelete="CASCADE"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    post: Mapped[Post] = relationship("Post", back_populates="files")
    comment: Mapped[Comment | None] = relationship("Comment", back_populates="files")
