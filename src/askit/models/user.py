"""SQLAlchemy models for user accounts, courses and moderation records."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from askit.db.session import Base
from askit.db.time import utcnow

if TYPE_CHECKING:
    from .comment import Comment
    from .post import Post
    from .reaction import CommentReaction, PostReaction
    from .report import CommentReport, PostReport


class Role(str, Enum):
    """Account role; later members outrank earlier ones."""

    USER = "USER"
    MODERATOR = "MODERATOR"
    ADMIN = "ADMIN"

    @property
    def rank(self) -> int:
        """Return the position of this role in the ordering USER < MODERATOR < ADMIN."""
        return _ROLE_ORDER.index(self)

    def at_least(self, minimum: Role) -> bool:
        """Return True if this role satisfies a gate requiring ``minimum``."""
        return self.rank >= minimum.rank


_ROLE_ORDER = (Role.USER, Role.MODERATOR, Role.ADMIN)


class Course(Base):
    """Academic course a user is enrolled in."""

    __tablename__ = "course"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )


class User(Base):
    """Registered account; the password column only ever holds a bcrypt hash."""

    __tablename__ = "user_account"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(1000), unique=True, nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(
        SAEnum(Role, name="role"), nullable=False, default=Role.USER
    )
    # False once an account has been disabled; disabled users cannot log in.
    status: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    course_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("course.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    course: Mapped[Course | None] = relationship("Course")
    control: Mapped[UserControl | None] = relationship(
        "UserControl",
        back_populates="user",
        cascade="all, delete-orphan",
        uselist=False,
    )
    posts: Mapped[list[Post]] = relationship(
        "Post", back_populates="author", cascade="all, delete-orphan"
    )
    comments: Mapped[list[Comment]] = relationship(
        "Comment", back_populates="author", cascade="all, delete-orphan"
    )
    post_reactions: Mapped[list[PostReaction]] = relationship(
        "PostReaction", back_populates="author", cascade="all, delete-orphan"
    )
    comment_reactions: Mapped[list[CommentReaction]] = relationship(
        "CommentReaction", back_populates="author", cascade="all, delete-orphan"
    )
    post_reports: Mapped[list[PostReport]] = relationship(
        "PostReport", back_populates="author", cascade="all, delete-orphan"
    )
    comment_reports: Mapped[list[CommentReport]] = relationship(
        "CommentReport", back_populates="author", cascade="all, delete-orphan"
    )


class UserControl(Base):
    """Moderation note attached to a single user."""

    __tablename__ = "user_control"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reason: Mapped[str] = mapped_column(String(1000), nullable=False)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    user: Mapped[User] = relationship("User", back_populates="control")
