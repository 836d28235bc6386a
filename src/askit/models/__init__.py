# src/askit/models/__init__.py
"""SQLAlchemy models for the AskIt application."""

from .comment import Comment
from .file import File
from .post import Post
from .reaction import CommentReaction, PostReaction, ReactionType
from .report import CommentReport, PostReport
from .tag import Tag, TagCategory
from .user import Course, Role, User, UserControl

__all__ = [
    "Comment",
    "Course",
    "File",
    "Post",
    "CommentReaction", "PostReaction", "ReactionType",
    "CommentReport", "PostReport",
    "Role", "User", "UserControl",
    "Tag", "TagCategory",
]
