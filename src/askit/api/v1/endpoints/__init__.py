# src/askit/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .comments import router as comments_router
from .courses import router as courses_router
from .feedback import (
    comment_reactions_router,
    comment_reports_router,
    post_reactions_router,
    post_reports_router,
)
from .files import router as files_router
from .posts import router as posts_router
from .tags import categories_router as tag_categories_router
from .tags import router as tags_router
from .user_controls import router as user_controls_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "users_router",
    "courses_router",
    "user_controls_router",
    "posts_router",
    "comments_router",
    "tag_categories_router",
    "tags_router",
    "post_reactions_router",
    "comment_reactions_router",
    "post_reports_router",
    "comment_reports_router",
    "files_router",
]
