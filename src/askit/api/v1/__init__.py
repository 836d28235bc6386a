# src/askit/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    comment_reactions_router,
    comment_reports_router,
    comments_router,
    courses_router,
    files_router,
    post_reactions_router,
    post_reports_router,
    posts_router,
    tag_categories_router,
    tags_router,
    user_controls_router,
    users_router,
)

ROUTERS = (
    auth_router,
    users_router,
    courses_router,
    user_controls_router,
    posts_router,
    comments_router,
    tag_categories_router,
    tags_router,
    post_reactions_router,
    comment_reactions_router,
    post_reports_router,
    comment_reports_router,
    files_router,
)

__all__ = ["ROUTERS"]
