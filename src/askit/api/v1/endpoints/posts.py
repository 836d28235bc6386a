# src/askit/api/v1/endpoints/posts.py
"""Post endpoints."""

import logging

from fastapi import APIRouter, Query, status

from askit.api.responses import SuccessResponse, success
from askit.api.v1.dependencies import AuthorizationHeader, FileHostDep, SessionDep
from askit.core.errors import NotFoundError
from askit.models import Post, Role, Tag, User
from askit.schemas.post import PostCreate, PostRead, PostUpdate
from askit.services.attachments import replace_post_files, upload_attachments
from askit.services.identity import ensure_owner
from askit.services.records import get_or_404, list_rows, remove, save
from askit.services.upsert import reconcile_tags

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SuccessResponse[PostRead],
)
def create_post(
    payload: PostCreate,
    db: SessionDep,
    file_host: FileHostDep,
    authorization: AuthorizationHeader = None,
) -> SuccessResponse[PostRead]:
    """Create a post; tags are resolved before any attachment is uploaded."""
    ensure_owner(payload.author_id, authorization)
    get_or_404(db, User, payload.author_id, "User")

    post = Post(title=payload.title, content=payload.content, author_id=payload.author_id)
    reconcile_tags(db, post, [tag.to_ref() for tag in payload.tags])
    post.files.extend(upload_attachments(file_host, payload.files))
    save(db, post)
    logger.info("User %s created post %s", post.author_id, post.id)
    return success(PostRead.model_validate(post))


@router.get("", response_model=SuccessResponse[list[PostRead]])
def list_posts(
    db: SessionDep,
    author_id: int | None = Query(None, description="Only posts by this author"),
) -> SuccessResponse[list[PostRead]]:
    posts = list_rows(db, Post, author_id=author_id)
    return success([PostRead.model_validate(p) for p in posts])


@router.get("/{post_id}", response_model=SuccessResponse[PostRead])
def get_post(post_id: int, db: SessionDep) -> SuccessResponse[PostRead]:
    """Return a post with its tags and files."""
    post = get_or_404(db, Post, post_id, "Post")
    return success(PostRead.model_validate(post))


@router.put("/{post_id}", response_model=SuccessResponse[PostRead])
def update_post(
    post_id: int,
    payload: PostUpdate,
    db: SessionDep,
    file_host: FileHostDep,
    authorization: AuthorizationHeader = None,
) -> SuccessResponse[PostRead]:
    """Edit a post. Tags and files, when given, replace the current sets."""
    post = get_or_404(db, Post, post_id, "Post")
    ensure_owner(post.author_id, authorization)

    if payload.tags is not None:
        reconcile_tags(db, post, [tag.to_ref() for tag in payload.tags])
    if payload.files is not None:
        replace_post_files(db, file_host, post, payload.files)
    if payload.title is not None:
        post.title = payload.title
    if "content" in payload.model_fields_set:
        post.content = payload.content
    save(db, post)
    return success(PostRead.model_validate(post))


@router.delete("/{post_id}/tags/{tag_id}", response_model=SuccessResponse[PostRead])
def disconnect_post_tag(
    post_id: int,
    tag_id: int,
    db: SessionDep,
    authorization: AuthorizationHeader = None,
) -> SuccessResponse[PostRead]:
    """Detach one tag from a post without deleting the tag."""
    post = get_or_404(db, Post, post_id, "Post")
    ensure_owner(post.author_id, authorization)
    tag = get_or_404(db, Tag, tag_id, "Tag")
    if tag not in post.tags:
        raise NotFoundError(f"Tag {tag_id} is not attached to post {post_id}")
    post.tags.remove(tag)
    save(db, post)
    return success(PostRead.model_validate(post))


@router.delete("/{post_id}", response_model=SuccessResponse[PostRead])
def delete_post(
    post_id: int,
    db: SessionDep,
    authorization: AuthorizationHeader = None,
) -> SuccessResponse[PostRead]:
    """Delete a post with its comments, files, reactions and reports."""
    post = get_or_404(db, Post, post_id, "Post")
    principal = ensure_owner(post.author_id, authorization, override=Role.MODERATOR)
    data = PostRead.model_validate(post)
    remove(db, post)
    logger.info("Post %s deleted by user %s", post_id, principal.id)
    return success(data)
