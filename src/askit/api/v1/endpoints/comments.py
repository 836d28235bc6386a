# src/askit/api/v1/endpoints/comments.py
"""Comment endpoints."""

import logging

from fastapi import APIRouter, Query, status

from askit.api.responses import SuccessResponse, success
from askit.api.v1.dependencies import AuthorizationHeader, FileHostDep, SessionDep
from askit.core.errors import NotFoundError, ValidationError
from askit.models import Comment, Post, Role, Tag, User
from askit.schemas.post import CommentCreate, CommentRead, CommentUpdate
from askit.services.attachments import upload_attachments
from askit.services.identity import ensure_owner
from askit.services.records import get_or_404, list_rows, remove, save
from askit.services.upsert import reconcile_tags

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/comments", tags=["comments"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SuccessResponse[CommentRead],
)
def create_comment(
    payload: CommentCreate,
    db: SessionDep,
    file_host: FileHostDep,
    authorization: AuthorizationHeader = None,
) -> SuccessResponse[CommentRead]:
    """Answer a post, or reply to a comment on the same post."""
    ensure_owner(payload.author_id, authorization)
    get_or_404(db, User, payload.author_id, "User")
    post = get_or_404(db, Post, payload.post_id, "Post")
    parent = None
    if payload.parent_comment_id is not None:
        parent = get_or_404(db, Comment, payload.parent_comment_id, "Comment")
        if parent.post_id != post.id:
            raise ValidationError("parent_comment_id: parent comment belongs to another post")

    comment = Comment(
        content=payload.content,
        category=payload.category,
        author_id=payload.author_id,
        post_id=post.id,
        parent_comment_id=parent.id if parent is not None else None,
    )
    reconcile_tags(db, comment, [tag.to_ref() for tag in payload.tags])
    for row in upload_attachments(file_host, payload.files):
        row.post_id = post.id
        comment.files.append(row)
    save(db, comment)
    logger.info("User %s commented %s on post %s", comment.author_id, comment.id, post.id)
    return success(CommentRead.model_validate(comment))


@router.get("", response_model=SuccessResponse[list[CommentRead]])
def list_comments(
    db: SessionDep,
    post_id: int | None = Query(None, description="Only comments on this post"),
    author_id: int | None = Query(None, description="Only comments by this author"),
) -> SuccessResponse[list[CommentRead]]:
    comments = list_rows(db, Comment, post_id=post_id, author_id=author_id)
    return success([CommentRead.model_validate(c) for c in comments])


@router.get("/{comment_id}", response_model=SuccessResponse[CommentRead])
def get_comment(comment_id: int, db: SessionDep) -> SuccessResponse[CommentRead]:
    comment = get_or_404(db, Comment, comment_id, "Comment")
    return success(CommentRead.model_validate(comment))


@router.put("/{comment_id}", response_model=SuccessResponse[CommentRead])
def update_comment(
    comment_id: int,
    payload: CommentUpdate,
    db: SessionDep,
    authorization: AuthorizationHeader = None,
) -> SuccessResponse[CommentRead]:
    comment = get_or_404(db, Comment, comment_id, "Comment")
    ensure_owner(comment.author_id, authorization)

    if "content" in payload.model_fields_set:
        comment.content = payload.content
    if payload.category is not None:
        comment.category = payload.category
    if payload.tags is not None:
        reconcile_tags(db, comment, [tag.to_ref() for tag in payload.tags])
    save(db, comment)
    return success(CommentRead.model_validate(comment))


@router.delete("/{comment_id}/tags/{tag_id}", response_model=SuccessResponse[CommentRead])
def disconnect_comment_tag(
    comment_id: int,
    tag_id: int,
    db: SessionDep,
    authorization: AuthorizationHeader = None,
) -> SuccessResponse[CommentRead]:
    comment = get_or_404(db, Comment, comment_id, "Comment")
    ensure_owner(comment.author_id, authorization)
    tag = get_or_404(db, Tag, tag_id, "Tag")
    if tag not in comment.tags:
        raise NotFoundError(f"Tag {tag_id} is not attached to comment {comment_id}")
    comment.tags.remove(tag)
    save(db, comment)
    return success(CommentRead.model_validate(comment))


@router.delete("/{comment_id}", response_model=SuccessResponse[CommentRead])
def delete_comment(
    comment_id: int,
    db: SessionDep,
    authorization: AuthorizationHeader = None,
) -> SuccessResponse[CommentRead]:
    """Delete a comment with its replies, files, reactions and reports."""
    comment = get_or_404(db, Comment, comment_id, "Comment")
    principal = ensure_owner(comment.author_id, authorization, override=Role.MODERATOR)
    data = CommentRead.model_validate(comment)
    remove(db, comment)
    logger.info("Comment %s deleted by user %s", comment_id, principal.id)
    return success(data)
