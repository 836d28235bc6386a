# src/askit/api/v1/endpoints/files.py
"""Attachment endpoints backed by the image host."""

import logging

from fastapi import APIRouter, status

from askit.api.responses import SuccessResponse, success
from askit.api.v1.dependencies import AuthorizationHeader, FileHostDep, SessionDep
from askit.core.errors import ValidationError
from askit.models import Comment, File, Post
from askit.schemas.file import FileCreate, FileRead, FileUpdate
from askit.services.identity import ensure_owner
from askit.services.records import get_or_404, list_rows, remove, save

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/files", tags=["files"])


def _owner_of(file: File) -> int:
    """Return the id of the user who controls ``file``."""
    if file.comment is not None:
        return file.comment.author_id
    return file.post.author_id


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SuccessResponse[FileRead],
)
def create_file(
    payload: FileCreate,
    db: SessionDep,
    file_host: FileHostDep,
    authorization: AuthorizationHeader = None,
) -> SuccessResponse[FileRead]:
    """Upload a file and record it; no row exists unless the upload succeeded."""
    post = get_or_404(db, Post, payload.post_id, "Post")
    owner_id = post.author_id
    if payload.comment_id is not None:
        comment = get_or_404(db, Comment, payload.comment_id, "Comment")
        if comment.post_id != post.id:
            raise ValidationError("comment_id: comment belongs to another post")
        owner_id = comment.author_id
    ensure_owner(owner_id, authorization)

    uploaded = file_host.upload(payload.source, resource_type="image")
    file = save(
        db,
        File(
            title=payload.title,
            remote_url=uploaded.secure_url,
            post_id=payload.post_id,
            comment_id=payload.comment_id,
        ),
    )
    logger.info("Stored file %s for post %s", file.id, file.post_id)
    return success(FileRead.model_validate(file))


@router.get("", response_model=SuccessResponse[list[FileRead]])
def list_files(db: SessionDep) -> SuccessResponse[list[FileRead]]:
    return success([FileRead.model_validate(f) for f in list_rows(db, File)])


@router.get("/{file_id}", response_model=SuccessResponse[FileRead])
def get_file(file_id: int, db: SessionDep) -> SuccessResponse[FileRead]:
    return success(FileRead.model_validate(get_or_404(db, File, file_id, "File")))


@router.put("/{file_id}", response_model=SuccessResponse[FileRead])
def update_file(
    file_id: int,
    payload: FileUpdate,
    db: SessionDep,
    file_host: FileHostDep,
    authorization: AuthorizationHeader = None,
) -> SuccessResponse[FileRead]:
    """Replace a file's title and content with a fresh upload."""
    file = get_or_404(db, File, file_id, "File")
    ensure_owner(_owner_of(file), authorization)

    uploaded = file_host.upload(payload.source, resource_type="image")
    file.title = payload.title
    file.remote_url = uploaded.secure_url
    save(db, file)
    return success(FileRead.model_validate(file))


@router.delete("/{file_id}", response_model=SuccessResponse[FileRead])
def delete_file(
    file_id: int,
    db: SessionDep,
    authorization: AuthorizationHeader = None,
) -> SuccessResponse[FileRead]:
    file = get_or_404(db, File, file_id, "File")
    ensure_owner(_owner_of(file), authorization)
    data = FileRead.model_validate(file)
    remove(db, file)
    return success(data)
