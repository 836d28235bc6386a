# src/askit/services/attachments.py
"""Creating and replacing hosted attachments on posts and comments."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from askit.core.errors import NotFoundError, ValidationError
from askit.models import File, Post
from askit.schemas.file import FileAttach
from askit.services.file_host import FileHost

logger = logging.getLogger(__name__)


def upload_attachments(host: FileHost, files: Sequence[FileAttach]) -> list[File]:
    """Upload every new attachment and return detached File rows for them.

    The rows are not linked to any parent, so a failed upload leaves nothing
    behind for the session to flush.

    Raises:
        ValidationError: If a new attachment has no source.
        InternalError: If the file host rejects an upload.
    """
    rows: list[File] = []
    for item in files:
        if item.source is None:
            raise ValidationError(f"files: source is required for new file {item.title!r}")
        uploaded = host.upload(item.source, resource_type="image")
        rows.append(
            File(title=item.title, remote_url=uploaded.secure_url)
        )
    return rows


def replace_post_files(
    db: Session,
    host: FileHost,
    post: Post,
    files: Sequence[FileAttach],
) -> None:
    """Make the post's own attachments match ``files``.

    Entries with an ``id`` keep that attachment (renaming it); entries without
    one are uploaded; current attachments not listed are deleted.
    """
    current = {f.id: f for f in post.files if f.comment_id is None}
    keep_ids = {item.id for item in files if item.id is not None}
    unknown = keep_ids - current.keys()
    if unknown:
        raise NotFoundError(f"File {min(unknown)} is not attached to post {post.id}")

    new_rows = upload_attachments(host, [item for item in files if item.id is None])

    for item in files:
        if item.id is not None:
            current[item.id].title = item.title
    for file_id, row in current.items():
        if file_id not in keep_ids:
            post.files.remove(row)
            db.delete(row)
    for row in new_rows:
        post.files.append(row)
    logger.debug(
        "Post %s files replaced: kept %d, added %d",
        post.id,
        len(keep_ids),
        len(new_rows),
    )
