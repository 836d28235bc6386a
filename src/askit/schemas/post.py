# src/askit/schemas/post.py
"""Post and comment Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .file import FileAttach, FileRead
from .tag import TagIn, TagRead
from .user import AuthorRead


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=1, max_length=255)
    content: str | None = Field(None, max_length=10000)
    author_id: int
    tags: list[TagIn] = Field(default_factory=list)
    files: list[FileAttach] = Field(default_factory=list)


class PostUpdate(BaseModel):
    """Partial post update; ``tags`` and ``files`` replace the current sets when given."""

    title: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = Field(None, max_length=10000)
    tags: list[TagIn] | None = None
    files: list[FileAttach] | None = None


class PostRead(BaseModel):
    """Post returned by the API with its tags and files."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str | None
    author_id: int
    author: AuthorRead
    tags: list[TagRead]
    files: list[FileRead]
    created_at: datetime
    updated_at: datetime


class CommentCreate(BaseModel):
    """Schema for answering a post or replying to a comment."""

    content: str | None = Field(None, max_length=1000)
    category: str = Field(..., min_length=1, max_length=255)
    author_id: int
    post_id: int
    parent_comment_id: int | None = None
    tags: list[TagIn] = Field(default_factory=list)
    files: list[FileAttach] = Field(default_factory=list)


class CommentUpdate(BaseModel):
    content: str | None = Field(None, max_length=1000)
    category: str | None = Field(None, min_length=1, max_length=255)
    tags: list[TagIn] | None = None


class CommentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str | None
    category: str
    author_id: int
    author: AuthorRead
    post_id: int
    parent_comment_id: int | None
    tags: list[TagRead]
    files: list[FileRead]
    created_at: datetime
    updated_at: datetime
