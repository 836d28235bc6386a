"""Attachment Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Sources are fetched by the file host, never read from the server's disk.
_SOURCE_PREFIXES = ("https://", "http://", "data:")


def _check_source(value: str | None) -> str | None:
    if value is not None and not value.lower().startswith(_SOURCE_PREFIXES):
        raise ValueError("source must be an http(s) URL or a data URI")
    return value


class FileAttach(BaseModel):
    """File to upload alongside a post or comment.

    ``source`` is a remote URL or data URI the file host can ingest. When
    updating a post, ``id`` names an existing attachment to keep.
    """

    id: int | None = None
    title: str = Field(..., min_length=1, max_length=255)
    source: str | None = Field(None, min_length=1, max_length=1000)

    @field_validator("source")
    @classmethod
    def _source_is_remote(cls, value: str | None) -> str | None:
        return _check_source(value)


class FileCreate(BaseModel):
    """Standalone upload attached to a post and optionally one of its comments."""

    title: str = Field(..., min_length=1, max_length=255)
    source: str = Field(..., min_length=1, max_length=1000)
    post_id: int
    comment_id: int | None = None

    @field_validator("source")
    @classmethod
    def _source_is_remote(cls, value: str) -> str:
        return _check_source(value)


class FileUpdate(BaseModel):
    """Replacement title and content for an existing attachment."""

    title: str = Field(..., min_length=1, max_length=255)
    source: str = Field(..., min_length=1, max_length=1000)

    @field_validator("source")
    @classmethod
    def _source_is_remote(cls, value: str) -> str:
        return _check_source(value)


class FileRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    remote_url: str
    post_id: int
    comment_id: int | None
    created_at: datetime
