# src/askit/schemas/feedback.py
"""Reaction and report Pydantic schemas, shared by post and comment targets."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from askit.models.reaction import ReactionType

from .tag import TagIn, TagRead
from .user import AuthorRead


class TargetSummary(BaseModel):
    """The post or comment a reaction or report points at."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    author_id: int
    # Comments have no title.
    title: str | None = None
    content: str | None = None


class ReactionUpsert(BaseModel):
    """One reaction per author and target; posting again changes its type."""

    author_id: int
    target_id: int
    type: ReactionType


class ReactionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    type: ReactionType
    author_id: int
    target_id: int
    author: AuthorRead
    target: TargetSummary
    created_at: datetime
    updated_at: datetime


class ReportUpsert(BaseModel):
    """One report per author and target; posting again replaces reason and tags."""

    author_id: int
    target_id: int
    reason: str = Field(..., min_length=1, max_length=255)
    tags: list[TagIn] = Field(default_factory=list)


class ReportRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    reason: str
    author_id: int
    target_id: int
    author: AuthorRead
    target: TargetSummary
    tags: list[TagRead]
    created_at: datetime
    updated_at: datetime
