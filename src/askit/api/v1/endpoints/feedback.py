# src/askit/api/v1/endpoints/feedback.py
"""Reaction and report endpoints, built once per target kind (post or comment).

Both resources are unique per author and target: posting again for the same
pair overwrites the stored row instead of adding another one.
"""

import logging
from dataclasses import dataclass

from fastapi import APIRouter, Query, Response, status
from sqlalchemy import select

from askit.api.responses import SuccessResponse, success
from askit.api.v1.dependencies import AuthorizationHeader, ModeratorDep, SessionDep
from askit.core.errors import NotFoundError
from askit.db.session import Base
from askit.models import (
    Comment,
    CommentReaction,
    CommentReport,
    Post,
    PostReaction,
    PostReport,
    Role,
    Tag,
    User,
)
from askit.schemas.feedback import ReactionRead, ReactionUpsert, ReportRead, ReportUpsert
from askit.services.identity import ensure_owner
from askit.services.records import get_or_404, remove, save
from askit.services.upsert import upsert_by_natural_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedbackTarget:
    """Describes one reactable/reportable entity and where its feedback lives."""

    label: str
    model: type[Base]
    column: str
    reaction_model: type[Base]
    report_model: type[Base]


POST_TARGET = FeedbackTarget(
    label="Post",
    model=Post,
    column="post_id",
    reaction_model=PostReaction,
    report_model=PostReport,
)
COMMENT_TARGET = FeedbackTarget(
    label="Comment",
    model=Comment,
    column="comment_id",
    reaction_model=CommentReaction,
    report_model=CommentReport,
)


def _set_upsert_status(response: Response, created: bool) -> None:
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK


def build_reaction_router(target: FeedbackTarget) -> APIRouter:
    """Return the reaction routes for ``target``."""
    model = target.reaction_model
    name = target.label.lower()
    router = APIRouter(prefix=f"/{name}-reactions", tags=["reactions"])

    @router.post(
        "",
        status_code=status.HTTP_201_CREATED,
        response_model=SuccessResponse[ReactionRead],
        name=f"upsert_{name}_reaction",
    )
    def upsert_reaction(
        payload: ReactionUpsert,
        response: Response,
        db: SessionDep,
        authorization: AuthorizationHeader = None,
    ) -> SuccessResponse[ReactionRead]:
        """Create the caller's reaction to the target or change its type."""
        ensure_owner(payload.author_id, authorization)
        get_or_404(db, User, payload.author_id, "User")
        get_or_404(db, target.model, payload.target_id, target.label)

        result = upsert_by_natural_key(
            db,
            model,
            {"author_id": payload.author_id, target.column: payload.target_id},
            {"type": payload.type},
        )
        save(db, result.row)
        _set_upsert_status(response, result.created)
        return success(ReactionRead.model_validate(result.row))

    @router.get(
        "",
        response_model=SuccessResponse[list[ReactionRead]],
        name=f"list_{name}_reactions",
    )
    def list_reactions(
        db: SessionDep,
        _: ModeratorDep,
        target_id: int | None = Query(None, description=f"Only reactions to this {name}"),
    ) -> SuccessResponse[list[ReactionRead]]:
        stmt = select(model).order_by(model.id)
        if target_id is not None:
            stmt = stmt.filter_by(**{target.column: target_id})
        rows = db.execute(stmt).scalars().all()
        return success([ReactionRead.model_validate(r) for r in rows])

    @router.get(
        "/author/{author_id}",
        response_model=SuccessResponse[list[ReactionRead]],
        name=f"list_{name}_reactions_by_author",
    )
    def list_reactions_by_author(
        author_id: int,
        db: SessionDep,
        authorization: AuthorizationHeader = None,
    ) -> SuccessResponse[list[ReactionRead]]:
        ensure_owner(author_id, authorization)
        stmt = select(model).filter_by(author_id=author_id).order_by(model.id)
        rows = db.execute(stmt).scalars().all()
        return success([ReactionRead.model_validate(r) for r in rows])

    @router.get(
        "/{reaction_id}",
        response_model=SuccessResponse[ReactionRead],
        name=f"get_{name}_reaction",
    )
    def get_reaction(reaction_id: int, db: SessionDep) -> SuccessResponse[ReactionRead]:
        row = get_or_404(db, model, reaction_id, "Reaction")
        return success(ReactionRead.model_validate(row))

    @router.delete(
        "/{reaction_id}",
        response_model=SuccessResponse[ReactionRead],
        name=f"delete_{name}_reaction",
    )
    def delete_reaction(
        reaction_id: int,
        db: SessionDep,
        authorization: AuthorizationHeader = None,
    ) -> SuccessResponse[ReactionRead]:
        row = get_or_404(db, model, reaction_id, "Reaction")
        ensure_owner(row.author_id, authorization)
        data = ReactionRead.model_validate(row)
        remove(db, row)
        return success(data)

    return router


def build_report_router(target: FeedbackTarget) -> APIRouter:
    """Return the report routes for ``target``."""
    model = target.report_model
    name = target.label.lower()
    router = APIRouter(prefix=f"/{name}-reports", tags=["reports"])

    @router.post(
        "",
        status_code=status.HTTP_201_CREATED,
        response_model=SuccessResponse[ReportRead],
        name=f"upsert_{name}_report",
    )
    def upsert_report(
        payload: ReportUpsert,
        response: Response,
        db: SessionDep,
        authorization: AuthorizationHeader = None,
    ) -> SuccessResponse[ReportRead]:
        """File the caller's report on the target, or replace its reason and tags."""
        ensure_owner(payload.author_id, authorization)
        get_or_404(db, User, payload.author_id, "User")
        get_or_404(db, target.model, payload.target_id, target.label)

        result = upsert_by_natural_key(
            db,
            model,
            {"author_id": payload.author_id, target.column: payload.target_id},
            {"reason": payload.reason},
            tags=[tag.to_ref() for tag in payload.tags],
        )
        save(db, result.row)
        logger.info(
            "User %s %s report %s on %s %s",
            payload.author_id,
            "filed" if result.created else "updated",
            result.row.id,
            name,
            payload.target_id,
        )
        _set_upsert_status(response, result.created)
        return success(ReportRead.model_validate(result.row))

    @router.get(
        "",
        response_model=SuccessResponse[list[ReportRead]],
        name=f"list_{name}_reports",
    )
    def list_reports(
        db: SessionDep,
        _: ModeratorDep,
        target_id: int | None = Query(None, description=f"Only reports on this {name}"),
    ) -> SuccessResponse[list[ReportRead]]:
        stmt = select(model).order_by(model.id)
        if target_id is not None:
            stmt = stmt.filter_by(**{target.column: target_id})
        rows = db.execute(stmt).scalars().all()
        return success([ReportRead.model_validate(r) for r in rows])

    @router.get(
        "/author/{author_id}",
        response_model=SuccessResponse[list[ReportRead]],
        name=f"list_{name}_reports_by_author",
    )
    def list_reports_by_author(
        author_id: int,
        db: SessionDep,
        authorization: AuthorizationHeader = None,
    ) -> SuccessResponse[list[ReportRead]]:
        ensure_owner(author_id, authorization)
        stmt = select(model).filter_by(author_id=author_id).order_by(model.id)
        rows = db.execute(stmt).scalars().all()
        return success([ReportRead.model_validate(r) for r in rows])

    @router.get(
        "/{report_id}",
        response_model=SuccessResponse[ReportRead],
        name=f"get_{name}_report",
    )
    def get_report(
        report_id: int,
        db: SessionDep,
        authorization: AuthorizationHeader = None,
    ) -> SuccessResponse[ReportRead]:
        """Show a report to its author or to a moderator."""
        row = get_or_404(db, model, report_id, "Report")
        ensure_owner(row.author_id, authorization, override=Role.MODERATOR)
        return success(ReportRead.model_validate(row))

    @router.delete(
        "/{report_id}/tags/{tag_id}",
        response_model=SuccessResponse[ReportRead],
        name=f"disconnect_{name}_report_tag",
    )
    def disconnect_report_tag(
        report_id: int,
        tag_id: int,
        db: SessionDep,
        authorization: AuthorizationHeader = None,
    ) -> SuccessResponse[ReportRead]:
        row = get_or_404(db, model, report_id, "Report")
        ensure_owner(row.author_id, authorization)
        tag = get_or_404(db, Tag, tag_id, "Tag")
        if tag not in row.tags:
            raise NotFoundError(f"Tag {tag_id} is not attached to report {report_id}")
        row.tags.remove(tag)
        save(db, row)
        return success(ReportRead.model_validate(row))

    @router.delete(
        "/{report_id}",
        response_model=SuccessResponse[ReportRead],
        name=f"delete_{name}_report",
    )
    def delete_report(
        report_id: int,
        db: SessionDep,
        authorization: AuthorizationHeader = None,
    ) -> SuccessResponse[ReportRead]:
        row = get_or_404(db, model, report_id, "Report")
        ensure_owner(row.author_id, authorization)
        data = ReportRead.model_validate(row)
        remove(db, row)
        return success(data)

    return router


post_reactions_router = build_reaction_router(POST_TARGET)
comment_reactions_router = build_reaction_router(COMMENT_TARGET)
post_reports_router = build_report_router(POST_TARGET)
comment_reports_router = build_report_router(COMMENT_TARGET)
