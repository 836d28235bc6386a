# src/askit/api/v1/endpoints/user_controls.py
"""Moderation records attached to users. Every route needs MODERATOR or above."""

import logging

from fastapi import APIRouter, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from askit.api.responses import SuccessResponse, success
from askit.api.v1.dependencies import ModeratorDep, SessionDep
from askit.core.errors import ConflictError
from askit.models import User, UserControl
from askit.schemas.user import UserControlCreate, UserControlRead, UserControlUpdate
from askit.services.records import get_or_404, list_rows, remove, save

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user-controls", tags=["moderation"])


def _ensure_no_control(db: Session, user_id: int) -> None:
    stmt = select(UserControl.id).where(UserControl.user_id == user_id)
    if db.execute(stmt).first() is not None:
        raise ConflictError(f"User {user_id} already has a control record")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SuccessResponse[UserControlRead],
)
def create_user_control(
    payload: UserControlCreate, db: SessionDep, moderator: ModeratorDep
) -> SuccessResponse[UserControlRead]:
    get_or_404(db, User, payload.user_id, "User")
    _ensure_no_control(db, payload.user_id)
    control = save(db, UserControl(reason=payload.reason, user_id=payload.user_id))
    logger.info(
        "Moderator %s opened control %s on user %s", moderator.id, control.id, control.user_id
    )
    return success(UserControlRead.model_validate(control))


@router.get("", response_model=SuccessResponse[list[UserControlRead]])
def list_user_controls(
    db: SessionDep, _: ModeratorDep
) -> SuccessResponse[list[UserControlRead]]:
    return success([UserControlRead.model_validate(c) for c in list_rows(db, UserControl)])


@router.get("/{control_id}", response_model=SuccessResponse[UserControlRead])
def get_user_control(
    control_id: int, db: SessionDep, _: ModeratorDep
) -> SuccessResponse[UserControlRead]:
    control = get_or_404(db, UserControl, control_id, "User control")
    return success(UserControlRead.model_validate(control))


@router.put("/{control_id}", response_model=SuccessResponse[UserControlRead])
def update_user_control(
    control_id: int, payload: UserControlUpdate, db: SessionDep, _: ModeratorDep
) -> SuccessResponse[UserControlRead]:
    control = get_or_404(db, UserControl, control_id, "User control")
    if payload.user_id is not None and payload.user_id != control.user_id:
        get_or_404(db, User, payload.user_id, "User")
        _ensure_no_control(db, payload.user_id)
        control.user_id = payload.user_id
    if payload.reason is not None:
        control.reason = payload.reason
    save(db, control)
    return success(UserControlRead.model_validate(control))


@router.delete("/{control_id}", response_model=SuccessResponse[UserControlRead])
def delete_user_control(
    control_id: int, db: SessionDep, _: ModeratorDep
) -> SuccessResponse[UserControlRead]:
    control = get_or_404(db, UserControl, control_id, "User control")
    data = UserControlRead.model_validate(control)
    remove(db, control)
    return success(data)
