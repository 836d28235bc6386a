# src/askit/api/v1/endpoints/users.py
"""User account endpoints."""

import logging

from fastapi import APIRouter, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from askit.api.responses import SuccessResponse, success
from askit.api.v1.dependencies import (
    AdminDep,
    AuthorizationHeader,
    CurrentPrincipalDep,
    ModeratorDep,
    SessionDep,
)
from askit.core.errors import ConflictError, UnauthorizedError, ValidationError
from askit.core.security import hash_password, verify_password
from askit.models import Course, Role, User
from askit.schemas.user import RoleUpdate, StatusUpdate, UserCreate, UserRead, UserUpdate
from askit.services.identity import ensure_owner
from askit.services.records import get_or_404, list_rows, remove, save

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


def _ensure_email_free(db: Session, email: str) -> None:
    existing = db.execute(select(User.id).where(User.email == email)).first()
    if existing is not None:
        raise ConflictError("Email already registered")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SuccessResponse[UserRead],
)
def create_user(payload: UserCreate, db: SessionDep) -> SuccessResponse[UserRead]:
    """Register a new account with the USER role."""
    _ensure_email_free(db, payload.email)
    if payload.course_id is not None:
        get_or_404(db, Course, payload.course_id, "Course")

    user = User(
        name=payload.name,
        email=payload.email,
        password=hash_password(payload.password),
        role=Role.USER,
        status=True,
        course_id=payload.course_id,
    )
    save(db, user)
    logger.info("Registered user %s", user.id)
    return success(UserRead.model_validate(user))


@router.get("", response_model=SuccessResponse[list[UserRead]])
def list_users(db: SessionDep, _: CurrentPrincipalDep) -> SuccessResponse[list[UserRead]]:
    users = list_rows(db, User)
    return success([UserRead.model_validate(u) for u in users])


@router.get("/{user_id}", response_model=SuccessResponse[UserRead])
def get_user(
    user_id: int, db: SessionDep, _: CurrentPrincipalDep
) -> SuccessResponse[UserRead]:
    user = get_or_404(db, User, user_id, "User")
    return success(UserRead.model_validate(user))


@router.put("/{user_id}", response_model=SuccessResponse[UserRead])
def update_user(
    user_id: int,
    payload: UserUpdate,
    db: SessionDep,
    authorization: AuthorizationHeader = None,
) -> SuccessResponse[UserRead]:
    """Let a user edit their own profile.

    A new email is accepted only alongside the current one, and a new
    password only alongside the current password.
    """
    ensure_owner(user_id, authorization)
    user = get_or_404(db, User, user_id, "User")

    if payload.name is not None:
        user.name = payload.name
    if payload.course_id is not None:
        get_or_404(db, Course, payload.course_id, "Course")
        user.course_id = payload.course_id
    if payload.new_email is not None:
        if payload.email != user.email:
            raise ValidationError("Current email does not match")
        if payload.new_email != user.email:
            _ensure_email_free(db, payload.new_email)
        user.email = payload.new_email
    if payload.new_password is not None:
        if payload.password is None or not verify_password(payload.password, user.password):
            raise UnauthorizedError("Current password is incorrect")
        user.password = hash_password(payload.new_password)

    save(db, user)
    return success(UserRead.model_validate(user))


@router.put("/{user_id}/role", response_model=SuccessResponse[UserRead])
def update_role(
    user_id: int, payload: RoleUpdate, db: SessionDep, admin: AdminDep
) -> SuccessResponse[UserRead]:
    """Assign a role to a user."""
    user = get_or_404(db, User, user_id, "User")
    user.role = payload.role
    save(db, user)
    logger.info("Admin %s set role of user %s to %s", admin.id, user.id, payload.role.value)
    return success(UserRead.model_validate(user))


@router.put("/{user_id}/status", response_model=SuccessResponse[UserRead])
def update_status(
    user_id: int, payload: StatusUpdate, db: SessionDep, moderator: ModeratorDep
) -> SuccessResponse[UserRead]:
    """Enable or disable an account; disabled accounts cannot log in."""
    user = get_or_404(db, User, user_id, "User")
    user.status = payload.status
    save(db, user)
    logger.info("User %s status set to %s by %s", user.id, payload.status, moderator.id)
    return success(UserRead.model_validate(user))


@router.delete("/{user_id}", response_model=SuccessResponse[UserRead])
def delete_user(
    user_id: int,
    db: SessionDep,
    authorization: AuthorizationHeader = None,
) -> SuccessResponse[UserRead]:
    """Delete an account and everything it authored."""
    ensure_owner(user_id, authorization, override=Role.ADMIN)
    user = get_or_404(db, User, user_id, "User")
    data = UserRead.model_validate(user)
    remove(db, user)
    logger.info("Deleted user %s", user_id)
    return success(data)
