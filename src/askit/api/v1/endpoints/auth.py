# src/askit/api/v1/endpoints/auth.py
"""Authentication endpoints for the AskIt API."""

import logging

from fastapi import APIRouter
from sqlalchemy import select

from askit.api.responses import SuccessResponse, success
from askit.api.v1.dependencies import SessionDep
from askit.core.errors import UnauthorizedError
from askit.core.security import verify_password
from askit.models import User
from askit.schemas.user import LoginRequest, LoginResponse
from askit.services.tokens import issue_token

logger = logging.getLogger(__name__)

router = APIRouter(tags=["authentication"])


@router.post(
    "/login",
    summary="Exchange email and password for an access token",
    response_model=SuccessResponse[LoginResponse],
)
def login(payload: LoginRequest, db: SessionDep) -> SuccessResponse[LoginResponse]:
    """Verify credentials and issue a token whose subject is the user id."""
    user = db.execute(select(User).where(User.email == payload.email)).scalars().first()
    if user is None or not verify_password(payload.password, user.password):
        logger.info("Failed login attempt for %s", payload.email)
        raise UnauthorizedError("Invalid email or password")
    if not user.status:
        logger.info("Disabled user %s attempted to log in", user.id)
        raise UnauthorizedError("Account is disabled")

    token = issue_token(user.id, user.role.value)
    logger.info("User %s logged in", user.id)
    return success(LoginResponse(access_token=token))
