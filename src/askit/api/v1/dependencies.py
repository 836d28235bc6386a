# src/askit/api/v1/dependencies.py
"""Shared API dependencies for authentication and common functionality."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from askit.db.session import get_db
from askit.models.user import Role
from askit.services.file_host import FileHost, get_file_host
from askit.services.identity import Principal, require_authenticated, require_role

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]

# Raw header value; parsed by the token service so every failure uses the envelope.
AuthorizationHeader = Annotated[str | None, Header()]


def get_current_principal(authorization: AuthorizationHeader = None) -> Principal:
    """Return the Principal of any caller presenting a valid token."""
    return require_authenticated(authorization)


def role_gate(minimum: Role) -> Callable[..., Principal]:
    """Build a dependency admitting only callers whose role is at least ``minimum``."""

    def _gate(authorization: AuthorizationHeader = None) -> Principal:
        return require_role(authorization, minimum)

    _gate.__name__ = f"require_{minimum.value.lower()}"
    return _gate


def get_file_host_dep() -> FileHost:
    return get_file_host()


CurrentPrincipalDep = Annotated[Principal, Depends(get_current_principal)]
ModeratorDep = Annotated[Principal, Depends(role_gate(Role.MODERATOR))]
AdminDep = Annotated[Principal, Depends(role_gate(Role.ADMIN))]
FileHostDep = Annotated[FileHost, Depends(get_file_host_dep)]
