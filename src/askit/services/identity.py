# src/askit/services/identity.py
"""Role gating and author-identity checks against a bearer token.

Every decision here is made on verified claims. Unverified claims are read
only to say, in the logs, which subject a rejected token pretended to be.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from askit.core.errors import UnauthorizedError
from askit.models.user import Role
from askit.services.tokens import decode_unverified, extract_bearer, verify_token

logger = logging.getLogger(__name__)

_GATE_MESSAGES = {
    Role.ADMIN: "Only ADMIN authorized",
    Role.MODERATOR: "Only Mod or Admin allowed",
}


@dataclass(frozen=True)
class Principal:
    """Identity asserted by a verified token."""

    id: int
    role: Role

    def has_role(self, minimum: Role) -> bool:
        """Return True if this principal clears a ``minimum`` role gate."""
        return self.role.at_least(minimum)


def _claimed_subject(token: str) -> str | None:
    claims = decode_unverified(token)
    if not claims:
        return None
    subject = claims.get("sub")
    return str(subject) if subject is not None else None


def _principal_from_claims(claims: dict[str, object]) -> Principal:
    subject = claims.get("sub")
    if subject is None:
        raise UnauthorizedError("Unauthorized user")
    try:
        user_id = int(str(subject))
    except ValueError as err:
        raise UnauthorizedError("Unauthorized user") from err
    try:
        role = Role(claims.get("role", Role.USER.value))
    except ValueError as err:
        raise UnauthorizedError("Unauthorized user") from err
    return Principal(id=user_id, role=role)


def principal_from_header(authorization: str | None) -> Principal:
    """Extract and verify the bearer token, returning the caller's Principal."""
    token = extract_bearer(authorization)
    try:
        claims = verify_token(token)
    except UnauthorizedError:
        logger.info("Rejected token claiming subject %s", _claimed_subject(token))
        raise
    return _principal_from_claims(claims)


def require_authenticated(authorization: str | None) -> Principal:
    """Admit any caller holding a valid token, whatever its role.

    Raises:
        UnauthorizedError: If the header is missing or the token is invalid.
    """
    if not authorization:
        raise UnauthorizedError("Authentication token not found")
    return principal_from_header(authorization)


def require_role(authorization: str | None, minimum: Role) -> Principal:
    """Admit a caller only if their verified role is at least ``minimum``.

    Raises:
        UnauthorizedError: With the gate's message when the role is too low.
    """
    principal = require_authenticated(authorization)
    if not principal.has_role(minimum):
        logger.info(
            "Role gate %s rejected user %s with role %s",
            minimum.value,
            principal.id,
            principal.role.value,
        )
        raise UnauthorizedError(_GATE_MESSAGES.get(minimum, "Unauthorized user"))
    return principal


def is_owner(expected_author_id: int, authorization: str | None) -> bool:
    """Return True if the verified token's subject equals ``expected_author_id``.

    Raises:
        MalformedTokenError: If no token can be extracted from the header.
        UnauthorizedError: If the token is invalid or has no subject.
    """
    token = extract_bearer(authorization)
    try:
        claims = verify_token(token)
    except UnauthorizedError:
        logger.info("Rejected token claiming subject %s", _claimed_subject(token))
        raise
    subject = claims.get("sub")
    if subject is None:
        raise UnauthorizedError("Unauthorized user")
    return str(subject) == str(expected_author_id)


def ensure_owner(
    expected_author_id: int,
    authorization: str | None,
    override: Role | None = None,
) -> Principal:
    """Require the caller to be ``expected_author_id`` or hold ``override``.

    Returns:
        The verified Principal of the caller.

    Raises:
        UnauthorizedError: If the caller neither owns the resource nor holds
            the override role.
    """
    principal = require_authenticated(authorization)
    if str(principal.id) == str(expected_author_id):
        return principal
    if override is not None and principal.has_role(override):
        return principal
    logger.info(
        "User %s denied access to resource owned by %s",
        principal.id,
        expected_author_id,
    )
    raise UnauthorizedError("Unauthorized user")
