# src/askit/services/tokens.py
"""Signed access tokens: issuing, extracting from headers and verifying."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt

from askit.core.errors import InternalError, MalformedTokenError, UnauthorizedError
from askit.core.settings import settings

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer"


def issue_token(
    subject: int | str,
    role: str | None = None,
    ttl_seconds: int | None = None,
) -> str:
    """Create a signed access token for ``subject``.

    Args:
        subject: User id; stored as text in the ``sub`` claim.
        role: Role name copied into the ``role`` claim.
        ttl_seconds: Lifetime; defaults to ``ACCESS_TOKEN_EXPIRE_MINUTES``.

    Returns:
        The encoded token.

    Raises:
        InternalError: If the token cannot be signed.
    """
    issued_at = datetime.now(UTC)
    lifetime = settings.access_token_ttl_seconds if ttl_seconds is None else ttl_seconds
    to_encode: dict[str, Any] = {
        "sub": str(subject),
        "iat": issued_at,
        "exp": issued_at + timedelta(seconds=lifetime),
    }
    if role is not None:
        to_encode["role"] = role
    try:
        encoded: str = jwt.encode(
            to_encode,
            settings.secret_key,
            algorithm=settings.jwt_algorithm,
        )
    except JWTError as err:
        logger.error("Token signing failed for subject %s: %s", subject, err)
        raise InternalError("Unable to create token JWT") from err
    return encoded


def extract_bearer(authorization: str | None) -> str:
    """Return the token carried by an ``Authorization`` header value.

    A value mentioning ``Bearer`` anywhere yields its second whitespace-separated
    word, so ``"Bearer <token>"`` yields ``<token>``; any other value is taken
    to be the token itself.

    Raises:
        MalformedTokenError: If the header is absent or carries no token.
    """
    value = (authorization or "").strip()
    if BEARER_PREFIX in value:
        parts = value.split()
        value = parts[1] if len(parts) > 1 else ""
    if not value:
        raise MalformedTokenError("Malformed token")
    return value


def verify_token(token: str) -> dict[str, Any]:
    """Verify the signature and expiry of ``token`` and return its claims.

    Raises:
        UnauthorizedError: If the token is expired, tampered with or unreadable.
    """
    try:
        claims: dict[str, Any] = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except ExpiredSignatureError as err:
        raise UnauthorizedError("Token has expired") from err
    except JWTError as err:
        raise UnauthorizedError("Could not validate credentials") from err
    return claims


def decode_unverified(token: str) -> dict[str, Any] | None:
    """Read claims without checking the signature.

    Only suitable for log context; never use the result for access decisions.
    """
    try:
        claims: dict[str, Any] = jwt.get_unverified_claims(token)
    except JWTError:
        return None
    return claims
