"""Error taxonomy shared by services and the HTTP layer.

Every failure the API reports is an :class:`AppError` carrying an explicit
:class:`ErrorKind`. The response layer maps the kind to an HTTP status; nothing
inspects class names or driver error codes.
"""

from __future__ import annotations

from enum import Enum

from fastapi import status


class ErrorKind(str, Enum):
    """Tagged error categories rendered in the ``error.type`` field."""

    VALIDATION = "ValidationError"
    UNAUTHORIZED = "UnauthorizedError"
    NOT_FOUND = "NotFoundError"
    CONFLICT = "ConflictError"
    INTERNAL = "InternalError"

    @property
    def status_code(self) -> int:
        """Return the HTTP status code for this kind."""
        match self:
            case ErrorKind.VALIDATION:
                return status.HTTP_400_BAD_REQUEST
            case ErrorKind.UNAUTHORIZED:
                return status.HTTP_401_UNAUTHORIZED
            case ErrorKind.NOT_FOUND:
                return status.HTTP_404_NOT_FOUND
            case ErrorKind.CONFLICT:
                return status.HTTP_409_CONFLICT
            case _:
                return status.HTTP_500_INTERNAL_SERVER_ERROR

    @classmethod
    def from_status(cls, status_code: int) -> ErrorKind:
        """Pick the closest kind for a bare HTTP status code."""
        match status_code:
            case 401 | 403:
                return cls.UNAUTHORIZED
            case 404:
                return cls.NOT_FOUND
            case 409:
                return cls.CONFLICT
            case code if code >= 500:
                return cls.INTERNAL
            case _:
                return cls.VALIDATION


class AppError(Exception):
    """Base class for errors that are safe to show to API clients."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        """Return the HTTP status code for this error."""
        return self.kind.status_code


class ValidationError(AppError):
    """Malformed or out-of-range input."""

    kind = ErrorKind.VALIDATION


class UnauthorizedError(AppError):
    """Missing, invalid or expired credentials, or insufficient rights."""

    kind = ErrorKind.UNAUTHORIZED


class MalformedTokenError(UnauthorizedError):
    """Authorization header that does not carry a token at all."""


class NotFoundError(AppError):
    """A referenced entity does not exist."""

    kind = ErrorKind.NOT_FOUND


class ConflictError(AppError):
    """A write collided with a unique constraint."""

    kind = ErrorKind.CONFLICT


class InternalError(AppError):
    """Unexpected failure inside the service."""

    kind = ErrorKind.INTERNAL
