# src/askit/api/responses.py
"""Uniform JSON envelope for every response, successful or not.

Success: ``{"response": "Successful", "data": ...}``.
Error: ``{"response": "Error", "error": {"type", "path", "statusCode", "message"}}``.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, Literal, TypeVar

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.exc import IntegrityError, NoResultFound
from starlette.exceptions import HTTPException as StarletteHTTPException

from askit.core.errors import AppError, ErrorKind

logger = logging.getLogger(__name__)

DataT = TypeVar("DataT")


class SuccessResponse(BaseModel, Generic[DataT]):
    """Envelope wrapping the payload of a successful request."""

    response: Literal["Successful"] = "Successful"
    data: DataT


class ErrorBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: ErrorKind
    path: str
    status_code: int = Field(..., alias="statusCode")
    message: str


class ErrorResponse(BaseModel):
    """Envelope describing why a request failed."""

    response: Literal["Error"] = "Error"
    error: ErrorBody


def success(data: Any) -> SuccessResponse[Any]:
    """Wrap ``data`` in the success envelope."""
    return SuccessResponse(data=data)


def error_response(
    request: Request,
    kind: ErrorKind,
    message: str,
    status_code: int | None = None,
) -> JSONResponse:
    """Render the error envelope for ``kind`` at the request's path."""
    code = status_code or kind.status_code
    body = ErrorResponse(
        error=ErrorBody(type=kind, path=request.url.path, status_code=code, message=message)
    )
    return JSONResponse(
        status_code=code,
        content=body.model_dump(mode="json", by_alias=True),
    )


def _summarize_validation(exc: RequestValidationError) -> str:
    parts: list[str] = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        message = err.get("msg", "Invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"


async def _handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    match exc.kind:
        case ErrorKind.INTERNAL:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        case ErrorKind.UNAUTHORIZED:
            logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
        case _:
            logger.debug("%s %s: %s", request.method, request.url.path, exc.message)
    return error_response(request, exc.kind, exc.message)


async def _handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return error_response(request, ErrorKind.VALIDATION, _summarize_validation(exc))


async def _handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    kind = ErrorKind.from_status(exc.status_code)
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return error_response(request, kind, message, status_code=exc.status_code)


async def _handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("%s %s hit a constraint: %s", request.method, request.url.path, exc.orig)
    return error_response(request, ErrorKind.CONFLICT, "Request conflicts with existing data")


async def _handle_no_result(request: Request, exc: NoResultFound) -> JSONResponse:
    return error_response(request, ErrorKind.NOT_FOUND, "Resource not found")


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(request, ErrorKind.INTERNAL, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Route every failure through the error envelope."""
    app.add_exception_handler(AppError, _handle_app_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _handle_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _handle_http_exception)  # type: ignore[arg-type]
    app.add_exception_handler(IntegrityError, _handle_integrity_error)  # type: ignore[arg-type]
    app.add_exception_handler(NoResultFound, _handle_no_result)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _handle_unexpected)
