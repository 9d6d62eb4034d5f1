"""Application error taxonomy and the FastAPI handlers that render it."""
from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from app.schemas.base_schemas import ErrorResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500
    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class BadRequestError(AppError):
    status_code = 400
    error_code = "BAD_REQUEST"


class UnauthorizedError(AppError):
    status_code = 401
    error_code = "UNAUTHORIZED"


class NotFoundError(AppError):
    status_code = 404
    error_code = "NOT_FOUND"


class ConflictError(AppError):
    status_code = 409
    error_code = "CONFLICT"


class VariantValidationError(BadRequestError):
    """Raised when a product variant carries a non-numeric price or quantity."""

    error_code = "INVALID_VARIANT"


class UploadFailedError(BadRequestError):
    """Raised when the media host rejects or fails an upload."""

    error_code = "UPLOAD_FAILED"


def _render(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body.model_dump(by_alias=True)),
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        f"[ERROR_HANDLER] {request.method} {request.url.path} -> "
        f"{exc.status_code} {exc.error_code}: {exc.message}"
    )
    return _render(
        exc.status_code,
        ErrorResponse(message=exc.message, error_code=exc.error_code, details=exc.details),
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning(
        f"[ERROR_HANDLER] {request.method} {request.url.path} -> 422 validation failed"
    )
    return _render(
        422,
        ErrorResponse(
            message="Validation failed",
            error_code="VALIDATION_ERROR",
            details={"errors": jsonable_encoder(exc.errors())},
        ),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning(
        f"[ERROR_HANDLER] {request.method} {request.url.path} -> 409 integrity: {exc.orig}"
    )
    return _render(
        409,
        ErrorResponse(message="Resource already exists", error_code=ConflictError.error_code),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
