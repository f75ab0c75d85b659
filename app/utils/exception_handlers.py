"""Centralized exception handlers for FastAPI application."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.exceptions import (
    DatabaseConnectionError,
    FieldViolation,
    IllegalStateError,
    IntegrityViolationError,
    InvalidFilterError,
    RecordAlreadyExistsError,
    RecordNotFoundError,
    ValidationFailedError,
)
from app.models.base import utcnow

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExceptionConfig:
    """Configuration for exception handler behavior."""

    status_code: int
    error_name: str
    log_level: str = "warning"
    include_detail: bool = True


# Exception type to configuration mapping
EXCEPTION_CONFIGS: dict[type[Exception], ExceptionConfig] = {
    RecordNotFoundError: ExceptionConfig(
        status_code=status.HTTP_404_NOT_FOUND,
        error_name="Not Found",
    ),
    RecordAlreadyExistsError: ExceptionConfig(
        status_code=status.HTTP_409_CONFLICT,
        error_name="Conflict",
    ),
    IntegrityViolationError: ExceptionConfig(
        status_code=status.HTTP_409_CONFLICT,
        error_name="Conflict",
        include_detail=False,
    ),
    IllegalStateError: ExceptionConfig(
        status_code=status.HTTP_409_CONFLICT,
        error_name="Conflict",
    ),
    ValidationFailedError: ExceptionConfig(
        status_code=status.HTTP_400_BAD_REQUEST,
        error_name="Validation Failed",
    ),
    InvalidFilterError: ExceptionConfig(
        status_code=status.HTTP_400_BAD_REQUEST,
        error_name="Bad Request",
    ),
    DatabaseConnectionError: ExceptionConfig(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        error_name="Service Unavailable",
        log_level="error",
        include_detail=False,
    ),
}


def _error_body(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    **extra: Any,
) -> dict[str, Any]:
    """Common error body: status, error, message, path, timestamp."""
    body: dict[str, Any] = {
        "status": status_code,
        "error": error,
        "message": message,
        "path": request.url.path,
        "timestamp": utcnow().isoformat(),
    }
    body.update({key: value for key, value in extra.items() if value is not None})
    return jsonable_encoder(body)


def _violations(errors: list[FieldViolation]) -> list[dict[str, Any]]:
    return [
        {
            "field": error.field,
            "rejected_value": error.rejected_value,
            "message": error.message,
        }
        for error in errors
    ]


def _log_exception(exc: Exception, config: ExceptionConfig) -> None:
    """Log exception with appropriate level."""
    log_func: Callable[..., None] = getattr(logger, config.log_level)
    log_func(f"{type(exc).__name__}: {exc}")


def _message(exc: Exception, config: ExceptionConfig) -> str:
    if isinstance(exc, DatabaseConnectionError):
        return "Database connection error. Please try again later."
    if isinstance(exc, IntegrityViolationError):
        return f"{exc.model_name} violates a database constraint"
    return str(exc) if config.include_detail else config.error_name


def _build_response_content(
    request: Request, exc: Exception, config: ExceptionConfig
) -> dict[str, Any]:
    """Build response content based on exception type."""
    model: Optional[str] = getattr(exc, "model_name", None)
    field: Optional[str] = None
    value: Any = None
    validation_errors = None

    # Add exception-specific attributes
    if isinstance(exc, (RecordNotFoundError, RecordAlreadyExistsError)):
        field = exc.field
        value = exc.value
    elif isinstance(exc, ValidationFailedError):
        validation_errors = _violations(exc.errors)

    return _error_body(
        request,
        config.status_code,
        config.error_name,
        _message(exc, config),
        model=model,
        field=field,
        value=value,
        validation_errors=validation_errors,
    )


def _create_handler(
    config: ExceptionConfig,
) -> Callable[[Request, Exception], Any]:
    """Create exception handler function for given config."""

    async def handler(request: Request, exc: Exception) -> JSONResponse:
        _log_exception(exc, config)
        content = _build_response_content(request, exc, config)
        return JSONResponse(status_code=config.status_code, content=content)

    return handler


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors as 400 with per-field violations."""
    logger.warning(f"Validation error: {exc}")
    violations = [
        FieldViolation(
            field=".".join(str(part) for part in error["loc"] if part != "body"),
            rejected_value=error.get("input"),
            message=error["msg"],
        )
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(
            request,
            status.HTTP_400_BAD_REQUEST,
            "Validation Failed",
            "Invalid request data",
            validation_errors=_violations(violations),
        ),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render framework HTTP errors (unknown route, wrong method) in the common shape."""
    logger.warning(f"{exc.status_code} {request.method} {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, exc.status_code, str(exc.detail), str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all unhandled exceptions."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal Server Error",
            "An unexpected error occurred. Please try again later.",
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Args:
        app: FastAPI application instance.
    """
    # Register configured exception handlers
    for exc_type, config in EXCEPTION_CONFIGS.items():
        app.add_exception_handler(exc_type, _create_handler(config))

    # Register special handlers
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
