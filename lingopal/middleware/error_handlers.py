"""Exception handlers that turn failures into the shared error envelope.

Every error response has the shape::

    {"error": {"category": ..., "code": ..., "detail": ..., "suggestions": [...], "metadata": {...}}}

``suggestions`` and ``metadata`` are omitted when empty.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any
from uuid import UUID, uuid4

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from psycopg import errors as pg_errors
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from lingopal.exceptions import DuplicateRecordError, ResourceNotFoundError, StoreUnavailableError, ValidationError


logger = logging.getLogger(__name__)

ExceptionHandler = Callable[[Request, Any], Awaitable[JSONResponse]]


class ErrorCategory:
    VALIDATION = "VALIDATION_ERROR"
    AUTHENTICATION = "AUTHENTICATION_ERROR"
    AUTHORIZATION = "AUTHORIZATION_ERROR"
    DATABASE = "DATABASE_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    CONFLICT = "CONFLICT_ERROR"
    EXTERNAL_SERVICE = "EXTERNAL_SERVICE_ERROR"
    INTERNAL = "INTERNAL_ERROR"


class ErrorCode:
    INVALID_INPUT = "INVALID_INPUT"
    TOKEN_MISSING = "TOKEN_MISSING"
    TOKEN_INVALID = "TOKEN_INVALID"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    DB_CONNECTION_FAILED = "DB_CONNECTION_FAILED"
    DB_UNIQUE_VIOLATION = "DB_UNIQUE_VIOLATION"
    DB_FOREIGN_KEY_VIOLATION = "DB_FOREIGN_KEY_VIOLATION"
    DB_CONSTRAINT_VIOLATION = "DB_CONSTRAINT_VIOLATION"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    INTERNAL = "INTERNAL_ERROR"


class AuthorizationError(HTTPException):
    """Caller is authenticated but acts on someone else's records."""

    def __init__(self, detail: str = "Access denied") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class ExternalServiceError(HTTPException):
    """A vendor API (speech, chat, mail) failed or is not configured."""

    def __init__(self, service: str, detail: str) -> None:
        self.service = service
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=f"{service} service error: {detail}")


def format_error_response(
    category: str,
    code: str,
    detail: str,
    status_code: int,
    suggestions: list[str] | None = None,
    metadata: dict[str, Any] | None = None,
) -> JSONResponse:
    error: dict[str, Any] = {"category": category, "code": code, "detail": detail}
    if suggestions:
        error["suggestions"] = suggestions
    if metadata:
        error["metadata"] = metadata
    return JSONResponse(status_code=status_code, content={"error": error})


def _where(request: Request) -> str:
    return f"{request.method} {request.url.path}"


async def handle_validation_errors(request: Request, exc: Exception) -> JSONResponse:
    """422 for schema violations with per-field details, 400 for domain checks."""
    logger.info(f"Validation error on {_where(request)}: {exc}")

    if isinstance(exc, (PydanticValidationError, RequestValidationError)):
        errors = [
            {"field": " -> ".join(str(part) for part in err["loc"]), "message": err["msg"], "type": err["type"]}
            for err in exc.errors()
        ]
        return format_error_response(
            ErrorCategory.VALIDATION,
            ErrorCode.INVALID_INPUT,
            "Invalid input data",
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            metadata={"errors": errors},
        )

    return format_error_response(
        ErrorCategory.VALIDATION, ErrorCode.INVALID_INPUT, str(exc), status.HTTP_400_BAD_REQUEST
    )


async def handle_not_found_errors(request: Request, exc: ResourceNotFoundError) -> JSONResponse:
    logger.info(f"Not found on {_where(request)}: {exc.message}")
    return format_error_response(
        ErrorCategory.RESOURCE_NOT_FOUND,
        ErrorCode.NOT_FOUND,
        exc.message,
        status.HTTP_404_NOT_FOUND,
    )


async def handle_authentication_errors(request: Request, exc: HTTPException) -> JSONResponse:
    """401 when no token was sent, 403 when the token was rejected."""
    logger.info(f"Authentication failed on {_where(request)}: {exc.detail}")

    missing = exc.status_code == status.HTTP_401_UNAUTHORIZED
    response = format_error_response(
        ErrorCategory.AUTHENTICATION,
        ErrorCode.TOKEN_MISSING if missing else ErrorCode.TOKEN_INVALID,
        str(exc.detail),
        exc.status_code,
    )
    if missing:
        response.headers["WWW-Authenticate"] = "Bearer"
    return response


async def handle_authorization_errors(request: Request, exc: AuthorizationError) -> JSONResponse:
    logger.warning(
        f"Authorization denied on {_where(request)}: {exc.detail}",
        extra={"user_id": getattr(request.state, "user_id", None)},
    )
    return format_error_response(ErrorCategory.AUTHORIZATION, ErrorCode.FORBIDDEN, str(exc.detail), exc.status_code)


async def handle_conflict_errors(request: Request, exc: DuplicateRecordError) -> JSONResponse:
    logger.info(f"Conflict on {_where(request)}: {exc.message}")
    return format_error_response(
        ErrorCategory.CONFLICT,
        ErrorCode.ALREADY_EXISTS,
        exc.message,
        status.HTTP_409_CONFLICT,
        suggestions=["Send the existing record id to update it instead"],
    )


async def handle_store_unavailable_errors(request: Request, exc: StoreUnavailableError) -> JSONResponse:
    logger.error(
        f"Record store unavailable on {_where(request)}: {exc.message}",
        extra={"operation": exc.operation, "table": exc.table},
    )
    return format_error_response(
        ErrorCategory.DATABASE,
        ErrorCode.DB_CONNECTION_FAILED,
        "Database is temporarily unavailable",
        status.HTTP_503_SERVICE_UNAVAILABLE,
        suggestions=["Please try again later"],
    )


# (driver error, status, code, detail) checked in order against ``exc.orig``
_CONSTRAINT_ERRORS: tuple[tuple[type[Exception], int, str, str], ...] = (
    (pg_errors.UniqueViolation, status.HTTP_409_CONFLICT, ErrorCode.DB_UNIQUE_VIOLATION, "This resource already exists"),
    (
        pg_errors.ForeignKeyViolation,
        status.HTTP_400_BAD_REQUEST,
        ErrorCode.DB_FOREIGN_KEY_VIOLATION,
        "Referenced resource does not exist",
    ),
    (
        pg_errors.NotNullViolation,
        status.HTTP_400_BAD_REQUEST,
        ErrorCode.DB_CONSTRAINT_VIOLATION,
        "Required data is missing or invalid",
    ),
    (
        pg_errors.CheckViolation,
        status.HTTP_400_BAD_REQUEST,
        ErrorCode.DB_CONSTRAINT_VIOLATION,
        "Required data is missing or invalid",
    ),
)


async def handle_database_errors(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Map SQLAlchemy errors that escaped the services onto client-facing codes."""
    logger.error(f"Database error on {_where(request)}: {exc}", exc_info=exc)

    orig = getattr(exc, "orig", None)
    for driver_error, status_code, code, detail in _CONSTRAINT_ERRORS:
        if isinstance(orig, driver_error):
            return format_error_response(ErrorCategory.DATABASE, code, detail, status_code)

    if isinstance(exc, IntegrityError) and "unique" in str(exc).lower():
        return format_error_response(
            ErrorCategory.DATABASE,
            ErrorCode.DB_UNIQUE_VIOLATION,
            "This resource already exists",
            status.HTTP_409_CONFLICT,
        )

    if isinstance(exc, OperationalError):
        return format_error_response(
            ErrorCategory.DATABASE,
            ErrorCode.DB_CONNECTION_FAILED,
            "Database connection error",
            status.HTTP_503_SERVICE_UNAVAILABLE,
            suggestions=["Please try again later"],
        )

    return format_error_response(
        ErrorCategory.DATABASE,
        ErrorCode.INTERNAL,
        "A database error occurred",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def handle_external_service_errors(request: Request, exc: ExternalServiceError) -> JSONResponse:
    logger.error(f"{exc.service} failed on {_where(request)}: {exc.detail}")
    return format_error_response(
        ErrorCategory.EXTERNAL_SERVICE,
        ErrorCode.SERVICE_UNAVAILABLE,
        exc.detail,
        exc.status_code,
        suggestions=["Please try again later"],
    )


def log_error_context(request: Request, exc: Exception, error_id: UUID | None = None) -> None:
    """Log an unhandled error with request context; credentials are never logged."""
    hidden = {"authorization", "cookie"}
    context = {
        "error_id": str(error_id) if error_id else None,
        "method": request.method,
        "path": request.url.path,
        "query_params": dict(request.query_params),
        "client_host": request.client.host if request.client else "unknown",
        "user_id": getattr(request.state, "user_id", None),
        "error_type": type(exc).__name__,
        "headers": {k: v for k, v in request.headers.items() if k.lower() not in hidden},
    }
    logger.error(f"Unhandled error: {exc}", extra=context, exc_info=exc)


async def handle_unexpected_errors(request: Request, exc: Exception) -> JSONResponse:
    error_id = uuid4()
    log_error_context(request, exc, error_id)
    return format_error_response(
        ErrorCategory.INTERNAL,
        ErrorCode.INTERNAL,
        "An unexpected error occurred",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        suggestions=["If the problem persists, contact support with the error ID"],
        metadata={"error_id": str(error_id)},
    )


def register_exception_handlers(app: FastAPI, handlers: dict[type[Exception], ExceptionHandler]) -> None:
    """Install ``handlers`` plus the handlers for errors raised across the app."""
    common: dict[type[Exception], ExceptionHandler] = {
        RequestValidationError: handle_validation_errors,
        PydanticValidationError: handle_validation_errors,
        ValidationError: handle_validation_errors,
        ResourceNotFoundError: handle_not_found_errors,
        AuthorizationError: handle_authorization_errors,
        DuplicateRecordError: handle_conflict_errors,
        StoreUnavailableError: handle_store_unavailable_errors,
        SQLAlchemyError: handle_database_errors,
        ExternalServiceError: handle_external_service_errors,
        Exception: handle_unexpected_errors,
    }
    for exc_class, handler in {**common, **handlers}.items():
        app.add_exception_handler(exc_class, handler)
