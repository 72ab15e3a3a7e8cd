"""Exception handlers producing structured JSON error responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import structlog
from litestar import Response
from litestar.status_codes import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_422_UNPROCESSABLE_ENTITY,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_503_SERVICE_UNAVAILABLE,
)

from zorder_py.exceptions import CanvasNotFoundError, ElementNotFoundError, StorageError, ZOrderError

if TYPE_CHECKING:
    from collections.abc import Callable

    from litestar import Request
    from litestar.exceptions import HTTPException, ValidationException

logger = structlog.get_logger(__name__)

HTTP_ERROR_CODES = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    422: "validation_error",
    429: "rate_limited",
    500: "internal_error",
    503: "service_unavailable",
}


@dataclass
class ErrorDetail:
    """Details about a specific error."""

    field: str | None = None
    message: str = ""
    code: str = "error"


@dataclass
class ErrorResponse:
    """Structured error response body."""

    status: str = "error"
    message: str = ""
    code: str = "internal_error"
    correlation_id: str | None = None
    details: list[ErrorDetail] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON response."""
        result: dict[str, Any] = {
            "status": self.status,
            "message": self.message,
            "code": self.code,
        }
        if self.correlation_id:
            result["correlation_id"] = self.correlation_id
        if self.details:
            result["details"] = [{"field": d.field, "message": d.message, "code": d.code} for d in self.details]
        return result


def get_correlation_id(request: Request) -> str | None:
    """Extract the correlation ID set by CorrelationIdMiddleware, or from headers."""
    correlation_id = request.scope.get("state", {}).get("correlation_id")
    if correlation_id:
        return correlation_id
    return request.headers.get("X-Correlation-ID") or request.headers.get("X-Request-ID")


def _json(error: ErrorResponse, status_code: int) -> Response[dict[str, Any]]:
    return Response(content=error.to_dict(), status_code=status_code, media_type="application/json")


def validation_exception_handler(request: Request, exc: ValidationException) -> Response[dict[str, Any]]:
    """Handle request validation errors with per-field details."""
    correlation_id = get_correlation_id(request)

    details: list[ErrorDetail] = []
    for error in exc.extra or []:
        if isinstance(error, dict):
            key = error.get("key") or ".".join(str(p) for p in error.get("loc", [])) or None
            details.append(
                ErrorDetail(
                    field=key,
                    message=str(error.get("message", error.get("msg", error))),
                    code=str(error.get("type", "validation_error")),
                )
            )
        else:
            details.append(ErrorDetail(message=str(error), code="validation_error"))
    if not details:
        details.append(ErrorDetail(message=str(exc.detail), code="validation_error"))

    logger.warning(
        "Validation error",
        correlation_id=correlation_id,
        path=request.url.path,
        method=request.method,
        error_count=len(details),
    )

    return _json(
        ErrorResponse(
            message="Validation failed",
            code="validation_error",
            correlation_id=correlation_id,
            details=details,
        ),
        HTTP_422_UNPROCESSABLE_ENTITY,
    )


def http_exception_handler(request: Request, exc: HTTPException) -> Response[dict[str, Any]]:
    """Handle Litestar HTTP exceptions."""
    correlation_id = get_correlation_id(request)
    error_code = HTTP_ERROR_CODES.get(exc.status_code, "error")

    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "HTTP exception",
        correlation_id=correlation_id,
        path=request.url.path,
        method=request.method,
        status_code=exc.status_code,
        error_code=error_code,
    )

    return _json(
        ErrorResponse(message=str(exc.detail), code=error_code, correlation_id=correlation_id),
        exc.status_code,
    )


def canvas_not_found_handler(request: Request, exc: CanvasNotFoundError) -> Response[dict[str, Any]]:
    """Handle CanvasNotFoundError exceptions."""
    correlation_id = get_correlation_id(request)

    logger.warning(
        "Canvas not found",
        correlation_id=correlation_id,
        canvas_id=str(exc.canvas_id),
        path=request.url.path,
    )

    return _json(
        ErrorResponse(
            message=f"Canvas not found: {exc.canvas_id}",
            code="canvas_not_found",
            correlation_id=correlation_id,
            details=[ErrorDetail(field="canvas_id", message=str(exc), code="not_found")],
        ),
        HTTP_404_NOT_FOUND,
    )


def element_not_found_handler(request: Request, exc: ElementNotFoundError) -> Response[dict[str, Any]]:
    """Handle ElementNotFoundError exceptions."""
    correlation_id = get_correlation_id(request)

    logger.warning(
        "Element not found",
        correlation_id=correlation_id,
        element_id=exc.element_id,
        path=request.url.path,
    )

    return _json(
        ErrorResponse(
            message=f"Element not found: {exc.element_id}",
            code="element_not_found",
            correlation_id=correlation_id,
            details=[ErrorDetail(field="element_id", message=str(exc), code="not_found")],
        ),
        HTTP_404_NOT_FOUND,
    )


def bad_request_handler(request: Request, exc: Exception) -> Response[dict[str, Any]]:
    """Handle domain errors and invalid arguments raised by the service layer."""
    correlation_id = get_correlation_id(request)

    logger.warning(
        "Bad request",
        correlation_id=correlation_id,
        error=str(exc),
        path=request.url.path,
    )

    return _json(
        ErrorResponse(message=str(exc), code="bad_request", correlation_id=correlation_id),
        HTTP_400_BAD_REQUEST,
    )


def storage_error_handler(request: Request, exc: StorageError) -> Response[dict[str, Any]]:
    """Handle storage backend failures."""
    correlation_id = get_correlation_id(request)

    logger.error("Storage error", correlation_id=correlation_id, error=str(exc), path=request.url.path)

    return _json(
        ErrorResponse(
            message="Storage is temporarily unavailable.",
            code="service_unavailable",
            correlation_id=correlation_id,
        ),
        HTTP_503_SERVICE_UNAVAILABLE,
    )


def generic_exception_handler(request: Request, exc: Exception) -> Response[dict[str, Any]]:
    """Handle unexpected exceptions.

    Logs the full exception but returns a safe message to the client.
    """
    correlation_id = get_correlation_id(request)

    logger.exception(
        "Unhandled exception",
        correlation_id=correlation_id,
        path=request.url.path,
        method=request.method,
        exc_info=exc,
    )

    return _json(
        ErrorResponse(
            message="An unexpected error occurred. Please try again later.",
            code="internal_error",
            correlation_id=correlation_id,
        ),
        HTTP_500_INTERNAL_SERVER_ERROR,
    )


def get_exception_handlers() -> dict[type[Exception], Callable[..., Response[dict[str, Any]]]]:
    """Get all exception handlers for the application.

    Returns:
        Dictionary mapping exception types to handler functions. Litestar picks
        the handler registered for the closest class in the exception's MRO.
    """
    from litestar.exceptions import HTTPException, ValidationException

    return {
        ValidationException: validation_exception_handler,
        HTTPException: http_exception_handler,
        CanvasNotFoundError: canvas_not_found_handler,
        ElementNotFoundError: element_not_found_handler,
        StorageError: storage_error_handler,
        ZOrderError: bad_request_handler,
        ValueError: bad_request_handler,
        Exception: generic_exception_handler,
    }
