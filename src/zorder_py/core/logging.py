"""Structured logging setup and request middleware for zorder-py."""

from __future__ import annotations

import logging
import time
import uuid
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from litestar.types import ASGIApp, Message, Receive, Scope, Send

CORRELATION_HEADER = b"x-correlation-id"
REQUEST_ID_HEADER = b"x-request-id"


def configure_logging(*, debug: bool = False, json_logs: bool = False) -> None:
    """Configure structlog for the application.

    Args:
        debug: Emit debug-level events (engine decisions, no-op reorders).
        json_logs: Render events as JSON lines instead of coloured console output.
    """
    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_logs:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors += [structlog.dev.ConsoleRenderer(colors=True)]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if debug else logging.INFO),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


class CorrelationIdMiddleware:
    """Bind a correlation ID to every HTTP request.

    The ID comes from the ``X-Correlation-ID`` or ``X-Request-ID`` header, or
    is generated. It is stored in ``scope["state"]``, bound to the structlog
    context for the duration of the request and echoed in the response headers.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        correlation_id = (
            headers.get(CORRELATION_HEADER, b"").decode()
            or headers.get(REQUEST_ID_HEADER, b"").decode()
            or str(uuid.uuid4())
        )
        scope.setdefault("state", {})["correlation_id"] = correlation_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            correlation_id=correlation_id,
            method=scope.get("method", ""),
            path=scope.get("path", ""),
        )

        async def send_with_header(message: Message) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [*message.get("headers", []), (CORRELATION_HEADER, correlation_id.encode())]
            await send(message)

        try:
            await self.app(scope, receive, send_with_header)
        finally:
            structlog.contextvars.clear_contextvars()


class RequestLoggingMiddleware:
    """Log one event per HTTP request with its status code and duration."""

    def __init__(self, app: ASGIApp, *, exclude_paths: set[str] | None = None) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application.
            exclude_paths: Paths that are never logged (health probes by default).
        """
        self.app = app
        self.exclude_paths = exclude_paths or {"/health", "/ready"}

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope.get("path", "") in self.exclude_paths:
            await self.app(scope, receive, send)
            return

        logger = structlog.get_logger(__name__)
        started = time.perf_counter()
        status_code = 500

        async def capture_status(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 500)
            await send(message)

        # Exceptions are turned into responses by the exception handlers further out.
        error: str | None = None
        try:
            await self.app(scope, receive, capture_status)
        except Exception as exc:
            error = type(exc).__name__
            status_code = getattr(exc, "status_code", 500)
            raise
        finally:
            if status_code >= 500:
                log = logger.error
            elif status_code >= 400:
                log = logger.warning
            else:
                log = logger.info
            log(
                "Request completed",
                status_code=status_code,
                error=error,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
