"""Main Litestar application for zorder-py.

This module provides the main application factory and configured app instance
for running zorder-py as a standalone application.
"""

from __future__ import annotations

import os

from litestar import Litestar
from litestar.openapi import OpenAPIConfig
from litestar.openapi.plugins import ScalarRenderPlugin, SwaggerRenderPlugin

from zorder_py import ZOrderConfig, ZOrderPlugin
from zorder_py.core.error_handling import get_exception_handlers
from zorder_py.core.logging import CorrelationIdMiddleware, RequestLoggingMiddleware, configure_logging
from zorder_py.web.health import HealthController


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("true", "1", "yes")


def create_app(
    *,
    config: ZOrderConfig | None = None,
    debug: bool | None = None,
    json_logs: bool | None = None,
) -> Litestar:
    """Create and configure the Litestar application.

    Args:
        config: Plugin configuration. Defaults to ZOrderConfig().
        debug: Whether to enable debug mode. Defaults to ``ZORDER_DEBUG``.
        json_logs: Whether to output logs as JSON (for production).
            Defaults to ``ZORDER_JSON_LOGS``.

    Returns:
        Configured Litestar application instance.
    """
    debug = _env_flag("ZORDER_DEBUG") if debug is None else debug
    json_logs = _env_flag("ZORDER_JSON_LOGS") if json_logs is None else json_logs

    configure_logging(debug=debug, json_logs=json_logs)

    return Litestar(
        route_handlers=[HealthController],
        plugins=[ZOrderPlugin(config or ZOrderConfig())],
        debug=debug,
        middleware=[CorrelationIdMiddleware, RequestLoggingMiddleware],
        exception_handlers=get_exception_handlers(),
        openapi_config=OpenAPIConfig(
            title="zorder-py API",
            version="0.1.0",
            description="Canvas element stacking (z-order) API with group-aware layer actions",
            path="/schema",
            render_plugins=[ScalarRenderPlugin(path="/"), SwaggerRenderPlugin(path="/swagger")],
            use_handler_docstrings=True,
        ),
    )


# Default application instance for uvicorn
# Use ZORDER_DEBUG=true for dev mode, defaults to False (production)
app = create_app()
