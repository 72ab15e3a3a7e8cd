"""Router configuration for the zorder-py API."""

from __future__ import annotations

from litestar import Router

from zorder_py.web.controllers import CanvasController, ElementController, LayerController


def create_router(path: str = "/api") -> Router:
    """Create the zorder-py API router.

    Args:
        path: The base path for all API routes. Defaults to "/api".

    Returns:
        A configured Litestar Router instance.

    Example:
        >>> router = create_router("/api/v1")
        >>> # Use the router in your Litestar app configuration
    """
    return Router(
        path=path,
        route_handlers=[CanvasController, ElementController, LayerController],
    )
