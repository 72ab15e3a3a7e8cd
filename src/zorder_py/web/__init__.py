"""Web layer for zorder-py API."""

from zorder_py.web.controllers import CanvasController, ElementController, LayerController
from zorder_py.web.health import HealthController
from zorder_py.web.router import create_router

__all__ = ["CanvasController", "ElementController", "HealthController", "LayerController", "create_router"]
