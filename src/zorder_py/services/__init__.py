"""Business logic services for zorder-py."""

from zorder_py.services.canvas import CanvasService, ReorderResult

__all__ = ["CanvasService", "ReorderResult"]
