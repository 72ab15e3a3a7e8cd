"""Zorder-py: a Litestar-based API for stacking canvas elements.

This package provides the z-order engine used by whiteboard editors to move
selected elements backward, forward, to the back or to the front while keeping
groups intact and respecting the group being edited. It includes domain models,
storage backends, a service layer with undo/redo, REST API controllers and a
Litestar plugin for seamless integration.

Key Components:
    - Core: Element, AppState, Canvas and the reordering engine
    - Storage: InMemoryStorage, StorageProtocol (for custom backends)
    - Services: CanvasService (business logic layer)
    - Web: REST API controllers and routers
    - Plugin: ZOrderPlugin for Litestar integration

Quick Start:
    >>> from zorder_py import AppState, Element, move_one_left
    >>> elements = [Element(id="A"), Element(id="B")]
    >>> [e.id for e in move_one_left(AppState(), elements, [1])]
    ['B', 'A']

    >>> from litestar import Litestar
    >>> from zorder_py import ZOrderPlugin, ZOrderConfig
    >>>
    >>> app = Litestar(plugins=[ZOrderPlugin(ZOrderConfig())])
"""

from __future__ import annotations

from zorder_py.core import (
    AppState,
    Canvas,
    Element,
    ElementType,
    ZIndexAction,
    get_selected_indices,
    move_all_left,
    move_all_right,
    move_one_left,
    move_one_right,
    perform_action,
)
from zorder_py.exceptions import (
    CanvasNotFoundError,
    ElementNotFoundError,
    InvalidElementError,
    StorageError,
    ZOrderError,
)
from zorder_py.plugin import ZOrderConfig, ZOrderPlugin
from zorder_py.services import CanvasService
from zorder_py.storage import InMemoryStorage, StorageProtocol
from zorder_py.web import CanvasController, ElementController, LayerController, create_router

__all__ = [
    "AppState",
    "Canvas",
    "CanvasController",
    "CanvasNotFoundError",
    "CanvasService",
    "Element",
    "ElementController",
    "ElementNotFoundError",
    "ElementType",
    "InMemoryStorage",
    "InvalidElementError",
    "LayerController",
    "StorageError",
    "StorageProtocol",
    "ZIndexAction",
    "ZOrderConfig",
    "ZOrderError",
    "ZOrderPlugin",
    "create_router",
    "get_selected_indices",
    "move_all_left",
    "move_all_right",
    "move_one_left",
    "move_one_right",
    "perform_action",
]

__version__ = "0.1.0"
