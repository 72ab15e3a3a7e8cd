"""Core domain models and z-order engine for zorder-py."""

from zorder_py.core.actions import ACTIONS, ActionResult, perform_action
from zorder_py.core.commands import (
    AddElementCommand,
    Command,
    CommandHistory,
    CommandHistoryManager,
    DeleteElementCommand,
    ReorderElementsCommand,
    RestoreElementCommand,
)
from zorder_py.core.models import AppState, Canvas, Element
from zorder_py.core.selection import get_selected_indices
from zorder_py.core.types import Direction, ElementType, ZIndexAction
from zorder_py.core.zindex import (
    get_suitable_index,
    move_all_left,
    move_all_right,
    move_one_left,
    move_one_right,
    shift_elements,
    to_contiguous_groups,
)

__all__ = [
    "ACTIONS",
    "ActionResult",
    "AddElementCommand",
    "AppState",
    "Canvas",
    "Command",
    "CommandHistory",
    "CommandHistoryManager",
    "DeleteElementCommand",
    "Direction",
    "Element",
    "ElementType",
    "ReorderElementsCommand",
    "RestoreElementCommand",
    "ZIndexAction",
    "get_selected_indices",
    "get_suitable_index",
    "move_all_left",
    "move_all_right",
    "move_one_left",
    "move_one_right",
    "perform_action",
    "shift_elements",
    "to_contiguous_groups",
]
