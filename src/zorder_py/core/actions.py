"""Named z-order actions binding selection extraction to the engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from zorder_py.core.selection import get_selected_indices
from zorder_py.core.types import ZIndexAction
from zorder_py.core.zindex import move_all_left, move_all_right, move_one_left, move_one_right

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from zorder_py.core.models import AppState, Element

    MoveFunction = Callable[[AppState, Sequence[Element], Sequence[int]], list[Element]]

logger = structlog.get_logger(__name__)

ACTIONS: dict[ZIndexAction, MoveFunction] = {
    ZIndexAction.SEND_BACKWARD: move_one_left,
    ZIndexAction.BRING_FORWARD: move_one_right,
    ZIndexAction.SEND_TO_BACK: move_all_left,
    ZIndexAction.BRING_TO_FRONT: move_all_right,
}


@dataclass
class ActionResult:
    """Outcome of a z-order action.

    Attributes:
        elements: The reordered sequence.
        commit_to_history: Whether the order changed and an undo checkpoint
            should be recorded.
    """

    elements: list[Element]
    commit_to_history: bool


def same_order(first: Sequence[Element], second: Sequence[Element]) -> bool:
    """Check whether two sequences hold the same elements in the same order."""
    return len(first) == len(second) and all(a is b for a, b in zip(first, second, strict=True))


def perform_action(action: ZIndexAction | str, elements: Sequence[Element], app_state: AppState) -> ActionResult:
    """Run a z-order action against the current selection.

    Args:
        action: The action to perform.
        elements: The element sequence, back to front.
        app_state: Editor state holding the selection and editing group.

    Returns:
        The new sequence and whether it should be committed to history.

    Raises:
        ValueError: If ``action`` is not a known z-order action.
    """
    move = ACTIONS[ZIndexAction(action)]
    indices = get_selected_indices(elements, app_state.selected_element_ids)
    reordered = move(app_state, elements, indices)
    changed = not same_order(elements, reordered)

    logger.debug(
        "Z-order action performed",
        action=str(action),
        selected_positions=len(indices),
        editing_group_id=app_state.editing_group_id,
        changed=changed,
    )

    return ActionResult(elements=reordered, commit_to_history=changed)
