"""Selection to sequence-position extraction."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence, Set

    from zorder_py.core.models import Element


def _is_selected(selected_ids: Mapping[str, bool] | Set[str], element_id: str) -> bool:
    if isinstance(selected_ids, Mapping):
        return bool(selected_ids.get(element_id))
    return element_id in selected_ids


def get_selected_indices(
    elements: Sequence[Element],
    selected_ids: Mapping[str, bool] | Set[str],
) -> list[int]:
    """Get the sequence positions that move together as the selection.

    Soft-deleted elements sitting directly after a selected element are
    attached to the selection, but only once another selected element
    follows them without a live, unselected element in between.

    Args:
        elements: The element sequence, back to front.
        selected_ids: Selected element ids, either as an ``id -> bool`` mapping
            or as a set. Ids missing from the sequence are ignored.

    Returns:
        Strictly increasing list of positions.

    Example:
        >>> get_selected_indices(elements, {"A": True, "D": True})
        [0, 1, 2, 3]  # when B and C are soft-deleted
    """
    selected: list[int] = []
    pending_deleted: list[int] = []
    attachable_index: int | None = None

    for index, element in enumerate(elements):
        if _is_selected(selected_ids, element.id):
            selected.extend(pending_deleted)
            pending_deleted = []
            selected.append(index)
            attachable_index = index + 1
        elif element.is_deleted and attachable_index == index:
            attachable_index = index + 1
            pending_deleted.append(index)
        else:
            pending_deleted = []

    return selected
