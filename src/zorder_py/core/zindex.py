"""Z-order reordering engine.

All functions here are pure: they read the element sequence, the editor state
and a list of selected positions (see ``get_selected_indices``) and return a
new sequence. Moves that are impossible or would cross the boundary of the
group being edited leave the order unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from zorder_py.core.groups import (
    are_siblings,
    get_group_directly_inside,
    get_group_span,
    is_element_in_group,
)
from zorder_py.core.types import Direction

if TYPE_CHECKING:
    from collections.abc import Sequence

    from zorder_py.core.models import AppState, Element


def to_contiguous_groups(indices: Sequence[int]) -> list[list[int]]:
    """Split sorted positions into runs of consecutive integers.

    Example:
        >>> to_contiguous_groups([1, 2, 4, 6, 7])
        [[1, 2], [4], [6, 7]]
    """
    groups: list[list[int]] = []
    for position, value in enumerate(indices):
        if position == 0 or indices[position - 1] != value - 1:
            groups.append([])
        groups[-1].append(value)
    return groups


def _find_live_neighbor(elements: Sequence[Element], boundary_index: int, direction: Direction) -> int | None:
    if direction is Direction.BACK:
        candidates = range(max(0, boundary_index - 1), -1, -1)
    else:
        candidates = range(boundary_index + 1, len(elements))
    for index in candidates:
        if not elements[index].is_deleted:
            return index
    return None


def get_suitable_index(
    app_state: AppState,
    elements: Sequence[Element],
    boundary_index: int,
    direction: Direction,
) -> int | None:
    """Find the position a selected run should be swapped past.

    Args:
        app_state: Editor state; only ``editing_group_id`` is read.
        elements: The element sequence, back to front.
        boundary_index: Outermost position of the run in the move direction.
        direction: Which way the run moves.

    Returns:
        The far edge of the neighbour to swap past (a single element or a
        whole group), or None when the move is not allowed.
    """
    source = elements[boundary_index]
    candidate_index = _find_live_neighbor(elements, boundary_index, direction)
    if candidate_index is None:
        return None

    candidate = elements[candidate_index]
    editing_group_id = app_state.editing_group_id

    if editing_group_id:
        if are_siblings(source, candidate):
            return candidate_index
        if not is_element_in_group(candidate, editing_group_id):
            return None

    if not candidate.group_ids:
        return candidate_index

    target_group_id = get_group_directly_inside(candidate, editing_group_id or None)
    if target_group_id is None:
        return candidate_index

    span = get_group_span(elements, target_group_id)
    if span is None:
        return candidate_index
    first, last = span
    return first if direction is Direction.BACK else last


def shift_elements(
    app_state: AppState,
    elements: Sequence[Element],
    indices: Sequence[int],
    direction: Direction,
) -> list[Element]:
    """Move every selected run one step in ``direction``.

    Runs are handled in order, each against the sequence produced by the
    previous ones.
    """
    result = list(elements)

    for run in to_contiguous_groups(indices):
        leading_index = run[0]
        trailing_index = run[-1]
        boundary_index = leading_index if direction is Direction.BACK else trailing_index

        target_index = get_suitable_index(app_state, result, boundary_index, direction)
        if target_index is None or target_index == boundary_index:
            continue

        moved = result[leading_index : trailing_index + 1]
        if direction is Direction.BACK:
            leading = result[:target_index]
            displaced = result[target_index:leading_index]
            trailing = result[trailing_index + 1 :]
            result = [*leading, *moved, *displaced, *trailing]
        else:
            leading = result[:leading_index]
            displaced = result[trailing_index + 1 : target_index + 1]
            trailing = result[target_index + 1 :]
            result = [*leading, *displaced, *moved, *trailing]

    return result


def move_one_left(app_state: AppState, elements: Sequence[Element], indices: Sequence[int]) -> list[Element]:
    """Send the selection one step backward."""
    return shift_elements(app_state, elements, indices, Direction.BACK)


def move_one_right(app_state: AppState, elements: Sequence[Element], indices: Sequence[int]) -> list[Element]:
    """Bring the selection one step forward."""
    return shift_elements(app_state, elements, indices, Direction.FRONT)


def _expand_to_subgroups(elements: Sequence[Element], positions: range, targets: set[int], group_id: str) -> set[int]:
    """Widen ``targets`` to whole subgroups of ``group_id``.

    A subgroup directly inside the editing group moves as a whole once any of
    its members is a target, so it stays contiguous.

    Args:
        elements: The full element sequence.
        positions: Positions spanned by the editing group.
        targets: Positions selected to move.
        group_id: The editing group.

    Returns:
        The target positions including every member of a touched subgroup.
    """
    touched = {
        subgroup
        for index in targets
        if (subgroup := get_group_directly_inside(elements[index], group_id)) is not None
    }
    if not touched:
        return targets
    return targets | {
        index for index in positions if get_group_directly_inside(elements[index], group_id) in touched
    }


def _move_all(
    app_state: AppState,
    elements: Sequence[Element],
    indices: Sequence[int],
    direction: Direction,
) -> list[Element]:
    start, stop = 0, len(elements)
    editing_group_id = app_state.editing_group_id

    targets = set(indices)
    if editing_group_id:
        span = get_group_span(elements, editing_group_id)
        if span is None:
            return list(elements)
        start, stop = span[0], span[1] + 1
        targets = _expand_to_subgroups(elements, range(start, stop), targets, editing_group_id)

    target_elements: list[Element] = []
    displaced_elements: list[Element] = []
    for index in range(start, stop):
        if index in targets:
            target_elements.append(elements[index])
        else:
            displaced_elements.append(elements[index])

    if direction is Direction.BACK:
        reordered = [*target_elements, *displaced_elements]
    else:
        reordered = [*displaced_elements, *target_elements]

    return [*elements[:start], *reordered, *elements[stop:]]


def move_all_left(app_state: AppState, elements: Sequence[Element], indices: Sequence[int]) -> list[Element]:
    """Send the selection to the back.

    Inside an editing group the selection only travels to the back of the
    group's own span.
    """
    return _move_all(app_state, elements, indices, Direction.BACK)


def move_all_right(app_state: AppState, elements: Sequence[Element], indices: Sequence[int]) -> list[Element]:
    """Bring the selection to the front.

    Inside an editing group the selection only travels to the front of the
    group's own span.
    """
    return _move_all(app_state, elements, indices, Direction.FRONT)
