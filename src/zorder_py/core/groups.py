"""Group membership queries over a flat element sequence.

Groups are not stored anywhere; they are inferred from the ``group_ids`` of
each element. A well-formed sequence keeps every group's members contiguous.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from zorder_py.core.models import Element


def is_element_in_group(element: Element, group_id: str) -> bool:
    """Check whether an element belongs to a group, directly or via a subgroup."""
    return group_id in element.group_ids


def get_group_span(elements: Sequence[Element], group_id: str) -> tuple[int, int] | None:
    """Get the first and last sequence positions occupied by a group.

    Returns:
        ``(first, last)`` positions, or None if no element is in the group.
    """
    positions = [index for index, element in enumerate(elements) if is_element_in_group(element, group_id)]
    if not positions:
        return None
    return positions[0], positions[-1]


def get_group_directly_inside(element: Element, group_id: str | None) -> str | None:
    """Get the group id one level inside ``group_id`` in an element's chain.

    With no ``group_id`` this is the element's outermost group. Returns None
    when the element has no groups, is not in ``group_id``, or is a direct
    child of ``group_id``.
    """
    if not element.group_ids:
        return None
    if group_id is None:
        return element.group_ids[-1]
    if group_id not in element.group_ids:
        return None
    position = element.group_ids.index(group_id)
    if position == 0:
        return None
    return element.group_ids[position - 1]


def are_siblings(first: Element, second: Element) -> bool:
    """Check whether two elements share the exact same group chain."""
    return list(first.group_ids) == list(second.group_ids)
