"""Core domain models for the zorder-py canvas system."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

from zorder_py.core.types import ElementType


@dataclass
class Element:
    """A drawable element on a canvas.

    The z-order of an element is its position in the canvas element list,
    not a field on the element itself.

    Attributes:
        id: Stable identifier for the element.
        element_type: Kind of drawable (rectangle, text, ...).
        x: X-coordinate of the element origin.
        y: Y-coordinate of the element origin.
        width: Width of the element in pixels.
        height: Height of the element in pixels.
        is_deleted: Soft-delete flag. Deleted elements keep their slot in the
            sequence but are never chosen as reorder targets.
        group_ids: Groups this element belongs to, innermost first.
        created_at: Timestamp when the element was created.
    """

    id: str = field(default_factory=lambda: str(uuid4()))
    element_type: ElementType = ElementType.RECTANGLE
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    is_deleted: bool = False
    group_ids: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass
class AppState:
    """Editor state the reordering engine reads.

    Attributes:
        selected_element_ids: Mapping of element id to selection flag.
        editing_group_id: Group the user is currently editing inside, if any.
    """

    selected_element_ids: dict[str, bool] = field(default_factory=dict)
    editing_group_id: str | None = None


@dataclass
class Canvas:
    """Represents a drawing canvas containing an ordered element sequence.

    Attributes:
        id: Unique identifier for the canvas.
        name: Display name for the canvas.
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        background_color: Background color in hex format.
        elements: Elements in z-order, back to front.
        created_at: Timestamp when the canvas was created.
        updated_at: Timestamp when the canvas was last updated.
    """

    id: UUID = field(default_factory=uuid4)
    name: str = "Untitled Canvas"
    width: int = 1920
    height: int = 1080
    background_color: str = "#ffffff"
    elements: list[Element] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))
