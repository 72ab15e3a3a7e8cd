"""Data Transfer Objects (DTOs) for the zorder-py API."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from zorder_py.core.types import ElementType

if TYPE_CHECKING:
    from zorder_py.core.models import Canvas, Element


# Canvas DTOs


@dataclass
class CreateCanvasDTO:
    """DTO for creating a new canvas.

    Attributes:
        name: Display name for the canvas.
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        background_color: Background color in hex format.
    """

    name: str
    width: int = 1920
    height: int = 1080
    background_color: str = "#ffffff"


@dataclass
class UpdateCanvasDTO:
    """DTO for updating canvas properties.

    All fields are optional. Only provided fields will be updated.
    """

    name: str | None = None
    width: int | None = None
    height: int | None = None
    background_color: str | None = None


@dataclass
class CanvasResponseDTO:
    """DTO for canvas list/summary responses.

    Attributes:
        id: Unique identifier for the canvas.
        name: Display name for the canvas.
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        background_color: Background color in hex format.
        element_count: Number of elements on the canvas, deleted ones included.
        created_at: Timestamp when the canvas was created.
        updated_at: Timestamp when the canvas was last updated.
    """

    id: UUID
    name: str
    width: int
    height: int
    background_color: str
    element_count: int
    created_at: datetime
    updated_at: datetime


@dataclass
class CanvasDetailDTO:
    """DTO for detailed canvas responses including elements.

    Attributes:
        elements: Elements on the canvas in z-order, back to front.
    """

    id: UUID
    name: str
    width: int
    height: int
    background_color: str
    elements: list[ElementResponseDTO]
    created_at: datetime
    updated_at: datetime


# Element DTOs


@dataclass
class CreateElementDTO:
    """DTO for adding an element to a canvas.

    Attributes:
        element_type: Kind of drawable.
        x: X-coordinate of the element origin.
        y: Y-coordinate of the element origin.
        width: Width in pixels.
        height: Height in pixels.
        group_ids: Group chain of the element, innermost first.
        id: Optional client-chosen element ID.
    """

    element_type: ElementType = ElementType.RECTANGLE
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    group_ids: list[str] = field(default_factory=list)
    id: str | None = None


@dataclass
class ElementResponseDTO:
    """DTO for element responses."""

    id: str
    element_type: ElementType
    x: float
    y: float
    width: float
    height: float
    is_deleted: bool
    group_ids: list[str]
    created_at: datetime


# Layer DTOs


@dataclass
class ReorderRequestDTO:
    """DTO for a z-order action request.

    Attributes:
        selected_element_ids: IDs of the selected elements. Unknown IDs are ignored.
        editing_group_id: Group the user is editing inside, if any.
    """

    selected_element_ids: list[str] = field(default_factory=list)
    editing_group_id: str | None = None


@dataclass
class ReorderResponseDTO:
    """DTO for a z-order action result.

    Attributes:
        action: The action that was applied.
        changed: Whether the order changed.
        element_ids: Element IDs in their resulting order, back to front.
    """

    action: str
    changed: bool
    element_ids: list[str]


@dataclass
class HistoryResponseDTO:
    """DTO for undo/redo results."""

    applied: bool
    can_undo: bool
    can_redo: bool


# Conversion helpers


def element_to_response(element: Element) -> ElementResponseDTO:
    """Convert a domain Element to an ElementResponseDTO."""
    return ElementResponseDTO(
        id=element.id,
        element_type=element.element_type,
        x=element.x,
        y=element.y,
        width=element.width,
        height=element.height,
        is_deleted=element.is_deleted,
        group_ids=list(element.group_ids),
        created_at=element.created_at,
    )


def canvas_to_response(canvas: Canvas) -> CanvasResponseDTO:
    """Convert a Canvas domain model to a CanvasResponseDTO.

    Args:
        canvas: The canvas to convert.

    Returns:
        The corresponding CanvasResponseDTO.
    """
    return CanvasResponseDTO(
        id=canvas.id,
        name=canvas.name,
        width=canvas.width,
        height=canvas.height,
        background_color=canvas.background_color,
        element_count=len(canvas.elements),
        created_at=canvas.created_at,
        updated_at=canvas.updated_at,
    )


def canvas_to_detail(canvas: Canvas) -> CanvasDetailDTO:
    """Convert a Canvas domain model to a CanvasDetailDTO.

    Args:
        canvas: The canvas to convert.

    Returns:
        The corresponding CanvasDetailDTO, elements in z-order.
    """
    return CanvasDetailDTO(
        id=canvas.id,
        name=canvas.name,
        width=canvas.width,
        height=canvas.height,
        background_color=canvas.background_color,
        elements=[element_to_response(e) for e in canvas.elements],
        created_at=canvas.created_at,
        updated_at=canvas.updated_at,
    )
