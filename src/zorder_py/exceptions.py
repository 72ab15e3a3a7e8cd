"""Custom exceptions for zorder-py."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID


class ZOrderError(Exception):
    """Base exception class for all zorder-py errors."""


class CanvasNotFoundError(ZOrderError):
    """Raised when a canvas with the specified ID cannot be found.

    Attributes:
        canvas_id: The UUID of the canvas that was not found.
    """

    def __init__(self, canvas_id: UUID) -> None:
        """Initialize the exception with the canvas ID.

        Args:
            canvas_id: The UUID of the canvas that was not found.
        """
        self.canvas_id = canvas_id
        super().__init__(f"Canvas with ID {canvas_id} not found")


class ElementNotFoundError(ZOrderError):
    """Raised when an element cannot be found on a canvas.

    Attributes:
        element_id: The ID of the element that was not found.
        canvas_id: The canvas that was searched, if known.
    """

    def __init__(self, element_id: str, canvas_id: UUID | None = None) -> None:
        """Initialize the exception with the element ID.

        Args:
            element_id: The ID of the element that was not found.
            canvas_id: The canvas that was searched.
        """
        self.element_id = element_id
        self.canvas_id = canvas_id
        if canvas_id is None:
            super().__init__(f"Element with ID {element_id} not found")
        else:
            super().__init__(f"Element with ID {element_id} not found on canvas {canvas_id}")


class InvalidElementError(ZOrderError):
    """Raised when element data is invalid, e.g. a duplicate element ID."""


class StorageError(ZOrderError):
    """Raised when a storage operation fails."""
