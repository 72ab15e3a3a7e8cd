"""Storage protocol definition for zorder-py."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from uuid import UUID

    from zorder_py.core.models import Canvas, Element


@runtime_checkable
class StorageProtocol(Protocol):
    """Contract every canvas storage backend implements.

    A canvas owns its element sequence; the order of ``Canvas.elements`` is the
    z-order and must be preserved exactly by every backend.
    """

    async def create_canvas(self, canvas: Canvas) -> Canvas:
        """Store a new canvas and return it."""
        ...

    async def get_canvas(self, canvas_id: UUID) -> Canvas | None:
        """Retrieve a canvas by its ID, or None if it does not exist."""
        ...

    async def list_canvases(self) -> list[Canvas]:
        """List all canvases, newest first."""
        ...

    async def update_canvas(self, canvas: Canvas) -> Canvas:
        """Replace a stored canvas, including its element sequence.

        Raises:
            CanvasNotFoundError: If the canvas does not exist.
        """
        ...

    async def delete_canvas(self, canvas_id: UUID) -> bool:
        """Delete a canvas. Returns False if it did not exist."""
        ...

    async def add_element(self, canvas_id: UUID, element: Element) -> Element:
        """Append an element to the front of a canvas's z-order.

        Raises:
            CanvasNotFoundError: If the canvas does not exist.
        """
        ...

    async def get_element(self, canvas_id: UUID, element_id: str) -> Element | None:
        """Retrieve an element, or None if it is not on the canvas.

        Raises:
            CanvasNotFoundError: If the canvas does not exist.
        """
        ...

    async def update_element(self, canvas_id: UUID, element: Element) -> Element:
        """Replace an element in place, keeping its z-order position.

        Raises:
            CanvasNotFoundError: If the canvas does not exist.
            ElementNotFoundError: If the element does not exist.
        """
        ...

    async def list_elements(self, canvas_id: UUID) -> list[Element]:
        """List the elements of a canvas in z-order, back to front.

        Raises:
            CanvasNotFoundError: If the canvas does not exist.
        """
        ...
