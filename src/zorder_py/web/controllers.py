"""Litestar controllers for zorder-py API endpoints."""

from __future__ import annotations

from typing import ClassVar
from uuid import UUID

from litestar import Controller, delete, get, patch, post
from litestar.status_codes import HTTP_200_OK, HTTP_204_NO_CONTENT

from zorder_py.exceptions import CanvasNotFoundError
from zorder_py.services.canvas import CanvasService
from zorder_py.web.dto import (
    CanvasDetailDTO,
    CanvasResponseDTO,
    CreateCanvasDTO,
    CreateElementDTO,
    ElementResponseDTO,
    HistoryResponseDTO,
    ReorderRequestDTO,
    ReorderResponseDTO,
    UpdateCanvasDTO,
    canvas_to_detail,
    canvas_to_response,
    element_to_response,
)


class CanvasController(Controller):
    """Controller for canvas-related operations.

    This controller handles HTTP endpoints for managing canvases,
    including creation, retrieval, updating, deletion and undo/redo.
    """

    path = "/canvases"
    tags: ClassVar[list[str]] = ["Canvases"]

    @post("/")
    async def create_canvas(self, data: CreateCanvasDTO, service: CanvasService) -> CanvasResponseDTO:
        """Create a new canvas.

        Args:
            data: The canvas creation data.
            service: The canvas service instance (injected).

        Returns:
            The created canvas.
        """
        canvas = await service.create_canvas(
            name=data.name,
            width=data.width,
            height=data.height,
            background_color=data.background_color,
        )
        return canvas_to_response(canvas)

    @get("/")
    async def list_canvases(self, service: CanvasService) -> list[CanvasResponseDTO]:
        """List all canvases."""
        canvases = await service.list_canvases()
        return [canvas_to_response(c) for c in canvases]

    @get("/{canvas_id:uuid}")
    async def get_canvas(self, canvas_id: UUID, service: CanvasService) -> CanvasDetailDTO:
        """Get a canvas with all its elements in z-order.

        Raises:
            CanvasNotFoundError: If the canvas does not exist.
        """
        canvas = await service.get_canvas(canvas_id)
        return canvas_to_detail(canvas)

    @patch("/{canvas_id:uuid}")
    async def update_canvas(self, canvas_id: UUID, data: UpdateCanvasDTO, service: CanvasService) -> CanvasResponseDTO:
        """Update canvas properties.

        Only provided fields are updated. Fields with None values are ignored.

        Args:
            canvas_id: The unique identifier of the canvas.
            data: The canvas update data.
            service: The canvas service instance (injected).

        Returns:
            The updated canvas.

        Raises:
            CanvasNotFoundError: If the canvas does not exist.
        """
        canvas = await service.update_canvas(
            canvas_id,
            name=data.name,
            width=data.width,
            height=data.height,
            background_color=data.background_color,
        )
        return canvas_to_response(canvas)

    @delete("/{canvas_id:uuid}", status_code=HTTP_204_NO_CONTENT)
    async def delete_canvas(self, canvas_id: UUID, service: CanvasService) -> None:
        """Delete a canvas.

        Raises:
            CanvasNotFoundError: If the canvas does not exist.
        """
        deleted = await service.delete_canvas(canvas_id)
        if not deleted:
            raise CanvasNotFoundError(canvas_id)

    @post("/{canvas_id:uuid}/undo", status_code=HTTP_200_OK)
    async def undo(self, canvas_id: UUID, service: CanvasService) -> HistoryResponseDTO:
        """Undo the last operation on a canvas.

        Args:
            canvas_id: The unique identifier of the canvas.
            service: The canvas service instance (injected).

        Returns:
            Whether an operation was undone and the resulting history state.

        Raises:
            CanvasNotFoundError: If the canvas does not exist.
        """
        await service.get_canvas(canvas_id)
        applied = await service.undo(canvas_id)
        return HistoryResponseDTO(
            applied=applied,
            can_undo=service.can_undo(canvas_id),
            can_redo=service.can_redo(canvas_id),
        )

    @post("/{canvas_id:uuid}/redo", status_code=HTTP_200_OK)
    async def redo(self, canvas_id: UUID, service: CanvasService) -> HistoryResponseDTO:
        """Redo the last undone operation on a canvas.

        Raises:
            CanvasNotFoundError: If the canvas does not exist.
        """
        await service.get_canvas(canvas_id)
        applied = await service.redo(canvas_id)
        return HistoryResponseDTO(
            applied=applied,
            can_undo=service.can_undo(canvas_id),
            can_redo=service.can_redo(canvas_id),
        )


class ElementController(Controller):
    """Controller for element-related operations.

    Elements are appended on top of the stack. Deletion is a soft delete, the
    element keeps its slot in the z-order until it is restored.
    """

    path = "/canvases/{canvas_id:uuid}/elements"
    tags: ClassVar[list[str]] = ["Elements"]

    @get("/")
    async def list_elements(
        self,
        canvas_id: UUID,
        service: CanvasService,
        include_deleted: bool = True,
    ) -> list[ElementResponseDTO]:
        """List the elements of a canvas, back to front.

        Args:
            canvas_id: The unique identifier of the canvas.
            service: The canvas service instance (injected).
            include_deleted: Whether soft-deleted elements are included.

        Returns:
            The elements in z-order.

        Raises:
            CanvasNotFoundError: If the canvas does not exist.
        """
        elements = await service.list_elements(canvas_id, include_deleted=include_deleted)
        return [element_to_response(e) for e in elements]

    @post("/")
    async def add_element(self, canvas_id: UUID, data: CreateElementDTO, service: CanvasService) -> ElementResponseDTO:
        """Add an element to the canvas.

        Args:
            canvas_id: The unique identifier of the canvas.
            data: The element creation data.
            service: The canvas service instance (injected).

        Returns:
            The created element.

        Raises:
            CanvasNotFoundError: If the canvas does not exist.
            InvalidElementError: If the element ID is already taken.
        """
        element = await service.add_element(
            canvas_id,
            element_type=data.element_type,
            x=data.x,
            y=data.y,
            width=data.width,
            height=data.height,
            group_ids=data.group_ids,
            element_id=data.id,
        )
        return element_to_response(element)

    @get("/{element_id:str}")
    async def get_element(self, canvas_id: UUID, element_id: str, service: CanvasService) -> ElementResponseDTO:
        """Get a single element.

        Raises:
            CanvasNotFoundError: If the canvas does not exist.
            ElementNotFoundError: If the element does not exist.
        """
        element = await service.get_element(canvas_id, element_id)
        return element_to_response(element)

    @delete("/{element_id:str}", status_code=HTTP_200_OK)
    async def delete_element(self, canvas_id: UUID, element_id: str, service: CanvasService) -> ElementResponseDTO:
        """Soft-delete an element.

        Raises:
            CanvasNotFoundError: If the canvas does not exist.
            ElementNotFoundError: If the element does not exist.
        """
        element = await service.delete_element(canvas_id, element_id)
        return element_to_response(element)

    @post("/{element_id:str}/restore", status_code=HTTP_200_OK)
    async def restore_element(self, canvas_id: UUID, element_id: str, service: CanvasService) -> ElementResponseDTO:
        """Restore a soft-deleted element in its original slot."""
        element = await service.restore_element(canvas_id, element_id)
        return element_to_response(element)


class LayerController(Controller):
    """Controller for z-order (layer) actions on a canvas."""

    path = "/canvases/{canvas_id:uuid}/layers"
    tags: ClassVar[list[str]] = ["Layers"]

    @post("/{action:str}", status_code=HTTP_200_OK)
    async def reorder(
        self,
        canvas_id: UUID,
        action: str,
        data: ReorderRequestDTO,
        service: CanvasService,
    ) -> ReorderResponseDTO:
        """Apply a z-order action to the selected elements.

        Args:
            canvas_id: The unique identifier of the canvas.
            action: One of ``send_backward``, ``bring_forward``,
                ``send_to_back`` or ``bring_to_front``.
            data: The selection and editing group.
            service: The canvas service instance (injected).

        Returns:
            The resulting element order and whether it changed.

        Raises:
            CanvasNotFoundError: If the canvas does not exist.
            ValueError: If the action is unknown.
        """
        result = await service.reorder(
            canvas_id,
            action,
            data.selected_element_ids,
            editing_group_id=data.editing_group_id,
        )
        return ReorderResponseDTO(
            action=action,
            changed=result.changed,
            element_ids=[element.id for element in result.elements],
        )
