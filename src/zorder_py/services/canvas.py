"""Canvas service providing business logic for canvas operations."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import structlog

from zorder_py.core.actions import perform_action
from zorder_py.core.commands import (
    AddElementCommand,
    CommandHistoryManager,
    DeleteElementCommand,
    ReorderElementsCommand,
    RestoreElementCommand,
)
from zorder_py.core.groups import get_group_span
from zorder_py.core.models import AppState, Canvas, Element
from zorder_py.core.types import ElementType, ZIndexAction
from zorder_py.exceptions import CanvasNotFoundError, ElementNotFoundError, InvalidElementError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from uuid import UUID

    from zorder_py.storage.base import StorageProtocol

logger = structlog.get_logger(__name__)


@dataclass
class ReorderResult:
    """Result of a z-order change on a canvas.

    Attributes:
        elements: The canvas elements in their resulting order.
        changed: Whether the order actually changed.
    """

    elements: list[Element]
    changed: bool


def _apply_order(elements: Sequence[Element], order: Sequence[str]) -> list[Element]:
    # Elements missing from ``order`` were added after it was recorded. They go back
    # next to their group, or on top when they have none.
    by_id = {element.id: element for element in elements}
    ordered = [by_id.pop(element_id) for element_id in order if element_id in by_id]
    for element in elements:
        if element.id in by_id:
            ordered.insert(_insertion_index(ordered, element.group_ids), element)
    return ordered


def _insertion_index(elements: Sequence[Element], group_ids: Sequence[str]) -> int:
    # Place a grouped element right after the nearest existing group in its chain.
    for group_id in group_ids:
        span = get_group_span(elements, group_id)
        if span is not None:
            return span[1] + 1
    return len(elements)


class CanvasService:
    """Service for managing canvases, their elements and their z-order.

    Attributes:
        command_history: Manager for undo/redo command histories.
    """

    def __init__(self, storage: StorageProtocol, max_history: int = 100) -> None:
        """Initialize the canvas service.

        Args:
            storage: Storage backend implementing StorageProtocol.
            max_history: Maximum undo history size per canvas.
        """
        self._storage = storage
        self.command_history = CommandHistoryManager(max_history)

    # Canvas operations

    async def create_canvas(
        self,
        name: str,
        width: int = 1920,
        height: int = 1080,
        background_color: str = "#ffffff",
    ) -> Canvas:
        """Create a new, empty canvas."""
        canvas = Canvas(name=name, width=width, height=height, background_color=background_color)
        created = await self._storage.create_canvas(canvas)
        logger.info("Canvas created", canvas_id=str(created.id), name=name)
        return created

    async def get_canvas(self, canvas_id: UUID) -> Canvas:
        """Get a canvas by ID.

        Raises:
            CanvasNotFoundError: If the canvas does not exist.
        """
        canvas = await self._storage.get_canvas(canvas_id)
        if canvas is None:
            raise CanvasNotFoundError(canvas_id)
        return canvas

    async def list_canvases(self) -> list[Canvas]:
        """List all canvases, newest first."""
        return await self._storage.list_canvases()

    async def update_canvas(
        self,
        canvas_id: UUID,
        *,
        name: str | None = None,
        width: int | None = None,
        height: int | None = None,
        background_color: str | None = None,
    ) -> Canvas:
        """Update canvas properties.

        Only provided fields are updated. Fields with None values are ignored.

        Raises:
            CanvasNotFoundError: If the canvas does not exist.
        """
        canvas = await self.get_canvas(canvas_id)
        updates = {
            key: value
            for key, value in {
                "name": name,
                "width": width,
                "height": height,
                "background_color": background_color,
            }.items()
            if value is not None
        }
        if not updates:
            return canvas
        return await self._storage.update_canvas(replace(canvas, updated_at=datetime.now(UTC), **updates))

    async def delete_canvas(self, canvas_id: UUID) -> bool:
        """Delete a canvas and drop its history.

        Returns:
            True if the canvas was deleted, False if it did not exist.
        """
        deleted = await self._storage.delete_canvas(canvas_id)
        if deleted:
            self.command_history.remove(canvas_id)
            logger.info("Canvas deleted", canvas_id=str(canvas_id))
        return deleted

    # Element operations

    async def add_element(
        self,
        canvas_id: UUID,
        *,
        element_type: ElementType = ElementType.RECTANGLE,
        x: float = 0.0,
        y: float = 0.0,
        width: float = 0.0,
        height: float = 0.0,
        group_ids: Iterable[str] = (),
        element_id: str | None = None,
        user_id: str = "system",
    ) -> Element:
        """Add an element on top of the canvas.

        An element that joins an existing group is inserted directly above the
        group's topmost member so group members stay contiguous.

        Args:
            canvas_id: The canvas to add to.
            element_type: Kind of drawable.
            x: X-coordinate of the element origin.
            y: Y-coordinate of the element origin.
            width: Width in pixels.
            height: Height in pixels.
            group_ids: Group chain of the element, innermost first.
            element_id: Explicit element ID; generated when omitted.
            user_id: ID of the user performing the action.

        Returns:
            The created element.

        Raises:
            CanvasNotFoundError: If the canvas does not exist.
            InvalidElementError: If ``element_id`` is already used on the canvas.
        """
        element = Element(element_type=element_type, x=x, y=y, width=width, height=height, group_ids=list(group_ids))
        if element_id is not None:
            element.id = element_id

        canvas = await self.get_canvas(canvas_id)
        if any(existing.id == element.id for existing in canvas.elements):
            msg = f"Element {element.id} already exists on canvas {canvas_id}"
            raise InvalidElementError(msg)

        position = _insertion_index(canvas.elements, element.group_ids)
        if position == len(canvas.elements):
            created = await self._storage.add_element(canvas_id, element)
        else:
            elements = [*canvas.elements[:position], element, *canvas.elements[position:]]
            await self._storage.update_canvas(replace(canvas, elements=elements))
            created = element

        self.command_history.push(canvas_id, AddElementCommand(canvas_id=canvas_id, user_id=user_id, element=created))
        return created

    async def get_element(self, canvas_id: UUID, element_id: str) -> Element:
        """Get an element from a canvas.

        Raises:
            CanvasNotFoundError: If the canvas does not exist.
            ElementNotFoundError: If the element does not exist.
        """
        element = await self._storage.get_element(canvas_id, element_id)
        if element is None:
            raise ElementNotFoundError(element_id, canvas_id)
        return element

    async def list_elements(self, canvas_id: UUID, *, include_deleted: bool = True) -> list[Element]:
        """List the elements of a canvas in z-order, back to front."""
        elements = await self._storage.list_elements(canvas_id)
        if include_deleted:
            return elements
        return [element for element in elements if not element.is_deleted]

    async def _set_deleted(self, canvas_id: UUID, element_id: str, *, is_deleted: bool) -> Element:
        element = await self.get_element(canvas_id, element_id)
        if element.is_deleted == is_deleted:
            return element
        return await self._storage.update_element(canvas_id, replace(element, is_deleted=is_deleted))

    async def delete_element(self, canvas_id: UUID, element_id: str, user_id: str = "system") -> Element:
        """Soft-delete an element. It keeps its slot in the z-order.

        Raises:
            ElementNotFoundError: If the element does not exist.
        """
        element = await self.get_element(canvas_id, element_id)
        if element.is_deleted:
            return element

        deleted = await self._set_deleted(canvas_id, element_id, is_deleted=True)
        self.command_history.push(
            canvas_id,
            DeleteElementCommand(canvas_id=canvas_id, user_id=user_id, element_id=element_id),
        )
        return deleted

    async def restore_element(self, canvas_id: UUID, element_id: str, user_id: str = "system") -> Element:
        """Clear the soft-delete flag of an element.

        Restoring an element that is not deleted records nothing.

        Raises:
            ElementNotFoundError: If the element does not exist.
        """
        element = await self.get_element(canvas_id, element_id)
        if not element.is_deleted:
            return element

        restored = await self._set_deleted(canvas_id, element_id, is_deleted=False)
        self.command_history.push(
            canvas_id,
            RestoreElementCommand(canvas_id=canvas_id, user_id=user_id, element_id=element_id),
        )
        return restored

    # Z-ordering operations

    async def reorder(
        self,
        canvas_id: UUID,
        action: ZIndexAction | str,
        selected_element_ids: Iterable[str],
        *,
        editing_group_id: str | None = None,
        user_id: str = "system",
    ) -> ReorderResult:
        """Apply a z-order action to the selected elements of a canvas.

        An undo checkpoint is recorded only when the order changes.

        Args:
            canvas_id: The canvas ID.
            action: One of the ZIndexAction values.
            selected_element_ids: IDs of the selected elements. Unknown IDs are ignored.
            editing_group_id: Group the user is editing inside, if any.
            user_id: ID of the user performing the action.

        Returns:
            The resulting element order and whether it changed.

        Raises:
            CanvasNotFoundError: If the canvas does not exist.
            ValueError: If ``action`` is not a known z-order action.
        """
        action = ZIndexAction(action)
        canvas = await self.get_canvas(canvas_id)
        app_state = AppState(
            selected_element_ids=dict.fromkeys(selected_element_ids, True),
            editing_group_id=editing_group_id,
        )

        result = perform_action(action, canvas.elements, app_state)
        if not result.commit_to_history:
            logger.debug("Reorder was a no-op", canvas_id=str(canvas_id), action=action.value)
            return ReorderResult(elements=result.elements, changed=False)

        await self._storage.update_canvas(replace(canvas, elements=result.elements))
        self.command_history.push(
            canvas_id,
            ReorderElementsCommand(
                canvas_id=canvas_id,
                user_id=user_id,
                action=action.value,
                previous_order=[element.id for element in canvas.elements],
                new_order=[element.id for element in result.elements],
            ),
        )
        logger.info(
            "Elements reordered",
            canvas_id=str(canvas_id),
            action=action.value,
            selected=len(app_state.selected_element_ids),
            editing_group_id=editing_group_id,
        )
        return ReorderResult(elements=result.elements, changed=True)

    async def send_backward(
        self,
        canvas_id: UUID,
        selected_element_ids: Iterable[str],
        *,
        editing_group_id: str | None = None,
        user_id: str = "system",
    ) -> ReorderResult:
        """Move the selection one step toward the back."""
        return await self.reorder(
            canvas_id,
            ZIndexAction.SEND_BACKWARD,
            selected_element_ids,
            editing_group_id=editing_group_id,
            user_id=user_id,
        )

    async def bring_forward(
        self,
        canvas_id: UUID,
        selected_element_ids: Iterable[str],
        *,
        editing_group_id: str | None = None,
        user_id: str = "system",
    ) -> ReorderResult:
        """Move the selection one step toward the front."""
        return await self.reorder(
            canvas_id,
            ZIndexAction.BRING_FORWARD,
            selected_element_ids,
            editing_group_id=editing_group_id,
            user_id=user_id,
        )

    async def send_to_back(
        self,
        canvas_id: UUID,
        selected_element_ids: Iterable[str],
        *,
        editing_group_id: str | None = None,
        user_id: str = "system",
    ) -> ReorderResult:
        """Move the selection all the way to the back."""
        return await self.reorder(
            canvas_id,
            ZIndexAction.SEND_TO_BACK,
            selected_element_ids,
            editing_group_id=editing_group_id,
            user_id=user_id,
        )

    async def bring_to_front(
        self,
        canvas_id: UUID,
        selected_element_ids: Iterable[str],
        *,
        editing_group_id: str | None = None,
        user_id: str = "system",
    ) -> ReorderResult:
        """Move the selection all the way to the front."""
        return await self.reorder(
            canvas_id,
            ZIndexAction.BRING_TO_FRONT,
            selected_element_ids,
            editing_group_id=editing_group_id,
            user_id=user_id,
        )

    # Undo/redo operations

    async def _apply_element_order(self, canvas_id: UUID, order: Sequence[str]) -> None:
        canvas = await self.get_canvas(canvas_id)
        await self._storage.update_canvas(replace(canvas, elements=_apply_order(canvas.elements, order)))

    async def undo(self, canvas_id: UUID) -> bool:
        """Undo the last operation on a canvas.

        Returns:
            True if an operation was undone, False if nothing to undo.
        """
        command = self.command_history.undo(canvas_id)
        if command is None:
            return False

        if isinstance(command, AddElementCommand):
            await self._set_deleted(canvas_id, command.undo(), is_deleted=True)
        elif isinstance(command, DeleteElementCommand):
            await self._set_deleted(canvas_id, command.undo(), is_deleted=False)
        elif isinstance(command, RestoreElementCommand):
            await self._set_deleted(canvas_id, command.undo(), is_deleted=True)
        elif isinstance(command, ReorderElementsCommand):
            await self._apply_element_order(canvas_id, command.undo())

        logger.info("Command undone", canvas_id=str(canvas_id), command=command.to_dict()["type"])
        return True

    async def redo(self, canvas_id: UUID) -> bool:
        """Redo the last undone operation on a canvas.

        Returns:
            True if an operation was redone, False if nothing to redo.
        """
        command = self.command_history.redo(canvas_id)
        if command is None:
            return False

        if isinstance(command, AddElementCommand):
            await self._set_deleted(canvas_id, command.execute().id, is_deleted=False)
        elif isinstance(command, DeleteElementCommand):
            await self._set_deleted(canvas_id, command.execute(), is_deleted=True)
        elif isinstance(command, RestoreElementCommand):
            await self._set_deleted(canvas_id, command.execute(), is_deleted=False)
        elif isinstance(command, ReorderElementsCommand):
            await self._apply_element_order(canvas_id, command.execute())

        logger.info("Command redone", canvas_id=str(canvas_id), command=command.to_dict()["type"])
        return True

    def can_undo(self, canvas_id: UUID) -> bool:
        """Check if undo is available for a canvas."""
        return self.command_history.get_history(canvas_id).can_undo()

    def can_redo(self, canvas_id: UUID) -> bool:
        """Check if redo is available for a canvas."""
        return self.command_history.get_history(canvas_id).can_redo()
