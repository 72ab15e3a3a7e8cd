"""In-memory storage implementation for zorder-py."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from zorder_py.exceptions import CanvasNotFoundError, ElementNotFoundError

if TYPE_CHECKING:
    from uuid import UUID

    from zorder_py.core.models import Canvas, Element


def _copy_element(element: Element) -> Element:
    return replace(element, group_ids=list(element.group_ids))


def _copy_canvas(canvas: Canvas) -> Canvas:
    return replace(canvas, elements=[_copy_element(e) for e in canvas.elements])


class InMemoryStorage:
    """In-memory storage guarded by an asyncio lock.

    Canvases and elements are copied on the way in and out, so callers can
    never mutate stored state or see a half-applied change.

    Note:
        All data is lost when the application stops. This storage is suitable for
        development, testing, or ephemeral sessions.
    """

    def __init__(self) -> None:
        self._canvases: dict[UUID, Canvas] = {}
        self._lock = asyncio.Lock()

    def _require_canvas(self, canvas_id: UUID) -> Canvas:
        canvas = self._canvases.get(canvas_id)
        if canvas is None:
            raise CanvasNotFoundError(canvas_id)
        return canvas

    async def create_canvas(self, canvas: Canvas) -> Canvas:
        async with self._lock:
            self._canvases[canvas.id] = _copy_canvas(canvas)
            return _copy_canvas(canvas)

    async def get_canvas(self, canvas_id: UUID) -> Canvas | None:
        async with self._lock:
            canvas = self._canvases.get(canvas_id)
            return _copy_canvas(canvas) if canvas else None

    async def list_canvases(self) -> list[Canvas]:
        async with self._lock:
            canvases = [_copy_canvas(canvas) for canvas in self._canvases.values()]
            return sorted(canvases, key=lambda c: c.created_at, reverse=True)

    async def update_canvas(self, canvas: Canvas) -> Canvas:
        """Replace a stored canvas and bump its ``updated_at`` timestamp.

        Raises:
            CanvasNotFoundError: If the canvas does not exist.
        """
        async with self._lock:
            self._require_canvas(canvas.id)
            updated = replace(canvas, updated_at=datetime.now(UTC))
            self._canvases[canvas.id] = _copy_canvas(updated)
            return _copy_canvas(updated)

    async def delete_canvas(self, canvas_id: UUID) -> bool:
        async with self._lock:
            return self._canvases.pop(canvas_id, None) is not None

    async def add_element(self, canvas_id: UUID, element: Element) -> Element:
        async with self._lock:
            canvas = self._require_canvas(canvas_id)
            self._canvases[canvas_id] = replace(
                canvas,
                elements=[*canvas.elements, _copy_element(element)],
                updated_at=datetime.now(UTC),
            )
            return _copy_element(element)

    async def get_element(self, canvas_id: UUID, element_id: str) -> Element | None:
        async with self._lock:
            canvas = self._require_canvas(canvas_id)
            for element in canvas.elements:
                if element.id == element_id:
                    return _copy_element(element)
            return None

    async def update_element(self, canvas_id: UUID, element: Element) -> Element:
        """Replace an element without changing its position in the sequence.

        Raises:
            CanvasNotFoundError: If the canvas does not exist.
            ElementNotFoundError: If the element does not exist.
        """
        async with self._lock:
            canvas = self._require_canvas(canvas_id)
            positions = [index for index, existing in enumerate(canvas.elements) if existing.id == element.id]
            if not positions:
                raise ElementNotFoundError(element.id, canvas_id)

            elements = list(canvas.elements)
            elements[positions[0]] = _copy_element(element)
            self._canvases[canvas_id] = replace(canvas, elements=elements, updated_at=datetime.now(UTC))
            return _copy_element(element)

    async def list_elements(self, canvas_id: UUID) -> list[Element]:
        async with self._lock:
            canvas = self._require_canvas(canvas_id)
            return [_copy_element(element) for element in canvas.elements]
