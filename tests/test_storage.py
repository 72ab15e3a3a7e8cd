"""Tests for the storage layer."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from uuid import uuid4

import pytest

from zorder_py.core.models import Canvas, Element
from zorder_py.exceptions import CanvasNotFoundError, ElementNotFoundError
from zorder_py.storage.base import StorageProtocol
from zorder_py.storage.memory import InMemoryStorage


class TestInMemoryStorageCanvas:
    """Tests for canvas operations in InMemoryStorage."""

    def test_implements_protocol(self, storage: InMemoryStorage) -> None:
        assert isinstance(storage, StorageProtocol)

    @pytest.mark.asyncio
    async def test_create_and_get_canvas(self, storage: InMemoryStorage, sample_canvas: Canvas) -> None:
        """Test creating and retrieving a canvas."""
        created = await storage.create_canvas(sample_canvas)
        assert created.name == "Test Canvas"
        assert created.id == sample_canvas.id

        retrieved = await storage.get_canvas(created.id)
        assert retrieved is not None
        assert retrieved.id == created.id
        assert retrieved.name == created.name

    @pytest.mark.asyncio
    async def test_get_nonexistent_canvas(self, storage: InMemoryStorage) -> None:
        """Test retrieving a canvas that doesn't exist."""
        assert await storage.get_canvas(uuid4()) is None

    @pytest.mark.asyncio
    async def test_list_canvases_ordered_by_creation(self, storage: InMemoryStorage) -> None:
        """Test that list_canvases returns canvases newest first."""
        await storage.create_canvas(Canvas(name="First"))
        await asyncio.sleep(0.01)
        await storage.create_canvas(Canvas(name="Second"))
        await asyncio.sleep(0.01)
        await storage.create_canvas(Canvas(name="Third"))

        canvases = await storage.list_canvases()
        assert [c.name for c in canvases] == ["Third", "Second", "First"]

    @pytest.mark.asyncio
    async def test_list_canvases_empty(self, storage: InMemoryStorage) -> None:
        assert await storage.list_canvases() == []

    @pytest.mark.asyncio
    async def test_update_canvas(self, storage: InMemoryStorage, sample_canvas: Canvas) -> None:
        """Test updating an existing canvas."""
        created = await storage.create_canvas(sample_canvas)
        original_created_at = created.created_at

        created.name = "Updated Name"
        created.background_color = "#ff0000"

        updated = await storage.update_canvas(created)
        assert updated.name == "Updated Name"
        assert updated.background_color == "#ff0000"
        assert updated.created_at == original_created_at
        assert updated.updated_at >= original_created_at

    @pytest.mark.asyncio
    async def test_update_nonexistent_canvas(self, storage: InMemoryStorage) -> None:
        """Test updating a canvas that doesn't exist."""
        canvas = Canvas(name="Nonexistent")

        with pytest.raises(CanvasNotFoundError) as exc_info:
            await storage.update_canvas(canvas)

        assert str(canvas.id) in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_delete_canvas(self, storage: InMemoryStorage, sample_canvas: Canvas) -> None:
        created = await storage.create_canvas(sample_canvas)
        assert await storage.delete_canvas(created.id) is True
        assert await storage.get_canvas(created.id) is None

    @pytest.mark.asyncio
    async def test_delete_nonexistent_canvas(self, storage: InMemoryStorage) -> None:
        assert await storage.delete_canvas(uuid4()) is False

    @pytest.mark.asyncio
    async def test_canvas_isolation(self, storage: InMemoryStorage) -> None:
        """Test that returned canvases are isolated from internal storage."""
        created = await storage.create_canvas(Canvas(name="Original", elements=[Element(id="A")]))

        created.name = "Modified"
        created.elements.append(Element(id="B"))
        created.elements[0].group_ids.append("g1")

        retrieved = await storage.get_canvas(created.id)
        assert retrieved is not None
        assert retrieved.name == "Original"
        assert [e.id for e in retrieved.elements] == ["A"]
        assert retrieved.elements[0].group_ids == []


class TestInMemoryStorageElements:
    """Tests for element operations in InMemoryStorage."""

    @pytest.mark.asyncio
    async def test_add_element_appends_on_top(
        self,
        storage: InMemoryStorage,
        sample_canvas: Canvas,
        sample_element: Element,
    ) -> None:
        """Test that added elements go to the front of the stack."""
        canvas = await storage.create_canvas(sample_canvas)
        await storage.add_element(canvas.id, Element(id="bottom"))
        added = await storage.add_element(canvas.id, sample_element)

        assert added.id == sample_element.id
        elements = await storage.list_elements(canvas.id)
        assert [e.id for e in elements] == ["bottom", "rect-1"]

    @pytest.mark.asyncio
    async def test_add_element_to_nonexistent_canvas(self, storage: InMemoryStorage, sample_element: Element) -> None:
        with pytest.raises(CanvasNotFoundError):
            await storage.add_element(uuid4(), sample_element)

    @pytest.mark.asyncio
    async def test_get_element(self, storage: InMemoryStorage, sample_canvas: Canvas, sample_element: Element) -> None:
        canvas = await storage.create_canvas(sample_canvas)
        await storage.add_element(canvas.id, sample_element)

        element = await storage.get_element(canvas.id, "rect-1")
        assert element is not None
        assert element.width == 100.0
        assert await storage.get_element(canvas.id, "missing") is None

    @pytest.mark.asyncio
    async def test_update_element_keeps_position(self, storage: InMemoryStorage, sample_canvas: Canvas) -> None:
        """Test that updating an element does not move it in the z-order."""
        canvas = await storage.create_canvas(sample_canvas)
        for element_id in ("A", "B", "C"):
            await storage.add_element(canvas.id, Element(id=element_id))

        element = await storage.get_element(canvas.id, "B")
        assert element is not None
        updated = await storage.update_element(canvas.id, replace(element, is_deleted=True))
        assert updated.is_deleted

        elements = await storage.list_elements(canvas.id)
        assert [e.id for e in elements] == ["A", "B", "C"]
        assert elements[1].is_deleted

    @pytest.mark.asyncio
    async def test_update_nonexistent_element(self, storage: InMemoryStorage, sample_canvas: Canvas) -> None:
        canvas = await storage.create_canvas(sample_canvas)

        with pytest.raises(ElementNotFoundError) as exc_info:
            await storage.update_element(canvas.id, Element(id="ghost"))

        assert exc_info.value.element_id == "ghost"

    @pytest.mark.asyncio
    async def test_list_elements_nonexistent_canvas(self, storage: InMemoryStorage) -> None:
        with pytest.raises(CanvasNotFoundError):
            await storage.list_elements(uuid4())

    @pytest.mark.asyncio
    async def test_update_canvas_replaces_order(self, storage: InMemoryStorage, sample_canvas: Canvas) -> None:
        """Test that writing a canvas stores its new element order."""
        canvas = await storage.create_canvas(sample_canvas)
        for element_id in ("A", "B", "C"):
            await storage.add_element(canvas.id, Element(id=element_id))

        current = await storage.get_canvas(canvas.id)
        assert current is not None
        await storage.update_canvas(replace(current, elements=list(reversed(current.elements))))

        elements = await storage.list_elements(canvas.id)
        assert [e.id for e in elements] == ["C", "B", "A"]
