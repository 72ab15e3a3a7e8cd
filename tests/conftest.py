"""Pytest configuration and fixtures for zorder-py tests."""

from __future__ import annotations

import pytest
from litestar import Litestar
from litestar.testing import TestClient

from zorder_py.core.models import Canvas, Element
from zorder_py.core.types import ElementType
from zorder_py.plugin import ZOrderConfig, ZOrderPlugin
from zorder_py.services.canvas import CanvasService
from zorder_py.storage.memory import InMemoryStorage


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


# Storage fixtures


@pytest.fixture
def storage() -> InMemoryStorage:
    """Create a fresh InMemoryStorage instance for each test."""
    return InMemoryStorage()


@pytest.fixture
def service(storage: InMemoryStorage) -> CanvasService:
    """Create a CanvasService backed by a fresh in-memory store."""
    return CanvasService(storage)


# Model fixtures


@pytest.fixture
def sample_canvas() -> Canvas:
    """Create a sample canvas for testing."""
    return Canvas(name="Test Canvas", width=800, height=600)


@pytest.fixture
def sample_element() -> Element:
    """Create a sample element for testing."""
    return Element(id="rect-1", element_type=ElementType.RECTANGLE, x=50, y=50, width=100.0, height=75.0)


# App and client fixtures


@pytest.fixture
def app() -> Litestar:
    """Create a Litestar app with ZOrderPlugin for testing."""
    return Litestar(plugins=[ZOrderPlugin(ZOrderConfig())])


@pytest.fixture
def client(app: Litestar) -> TestClient[Litestar]:
    """Create a test client for the app."""
    return TestClient(app=app)
