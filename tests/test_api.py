"""Tests for API endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

import pytest
from litestar.testing import TestClient

from zorder_py.app import create_app
from zorder_py.exceptions import StorageError
from zorder_py.plugin import ZOrderConfig
from zorder_py.storage.memory import InMemoryStorage

if TYPE_CHECKING:
    from litestar import Litestar

    from zorder_py.core.models import Canvas


class _FailingStorage(InMemoryStorage):
    async def list_canvases(self) -> list[Canvas]:
        msg = "backend offline"
        raise StorageError(msg)


def _create_canvas(client: TestClient[Litestar], *element_ids: str) -> str:
    canvas_id = client.post("/api/canvases", json={"name": "Layers"}).json()["id"]
    for element_id in element_ids:
        response = client.post(f"/api/canvases/{canvas_id}/elements", json={"id": element_id})
        assert response.status_code == 201
    return canvas_id


def _order(client: TestClient[Litestar], canvas_id: str) -> list[str]:
    return [e["id"] for e in client.get(f"/api/canvases/{canvas_id}/elements").json()]


class TestCanvasAPI:
    """Tests for canvas-related API endpoints."""

    def test_create_canvas(self, client: TestClient[Litestar]) -> None:
        """Test creating a canvas via API."""
        response = client.post("/api/canvases", json={"name": "Test Canvas"})
        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Test Canvas"
        assert "id" in data
        assert data["width"] == 1920
        assert data["height"] == 1080
        assert data["background_color"] == "#ffffff"
        assert data["element_count"] == 0

    def test_create_canvas_missing_name(self, client: TestClient[Litestar]) -> None:
        response = client.post("/api/canvases", json={"width": 100})
        assert response.status_code == 422
        assert response.json()["code"] == "validation_error"

    def test_list_canvases(self, client: TestClient[Litestar]) -> None:
        client.post("/api/canvases", json={"name": "Canvas 1"})
        client.post("/api/canvases", json={"name": "Canvas 2"})

        response = client.get("/api/canvases")
        assert response.status_code == 200
        assert {canvas["name"] for canvas in response.json()} == {"Canvas 1", "Canvas 2"}

    def test_get_canvas_with_elements(self, client: TestClient[Litestar]) -> None:
        canvas_id = _create_canvas(client, "A", "B")

        response = client.get(f"/api/canvases/{canvas_id}")
        assert response.status_code == 200
        assert [e["id"] for e in response.json()["elements"]] == ["A", "B"]

    def test_get_canvas_not_found(self, client: TestClient[Litestar]) -> None:
        response = client.get(f"/api/canvases/{uuid4()}")
        assert response.status_code == 404
        assert response.json()["code"] == "canvas_not_found"

    def test_update_canvas_partial(self, client: TestClient[Litestar]) -> None:
        canvas_id = _create_canvas(client)

        response = client.patch(f"/api/canvases/{canvas_id}", json={"name": "Renamed"})
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Renamed"
        assert data["width"] == 1920

    def test_delete_canvas(self, client: TestClient[Litestar]) -> None:
        canvas_id = _create_canvas(client)

        assert client.delete(f"/api/canvases/{canvas_id}").status_code == 204
        assert client.get(f"/api/canvases/{canvas_id}").status_code == 404

    def test_delete_canvas_not_found(self, client: TestClient[Litestar]) -> None:
        assert client.delete(f"/api/canvases/{uuid4()}").status_code == 404


class TestElementAPI:
    """Tests for element-related API endpoints."""

    def test_add_element(self, client: TestClient[Litestar]) -> None:
        canvas_id = _create_canvas(client)

        response = client.post(
            f"/api/canvases/{canvas_id}/elements",
            json={"element_type": "ellipse", "x": 5, "y": 6, "width": 10, "height": 20, "group_ids": ["g1"]},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["element_type"] == "ellipse"
        assert data["group_ids"] == ["g1"]
        assert data["is_deleted"] is False

    def test_add_element_invalid_type(self, client: TestClient[Litestar]) -> None:
        canvas_id = _create_canvas(client)
        response = client.post(f"/api/canvases/{canvas_id}/elements", json={"element_type": "hexagon"})
        assert response.status_code == 422

    def test_add_duplicate_element(self, client: TestClient[Litestar]) -> None:
        canvas_id = _create_canvas(client, "A")
        response = client.post(f"/api/canvases/{canvas_id}/elements", json={"id": "A"})
        assert response.status_code == 400
        assert response.json()["code"] == "bad_request"

    def test_add_element_to_nonexistent_canvas(self, client: TestClient[Litestar]) -> None:
        response = client.post(f"/api/canvases/{uuid4()}/elements", json={})
        assert response.status_code == 404

    def test_get_element(self, client: TestClient[Litestar]) -> None:
        canvas_id = _create_canvas(client, "A")
        assert client.get(f"/api/canvases/{canvas_id}/elements/A").json()["id"] == "A"

    def test_get_element_not_found(self, client: TestClient[Litestar]) -> None:
        canvas_id = _create_canvas(client)
        response = client.get(f"/api/canvases/{canvas_id}/elements/ghost")
        assert response.status_code == 404
        assert response.json()["code"] == "element_not_found"

    def test_soft_delete_and_restore(self, client: TestClient[Litestar]) -> None:
        canvas_id = _create_canvas(client, "A", "B", "C")

        response = client.delete(f"/api/canvases/{canvas_id}/elements/B")
        assert response.status_code == 200
        assert response.json()["is_deleted"] is True
        assert _order(client, canvas_id) == ["A", "B", "C"]

        live = client.get(f"/api/canvases/{canvas_id}/elements", params={"include_deleted": "false"}).json()
        assert [e["id"] for e in live] == ["A", "C"]

        response = client.post(f"/api/canvases/{canvas_id}/elements/B/restore")
        assert response.status_code == 200
        assert response.json()["is_deleted"] is False


class TestLayerAPI:
    """Tests for z-order actions over the API."""

    @pytest.mark.parametrize(
        ("action", "selected", "expected"),
        [
            ("send_backward", ["C"], ["A", "C", "B"]),
            ("bring_forward", ["A"], ["B", "A", "C"]),
            ("send_to_back", ["B", "C"], ["B", "C", "A"]),
            ("bring_to_front", ["A", "B"], ["C", "A", "B"]),
        ],
    )
    def test_actions(
        self,
        client: TestClient[Litestar],
        action: str,
        selected: list[str],
        expected: list[str],
    ) -> None:
        canvas_id = _create_canvas(client, "A", "B", "C")

        response = client.post(
            f"/api/canvases/{canvas_id}/layers/{action}",
            json={"selected_element_ids": selected},
        )
        assert response.status_code == 200
        data = response.json()
        assert data == {"action": action, "changed": True, "element_ids": expected}
        assert _order(client, canvas_id) == expected

    def test_noop_reports_unchanged(self, client: TestClient[Litestar]) -> None:
        canvas_id = _create_canvas(client, "A", "B", "C")

        response = client.post(
            f"/api/canvases/{canvas_id}/layers/send_to_back",
            json={"selected_element_ids": ["A", "B"]},
        )
        assert response.json()["changed"] is False
        assert response.json()["element_ids"] == ["A", "B", "C"]

    def test_editing_group(self, client: TestClient[Litestar]) -> None:
        canvas_id = _create_canvas(client, "A")
        for element_id in ("B", "C"):
            client.post(f"/api/canvases/{canvas_id}/elements", json={"id": element_id, "group_ids": ["g1"]})

        response = client.post(
            f"/api/canvases/{canvas_id}/layers/send_to_back",
            json={"selected_element_ids": ["C"], "editing_group_id": "g1"},
        )
        assert response.json()["element_ids"] == ["A", "C", "B"]

    def test_unknown_action(self, client: TestClient[Litestar]) -> None:
        canvas_id = _create_canvas(client, "A")

        response = client.post(f"/api/canvases/{canvas_id}/layers/shuffle", json={"selected_element_ids": ["A"]})
        assert response.status_code == 400
        assert response.json()["code"] == "bad_request"

    def test_unknown_canvas(self, client: TestClient[Litestar]) -> None:
        response = client.post(f"/api/canvases/{uuid4()}/layers/send_backward", json={"selected_element_ids": []})
        assert response.status_code == 404


class TestHistoryAPI:
    """Tests for undo/redo endpoints."""

    def test_undo_redo_reorder(self, client: TestClient[Litestar]) -> None:
        canvas_id = _create_canvas(client, "A", "B")
        client.post(f"/api/canvases/{canvas_id}/layers/bring_to_front", json={"selected_element_ids": ["A"]})

        response = client.post(f"/api/canvases/{canvas_id}/undo")
        assert response.status_code == 200
        assert response.json() == {"applied": True, "can_undo": True, "can_redo": True}
        assert _order(client, canvas_id) == ["A", "B"]

        response = client.post(f"/api/canvases/{canvas_id}/redo")
        assert response.json()["applied"] is True
        assert _order(client, canvas_id) == ["B", "A"]

    def test_undo_restore(self, client: TestClient[Litestar]) -> None:
        canvas_id = _create_canvas(client, "A")
        client.delete(f"/api/canvases/{canvas_id}/elements/A")
        client.post(f"/api/canvases/{canvas_id}/elements/A/restore")

        assert client.post(f"/api/canvases/{canvas_id}/undo").json()["applied"] is True
        assert client.get(f"/api/canvases/{canvas_id}/elements/A").json()["is_deleted"] is True

    def test_redo_with_nothing_undone(self, client: TestClient[Litestar]) -> None:
        canvas_id = _create_canvas(client)
        response = client.post(f"/api/canvases/{canvas_id}/redo")
        assert response.json() == {"applied": False, "can_undo": False, "can_redo": False}

    def test_undo_unknown_canvas(self, client: TestClient[Litestar]) -> None:
        assert client.post(f"/api/canvases/{uuid4()}/undo").status_code == 404


class TestApplication:
    """Tests for the standalone application factory."""

    @pytest.fixture
    def app_client(self) -> TestClient[Litestar]:
        return TestClient(app=create_app(config=ZOrderConfig(max_history=5), debug=False, json_logs=True))

    def test_health(self, app_client: TestClient[Litestar]) -> None:
        response = app_client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert {c["name"] for c in data["components"]} == {"application", "storage"}

    def test_ready(self, app_client: TestClient[Litestar]) -> None:
        data = app_client.get("/ready").json()
        assert data["ready"] is True
        assert data["checks"] == {"application": True, "storage": True}

    def test_correlation_id_is_echoed(self, app_client: TestClient[Litestar]) -> None:
        response = app_client.get("/api/canvases", headers={"X-Correlation-ID": "req-123"})
        assert response.status_code == 200
        assert response.headers["x-correlation-id"] == "req-123"

    def test_error_carries_correlation_id(self, app_client: TestClient[Litestar]) -> None:
        response = app_client.get(f"/api/canvases/{uuid4()}", headers={"X-Request-ID": "req-456"})
        assert response.status_code == 404
        assert response.json()["correlation_id"] == "req-456"

    def test_correlation_id_is_generated(self, app_client: TestClient[Litestar]) -> None:
        response = app_client.get("/api/canvases")
        assert response.headers.get("x-correlation-id")

    def test_failing_storage_is_unhealthy(self) -> None:
        client = TestClient(app=create_app(config=ZOrderConfig(storage=_FailingStorage()), debug=False))

        health = client.get("/health").json()
        assert health["status"] == "unhealthy"
        storage = next(c for c in health["components"] if c["name"] == "storage")
        assert "backend offline" in storage["message"]

        ready = client.get("/ready").json()
        assert ready["ready"] is False
        assert ready["checks"]["storage"] is False

        response = client.get("/api/canvases")
        assert response.status_code == 503
        assert response.json()["code"] == "service_unavailable"

    def test_env_max_history(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ZORDER_MAX_HISTORY", "3")
        assert ZOrderConfig().max_history == 3
