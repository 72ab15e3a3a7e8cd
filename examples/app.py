"""Minimal example showing zorder-py usage with Litestar.

The application will:
    - Automatically configure the CanvasService with InMemoryStorage
    - Mount REST API endpoints at /api
    - Enable dependency injection for CanvasService in route handlers

Running the Application:
    python examples/app.py

Example API Usage:
    # Create a canvas and two elements
    curl -X POST http://127.0.0.1:8000/api/canvases \\
        -H "Content-Type: application/json" -d '{"name": "Layers"}'
    curl -X POST http://127.0.0.1:8000/api/canvases/{canvas_id}/elements \\
        -H "Content-Type: application/json" -d '{"id": "A"}'
    curl -X POST http://127.0.0.1:8000/api/canvases/{canvas_id}/elements \\
        -H "Content-Type: application/json" -d '{"id": "B"}'

    # Send B to the back
    curl -X POST http://127.0.0.1:8000/api/canvases/{canvas_id}/layers/send_to_back \\
        -H "Content-Type: application/json" -d '{"selected_element_ids": ["B"]}'

    # Count the live elements through a custom handler
    curl http://127.0.0.1:8000/canvases/{canvas_id}/live-count
"""

from __future__ import annotations

from uuid import UUID

from litestar import Litestar, get

from zorder_py import CanvasService, ZOrderConfig, ZOrderPlugin


@get("/canvases/{canvas_id:uuid}/live-count")
async def live_count(canvas_id: UUID, service: CanvasService) -> dict[str, int]:
    """Count elements that are not soft-deleted."""
    elements = await service.list_elements(canvas_id, include_deleted=False)
    return {"count": len(elements)}


app = Litestar(
    route_handlers=[live_count],
    plugins=[
        ZOrderPlugin(
            ZOrderConfig(
                # Use InMemoryStorage (default)
                storage=None,
                enable_api=True,
                api_path="/api",
                # Use "service" as the dependency key
                dependency_key="service",
            )
        )
    ],
    debug=True,
)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
