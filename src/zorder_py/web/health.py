"""Health check endpoints for zorder-py.

Provides /health and /ready endpoints for container orchestration
and load balancer health checks.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Any, ClassVar

import structlog
from litestar import Controller, get

if TYPE_CHECKING:
    from litestar import Request

    from zorder_py.services.canvas import CanvasService

logger = structlog.get_logger(__name__)

SERVICE_STATE_KEY = "zorder_service"


class HealthStatus(StrEnum):
    """Health check status values."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


@dataclass
class ComponentHealth:
    """Health status of an individual component."""

    name: str
    status: HealthStatus
    message: str | None = None
    latency_ms: float | None = None


@dataclass
class HealthResponse:
    """Health check response."""

    status: HealthStatus
    version: str = "0.1.0"
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())
    components: list[ComponentHealth] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "status": self.status.value,
            "version": self.version,
            "timestamp": self.timestamp,
            "components": [
                {
                    "name": c.name,
                    "status": c.status.value,
                    "message": c.message,
                    "latency_ms": c.latency_ms,
                }
                for c in self.components
            ],
        }


def _get_service(request: Request) -> CanvasService | None:
    return request.app.state.get(SERVICE_STATE_KEY)


class HealthController(Controller):
    """Health check controller.

    Provides endpoints for liveness and readiness probes used by
    container orchestration systems like Kubernetes.
    """

    path = ""
    tags: ClassVar[list[str]] = ["Health"]

    @get("/health")
    async def health(self, request: Request) -> dict[str, Any]:
        """Liveness probe endpoint.

        Returns:
            Health status with component details.
        """
        components = [
            ComponentHealth(name="application", status=HealthStatus.HEALTHY, message="Application is running"),
        ]

        storage_health = await self._check_storage(request)
        if storage_health:
            components.append(storage_health)

        statuses = [c.status for c in components]
        if HealthStatus.UNHEALTHY in statuses:
            overall_status = HealthStatus.UNHEALTHY
        elif HealthStatus.DEGRADED in statuses:
            overall_status = HealthStatus.DEGRADED
        else:
            overall_status = HealthStatus.HEALTHY

        return HealthResponse(status=overall_status, components=components).to_dict()

    @get("/ready")
    async def ready(self, request: Request) -> dict[str, Any]:
        """Readiness probe endpoint.

        Unlike /health, this only reports whether every dependency is usable.
        """
        checks = {"application": True}

        storage_health = await self._check_storage(request)
        if storage_health is not None:
            checks["storage"] = storage_health.status == HealthStatus.HEALTHY

        return {
            "ready": all(checks.values()),
            "timestamp": datetime.now(UTC).isoformat(),
            "checks": checks,
        }

    async def _check_storage(self, request: Request) -> ComponentHealth | None:
        """Check that the storage backend answers a listing request."""
        service = _get_service(request)
        if service is None:
            return None

        start = time.perf_counter()
        try:
            await service.list_canvases()
        except Exception as e:  # noqa: BLE001
            logger.warning("Storage health check failed", error=str(e))
            return ComponentHealth(
                name="storage",
                status=HealthStatus.UNHEALTHY,
                message=f"Storage error: {e!s}",
            )

        return ComponentHealth(
            name="storage",
            status=HealthStatus.HEALTHY,
            message="Storage is reachable",
            latency_ms=round((time.perf_counter() - start) * 1000, 2),
        )
