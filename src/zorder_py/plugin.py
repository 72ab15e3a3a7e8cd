"""Litestar plugin for zorder-py integration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog
from litestar.di import Provide
from litestar.plugins import InitPluginProtocol

from zorder_py.core.error_handling import get_exception_handlers
from zorder_py.services.canvas import CanvasService
from zorder_py.storage.memory import InMemoryStorage
from zorder_py.web.health import SERVICE_STATE_KEY
from zorder_py.web.router import create_router

if TYPE_CHECKING:
    from litestar.config.app import AppConfig

    from zorder_py.storage.base import StorageProtocol

logger = structlog.get_logger(__name__)


def _max_history_from_env() -> int:
    return int(os.environ.get("ZORDER_MAX_HISTORY", "100"))


@dataclass
class ZOrderConfig:
    """Configuration for the ZOrder plugin.

    Attributes:
        storage: Storage backend to use for canvas persistence. If None,
            InMemoryStorage will be used by default.
        enable_api: Whether to mount the REST API routes. Defaults to True.
        api_path: Base path for mounting API routes. Defaults to "/api".
        dependency_key: Dependency injection key for CanvasService. This key
            is used to access the service in route handlers via DI.
            Defaults to "service".
        max_history: Maximum undo history size per canvas. Defaults to the
            ``ZORDER_MAX_HISTORY`` environment variable, or 100.

    Example:
        >>> from zorder_py.storage.memory import InMemoryStorage
        >>> config = ZOrderConfig(storage=InMemoryStorage(), api_path="/api/v1", dependency_key="canvas_service")
    """

    storage: StorageProtocol | None = None
    enable_api: bool = True
    api_path: str = "/api"
    dependency_key: str = "service"
    max_history: int = field(default_factory=_max_history_from_env)


class ZOrderPlugin(InitPluginProtocol):
    """Litestar plugin for zorder-py integration.

    Registers the CanvasService for dependency injection, mounts the REST API
    routes and installs the JSON exception handlers unless the application
    already defines handlers for the same exception types.

    Example:
        >>> from litestar import Litestar
        >>> from zorder_py import ZOrderPlugin, ZOrderConfig
        >>>
        >>> app = Litestar(plugins=[ZOrderPlugin(ZOrderConfig())])

        Accessing the service in route handlers:

        >>> from litestar import get
        >>> from zorder_py.services.canvas import CanvasService
        >>>
        >>> @get("/custom")
        ... async def custom_handler(service: CanvasService) -> dict:
        ...     canvases = await service.list_canvases()
        ...     return {"count": len(canvases)}
    """

    def __init__(self, config: ZOrderConfig | None = None) -> None:
        """Initialize the plugin with optional configuration.

        Args:
            config: Plugin configuration. If None, ZOrderConfig with default
                values will be used.
        """
        self._config = config or ZOrderConfig()
        self._storage: StorageProtocol | None = None
        self._service: CanvasService | None = None

    def on_app_init(self, app_config: AppConfig) -> AppConfig:
        """Initialize the plugin during application startup.

        Args:
            app_config: The Litestar application configuration object.

        Returns:
            The modified application configuration with zorder-py integration.
        """
        self._storage = self._config.storage or InMemoryStorage()
        self._service = CanvasService(self._storage, max_history=self._config.max_history)

        def provide_service() -> CanvasService:
            """Dependency provider for CanvasService."""
            if self._service is None:
                msg = "Service not initialized"
                raise RuntimeError(msg)
            return self._service

        app_config.dependencies[self._config.dependency_key] = Provide(
            provide_service,
            sync_to_thread=False,
        )
        app_config.state[SERVICE_STATE_KEY] = self._service

        for exc_type, handler in get_exception_handlers().items():
            app_config.exception_handlers.setdefault(exc_type, handler)

        if self._config.enable_api:
            app_config.route_handlers.append(create_router(path=self._config.api_path))

        logger.debug(
            "ZOrder plugin initialized",
            storage=type(self._storage).__name__,
            api_path=self._config.api_path if self._config.enable_api else None,
            max_history=self._config.max_history,
        )
        return app_config

    @property
    def storage(self) -> StorageProtocol:
        """Get the initialized storage backend.

        Raises:
            RuntimeError: If the plugin has not been initialized yet
                (on_app_init not called).
        """
        if self._storage is None:
            msg = "Plugin not initialized. Call on_app_init first."
            raise RuntimeError(msg)
        return self._storage

    @property
    def service(self) -> CanvasService:
        """Get the initialized canvas service.

        Raises:
            RuntimeError: If the plugin has not been initialized yet
                (on_app_init not called).
        """
        if self._service is None:
            msg = "Plugin not initialized. Call on_app_init first."
            raise RuntimeError(msg)
        return self._service
