"""Storage backends for zorder-py."""

from __future__ import annotations

from zorder_py.storage.base import StorageProtocol
from zorder_py.storage.memory import InMemoryStorage

__all__ = ["InMemoryStorage", "StorageProtocol"]
