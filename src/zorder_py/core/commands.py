"""Command pattern implementation for undo/redo functionality."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from uuid import UUID

    from zorder_py.core.models import Element


@dataclass
class Command(ABC):
    """Abstract base class for all commands.

    Commands describe a change to a canvas and what is needed to revert it.
    """

    canvas_id: UUID
    user_id: str

    @abstractmethod
    def execute(self) -> Any:
        """Return what the service needs to apply the command."""
        ...

    @abstractmethod
    def undo(self) -> Any:
        """Return what the service needs to revert the command."""
        ...

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Convert command to dictionary for serialization."""
        ...


@dataclass
class AddElementCommand(Command):
    """Command for adding an element to the front of a canvas."""

    element: Element

    def execute(self) -> Element:
        """Execute returns the element to be added."""
        return self.element

    def undo(self) -> str:
        """Undo returns the element ID to be soft-deleted."""
        return self.element.id

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": "add_element",
            "canvas_id": str(self.canvas_id),
            "user_id": self.user_id,
            "element_id": self.element.id,
            "element_type": self.element.element_type.value,
        }


@dataclass
class DeleteElementCommand(Command):
    """Command for soft-deleting an element.

    The element keeps its slot in the sequence, so undo only clears the flag.
    """

    element_id: str

    def execute(self) -> str:
        """Execute returns the element ID to be marked deleted."""
        return self.element_id

    def undo(self) -> str:
        """Undo returns the element ID to be restored."""
        return self.element_id

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": "delete_element",
            "canvas_id": str(self.canvas_id),
            "user_id": self.user_id,
            "element_id": self.element_id,
        }


@dataclass
class RestoreElementCommand(Command):
    """Command for clearing the soft-delete flag of an element."""

    element_id: str

    def execute(self) -> str:
        """Execute returns the element ID to be restored."""
        return self.element_id

    def undo(self) -> str:
        """Undo returns the element ID to be marked deleted again."""
        return self.element_id

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": "restore_element",
            "canvas_id": str(self.canvas_id),
            "user_id": self.user_id,
            "element_id": self.element_id,
        }


@dataclass
class ReorderElementsCommand(Command):
    """Command for a z-order change of the whole element sequence."""

    action: str
    previous_order: list[str] = field(default_factory=list)
    new_order: list[str] = field(default_factory=list)

    def execute(self) -> list[str]:
        """Execute returns the element IDs in their new order."""
        return self.new_order

    def undo(self) -> list[str]:
        """Undo returns the element IDs in their previous order."""
        return self.previous_order

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": "reorder_elements",
            "canvas_id": str(self.canvas_id),
            "user_id": self.user_id,
            "action": self.action,
            "previous_order": list(self.previous_order),
            "new_order": list(self.new_order),
        }


class CommandHistory:
    """Manages command history for undo/redo functionality.

    Commands are stored in two stacks:
    - undo_stack: Commands that can be undone
    - redo_stack: Commands that were undone and can be redone

    Attributes:
        max_history: Maximum number of commands to keep in history.
    """

    def __init__(self, max_history: int = 100) -> None:
        """Initialize command history.

        Args:
            max_history: Maximum number of commands to keep.
        """
        self.max_history = max_history
        self._undo_stack: list[Command] = []
        self._redo_stack: list[Command] = []

    def push(self, command: Command) -> None:
        """Add a command to the history.

        New actions invalidate anything that was undone, so the redo stack
        is cleared.

        Args:
            command: The command to add.
        """
        self._undo_stack.append(command)
        self._redo_stack.clear()

        if len(self._undo_stack) > self.max_history:
            self._undo_stack.pop(0)

    def undo(self) -> Command | None:
        """Get the command to undo.

        Returns:
            The command to undo, or None if no commands to undo.
        """
        if not self._undo_stack:
            return None
        command = self._undo_stack.pop()
        self._redo_stack.append(command)
        return command

    def redo(self) -> Command | None:
        """Get the command to redo.

        Returns:
            The command to redo, or None if no commands to redo.
        """
        if not self._redo_stack:
            return None
        command = self._redo_stack.pop()
        self._undo_stack.append(command)
        return command

    def can_undo(self) -> bool:
        """Check if there are commands to undo."""
        return bool(self._undo_stack)

    def can_redo(self) -> bool:
        """Check if there are commands to redo."""
        return bool(self._redo_stack)

    def clear(self) -> None:
        """Clear all command history."""
        self._undo_stack.clear()
        self._redo_stack.clear()

    @property
    def undo_count(self) -> int:
        """Number of commands that can be undone."""
        return len(self._undo_stack)

    @property
    def redo_count(self) -> int:
        """Number of commands that can be redone."""
        return len(self._redo_stack)


class CommandHistoryManager:
    """Keeps a separate CommandHistory per canvas."""

    def __init__(self, max_history: int = 100) -> None:
        """Initialize the command history manager.

        Args:
            max_history: Maximum history size for each canvas.
        """
        self.max_history = max_history
        self._histories: dict[UUID, CommandHistory] = {}

    def get_history(self, canvas_id: UUID) -> CommandHistory:
        """Get or create command history for a canvas."""
        if canvas_id not in self._histories:
            self._histories[canvas_id] = CommandHistory(self.max_history)
        return self._histories[canvas_id]

    def push(self, canvas_id: UUID, command: Command) -> None:
        """Add a command to a canvas's history."""
        self.get_history(canvas_id).push(command)

    def undo(self, canvas_id: UUID) -> Command | None:
        """Pop the last command for a canvas onto its redo stack."""
        return self.get_history(canvas_id).undo()

    def redo(self, canvas_id: UUID) -> Command | None:
        """Pop the last undone command for a canvas back onto its undo stack."""
        return self.get_history(canvas_id).redo()

    def remove(self, canvas_id: UUID) -> None:
        """Drop the history of a canvas, e.g. after the canvas is deleted."""
        self._histories.pop(canvas_id, None)
