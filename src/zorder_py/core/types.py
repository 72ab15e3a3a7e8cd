"""Core type definitions for zorder-py."""

from __future__ import annotations

from enum import StrEnum


class ElementType(StrEnum):
    """Enumeration of drawable element types on a canvas."""

    RECTANGLE = "rectangle"
    ELLIPSE = "ellipse"
    DIAMOND = "diamond"
    LINE = "line"
    ARROW = "arrow"
    TEXT = "text"
    FREEDRAW = "freedraw"


class Direction(StrEnum):
    """Direction of a z-order move.

    Index 0 of an element sequence is the back of the stack, so ``BACK``
    moves elements toward the start of the sequence.
    """

    BACK = "back"
    FRONT = "front"


class ZIndexAction(StrEnum):
    """Named z-order actions exposed to callers."""

    SEND_BACKWARD = "send_backward"
    BRING_FORWARD = "bring_forward"
    SEND_TO_BACK = "send_to_back"
    BRING_TO_FRONT = "bring_to_front"
