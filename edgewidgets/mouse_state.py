"""Pointer state tracking: hover and single-button press filtering."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

log = logging.getLogger(__name__)

Position = tuple[float, float]


class PointerEventKind(Enum):
    ENTER = "enter"
    LEAVE = "leave"
    MOTION = "motion"
    PRESS = "press"
    RELEASE = "release"
    AXIS = "axis"


@dataclass(frozen=True)
class PointerEvent:
    """A raw pointer event from the compositor."""

    kind: PointerEventKind
    position: Position = (0.0, 0.0)
    button: int = 0
    horizontal: Any = None
    vertical: Any = None


class MouseEventKind(Enum):
    PRESS = "press"
    RELEASE = "release"
    ENTER = "enter"
    LEAVE = "leave"
    MOTION = "motion"
    SCROLL = "scroll"


@dataclass(frozen=True)
class MouseEvent:
    """A filtered mouse event handed to widgets."""

    kind: MouseEventKind
    position: Position | None = None
    button: int | None = None
    horizontal: Any = None
    vertical: Any = None


class MouseState:
    """Tracks hovering and the one button currently held."""

    def __init__(self, mouse_debug: bool = False) -> None:
        self.hovering = False
        self.pressing: int | None = None
        self.mouse_debug = mouse_debug

    def is_hovering(self) -> bool:
        return self.hovering

    def handle_pointer(self, event: PointerEvent) -> MouseEvent | None:
        """Translate a pointer event, or return None if it is filtered out."""
        kind = event.kind
        if kind is PointerEventKind.ENTER:
            self.hovering = True
            return MouseEvent(MouseEventKind.ENTER, event.position)
        if kind is PointerEventKind.LEAVE:
            self.hovering = False
            return MouseEvent(MouseEventKind.LEAVE)
        if kind is PointerEventKind.MOTION:
            return MouseEvent(MouseEventKind.MOTION, event.position)
        if kind is PointerEventKind.PRESS:
            return self._press(event.button, event.position)
        if kind is PointerEventKind.RELEASE:
            return self._release(event.button, event.position)
        return MouseEvent(
            MouseEventKind.SCROLL, horizontal=event.horizontal, vertical=event.vertical
        )

    def _press(self, button: int, position: Position) -> MouseEvent | None:
        if self.mouse_debug:
            log.debug("Mouse Debug info: key pressed: %s", button)
        if self.pressing is not None:
            return None
        self.pressing = button
        return MouseEvent(MouseEventKind.PRESS, position, button)

    def _release(self, button: int, position: Position) -> MouseEvent | None:
        if self.mouse_debug:
            log.debug("Mouse Debug info: key released: %s", button)
        if self.pressing != button:
            return None
        self.pressing = None
        return MouseEvent(MouseEventKind.RELEASE, position, button)