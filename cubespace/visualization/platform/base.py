"""Interfaces decoupling the scene logic from the window/render-loop library."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum


class MouseButton(IntEnum):
    """Pointer buttons. Values match GLFW; 0 is the primary button."""
    LEFT = 0
    RIGHT = 1
    MIDDLE = 2

    PRIMARY = 0


class Action(IntEnum):
    RELEASE = 0
    PRESS = 1
    REPEAT = 2


class InputHandler(ABC):
    """Receives pointer events in window pixel coordinates (y grows downward)."""

    @abstractmethod
    def pointer_down(self, x: int, y: int, pointer: int, button: int) -> bool:
        ...

    @abstractmethod
    def pointer_dragged(self, x: int, y: int, pointer: int) -> bool:
        ...

    @abstractmethod
    def pointer_up(self, x: int, y: int, pointer: int, button: int) -> bool:
        ...


class Renderable(ABC):
    """Lifecycle hooks called by the application driver."""

    def create(self) -> None:
        """One-time setup before the window is shown."""

    def show(self) -> None:
        """Called once the GL context is current."""

    @abstractmethod
    def render(self, delta: float) -> None:
        ...

    def resize(self, width: int, height: int) -> None:
        pass

    def pause(self) -> None:
        pass

    def resume(self) -> None:
        pass

    def dispose(self) -> None:
        pass
