"""Simple event system for observer pattern."""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class Event(Generic[T]):
    """
    Observer list used for change notifications.

    Usage:
        on_changed: Event[Scene] = Event()
        on_changed += lambda scene: window.request_redraw()
        on_changed.emit(scene)
    """

    def __init__(self):
        self._handlers: list[Callable[[T], None]] = []

    def __iadd__(self, handler: Callable[[T], None]) -> "Event[T]":
        """Subscribe to event: event += handler"""
        if handler not in self._handlers:
            self._handlers.append(handler)
        return self

    def __isub__(self, handler: Callable[[T], None]) -> "Event[T]":
        """Unsubscribe from event: event -= handler"""
        if handler in self._handlers:
            self._handlers.remove(handler)
        return self

    def emit(self, value: T) -> None:
        # Copy so a handler may unsubscribe itself.
        for handler in list(self._handlers):
            handler(value)

    def clear(self) -> None:
        self._handlers.clear()

    def __len__(self) -> int:
        return len(self._handlers)

    def __bool__(self) -> bool:
        return len(self._handlers) > 0
