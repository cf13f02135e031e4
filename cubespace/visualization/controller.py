"""Pointer drag routing: primary button spins the selected cube, others orbit the camera."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from cubespace import log
from cubespace.visualization.drag_rotation import map_drag
from cubespace.visualization.platform.base import InputHandler, MouseButton
from cubespace.visualization.scene import Scene


@dataclass
class DragSession:
    """State of one pointer-down -> drag -> pointer-up sequence."""
    button: int
    last_x: int
    last_y: int


class SceneInputController(InputHandler):
    """
    Idle -> Dragging on pointer_down, Dragging -> Dragging on pointer_dragged,
    Dragging -> Idle on pointer_up of the same button.

    Only the most recently pressed button drives the drag.
    """

    def __init__(self, scene: Scene):
        self.scene = scene
        self.session: Optional[DragSession] = None

    @property
    def dragging(self) -> bool:
        return self.session is not None

    def pointer_down(self, x: int, y: int, pointer: int, button: int) -> bool:
        self.session = DragSession(button=int(button), last_x=int(x), last_y=int(y))
        return True

    def pointer_dragged(self, x: int, y: int, pointer: int) -> bool:
        session = self.session
        if session is None:
            return False

        x, y = int(x), int(y)
        rotation = map_drag(x - session.last_x, y - session.last_y)
        session.last_x = x
        session.last_y = y

        if rotation.is_identity:
            return True

        if session.button == MouseButton.PRIMARY:
            self.scene.rotate_selected(rotation)
        else:
            self.scene.orbit_camera(rotation)
        log.debug(f"[SceneInputController] button={session.button} {rotation}")
        return True

    def pointer_up(self, x: int, y: int, pointer: int, button: int) -> bool:
        if self.session is None or self.session.button != int(button):
            return False
        self.session = None
        return True
