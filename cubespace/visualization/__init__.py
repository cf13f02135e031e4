"""
Scene, camera and drag-rotation logic.

The GL renderer (`cubespace.visualization.render`) and the GLFW driver
(`cubespace.visualization.platform.glfw_backend`) are not imported here so
that the math can be used without a display.
"""

from cubespace.visualization.camera import OrbitCamera
from cubespace.visualization.controller import DragSession, SceneInputController
from cubespace.visualization.drag_rotation import DragRotation, ORBIT_DAMPING, map_drag
from cubespace.visualization.orientable import OrientableObject
from cubespace.visualization.scene import Cube, Scene, lattice_position

__all__ = [
    "OrbitCamera",
    "DragSession",
    "SceneInputController",
    "DragRotation",
    "ORBIT_DAMPING",
    "map_drag",
    "OrientableObject",
    "Cube",
    "Scene",
    "lattice_position",
]
