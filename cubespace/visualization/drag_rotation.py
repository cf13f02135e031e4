"""
Pointer drag -> axis-angle rotation.

A drag of (dx, dy) pixels (x to the right, y downward) becomes a rotation
about the axis perpendicular to the drag, expressed in camera space:

    axis  = normalize(dy, dx, 0)
    angle = |(dx, dy)| degrees

Dragging right spins about the camera's up axis, dragging down about its
right axis, so the surface under the pointer follows the pointer.

The axis lives in camera space. Before it is applied to an object's world
orientation it has to be carried into world space with the camera's
view-to-world rotation (`DragRotation.to_world`); otherwise the rotation
drifts as soon as the camera or the object is no longer axis-aligned.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

DEFAULT_AXIS = np.array([1.0, 0.0, 0.0])

# Camera orbit turns this many times slower than an object drag.
ORBIT_DAMPING = 5.5


@dataclass(frozen=True, eq=False)
class DragRotation:
    axis: np.ndarray
    angle: float  # degrees

    @property
    def is_identity(self) -> bool:
        return self.angle == 0.0

    def to_world(self, camera) -> "DragRotation":
        """Express the camera-space axis in world space."""
        if self.is_identity:
            return self
        world_axis = camera.view_to_world_rotation() @ self.axis
        return DragRotation(axis=world_axis / np.linalg.norm(world_axis), angle=self.angle)

    def for_orbit(self, damping: float = ORBIT_DAMPING) -> "DragRotation":
        """Negated axis and damped angle: orbiting the camera the other way
        gives the same apparent motion as spinning the object."""
        return DragRotation(axis=-self.axis, angle=self.angle / damping)

    def __repr__(self):
        return f"DragRotation(axis={self.axis}, angle={self.angle:.3f})"


def map_drag(dx: int, dy: int) -> DragRotation:
    length = math.sqrt(dx * dx + dy * dy)
    if length == 0.0:
        return DragRotation(axis=DEFAULT_AXIS.copy(), angle=0.0)
    axis = np.array([dy / length, dx / length, 0.0])
    return DragRotation(axis=axis, angle=length)
