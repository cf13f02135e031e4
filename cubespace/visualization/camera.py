"""
Perspective camera that orbits a pivot point.

Coordinate convention (OpenGL): camera looks along its local -Z axis,
local +X is screen right, local +Y is screen up.
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from cubespace import log
from cubespace.geombase import Pose3
from cubespace.util import deg2rad, qrot, quat_from_axis_angle, unit_axis


class OrbitCamera:
    """
    Attributes:
        fov_y: Vertical field of view in radians
        aspect: Aspect ratio width/height
        near, far: Clipping planes
        target: Point the camera is aimed at
    """

    def __init__(
        self,
        position=(10.0, -10.0, 70.0),
        target=(0.0, 0.0, 0.0),
        up=(0.0, 1.0, 0.0),
        fov_y_degrees: float = 67.0,
        aspect: float = 1.5,
        near: float = 1.0,
        far: float = 500.0,
    ):
        self.fov_y = math.radians(fov_y_degrees)
        self.aspect = aspect
        self.near = near
        self.far = far
        self.target = np.array(target, dtype=float)
        self.pose = Pose3.looking_at(
            eye=np.array(position, dtype=float),
            target=self.target,
            up=np.array(up, dtype=float),
        )

    @staticmethod
    def from_settings(settings) -> "OrbitCamera":
        return OrbitCamera(
            position=settings.position,
            target=settings.target,
            up=settings.up,
            fov_y_degrees=settings.fov_y_degrees,
            aspect=settings.aspect,
            near=settings.near,
            far=settings.far,
        )

    # --- Frame ---

    @property
    def position(self) -> np.ndarray:
        return self.pose.lin

    @property
    def right(self) -> np.ndarray:
        return self.pose.rotation_matrix()[:, 0]

    @property
    def up(self) -> np.ndarray:
        return self.pose.rotation_matrix()[:, 1]

    @property
    def direction(self) -> np.ndarray:
        """Unit forward (view) direction."""
        return -self.pose.rotation_matrix()[:, 2]

    def view_to_world_rotation(self) -> np.ndarray:
        """3x3 matrix mapping camera-space vectors to world space (columns: right, up, back)."""
        return self.pose.rotation_matrix()

    def look_at(self, target, up: Optional[np.ndarray] = None) -> None:
        self.target = np.array(target, dtype=float)
        self.pose = Pose3.looking_at(
            eye=self.pose.lin.copy(),
            target=self.target,
            up=self.up.copy() if up is None else np.asarray(up, dtype=float),
        )

    # --- Motion ---

    def orbit_around(self, pivot, axis, angle_degrees: float) -> bool:
        """
        Rotate the camera position about `pivot` by (axis, angle) in world space
        and keep looking at the pivot. Returns False if nothing moved.
        """
        if angle_degrees == 0.0:
            return False
        unit = unit_axis(axis)
        if unit is None or not math.isfinite(angle_degrees):
            log.warn(f"[OrbitCamera] ignoring orbit about invalid axis {axis!r} / angle {angle_degrees!r}")
            return False

        pivot = np.asarray(pivot, dtype=float)
        q = quat_from_axis_angle(unit, deg2rad(angle_degrees))
        eye = pivot + qrot(q, self.pose.lin - pivot)
        up = qrot(q, self.up)

        self.target = pivot.copy()
        self.pose = Pose3.looking_at(eye=eye, target=self.target, up=up)
        return True

    def distance_to(self, point) -> float:
        return float(np.linalg.norm(self.pose.lin - np.asarray(point, dtype=float)))

    # --- Matrices ---

    def view_matrix(self) -> np.ndarray:
        return self.pose.inverse().as_matrix()

    def projection_matrix(self) -> np.ndarray:
        """Standard OpenGL perspective projection."""
        f = 1.0 / math.tan(self.fov_y * 0.5)
        near, far = self.near, self.far
        proj = np.zeros((4, 4), dtype=np.float32)
        proj[0, 0] = f / max(1e-6, self.aspect)
        proj[1, 1] = f
        proj[2, 2] = (far + near) / (near - far)
        proj[2, 3] = (2 * far * near) / (near - far)
        proj[3, 2] = -1.0
        return proj

    def set_aspect(self, aspect: float):
        """Set aspect ratio (width/height)."""
        self.aspect = aspect
