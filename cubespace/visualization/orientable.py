"""Object with a world transform that can be spun about its own center."""

from __future__ import annotations

import math

import numpy as np

from cubespace import log
from cubespace.config import RotationFrame
from cubespace.geombase import Pose3
from cubespace.util import deg2rad, qmul, qnormalize, quat_from_axis_angle, unit_axis


class OrientableObject:
    """
    Holds position + accumulated rotation for one object.

    rotate_world() pre-multiplies: the new rotation is applied after the
    existing orientation, about an axis fixed in world space. Repeated drags
    in one screen direction therefore keep spinning the object about the same
    world axis no matter how it is currently oriented.

    rotate_local() post-multiplies: the axis is read in the object's own frame
    and turns with it.
    """

    def __init__(
        self,
        position=(0.0, 0.0, 0.0),
        frame: RotationFrame = RotationFrame.WORLD,
        scale: float = 1.0,
    ):
        self.transform = Pose3(
            lin=np.array(position, dtype=float),
            scale=np.array([scale, scale, scale], dtype=float),
        )
        self.frame = frame

    @property
    def position(self) -> np.ndarray:
        return self.transform.lin

    @property
    def orientation(self) -> np.ndarray:
        """Unit quaternion [x, y, z, w]."""
        return self.transform.ang

    def model_matrix(self) -> np.ndarray:
        return self.transform.as_matrix()

    def rotate(self, axis, angle_degrees: float) -> bool:
        if self.frame is RotationFrame.LOCAL:
            return self.rotate_local(axis, angle_degrees)
        return self.rotate_world(axis, angle_degrees)

    def rotate_world(self, axis, angle_degrees: float) -> bool:
        delta = self._delta(axis, angle_degrees)
        if delta is None:
            return False
        self._set_orientation(qmul(delta, self.transform.ang))
        return True

    def rotate_local(self, axis, angle_degrees: float) -> bool:
        delta = self._delta(axis, angle_degrees)
        if delta is None:
            return False
        self._set_orientation(qmul(self.transform.ang, delta))
        return True

    def _delta(self, axis, angle_degrees: float):
        if angle_degrees == 0.0:
            return None
        if not math.isfinite(angle_degrees):
            log.warn(f"[OrientableObject] ignoring non-finite rotation angle {angle_degrees!r}")
            return None
        unit = unit_axis(axis)
        if unit is None:
            log.warn(f"[OrientableObject] ignoring rotation about invalid axis {axis!r}")
            return None
        return quat_from_axis_angle(unit, deg2rad(angle_degrees))

    def _set_orientation(self, ang: np.ndarray) -> None:
        self.transform.ang = qnormalize(ang)
        self.transform.invalidate_cache()
