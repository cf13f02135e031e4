"""Pose3 - 3D pose (rotation, translation, fixed scale) on numpy arrays.

Composition formula:
    a * b:
        new_lin = a.lin + qrot(a.ang, a.scale * b.lin)
        new_ang = qmul(a.ang, b.ang)
        new_scale = a.scale * b.scale  # element-wise

`b` is applied first, then `a`. Pre-multiplying a pose by a pure rotation
therefore rotates it about a world axis; post-multiplying rotates it about
an axis of its own local frame.
"""

import math
import numpy
from cubespace.util import qmul, qrot, qinv, qnormalize, quat_from_axis_angle, quat_from_matrix


class Pose3:
    """A 3D pose represented by rotation quaternion, translation vector, and scale."""

    __slots__ = ('ang', 'lin', 'scale', '_rot_matrix', '_mat')

    def __init__(
        self,
        ang: numpy.ndarray = None,
        lin: numpy.ndarray = None,
        scale: numpy.ndarray = None
    ):
        if ang is None:
            ang = numpy.array([0.0, 0.0, 0.0, 1.0])
        if lin is None:
            lin = numpy.array([0.0, 0.0, 0.0])
        if scale is None:
            scale = numpy.array([1.0, 1.0, 1.0])
        self.ang = numpy.asarray(ang, dtype=float)
        self.lin = numpy.asarray(lin, dtype=float)
        self.scale = numpy.asarray(scale, dtype=float)
        self._rot_matrix = None
        self._mat = None

    @staticmethod
    def identity() -> 'Pose3':
        return Pose3()

    def rotation_matrix(self) -> numpy.ndarray:
        """Get the 3x3 rotation matrix corresponding to the pose's orientation."""
        if self._rot_matrix is None:
            x, y, z, w = self.ang
            self._rot_matrix = numpy.array([
                [1 - 2*(y**2 + z**2), 2*(x*y - z*w), 2*(x*z + y*w)],
                [2*(x*y + z*w), 1 - 2*(x**2 + z**2), 2*(y*z - x*w)],
                [2*(x*z - y*w), 2*(y*z + x*w), 1 - 2*(x**2 + y**2)]
            ])
        return self._rot_matrix

    def as_matrix(self) -> numpy.ndarray:
        """Get the 4x4 transformation matrix with scale baked in.

        Returns TRS matrix: Translation * Rotation * Scale
        """
        if self._mat is None:
            R = self.rotation_matrix()
            S = numpy.diag(self.scale)
            self._mat = numpy.eye(4)
            self._mat[:3, :3] = R @ S
            self._mat[:3, 3] = self.lin
        return self._mat

    def inverse(self) -> 'Pose3':
        """Compute the inverse of the pose.

        For pose P = TRS, inverse is S^-1 R^-1 T^-1
        """
        inv_scale = 1.0 / self.scale
        inv_ang = qinv(self.ang)
        inv_lin = qrot(inv_ang, -self.lin) * inv_scale
        return Pose3(ang=inv_ang, lin=inv_lin, scale=inv_scale)

    def __repr__(self):
        return f"Pose3(ang={self.ang}, lin={self.lin}, scale={self.scale})"

    def transform_point(self, point: numpy.ndarray) -> numpy.ndarray:
        """Transform a 3D point using the pose (with scale)."""
        return qrot(self.ang, self.scale * point) + self.lin

    def __mul__(self, other: 'Pose3') -> 'Pose3':
        if not isinstance(other, Pose3):
            raise TypeError("Can only multiply Pose3 with Pose3")
        q = qmul(self.ang, other.ang)
        t = self.lin + qrot(self.ang, self.scale * other.lin)
        s = self.scale * other.scale
        return Pose3(ang=q, lin=t, scale=s)

    # --- Factory methods ---

    @staticmethod
    def rotation(axis: numpy.ndarray, angle: float) -> 'Pose3':
        """Create a rotation pose around a given axis by a given angle (radians)."""
        axis = numpy.asarray(axis, dtype=float)
        axis = axis / numpy.linalg.norm(axis)
        return Pose3(ang=quat_from_axis_angle(axis, angle))

    @staticmethod
    def translation(x: float, y: float, z: float) -> 'Pose3':
        return Pose3(lin=numpy.array([x, y, z], dtype=float))

    def to_axis_angle(self):
        """Convert quaternion to axis-angle representation (radians)."""
        x, y, z, w = self.ang
        angle = 2 * math.acos(numpy.clip(w, -1.0, 1.0))
        s = math.sqrt(max(0.0, 1 - w*w))
        if s < 0.001:
            axis = numpy.array([1.0, 0.0, 0.0])
        else:
            axis = numpy.array([x / s, y / s, z / s])
        return axis, angle

    @staticmethod
    def looking_at(
        eye: numpy.ndarray,
        target: numpy.ndarray,
        up: numpy.ndarray = None
    ) -> 'Pose3':
        """Create a pose at 'eye' position looking towards 'target'.

        OpenGL camera convention:
        - Local +X = right
        - Local +Y = up
        - Local -Z = forward (direction to target)
        """
        eye = numpy.asarray(eye, dtype=float)
        target = numpy.asarray(target, dtype=float)
        if up is None:
            up = numpy.array([0.0, 1.0, 0.0])
        up = numpy.asarray(up, dtype=float)

        forward = target - eye
        dist = numpy.linalg.norm(forward)
        if dist == 0.0:
            raise ValueError("looking_at: eye and target coincide")
        forward = forward / dist

        right = numpy.cross(forward, up)
        right_len = numpy.linalg.norm(right)
        if right_len < 1e-9:
            raise ValueError("looking_at: up vector is parallel to the view direction")
        right = right / right_len

        up_corrected = numpy.cross(right, forward)

        rot_mat = numpy.column_stack([right, up_corrected, -forward])
        return Pose3(ang=qnormalize(quat_from_matrix(rot_mat)), lin=eye.copy())

    def invalidate_cache(self):
        """Invalidate cached matrices. Call after modifying ang, lin, or scale directly."""
        self._rot_matrix = None
        self._mat = None
