import math
import numpy


def qmul(q1: numpy.ndarray, q2: numpy.ndarray) -> numpy.ndarray:
    """Multiply two quaternions [x, y, z, w]. q1 * q2 applies q2 first."""
    x1, y1, z1, w1 = q1
    x2, y2, z2, w2 = q2
    return numpy.array([
        w1*x2 + x1*w2 + y1*z2 - z1*y2,
        w1*y2 - x1*z2 + y1*w2 + z1*x2,
        w1*z2 + x1*y2 - y1*x2 + z1*w2,
        w1*w2 - x1*x2 - y1*y2 - z1*z2
    ])


def qmul_vector(q: numpy.ndarray, v: numpy.ndarray) -> numpy.ndarray:
    x1, y1, z1, w1 = q
    x2, y2, z2 = v
    return numpy.array([
        w1*x2         + y1*z2 - z1*y2,
        w1*y2 - x1*z2         + z1*x2,
        w1*z2 + x1*y2 - y1*x2,
              - x1*x2 - y1*y2 - z1*z2
    ])


def qrot(q: numpy.ndarray, v: numpy.ndarray) -> numpy.ndarray:
    """Rotate vector v by quaternion q."""
    q_conj = numpy.array([-q[0], -q[1], -q[2], q[3]])
    rotated_v = qmul(qmul_vector(q, v), q_conj)
    return rotated_v[:3]


def qinv(q: numpy.ndarray) -> numpy.ndarray:
    """Inverse of a unit quaternion."""
    return numpy.array([-q[0], -q[1], -q[2], q[3]])


def qnormalize(q: numpy.ndarray) -> numpy.ndarray:
    norm = numpy.linalg.norm(q)
    if norm == 0.0:
        return numpy.array([0.0, 0.0, 0.0, 1.0])
    return q / norm


def deg2rad(deg):
    return deg / 180.0 * math.pi


def unit_axis(axis, eps: float = 1e-12):
    """Return axis scaled to unit length, or None when it cannot be normalized."""
    axis = numpy.asarray(axis, dtype=float)
    if axis.shape != (3,) or not numpy.all(numpy.isfinite(axis)):
        return None
    norm = numpy.linalg.norm(axis)
    if norm < eps:
        return None
    return axis / norm


def quat_from_axis_angle(axis: numpy.ndarray, angle: float) -> numpy.ndarray:
    """Quaternion for a rotation by angle (radians) around a unit axis."""
    s = math.sin(angle / 2)
    c = math.cos(angle / 2)
    return numpy.array([axis[0] * s, axis[1] * s, axis[2] * s, c])


def quat_from_matrix(rot_mat: numpy.ndarray) -> numpy.ndarray:
    """Convert an orthonormal 3x3 rotation matrix to a quaternion [x, y, z, w]."""
    trace = numpy.trace(rot_mat)
    if trace > 0:
        s = 0.5 / math.sqrt(trace + 1.0)
        qw = 0.25 / s
        qx = (rot_mat[2, 1] - rot_mat[1, 2]) * s
        qy = (rot_mat[0, 2] - rot_mat[2, 0]) * s
        qz = (rot_mat[1, 0] - rot_mat[0, 1]) * s
    elif rot_mat[0, 0] > rot_mat[1, 1] and rot_mat[0, 0] > rot_mat[2, 2]:
        s = 2.0 * math.sqrt(1.0 + rot_mat[0, 0] - rot_mat[1, 1] - rot_mat[2, 2])
        qw = (rot_mat[2, 1] - rot_mat[1, 2]) / s
        qx = 0.25 * s
        qy = (rot_mat[0, 1] + rot_mat[1, 0]) / s
        qz = (rot_mat[0, 2] + rot_mat[2, 0]) / s
    elif rot_mat[1, 1] > rot_mat[2, 2]:
        s = 2.0 * math.sqrt(1.0 + rot_mat[1, 1] - rot_mat[0, 0] - rot_mat[2, 2])
        qw = (rot_mat[0, 2] - rot_mat[2, 0]) / s
        qx = (rot_mat[0, 1] + rot_mat[1, 0]) / s
        qy = 0.25 * s
        qz = (rot_mat[1, 2] + rot_mat[2, 1]) / s
    else:
        s = 2.0 * math.sqrt(1.0 + rot_mat[2, 2] - rot_mat[0, 0] - rot_mat[1, 1])
        qw = (rot_mat[1, 0] - rot_mat[0, 1]) / s
        qx = (rot_mat[0, 2] + rot_mat[2, 0]) / s
        qy = (rot_mat[1, 2] + rot_mat[2, 1]) / s
        qz = 0.25 * s
    return numpy.array([qx, qy, qz, qw])
