"""
quat.py
-------
Quaternions stored as ``(x, y, z, w)`` float arrays.

Euler angles are ``(pitch, yaw, roll)`` about X, Y and Z in radians and are
applied X first, then Y, then Z: ``q = qz(roll) * qy(yaw) * qx(pitch)``.
"""
from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np
from numpy.typing import ArrayLike

from frame_math import rotation
from frame_math._buffers import as_array, store
from frame_math.scalar import EPSILON, deg_to_rad, rad_to_deg

logger = logging.getLogger(__name__)

SLERP_DOT_THRESHOLD = 0.9995
"""Above this cosine, slerp falls back to normalized lerp."""

IDENTITY_W_THRESHOLD = 0.9999
"""Above this ``|w|``, angle-axis extraction reports a zero rotation."""


def quat(x: float, y: float, z: float, w: float) -> np.ndarray:
    return np.array([x, y, z, w], dtype=np.float64)


def quat_identity(out: Optional[np.ndarray] = None) -> np.ndarray:
    return store((0.0, 0.0, 0.0, 1.0), out)


def quat_from_axis_angle(axis: ArrayLike, angle: float, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Rotation of *angle* radians about *axis* (normalized here)."""
    axis = as_array(axis)
    length = math.sqrt(float(axis @ axis))
    if length == 0:
        logger.debug("quat_from_axis_angle: zero axis, returning identity")
        return quat_identity(out)
    half = angle * 0.5
    s = math.sin(half) / length
    return store((axis[0] * s, axis[1] * s, axis[2] * s, math.cos(half)), out)


def quat_from_euler(euler: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    pitch, yaw, roll = as_array(euler)
    cx, sx = math.cos(pitch * 0.5), math.sin(pitch * 0.5)
    cy, sy = math.cos(yaw * 0.5), math.sin(yaw * 0.5)
    cz, sz = math.cos(roll * 0.5), math.sin(roll * 0.5)
    return store((
        sx * cy * cz - cx * sy * sz,
        cx * sy * cz + sx * cy * sz,
        cx * cy * sz - sx * sy * cz,
        cx * cy * cz + sx * sy * sz,
    ), out)


def quat_from_euler_deg(euler: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    pitch, yaw, roll = as_array(euler)
    return quat_from_euler((deg_to_rad(pitch), deg_to_rad(yaw), deg_to_rad(roll)), out)


def quat_from_basis(b: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(rotation.matrix_to_quat(b), out)


def quat_mul(a: ArrayLike, b: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Hamilton product ``a * b``: rotating by the result applies *b*, then *a*."""
    ax, ay, az, aw = as_array(a)
    bx, by, bz, bw = as_array(b)
    return store((
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by - ax * bz + ay * bw + az * bx,
        aw * bz + ax * by - ay * bx + az * bw,
        aw * bw - ax * bx - ay * by - az * bz,
    ), out)


def quat_dot(a: ArrayLike, b: ArrayLike) -> float:
    return float(as_array(a) @ as_array(b))


def quat_length_sq(q: ArrayLike) -> float:
    return quat_dot(q, q)


def quat_length(q: ArrayLike) -> float:
    return math.sqrt(quat_length_sq(q))


def quat_normalize(q: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Unit quaternion along *q*; the zero quaternion becomes identity."""
    q = as_array(q)
    length = quat_length(q)
    if length == 0:
        logger.debug("quat_normalize: zero quaternion, returning identity")
        return quat_identity(out)
    return store(q / length, out)


def quat_conjugate(q: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    x, y, z, w = as_array(q)
    return store((-x, -y, -z, w), out)


def quat_inverse(q: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Conjugate divided by the squared length; zero becomes identity."""
    q = as_array(q)
    length_sq = quat_length_sq(q)
    if length_sq == 0:
        logger.debug("quat_inverse: zero quaternion, returning identity")
        return quat_identity(out)
    x, y, z, w = q
    return store(np.array([-x, -y, -z, w]) / length_sq, out)


def quat_rotate_vec3(q: ArrayLike, v: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Rotate *v* by the unit quaternion *q* (``q * v * q^-1``)."""
    q = as_array(q)
    v = as_array(v)
    u = q[:3]
    w = q[3]
    t = 2.0 * np.cross(u, v)
    return store(v + w * t + np.cross(u, t), out)


def quat_to_euler(q: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    """``(pitch, yaw, roll)`` in radians; yaw is clamped to ±π/2 at the poles."""
    x, y, z, w = as_array(q)

    pitch = math.atan2(2.0 * (w * x + y * z), 1.0 - 2.0 * (x * x + y * y))

    sin_yaw = 2.0 * (w * y - z * x)
    if abs(sin_yaw) >= 1.0:
        yaw = math.copysign(math.pi / 2, sin_yaw)
    else:
        yaw = math.asin(sin_yaw)

    roll = math.atan2(2.0 * (w * z + x * y), 1.0 - 2.0 * (y * y + z * z))
    return store((pitch, yaw, roll), out)


def quat_to_euler_deg(q: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    pitch, yaw, roll = quat_to_euler(q)
    return store((rad_to_deg(pitch), rad_to_deg(yaw), rad_to_deg(roll)), out)


def quat_to_angle_axis(q: ArrayLike) -> tuple[float, np.ndarray]:
    """Return ``(angle, axis)``; near-identity rotations give ``(0, +X)``."""
    x, y, z, w = as_array(q)
    if abs(w) > IDENTITY_W_THRESHOLD:
        return 0.0, np.array([1.0, 0.0, 0.0])
    angle = 2.0 * math.acos(max(-1.0, min(1.0, w)))
    s = math.sqrt(1.0 - w * w)
    return angle, np.array([x / s, y / s, z / s])


def quat_to_basis(q: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(rotation.quat_to_matrix(q), out)


def quat_to_mat4(q: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    m = np.eye(4)
    m[:3, :3] = rotation.quat_to_matrix(q)
    return store(m, out)


def quat_lerp(a: ArrayLike, b: ArrayLike, t: float, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Componentwise lerp, renormalized unless the result is near zero."""
    a = as_array(a)
    result = a + (as_array(b) - a) * t
    length = math.sqrt(float(result @ result))
    if length > EPSILON:
        result = result / length
    return store(result, out)


def quat_slerp(a: ArrayLike, b: ArrayLike, t: float, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Spherical interpolation along the shorter arc from *a* to *b*."""
    a = as_array(a)
    b = as_array(b)
    dot = float(a @ b)
    if dot < 0.0:
        b = -b
        dot = -dot

    if dot > SLERP_DOT_THRESHOLD:
        return quat_lerp(a, b, t, out)

    theta = math.acos(dot)
    sin_theta = math.sin(theta)
    wa = math.sin((1.0 - t) * theta) / sin_theta
    wb = math.sin(t * theta) / sin_theta
    return store(a * wa + b * wb, out)
