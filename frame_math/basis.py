"""
basis.py
--------
Orthonormal bases: 3x3 rotation matrices stored as three rows.

A basis rotates a vector as ``out_i = row_i . v`` (column-vector
convention), and :func:`basis_mul` composes like :func:`quat_mul`:
``basis_mul(a, b)`` applies *b* first, then *a*.

Euler angles are ``(pitch, yaw, roll)`` about X, Y and Z, composed as
``R = Rz(roll) @ Ry(yaw) @ Rx(pitch)``.
"""
from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np
from numpy.typing import ArrayLike

from frame_math import quat as _quat
from frame_math import rotation
from frame_math._buffers import as_array, store
from frame_math.scalar import EPSILON, deg_to_rad, rad_to_deg

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def basis(xx: float, xy: float, xz: float,
          yx: float, yy: float, yz: float,
          zx: float, zy: float, zz: float) -> np.ndarray:
    return np.array([[xx, xy, xz], [yx, yy, yz], [zx, zy, zz]], dtype=np.float64)


def basis_identity(out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(np.eye(3), out)


def basis_from_axes(x: ArrayLike, y: ArrayLike, z: ArrayLike,
                    out: Optional[np.ndarray] = None) -> np.ndarray:
    """Stack three row vectors; no orthogonality checks."""
    return store(np.stack([as_array(x), as_array(y), as_array(z)]), out)


def basis_from_euler(euler: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Rotation basis from ``(pitch, yaw, roll)`` in radians."""
    rx, ry, rz = as_array(euler)
    cx, sx = math.cos(rx), math.sin(rx)
    cy, sy = math.cos(ry), math.sin(ry)
    cz, sz = math.cos(rz), math.sin(rz)
    return store((
        (cy * cz,  sx * sy * cz - cx * sz,  cx * sy * cz + sx * sz),
        (cy * sz,  sx * sy * sz + cx * cz,  cx * sy * sz - sx * cz),
        (-sy,      sx * cy,                 cx * cy),
    ), out)


def basis_from_euler_deg(euler: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    pitch, yaw, roll = as_array(euler)
    return basis_from_euler((deg_to_rad(pitch), deg_to_rad(yaw), deg_to_rad(roll)), out)


def basis_from_axis_angle(axis: ArrayLike, angle: float,
                          out: Optional[np.ndarray] = None) -> np.ndarray:
    """Rodrigues' rotation of *angle* radians about *axis* (normalized here)."""
    axis = as_array(axis)
    length = math.sqrt(float(axis @ axis))
    if length == 0:
        logger.debug("basis_from_axis_angle: zero axis, returning identity")
        return basis_identity(out)
    x, y, z = axis / length
    c, s = math.cos(angle), math.sin(angle)
    t = 1.0 - c
    return store((
        (t * x * x + c,      t * x * y - s * z,  t * x * z + s * y),
        (t * x * y + s * z,  t * y * y + c,      t * y * z - s * x),
        (t * x * z - s * y,  t * y * z + s * x,  t * z * z + c),
    ), out)


def basis_from_quat(q: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(rotation.quat_to_matrix(q), out)


# ---------------------------------------------------------------------------
# Algebra
# ---------------------------------------------------------------------------

def basis_mul(a: ArrayLike, b: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(as_array(a) @ as_array(b), out)


def basis_transpose(b: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(as_array(b).T.copy(), out)


def basis_determinant(b: ArrayLike) -> float:
    """Cofactor expansion along the first row."""
    m = as_array(b)
    return float(
        m[0, 0] * (m[1, 1] * m[2, 2] - m[1, 2] * m[2, 1])
        - m[0, 1] * (m[1, 0] * m[2, 2] - m[1, 2] * m[2, 0])
        + m[0, 2] * (m[1, 0] * m[2, 1] - m[1, 1] * m[2, 0])
    )


def basis_inverse(b: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    """General 3x3 inverse; a singular basis yields identity."""
    m = as_array(b)
    det = basis_determinant(m)
    if abs(det) < EPSILON:
        logger.debug("basis_inverse: singular basis (det=%g), returning identity", det)
        return basis_identity(out)
    inv_det = 1.0 / det
    adjugate = np.array([
        [m[1, 1] * m[2, 2] - m[1, 2] * m[2, 1],
         m[0, 2] * m[2, 1] - m[0, 1] * m[2, 2],
         m[0, 1] * m[1, 2] - m[0, 2] * m[1, 1]],
        [m[1, 2] * m[2, 0] - m[1, 0] * m[2, 2],
         m[0, 0] * m[2, 2] - m[0, 2] * m[2, 0],
         m[0, 2] * m[1, 0] - m[0, 0] * m[1, 2]],
        [m[1, 0] * m[2, 1] - m[1, 1] * m[2, 0],
         m[0, 1] * m[2, 0] - m[0, 0] * m[2, 1],
         m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0]],
    ])
    return store(adjugate * inv_det, out)


def basis_rotate_vec3(b: ArrayLike, v: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(as_array(b) @ as_array(v), out)


def basis_scale(b: ArrayLike, scale: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Multiply stored row ``i`` by ``scale[i]``."""
    return store(as_array(b) * as_array(scale)[:, np.newaxis], out)


def basis_orthonormalize(b: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Gram-Schmidt on the rows: keep X's direction, fix Y against X, rebuild Z."""
    m = as_array(b)
    x = _normalized(m[0])
    y = m[1] - x * float(x @ m[1])
    y = _normalized(y)
    z = np.cross(x, y)
    return store(np.stack([x, y, z]), out)


def _normalized(v: np.ndarray) -> np.ndarray:
    length = math.sqrt(float(v @ v))
    if length == 0:
        return np.zeros(3)
    return v / length


# ---------------------------------------------------------------------------
# Axes
# ---------------------------------------------------------------------------

def basis_get_axis(b: ArrayLike, index: int, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(as_array(b)[index], out)


def basis_set_axis(b: ArrayLike, index: int, v: ArrayLike,
                   out: Optional[np.ndarray] = None) -> np.ndarray:
    """Copy of *b* with stored row *index* replaced by *v*; other rows are kept."""
    result = np.array(as_array(b))
    result[index] = as_array(v)
    return store(result, out)


def basis_get_x(b: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return basis_get_axis(b, 0, out)


def basis_get_y(b: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return basis_get_axis(b, 1, out)


def basis_get_z(b: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return basis_get_axis(b, 2, out)


def basis_set_x(b: ArrayLike, v: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return basis_set_axis(b, 0, v, out)


def basis_set_y(b: ArrayLike, v: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return basis_set_axis(b, 1, v, out)


def basis_set_z(b: ArrayLike, v: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return basis_set_axis(b, 2, v, out)


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------

def basis_to_euler(b: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    """``(pitch, yaw, roll)`` in radians such that ``basis_from_euler`` rebuilds *b*.

    At gimbal lock (yaw = ±90°) pitch and roll share one degree of freedom;
    roll is fixed to 0 and the combined angle goes to pitch.
    """
    m = as_array(b)
    sy = max(-1.0, min(1.0, -m[2, 0]))
    if abs(sy) < 1.0:
        ry = math.asin(sy)
        rx = math.atan2(m[2, 1], m[2, 2])
        rz = math.atan2(m[1, 0], m[0, 0])
    else:
        logger.debug("basis_to_euler: gimbal lock (m20=%g), roll fixed to 0", m[2, 0])
        ry = math.copysign(math.pi / 2, sy)
        rx = math.atan2(-m[1, 2], m[1, 1])
        rz = 0.0
    return store((rx, ry, rz), out)


def basis_to_euler_deg(b: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    rx, ry, rz = basis_to_euler(b)
    return store((rad_to_deg(rx), rad_to_deg(ry), rad_to_deg(rz)), out)


def basis_to_quat(b: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(rotation.matrix_to_quat(b), out)


# ---------------------------------------------------------------------------
# Interpolation
# ---------------------------------------------------------------------------

def basis_lerp(a: ArrayLike, b: ArrayLike, t: float, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Normalized-quaternion interpolation between two rotations."""
    qa = rotation.matrix_to_quat(a)
    qb = rotation.matrix_to_quat(b)
    return store(rotation.quat_to_matrix(_quat.quat_lerp(qa, qb, t)), out)


def basis_slerp(a: ArrayLike, b: ArrayLike, t: float, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Spherical interpolation between two rotations along the shorter arc."""
    qa = rotation.matrix_to_quat(a)
    qb = rotation.matrix_to_quat(b)
    return store(rotation.quat_to_matrix(_quat.quat_slerp(qa, qb, t)), out)


# ---------------------------------------------------------------------------
# Incremental rotation
#
# Global variants pre-multiply (rotate about the parent frame's axes),
# local variants post-multiply (rotate about the basis' own axes).
# ---------------------------------------------------------------------------

def basis_rotate(b: ArrayLike, axis: ArrayLike, angle: float,
                 out: Optional[np.ndarray] = None) -> np.ndarray:
    return basis_mul(basis_from_axis_angle(axis, angle), b, out)


def basis_rotate_euler(b: ArrayLike, euler: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return basis_mul(basis_from_euler(euler), b, out)


def basis_rotate_euler_deg(b: ArrayLike, euler: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return basis_mul(basis_from_euler_deg(euler), b, out)


def basis_rotate_quat(b: ArrayLike, q: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return basis_mul(rotation.quat_to_matrix(q), b, out)


def basis_rotate_local(b: ArrayLike, axis: ArrayLike, angle: float,
                       out: Optional[np.ndarray] = None) -> np.ndarray:
    return basis_mul(b, basis_from_axis_angle(axis, angle), out)


def basis_rotate_local_euler(b: ArrayLike, euler: ArrayLike,
                             out: Optional[np.ndarray] = None) -> np.ndarray:
    return basis_mul(b, basis_from_euler(euler), out)


def basis_rotate_local_euler_deg(b: ArrayLike, euler: ArrayLike,
                                 out: Optional[np.ndarray] = None) -> np.ndarray:
    return basis_mul(b, basis_from_euler_deg(euler), out)


def basis_rotate_local_quat(b: ArrayLike, q: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return basis_mul(b, rotation.quat_to_matrix(q), out)
