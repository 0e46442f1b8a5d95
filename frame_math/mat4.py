"""
mat4.py
-------
4x4 affine and projection matrices.

Matrices are ``(4, 4)`` float arrays indexed ``[row, col]`` in the
column-vector convention: a point transforms as ``M @ (x, y, z, 1)`` and the
translation lives in column 3. :func:`mat4_from_column_major` and
:func:`mat4_to_column_major` convert to and from the flat 16-float layout
GPU uniforms expect.
"""
from __future__ import annotations

import logging
import math
from typing import Optional, Sequence

import numpy as np
from numpy.typing import ArrayLike

from frame_math import rotation
from frame_math._buffers import as_array, store
from frame_math.scalar import EPSILON

logger = logging.getLogger(__name__)


def mat4(*values: float) -> np.ndarray:
    """Build a matrix from 16 values given row by row."""
    if len(values) != 16:
        raise ValueError(f"mat4 expects 16 values, got {len(values)}")
    return np.array(values, dtype=np.float64).reshape(4, 4)


def mat4_identity(out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(np.eye(4), out)


def mat4_from_column_major(values: Sequence[float]) -> np.ndarray:
    return as_array(values).reshape(4, 4).T.copy()


def mat4_to_column_major(m: ArrayLike) -> np.ndarray:
    return as_array(m).T.flatten()


# ---------------------------------------------------------------------------
# Algebra
# ---------------------------------------------------------------------------

def mat4_mul(a: ArrayLike, b: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    """``a @ b``: the result applies *b* first, then *a*."""
    return store(as_array(a) @ as_array(b), out)


def mat4_transpose(m: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(as_array(m).T.copy(), out)


def mat4_determinant(m: ArrayLike) -> float:
    """Determinant via 2x2 sub-determinants of the top and bottom row pairs."""
    m = as_array(m)
    s0 = m[0, 0] * m[1, 1] - m[1, 0] * m[0, 1]
    s1 = m[0, 0] * m[1, 2] - m[1, 0] * m[0, 2]
    s2 = m[0, 0] * m[1, 3] - m[1, 0] * m[0, 3]
    s3 = m[0, 1] * m[1, 2] - m[1, 1] * m[0, 2]
    s4 = m[0, 1] * m[1, 3] - m[1, 1] * m[0, 3]
    s5 = m[0, 2] * m[1, 3] - m[1, 2] * m[0, 3]

    c5 = m[2, 2] * m[3, 3] - m[3, 2] * m[2, 3]
    c4 = m[2, 1] * m[3, 3] - m[3, 1] * m[2, 3]
    c3 = m[2, 1] * m[3, 2] - m[3, 1] * m[2, 2]
    c2 = m[2, 0] * m[3, 3] - m[3, 0] * m[2, 3]
    c1 = m[2, 0] * m[3, 2] - m[3, 0] * m[2, 2]
    c0 = m[2, 0] * m[3, 1] - m[3, 0] * m[2, 1]

    return float(s0 * c5 - s1 * c4 + s2 * c3 + s3 * c2 - s4 * c1 + s5 * c0)


def mat4_invert(m: ArrayLike, out: Optional[np.ndarray] = None) -> Optional[np.ndarray]:
    """Inverse of *m*, or ``None`` when ``|det| < EPSILON``.

    *out* is left untouched when the matrix is singular.
    """
    m = as_array(m)
    det = mat4_determinant(m)
    if abs(det) < EPSILON:
        logger.debug("mat4_invert: singular matrix (det=%g)", det)
        return None
    return store(np.linalg.inv(m), out)


# ---------------------------------------------------------------------------
# Cameras
# ---------------------------------------------------------------------------

def mat4_look_at(eye: ArrayLike, center: ArrayLike, up: ArrayLike,
                 out: Optional[np.ndarray] = None) -> np.ndarray:
    """View matrix for a camera at *eye* looking toward *center*."""
    eye, center, up = as_array(eye), as_array(center), as_array(up)
    if np.all(np.abs(eye - center) < EPSILON):
        logger.debug("mat4_look_at: eye coincides with center, returning identity")
        return mat4_identity(out)

    z = _unit_or_zero(eye - center)
    x = _unit_or_zero(np.cross(up, z))
    y = _unit_or_zero(np.cross(z, x))

    m = np.eye(4)
    m[0, :3] = x
    m[1, :3] = y
    m[2, :3] = z
    m[0, 3] = -float(x @ eye)
    m[1, 3] = -float(y @ eye)
    m[2, 3] = -float(z @ eye)
    return store(m, out)


def _unit_or_zero(v: np.ndarray) -> np.ndarray:
    length = math.sqrt(float(v @ v))
    if length == 0:
        return np.zeros(3)
    return v / length


def mat4_perspective(fovy: float, aspect: float, near: float, far: float,
                     out: Optional[np.ndarray] = None) -> np.ndarray:
    """OpenGL perspective projection; *fovy* in radians, clip z in [-1, 1]."""
    f = 1.0 / math.tan(fovy / 2.0)
    nf = 1.0 / (near - far)
    m = np.zeros((4, 4))
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = (far + near) * nf
    m[2, 3] = 2.0 * far * near * nf
    m[3, 2] = -1.0
    return store(m, out)


def mat4_ortho(left: float, right: float, bottom: float, top: float, near: float, far: float,
               out: Optional[np.ndarray] = None) -> np.ndarray:
    """OpenGL orthographic projection."""
    lr = 1.0 / (left - right)
    bt = 1.0 / (bottom - top)
    nf = 1.0 / (near - far)
    m = np.eye(4)
    m[0, 0] = -2.0 * lr
    m[1, 1] = -2.0 * bt
    m[2, 2] = 2.0 * nf
    m[0, 3] = (left + right) * lr
    m[1, 3] = (top + bottom) * bt
    m[2, 3] = (far + near) * nf
    return store(m, out)


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------

def mat4_from_translation(v: ArrayLike) -> np.ndarray:
    m = np.eye(4)
    m[:3, 3] = as_array(v)
    return m


def mat4_from_x_rotation(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    m = np.eye(4)
    m[1, 1], m[1, 2] = c, -s
    m[2, 1], m[2, 2] = s, c
    return m


def mat4_from_y_rotation(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    m = np.eye(4)
    m[0, 0], m[0, 2] = c, s
    m[2, 0], m[2, 2] = -s, c
    return m


def mat4_from_z_rotation(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    m = np.eye(4)
    m[0, 0], m[0, 1] = c, -s
    m[1, 0], m[1, 1] = s, c
    return m


def mat4_from_rotation(angle: float, axis: ArrayLike) -> np.ndarray:
    """Rotation of *angle* radians about *axis*; a near-zero axis gives identity."""
    axis = as_array(axis)
    length = math.sqrt(float(axis @ axis))
    if length < EPSILON:
        logger.debug("mat4_from_rotation: axis shorter than EPSILON, returning identity")
        return np.eye(4)
    x, y, z = axis / length
    c, s = math.cos(angle), math.sin(angle)
    t = 1.0 - c
    m = np.eye(4)
    m[:3, :3] = (
        (x * x * t + c,      x * y * t - z * s,  x * z * t + y * s),
        (y * x * t + z * s,  y * y * t + c,      y * z * t - x * s),
        (z * x * t - y * s,  z * y * t + x * s,  z * z * t + c),
    )
    return m


def mat4_from_scale(v: ArrayLike) -> np.ndarray:
    m = np.eye(4)
    m[0, 0], m[1, 1], m[2, 2] = as_array(v)
    return m


def mat4_from_quat(q: ArrayLike) -> np.ndarray:
    m = np.eye(4)
    m[:3, :3] = rotation.quat_to_matrix(q)
    return m


# ---------------------------------------------------------------------------
# Post-multiplied application: the new transform acts before the existing one
# ---------------------------------------------------------------------------

def mat4_translate(m: ArrayLike, v: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(as_array(m) @ mat4_from_translation(v), out)


def mat4_rotate_x(m: ArrayLike, angle: float, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(as_array(m) @ mat4_from_x_rotation(angle), out)


def mat4_rotate_y(m: ArrayLike, angle: float, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(as_array(m) @ mat4_from_y_rotation(angle), out)


def mat4_rotate_z(m: ArrayLike, angle: float, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(as_array(m) @ mat4_from_z_rotation(angle), out)


def mat4_scale(m: ArrayLike, v: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(as_array(m) @ mat4_from_scale(v), out)


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

def mat4_transform_vec3(m: ArrayLike, v: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Transform the point *v*, dividing by ``w`` unless it is exactly 0."""
    m = as_array(m)
    v = as_array(v)
    result = m[:3, :3] @ v + m[:3, 3]
    w = float(m[3, :3] @ v + m[3, 3])
    if w != 0:
        result = result / w
    return store(result, out)


def mat4_set_basis(m: ArrayLike, b: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Replace the upper-left 3x3 with *b*, keeping translation and the last row."""
    result = np.array(as_array(m))
    result[:3, :3] = as_array(b)
    return store(result, out)
