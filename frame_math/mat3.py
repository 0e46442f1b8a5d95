"""
mat3.py
-------
3x3 matrices for 2D affine transforms, plus the normal matrix helper.

Same layout as :mod:`frame_math.mat4`: ``[row, col]`` indexing, column
vectors, translation in column 2.
"""
from __future__ import annotations

import logging
import math
from typing import Optional, Sequence

import numpy as np
from numpy.typing import ArrayLike

from frame_math._buffers import as_array, store
from frame_math.basis import basis_determinant
from frame_math.scalar import EPSILON

logger = logging.getLogger(__name__)


def mat3(*values: float) -> np.ndarray:
    """Build a matrix from 9 values given row by row."""
    if len(values) != 9:
        raise ValueError(f"mat3 expects 9 values, got {len(values)}")
    return np.array(values, dtype=np.float64).reshape(3, 3)


def mat3_identity(out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(np.eye(3), out)


def mat3_from_column_major(values: Sequence[float]) -> np.ndarray:
    return as_array(values).reshape(3, 3).T.copy()


def mat3_mul(a: ArrayLike, b: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(as_array(a) @ as_array(b), out)


def mat3_transpose(m: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(as_array(m).T.copy(), out)


def mat3_determinant(m: ArrayLike) -> float:
    return basis_determinant(m)


def mat3_invert(m: ArrayLike, out: Optional[np.ndarray] = None) -> Optional[np.ndarray]:
    """Inverse of *m*, or ``None`` when ``|det| < EPSILON`` (``out`` untouched)."""
    m = as_array(m)
    det = mat3_determinant(m)
    if abs(det) < EPSILON:
        logger.debug("mat3_invert: singular matrix (det=%g)", det)
        return None
    return store(np.linalg.inv(m), out)


def mat3_from_mat4(m: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(as_array(m)[:3, :3], out)


def mat3_normal_from_mat4(m: ArrayLike, out: Optional[np.ndarray] = None) -> Optional[np.ndarray]:
    """Inverse-transpose of the upper-left 3x3, for transforming normals."""
    upper = as_array(m)[:3, :3]
    det = basis_determinant(upper)
    if abs(det) < EPSILON:
        logger.debug("mat3_normal_from_mat4: singular upper 3x3 (det=%g)", det)
        return None
    return store(np.linalg.inv(upper).T, out)


def mat3_from_translation(v: ArrayLike) -> np.ndarray:
    m = np.eye(3)
    m[:2, 2] = as_array(v)
    return m


def mat3_translate(m: ArrayLike, v: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(as_array(m) @ mat3_from_translation(v), out)


def mat3_from_rotation(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([
        [c,  -s,  0.0],
        [s,   c,  0.0],
        [0.0, 0.0, 1.0],
    ])


def mat3_rotate(m: ArrayLike, angle: float, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(as_array(m) @ mat3_from_rotation(angle), out)


def mat3_from_scaling(v: ArrayLike) -> np.ndarray:
    sx, sy = as_array(v)
    return np.diag([sx, sy, 1.0])


def mat3_scale(m: ArrayLike, v: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(as_array(m) @ mat3_from_scaling(v), out)


def mat3_transform_vec2(m: ArrayLike, v: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Apply the affine part of *m* to the point *v* (no projective divide)."""
    m = as_array(m)
    return store(m[:2, :2] @ as_array(v) + m[:2, 2], out)
