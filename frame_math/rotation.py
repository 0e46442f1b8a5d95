"""
rotation.py
-----------
Conversion between unit quaternions ``(x, y, z, w)`` and 3x3 rotation
matrices.

Both :mod:`frame_math.quat` and :mod:`frame_math.basis` go through this
pair, so the two representations always agree on handedness and order.
Matrices use the column-vector convention: ``v' = M @ v``.
"""
from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike

from frame_math._buffers import as_array


def quat_to_matrix(q: ArrayLike) -> np.ndarray:
    """3x3 rotation matrix for the quaternion *q*."""
    x, y, z, w = as_array(q)
    xx, yy, zz = x * x, y * y, z * z
    xy, xz, yz = x * y, x * z, y * z
    wx, wy, wz = w * x, w * y, w * z
    return np.array([
        [1.0 - 2.0 * (yy + zz), 2.0 * (xy - wz),       2.0 * (xz + wy)],
        [2.0 * (xy + wz),       1.0 - 2.0 * (xx + zz), 2.0 * (yz - wx)],
        [2.0 * (xz - wy),       2.0 * (yz + wx),       1.0 - 2.0 * (xx + yy)],
    ])


def matrix_to_quat(m: ArrayLike) -> np.ndarray:
    """Quaternion for the rotation matrix *m* (Shepperd's method).

    The branch is picked on the largest of the trace and the diagonal
    entries so the square root never sees a small argument.
    """
    m = as_array(m)
    m00, m01, m02 = m[0]
    m10, m11, m12 = m[1]
    m20, m21, m22 = m[2]
    trace = m00 + m11 + m22

    if trace > 0.0:
        s = 0.5 / math.sqrt(trace + 1.0)
        w = 0.25 / s
        x = (m21 - m12) * s
        y = (m02 - m20) * s
        z = (m10 - m01) * s
    elif m00 > m11 and m00 > m22:
        s = 2.0 * math.sqrt(1.0 + m00 - m11 - m22)
        w = (m21 - m12) / s
        x = 0.25 * s
        y = (m01 + m10) / s
        z = (m02 + m20) / s
    elif m11 > m22:
        s = 2.0 * math.sqrt(1.0 + m11 - m00 - m22)
        w = (m02 - m20) / s
        x = (m01 + m10) / s
        y = 0.25 * s
        z = (m12 + m21) / s
    else:
        s = 2.0 * math.sqrt(1.0 + m22 - m00 - m11)
        w = (m10 - m01) / s
        x = (m02 + m20) / s
        y = (m12 + m21) / s
        z = 0.25 * s

    return np.array([x, y, z, w])
