"""
vec3.py
-------
3D vector algebra on ``(3,)`` float arrays.
"""
from __future__ import annotations

import math
from typing import Optional

import numpy as np
from numpy.typing import ArrayLike

from frame_math._buffers import as_array, store


def vec3(x: float, y: float, z: float) -> np.ndarray:
    return np.array([x, y, z], dtype=np.float64)


def vec3_zero() -> np.ndarray:
    return np.zeros(3)


def vec3_unit_x() -> np.ndarray:
    return vec3(1.0, 0.0, 0.0)


def vec3_unit_y() -> np.ndarray:
    return vec3(0.0, 1.0, 0.0)


def vec3_unit_z() -> np.ndarray:
    return vec3(0.0, 0.0, 1.0)


def vec3_add(a: ArrayLike, b: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(as_array(a) + as_array(b), out)


def vec3_sub(a: ArrayLike, b: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(as_array(a) - as_array(b), out)


def vec3_mul(v: ArrayLike, scalar: float, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(as_array(v) * scalar, out)


def vec3_div_scalar(v: ArrayLike, scalar: float, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Divide by *scalar*; a zero divisor yields inf/nan components."""
    with np.errstate(divide="ignore", invalid="ignore"):
        result = as_array(v) / np.float64(scalar)
    return store(result, out)


def vec3_negate(v: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(-as_array(v), out)


def vec3_dot(a: ArrayLike, b: ArrayLike) -> float:
    a, b = as_array(a), as_array(b)
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def vec3_cross(a: ArrayLike, b: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    a, b = as_array(a), as_array(b)
    return store((
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    ), out)


def vec3_length_sq(v: ArrayLike) -> float:
    return vec3_dot(v, v)


def vec3_length(v: ArrayLike) -> float:
    return math.sqrt(vec3_length_sq(v))


def vec3_distance(a: ArrayLike, b: ArrayLike) -> float:
    return vec3_length(as_array(a) - as_array(b))


def vec3_distance_sq(a: ArrayLike, b: ArrayLike) -> float:
    return vec3_length_sq(as_array(a) - as_array(b))


def vec3_normalize(v: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Scale *v* to unit length. A zero-length vector stays zero."""
    v = as_array(v)
    length = vec3_length(v)
    if length == 0:
        return store(np.zeros(3), out)
    return store(v / length, out)


def vec3_lerp(a: ArrayLike, b: ArrayLike, t: float, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Linear interpolation; *t* outside [0, 1] extrapolates."""
    a = as_array(a)
    return store(a + (as_array(b) - a) * t, out)


def vec3_reflect(incident: ArrayLike, normal: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Mirror *incident* about the plane with unit *normal*."""
    incident, normal = as_array(incident), as_array(normal)
    return store(incident - normal * (2.0 * vec3_dot(incident, normal)), out)
