"""
vec2.py
-------
2D vector algebra on ``(2,)`` float arrays.

Every function that produces a vector takes an optional ``out`` array which
may be one of the inputs.
"""
from __future__ import annotations

import math
from typing import Optional

import numpy as np
from numpy.typing import ArrayLike

from frame_math._buffers import as_array, store


def vec2(x: float, y: float) -> np.ndarray:
    return np.array([x, y], dtype=np.float64)


def vec2_zero() -> np.ndarray:
    return np.zeros(2)


def vec2_unit_x() -> np.ndarray:
    return vec2(1.0, 0.0)


def vec2_unit_y() -> np.ndarray:
    return vec2(0.0, 1.0)


def vec2_add(a: ArrayLike, b: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(as_array(a) + as_array(b), out)


def vec2_sub(a: ArrayLike, b: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(as_array(a) - as_array(b), out)


def vec2_mul(v: ArrayLike, scalar: float, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(as_array(v) * scalar, out)


def vec2_div_scalar(v: ArrayLike, scalar: float, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Divide by *scalar*; a zero divisor yields inf/nan components."""
    with np.errstate(divide="ignore", invalid="ignore"):
        result = as_array(v) / np.float64(scalar)
    return store(result, out)


def vec2_negate(v: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(-as_array(v), out)


def vec2_dot(a: ArrayLike, b: ArrayLike) -> float:
    a, b = as_array(a), as_array(b)
    return float(a[0] * b[0] + a[1] * b[1])


def vec2_cross(a: ArrayLike, b: ArrayLike) -> float:
    """Z component of the 3D cross product of (a, 0) and (b, 0)."""
    a, b = as_array(a), as_array(b)
    return float(a[0] * b[1] - a[1] * b[0])


def vec2_length_sq(v: ArrayLike) -> float:
    return vec2_dot(v, v)


def vec2_length(v: ArrayLike) -> float:
    return math.sqrt(vec2_length_sq(v))


def vec2_distance(a: ArrayLike, b: ArrayLike) -> float:
    return vec2_length(as_array(a) - as_array(b))


def vec2_distance_sq(a: ArrayLike, b: ArrayLike) -> float:
    return vec2_length_sq(as_array(a) - as_array(b))


def vec2_normalize(v: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Scale *v* to unit length. A zero-length vector stays zero."""
    v = as_array(v)
    length = vec2_length(v)
    if length == 0:
        return store(np.zeros(2), out)
    return store(v / length, out)


def vec2_lerp(a: ArrayLike, b: ArrayLike, t: float, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Linear interpolation; *t* outside [0, 1] extrapolates."""
    a = as_array(a)
    return store(a + (as_array(b) - a) * t, out)


def vec2_reflect(incident: ArrayLike, normal: ArrayLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    incident, normal = as_array(incident), as_array(normal)
    return store(incident - normal * (2.0 * vec2_dot(incident, normal)), out)


def vec2_rotate(v: ArrayLike, angle: float, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Rotate counter-clockwise by *angle* radians."""
    v = as_array(v)
    c, s = math.cos(angle), math.sin(angle)
    x, y = v[0], v[1]
    return store((x * c - y * s, x * s + y * c), out)


def vec2_angle(a: ArrayLike, b: ArrayLike) -> float:
    """Unsigned angle between *a* and *b* in radians, 0 if either is zero."""
    len_a = vec2_length(a)
    len_b = vec2_length(b)
    if len_a == 0 or len_b == 0:
        return 0.0
    cos_angle = vec2_dot(a, b) / (len_a * len_b)
    return math.acos(max(-1.0, min(1.0, cos_angle)))
