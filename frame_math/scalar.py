"""
scalar.py
---------
Scalar helpers shared by every angle-based constructor: degree/radian
conversion, clamping and angle wrapping.
"""
from __future__ import annotations

import math

EPSILON = 0.000001
"""Threshold for every degenerate-input check (singular matrices, zero axes)."""

TWO_PI = math.pi * 2.0

_DEG_TO_RAD = math.pi / 180.0
_RAD_TO_DEG = 180.0 / math.pi


def deg_to_rad(deg: float) -> float:
    return deg * _DEG_TO_RAD


def rad_to_deg(rad: float) -> float:
    return rad * _RAD_TO_DEG


def clamp(value: float, lo: float, hi: float) -> float:
    """Limit *value* to the closed interval [lo, hi]."""
    return max(lo, min(hi, value))


def clamp01(value: float) -> float:
    return min(1.0, max(0.0, value))


def normalize_angle(a: float) -> float:
    """Wrap an angle in radians into [0, 2π)."""
    a = math.fmod(a, TWO_PI)
    if a < 0:
        a += TWO_PI
    return a


def normalize_arc_length(start: float, end: float) -> float:
    """Length of the counter-clockwise arc from *start* to *end*, in [0, 2π].

    A non-zero whole number of turns is reported as a full circle (2π)
    rather than collapsing to 0.
    """
    raw = end - start
    d = math.fmod(raw, TWO_PI)
    if d < 0:
        d += TWO_PI
    if abs(d) < 1e-12 and abs(raw) > 0:
        return TWO_PI
    return d


def angle_is_between(angle: float, start: float, arc_len: float) -> bool:
    """True if *angle* lies on the arc that starts at *start* and spans *arc_len*.

    All angles are expected in [0, 2π); arcs that cross 0 are handled.
    """
    if arc_len >= TWO_PI:
        return True
    if arc_len <= 0:
        return False
    end = math.fmod(start + arc_len, TWO_PI)
    if start <= end:
        return start <= angle <= end
    # wraps past 0
    return angle >= start or angle <= end


def next_power_of_2(n: int) -> int:
    """Smallest power of two >= *n* (1 for n <= 0, 2 for n == 1)."""
    if n <= 0:
        return 1
    if n == 1:
        return 2
    power = 1
    while power < n:
        power <<= 1
    return power
