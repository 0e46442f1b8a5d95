"""
color.py
--------
Color conversions between hex strings, RGB(A), HSV and packed 32-bit
integers.

RGB(A) channels are floats in [0, 1]; HSV is ``(hue in degrees, s, v)``.
Channels are not clamped on construction, only when quantized to bytes.
"""
from __future__ import annotations

import math
from typing import Optional

import numpy as np
from numpy.typing import ArrayLike

from frame_math._buffers import as_array, store

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def rgb(r: float, g: float, b: float) -> np.ndarray:
    return np.array([r, g, b], dtype=np.float64)


def rgba(r: float, g: float, b: float, a: float = 1.0) -> np.ndarray:
    return np.array([r, g, b, a], dtype=np.float64)


def hsv(h: float, s: float, v: float) -> np.ndarray:
    return np.array([h, s, v], dtype=np.float64)


# ---------------------------------------------------------------------------
# Hex strings
# ---------------------------------------------------------------------------

def _parse_hex(text: str) -> list[float]:
    """Channels of ``#RGB``, ``#RGBA``, ``#RRGGBB`` or ``#RRGGBBAA`` in [0, 1].

    Alpha is 1.0 for the formats that omit it.
    """
    digits = text[1:] if text.startswith("#") else text
    if len(digits) not in (3, 4, 6, 8) or not set(digits) <= _HEX_DIGITS:
        raise ValueError(f"Invalid hex color {text!r}")
    if len(digits) in (3, 4):
        digits = "".join(c * 2 for c in digits)
    channels = [int(digits[i:i + 2], 16) / 255.0 for i in range(0, len(digits), 2)]
    if len(channels) == 3:
        channels.append(1.0)
    return channels


def hex_to_rgb(text: str, out: Optional[np.ndarray] = None) -> np.ndarray:
    """RGB channels of a hex color; any alpha digits are ignored."""
    return store(_parse_hex(text)[:3], out)


def hex_to_rgba(text: str, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store(_parse_hex(text), out)


def _to_byte(channel: float) -> int:
    """Quantize a [0, 1] channel: clamp to [0, 255], then round half up."""
    return int(math.floor(max(0.0, min(255.0, channel * 255.0)) + 0.5))


def rgb_to_hex(r: float, g: float, b: float) -> str:
    return "#{:02x}{:02x}{:02x}".format(_to_byte(r), _to_byte(g), _to_byte(b))


def rgba_to_hex(r: float, g: float, b: float, a: float = 1.0) -> str:
    """``#rrggbbaa``, or ``#rrggbb`` when alpha quantizes to 255."""
    a8 = _to_byte(a)
    if a8 == 255:
        return rgb_to_hex(r, g, b)
    return "#{:02x}{:02x}{:02x}{:02x}".format(_to_byte(r), _to_byte(g), _to_byte(b), a8)


def rgba_to_web_string(r: float, g: float, b: float, a: float = 1.0) -> str:
    """CSS ``rgba(R, G, B, a)`` string with byte channels."""
    return f"rgba({_to_byte(r)}, {_to_byte(g)}, {_to_byte(b)}, {a:g})"


# ---------------------------------------------------------------------------
# HSV
# ---------------------------------------------------------------------------

def rgb_to_hsv(r: float, g: float, b: float, out: Optional[np.ndarray] = None) -> np.ndarray:
    """HSV of an RGB color; hue is rounded to whole degrees in [0, 360)."""
    hi = max(r, g, b)
    lo = min(r, g, b)
    diff = hi - lo

    h = 0.0
    if diff != 0:
        if hi == r:
            h = math.fmod((g - b) / diff, 6.0)
        elif hi == g:
            h = (b - r) / diff + 2.0
        else:
            h = (r - g) / diff + 4.0

    h = math.floor(h * 60.0 + 0.5)
    if h < 0:
        h += 360

    s = 0.0 if hi == 0 else diff / hi
    return store((h, s, hi), out)


def rgba_to_hsv(r: float, g: float, b: float, out: Optional[np.ndarray] = None) -> np.ndarray:
    return rgb_to_hsv(r, g, b, out)


def _wrap_hue(h: float) -> float:
    h = math.fmod(h, 360.0)
    if h < 0:
        h += 360.0
    # fmod of a tiny negative can land exactly on 360
    if h >= 360.0:
        h = 0.0
    return h


def hsv_to_rgb(h: float, s: float, v: float, out: Optional[np.ndarray] = None) -> np.ndarray:
    """RGBA (alpha 1) of an HSV color; the hue may lie outside [0, 360)."""
    return hsv_to_rgba(h, s, v, 1.0, out)


def hsv_to_rgba(h: float, s: float, v: float, a: float = 1.0,
                out: Optional[np.ndarray] = None) -> np.ndarray:
    h = _wrap_hue(h) / 60.0
    c = v * s
    x = c * (1.0 - abs(math.fmod(h, 2.0) - 1.0))
    m = v - c

    sector = int(h)
    if sector == 0:
        r, g, b = c, x, 0.0
    elif sector == 1:
        r, g, b = x, c, 0.0
    elif sector == 2:
        r, g, b = 0.0, c, x
    elif sector == 3:
        r, g, b = 0.0, x, c
    elif sector == 4:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x

    return store((r + m, g + m, b + m, a), out)


# ---------------------------------------------------------------------------
# Interpolation
# ---------------------------------------------------------------------------

def lerp_rgba(a: ArrayLike, b: ArrayLike, t: float, out: Optional[np.ndarray] = None) -> np.ndarray:
    a = as_array(a)
    return store(a + (as_array(b) - a) * t, out)


def lerp_hsv(a: ArrayLike, b: ArrayLike, t: float, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Interpolate HSV colors, moving the hue along the shorter way round."""
    a = as_array(a)
    b = as_array(b)
    h_diff = b[0] - a[0]
    if h_diff > 180.0:
        h_diff -= 360.0
    elif h_diff < -180.0:
        h_diff += 360.0

    h = _wrap_hue(a[0] + h_diff * t)
    s = a[1] + (b[1] - a[1]) * t
    v = a[2] + (b[2] - a[2]) * t
    return store((h, s, v), out)


# ---------------------------------------------------------------------------
# Packed 32-bit
# ---------------------------------------------------------------------------

def rgba_to_u32(r: float, g: float, b: float, a: float) -> int:
    """Pack into an unsigned 32-bit int: R in the low byte, A in the high byte."""
    return (_to_byte(a) << 24) | (_to_byte(b) << 16) | (_to_byte(g) << 8) | _to_byte(r)


def u32_to_rgba(color: int, out: Optional[np.ndarray] = None) -> np.ndarray:
    return store((
        (color & 0xFF) / 255.0,
        ((color >> 8) & 0xFF) / 255.0,
        ((color >> 16) & 0xFF) / 255.0,
        ((color >> 24) & 0xFF) / 255.0,
    ), out)
