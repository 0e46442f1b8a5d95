"""
palette.py
----------
Endless generator of well-separated, harmonious colors.

Hue advances by the golden angle each step, so consecutive colors land far
apart on the color wheel; saturation and value get a small low-discrepancy
jitter from Halton sequences (base 3 and base 2).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Literal, Optional, Union

import numpy as np

from frame_math.color import hsv_to_rgba, rgba_to_hex
from frame_math.scalar import clamp01

logger = logging.getLogger(__name__)

GOLDEN_ANGLE = 137.50776405003785

PaletteFormat = Literal["hex", "rgba"]


@dataclass(frozen=True)
class PaletteOptions:
    """Tuning knobs for :class:`InfinitePalette`.

    ``start_hue`` of ``None`` draws a random starting hue from the
    palette's RNG.
    """
    start_hue: Optional[float] = None
    golden_angle: float = GOLDEN_ANGLE
    base_saturation: float = 0.68
    base_value: float = 0.82
    alpha: float = 1.0
    fmt: PaletteFormat = "hex"


def halton(index: int, base: int) -> float:
    """Element *index* of the Halton sequence in *base*, in [0, 1)."""
    f = 1.0
    r = 0.0
    i = index
    while i > 0:
        f /= base
        r += f * (i % base)
        i //= base
    return r


class InfinitePalette:
    """Stateful color generator.

    Two palettes built with equal options and the same *seed* produce the
    same sequence, including after :meth:`reset` without an explicit hue.
    """

    def __init__(self, options: Optional[PaletteOptions] = None, seed: Optional[int] = None) -> None:
        self.options = options if options is not None else PaletteOptions()
        if self.options.fmt not in ("hex", "rgba"):
            raise ValueError(f"Unknown palette format {self.options.fmt!r}")
        self._rng = np.random.default_rng(seed)
        self._count = 0
        self.start_hue = self._initial_hue(self.options.start_hue)

    def _initial_hue(self, hue: Optional[float]) -> float:
        if hue is not None:
            return float(hue)
        hue = float(self._rng.random() * 360.0)
        logger.debug("InfinitePalette: random start hue %.3f", hue)
        return hue

    @property
    def count(self) -> int:
        """Number of colors generated since construction or the last reset."""
        return self._count

    def next_rgba(self) -> np.ndarray:
        idx = self._count + 1
        opts = self.options

        hue = (self.start_hue + idx * opts.golden_angle) % 360.0
        s = clamp01(opts.base_saturation * (0.9 + 0.2 * halton(idx, 3)))
        v = clamp01(opts.base_value * (0.9 + 0.2 * halton(idx, 2)))

        self._count += 1
        return hsv_to_rgba(hue, s, v, opts.alpha)

    def next_hex(self) -> str:
        r, g, b, a = self.next_rgba()
        return rgba_to_hex(r, g, b, a)

    def reset(self, start_hue: Optional[float] = None) -> None:
        """Restart the sequence, at *start_hue* or at a fresh random hue."""
        self.start_hue = self._initial_hue(start_hue)
        self._count = 0

    def __iter__(self) -> Iterator[Union[str, np.ndarray]]:
        while True:
            if self.options.fmt == "hex":
                yield self.next_hex()
            else:
                yield self.next_rgba()
