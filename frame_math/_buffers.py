"""
_buffers.py
-----------
Output-container plumbing shared by every size-preserving operation.

Each public function computes its complete result first and only then
hands it to :func:`store`, so ``out`` may safely alias any of the inputs.
"""
from __future__ import annotations

from typing import Optional

import numpy as np
from numpy.typing import ArrayLike


def as_array(value: ArrayLike) -> np.ndarray:
    """Read *value* as a float64 array without copying existing arrays."""
    return np.asarray(value, dtype=np.float64)


def store(value: ArrayLike, out: Optional[np.ndarray]) -> np.ndarray:
    """Write *value* into *out* and return it, or return a fresh array."""
    if out is None:
        return np.array(value, dtype=np.float64)
    out[...] = value
    return out
