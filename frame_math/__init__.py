"""
frame_math
----------
2D/3D geometry and color math: vectors, quaternions, orthonormal bases,
3x3/4x4 matrices, color conversions, an infinite palette and hit-testing.

Functions live in one module per value type::

    from frame_math import basis, quat
    b = basis.basis_from_euler_deg((0, 0, 90))
    q = quat.quat_from_basis(b)
"""

from frame_math import basis, color, hit_test, mat3, mat4, quat, scalar, vec2, vec3
from frame_math.palette import InfinitePalette, PaletteOptions
from frame_math.scalar import EPSILON
from frame_math.transform import Transform

__all__ = [
    "basis", "color", "hit_test", "mat3", "mat4", "quat", "scalar", "vec2", "vec3",
    "InfinitePalette", "PaletteOptions", "Transform", "EPSILON",
]
