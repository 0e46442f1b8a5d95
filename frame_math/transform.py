"""
transform.py
------------
Position / rotation / scale transform built on the basis and mat4 kernels.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from frame_math.basis import (
    basis_from_euler_deg,
    basis_mul,
    basis_slerp,
    basis_to_euler_deg,
)
from frame_math.mat4 import mat4_from_scale, mat4_from_translation, mat4_mul, mat4_set_basis
from frame_math.vec3 import vec3_lerp


@dataclass
class Transform:
    """Spatial transform: position, rotation (pitch/yaw/roll, degrees), and scale."""
    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    rotation: tuple[float, float, float] = (0.0, 0.0, 0.0)
    scale:    tuple[float, float, float] = (1.0, 1.0, 1.0)

    def basis(self) -> np.ndarray:
        return basis_from_euler_deg(self.rotation)

    def to_matrix(self) -> np.ndarray:
        """4x4 matrix ``T @ R @ S``: scale, then rotate, then translate."""
        rotate = mat4_set_basis(np.eye(4), self.basis())
        return mat4_mul(mat4_from_translation(self.position),
                        mat4_mul(rotate, mat4_from_scale(self.scale)))

    def compose(self, child: Transform) -> Transform:
        """Return the world transform of *child* given *self* as the parent.

        The child's offset is scaled and rotated by the parent before the
        parent's position is added; rotations compose through their bases.
        """
        parent_basis = self.basis()

        scaled = np.array(child.position) * np.array(self.scale)
        world_pos = np.array(self.position) + parent_basis @ scaled

        world_rot = basis_to_euler_deg(basis_mul(parent_basis, child.basis()))
        world_scale = np.array(self.scale) * np.array(child.scale)

        return Transform(
            position=_as_tuple(world_pos),
            rotation=_as_tuple(world_rot),
            scale=_as_tuple(world_scale),
        )

    def lerp(self, other: Transform, t: float) -> Transform:
        """Blend toward *other*; rotation follows the shorter arc."""
        position = vec3_lerp(self.position, other.position, t)
        scale = vec3_lerp(self.scale, other.scale, t)
        rotation = basis_to_euler_deg(basis_slerp(self.basis(), other.basis(), t))
        return Transform(
            position=_as_tuple(position),
            rotation=_as_tuple(rotation),
            scale=_as_tuple(scale),
        )


def _as_tuple(v: np.ndarray) -> tuple[float, float, float]:
    return (float(v[0]), float(v[1]), float(v[2]))
