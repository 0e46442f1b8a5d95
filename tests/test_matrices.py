"""
Tests for Matrix3 and Matrix4.

Verifies:
- composition order (translate after scale)
- camera and projection matrices
- constructors and post-multiplied application helpers
- determinant / invert, singular inputs returning None
- column-major conversion for GPU upload
"""
import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from frame_math import mat3 as M3
from frame_math import mat4 as M4
from frame_math.basis import basis_from_euler
from frame_math.quat import quat_from_axis_angle


# ══════════════════════════════════════════════════════════════════════════
# Matrix4
# ══════════════════════════════════════════════════════════════════════════

class TestMat4Composition:

    def test_translate_times_scale(self):
        m = M4.mat4_mul(M4.mat4_from_translation((1, 2, 3)), M4.mat4_from_scale((2, 2, 2)))
        assert_allclose(np.diag(m)[:3], (2, 2, 2))
        assert_allclose(m[:3, 3], (1, 2, 3))
        assert_allclose(M4.mat4_transform_vec3(m, (1, 1, 1)), (3, 4, 5))

    def test_mul_identity(self):
        m = M4.mat4_from_rotation(0.7, (1, 2, 3))
        assert_allclose(M4.mat4_mul(m, M4.mat4_identity()), m)
        assert_allclose(M4.mat4_mul(M4.mat4_identity(), m), m)

    def test_mul_out_aliases_input(self):
        a = M4.mat4_from_translation((1, 0, 0))
        b = M4.mat4_from_z_rotation(math.pi / 2)
        expected = a @ b
        M4.mat4_mul(a, b, out=a)
        assert_allclose(a, expected)

    def test_column_major_roundtrip(self):
        m = M4.mat4_from_translation((4, 5, 6))
        flat = M4.mat4_to_column_major(m)
        assert_allclose(flat[12:15], (4, 5, 6))
        assert_allclose(M4.mat4_from_column_major(flat), m)

    def test_row_major_constructor(self):
        m = M4.mat4(*range(16))
        assert m[1, 0] == 4.0
        with pytest.raises(ValueError):
            M4.mat4(1, 2, 3)


class TestMat4Constructors:

    def test_axis_rotations(self):
        assert_allclose(M4.mat4_transform_vec3(M4.mat4_from_x_rotation(math.pi / 2), (0, 1, 0)),
                        (0, 0, 1), atol=1e-12)
        assert_allclose(M4.mat4_transform_vec3(M4.mat4_from_y_rotation(math.pi / 2), (0, 0, 1)),
                        (1, 0, 0), atol=1e-12)
        assert_allclose(M4.mat4_transform_vec3(M4.mat4_from_z_rotation(math.pi / 2), (1, 0, 0)),
                        (0, 1, 0), atol=1e-12)

    def test_from_rotation_matches_axis_rotation(self):
        assert_allclose(M4.mat4_from_rotation(0.4, (0, 0, 3)), M4.mat4_from_z_rotation(0.4), atol=1e-12)

    def test_from_rotation_tiny_axis_is_identity(self):
        assert_allclose(M4.mat4_from_rotation(1.0, (0, 0, 1e-9)), np.eye(4))

    def test_from_quat(self):
        q = quat_from_axis_angle((0, 1, 0), 0.5)
        assert_allclose(M4.mat4_from_quat(q), M4.mat4_from_y_rotation(0.5), atol=1e-12)

    def test_application_helpers_post_multiply(self):
        base = M4.mat4_from_translation((1, 2, 3))
        assert_allclose(M4.mat4_translate(base, (1, 1, 1))[:3, 3], (2, 3, 4))
        assert_allclose(M4.mat4_scale(base, (2, 3, 4)),
                        base @ M4.mat4_from_scale((2, 3, 4)))
        assert_allclose(M4.mat4_rotate_x(base, 0.3), base @ M4.mat4_from_x_rotation(0.3))
        assert_allclose(M4.mat4_rotate_y(base, 0.3), base @ M4.mat4_from_y_rotation(0.3))
        assert_allclose(M4.mat4_rotate_z(base, 0.3), base @ M4.mat4_from_z_rotation(0.3))

    def test_translate_in_place(self):
        m = M4.mat4_identity()
        result = M4.mat4_translate(m, (1, 2, 3), out=m)
        assert result is m
        assert_allclose(m[:3, 3], (1, 2, 3))


class TestMat4Camera:

    def test_perspective_layout(self):
        m = M4.mat4_perspective(math.pi / 2, 2.0, 1.0, 100.0)
        assert m[3, 2] == -1.0
        assert m[3, 3] == 0.0
        assert M4.mat4_to_column_major(m)[11] == -1.0
        assert m[0, 0] == pytest.approx(0.5)
        assert m[1, 1] == pytest.approx(1.0)

    def test_perspective_maps_near_and_far(self):
        m = M4.mat4_perspective(1.0, 1.0, 1.0, 10.0)
        assert M4.mat4_transform_vec3(m, (0, 0, -1))[2] == pytest.approx(-1.0)
        assert M4.mat4_transform_vec3(m, (0, 0, -10))[2] == pytest.approx(1.0)

    def test_ortho(self):
        m = M4.mat4_ortho(-2, 2, -1, 1, 0.1, 10)
        assert m[3, 3] == 1.0
        assert_allclose(M4.mat4_transform_vec3(m, (2, 1, -10)), (1, 1, 1))

    def test_look_at(self):
        m = M4.mat4_look_at((0, 0, 5), (0, 0, 0), (0, 1, 0))
        assert_allclose(M4.mat4_transform_vec3(m, (0, 0, 0)), (0, 0, -5), atol=1e-12)
        assert_allclose(M4.mat4_transform_vec3(m, (1, 0, 5)), (1, 0, 0), atol=1e-12)

    def test_look_at_eye_on_center_is_identity(self):
        assert_allclose(M4.mat4_look_at((1, 1, 1), (1, 1, 1), (0, 1, 0)), np.eye(4))

    def test_look_at_up_parallel_to_view(self):
        m = M4.mat4_look_at((0, 5, 0), (0, 0, 0), (0, 1, 0))
        assert np.all(np.isfinite(m))
        assert_allclose(m[0, :3], (0, 0, 0))


class TestMat4Algebra:

    def test_transpose_out_aliases_input(self):
        m = np.arange(16, dtype=float).reshape(4, 4)
        expected = m.T.copy()
        M4.mat4_transpose(m, out=m)
        assert_allclose(m, expected)

    def test_transform_vec3_skips_divide_when_w_zero(self):
        m = np.eye(4)
        m[3, 3] = 0.0
        assert_allclose(M4.mat4_transform_vec3(m, (1, 2, 3)), (1, 2, 3))

    def test_set_basis_keeps_translation(self):
        m = M4.mat4_from_translation((7, 8, 9))
        b = basis_from_euler((0.0, 0.0, math.pi / 2))
        out = M4.mat4_set_basis(m, b)
        assert_allclose(out[:3, :3], b)
        assert_allclose(out[:3, 3], (7, 8, 9))
        assert_allclose(out[3], (0, 0, 0, 1))
        assert_allclose(m[:3, :3], np.eye(3))

    def test_determinant(self):
        assert M4.mat4_determinant(np.eye(4)) == pytest.approx(1.0)
        assert M4.mat4_determinant(M4.mat4_from_scale((2, 3, 4))) == pytest.approx(24.0)
        m = M4.mat4_from_rotation(0.9, (1, -1, 2)) @ M4.mat4_from_translation((3, 1, 2))
        assert M4.mat4_determinant(m) == pytest.approx(1.0)

    def test_determinant_matches_numpy(self):
        m = np.array([
            [2.0, 0.5, 1.0, 3.0],
            [0.0, 1.0, 4.0, 1.0],
            [1.0, 2.0, 0.0, 1.0],
            [0.0, 1.0, 1.0, 2.0],
        ])
        assert M4.mat4_determinant(m) == pytest.approx(np.linalg.det(m))

    def test_invert(self):
        m = M4.mat4_mul(M4.mat4_from_translation((1, 2, 3)), M4.mat4_from_rotation(0.4, (0, 1, 1)))
        inv = M4.mat4_invert(m)
        assert_allclose(inv @ m, np.eye(4), atol=1e-12)

    def test_invert_singular_returns_none(self):
        out = np.full((4, 4), 7.0)
        assert M4.mat4_invert(M4.mat4_from_scale((1, 0, 1)), out=out) is None
        assert_allclose(out, 7.0)


# ══════════════════════════════════════════════════════════════════════════
# Matrix3
# ══════════════════════════════════════════════════════════════════════════

class TestMat3:

    def test_translate_rotate_scale(self):
        m = M3.mat3_identity()
        m = M3.mat3_translate(m, (10, 0))
        m = M3.mat3_rotate(m, math.pi / 2)
        m = M3.mat3_scale(m, (2, 2))
        assert_allclose(M3.mat3_transform_vec2(m, (1, 0)), (10, 2), atol=1e-12)

    def test_constructors(self):
        assert_allclose(M3.mat3_from_translation((3, 4))[:2, 2], (3, 4))
        assert_allclose(np.diag(M3.mat3_from_scaling((2, 5))), (2, 5, 1))
        assert_allclose(M3.mat3_transform_vec2(M3.mat3_from_rotation(math.pi), (1, 0)), (-1, 0), atol=1e-12)

    def test_column_major(self):
        m = M3.mat3_from_column_major([1, 0, 0, 0, 1, 0, 5, 6, 1])
        assert_allclose(m[:2, 2], (5, 6))
        assert_allclose(m, M3.mat3(1, 0, 5, 0, 1, 6, 0, 0, 1))

    def test_mul_and_transpose(self):
        a = M3.mat3_from_translation((1, 2))
        b = M3.mat3_from_scaling((3, 3))
        assert_allclose(M3.mat3_mul(a, b), a @ b)
        assert_allclose(M3.mat3_transpose(a)[2, :2], (1, 2))

    def test_determinant_and_invert(self):
        m = M3.mat3_mul(M3.mat3_from_translation((4, -1)), M3.mat3_from_scaling((2, 0.5)))
        assert M3.mat3_determinant(m) == pytest.approx(1.0)
        assert_allclose(M3.mat3_invert(m) @ m, np.eye(3), atol=1e-12)

    def test_invert_singular_returns_none(self):
        assert M3.mat3_invert(M3.mat3_from_scaling((0, 1))) is None

    def test_from_mat4(self):
        m4 = M4.mat4_from_translation((1, 2, 3))
        m4[0, 1] = 9.0
        assert_allclose(M3.mat3_from_mat4(m4), [[1, 9, 0], [0, 1, 0], [0, 0, 1]])

    def test_normal_matrix(self):
        m4 = M4.mat4_mul(M4.mat4_from_z_rotation(0.3), M4.mat4_from_scale((2, 1, 1)))
        n = M3.mat3_normal_from_mat4(m4)
        assert_allclose(n, np.linalg.inv(m4[:3, :3]).T, atol=1e-12)
        # normals stay perpendicular to transformed tangents
        tangent = m4[:3, :3] @ np.array([1.0, 1.0, 0.0])
        normal = n @ np.array([1.0, -1.0, 0.0])
        assert float(tangent @ normal) == pytest.approx(0.0, abs=1e-12)

    def test_normal_matrix_singular(self):
        assert M3.mat3_normal_from_mat4(M4.mat4_from_scale((0, 1, 1))) is None
