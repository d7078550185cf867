"""Tests for Vec2, Vec3 and Vec4.

Tests cover:
- Construction and flat array marshaling
- Component-wise arithmetic and IEEE division
- Geometry (normalize, angle, cross, truncate)
- Matrix and quaternion transforms
- Destination aliasing
"""

import math

import numpy as np
import pytest

from vecmat import EPSILON, Mat3, Mat4, Quat, Vec2, Vec3, Vec4
from vecmat.verification import TransformVerifier


class TestConstruction:
    """Test vector construction and marshaling."""

    def test_defaults(self):
        """Test default components are zero."""
        np.testing.assert_array_equal(Vec2().array, [0, 0])
        np.testing.assert_array_equal(Vec3().array, [0, 0, 0])
        np.testing.assert_array_equal(Vec4().array, [0, 0, 0, 0])

    def test_storage_is_float32(self):
        """Test storage dtype and length."""
        v = Vec3(1, 2, 3)
        assert v.array.dtype == np.float32
        assert len(v) == 3
        assert list(v) == [1.0, 2.0, 3.0]

    def test_from_float_array(self):
        """Test round trip through the flat array form."""
        v = Vec4.from_float_array([1, 2, 3, 4])
        assert v == Vec4(1, 2, 3, 4)

    def test_to_float_array_is_copy(self):
        """Test to_float_array does not expose internal storage."""
        v = Vec3(1, 2, 3)
        arr = v.to_float_array()
        arr[0] = 99
        assert v.x == 1.0

    def test_from_float_array_wrong_length(self):
        """Test wrong length raises ValueError."""
        with pytest.raises(ValueError, match="must contain exactly 3 floats, got 2"):
            Vec3.from_float_array([1.0, 2.0])

    def test_from_float_array_not_flat(self):
        """Test 2-D input raises ValueError."""
        with pytest.raises(ValueError, match="1-D"):
            Vec2.from_float_array(np.zeros((1, 2)))

    def test_set_and_properties(self):
        """Test component setters."""
        v = Vec3().set(4, 5, 6)
        v.x = 7
        assert (v.x, v.y, v.z) == (7.0, 5.0, 6.0)

    def test_random_on_sphere(self, rng):
        """Test random points lie on the sphere of the given radius."""
        for _ in range(10):
            assert abs(Vec3.random(2.5, rng).length - 2.5) < 1e-5
            assert abs(Vec2.random(0.5, rng).length - 0.5) < 1e-6

    def test_from_homogeneous(self):
        """Test perspective divide of a Vec4."""
        v = Vec3.from_homogeneous(Vec4(2, 4, 6, 2))
        np.testing.assert_allclose(v.array, [1, 2, 3])

    def test_equality_is_exact(self):
        """Test == is exact and equals_approximately uses tolerance."""
        a = Vec3(1, 2, 3)
        b = Vec3(1, 2, 3 + 1e-7)
        assert a.equals_approximately(b)
        assert a != Vec3(1, 2, 3.001)
        assert a != Vec2(1, 2)


class TestArithmetic:
    """Test component-wise arithmetic."""

    def test_add_subtract(self):
        """Test add/subtract and operators."""
        a = Vec3(1, 2, 3)
        b = Vec3(4, 5, 6)
        np.testing.assert_allclose((a + b).array, [5, 7, 9])
        np.testing.assert_allclose((b - a).array, [3, 3, 3])
        np.testing.assert_allclose((-a).array, [-1, -2, -3])

    def test_multiply_divide(self):
        """Test component-wise and scalar multiply/divide."""
        a = Vec2(2, 6)
        b = Vec2(4, 3)
        np.testing.assert_allclose((a * b).array, [8, 18])
        np.testing.assert_allclose((a / b).array, [0.5, 2])
        np.testing.assert_allclose((a * 2).array, [4, 12])
        np.testing.assert_allclose((2 * a).array, [4, 12])
        np.testing.assert_allclose((a / 2).array, [1, 3])

    def test_divide_by_zero_is_ieee(self):
        """Test division by zero yields inf/nan instead of raising."""
        r = Vec2(1, 0).div_scalar(0)
        assert math.isinf(r.x)
        assert math.isnan(r.y)
        q = Vec2(1, -1).divide(Vec2(0, 0))
        assert q.x == math.inf and q.y == -math.inf

    def test_add_scaled(self):
        """Test a + b * s."""
        r = Vec3(1, 1, 1).add_scaled(Vec3(1, 2, 3), 2)
        np.testing.assert_allclose(r.array, [3, 5, 7])

    def test_inverse_abs_round(self):
        """Test reciprocal, abs, ceil, floor and round."""
        v = Vec3(-2, 0.5, 4)
        np.testing.assert_allclose(v.inverse().array, [-0.5, 2, 0.25])
        np.testing.assert_allclose(v.abs().array, [2, 0.5, 4])
        np.testing.assert_allclose(Vec2(1.2, -1.2).ceil().array, [2, -1])
        np.testing.assert_allclose(Vec2(1.8, -1.2).floor().array, [1, -2])
        np.testing.assert_allclose(Vec2(1.6, -1.4).round().array, [2, -1])

    def test_min_max_clamp(self):
        """Test component-wise min, max and clamp."""
        a = Vec3(1, 5, -3)
        b = Vec3(2, 4, -4)
        np.testing.assert_allclose(a.min(b).array, [1, 4, -4])
        np.testing.assert_allclose(a.max(b).array, [2, 5, -3])
        np.testing.assert_allclose(a.clamp(0, 2).array, [1, 2, 0])

    def test_lerp(self):
        """Test lerp and lerp_v."""
        a = Vec2(0, 10)
        b = Vec2(10, 20)
        np.testing.assert_allclose(a.lerp(b, 0.25).array, [2.5, 12.5])
        np.testing.assert_allclose(a.lerp_v(b, Vec2(0, 1)).array, [0, 20])
        np.testing.assert_allclose(a.midpoint(b).array, [5, 15])


class TestGeometry:
    """Test geometric vector operations."""

    def test_length_and_distance(self):
        """Test lengths and distances."""
        v = Vec3(3, 4, 0)
        assert v.length == pytest.approx(5)
        assert v.length_sq == pytest.approx(25)
        assert v.distance(Vec3()) == pytest.approx(5)
        assert Vec2(1, 1).dist_sq(Vec2(4, 5)) == pytest.approx(25)

    def test_normalize(self):
        """Test normalize gives unit length."""
        np.testing.assert_allclose(Vec3(3, 4, 0).normalize().array, [0.6, 0.8, 0], rtol=1e-6)

    def test_normalize_zero_vector(self):
        """Test zero-length input normalizes to zero, not NaN."""
        assert Vec3().normalize() == Vec3()
        tiny = Vec3(EPSILON / 10, 0, 0)
        assert tiny.normalize().is_zero()

    def test_set_length_and_truncate(self):
        """Test set_length and truncate preserve direction."""
        v = Vec2(3, 4)
        np.testing.assert_allclose(v.set_length(10).array, [6, 8], rtol=1e-5)
        np.testing.assert_allclose(v.truncate(2.5).array, [1.5, 2], rtol=1e-5)
        np.testing.assert_allclose(v.truncate(10).array, [3, 4])

    def test_angle(self):
        """Test angle between vectors lies in [0, pi]."""
        assert Vec3(1, 0, 0).angle(Vec3(0, 1, 0)) == pytest.approx(math.pi / 2)
        assert Vec3(1, 0, 0).angle(Vec3(-2, 0, 0)) == pytest.approx(math.pi)
        assert Vec2(1, 1).angle(Vec2(2, 2)) == pytest.approx(0, abs=1e-3)

    def test_angle_zero_operand(self):
        """Test a zero-length operand gives pi/2 instead of NaN."""
        assert Vec3().angle(Vec3(1, 2, 3)) == pytest.approx(math.pi / 2)

    def test_cross(self):
        """Test 3D cross and the 2D cross returning a Vec3."""
        np.testing.assert_allclose(Vec3(1, 0, 0).cross(Vec3(0, 1, 0)).array, [0, 0, 1])
        c = Vec2(1, 0).cross(Vec2(0, 2))
        assert isinstance(c, Vec3)
        np.testing.assert_allclose(c.array, [0, 0, 2])


class TestTransforms:
    """Test vector transforms by matrices and quaternions."""

    def test_vec3_transform_mat4_point(self):
        """Test points pick up the translation."""
        m = Mat4.translation(Vec3(1, 2, 3))
        np.testing.assert_allclose(Vec3(1, 1, 1).transform_mat4(m).array, [2, 3, 4])

    def test_vec3_transform_mat4_zero_w(self):
        """Test a resulting w of zero is treated as 1."""
        m = Mat4.translation(Vec3(1, 2, 3))
        m[15] = 0.0
        np.testing.assert_allclose(Vec3(0, 0, 0).transform_mat4(m).array, [1, 2, 3])

    def test_vec3_transform_mat4_divides_by_w(self):
        """Test perspective divide."""
        m = Mat4.uniform_scaling(1.0)
        m[15] = 2.0
        np.testing.assert_allclose(Vec3(2, 4, 6).transform_mat4(m).array, [1, 2, 3])

    def test_upper3x3_ignores_translation(self):
        """Test direction transform ignores translation."""
        m = Mat4.translation(Vec3(5, 5, 5)).scale(Vec3(2, 2, 2))
        np.testing.assert_allclose(Vec3(1, 0, 0).transform_mat4_upper3x3(m).array, [2, 0, 0])

    def test_vec3_transform_mat3(self):
        """Test linear Mat3 transform."""
        m = Mat3.rotation_z(math.pi / 2)
        np.testing.assert_allclose(Vec3(1, 0, 0).transform_mat3(m).array, [0, 1, 0], atol=1e-6)

    def test_vec2_transform_mat3_applies_translation(self):
        """Test 2D affine transform."""
        m = Mat3.translation(Vec2(3, 4)).rotate(math.pi / 2)
        np.testing.assert_allclose(Vec2(1, 0).transform_mat3(m).array, [3, 5], atol=1e-6)

    def test_vec2_transform_mat4(self):
        """Test 2D point through a Mat4."""
        m = Mat4.translation(Vec3(1, 2, 3))
        np.testing.assert_allclose(Vec2(1, 1).transform_mat4(m).array, [2, 3])

    def test_vec4_transform_mat4(self):
        """Test full homogeneous product."""
        m = Mat4.translation(Vec3(1, 2, 3))
        np.testing.assert_allclose(Vec4(1, 1, 1, 0).transform_mat4(m).array, [1, 1, 1, 0])
        np.testing.assert_allclose(Vec4(1, 1, 1, 1).transform_mat4(m).array, [2, 3, 4, 1])

    def test_transform_quat(self):
        """Test quarter turn about y sends +x to -z."""
        q = Quat.from_axis_angle(Vec3(0, 1, 0), math.pi / 2)
        np.testing.assert_allclose(Vec3(1, 0, 0).transform_quat(q).array, [0, 0, -1], atol=1e-4)

    def test_rotate_about_origin_point(self):
        """Test rotations about an arbitrary centre."""
        r = Vec3(2, 1, 0).rotate_z(Vec3(1, 1, 0), math.pi / 2)
        np.testing.assert_allclose(r.array, [1, 2, 0], atol=1e-6)
        r = Vec3(0, 1, 0).rotate_x(Vec3(), math.pi / 2)
        np.testing.assert_allclose(r.array, [0, 0, 1], atol=1e-6)
        r = Vec3(0, 0, 1).rotate_y(Vec3(), math.pi / 2)
        np.testing.assert_allclose(r.array, [1, 0, 0], atol=1e-6)
        r = Vec2(2, 0).rotate(Vec2(1, 0), math.pi)
        np.testing.assert_allclose(r.array, [0, 0], atol=1e-6)

    def test_matmul_operator(self):
        """Test m @ v transforms the vector."""
        m = Mat4.translation(Vec3(1, 0, 0))
        np.testing.assert_allclose((m @ Vec3(0, 0, 0)).array, [1, 0, 0])


class TestAliasing:
    """Test dst may alias the receiver or an operand."""

    def test_returns_dst(self):
        """Test the destination instance is returned."""
        dst = Vec3()
        assert Vec3(1, 2, 3).add(Vec3(1, 1, 1), dst=dst) is dst

    @pytest.mark.parametrize(
        "method,args",
        [
            ("normalize", ()),
            ("negate", ()),
            ("mul_scalar", (3.0,)),
            ("add", (Vec3(1, 2, 3),)),
            ("cross", (Vec3(0.5, -1, 2),)),
            ("lerp", (Vec3(9, 8, 7), 0.3)),
            ("transform_quat", (Quat.from_axis_angle(Vec3(0, 0, 1), 0.4),)),
            ("transform_mat4", (Mat4.rotation_y(0.3).translate(Vec3(1, 2, 3)),)),
            ("transform_mat3", (Mat3.rotation_x(0.3),)),
            ("rotate_z", (Vec3(1, 1, 1), 0.7)),
        ],
    )
    def test_self_alias(self, method, args):
        """Test writing into the receiver matches a fresh destination."""
        TransformVerifier.assert_alias_safe(method, Vec3(1.5, -2, 0.5), *args)

    def test_operand_alias(self):
        """Test writing into the second operand."""
        TransformVerifier.assert_operand_alias_safe("cross", Vec3(1, 2, 3), Vec3(-1, 0.5, 2))
        TransformVerifier.assert_operand_alias_safe("subtract", Vec3(1, 2, 3), Vec3(-1, 0.5, 2))
