"""Tests for Quat.

Tests cover:
- Axis-angle, Euler and matrix construction
- Shortest-arc rotation_to including the anti-parallel case
- Hamilton product order and vector rotation
- Slerp boundaries, double cover and the near-identical fallback
- Degenerate normalize / inverse and destination aliasing
"""

import logging
import math

import numpy as np
import pytest

from vecmat import Mat3, Mat4, Quat, Vec3
from vecmat.verification import TransformVerifier

X = Vec3(1, 0, 0)
Y = Vec3(0, 1, 0)
Z = Vec3(0, 0, 1)


def _same_rotation(a: Quat, b: Quat, atol: float = 1e-5) -> bool:
    """q and -q describe the same rotation."""
    return abs(abs(a.dot(b)) - 1.0) < atol


class TestConstruction:
    """Test Quat factories."""

    def test_default_is_identity(self):
        """Test Quat() is the identity."""
        assert Quat() == Quat.identity()
        assert Quat.create(0, 0, 0, 1) == Quat()
        np.testing.assert_array_equal(Quat.identity().array, [0, 0, 0, 1])

    def test_components(self):
        """Test component properties and set."""
        q = Quat(1, 2, 3, 4)
        assert (q.x, q.y, q.z, q.w) == (1.0, 2.0, 3.0, 4.0)
        q.w = 0.5
        assert q.w == 0.5
        assert q.set(0, 0, 1, 0) is q
        np.testing.assert_array_equal(q.array, [0, 0, 1, 0])

    def test_from_axis_angle(self):
        """Test half-angle construction."""
        q = Quat.from_axis_angle(Z, math.pi / 2)
        h = math.sqrt(0.5)
        np.testing.assert_allclose(q.array, [0, 0, h, h], atol=1e-7)

    def test_rotate_vector_about_y(self):
        """Test a quarter turn about y takes +x to -z."""
        q = Quat.from_axis_angle(Y, math.pi / 2)
        np.testing.assert_allclose(q.rotate(Vec3(1, 0, 0)).array, [0, 0, -1], atol=1e-6)
        np.testing.assert_allclose((q @ Vec3(1, 0, 0)).array, [0, 0, -1], atol=1e-6)

    def test_to_axis_angle_round_trip(self):
        """Test to_axis_angle recovers the construction parameters."""
        axis = Vec3(1, -2, 2).normalize()
        angle, out_axis = Quat.from_axis_angle(axis, 1.2).to_axis_angle()
        assert angle == pytest.approx(1.2, abs=1e-5)
        np.testing.assert_allclose(out_axis.array, axis.array, atol=1e-5)

    def test_to_axis_angle_identity(self):
        """Test the identity reports a zero angle about +x."""
        angle, axis = Quat.identity().to_axis_angle()
        assert angle == 0.0
        np.testing.assert_array_equal(axis.array, [1, 0, 0])

    def test_to_axis_angle_dst(self):
        """Test the axis is written into dst."""
        dst = Vec3()
        _, axis = Quat.from_axis_angle(Z, 0.5).to_axis_angle(dst)
        assert axis is dst


class TestEuler:
    """Test Euler-angle construction."""

    @pytest.mark.parametrize("order", ["xyz", "xzy", "yxz", "yzx", "zxy", "zyx"])
    def test_matches_axis_product(self, order):
        """Test the order letters name the product order of axis rotations."""
        angles = {"x": 0.3, "y": -0.7, "z": 1.1}
        axes = {"x": X, "y": Y, "z": Z}
        expected = Quat.identity()
        for letter in order:
            expected = expected.multiply(Quat.from_axis_angle(axes[letter], angles[letter]))
        q = Quat.from_euler(angles["x"], angles["y"], angles["z"], order)
        np.testing.assert_allclose(q.array, expected.array, atol=1e-6)

    def test_default_order(self):
        """Test the default order is xyz."""
        assert Quat.from_euler(0.1, 0.2, 0.3) == Quat.from_euler(0.1, 0.2, 0.3, "xyz")

    def test_case_insensitive(self):
        """Test upper-case orders are accepted."""
        assert Quat.from_euler(0.1, 0.2, 0.3, "ZYX") == Quat.from_euler(0.1, 0.2, 0.3, "zyx")

    @pytest.mark.parametrize("order", ["xxy", "xy", "abc", ""])
    def test_invalid_order(self, order):
        """Test unknown orders raise with the valid options listed."""
        with pytest.raises(ValueError, match="is not valid. Valid options: xyz"):
            Quat.from_euler(0.1, 0.2, 0.3, order)


class TestFromMat:
    """Test extraction from rotation matrices."""

    @pytest.mark.parametrize(
        "axis,angle",
        [
            (Vec3(0, 0, 1), 0.4),
            (Vec3(1, 0, 0), 3.0),
            (Vec3(0, 1, 0), -2.9),
            (Vec3(0, 0, 1), math.pi),
            (Vec3(1, 1, 1), 2.5),
        ],
    )
    def test_mat4_round_trip(self, axis, angle):
        """Test every trace branch recovers the rotation."""
        q = Quat.from_axis_angle(axis.normalize(), angle)
        assert _same_rotation(Quat.from_mat(Mat4.from_quat(q)), q)

    def test_mat3(self):
        """Test Mat3 input is accepted."""
        q = Quat.from_euler(0.2, 0.4, -0.6, "yxz")
        assert _same_rotation(Quat.from_mat(Mat3.from_quat(q)), q)

    def test_rejects_non_matrix(self):
        """Test a vector is rejected with TypeError."""
        with pytest.raises(TypeError, match="m must be RotationMatrix, got Vec3"):
            Quat.from_mat(Vec3(1, 2, 3))


class TestRotationTo:
    """Test shortest-arc rotation between unit vectors."""

    def test_general(self):
        """Test a rotates onto b."""
        a = Vec3(1, 2, 3).normalize()
        b = Vec3(-2, 0.5, 1).normalize()
        q = Quat.rotation_to(a, b)
        assert q.length == pytest.approx(1.0, abs=1e-6)
        np.testing.assert_allclose(q.rotate(a).array, b.array, atol=1e-5)

    def test_parallel_is_identity(self):
        """Test parallel vectors give the identity."""
        assert Quat.rotation_to(Y, Y) == Quat.identity()

    @pytest.mark.parametrize("a", [Vec3(0, 1, 0), Vec3(1, 0, 0), Vec3(0, 0, -1)])
    def test_anti_parallel(self, a):
        """Test opposite vectors give a half turn about a perpendicular axis."""
        b = a.negate()
        q = Quat.rotation_to(a, b)
        angle, axis = q.to_axis_angle()
        assert angle == pytest.approx(math.pi, abs=1e-5)
        assert axis.dot(a) == pytest.approx(0.0, abs=1e-6)
        np.testing.assert_allclose(q.rotate(a).array, b.array, atol=1e-5)


class TestAlgebra:
    """Test products, inverses and metrics."""

    def test_multiply_order(self):
        """Test a.multiply(b) applies b first."""
        qx = Quat.from_axis_angle(X, math.pi / 2)
        qz = Quat.from_axis_angle(Z, math.pi / 2)
        # z first: x -> y, then x: y -> z
        np.testing.assert_allclose(qx.multiply(qz).rotate(X).array, [0, 0, 1], atol=1e-6)
        # x first: x -> x, then z: x -> y
        np.testing.assert_allclose(qz.multiply(qx).rotate(X).array, [0, 1, 0], atol=1e-6)
        assert (qx * qz) == qx.multiply(qz)
        assert (qx @ qz) == qx.multiply(qz)

    @pytest.mark.parametrize("method,axis", [("rotate_x", X), ("rotate_y", Y), ("rotate_z", Z)])
    def test_rotate_axis(self, unit_quats, method, axis):
        """Test q.rotate_x(a) == q * from_axis_angle(x, a)."""
        for q in unit_quats:
            expected = q.multiply(Quat.from_axis_angle(axis, 0.9))
            np.testing.assert_allclose(getattr(q, method)(0.9).array, expected.array, atol=1e-6)

    def test_inverse(self):
        """Test q * q^-1 is the identity for non-unit q."""
        q = Quat(1, 2, 3, 4)
        np.testing.assert_allclose(q.multiply(q.inverse()).array, [0, 0, 0, 1], atol=1e-6)

    def test_conjugate_is_inverse_for_unit(self, unit_quats):
        """Test conjugate equals inverse for unit quaternions."""
        for q in unit_quats:
            np.testing.assert_allclose(q.conjugate().array, q.inverse().array, atol=1e-6)

    def test_zero_inverse_is_zero(self):
        """Test the zero quaternion inverts to zero."""
        np.testing.assert_array_equal(Quat(0, 0, 0, 0).inverse().array, [0, 0, 0, 0])

    def test_normalize(self):
        """Test normalize yields unit length."""
        assert Quat(1, 2, 3, 4).normalize().length == pytest.approx(1.0, abs=1e-6)

    def test_normalize_zero_is_identity(self, caplog):
        """Test a zero-length quaternion normalizes to the identity."""
        with caplog.at_level(logging.DEBUG, logger="vecmat.quat.quat"):
            q = Quat(0, 0, 0, 0).normalize()
        assert q == Quat.identity()
        assert "Zero-length quaternion" in caplog.text

    def test_scale_and_length(self):
        """Test scale and length properties."""
        q = Quat(0, 0, 0, 1).scale(3.0)
        assert q.length == 3.0
        assert q.length_sq == 9.0
        assert (2 * Quat(1, 0, 0, 0)) == Quat(2, 0, 0, 0)

    def test_angle(self):
        """Test angle between rotations, invariant under negation."""
        a = Quat.identity()
        b = Quat.from_axis_angle(Z, 0.5)
        assert a.angle(b) == pytest.approx(0.5, abs=1e-5)
        assert a.angle(b.negate()) == pytest.approx(0.5, abs=1e-5)


class TestInterpolation:
    """Test lerp, slerp and sqlerp."""

    def test_slerp_endpoints(self, unit_quats):
        """Test t=0 gives a and t=1 gives b (up to sign)."""
        a, b = unit_quats[0], unit_quats[1]
        np.testing.assert_allclose(a.slerp(b, 0.0).array, a.array, atol=1e-6)
        assert _same_rotation(a.slerp(b, 1.0), b)

    def test_slerp_midpoint(self):
        """Test halfway between identity and a quarter turn is an eighth turn."""
        a = Quat.identity()
        b = Quat.from_axis_angle(Z, math.pi / 2)
        expected = Quat.from_axis_angle(Z, math.pi / 4)
        np.testing.assert_allclose(a.slerp(b, 0.5).array, expected.array, atol=1e-6)

    @pytest.mark.parametrize("t", [0.0, 0.25, 0.5, 0.75, 1.0, -0.5, 1.5])
    def test_slerp_double_cover(self, unit_quats, t):
        """Test slerp to -b takes the same short path as slerp to b."""
        pairs = list(zip(unit_quats, unit_quats[1:]))
        pairs.append((Quat.identity(), Quat.from_axis_angle(Z, math.pi / 2)))
        for a, b in pairs:
            np.testing.assert_allclose(
                a.slerp(b.negate(), t).array, a.slerp(b, t).array, atol=1e-5
            )

    def test_slerp_near_identical(self):
        """Test nearly equal inputs stay finite and unit length."""
        a = Quat.identity()
        b = Quat.from_axis_angle(Z, 1e-4)
        mid = a.slerp(b, 0.5)
        assert np.all(np.isfinite(mid.array))
        assert mid.length == pytest.approx(1.0, abs=1e-6)
        assert mid.z == pytest.approx(2.5e-5, rel=1e-2)

    def test_lerp(self):
        """Test component-wise lerp is not normalized."""
        mid = Quat(1, 0, 0, 0).lerp(Quat(0, 1, 0, 0), 0.5)
        np.testing.assert_allclose(mid.array, [0.5, 0.5, 0, 0])

    def test_sqlerp_endpoints(self, unit_quats):
        """Test sqlerp passes through a at t=0 and d at t=1."""
        a, b, c, d = unit_quats[:4]
        np.testing.assert_allclose(Quat.sqlerp(a, b, c, d, 0.0).array, a.array, atol=1e-6)
        assert _same_rotation(Quat.sqlerp(a, b, c, d, 1.0), d)


class TestAliasing:
    """Test dst may alias the receiver or an operand."""

    @pytest.mark.parametrize(
        "method,args",
        [
            ("multiply", (Quat.from_axis_angle(Vec3(0, 1, 0), 0.4),)),
            ("rotate_x", (0.4,)),
            ("rotate_y", (0.4,)),
            ("rotate_z", (0.4,)),
            ("conjugate", ()),
            ("inverse", ()),
            ("normalize", ()),
            ("slerp", (Quat.from_axis_angle(Vec3(1, 0, 0), 1.3), 0.3)),
            ("lerp", (Quat.from_axis_angle(Vec3(1, 0, 0), 1.3), 0.3)),
        ],
    )
    def test_self_alias(self, unit_quats, method, args):
        """Test writing into the receiver matches a fresh destination."""
        TransformVerifier.assert_alias_safe(method, unit_quats[2], *args)

    @pytest.mark.parametrize("method,args", [("multiply", ()), ("slerp", (0.6,))])
    def test_operand_alias(self, unit_quats, method, args):
        """Test writing into the right operand matches a fresh destination."""
        TransformVerifier.assert_operand_alias_safe(method, unit_quats[0], unit_quats[1], *args)
