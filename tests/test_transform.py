"""Tests for TransformValues and the batch point transforms."""

import logging
import math

import numpy as np
import pytest

from vecmat import (
    Mat4,
    Quat,
    TransformValues,
    Vec3,
    apply_transform_values,
    rotate_points,
    transform_directions,
    transform_points,
    transform_points_projective,
)


@pytest.fixture
def points(rng):
    """Random float32 point cloud [64, 3]."""
    return (rng.standard_normal((64, 3)) * 3.0).astype(np.float32)


def _per_point(points, fn):
    return np.array([fn(Vec3(*p)).array for p in points.tolist()])


class TestTransformValues:
    """Test TransformValues composition and decomposition."""

    def test_default_is_neutral(self):
        """Test the default instance is the identity."""
        values = TransformValues()
        assert values.is_neutral()
        assert values.to_mat4() == Mat4.identity()

    def test_negated_identity_rotation_is_neutral(self):
        """Test (0, 0, 0, -1) counts as no rotation."""
        assert TransformValues(rotation=(0.0, 0.0, 0.0, -1.0)).is_neutral()
        assert not TransformValues.from_translation(0, 0, 1e-3).is_neutral()
        assert not TransformValues.from_scale(1.01).is_neutral()

    def test_to_mat4_matches_compose(self):
        """Test to_mat4 is T * R * S."""
        q = Quat.from_euler(0.1, 0.2, 0.3)
        values = TransformValues(
            translation=(1.0, 2.0, 3.0), rotation=tuple(q.array.tolist()), scale=(2.0, 3.0, 4.0)
        )
        expected = Mat4.compose(Vec3(1, 2, 3), q, Vec3(2, 3, 4))
        np.testing.assert_allclose(values.to_mat4().array, expected.array, atol=1e-6)

    def test_from_mat4_round_trip(self):
        """Test decomposition of a composed matrix."""
        q = Quat.from_axis_angle(Vec3(1, 2, 2).normalize(), 0.9)
        m = Mat4.compose(Vec3(-1, 0.5, 4), q, Vec3(2, 3, 0.5))
        values = TransformValues.from_mat4(m)
        np.testing.assert_allclose(values.translation, [-1, 0.5, 4], atol=1e-6)
        np.testing.assert_allclose(values.scale, [2, 3, 0.5], rtol=1e-5)
        assert abs(q.dot(Quat(*values.rotation))) == pytest.approx(1.0, abs=1e-5)

    def test_from_mat4_negative_determinant(self):
        """Test a mirror is folded into the x scale."""
        q = Quat.from_axis_angle(Vec3(0, 0, 1), 0.6)
        m = Mat4.compose(Vec3(), q, Vec3(-2, 3, 4))
        values = TransformValues.from_mat4(m)
        np.testing.assert_allclose(values.scale, [-2, 3, 4], rtol=1e-5)
        assert abs(q.dot(Quat(*values.rotation))) == pytest.approx(1.0, abs=1e-5)
        np.testing.assert_allclose(values.to_mat4().array, m.array, atol=1e-5)

    def test_from_mat4_degenerate_scale(self, caplog):
        """Test a zero scale gives the identity rotation."""
        m = Mat4.compose(Vec3(1, 2, 3), Quat.from_euler(0.4, 0.0, 0.0), Vec3(0, 1, 1))
        with caplog.at_level(logging.DEBUG, logger="vecmat.transform.values"):
            values = TransformValues.from_mat4(m)
        assert values.rotation == (0.0, 0.0, 0.0, 1.0)
        assert values.scale[0] == 0.0
        assert "Degenerate scale" in caplog.text

    def test_add_applies_left_first(self):
        """Test a + b applies a, then b."""
        move = TransformValues.from_translation(1, 0, 0)
        turn = TransformValues.from_rotation_axis_angle((0, 0, 1), math.pi / 2)

        moved_then_turned = move + turn
        np.testing.assert_allclose(moved_then_turned.translation, [0, 1, 0], atol=1e-6)

        turned_then_moved = turn + move
        np.testing.assert_allclose(turned_then_moved.translation, [1, 0, 0], atol=1e-6)

    def test_sum(self):
        """Test sum() over a sequence of transforms."""
        steps = [
            TransformValues.from_translation(1, 0, 0),
            TransformValues.from_scale(2.0),
            TransformValues.from_translation(0, 1, 0),
        ]
        total = sum(steps)
        np.testing.assert_allclose(total.translation, [2, 1, 0], atol=1e-6)
        np.testing.assert_allclose(total.scale, [2, 2, 2], rtol=1e-6)

    def test_add_rejects_other_types(self):
        """Test adding a non-transform raises TypeError."""
        with pytest.raises(TypeError):
            TransformValues() + 1.0

    def test_factories(self):
        """Test the single-component factories."""
        assert TransformValues.from_scale(2.0).scale == (2.0, 2.0, 2.0)
        assert TransformValues.from_scale(1.0, 2.0, 3.0).scale == (1.0, 2.0, 3.0)
        assert TransformValues.from_translation(1, 2, 3).translation == (1, 2, 3)
        assert TransformValues.from_rotation_axis_angle((0, 0, 0), 1.0).is_neutral()

        euler = TransformValues.from_rotation_euler(0.1, 0.2, 0.3, "zyx")
        np.testing.assert_array_equal(
            euler.rotation, Quat.from_euler(0.1, 0.2, 0.3, "zyx").array.tolist()
        )

    def test_frozen(self):
        """Test instances are immutable."""
        values = TransformValues()
        with pytest.raises(AttributeError):
            values.scale = (2.0, 2.0, 2.0)


class TestBatchTransforms:
    """Test (N, 3) transforms against per-vector operations."""

    def test_transform_points(self, points, affine4):
        """Test the affine batch transform."""
        expected = _per_point(points, lambda v: v.transform_mat4(affine4))
        np.testing.assert_allclose(transform_points(points, affine4), expected, atol=1e-4)

    def test_transform_points_in_place(self, points, affine4):
        """Test out may be the input array."""
        expected = transform_points(points, affine4)
        result = transform_points(points, affine4, out=points)
        assert result is points
        np.testing.assert_allclose(points, expected, atol=1e-5)

    def test_transform_points_projective(self, points):
        """Test the projective batch transform divides by w."""
        m = Mat4.perspective(math.pi / 3, 1.5, 0.1, 100.0)
        expected = _per_point(points, lambda v: v.transform_mat4(m))
        result = transform_points_projective(points, m)
        np.testing.assert_allclose(result, expected, rtol=1e-4, atol=1e-4)

    def test_projective_zero_w(self):
        """Test w == 0 is treated as 1."""
        m = Mat4.perspective(math.pi / 2, 1.0, 1.0, 10.0)
        result = transform_points_projective(np.array([[1.0, 2.0, 0.0]]), m)
        assert np.all(np.isfinite(result))
        np.testing.assert_allclose(result[0, :2], [1.0, 2.0], atol=1e-6)

    def test_transform_directions(self, points, affine4):
        """Test directions ignore the translation."""
        expected = _per_point(points, lambda v: v.transform_mat4_upper3x3(affine4))
        np.testing.assert_allclose(transform_directions(points, affine4), expected, atol=1e-4)

    def test_rotate_points(self, points, unit_quats):
        """Test quaternion batch rotation."""
        for q in unit_quats[:3]:
            expected = _per_point(points, q.rotate)
            np.testing.assert_allclose(rotate_points(points, q), expected, atol=1e-4)

    def test_rotate_points_in_place(self, points, unit_quats):
        """Test out may be the input array."""
        q = unit_quats[0]
        expected = rotate_points(points, q)
        assert rotate_points(points, q, out=points) is points
        np.testing.assert_allclose(points, expected, atol=1e-6)

    def test_apply_transform_values(self, points):
        """Test TransformValues applied to points equals its matrix."""
        values = TransformValues(
            translation=(1.0, -1.0, 2.0),
            rotation=tuple(Quat.from_euler(0.3, 0.1, -0.2).array.tolist()),
            scale=(2.0, 2.0, 2.0),
        )
        expected = transform_points(points, values.to_mat4())
        np.testing.assert_allclose(apply_transform_values(points, values), expected, atol=1e-5)

    def test_apply_neutral_copies(self, points):
        """Test a neutral transform returns an equal copy."""
        result = apply_transform_values(points, TransformValues())
        assert result is not points
        np.testing.assert_array_equal(result, points)

    @pytest.mark.parametrize("shape", [(4,), (4, 2), (2, 3, 3)])
    def test_rejects_bad_shape(self, affine4, shape):
        """Test non (N, 3) input raises ValueError."""
        with pytest.raises(ValueError, match=r"points must have shape \(N, 3\)"):
            transform_points(np.zeros(shape), affine4)
        with pytest.raises(ValueError, match=r"directions must have shape \(N, 3\)"):
            transform_directions(np.zeros(shape), affine4)

    def test_rejects_bad_out(self, points, unit_quats):
        """Test a wrongly typed out buffer raises ValueError."""
        with pytest.raises(ValueError, match="out must be a float32 array"):
            rotate_points(points, unit_quats[0], out=np.zeros(points.shape, dtype=np.float64))
        with pytest.raises(ValueError, match="out must be a float32 array"):
            transform_points(points, Mat4.identity(), out=np.zeros((3, 3), dtype=np.float32))
