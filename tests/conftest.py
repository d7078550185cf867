"""Shared fixtures for vecmat tests."""

import math

import numpy as np
import pytest

from vecmat import Mat3, Mat4, Quat, Vec3


@pytest.fixture
def rng():
    """Deterministic random generator."""
    return np.random.default_rng(1234)


@pytest.fixture
def affine4():
    """Non-trivial invertible affine Mat4 (T * R * S)."""
    q = Quat.from_axis_angle(Vec3(1, 2, 3).normalize(), 0.7)
    return Mat4.compose(Vec3(1.5, -2.0, 0.25), q, Vec3(2.0, 0.5, 3.0))


@pytest.fixture
def general4():
    """Invertible Mat4 with a non-affine bottom row."""
    return Mat4.row_major(
        2, 0, 1, 3,
        1, 3, 0, -1,
        0, 1, 4, 2,
        1, 0, 0, 5,
    )  # fmt: skip


@pytest.fixture
def general3():
    """Invertible Mat3."""
    return Mat3.row_major(
        2, -1, 0,
        1, 3, 2,
        0, 1, 4,
    )  # fmt: skip


@pytest.fixture
def unit_quats(rng):
    """A handful of random unit quaternions."""
    quats = []
    for _ in range(6):
        axis = Vec3.random(1.0, rng)
        quats.append(Quat.from_axis_angle(axis, float(rng.uniform(-math.pi, math.pi))))
    return quats
