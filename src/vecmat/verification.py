"""Assertion helpers for the algebraic laws of vecmat types.

This module provides utilities for verifying that operations honour the
destination contract and the basic matrix identities. They raise
``AssertionError`` with a descriptive message and are used by the test-suite.

Example:
    >>> from vecmat.verification import TransformVerifier
    >>>
    >>> m = Mat4.translation(Vec3(1, 2, 3)).rotate_y(0.5)
    >>> TransformVerifier.assert_inverse_law(m)
    >>>
    >>> # Writing into the receiver must match writing into a fresh value
    >>> TransformVerifier.assert_alias_safe("rotate_x", m, 0.25)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from vecmat.base import FloatBuffer
    from vecmat.matrix import Mat3, Mat4

logger = logging.getLogger(__name__)


class TransformVerifier:
    """Utilities for verifying vecmat operations."""

    @staticmethod
    def assert_close(
        actual: FloatBuffer,
        expected: FloatBuffer,
        rtol: float = 1e-5,
        atol: float = 1e-6,
        err_msg: str = "",
    ) -> None:
        """Assert two values of the same type have matching storage.

        :param actual: Computed value
        :param expected: Reference value
        :param rtol: Relative tolerance for comparison
        :param atol: Absolute tolerance for comparison
        :param err_msg: Extra context for the failure message
        :raises AssertionError: If types or components differ
        """
        if type(actual) is not type(expected):
            raise AssertionError(
                f"Type mismatch: {type(actual).__name__} vs {type(expected).__name__}"
            )
        np.testing.assert_allclose(actual.array, expected.array, rtol=rtol, atol=atol, err_msg=err_msg)

    @staticmethod
    def assert_alias_safe(method: str, value: FloatBuffer, *args, atol: float = 1e-6) -> None:
        """Assert ``value.method(*args, dst=value)`` equals the freshly allocated result.

        :param method: Method name, e.g. ``"inverse"`` or ``"multiply"``
        :param value: Receiver (left untouched; copies are used)
        :param args: Remaining positional arguments of the method
        :param atol: Absolute tolerance for comparison
        :raises AssertionError: If the aliased result differs or is not the destination
        """
        fresh = getattr(value.copy(), method)(*args)
        target = value.copy()
        returned = getattr(target, method)(*args, dst=target)

        if returned is not target:
            raise AssertionError(f"{method}(dst=self) returned a new object instead of dst")
        np.testing.assert_allclose(
            target.array,
            fresh.array,
            atol=atol,
            err_msg=f"{type(value).__name__}.{method} differs when dst aliases the receiver",
        )
        logger.debug("[TransformVerifier] %s.%s is alias safe", type(value).__name__, method)

    @staticmethod
    def assert_operand_alias_safe(
        method: str, value: FloatBuffer, operand: FloatBuffer, *args, atol: float = 1e-6
    ) -> None:
        """Assert ``value.method(operand, *args, dst=operand)`` equals the fresh result.

        :param method: Method name taking ``operand`` as first argument
        :param value: Receiver
        :param operand: First argument, also used as destination (copies are used)
        :param args: Remaining positional arguments of the method
        :param atol: Absolute tolerance for comparison
        :raises AssertionError: If the aliased result differs
        """
        fresh = getattr(value, method)(operand.copy(), *args)
        target = operand.copy()
        returned = getattr(value, method)(target, *args, dst=target)

        if returned is not target:
            raise AssertionError(f"{method}(dst=operand) returned a new object instead of dst")
        np.testing.assert_allclose(
            target.array,
            fresh.array,
            atol=atol,
            err_msg=f"{type(value).__name__}.{method} differs when dst aliases the operand",
        )

    @staticmethod
    def assert_inverse_law(m: Mat3 | Mat4, atol: float = 1e-5) -> None:
        """Assert ``m * m^-1`` and ``m^-1 * m`` are the identity.

        :param m: Non-singular matrix
        :param atol: Absolute tolerance for comparison
        :raises AssertionError: If either product deviates from identity
        """
        inv = m.inverse()
        identity = type(m).identity()
        for name, product in (("m * inv", m.multiply(inv)), ("inv * m", inv.multiply(m))):
            np.testing.assert_allclose(
                product.array,
                identity.array,
                atol=atol,
                err_msg=f"{name} is not the identity for det={m.determinant():g}",
            )

    @staticmethod
    def assert_determinant_multiplicative(
        a: Mat3 | Mat4, b: Mat3 | Mat4, rtol: float = 1e-4, atol: float = 1e-5
    ) -> None:
        """Assert ``det(a * b) == det(a) * det(b)``.

        :param a: Left matrix
        :param b: Right matrix of the same type
        :param rtol: Relative tolerance for comparison
        :param atol: Absolute tolerance for comparison
        :raises AssertionError: If the determinants disagree
        """
        lhs = a.multiply(b).determinant()
        rhs = a.determinant() * b.determinant()
        np.testing.assert_allclose(
            lhs, rhs, rtol=rtol, atol=atol, err_msg="det(a * b) != det(a) * det(b)"
        )

    @staticmethod
    def summary(value: FloatBuffer) -> str:
        """Get a short string summary of a value.

        :param value: Any vecmat value
        :return: Summary string

        Example:
            >>> TransformVerifier.summary(Mat4.identity())
            'Mat4[16] finite=True'
        """
        finite = bool(np.all(np.isfinite(value.array)))
        return f"{type(value).__name__}[{value.SIZE}] finite={finite}"
