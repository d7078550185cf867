"""Parameter validation decorators and helpers.

Input-validation failures are the only errors raised by vecmat: numerical
degeneracies (zero-length normalize, singular inverse, ...) have documented
fallback values instead. Every failure is surfaced immediately as a
``ValueError`` (bad value) or ``TypeError`` (bad type) naming the parameter.

Example:
    >>> class Mat4:
    ...     @validate_range(0, 2, "axis")
    ...     def get_axis(self, axis: int): ...
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Collection, Sized
from numbers import Integral, Real
from typing import Any

_SUGGESTIONS = {
    "axis": "Use 0 for the x column, 1 for y, 2 for z",
    "order": "Orders name the axes in application order, e.g. 'xyz'",
}


def _suggestion(name: str) -> str:
    hint = _SUGGESTIONS.get(name)
    return f" ({hint})" if hint else ""


def _extract(args: tuple, kwargs: dict, name: str, param_index: int) -> tuple[bool, Any]:
    if name in kwargs:
        return True, kwargs[name]
    if len(args) > param_index:
        return True, args[param_index]
    return False, None


def check_range(
    value: Any, min_value: float, max_value: float, name: str, integer: bool = False
) -> None:
    """Raise if ``value`` is not a number within ``[min_value, max_value]``.

    :param value: Value to check
    :param min_value: Inclusive lower bound
    :param max_value: Inclusive upper bound
    :param name: Parameter name used in the error message
    :param integer: Require an integral value (indices), so ``1.5`` is rejected
        rather than truncated
    :raises TypeError: If value is not a real number, or not integral when
        ``integer`` is set
    :raises ValueError: If value is outside the range
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"{name} must be a number, got {type(value).__name__}")
    if integer and not isinstance(value, Integral):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if not min_value <= value <= max_value:
        raise ValueError(
            f"{name}={value} is outside valid range [{min_value}, {max_value}]"
            f"{_suggestion(name)}"
        )


def check_choice(value: Any, choices: Collection[str], name: str) -> None:
    """Raise if ``value`` is not one of ``choices``.

    :param value: Value to check
    :param choices: Accepted values
    :param name: Parameter name used in the error message
    :raises ValueError: If value is not an accepted choice
    """
    if value not in choices:
        options = ", ".join(sorted(choices))
        raise ValueError(
            f'{name}="{value}" is not valid. Valid options: {options}{_suggestion(name)}'
        )


def check_length(values: Sized, expected: int, name: str) -> None:
    """Raise if ``values`` does not hold exactly ``expected`` elements.

    :param values: Sequence or array to check
    :param expected: Required number of elements
    :param name: Parameter name used in the error message
    :raises ValueError: If the length differs
    """
    n = len(values)
    if n != expected:
        raise ValueError(f"{name} must contain exactly {expected} floats, got {n}")


def validate_range(
    min_value: float, max_value: float, name: str, param_index: int = 1, integer: bool = False
) -> Callable:
    """Decorator validating that a numeric parameter lies in a closed range.

    :param min_value: Inclusive lower bound
    :param max_value: Inclusive upper bound
    :param name: Parameter name (also looked up in kwargs)
    :param param_index: Positional index of the parameter (0 is ``self``)
    :param integer: Require an integral value, see :func:`check_range`
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            found, value = _extract(args, kwargs, name, param_index)
            if found:
                check_range(value, min_value, max_value, name, integer)
            return func(*args, **kwargs)

        return wrapper

    return decorator


def validate_type(expected: type | tuple[type, ...], name: str, param_index: int = 1) -> Callable:
    """Decorator validating a parameter's type with ``isinstance``.

    Works with runtime-checkable protocols as well as concrete classes.

    :param expected: Type or tuple of accepted types
    :param name: Parameter name (also looked up in kwargs)
    :param param_index: Positional index of the parameter (0 is ``self``)
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            found, value = _extract(args, kwargs, name, param_index)
            if found and not isinstance(value, expected):
                if isinstance(expected, tuple):
                    names = ", ".join(t.__name__ for t in expected)
                    raise TypeError(
                        f"{name} must be one of ({names}), got {type(value).__name__}"
                    )
                raise TypeError(
                    f"{name} must be {expected.__name__}, got {type(value).__name__}"
                )
            return func(*args, **kwargs)

        return wrapper

    return decorator


def validate_choices(choices: Collection[str], name: str, param_index: int = 1) -> Callable:
    """Decorator validating that a parameter is one of a fixed set of strings.

    :param choices: Accepted values
    :param name: Parameter name (also looked up in kwargs)
    :param param_index: Positional index of the parameter (0 is ``self``)
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            found, value = _extract(args, kwargs, name, param_index)
            if found:
                check_choice(value, choices, name)
            return func(*args, **kwargs)

        return wrapper

    return decorator
