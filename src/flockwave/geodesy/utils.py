"""Utility functions for comparing floating point numbers."""

from math import isinf, isnan

from .constants import DEFAULT_PRECISION

__all__ = (
    "is_approximately_equal",
    "is_smaller",
    "is_zero",
    "is_negative",
    "is_positive",
)


def is_approximately_equal(
    a: float, b: float, delta: float = DEFAULT_PRECISION
) -> bool:
    """Returns whether two floating point numbers are equal within a given
    relative precision.

    NaN is considered equal to NaN only, and an infinite value is considered
    equal to any other infinite value. When one of the numbers is zero, the
    precision is treated as an absolute one.

    Parameters:
        a: the first number
        b: the second number
        delta: the relative precision of the comparison

    Returns:
        whether the two numbers are approximately equal
    """
    if isnan(a):
        return isnan(b)
    if isinf(a):
        return isinf(b)
    if a == b:
        return True

    scale = 1.0
    if a != 0.0 and b != 0.0:
        scale = max(abs(a), abs(b))

    return abs(a - b) <= scale * delta


def is_smaller(a: float, b: float, delta: float = DEFAULT_PRECISION) -> bool:
    """Returns whether the first number is smaller than the second one and
    the two numbers are not approximately equal.
    """
    if is_approximately_equal(a, b, delta):
        return False
    return a < b


def is_zero(value: float) -> bool:
    return value == 0.0


def is_negative(value: float) -> bool:
    return value < 0.0


def is_positive(value: float) -> bool:
    return value > 0.0
