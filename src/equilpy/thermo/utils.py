"""Contains utility functions for the thermodynamic subpackage, as well as the custom
exception classes raised by the equilibrium framework."""

from __future__ import annotations

from typing import Sequence, TypeVar, cast

__all__ = [
    "safe_sum",
    "EquilibriumError",
    "ConstructionError",
    "CallInputError",
    "InternalInvariantError",
]


class EquilibriumError(Exception):
    """Base class for errors raised in the set-up or evaluation of equilibrium
    systems."""


class ConstructionError(EquilibriumError, ValueError):
    """Raised at construction of an equilibrium system or a thermodynamic model, if the
    passed data is inconsistent.

    Examples are mismatching numbers of phase fractions and density vectors, density
    vectors of different lengths, or a number of specification equations other than
    two.

    """


class CallInputError(EquilibriumError, ValueError):
    """Raised when an evaluation is called with invalid input, e.g. a vector of
    unknowns with the wrong size."""


class InternalInvariantError(EquilibriumError, RuntimeError):
    """Raised when an internal invariant of the assembly is violated.

    This indicates a defect and not a user error. It is never caught inside equilpy.

    """


_Addable = TypeVar("_Addable")
"""A type variable representing any type supporting the + overload.

Note:
    Used in :func:`safe_sum` to state that the return value type is the same as the
    argument type.

"""


def safe_sum(x: Sequence[_Addable]) -> _Addable:
    """Safely sum the elements, without creating a first addition with 0.

    Important for symbolic expressions to avoid trivial terms.

    Parameters:
        x: A sequence of any objects which support the ``+`` operation.

    Returns:
        The sum of ``x``.

    """
    if len(x) >= 1:
        sum_ = x[0]
        for i in range(1, len(x)):
            sum_ = sum_ + x[i]  # type: ignore[operator]
        return sum_
    else:
        return cast(_Addable, 0)
