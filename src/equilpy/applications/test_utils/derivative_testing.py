"""Module containing functionality for testing the implementation of derivatives of a
function."""

from __future__ import annotations

import logging
from typing import Callable

import numpy as np

__all__ = [
    "get_EOC_taylor",
    "assert_order_at_least",
]


logger = logging.getLogger(__name__)


def get_EOC_taylor(
    func: Callable[[np.ndarray], np.ndarray | float],
    dfunc: Callable[[np.ndarray], np.ndarray],
    x0: np.ndarray,
    d: np.ndarray,
    h: np.ndarray,
    tol: float = 1e-14,
) -> np.ndarray:
    """Estimate the order of convergence (EOC) of the derivative
    computation of ``func`` at point ``x0`` along direction ``d`` using Taylor
    expansion.

    The EOC is estimated by computing the error between the exact function value and
    the first-order Taylor approximation for a sequence of step sizes. For exact
    derivatives, the order is 2.

    ``dfunc`` should return a 2D array with shape (m, n) where m is the number of
    function outputs and n is the size of ``x0`` (or a 1D array of size n for scalar
    functions).

    Parameters:
        func: Function for which the derivative is computed, taking a vector.
        dfunc: Function computing the derivative of `func`.
        x0: Point at which the derivative is computed.
        d: Direction along which the derivative is computed.
        h: Array of decreasing step sizes to use for the Taylor expansion.
        tol: Tolerance below which errors are considered zero
            (i.e., exact approximation).

    Returns:
        Estimated EOC values for each consecutive pair of step sizes.

    """
    # Norming direction for sensible scaling.
    d = d / np.linalg.norm(d)

    f0 = np.asarray(func(x0))
    df0 = np.asarray(dfunc(x0))

    errorlist = []
    for h_ in h:
        approx = f0 + h_ * (df0 @ d)
        exact = np.asarray(func(x0 + h_ * d))
        error = float(np.linalg.norm(exact - approx))
        # If errors are small, their ratios can falsely indicate order loss due to
        # floating point arithmetics.
        if error < tol:
            error = 0.0
        errorlist.append(error)

    errors = np.array(errorlist)
    h_ratios = h[1:] / h[:-1]

    error_ratios = np.full_like(errors[1:], np.nan)
    mask = errors[:-1] > tol
    error_ratios[mask] = errors[1:][mask] / errors[:-1][mask]

    orders = np.full_like(error_ratios, np.inf)
    finite_mask = np.isfinite(error_ratios) & (error_ratios > tol)
    orders[finite_mask] = np.log(error_ratios[finite_mask]) / np.log(
        h_ratios[finite_mask]
    )

    logger.debug(f"Taylor errors {errors}, estimated orders {orders}.")

    return orders


def assert_order_at_least(
    orders: np.ndarray,
    expected_order: float,
    tol: float = 0.1,
    err_msg: str = "",
    asymptotic: int | None = None,
) -> None:
    """Asserts that the average of the estimated orders are at least the expected order
    minus a tolerance.

    If orders are negative or nan, an error is raised.
    Order values of + infinity are treated as an exact approximation and treated as the
    expected order.

    Parameters:
        orders: List of order values, error ratios divided by refinement ratios.
        expected_order: The value of the expected (average) order value.
        tol: Tolerance for expected order for numerical reasons.
        err_msg: Message appended to raised errors.
        asymptotic: If given as an integer ``n``, uses only the last ``n`` values.
            This is to be used for problems which are only asymptotically
            convergent and increasing errors are expected for coarse refinements.

    """
    orders = np.array(orders, dtype=np.float64)
    if isinstance(asymptotic, int):
        orders = orders[-asymptotic:]

    if np.any(orders < 0):
        raise ValueError(f"Negative orders, method DIVERGENT: {err_msg}")
    if np.any(np.isnan(orders)):
        raise ValueError(f"Estimated orders contain NAN values: {err_msg}")

    # If order all inf, we have an exact approximation.
    if not np.all(np.isinf(orders)):
        orders[np.isinf(orders)] = expected_order
        order_avg = np.mean(orders)
        assert order_avg >= expected_order - tol, (
            f"Expected all orders to be at least {expected_order - tol}, "
            f"but got {order_avg}: {err_msg}"
        )
