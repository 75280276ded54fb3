"""Module containing a finite-difference approximation of the Jacobian of equilibrium
systems.

It is intended for verification of the exact Jacobian only, since it requires
``2 * Nindependent`` additional evaluations of the residual.

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import numpy as np

from ..thermo.utils import CallInputError
from ..utils.equilpy_types import VectorLike
from ..utils.logging import time_logger

if TYPE_CHECKING:
    from .phase_equilibrium import GeneralizedPhaseEquilibrium

__all__ = [
    "DEFAULT_STEP",
    "num_Jacobian",
    "compare_jacobians",
]


logger = logging.getLogger(__name__)

module_sections = ["verification"]

DEFAULT_STEP: float = 1e-6
"""Step size used for variables without a given (non-zero) perturbation."""


@time_logger(sections=module_sections)
def num_Jacobian(
    system: GeneralizedPhaseEquilibrium,
    x: VectorLike,
    dx: Optional[VectorLike] = None,
) -> np.ndarray:
    """Computes the Jacobian of an equilibrium system column-wise using central
    differences of the residual.

    After return, the buffers of ``system`` contain the evaluation at ``x``.

    Parameters:
        system: An equilibrium system.
        x: ``shape=(Nindependent,)``

            Point at which the Jacobian is approximated. It is not modified.
        dx: ``default=None``

            Perturbations per variable. Zero entries are replaced by
            :data:`DEFAULT_STEP`. If not given, :data:`DEFAULT_STEP` is used for all
            variables.

    Raises:
        CallInputError: If ``x`` or ``dx`` are not of size ``system.Nindependent``.

    Returns:
        The approximated Jacobian with ``shape=(Nindependent, Nindependent)``.

    """
    n = system.Nindependent
    x = np.array(x, dtype=np.float64)
    if x.shape != (n,):
        raise CallInputError(f"Wrong size; should be of size {n}; is of size {x.size}")
    if dx is None:
        dx = np.zeros(n)
    else:
        dx = np.asarray(dx, dtype=np.float64)
        if dx.shape != (n,):
            raise CallInputError(
                f"Wrong size of perturbations; should be of size {n}; is of size "
                + f"{dx.size}"
            )

    J = np.empty((n, n))
    for i in range(n):
        h = dx[i] if dx[i] != 0 else DEFAULT_STEP
        xplus = x.copy()
        xplus[i] += h
        xminus = x.copy()
        xminus[i] -= h
        rplus = system.call(xplus).r.copy()
        rminus = system.call(xminus).r.copy()
        J[:, i] = (rplus - rminus) / (2 * h)

    system.call(x)
    logger.debug(f"Approximated {n}x{n} Jacobian by central differences.")
    return J


def compare_jacobians(J: np.ndarray, J_num: np.ndarray) -> float:
    """Returns the maximal deviation between two Jacobians, relative to the largest
    absolute entry in each row of ``J``.

    Rows of ``J`` with only zero entries are compared absolutely.

    """
    J = np.asarray(J)
    J_num = np.asarray(J_num)
    if J.shape != J_num.shape:
        raise ValueError(f"Shapes of Jacobians differ: {J.shape} and {J_num.shape}.")
    scale = np.abs(J).max(axis=1)
    scale[scale == 0.0] = 1.0
    return float((np.abs(J - J_num).max(axis=1) / scale).max())
