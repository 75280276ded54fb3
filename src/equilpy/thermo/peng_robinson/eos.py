"""This module contains the Peng-Robinson EoS as a residual Helmholtz model for
equilibrium computations.

The functions provided here are building on lambdified expressions created using
:mod:`sympy`, which can optionally be just-in-time compiled using :mod:`numba`.

"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Sequence

import numba as nb
import numpy as np

from ...utils.logging import time_logger
from .._core import NUMBA_FAST_MATH, R_IDEAL_MOL
from ..materials import FluidComponent
from ..model import ResidualHelmholtzModel
from ..utils import ConstructionError
from .eos_symbolic import SymbolicPengRobinsonHelmholtz

__all__ = [
    "PengRobinsonHelmholtz",
]


logger = logging.getLogger(__name__)

module_sections = ["models"]


def _compile_scalar_function(
    f: Callable[[float, np.ndarray], float],
) -> Callable[[float, np.ndarray], float]:
    """Helper function to compile a scalar function of temperature and component
    densities, enforcing the signature ``(float64, float64[:]) -> float64``."""
    return nb.njit(nb.f8(nb.f8, nb.f8[:]), fastmath=NUMBA_FAST_MATH)(f)


def _compile_vector_function(
    df: Callable[[float, np.ndarray], list[float]],
) -> Callable[[float, np.ndarray], np.ndarray]:
    """Helper function to compile a vector-valued function of temperature and
    component densities.

    This helper function ensures that the return value is wrapped in an array, and not
    a list (as by default returned when using sympy.lambdify).

    It also enforces a signature ``(float64, float64[:]) -> float64[:]``

    """
    df_c = nb.njit(df, fastmath=NUMBA_FAST_MATH)

    @nb.njit(nb.f8[:](nb.f8, nb.f8[:]), fastmath=NUMBA_FAST_MATH)
    def inner(T_, rho_):
        return np.array(df_c(T_, rho_), dtype=np.float64)

    return inner


class PengRobinsonHelmholtz(ResidualHelmholtzModel):
    """Residual Helmholtz model using the Peng-Robinson EoS with van der Waals mixing.

    Derivatives are exact, obtained by symbolic differentiation of the residual
    Helmholtz energy density (see
    :class:`~equilpy.thermo.peng_robinson.eos_symbolic.SymbolicPengRobinsonHelmholtz`).

    Upon instantiation, the lambdified functions are used directly with numpy
    arrays. Calling :meth:`compile` replaces them with numba-compiled versions, which
    pays off for many evaluations.

    Parameters:
        components: A sequence of ``num_comp`` components.
        bip_matrix: ``default=None``

            A 2D array containing BIPs for ``components``. Note that only the upper
            triangle of this matrix is used.
        R: ``default=R_IDEAL_MOL``

            Gas constant of the model.

    Raises:
        ConstructionError: If the BIP matrix is not of shape
            ``(num_comp, num_comp)``.

    """

    def __init__(
        self,
        components: Sequence[FluidComponent],
        bip_matrix: Optional[np.ndarray] = None,
        R: float = R_IDEAL_MOL,
    ) -> None:
        super().__init__(components, R=R)

        if bip_matrix is not None:
            bip_matrix = np.asarray(bip_matrix, dtype=np.float64)
            if bip_matrix.shape != (self._nc, self._nc):
                raise ConstructionError(
                    f"BIP matrix must be of shape {(self._nc, self._nc)}, "
                    + f"got {bip_matrix.shape}."
                )

        logger.info(
            f"Creating symbolic {self._nc}-component Peng-Robinson Helmholtz model .."
        )
        start = time.time()

        self.symbolic = SymbolicPengRobinsonHelmholtz(components, bip_matrix, self.R)
        """Symbolic representation of the EoS, providing expressions and derivatives
        which are turned into functions."""

        self._funcs: dict[str, Callable] = {
            "Psir": self.symbolic.Psir_func,
            "dPsir": self.symbolic.grad_rho_Psir_func,
            "d2Psir": self.symbolic.hess_rho_Psir_func,
            "dTdPsir": self.symbolic.dT_grad_rho_Psir_func,
            "alphar": self.symbolic.alphar_func,
            "Ar10": self.symbolic.Ar10_func,
        }
        """Functions evaluating the residual Helmholtz energy and its derivatives.
        Replaced by compiled versions in :meth:`compile`."""

        self._is_compiled: bool = False

        logger.info(
            f"{self._nc}-component Peng-Robinson Helmholtz model created"
            + " (elapsed time: %.5f (s))." % (time.time() - start)
        )

    @property
    def is_compiled(self) -> bool:
        """Flag indicating whether :meth:`compile` was called."""
        return self._is_compiled

    @time_logger(sections=module_sections)
    def compile(self) -> None:
        """Compiles the lambdified functions using numba.

        Compilation is done only once, subsequent calls have no effect.

        """
        if self._is_compiled:
            return

        logger.info("Compiling symbolic Peng-Robinson Helmholtz model ..")
        start = time.time()

        Psir_c = _compile_scalar_function(self._funcs["Psir"])
        logger.debug("Compiling symbolic functions 1/6")
        dPsir_c = _compile_vector_function(self._funcs["dPsir"])
        logger.debug("Compiling symbolic functions 2/6")
        d2Psir_c = _compile_vector_function(self._funcs["d2Psir"])
        logger.debug("Compiling symbolic functions 3/6")
        dTdPsir_c = _compile_vector_function(self._funcs["dTdPsir"])
        logger.debug("Compiling symbolic functions 4/6")
        alphar_c = _compile_scalar_function(self._funcs["alphar"])
        logger.debug("Compiling symbolic functions 5/6")
        Ar10_c = _compile_scalar_function(self._funcs["Ar10"])
        logger.debug("Compiling symbolic functions 6/6")

        self._funcs.update(
            {
                "Psir": Psir_c,
                "dPsir": dPsir_c,
                "d2Psir": d2Psir_c,
                "dTdPsir": dTdPsir_c,
                "alphar": alphar_c,
                "Ar10": Ar10_c,
            }
        )
        self._is_compiled = True

        logger.info(
            f"{self._nc}-component Peng-Robinson Helmholtz model compiled"
            + " (elapsed time: %.5f (s))." % (time.time() - start)
        )

    def build_Psir_fgradHessian(
        self, T: float, rhovec: np.ndarray
    ) -> tuple[float, np.ndarray, np.ndarray]:
        rhovec = np.ascontiguousarray(rhovec, dtype=np.float64)
        T = float(T)
        Psir = float(self._funcs["Psir"](T, rhovec))
        grad = np.array(self._funcs["dPsir"](T, rhovec), dtype=np.float64)
        hess = np.array(self._funcs["d2Psir"](T, rhovec), dtype=np.float64).reshape(
            (self._nc, self._nc)
        )
        return Psir, grad, hess

    def get_Ar00(self, T: float, rho: float, molefrac: np.ndarray) -> float:
        rhovec = np.ascontiguousarray(rho * np.asarray(molefrac), dtype=np.float64)
        return float(self._funcs["alphar"](float(T), rhovec))

    def get_Ar10(self, T: float, rho: float, molefrac: np.ndarray) -> float:
        rhovec = np.ascontiguousarray(rho * np.asarray(molefrac), dtype=np.float64)
        return float(self._funcs["Ar10"](float(T), rhovec))

    def build_d2PsirdTdrhoi(self, T: float, rhovec: np.ndarray) -> np.ndarray:
        rhovec = np.ascontiguousarray(rhovec, dtype=np.float64)
        return np.array(self._funcs["dTdPsir"](float(T), rhovec), dtype=np.float64)
