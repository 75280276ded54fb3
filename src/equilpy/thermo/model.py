"""Module containing the interface between thermodynamic models and the equilibrium
framework.

Equilibrium systems consume derivatives of the residual Helmholtz energy density
:math:`\\Psi^r(T, \\rho_1, \\ldots, \\rho_n) = \\rho R T \\alpha^r`, where
:math:`\\rho_i` are molar concentrations of components (component densities),
:math:`\\rho = \\sum_i \\rho_i` and :math:`\\alpha^r` the residual reduced Helmholtz
energy.

"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ._core import R_IDEAL_MOL
from .materials import FluidComponent
from .utils import ConstructionError

__all__ = [
    "ResidualHelmholtzModel",
]


class ResidualHelmholtzModel:
    """Thermodynamic model class defining the interface between the state of a phase
    given by temperature and component densities, and the derivatives of the residual
    Helmholtz energy required for equilibrium computations.

    Component properties required for computations can be extracted in the constructor.

    Note:
        The base class can be instantiated without providing concrete computations.
        All derivative methods raise a :obj:`NotImplementedError`.

        Derivatives are expected to be exact (automatic or symbolic differentiation),
        since they enter the Jacobian of the equilibrium system.

    Parameters:
        components: A sequence of components for which the model is instantiated.
        R: ``default=R_IDEAL_MOL``

            The gas constant used by the model, in ``[J / K mol]``.

    Raises:
        ConstructionError: If no components passed.

    """

    def __init__(
        self, components: Sequence[FluidComponent], R: float = R_IDEAL_MOL
    ) -> None:
        self._nc: int = len(components)
        """Number of components passed at instantiation."""

        if self._nc == 0:
            raise ConstructionError("Cannot create a model with no components.")

        self.components: tuple[FluidComponent, ...] = tuple(components)
        """Components passed at instantiation."""

        self.R: float = float(R)
        """Gas constant of the model."""

    @property
    def num_components(self) -> int:
        """Number of components the model was created for."""
        return self._nc

    def get_R(self, molefrac: np.ndarray) -> float:
        """Returns the gas constant of the mixture.

        The base model uses one gas constant for all compositions.

        Parameters:
            molefrac: ``shape=(num_components,)``

                Mole fractions of the mixture.

        """
        return self.R

    def build_Psir_fgradHessian(
        self, T: float, rhovec: np.ndarray
    ) -> tuple[float, np.ndarray, np.ndarray]:
        """Computes the residual Helmholtz energy density :math:`\\Psi^r`, its gradient
        and its Hessian w.r.t. component densities.

        Parameters:
            T: Temperature.
            rhovec: ``shape=(num_components,)``

                Component densities (molar concentrations).

        Returns:
            A 3-tuple containing the value of :math:`\\Psi^r`, the gradient with
            ``shape=(num_components,)`` and the Hessian with
            ``shape=(num_components, num_components)``.

        """
        raise NotImplementedError("Call to generic base class method.")

    def get_Ar00(self, T: float, rho: float, molefrac: np.ndarray) -> float:
        """Returns the residual reduced Helmholtz energy :math:`\\alpha^r`.

        Parameters:
            T: Temperature.
            rho: Total molar density.
            molefrac: ``shape=(num_components,)``

                Mole fractions.

        """
        raise NotImplementedError("Call to generic base class method.")

    def get_Ar10(self, T: float, rho: float, molefrac: np.ndarray) -> float:
        """Returns :math:`-T\\frac{\\partial \\alpha^r}{\\partial T}` at constant
        density and composition.

        Parameters:
            T: Temperature.
            rho: Total molar density.
            molefrac: ``shape=(num_components,)``

                Mole fractions.

        """
        raise NotImplementedError("Call to generic base class method.")

    def build_d2PsirdTdrhoi(self, T: float, rhovec: np.ndarray) -> np.ndarray:
        """Computes the mixed derivatives
        :math:`\\frac{\\partial^2 \\Psi^r}{\\partial T \\partial \\rho_i}`.

        Parameters:
            T: Temperature.
            rhovec: ``shape=(num_components,)``

                Component densities.

        Returns:
            An array with ``shape=(num_components,)``.

        """
        raise NotImplementedError("Call to generic base class method.")

    def get_pressure(self, T: float, rhovec: np.ndarray) -> float:
        """Computes the pressure of a phase using the residual Helmholtz energy

        :math:`p = \\rho R T - \\Psi^r + \\sum_i \\rho_i
        \\frac{\\partial \\Psi^r}{\\partial \\rho_i}`.

        """
        rhovec = np.asarray(rhovec, dtype=np.float64)
        rho = rhovec.sum()
        Psir, grad, _ = self.build_Psir_fgradHessian(T, rhovec)
        return rho * self.get_R(rhovec / rho) * T - Psir + float(rhovec @ grad)
