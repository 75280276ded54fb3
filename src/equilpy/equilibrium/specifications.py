"""Module containing specification equations, which close the generalized phase
equilibrium system.

The equilibrium conditions (equality of fugacities and pressures, mass balances and
the unity of phase fractions) leave two degrees of freedom. Two specification
equations must be provided to obtain a square system, e.g. fixed temperature and
pressure.

Every specification contributes one residual and one row of the Jacobian.
New specifications are created by deriving from :class:`AbstractSpecification`.

"""

from __future__ import annotations

import abc
from dataclasses import dataclass

import numpy as np

from ..thermo.utils import CallInputError

__all__ = [
    "SpecificationSidecar",
    "AbstractSpecification",
    "TSpecification",
    "PSpecification",
    "BetaSpecification",
    "MolarVolumeSpecification",
]


@dataclass(frozen=True)
class SpecificationSidecar:
    """Data computed during the assembly of an equilibrium system, which is shared with
    specification equations to avoid recomputation.

    Important:
        A sidecar is created for one evaluation of the equilibrium system and must not
        be stored by a specification. Its arrays are owned by the assembly.

    """

    Nphases: int
    """Number of phases."""

    Ncomponents: int
    """Number of components."""

    Nindependent: int
    """Size of the vector of unknowns."""

    p_phase0: float
    """Pressure in the first phase."""

    dpdT_phase0: float
    """Derivative of the pressure in the first phase w.r.t. temperature."""

    dpdrho_phase0: np.ndarray
    """Derivatives of the pressure in the first phase w.r.t. its component densities,
    ``shape=(Ncomponents,)``."""


class AbstractSpecification(abc.ABC):
    """Abstract base class for specification equations.

    A specification is closed over its target value(s) and is stateless across
    evaluations.

    """

    @abc.abstractmethod
    def r_Jacobian(
        self, x: np.ndarray, sidecar: SpecificationSidecar
    ) -> tuple[float, np.ndarray]:
        """Evaluates the specification equation.

        Parameters:
            x: ``shape=(sidecar.Nindependent,)``

                The vector of unknowns (see :mod:`~equilpy.equilibrium.variables`).
            sidecar: Quantities already computed in the assembly.

        Returns:
            A 2-tuple containing the residual and the row of the Jacobian with
            ``shape=(sidecar.Nindependent,)``.

        """
        ...


class TSpecification(AbstractSpecification):
    """Specification of temperature.

    Parameters:
        T: Target temperature.

    """

    def __init__(self, T: float) -> None:
        self._Tspec: float = float(T)

    def __repr__(self) -> str:
        return f"TSpecification(T={self._Tspec})"

    def r_Jacobian(
        self, x: np.ndarray, sidecar: SpecificationSidecar
    ) -> tuple[float, np.ndarray]:
        r = x[0] - self._Tspec
        J = np.zeros(x.shape[0])
        J[0] = 1.0
        return float(r), J


class PSpecification(AbstractSpecification):
    """Specification of pressure.

    The pressure of the first phase is used, but which phase is picked does not matter
    since all phases have the same pressure at mechanical equilibrium.

    Parameters:
        p: Target pressure.

    """

    def __init__(self, p: float) -> None:
        self._pspec: float = float(p)

    def __repr__(self) -> str:
        return f"PSpecification(p={self._pspec})"

    def r_Jacobian(
        self, x: np.ndarray, sidecar: SpecificationSidecar
    ) -> tuple[float, np.ndarray]:
        r = sidecar.p_phase0 - self._pspec
        J = np.zeros(x.shape[0])
        J[0] = sidecar.dpdT_phase0
        J[1 : 1 + sidecar.Ncomponents] = sidecar.dpdrho_phase0
        return float(r), J


class BetaSpecification(AbstractSpecification):
    """Specification of the molar fraction of a phase.

    Parameters:
        beta: Target phase fraction.
        iphase: Index of the phase.

    """

    def __init__(self, beta: float, iphase: int) -> None:
        self._betaspec: float = float(beta)
        self._iphase: int = int(iphase)

    def __repr__(self) -> str:
        return f"BetaSpecification(beta={self._betaspec}, iphase={self._iphase})"

    def r_Jacobian(
        self, x: np.ndarray, sidecar: SpecificationSidecar
    ) -> tuple[float, np.ndarray]:
        if not 0 <= self._iphase < sidecar.Nphases:
            raise CallInputError(
                f"Phase index {self._iphase} out of range for {sidecar.Nphases} phases."
            )
        idx = x.shape[0] - sidecar.Nphases + self._iphase
        r = x[idx] - self._betaspec
        J = np.zeros(x.shape[0])
        J[idx] = 1.0
        return float(r), J


class MolarVolumeSpecification(AbstractSpecification):
    """Specification of the overall molar volume
    :math:`v = \\sum_j \\frac{\\beta_j}{\\rho_j}`, where :math:`\\rho_j` is the total
    density of phase :math:`j`.

    Parameters:
        v: Target molar volume.

    """

    def __init__(self, v: float) -> None:
        self._vspec: float = float(v)

    def __repr__(self) -> str:
        return f"MolarVolumeSpecification(v={self._vspec})"

    def r_Jacobian(
        self, x: np.ndarray, sidecar: SpecificationSidecar
    ) -> tuple[float, np.ndarray]:
        nphase = sidecar.Nphases
        ncomp = sidecar.Ncomponents
        n = x.shape[0]
        betas = x[n - nphase :]

        J = np.zeros(n)
        v = 0.0
        for j in range(nphase):
            rho_j = x[1 + j * ncomp : 1 + (j + 1) * ncomp].sum()
            v += betas[j] / rho_j
            J[n - nphase + j] = 1.0 / rho_j
            J[1 + j * ncomp : 1 + (j + 1) * ncomp] = -betas[j] / rho_j**2
        return float(v - self._vspec), J
