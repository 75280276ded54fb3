"""Module containing the assembly of residuals and exact Jacobians of the generalized
multiphase, multicomponent phase equilibrium problem.

The unknowns are temperature, component densities per phase and molar phase fractions
(see :mod:`~equilpy.equilibrium.variables`). The equations are assembled in the
following order:

1. Equality of the logarithmic fugacities of every component between the first phase
   and every other phase (``Ncomponents * (Nphases - 1)`` rows).
2. Equality of pressures between the first phase and every other phase
   (``Nphases - 1`` rows).
3. Mass balances for all but the last component (``Ncomponents - 1`` rows).
4. Unity of phase fractions (1 row).
5. Two specification equations (see :mod:`~equilpy.equilibrium.specifications`).

The system is generic in the number of phases and components. It computes residuals
and Jacobians for a given vector of unknowns, but does not solve the system. This is
left to an external (Newton-type) solver.

References:
    [1]: `Michelsen, Mollerup (2007), Thermodynamic Models: Fundamentals &
         Computational Aspects`
    [2]: `Bell, Jäger (2016) <https://doi.org/10.6028/jres.121.011>`_

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import numba as nb
import numpy as np

from ..thermo._core import NUMBA_CACHE, NUMBA_FAST_MATH
from ..thermo.model import ResidualHelmholtzModel
from ..thermo.utils import CallInputError, ConstructionError, InternalInvariantError
from ..utils.equilpy_types import VectorLike
from ..utils.logging import time_logger
from .jacobian_check import num_Jacobian
from .specifications import AbstractSpecification, SpecificationSidecar
from .variables import UnpackedVariables, dim_unknowns, get_num_components, unpack

__all__ = [
    "CallResult",
    "RequiredPhaseDerivatives",
    "GeneralizedPhaseEquilibrium",
]


logger = logging.getLogger(__name__)

module_sections = ["assembly"]


# The kernels divide with IEEE semantics (numpy error model), zero densities lead to
# inf or nan instead of raising.
@nb.njit(fastmath=NUMBA_FAST_MATH, cache=NUMBA_CACHE, error_model="numpy")
def _lnf_and_derivatives(
    T: float,
    R: float,
    rhovec: np.ndarray,
    grad: np.ndarray,
    hess: np.ndarray,
    dgrad_dT: np.ndarray,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Computes the logarithmic fugacities of a phase and their derivatives w.r.t.
    temperature and component densities.

    :math:`\\ln f_i = \\ln(\\rho_i R T) + \\frac{1}{RT}
    \\frac{\\partial \\Psi^r}{\\partial \\rho_i}`

    """
    RT = R * T
    lnf = np.log(rhovec * RT) + grad / RT
    dlnf_dT = 1.0 / T + dgrad_dT / RT - grad / (RT * T)
    dlnf_drho = hess / RT + np.diag(1.0 / rhovec)
    return lnf, dlnf_dT, dlnf_drho


@nb.njit(fastmath=NUMBA_FAST_MATH, cache=NUMBA_CACHE, error_model="numpy")
def _pressure_and_derivatives(
    T: float,
    R: float,
    rhovec: np.ndarray,
    Psir: float,
    grad: np.ndarray,
    hess: np.ndarray,
    dPsir_dT: float,
    dgrad_dT: np.ndarray,
) -> tuple[float, float, np.ndarray]:
    """Computes the pressure of a phase and its derivatives w.r.t. temperature and
    component densities.

    :math:`p = \\rho R T - \\Psi^r + \\sum_i \\rho_i
    \\frac{\\partial \\Psi^r}{\\partial \\rho_i}`

    """
    n = rhovec.shape[0]
    rho = rhovec.sum()
    p = rho * R * T - Psir + np.sum(rhovec * grad)
    dpdT = rho * R - dPsir_dT + np.sum(rhovec * dgrad_dT)
    dpdrho = np.full(n, R * T)
    for i in range(n):
        for k in range(n):
            dpdrho[i] += rhovec[k] * hess[k, i]
    return p, dpdT, dpdrho


@nb.njit(fastmath=NUMBA_FAST_MATH, cache=NUMBA_CACHE, error_model="numpy")
def _assemble_mass_balances(
    r: np.ndarray,
    J: np.ndarray,
    irow: int,
    rhos: np.ndarray,
    betas: np.ndarray,
    zbulk: np.ndarray,
) -> int:
    """Assembles the mass balances of all but the last component into ``r`` and ``J``
    starting at row ``irow``.

    :math:`\\sum_j \\beta_j x_{ij} - z_i = 0` with :math:`x_{ij} =
    \\frac{\\rho_{ij}}{\\rho_j}`.

    Parameters:
        rhos: ``shape=(Nphases, Ncomponents)``

            Component densities row-wise per phase.

    Returns:
        The index of the next row to be assembled.

    """
    nphase, ncomp = rhos.shape
    ncol = J.shape[1]
    for i in range(ncomp - 1):
        summer = 0.0
        for j in range(nphase):
            rho_j = rhos[j].sum()
            x_ij = rhos[j, i] / rho_j
            summer += betas[j] * x_ij
            J[irow, ncol - nphase + j] = x_ij
            for m in range(ncomp):
                delta = 1.0 if i == m else 0.0
                J[irow, 1 + j * ncomp + m] = betas[j] * (delta - x_ij) / rho_j
        r[irow] = summer - zbulk[i]
        irow += 1
    return irow


@dataclass
class CallResult:
    """Buffers for the residual vector and the Jacobian of an equilibrium system."""

    r: np.ndarray
    """Residual vector, ``shape=(Nindependent,)``."""

    J: np.ndarray
    """Jacobian, ``shape=(Nindependent, Nindependent)``."""


@dataclass
class RequiredPhaseDerivatives:
    """Values of the residual Helmholtz energy density and derivatives of a phase,
    required for the assembly."""

    Psir: float
    gradient_Psir: np.ndarray
    Hessian_Psir: np.ndarray
    d_Psir_dT: float
    d_gradient_Psir_dT: np.ndarray


class GeneralizedPhaseEquilibrium:
    """Residuals and exact Jacobian of multiphase equilibrium with two specification
    equations.

    The number of phases and components are both arbitrary. They are determined from
    the initial values at instantiation and fixed afterwards.

    Important:
        The results of :meth:`call` are written into the buffers in :attr:`res`, which
        are reused for every call. They are valid only until the next call.
        Copy them, if they are needed afterwards. Consequently, an instance must not
        be called concurrently.

    Note:
        The gas constant is obtained once per call for the bulk composition. Models
        with composition-dependent gas constants are not supported, hence
        derivatives of the gas constant w.r.t. densities are not accounted for.

    Parameters:
        model: The model for the residual portion of the Helmholtz energy.
        zbulk: ``shape=(Ncomponents,)``

            The bulk molar fractions.
        init: The initial values of unknowns. Only used to determine the number of
            phases and components.
        specifications: The two specification equations.

    Raises:
        ConstructionError: If the number of phase fractions and density vectors in
            ``init`` differ, if the density vectors are empty or of different sizes,
            if ``zbulk`` does not match the number of components, if the model was
            created for a different number of components, or if not exactly two
            specifications are given.

    """

    def __init__(
        self,
        model: ResidualHelmholtzModel,
        zbulk: VectorLike,
        init: UnpackedVariables,
        specifications: Sequence[AbstractSpecification],
    ) -> None:
        if np.size(init.betas) != len(init.rhovecs):
            raise ConstructionError("bad sizes for initial betas and rhovecs")
        if len(specifications) != 2:
            raise ConstructionError("specification vector should be of length 2")
        for spec in specifications:
            if not callable(getattr(spec, "r_Jacobian", None)):
                raise ConstructionError(
                    f"Specification {spec} does not provide a method r_Jacobian."
                )

        self.model: ResidualHelmholtzModel = model
        """The model for the residual portion of the Helmholtz energy."""

        self.Ncomponents: int = get_num_components(init.rhovecs)
        """The number of components in each phase."""

        self.Nphases: int = int(np.size(init.betas))
        """The number of phases."""

        self.Nindependent: int = dim_unknowns(self.Nphases, self.Ncomponents)
        """The number of independent variables to be solved for."""

        zbulk = np.array(zbulk, dtype=np.float64)
        if zbulk.shape != (self.Ncomponents,):
            raise ConstructionError(
                f"Bulk composition must be of shape {(self.Ncomponents,)}, "
                + f"got {zbulk.shape}."
            )
        zbulk.flags.writeable = False
        self.zbulk: np.ndarray = zbulk
        """The bulk composition of the mixture (read-only)."""

        if (
            isinstance(model, ResidualHelmholtzModel)
            and model.num_components != self.Ncomponents
        ):
            raise ConstructionError(
                f"Model created for {model.num_components} components, but initial"
                + f" values have {self.Ncomponents} components."
            )

        self.specifications: tuple[AbstractSpecification, ...] = tuple(specifications)
        """The specification equations."""

        self.res: CallResult = CallResult(
            r=np.zeros(self.Nindependent),
            J=np.zeros((self.Nindependent, self.Nindependent)),
        )
        """The internal buffer of residual vector and Jacobian (to minimize copies).
        Overwritten by every call of :meth:`call`."""

        logger.info(
            f"Created {self.Nphases}-phase, {self.Ncomponents}-component equilibrium"
            + f" system with {self.Nindependent} unknowns and specifications"
            + f" {list(self.specifications)}."
        )

    def unpack(self, x: VectorLike) -> UnpackedVariables:
        """Parses a vector of unknowns of this system into read-only views
        (see :func:`~equilpy.equilibrium.variables.unpack`)."""
        return unpack(np.asarray(x, dtype=np.float64), self.Nphases, self.Ncomponents)

    def calculate_required_derivatives(
        self, T: float, R: float, rhovec: np.ndarray
    ) -> RequiredPhaseDerivatives:
        """Calculates the required derivatives of a phase based on temperature and its
        component densities.

        The temperature derivative of the energy density is obtained from the model's
        :math:`-T\\frac{\\partial\\alpha^r}{\\partial T}`, using
        :math:`\\frac{\\partial\\Psi^r}{\\partial T} = \\rho R (T
        \\frac{\\partial\\alpha^r}{\\partial T} + \\alpha^r)`.

        """
        Psir, grad, hess = self.model.build_Psir_fgradHessian(T, rhovec)
        rho = rhovec.sum()
        d_Psir_dT = rho * R * (-self.model.get_Ar10(T, rho, rhovec / rho)) + Psir / T
        return RequiredPhaseDerivatives(
            Psir=float(Psir),
            gradient_Psir=np.asarray(grad, dtype=np.float64),
            Hessian_Psir=np.asarray(hess, dtype=np.float64),
            d_Psir_dT=float(d_Psir_dT),
            d_gradient_Psir_dT=np.asarray(
                self.model.build_d2PsirdTdrhoi(T, rhovec), dtype=np.float64
            ),
        )

    def __call__(self, x: VectorLike) -> CallResult:
        """Shorthand for :meth:`call`."""
        return self.call(x)

    @time_logger(sections=module_sections)
    def call(self, x: VectorLike) -> CallResult:
        """Builds the vector of residuals and the Jacobian and stores them internally.

        Parameters:
            x: ``shape=(Nindependent,)``

                The array of independent variables, first T, then molar concentrations
                of each phase, in order, followed by the molar phase fractions.

        Raises:
            CallInputError: If ``x`` is not of size :attr:`Nindependent`.
            InternalInvariantError: If the number of assembled rows does not match
                :attr:`Nindependent`.

        Returns:
            :attr:`res`, i.e. the internal buffers (not a copy).

        """
        x = np.asarray(x, dtype=np.float64)
        if x.ndim != 1 or x.shape[0] != self.Nindependent:
            raise CallInputError(
                f"Wrong size; should be of size {self.Nindependent}; is of size "
                + f"{x.size}"
            )

        J = self.res.J
        J.fill(0.0)
        r = self.res.r
        r.fill(0.0)
        nc = self.Ncomponents
        nphase = self.Nphases

        variables = self.unpack(x)
        T = variables.T
        rhovecs = variables.rhovecs
        betas = variables.betas
        R = self.model.get_R(self.zbulk)

        derivatives = [
            self.calculate_required_derivatives(T, R, rhovec) for rhovec in rhovecs
        ]

        lnfs = [
            _lnf_and_derivatives(
                T,
                R,
                rhovecs[j],
                derivatives[j].gradient_Psir,
                derivatives[j].Hessian_Psir,
                derivatives[j].d_gradient_Psir_dT,
            )
            for j in range(nphase)
        ]
        pressures = [
            _pressure_and_derivatives(
                T,
                R,
                rhovecs[j],
                derivatives[j].Psir,
                derivatives[j].gradient_Psir,
                derivatives[j].Hessian_Psir,
                derivatives[j].d_Psir_dT,
                derivatives[j].d_gradient_Psir_dT,
            )
            for j in range(nphase)
        ]

        irow = 0

        # Equality of ln(f) between the phase with index 0 and every other phase.
        # The Jacobian has a positive block in the columns of phase 0 and a negative
        # block in the columns of the other phase.
        lnf_0, dlnfdT_0, dlnfdrho_0 = lnfs[0]
        for j in range(1, nphase):
            lnf_j, dlnfdT_j, dlnfdrho_j = lnfs[j]
            r[irow : irow + nc] = lnf_0 - lnf_j
            J[irow : irow + nc, 0] = dlnfdT_0 - dlnfdT_j
            J[irow : irow + nc, 1 : 1 + nc] = dlnfdrho_0
            J[irow : irow + nc, 1 + j * nc : 1 + (j + 1) * nc] = -dlnfdrho_j
            irow += nc

        # Equality of pressures, no derivatives w.r.t. phase fractions.
        p_0, dpdT_0, dpdrho_0 = pressures[0]
        for j in range(1, nphase):
            p_j, dpdT_j, dpdrho_j = pressures[j]
            r[irow] = p_0 - p_j
            J[irow, 0] = dpdT_0 - dpdT_j
            J[irow, 1 : 1 + nc] = dpdrho_0
            J[irow, 1 + j * nc : 1 + (j + 1) * nc] = -dpdrho_j
            irow += 1

        # Ncomponents - 1 mass balances.
        rhos = x[1 : 1 + nphase * nc].reshape((nphase, nc))
        irow = _assemble_mass_balances(r, J, irow, rhos, betas, self.zbulk)

        # Unity of phase fractions, all other derivatives zero.
        r[irow] = betas.sum() - 1.0
        J[irow, self.Nindependent - nphase :] = 1.0
        irow += 1

        sidecar = SpecificationSidecar(
            Nphases=nphase,
            Ncomponents=nc,
            Nindependent=self.Nindependent,
            p_phase0=float(p_0),
            dpdT_phase0=float(dpdT_0),
            dpdrho_phase0=dpdrho_0,
        )
        for spec in self.specifications:
            r_, J_ = spec.r_Jacobian(x, sidecar)
            r[irow] = r_
            J[irow] = J_
            irow += 1

        if irow != self.Nindependent:
            raise InternalInvariantError(
                f"Assembled {irow} rows, expected {self.Nindependent}."
            )

        # NOTE Rows and columns of components with zero density are not masked.
        # Logarithms of zero densities lead to non-finite values.
        if not np.all(np.isfinite(r)):
            logger.warning(
                f"Non-finite residual values at T = {T}, densities"
                + f" {[list(rv) for rv in rhovecs]}."
            )
        logger.debug(
            f"Assembled equilibrium system at T = {T}; residual norm "
            + f"{np.linalg.norm(r)}."
        )

        return self.res

    def num_Jacobian(
        self, x: VectorLike, dx: Optional[VectorLike] = None
    ) -> np.ndarray:
        """Computes the Jacobian using central finite differences
        (see :func:`~equilpy.equilibrium.jacobian_check.num_Jacobian`)."""
        return num_Jacobian(self, x, dx)
