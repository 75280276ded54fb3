"""Module containing the symbolic representation of the residual Helmholtz energy
density of the standard Peng-Robinson EoS.

It concerns itself with *analytic* expressions of the residual Helmholtz energy density
as a function of temperature and component densities (molar concentrations), and its
exact derivatives.

We use ``sympy`` to produce symbols and expressions, which are
subsequently turned into numeric functions using :func:`sympy.lambdify`.

We use the naming convention ``<derivative><name>_<type>``,
where the name represents the quantity, and type how the quantity is represented.

The convention for types of a quantity include:

- ``_s``: A symbol representing either an independent quantity, or an intermediate
  quantity serving as an argument. Created using :class:`sympy.Symbol`.
- ``_e``: A symbolic expression created using some algebraic combination of symbols.
- ``_f``: A lambdify-generated function, based on an expression. The arguments of the
  function reflect the dependency on symbols.

The following standard names are used:

- ``Psir`` residual Helmholtz energy density :math:`\\rho R T \\alpha^r`
- ``alphar`` residual reduced Helmholtz energy :math:`\\alpha^r`
- ``Ar10`` :math:`-T \\frac{\\partial \\alpha^r}{\\partial T}`
- ``a`` cohesion
- ``b`` covolume
- ``T`` temperature
- ``rho`` component densities
- ``_i`` index related to a component i

"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

import numpy as np
import sympy as sp

from .._core import R_IDEAL_MOL
from ..materials import FluidComponent
from ..utils import safe_sum

__all__ = [
    "A_CRIT",
    "B_CRIT",
    "SymbolicPengRobinsonHelmholtz",
]


A_CRIT: float = (
    1
    / 512
    * (
        -59
        + 3 * np.cbrt(276231 - 192512 * np.sqrt(2))
        + 3 * np.cbrt(276231 + 192512 * np.sqrt(2))
    )
)
"""Critical, non-dimensional cohesion value in the Peng-Robinson EoS,
~ 0.457235529."""


B_CRIT: float = (
    1
    / 32
    * (-1 - 3 * np.cbrt(16 * np.sqrt(2) - 13) + 3 * np.cbrt(16 * np.sqrt(2) + 13))
)
"""Critical, non-dimensional covolume in the Peng-Robinson EoS, ~ 0.077796073."""


class SymbolicPengRobinsonHelmholtz:
    """A class providing expressions and lambdified functions for the residual
    Helmholtz energy density of a mixture using the Peng-Robinson EoS.

    With :math:`B = \\sum_i \\rho_i b_i` and
    :math:`D = \\sum_i\\sum_j \\rho_i \\rho_j a_{ij}(T)`, the energy density reads

    :math:`\\Psi^r = -\\rho R T \\ln(1 - B) - \\frac{D}{2\\sqrt{2} B}
    \\ln\\frac{1 + (1 + \\sqrt{2})B}{1 + (1 - \\sqrt{2})B}`,

    which is the van der Waals mixing rule expressed in component densities.

    Note:
        The functions are generated using :func:`sympy.lambdify` and are *sourceless*.

    Parameters:
        components: A sequence of ``num_comp`` components.
        bip_matrix: ``default=None``

            A 2D array containing BIPs for ``components``. Note that only the upper
            triangle of this matrix is used. If not given, all BIPs are zero.
        R: ``default=R_IDEAL_MOL``

            Gas constant used in the expressions.

    """

    T_s: sp.Symbol = sp.Symbol("T")
    """Symbolic representation of temperature."""

    def __init__(
        self,
        components: Sequence[FluidComponent],
        bip_matrix: Optional[np.ndarray] = None,
        R: float = R_IDEAL_MOL,
    ) -> None:
        nc = len(components)

        self.R: float = R
        """Gas constant passed at instantiation."""

        self.rho_s: list[sp.Symbol] = [
            sp.Symbol(f"rho_{i}", positive=True) for i in range(nc)
        ]
        """List of component densities. Symbols are indexed by component position,
        because component names are not necessarily valid identifiers."""

        self.thd_arg: tuple[sp.Symbol, list[sp.Symbol]] = (self.T_s, self.rho_s)
        """General representation of the thermodynamic argument:

        1. a temperature value,
        2. an array of component densities.

        """

        self.T_i_crit: list[float] = [comp.critical_temperature for comp in components]
        """List of critical temperatures per component."""

        self.p_i_crit: list[float] = [comp.critical_pressure for comp in components]
        """List of critical pressures per component."""

        self.b_i_crit: list[float] = [
            float(B_CRIT * (R * T_c) / p_c)
            for T_c, p_c in zip(self.T_i_crit, self.p_i_crit)
        ]
        """List of critical covolumes per component.

        :math:`B_{c}R\\frac{T_{i,c}}{p_{i,c}}`, using :data:`B_CRIT`.

        """

        self.a_i_crit: list[float] = [
            float(A_CRIT * (R**2 * T_c**2) / p_c)
            for T_c, p_c in zip(self.T_i_crit, self.p_i_crit)
        ]
        """List of critical cohesion values per component.

        :math:`A_c \\frac{R^2 T_{i,c}^2}{p_{i,c}}`, using :data:`A_CRIT`.

        """

        self.k_i: list[float] = [
            self.a_correction_weight(comp.acentric_factor) for comp in components
        ]
        """List of corrective weights for cohesion terms per components."""

        if bip_matrix is None:
            bip_matrix = np.zeros((nc, nc))
        self.bip_matrix: np.ndarray = np.asarray(bip_matrix, dtype=np.float64)
        """Matrix of binary interaction parameters passed at instantiation."""

    @staticmethod
    def a_correction_weight(omega: float) -> float:
        """Computes the cohesion correction weight based on the acentric factor.

        References:
            `Zhu et al. (2014), Appendix A
            <https://doi.org/10.1016/j.fluid.2014.07.003>`_

        Parameters:
            omega: Acentric factor for a component.

        Returns:
            Returns the cohesion correction parameter depending on a component's
            acentric factor.

        """
        if omega < 0.491:
            return 0.37464 + 1.54226 * omega - 0.26992 * omega**2
        else:
            return (
                0.379642 + 1.48503 * omega - 0.164423 * omega**2 + 0.016666 * omega**3
            )

    @property
    def rho(self) -> sp.Expr:
        """Total molar density as the sum of component densities."""
        return safe_sum(self.rho_s)

    @property
    def B(self) -> sp.Expr:
        """Covolume density :math:`\\sum_i \\rho_i b_i`."""
        return safe_sum([rho * b for rho, b in zip(self.rho_s, self.b_i_crit)])

    @property
    def a_i(self) -> list[sp.Expr]:
        """Temperature-dependent cohesion values of individual components."""
        a_i_correction: list[sp.Expr] = [
            1 + k * (1 - sp.sqrt(self.T_s / T_ic))
            for k, T_ic in zip(self.k_i, self.T_i_crit)
        ]
        return [a * corr**2 for a, corr in zip(self.a_i_crit, a_i_correction)]

    @property
    def D(self) -> sp.Expr:
        """Cohesion density :math:`\\sum_i\\sum_j \\rho_i \\rho_j a_{ij}` with
        :math:`a_{ij} = \\sqrt{a_i a_j}(1 - \\delta_{ij})`, where :math:`\\delta_{ij}`
        are the BIPs."""
        a_i = self.a_i
        nc = len(self.rho_s)
        terms: list[sp.Expr] = []
        for i in range(nc):
            terms.append(self.rho_s[i] ** 2 * a_i[i])
            for j in range(i + 1, nc):
                a_ij = sp.sqrt(a_i[i] * a_i[j]) * (1 - float(self.bip_matrix[i, j]))
                terms.append(2 * self.rho_s[i] * self.rho_s[j] * a_ij)
        return safe_sum(terms)

    @property
    def Psir(self) -> sp.Expr:
        """Residual Helmholtz energy density depending on temperature and component
        densities."""
        B = self.B
        s2 = sp.sqrt(2)
        return -self.rho * self.R * self.T_s * sp.log(1 - B) - self.D / (
            2 * s2 * B
        ) * sp.log((1 + (1 + s2) * B) / (1 + (1 - s2) * B))

    @property
    def grad_rho_Psir(self) -> list[sp.Expr]:
        """Derivatives of :meth:`Psir` w.r.t. component densities."""
        Psir = self.Psir
        return [Psir.diff(rho) for rho in self.rho_s]

    @property
    def hess_rho_Psir(self) -> list[sp.Expr]:
        """Second derivatives of :meth:`Psir` w.r.t. component densities, flattened
        row-wise (``num_comp**2`` expressions)."""
        grad = self.grad_rho_Psir
        return [g.diff(rho) for g in grad for rho in self.rho_s]

    @property
    def dT_grad_rho_Psir(self) -> list[sp.Expr]:
        """Mixed second derivatives of :meth:`Psir` w.r.t. temperature and component
        densities."""
        return [g.diff(self.T_s) for g in self.grad_rho_Psir]

    @property
    def alphar(self) -> sp.Expr:
        """Residual reduced Helmholtz energy :math:`\\frac{\\Psi^r}{\\rho R T}`."""
        return self.Psir / (self.rho * self.R * self.T_s)

    @property
    def Ar10(self) -> sp.Expr:
        """Expression for :math:`-T\\frac{\\partial\\alpha^r}{\\partial T}` at constant
        component densities."""
        return -self.T_s * self.alphar.diff(self.T_s)

    @property
    def Psir_func(self) -> Callable[[float, np.ndarray], float]:
        """Lambdified expression :meth:`Psir`."""
        return sp.lambdify(self.thd_arg, self.Psir)

    @property
    def grad_rho_Psir_func(self) -> Callable[[float, np.ndarray], list[float]]:
        """Lambdified expression :meth:`grad_rho_Psir` returning a list of floats of
        length ``num_comp``."""
        return sp.lambdify(self.thd_arg, self.grad_rho_Psir)

    @property
    def hess_rho_Psir_func(self) -> Callable[[float, np.ndarray], list[float]]:
        """Lambdified expression :meth:`hess_rho_Psir` returning a list of floats of
        length ``num_comp**2``."""
        return sp.lambdify(self.thd_arg, self.hess_rho_Psir)

    @property
    def dT_grad_rho_Psir_func(self) -> Callable[[float, np.ndarray], list[float]]:
        """Lambdified expression :meth:`dT_grad_rho_Psir` returning a list of floats of
        length ``num_comp``."""
        return sp.lambdify(self.thd_arg, self.dT_grad_rho_Psir)

    @property
    def alphar_func(self) -> Callable[[float, np.ndarray], float]:
        """Lambdified expression :meth:`alphar`."""
        return sp.lambdify(self.thd_arg, self.alphar)

    @property
    def Ar10_func(self) -> Callable[[float, np.ndarray], float]:
        """Lambdified expression :meth:`Ar10`."""
        return sp.lambdify(self.thd_arg, self.Ar10)
