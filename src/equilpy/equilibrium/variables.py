"""Module containing the layout of unknowns of the generalized phase equilibrium
problem, and the parsing and assembly of the flat vector of unknowns.

The structure of the vector of unknowns is as follows:

*(temperature, component densities in phase 0, ..., component densities in phase
n - 1, phase fractions)*

The order of the elements in the vector of unknowns reflects the order of derivatives
(columns) in the Jacobian of the equilibrium system.

Examples:
    For a 2-component, 2-phase system, the vector of unknowns has 7 entries:

    *(T, rho_00, rho_01, rho_10, rho_11, beta_0, beta_1)*

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from ..thermo.utils import CallInputError, ConstructionError

__all__ = [
    "dim_unknowns",
    "get_num_components",
    "UnpackedVariables",
    "unpack",
]


def dim_unknowns(num_phases: int, num_components: int) -> int:
    """Returns the number of independent variables of an equilibrium system.

    Parameters:
        num_phases: Number of phases.
        num_components: Number of components.

    Returns:
        ``1 + (num_components + 1) * num_phases``, i.e. temperature, component
        densities per phase and phase fractions.

    """
    return 1 + (num_components + 1) * num_phases


def get_num_components(rhovecs: Sequence[np.ndarray]) -> int:
    """Returns the number of components in a sequence of density vectors.

    Raises:
        ConstructionError: If no density vectors are given, if their lengths differ, or
            if they are empty.

    """
    sizes = {np.size(rhovec) for rhovec in rhovecs}
    if len(sizes) != 1:
        raise ConstructionError(
            f"Density vectors must be of equal size, got sizes {sorted(sizes)}."
        )
    size = sizes.pop()
    if size == 0:
        raise ConstructionError("Density vectors must not be empty.")
    return int(size)


@dataclass(frozen=True)
class UnpackedVariables:
    """Structured representation of the unknowns of an equilibrium system.

    The arrays are stored as given. When created with :func:`unpack`, they are
    read-only views into the flat vector.

    """

    T: float
    """Temperature."""

    rhovecs: Sequence[np.ndarray] = field(default_factory=list)
    """Component densities (molar concentrations) per phase."""

    betas: np.ndarray = field(default_factory=lambda: np.zeros(0))
    """Molar phase fractions."""

    @property
    def Nphases(self) -> int:
        """Number of phases."""
        return int(np.size(self.betas))

    @property
    def Ncomponents(self) -> int:
        """Number of components (see :func:`get_num_components`)."""
        return get_num_components(self.rhovecs)

    @property
    def Nindependent(self) -> int:
        """Size of the flat vector of unknowns."""
        return dim_unknowns(self.Nphases, self.Ncomponents)

    def pack(self) -> np.ndarray:
        """Assembles the flat vector of unknowns.

        Raises:
            ConstructionError: If the number of density vectors differs from the number
                of phase fractions, or the density vectors are inconsistent.

        Returns:
            A new array of size :attr:`Nindependent`.

        """
        nphase = self.Nphases
        ncomp = self.Ncomponents
        if len(self.rhovecs) != nphase:
            raise ConstructionError(
                f"Number of density vectors ({len(self.rhovecs)}) and phase fractions"
                + f" ({nphase}) must be equal."
            )
        x = np.empty(dim_unknowns(nphase, ncomp), dtype=np.float64)
        x[0] = self.T
        for j, rhovec in enumerate(self.rhovecs):
            x[1 + j * ncomp : 1 + (j + 1) * ncomp] = rhovec
        x[-nphase:] = self.betas
        return x


def unpack(x: np.ndarray, num_phases: int, num_components: int) -> UnpackedVariables:
    """Parses a flat vector of unknowns into temperature, density vectors and phase
    fractions.

    The arrays in the result are read-only views into ``x``, no copies are made.

    Parameters:
        x: ``shape=(1 + (num_components + 1) * num_phases,)``

            Flat vector of unknowns.
        num_phases: Number of phases.
        num_components: Number of components.

    Raises:
        CallInputError: If ``x`` is not of the expected size.

    Returns:
        The structured representation of ``x``.

    """
    n = dim_unknowns(num_phases, num_components)
    if np.ndim(x) != 1 or np.size(x) != n:
        raise CallInputError(
            f"Wrong size; should be of size {n}; is of size {np.size(x)}"
        )

    # A view with own flags, to not change the write-ability of the caller's array.
    x = np.asarray(x, dtype=np.float64).view()
    x.flags.writeable = False

    rhovecs = [
        x[1 + j * num_components : 1 + (j + 1) * num_components]
        for j in range(num_phases)
    ]
    betas = x[-num_phases:]
    return UnpackedVariables(float(x[0]), rhovecs, betas)
