"""Contains models and fixtures shared by the testing modules for equilibrium
systems."""

from __future__ import annotations

import numpy as np
import pytest

import equilpy as ep


class QuadraticVirialModel(ep.ResidualHelmholtzModel):
    """A simple model with a residual Helmholtz energy density quadratic in the
    component densities, for testing purposes.

    :math:`\\Psi^r = R \\sum_i\\sum_j \\rho_i \\rho_j (b_{ij} T - c_{ij})`

    All derivatives are implemented by hand.

    """

    def __init__(self, b: np.ndarray, c: np.ndarray) -> None:
        b = np.asarray(b, dtype=np.float64)
        c = np.asarray(c, dtype=np.float64)
        nc = b.shape[0]
        super().__init__(
            [ep.FluidComponent(name=f"comp_{i}") for i in range(nc)],
        )
        # Only symmetric parts contribute to the energy.
        self.b = 0.5 * (b + b.T)
        self.c = 0.5 * (c + c.T)

    def _M(self, T: float) -> np.ndarray:
        return self.b * T - self.c

    def build_Psir_fgradHessian(self, T, rhovec):
        M = self._M(T)
        Psir = self.R * float(rhovec @ M @ rhovec)
        grad = 2 * self.R * (M @ rhovec)
        hess = 2 * self.R * M
        return Psir, grad, hess

    def get_Ar00(self, T, rho, molefrac):
        rhovec = rho * np.asarray(molefrac)
        return float(rhovec @ self._M(T) @ rhovec) / (rho * T)

    def get_Ar10(self, T, rho, molefrac):
        rhovec = rho * np.asarray(molefrac)
        return -float(rhovec @ self.c @ rhovec) / (rho * T)

    def build_d2PsirdTdrhoi(self, T, rhovec):
        return 2 * self.R * (self.b @ rhovec)


def virial_model(num_components: int) -> QuadraticVirialModel:
    """Returns a virial model with some non-trivial coefficients, in the order of
    magnitude of real fluids."""
    rng = np.random.default_rng(42)
    b = 1e-5 * (1.0 + rng.random((num_components, num_components)))
    c = 1e-2 * (1.0 + rng.random((num_components, num_components)))
    return QuadraticVirialModel(b, c)


def relative_steps(x: np.ndarray, rel: float = 1e-6) -> np.ndarray:
    """Perturbations for finite differences, relative to the values in ``x``."""
    return rel * np.abs(x)


@pytest.fixture(scope="module")
def binary_components() -> list[ep.FluidComponent]:
    """Methane and nitrogen."""
    return [
        ep.FluidComponent(
            name="CH4",
            acentric_factor=0.011,
            critical_pressure=4599200.0,
            critical_temperature=190.564,
        ),
        ep.FluidComponent(
            name="N2",
            acentric_factor=0.0372,
            critical_pressure=3395800.0,
            critical_temperature=126.192,
        ),
    ]


@pytest.fixture(scope="module")
def binary_pr(binary_components) -> ep.PengRobinsonHelmholtz:
    """A 2-component Peng-Robinson model for methane and nitrogen."""
    return ep.PengRobinsonHelmholtz(
        binary_components, np.array([[0.0, 0.03], [0.0, 0.0]])
    )


@pytest.fixture(scope="module")
def binary_init() -> ep.UnpackedVariables:
    """Gas- and liquid-like initial values for a 2-phase, 2-component system."""
    return ep.UnpackedVariables(
        T=255.0,
        rhovecs=[np.array([2400.0, 600.0]), np.array([14400.0, 1600.0])],
        betas=np.array([0.6, 0.4]),
    )
