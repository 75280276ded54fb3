"""Contains some fixtures shared by different testing modules."""

from __future__ import annotations

import numpy as np
import pytest

import equilpy as ep


@pytest.fixture(scope="session")
def components() -> list[ep.FluidComponent]:
    """Fluid components used for testing the EoS."""
    methane = ep.FluidComponent(
        name="CH4",
        acentric_factor=0.011,
        critical_pressure=4599200.0,
        critical_temperature=190.564,
    )
    nitrogen = ep.FluidComponent(
        name="N2",
        acentric_factor=0.0372,
        critical_pressure=3395800.0,
        critical_temperature=126.192,
    )
    ethane = ep.FluidComponent(
        name="C2H6",
        acentric_factor=0.0995,
        critical_pressure=4872200.0,
        critical_temperature=305.322,
    )
    return [methane, nitrogen, ethane]


@pytest.fixture(scope="session")
def bips() -> np.ndarray:
    """Some binary interaction parameters for :func:`components`, upper triangle
    only."""
    return np.array(
        [
            [0.0, 0.03, 0.0],
            [0.0, 0.0, 0.05],
            [0.0, 0.0, 0.0],
        ]
    )


@pytest.fixture(scope="session")
def pr_eos(components, bips) -> ep.PengRobinsonHelmholtz:
    """A 3-component Peng-Robinson model using lambdified functions."""
    return ep.PengRobinsonHelmholtz(components, bips)
