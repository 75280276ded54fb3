"""Tests the generic interface for residual Helmholtz models and the exceptions of
the package."""

from __future__ import annotations

import numpy as np
import pytest

import equilpy as ep


@pytest.fixture(scope="module")
def component() -> ep.FluidComponent:
    return ep.FluidComponent(
        name="CO2",
        acentric_factor=0.2239,
        critical_pressure=7377300.0,
        critical_temperature=304.1282,
    )


def test_no_components() -> None:
    """A model requires at least one component."""
    with pytest.raises(ep.ConstructionError):
        ep.ResidualHelmholtzModel([])


def test_base_model_not_implemented(component: ep.FluidComponent) -> None:
    """The base class can be instantiated, but its derivatives are not
    implemented."""
    model = ep.ResidualHelmholtzModel([component, component], R=8.3)
    assert model.num_components == 2
    assert model.get_R(np.array([0.5, 0.5])) == 8.3

    T = 300.0
    rhovec = np.array([1.0, 2.0])
    with pytest.raises(NotImplementedError):
        model.build_Psir_fgradHessian(T, rhovec)
    with pytest.raises(NotImplementedError):
        model.get_Ar00(T, 3.0, rhovec / 3.0)
    with pytest.raises(NotImplementedError):
        model.get_Ar10(T, 3.0, rhovec / 3.0)
    with pytest.raises(NotImplementedError):
        model.build_d2PsirdTdrhoi(T, rhovec)
    with pytest.raises(NotImplementedError):
        model.get_pressure(T, rhovec)


def test_component_is_immutable(component: ep.FluidComponent) -> None:
    """Material parameters cannot be changed once created."""
    with pytest.raises(AttributeError):
        component.critical_pressure = 1.0  # type: ignore[misc]
    with pytest.raises(TypeError):
        # Constants must be passed as keywords.
        ep.FluidComponent("CO2", 0.2239)  # type: ignore[misc]


@pytest.mark.parametrize(
    "error, base",
    [
        (ep.ConstructionError, ValueError),
        (ep.CallInputError, ValueError),
        (ep.InternalInvariantError, RuntimeError),
    ],
)
def test_exception_hierarchy(error: type, base: type) -> None:
    """All exceptions derive from a common base class, and from the respective built-in
    exception type."""
    assert issubclass(error, ep.EquilibriumError)
    assert issubclass(error, base)


def test_safe_sum() -> None:
    """The sum of an empty sequence is zero, otherwise the elements are added without
    a leading zero."""
    assert ep.thermo.safe_sum([]) == 0
    assert ep.thermo.safe_sum(["a", "b"]) == "ab"
    assert ep.thermo.safe_sum([1.0, 2.0, 3.0]) == 6.0
