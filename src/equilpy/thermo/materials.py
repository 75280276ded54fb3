"""Storage classes for constants of fluid components.

Material contants are values representing constant physical properties of a pure
substance (e.g. critical pressure), which parametrize an equation of state. They must
be given in base SI units.

"""

from __future__ import annotations

from dataclasses import dataclass

from ..utils.equilpy_types import number

__all__ = [
    "FluidComponent",
]


# 1. By using keyword_only arguments for the construction of materials, the user is
# forced to instantiate the constants with the right names of constants.
# 2. Frozen, because material parameters are not supposed to change once an equation
# of state was built with them.
@dataclass(kw_only=True, frozen=True)
class FluidComponent:
    """Material data class for fluid components.

    It declares parameters relevant for cubic equations of state.

    This class is intended for 1 fluid component only. Fluid mixtures with multiple
    components require multiple sets of constants.

    """

    name: str = ""
    """Name of the component given at instantiation."""

    acentric_factor: number = 0.0
    """Acentric factor [-], used in the temperature dependence of the cohesion."""

    critical_pressure: number = 1.0
    """Critical pressure [Pa]."""

    critical_temperature: number = 1.0
    """Critical temperature [K]."""

