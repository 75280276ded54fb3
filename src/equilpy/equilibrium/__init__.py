"""The equilibrium subpackage provides the residuals and exact Jacobians of the
generalized multiphase, multicomponent phase equilibrium problem.

.. rubric:: Module guide

- :mod:`~equilpy.equilibrium.variables`: Layout of the vector of unknowns
  (temperature, component densities per phase, phase fractions).
- :mod:`~equilpy.equilibrium.specifications`: Specification equations closing the
  system, e.g. fixed temperature and pressure.
- :mod:`~equilpy.equilibrium.phase_equilibrium`: Assembly of residuals and Jacobians.
- :mod:`~equilpy.equilibrium.jacobian_check`: Finite-difference Jacobians for
  verification.

The package does not solve the equilibrium problem. An external solver evaluates the
system repeatedly for updated unknowns.

"""

__all__ = []

from . import jacobian_check, phase_equilibrium, specifications, variables
from .jacobian_check import *
from .phase_equilibrium import *
from .specifications import *
from .variables import *

__all__.extend(variables.__all__)
__all__.extend(specifications.__all__)
__all__.extend(jacobian_check.__all__)
__all__.extend(phase_equilibrium.__all__)
