"""Sub-package of ``equilpy.thermo`` with an implementation of the Peng-Robinson EoS
as a residual Helmholtz model.

.. rubric:: Module guide

The residual Helmholtz energy density of the Peng-Robinson EoS is expressed using
:mod:`sympy` in terms of temperature and component densities in
:mod:`~equilpy.thermo.peng_robinson.eos_symbolic`. Exact derivatives are obtained by
symbolic differentiation and lambdified.

The model class in :mod:`~equilpy.thermo.peng_robinson.eos` wraps the lambdified
functions into the interface expected by the equilibrium framework, and can optionally
compile them using :mod:`numba`.

References:
    [1]: `Peng, Robinson (1976) <https://doi.org/10.1021/i160057a011>`_
    [2]: `Michelsen, Mollerup (2007), Thermodynamic Models: Fundamentals &
         Computational Aspects`

"""

__all__ = []

from . import eos, eos_symbolic
from .eos import *
from .eos_symbolic import *

__all__.extend(eos.__all__)
__all__.extend(eos_symbolic.__all__)
