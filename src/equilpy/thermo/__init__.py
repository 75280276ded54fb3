"""The thermo subpackage provides the thermodynamic models consumed by the
equilibrium framework, as well as material data and the exceptions of equilpy.

The interface of models is defined in :mod:`equilpy.thermo.model`. Models provide
the residual Helmholtz energy density and its exact derivatives w.r.t. temperature and
component densities. A Peng-Robinson implementation is available in
:mod:`equilpy.thermo.peng_robinson`.

Units are standard SI units. Densities are molar concentrations in ``[mol / m^3]``.

"""

__all__ = []

from . import _core, materials, model, peng_robinson, utils
from ._core import *
from .materials import *
from .model import *
from .peng_robinson import *
from .utils import *

__all__.extend(_core.__all__)
__all__.extend(materials.__all__)
__all__.extend(model.__all__)
__all__.extend(peng_robinson.__all__)
__all__.extend(utils.__all__)
