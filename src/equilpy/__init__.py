"""   equilpy.

Root directory for the equilpy package. Contains the following sub-packages:

thermo: Thermodynamic models providing residual Helmholtz energy derivatives,
    material data and the exceptions of the package.

equilibrium: Generalized multiphase, multicomponent phase equilibrium: the layout of
    unknowns, specification equations, and the assembly of residuals and exact
    Jacobians.

utils: Common types and logging utilities.

applications: Helpers for testing derivatives.


isort:skip_file

"""

import os
from pathlib import Path
import configparser


__version__ = "0.1.0"

# Try to read the config file from the directory where python process was launched
try:
    cwd = Path(os.getcwd())
    pth = cwd / Path("equilpy.cfg")
    cfg = configparser.ConfigParser()
    cfg.read(pth)
    config = {name: dict(section) for name, section in cfg.items()}
except (OSError, configparser.Error):
    # the assumption is that no configurations are given
    config = {}

# ------------------------------------
# Simplified namespaces. The rule of thumb is that classes and modules that a
# user can be exposed to should have a shortcut here.

from equilpy.utils.equilpy_types import *
from equilpy.utils.logging import time_logger

# Thermodynamics
from equilpy import thermo
from equilpy.thermo._core import R_IDEAL_MOL
from equilpy.thermo.utils import (
    EquilibriumError,
    ConstructionError,
    CallInputError,
    InternalInvariantError,
)
from equilpy.thermo.model import ResidualHelmholtzModel
from equilpy.thermo.materials import FluidComponent
from equilpy.thermo.peng_robinson import PengRobinsonHelmholtz

# Phase equilibrium
from equilpy import equilibrium
from equilpy.equilibrium.variables import UnpackedVariables
from equilpy.equilibrium.specifications import (
    AbstractSpecification,
    SpecificationSidecar,
    TSpecification,
    PSpecification,
    BetaSpecification,
    MolarVolumeSpecification,
)
from equilpy.equilibrium.phase_equilibrium import (
    CallResult,
    GeneralizedPhaseEquilibrium,
)
from equilpy.equilibrium.jacobian_check import num_Jacobian
