"""   PorousFlow.

Root directory for the PorousFlow package. Contains the following sub-packages:

numerics: Variable registry, field snapshots, element context and the residual /
    Jacobian kernels.

materials: Nodal material laws (porosity, matrix and fluid properties) that provide
    field snapshots with exact derivatives.

utils: Keywords, types and logging.

applications: Utilities for testing, e.g. synthetic fields and finite-difference
    checks of Jacobians.


isort:skip_file

"""

import configparser
import os
from pathlib import Path


__version__ = "0.3.0"

# Try to read the config file from the directory where python process was launched
try:
    cwd = Path(os.getcwd())
    pth = cwd / Path("porousflow.cfg")
    cfg = configparser.ConfigParser()
    cfg.read(pth)
    config = {section: dict(cfg[section]) for section in cfg.sections()}
except (configparser.Error, OSError):
    # the assumption is that no configurations are given
    config = {}

# ------------------------------------
# Simplified namespaces. The rule of thumb is that classes and modules that a
# user can be exposed to should have a shortcut here.

from porousflow.utils.common_constants import *
from porousflow.utils.porousflow_types import *

from porousflow.utils.logging import time_logger

# Variable registry and evaluation context
from porousflow.numerics.dictator import PorousFlowDictator
from porousflow.numerics.fields import (
    NodalQuantity,
    PhaseFields,
    NodalFields,
    FieldProvider,
    ArrayFieldProvider,
)
from porousflow.numerics.element_context import ElementContext

# Kernels
from porousflow.numerics.time_kernel import TimeKernel
from porousflow.numerics.energy_time_derivative import EnergyTimeDerivative

# Materials
from porousflow.materials.nodal_variables import NodalVariables
from porousflow.materials.porosity import PorosityConst, PorosityTM
from porousflow.materials.matrix_energy import MatrixInternalEnergy
from porousflow.materials.fluid_properties import (
    DensityConstBulk,
    InternalEnergyIdeal,
    FullySaturated,
    TwoPhasePS,
    FluidPhase,
)
from porousflow.materials.material_provider import MaterialFieldProvider

from porousflow.applications import test_utils
