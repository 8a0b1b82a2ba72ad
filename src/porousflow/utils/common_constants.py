"""
The module is intended to give access to a set of unified keywords.

To access the quantities, invoke pf.KEY.

"""

""" Field keywords

Names of the nodal fields consumed by the energy time derivative. The names are used
in log and error messages, and to identify the quantities in field snapshots.
"""
POROSITY = "porosity_nodal"
MATRIX_INTERNAL_ENERGY = "matrix_internal_energy_nodal"
FLUID_PHASE_DENSITY = "fluid_phase_density"
SATURATION = "saturation_nodal"
FLUID_PHASE_INTERNAL_ENERGY = "fluid_phase_internal_energy_nodal"

""" Logging sections

Sections accepted by the time_logger decorator, see porousflow.utils.logging.
"""
ASSEMBLY = "assembly"
MATERIALS = "materials"
NUMERICS = "numerics"
