"""Internal energy of the porous skeleton."""

from __future__ import annotations

import numpy as np

import porousflow as pf
from porousflow.materials.nodal_variables import NodalValue, coupled_index
from porousflow.numerics.dictator import PorousFlowDictator


class MatrixInternalEnergy:
    """Internal energy of the rock per unit volume of rock, ``density * c * T``.

    Parameters:
        dictator: Registry of the porous-flow variables.
        density: Density of the rock grains.
        specific_heat_capacity: Specific heat capacity of the rock grains.
        temperature_var: Global number of the temperature variable.

    """

    def __init__(
        self,
        dictator: PorousFlowDictator,
        density: float,
        specific_heat_capacity: float,
        temperature_var: pf.VariableNumber,
    ) -> None:
        self.density = density
        self.specific_heat_capacity = specific_heat_capacity
        self._temperature = coupled_index(dictator, temperature_var, "temperature")

    @pf.time_logger(sections=[pf.MATERIALS])
    def evaluate(self, values: np.ndarray) -> NodalValue:
        volumetric_heat_capacity = self.density * self.specific_heat_capacity
        denergy_dvar = np.zeros(values.size)
        denergy_dvar[self._temperature] = volumetric_heat_capacity
        return NodalValue(
            volumetric_heat_capacity * values[self._temperature], denergy_dvar
        )
