"""Porosity laws.

Porosity is the only field entering the energy time derivative that may depend on
gradients of the primary variables, through the volumetric strain of the skeleton.

"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

import porousflow as pf
from porousflow.materials.nodal_variables import NodalValue, coupled_index
from porousflow.numerics.dictator import PorousFlowDictator

logger = logging.getLogger(__name__)


class PorosityConst:
    """Constant porosity.

    Parameters:
        porosity: The porosity, in [0, 1].

    Raises:
        ValueError: If the porosity is outside [0, 1].

    """

    def __init__(self, porosity: float) -> None:
        if not 0 <= porosity <= 1:
            raise ValueError(f"Porosity must be in [0, 1], got {porosity}.")
        self.porosity = porosity

    @pf.time_logger(sections=[pf.MATERIALS])
    def evaluate(self, values: np.ndarray, gradients: np.ndarray) -> NodalValue:
        return NodalValue(
            self.porosity, np.zeros(values.size), np.zeros(gradients.shape)
        )


class PorosityTM:
    """Porosity in thermo-mechanical simulations.

    .. math::

        \\phi = b + (\\phi_0 - b) \\exp(-\\epsilon_{vol} + \\alpha T),

    where :math:`b` is the Biot coefficient, :math:`\\phi_0` the porosity at zero
    strain and temperature, :math:`\\alpha` the thermal expansion coefficient of the
    skeleton and :math:`\\epsilon_{vol}` the volumetric strain, computed from the
    gradients of the displacements at the node.

    Parameters:
        dictator: Registry of the porous-flow variables.
        porosity_zero: Porosity at zero strain and zero temperature.
        biot_coefficient: Biot coefficient.
        thermal_expansion_coeff: Volumetric thermal expansion coefficient of the
            porous skeleton.
        temperature_var: Global number of the temperature variable.
        displacement_vars: Global numbers of the displacement variables, one per
            spatial direction, in order. May be empty, in which case the strain is
            zero.

    Raises:
        ValueError: If any of the variables is not a porous-flow variable.

    """

    def __init__(
        self,
        dictator: PorousFlowDictator,
        porosity_zero: float,
        biot_coefficient: float,
        thermal_expansion_coeff: float,
        temperature_var: pf.VariableNumber,
        displacement_vars: Sequence[pf.VariableNumber] = (),
    ) -> None:
        self.porosity_zero = porosity_zero
        self.biot_coefficient = biot_coefficient
        self.thermal_expansion_coeff = thermal_expansion_coeff
        self._temperature = coupled_index(dictator, temperature_var, "temperature")
        self._displacements = [
            coupled_index(dictator, v, "displacement") for v in displacement_vars
        ]
        logger.debug(
            f"Thermo-mechanical porosity with {len(self._displacements)}"
            " displacement variables."
        )

    @pf.time_logger(sections=[pf.MATERIALS])
    def evaluate(self, values: np.ndarray, gradients: np.ndarray) -> NodalValue:
        """Porosity at a node.

        Parameters:
            values: Values of the porous-flow variables at the node.
            gradients: Gradients of the porous-flow variables at the node.

        Raises:
            ValueError: If there are more displacement variables than spatial
                dimensions.

        """
        dim = gradients.shape[1]
        if len(self._displacements) > dim:
            raise ValueError(
                f"{len(self._displacements)} displacements given in {dim} dimensions."
            )
        vol_strain = sum(
            gradients[disp, k] for k, disp in enumerate(self._displacements)
        )
        temperature = values[self._temperature]
        porosity = self.biot_coefficient + (
            self.porosity_zero - self.biot_coefficient
        ) * np.exp(-vol_strain + self.thermal_expansion_coeff * temperature)

        excess = porosity - self.biot_coefficient
        dporosity_dvar = np.zeros(values.size)
        dporosity_dvar[self._temperature] = self.thermal_expansion_coeff * excess
        dporosity_dgradvar = np.zeros(gradients.shape)
        for k, disp in enumerate(self._displacements):
            dporosity_dgradvar[disp, k] = -excess
        return NodalValue(porosity, dporosity_dvar, dporosity_dgradvar)
