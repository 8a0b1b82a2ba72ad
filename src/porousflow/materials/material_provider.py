"""Field provider evaluating material laws at the nodes of an element."""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

import numpy as np

import porousflow as pf
from porousflow.materials.fluid_properties import FluidPhase, FullySaturated, TwoPhasePS
from porousflow.materials.matrix_energy import MatrixInternalEnergy
from porousflow.materials.nodal_variables import NodalVariables, coupled_index
from porousflow.materials.porosity import PorosityConst, PorosityTM
from porousflow.numerics.dictator import PorousFlowDictator
from porousflow.numerics.fields import NodalFields, NodalQuantity, PhaseFields

logger = logging.getLogger(__name__)

SaturationModel = Union[FullySaturated, TwoPhasePS]
PorosityLaw = Union[PorosityConst, PorosityTM]


class MaterialFieldProvider:
    """Nodal fields computed from material laws.

    The current fields are evaluated from the current nodal variables, and the old
    fields from the variables of the previous time step, with the same laws.

    Parameters:
        dictator: Registry of the porous-flow variables and number of phases.
        porosity: Porosity law.
        matrix_energy: Internal energy of the rock.
        variables: Nodal variables at the current time step.
        variables_old: Nodal variables at the previous time step.
        temperature_var: Global number of the temperature variable. Required if
            there are fluid phases.
        saturation_model: Phase pressures and saturations. Required if there are
            fluid phases.
        fluid_phases: Property laws of each phase.

    Raises:
        ValueError: If the fluid description does not agree with the number of phases
            in the dictator, or if the nodal variables do not agree with the number
            of porous-flow variables.

    """

    def __init__(
        self,
        dictator: PorousFlowDictator,
        porosity: PorosityLaw,
        matrix_energy: MatrixInternalEnergy,
        variables: NodalVariables,
        variables_old: NodalVariables,
        temperature_var: Optional[pf.VariableNumber] = None,
        saturation_model: Optional[SaturationModel] = None,
        fluid_phases: Sequence[FluidPhase] = (),
    ) -> None:
        num_phases = dictator.num_phases
        if len(fluid_phases) != num_phases:
            raise ValueError(
                f"Got {len(fluid_phases)} fluid phases, the dictator has {num_phases}."
            )
        if num_phases > 0:
            if saturation_model is None or temperature_var is None:
                raise ValueError(
                    "Fluid phases require a saturation model and a temperature."
                )
            if saturation_model.num_phases != num_phases:
                raise ValueError(
                    f"Saturation model of type {type(saturation_model).__name__}"
                    f" describes {saturation_model.num_phases} phases, the dictator"
                    f" has {num_phases}."
                )
        elif saturation_model is not None:
            raise ValueError("Saturation model given, but there are no fluid phases.")

        for nodal_vars in (variables, variables_old):
            if nodal_vars.num_variables != dictator.num_variables:
                raise ValueError(
                    f"Nodal variables hold {nodal_vars.num_variables} variables, the"
                    f" dictator has {dictator.num_variables}."
                )
        if variables.num_nodes != variables_old.num_nodes:
            raise ValueError("Current and old nodal variables differ in size.")

        self._num_phases = num_phases
        self._porosity = porosity
        self._matrix_energy = matrix_energy
        self._saturation_model = saturation_model
        self._fluid_phases = tuple(fluid_phases)
        self._temperature: Optional[int] = None
        if temperature_var is not None:
            self._temperature = coupled_index(dictator, temperature_var, "temperature")
        self._variables = variables
        self._variables_old = variables_old

        logger.debug(
            f"Material field provider on {variables.num_nodes} nodes with"
            f" {num_phases} fluid phases."
        )

    @pf.time_logger(sections=[pf.MATERIALS])
    def fields(self, node: int) -> NodalFields:
        values = self._variables.values(node)
        gradients = self._variables.gradients(node)
        values_old = self._variables_old.values(node)
        gradients_old = self._variables_old.gradients(node)

        porosity = self._porosity.evaluate(values, gradients)
        porosity_old = self._porosity.evaluate(values_old, gradients_old)
        rock = self._matrix_energy.evaluate(values)
        rock_old = self._matrix_energy.evaluate(values_old)

        phases = None
        if self._num_phases > 0:
            phases = self._phase_fields(values, values_old)

        return NodalFields(
            porosity=NodalQuantity(
                porosity.value,
                porosity_old.value,
                porosity.d_dvar,
                porosity.d_dgradvar,
            ),
            rock_energy=NodalQuantity(rock.value, rock_old.value, rock.d_dvar),
            phases=phases,
        )

    def _phase_fields(self, values: np.ndarray, values_old: np.ndarray) -> PhaseFields:
        """Density, saturation and internal energy of all phases."""
        assert self._saturation_model is not None and self._temperature is not None
        state = self._saturation_model.evaluate(values)
        state_old = self._saturation_model.evaluate(values_old)

        num_vars = values.size
        density = np.zeros(self._num_phases)
        density_old = np.zeros(self._num_phases)
        ddensity_dvar = np.zeros((self._num_phases, num_vars))
        energy = np.zeros(self._num_phases)
        energy_old = np.zeros(self._num_phases)
        denergy_dvar = np.zeros((self._num_phases, num_vars))

        for ph, phase in enumerate(self._fluid_phases):
            rho, drho_dp = phase.density.density(state.pressure[ph])
            density[ph] = rho
            ddensity_dvar[ph] = drho_dp * state.dpressure_dvar[ph]
            density_old[ph] = phase.density.density(state_old.pressure[ph])[0]

            u, du_dt = phase.internal_energy.internal_energy(values[self._temperature])
            energy[ph] = u
            denergy_dvar[ph, self._temperature] = du_dt
            energy_old[ph] = phase.internal_energy.internal_energy(
                values_old[self._temperature]
            )[0]

        return PhaseFields(
            density=density,
            density_old=density_old,
            ddensity_dvar=ddensity_dvar,
            saturation=state.saturation,
            saturation_old=state_old.saturation,
            dsaturation_dvar=state.dsaturation_dvar,
            internal_energy=energy,
            internal_energy_old=energy_old,
            dinternal_energy_dvar=denergy_dvar,
        )
