"""Fluid-phase properties: density, internal energy, pressure and saturation.

Density and internal energy laws are functions of the phase pressure and the
temperature respectively, and return the value together with the derivative wrt
their argument. The chain rule to the porous-flow variables is applied by
:class:`~porousflow.materials.material_provider.MaterialFieldProvider`.

Saturation models decide how many phases there are, and which porous-flow variables
define the phase pressures and saturations.

"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

import porousflow as pf
from porousflow.materials.nodal_variables import coupled_index
from porousflow.numerics.dictator import PorousFlowDictator


class DensityConstBulk:
    """Fluid density with a constant bulk modulus, ``density0 * exp(p / K)``.

    Parameters:
        density0: Density at zero pressure.
        bulk_modulus: Bulk modulus of the fluid. Must be positive.

    """

    def __init__(self, density0: float, bulk_modulus: float) -> None:
        if bulk_modulus <= 0:
            raise ValueError("Fluid bulk modulus must be positive.")
        self.density0 = density0
        self.bulk_modulus = bulk_modulus

    def density(self, pressure: float) -> tuple[float, float]:
        """Density and its derivative wrt pressure."""
        rho = self.density0 * np.exp(pressure / self.bulk_modulus)
        return rho, rho / self.bulk_modulus


class InternalEnergyIdeal:
    """Specific internal energy of an ideal fluid, ``cv * T``."""

    def __init__(self, specific_heat_cv: float) -> None:
        self.specific_heat_cv = specific_heat_cv

    def internal_energy(self, temperature: float) -> tuple[float, float]:
        """Internal energy and its derivative wrt temperature."""
        return self.specific_heat_cv * temperature, self.specific_heat_cv


@dataclass(frozen=True)
class FluidPhase:
    """Property laws of one fluid phase."""

    density: DensityConstBulk
    internal_energy: InternalEnergyIdeal


@dataclass(frozen=True)
class PhaseState:
    """Pressures and saturations of all phases at a node.

    Values have shape ``(N,)``, derivatives wrt the porous-flow variables
    ``(N, P)``.

    """

    pressure: np.ndarray
    dpressure_dvar: np.ndarray
    saturation: np.ndarray
    dsaturation_dvar: np.ndarray


class FullySaturated:
    """A single, fully saturating fluid phase.

    Parameters:
        dictator: Registry of the porous-flow variables.
        porepressure_var: Global number of the porepressure variable.

    """

    num_phases = 1

    def __init__(
        self, dictator: PorousFlowDictator, porepressure_var: pf.VariableNumber
    ) -> None:
        self._pressure = coupled_index(dictator, porepressure_var, "porepressure")

    def evaluate(self, values: np.ndarray) -> PhaseState:
        dpressure_dvar = np.zeros((1, values.size))
        dpressure_dvar[0, self._pressure] = 1.0
        return PhaseState(
            pressure=np.array([values[self._pressure]]),
            dpressure_dvar=dpressure_dvar,
            saturation=np.ones(1),
            dsaturation_dvar=np.zeros((1, values.size)),
        )


class TwoPhasePS:
    """Two phases described by the phase-0 porepressure and the phase-1 saturation.

    Capillary pressure is neglected, thus both phases have the same pressure.

    Parameters:
        dictator: Registry of the porous-flow variables.
        phase0_porepressure_var: Global number of the phase-0 porepressure variable.
        phase1_saturation_var: Global number of the phase-1 saturation variable.

    """

    num_phases = 2

    def __init__(
        self,
        dictator: PorousFlowDictator,
        phase0_porepressure_var: pf.VariableNumber,
        phase1_saturation_var: pf.VariableNumber,
    ) -> None:
        self._pressure = coupled_index(
            dictator, phase0_porepressure_var, "phase-0 porepressure"
        )
        self._saturation = coupled_index(
            dictator, phase1_saturation_var, "phase-1 saturation"
        )

    def evaluate(self, values: np.ndarray) -> PhaseState:
        p0 = values[self._pressure]
        s1 = values[self._saturation]

        dpressure_dvar = np.zeros((2, values.size))
        dpressure_dvar[:, self._pressure] = 1.0
        dsaturation_dvar = np.zeros((2, values.size))
        dsaturation_dvar[0, self._saturation] = -1.0
        dsaturation_dvar[1, self._saturation] = 1.0
        return PhaseState(
            pressure=np.array([p0, p0]),
            dpressure_dvar=dpressure_dvar,
            saturation=np.array([1.0 - s1, s1]),
            dsaturation_dvar=dsaturation_dvar,
        )
