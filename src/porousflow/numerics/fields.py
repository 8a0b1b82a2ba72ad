"""Snapshots of the nodal fields that enter the energy time derivative.

A snapshot holds, for a single node, the current and previous-timestep values of a
field together with the derivatives of the current value with respect to the
porous-flow variables. The fluid-phase fields are collected in a separate container
which is absent (``None``) when there are no fluid phases.

Snapshots are produced fresh by a :class:`FieldProvider` for every node evaluation
and are never modified by the kernels reading them.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

import porousflow as pf

if TYPE_CHECKING:
    from typing import Protocol
else:
    Protocol = object


@dataclass(frozen=True)
class NodalQuantity:
    """Scalar field at a node, with derivatives of its current value."""

    value: float
    """Value at the current time step."""

    value_old: float
    """Value at the previous time step."""

    d_dvar: np.ndarray
    """Derivative with respect to the porous-flow variables, shape ``(P,)``."""

    d_dgradvar: Optional[np.ndarray] = None
    """Derivative with respect to the gradients of the porous-flow variables, shape
    ``(P, dim)``. Only porosity depends on gradients."""

    def check_dimensions(self, name: str, num_variables: int) -> None:
        """Check that the values are scalars and the lengths of the derivatives.

        Parameters:
            name: Name of the quantity, used in the error message.
            num_variables: Expected number of porous-flow variables.

        Raises:
            ValueError: If a value is not a scalar, or a derivative has the wrong
                number of entries.

        """
        for value in (self.value, self.value_old):
            if np.ndim(value) != 0:
                raise ValueError(
                    f"Value of {name} has shape {np.shape(value)}, expected a scalar."
                )
        if np.shape(self.d_dvar) != (num_variables,):
            raise ValueError(
                f"Derivative of {name} has shape {np.shape(self.d_dvar)}, expected"
                f" ({num_variables},)."
            )
        if self.d_dgradvar is not None:
            shape = np.shape(self.d_dgradvar)
            if len(shape) != 2 or shape[0] != num_variables:
                raise ValueError(
                    f"Gradient derivative of {name} has shape {shape}, expected"
                    f" ({num_variables}, dim)."
                )


@dataclass(frozen=True)
class PhaseFields:
    """Fluid-phase fields at a node.

    Values are arrays of shape ``(N,)`` and derivatives arrays of shape ``(N, P)``,
    with N the number of fluid phases and P the number of porous-flow variables.

    """

    density: np.ndarray
    density_old: np.ndarray
    ddensity_dvar: np.ndarray

    saturation: np.ndarray
    saturation_old: np.ndarray
    dsaturation_dvar: np.ndarray

    internal_energy: np.ndarray
    internal_energy_old: np.ndarray
    dinternal_energy_dvar: np.ndarray

    def check_dimensions(self, num_phases: int, num_variables: int) -> None:
        """Check that all arrays agree with the number of phases and variables.

        Raises:
            ValueError: If an array has the wrong shape.

        """
        values = {
            pf.FLUID_PHASE_DENSITY: (self.density, self.density_old),
            pf.SATURATION: (self.saturation, self.saturation_old),
            pf.FLUID_PHASE_INTERNAL_ENERGY: (
                self.internal_energy,
                self.internal_energy_old,
            ),
        }
        derivatives = {
            pf.FLUID_PHASE_DENSITY: self.ddensity_dvar,
            pf.SATURATION: self.dsaturation_dvar,
            pf.FLUID_PHASE_INTERNAL_ENERGY: self.dinternal_energy_dvar,
        }
        for name, (current, old) in values.items():
            for arr in (current, old):
                if np.shape(arr) != (num_phases,):
                    raise ValueError(
                        f"{name} has shape {np.shape(arr)}, expected ({num_phases},)."
                    )
        for name, deriv in derivatives.items():
            if np.shape(deriv) != (num_phases, num_variables):
                raise ValueError(
                    f"Derivative of {name} has shape {np.shape(deriv)}, expected"
                    f" ({num_phases}, {num_variables})."
                )


@dataclass(frozen=True)
class NodalFields:
    """All fields entering the energy time derivative at one node."""

    porosity: NodalQuantity
    """Porosity, including its derivative with respect to variable gradients."""

    rock_energy: NodalQuantity
    """Internal energy of the porous skeleton per unit volume of rock."""

    phases: Optional[PhaseFields] = None
    """Fluid-phase fields. ``None`` if and only if there are no fluid phases."""

    def check_dimensions(self, num_phases: int, num_variables: int) -> None:
        """Check the snapshot against the number of phases and variables.

        Parameters:
            num_phases: Number of fluid phases, N.
            num_variables: Number of porous-flow variables, P.

        Raises:
            ValueError: If any array has the wrong shape, if the porosity lacks its
                gradient derivative, or if the presence of phase data does not match
                the number of phases.

        """
        self.porosity.check_dimensions(pf.POROSITY, num_variables)
        if self.porosity.d_dgradvar is None:
            raise ValueError("Porosity must provide derivatives wrt variable gradients.")
        self.rock_energy.check_dimensions(pf.MATRIX_INTERNAL_ENERGY, num_variables)

        if num_phases == 0:
            if self.phases is not None:
                raise ValueError("Fluid-phase data given, but there are no phases.")
        elif self.phases is None:
            raise ValueError(f"Missing fluid-phase data for {num_phases} phases.")
        else:
            self.phases.check_dimensions(num_phases, num_variables)


class FieldProvider(Protocol):
    """Source of nodal field snapshots for one element.

    Note:
        Used for type hints only. Any object with a ``fields`` method of the right
        signature is accepted.

    """

    def fields(self, node: int) -> NodalFields:
        """Field snapshot at a local node of the element."""
        ...


class ArrayFieldProvider:
    """Field provider returning precomputed snapshots.

    Parameters:
        nodal_fields: One snapshot per local node of the element.

    """

    def __init__(self, nodal_fields: Sequence[NodalFields]) -> None:
        self._nodal_fields = tuple(nodal_fields)

    def __len__(self) -> int:
        return len(self._nodal_fields)

    def fields(self, node: int) -> NodalFields:
        return self._nodal_fields[node]
