"""Registry of the porous-flow variables.

The dictator knows which of the primary unknowns of a simulation are porous-flow
variables, and maps each of them to a dense coupled index. Nodal fields carry their
derivatives as vectors indexed by the coupled index, so every kernel and material
goes through the dictator to find the entry belonging to a given variable.

"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import porousflow as pf

logger = logging.getLogger(__name__)


class PorousFlowDictator:
    """Variable index registry for porous-flow kernels and materials.

    Parameters:
        variable_numbers: Global numbers of the porous-flow variables. The position of
            a variable in this sequence is its coupled index.
        num_phases: Number of fluid phases. Zero is permitted and means that only
            the porous skeleton is modelled.
        variable_names: Optional names of the variables, in the same order as
            ``variable_numbers``.

    Raises:
        ValueError: If the variable numbers are not unique, if the number of phases
            is negative, or if the number of names does not match the number of
            variables.

    """

    def __init__(
        self,
        variable_numbers: Sequence[pf.VariableNumber],
        num_phases: int,
        variable_names: Optional[Sequence[str]] = None,
    ) -> None:
        numbers = [int(v) for v in variable_numbers]
        if len(set(numbers)) != len(numbers):
            raise ValueError(f"Porous-flow variable numbers must be unique: {numbers}")
        if num_phases < 0:
            raise ValueError("The number of fluid phases cannot be negative.")

        self._variable_numbers: tuple[int, ...] = tuple(numbers)
        self._coupled_index: dict[int, int] = {
            var: ind for ind, var in enumerate(numbers)
        }
        self._num_phases: int = int(num_phases)

        self._names: dict[str, int] = {}
        if variable_names is not None:
            if len(variable_names) != len(numbers):
                raise ValueError(
                    f"Got {len(variable_names)} variable names for {len(numbers)}"
                    + " porous-flow variables."
                )
            self._names = dict(zip(variable_names, numbers))

        logger.debug(
            f"Porous-flow dictator with {self.num_variables} variables and"
            f" {self.num_phases} fluid phases."
        )

    def __repr__(self) -> str:
        return (
            f"PorousFlowDictator with variables {list(self._variable_numbers)} and"
            f" {self._num_phases} fluid phases"
        )

    @property
    def num_variables(self) -> int:
        """Number of porous-flow variables, i.e. the length of derivative vectors."""
        return len(self._variable_numbers)

    @property
    def num_phases(self) -> int:
        """Number of fluid phases."""
        return self._num_phases

    @property
    def variable_numbers(self) -> tuple[int, ...]:
        """Global variable numbers, ordered by coupled index."""
        return self._variable_numbers

    def is_porous_flow_variable(self, var: pf.VariableNumber) -> bool:
        """Check if a variable is one of the porous-flow variables."""
        return var in self._coupled_index

    def not_porous_flow_variable(self, var: pf.VariableNumber) -> bool:
        """Check if a variable is not one of the porous-flow variables."""
        return var not in self._coupled_index

    def porous_flow_variable_num(self, var: pf.VariableNumber) -> pf.OptionalIndex:
        """Coupled index of a variable.

        Parameters:
            var: Global variable number.

        Returns:
            The dense index of the variable among the porous-flow variables, or
            ``None`` if the variable is not a porous-flow variable.

        """
        return self._coupled_index.get(var)

    def variable_number(self, name: str) -> pf.VariableNumber:
        """Global number of a named porous-flow variable.

        Raises:
            KeyError: If no porous-flow variable carries the name.

        """
        try:
            return self._names[name]
        except KeyError:
            raise KeyError(
                f"{name} is not the name of a porous-flow variable."
            ) from None
