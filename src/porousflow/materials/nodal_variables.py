"""Values of the primary variables at the nodes of an element.

Material laws are evaluated at the nodes, from the nodal values of the porous-flow
variables and, where strains are involved, from their gradients reconstructed at the
nodes with the trial functions of the element.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

import porousflow as pf
from porousflow.numerics.dictator import PorousFlowDictator


@dataclass(frozen=True)
class NodalValue:
    """Value of a material law at a node, with its derivatives."""

    value: float
    d_dvar: np.ndarray
    """Derivative wrt the porous-flow variables, shape ``(P,)``."""
    d_dgradvar: Optional[np.ndarray] = None
    """Derivative wrt gradients of the porous-flow variables, shape ``(P, dim)``."""


def coupled_index(
    dictator: PorousFlowDictator, var: pf.VariableNumber, role: str
) -> pf.CoupledIndex:
    """Coupled index of a variable a material law depends on.

    Parameters:
        dictator: Registry of porous-flow variables.
        var: Global number of the variable.
        role: Description of the variable, used in the error message.

    Raises:
        ValueError: If the variable is not a porous-flow variable.

    """
    ind = dictator.porous_flow_variable_num(var)
    if ind is None:
        raise ValueError(f"The {role} variable {var} is not a porous-flow variable.")
    return ind


class NodalVariables:
    """Nodal values of the porous-flow variables on one element.

    Parameters:
        values: Nodal values, shape ``(num_nodes, P)``. Column ``k`` holds the
            variable with coupled index ``k``.
        grad_phi: Trial function gradients at the nodes, shape
            ``(num_nodes, num_nodes, dim)``, with ``grad_phi[j, i]`` the gradient of
            trial function ``j`` at node ``i``.

    Raises:
        ValueError: If the shapes of the two arrays are inconsistent.

    """

    def __init__(self, values: np.ndarray, grad_phi: np.ndarray) -> None:
        values = np.atleast_2d(np.asarray(values, dtype=float))
        grad_phi = np.asarray(grad_phi, dtype=float)
        num_nodes = values.shape[0]
        if grad_phi.ndim != 3 or grad_phi.shape[:2] != (num_nodes, num_nodes):
            raise ValueError(
                f"Trial function gradients of shape {grad_phi.shape} do not match"
                f" {num_nodes} nodes."
            )
        self._values = values
        self._grad_phi = grad_phi

    @property
    def num_nodes(self) -> int:
        return self._values.shape[0]

    @property
    def num_variables(self) -> int:
        return self._values.shape[1]

    @property
    def dim(self) -> int:
        return self._grad_phi.shape[2]

    def values(self, node: int) -> np.ndarray:
        """Values of all porous-flow variables at a node, shape ``(P,)``."""
        return self._values[node]

    def gradients(self, node: int) -> np.ndarray:
        """Gradients of all porous-flow variables at a node, shape ``(P, dim)``.

        The gradient of variable ``k`` is ``sum_j U[j, k] * grad_phi[j, node]``.

        """
        return np.einsum("jk,jd->kd", self._values, self._grad_phi[:, node])

    def perturbed(self, node: int, pvar: pf.CoupledIndex, h: float) -> NodalVariables:
        """Copy with the value of variable ``pvar`` at ``node`` shifted by ``h``."""
        values = self._values.copy()
        values[node, pvar] += h
        return NodalVariables(values, self._grad_phi)
