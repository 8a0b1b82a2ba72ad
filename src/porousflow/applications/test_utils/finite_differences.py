"""Finite-difference approximations of local Jacobians.

Used to verify hand-coded Jacobians of kernels against their residuals.

"""

from __future__ import annotations

from typing import Callable

import numpy as np
from scipy.optimize import approx_fprime

import porousflow as pf
from porousflow.materials.nodal_variables import NodalVariables


def fd_local_jacobian(
    kernel: pf.TimeKernel,
    context_for: Callable[[NodalVariables], pf.ElementContext],
    variables: NodalVariables,
    pvar: pf.CoupledIndex,
    epsilon: float = 1e-7,
) -> np.ndarray:
    """Forward-difference Jacobian of a kernel's local residual.

    Parameters:
        kernel: The kernel to differentiate.
        context_for: Builds the element context, including its field provider, for
            given nodal variables.
        variables: Nodal variables to linearize around.
        pvar: Coupled index of the variable to differentiate with respect to.
        epsilon: Finite-difference increment.

    Returns:
        np.ndarray (num_nodes, num_nodes): Entry ``(i, j)`` approximates the
        derivative of the residual of test function ``i`` wrt the value of ``pvar``
        at node ``j``.

    """
    base = np.array([variables.values(j)[pvar] for j in range(variables.num_nodes)])

    def residual(nodal_values: np.ndarray) -> np.ndarray:
        perturbed = variables
        for j, delta in enumerate(nodal_values - base):
            if delta != 0:
                perturbed = perturbed.perturbed(j, pvar, delta)
        return kernel.local_residual(context_for(perturbed))

    return np.atleast_2d(approx_fprime(base, residual, epsilon))
