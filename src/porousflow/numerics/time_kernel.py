""" Module contains the abstract superclass for all time-derivative kernels."""

from __future__ import annotations

import abc

import numpy as np

import porousflow as pf
from porousflow.numerics.element_context import ElementContext


class TimeKernel(abc.ABC):
    """Interface for kernels contributing a time derivative to the residual.

    A kernel evaluates, for one element, the contribution of a single term to the
    residual of its primary variable, and the derivatives of that contribution. The
    quadrature-point methods are implemented by each physical term, while the
    local element loops defined here are shared.

    The kernel keeps no state between evaluations: everything that varies between
    elements and time steps is read from the :class:`ElementContext`.

    Parameters:
        variable: Global number of the primary variable whose equation the kernel
            contributes to.

    """

    def __init__(self, variable: pf.VariableNumber) -> None:
        self.variable = variable

    def __repr__(self) -> str:
        return f"Kernel of type {self.__class__.__name__} on variable {self.variable}"

    @abc.abstractmethod
    def compute_qp_residual(self, ctx: ElementContext, i: int) -> float:
        """Residual for test function ``i`` at the current quadrature point.

        Parameters:
            ctx: Element context.
            i: Local index of the test function.

        Returns:
            Residual contribution.

        """

    @abc.abstractmethod
    def compute_qp_jacobian(self, ctx: ElementContext, i: int, j: int) -> float:
        """Derivative of the residual wrt the kernel's own variable.

        Parameters:
            ctx: Element context.
            i: Local index of the test function.
            j: Local index of the trial function.

        Returns:
            Jacobian contribution.

        """

    @abc.abstractmethod
    def compute_qp_off_diag_jacobian(
        self, ctx: ElementContext, i: int, j: int, jvar: pf.VariableNumber
    ) -> float:
        """Derivative of the residual wrt another variable.

        Parameters:
            ctx: Element context.
            i: Local index of the test function.
            j: Local index of the trial function.
            jvar: Global number of the variable to differentiate with respect to.

        Returns:
            Jacobian contribution.

        """

    @pf.time_logger(sections=[pf.ASSEMBLY])
    def local_residual(self, ctx: ElementContext) -> np.ndarray:
        """Residual vector of the element.

        Parameters:
            ctx: Element context. The quadrature point it is positioned at is
                ignored; all points are visited.

        Returns:
            np.ndarray (num_nodes,): Residual for each test function.

        """
        re = np.zeros(ctx.num_nodes)
        for qp in range(ctx.num_qp):
            ctx_qp = ctx.at_qp(qp)
            for i in range(ctx.num_nodes):
                re[i] += ctx.jxw[qp] * self.compute_qp_residual(ctx_qp, i)
        return re

    @pf.time_logger(sections=[pf.ASSEMBLY])
    def local_jacobian(self, ctx: ElementContext) -> np.ndarray:
        """Element Jacobian wrt the kernel's own variable.

        Returns:
            np.ndarray (num_nodes, num_nodes): Row ``i`` belongs to test function
            ``i``, column ``j`` to trial function ``j``.

        """
        ke = np.zeros((ctx.num_nodes, ctx.num_nodes))
        for qp in range(ctx.num_qp):
            ctx_qp = ctx.at_qp(qp)
            for i in range(ctx.num_nodes):
                for j in range(ctx.num_nodes):
                    ke[i, j] += ctx.jxw[qp] * self.compute_qp_jacobian(ctx_qp, i, j)
        return ke

    @pf.time_logger(sections=[pf.ASSEMBLY])
    def local_off_diag_jacobian(
        self, ctx: ElementContext, jvar: pf.VariableNumber
    ) -> np.ndarray:
        """Element Jacobian wrt the variable ``jvar``.

        If ``jvar`` is the kernel's own variable, the diagonal block is returned.

        Returns:
            np.ndarray (num_nodes, num_nodes): Local Jacobian block.

        """
        if jvar == self.variable:
            return self.local_jacobian(ctx)

        ke = np.zeros((ctx.num_nodes, ctx.num_nodes))
        for qp in range(ctx.num_qp):
            ctx_qp = ctx.at_qp(qp)
            for i in range(ctx.num_nodes):
                for j in range(ctx.num_nodes):
                    ke[i, j] += ctx.jxw[qp] * self.compute_qp_off_diag_jacobian(
                        ctx_qp, i, j, jvar
                    )
        return ke
