"""Time derivative of the energy stored in a porous medium.

The stored energy per unit volume is the internal energy of the porous skeleton plus
that of the fluid phases in the pore space,

.. math::

    E = (1 - \\phi) e_{rock} + \\sum_p \\phi \\rho_p s_p u_p,

and the kernel discretizes :math:`\\partial E / \\partial t` with a backward Euler
difference. All fields are lumped to the nodes, which makes the mass matrix diagonal.

"""

from __future__ import annotations

import logging

import numpy as np

import porousflow as pf
from porousflow.numerics.dictator import PorousFlowDictator
from porousflow.numerics.element_context import ElementContext
from porousflow.numerics.fields import NodalFields
from porousflow.numerics.time_kernel import TimeKernel

logger = logging.getLogger(__name__)


class EnergyTimeDerivative(TimeKernel):
    """Lumped time derivative of heat energy density.

    Parameters:
        variable: Global number of the variable whose equation the kernel belongs to,
            normally the temperature.
        dictator: Registry of the porous-flow variables and the number of phases.

    """

    def __init__(self, variable: pf.VariableNumber, dictator: PorousFlowDictator):
        super().__init__(variable)
        self._dictator = dictator
        self._var_is_porflow_var = dictator.is_porous_flow_variable(variable)
        self._num_phases = dictator.num_phases

        if not self._var_is_porflow_var:
            logger.debug(
                f"Variable {variable} is not a porous-flow variable. The diagonal"
                " Jacobian of the energy time derivative is zero."
            )

    def compute_qp_residual(self, ctx: ElementContext, i: int) -> float:
        fields = self._nodal_fields(ctx, i)
        porosity = fields.porosity
        rock = fields.rock_energy

        energy = (1.0 - porosity.value) * rock.value
        energy_old = (1.0 - porosity.value_old) * rock.value_old
        if fields.phases is not None:
            ph = fields.phases
            energy += porosity.value * np.sum(
                ph.density * ph.saturation * ph.internal_energy
            )
            energy_old += porosity.value_old * np.sum(
                ph.density_old * ph.saturation_old * ph.internal_energy_old
            )

        return ctx.test_value(i) * (energy - energy_old) / ctx.dt

    def compute_qp_jacobian(self, ctx: ElementContext, i: int, j: int) -> float:
        # If the variable is not a porous-flow variable, the diag Jacobian terms are 0
        if not self._var_is_porflow_var:
            return 0.0
        pvar = self._dictator.porous_flow_variable_num(self.variable)
        return self._compute_qp_jac(ctx, i, j, pvar)

    def compute_qp_off_diag_jacobian(
        self, ctx: ElementContext, i: int, j: int, jvar: pf.VariableNumber
    ) -> float:
        pvar = self._dictator.porous_flow_variable_num(jvar)
        # Derivatives wrt variables other than porous-flow variables are 0
        if pvar is None:
            return 0.0
        return self._compute_qp_jac(ctx, i, j, pvar)

    def _compute_qp_jac(
        self, ctx: ElementContext, i: int, j: int, pvar: pf.CoupledIndex
    ) -> float:
        """Derivative of the residual at node ``i`` wrt variable ``pvar`` at ``j``."""
        fields = self._nodal_fields(ctx, i)
        porosity = fields.porosity
        rock = fields.rock_energy
        ph = fields.phases

        # Energy per unit pore volume, summed over phases
        fluid_energy = 0.0
        if ph is not None:
            fluid_energy = np.sum(ph.density * ph.saturation * ph.internal_energy)

        # Porosity depends on variables lumped to the nodes, but also on gradients of
        # variables, which are not lumped. The latter couple node i to its neighbours.
        dporosity_grad = np.dot(porosity.d_dgradvar[pvar], ctx.trial_gradient(j, i))
        denergy = -dporosity_grad * rock.value
        denergy += fluid_energy * dporosity_grad

        if i != j:
            return ctx.test_value(i) * denergy / ctx.dt

        # All remaining fields are lumped, thus only nonzero for i == j
        denergy += -porosity.d_dvar[pvar] * rock.value
        denergy += (1.0 - porosity.value) * rock.d_dvar[pvar]
        if ph is not None:
            denergy += porosity.value * np.sum(
                ph.ddensity_dvar[:, pvar] * ph.saturation * ph.internal_energy
                + ph.density * ph.dsaturation_dvar[:, pvar] * ph.internal_energy
                + ph.density * ph.saturation * ph.dinternal_energy_dvar[:, pvar]
            )
            denergy += fluid_energy * porosity.d_dvar[pvar]

        return ctx.test_value(i) * denergy / ctx.dt

    def _nodal_fields(self, ctx: ElementContext, i: int) -> NodalFields:
        fields = ctx.fields.fields(i)
        fields.check_dimensions(self._num_phases, self._dictator.num_variables)
        grad_shape = np.shape(fields.porosity.d_dgradvar)
        if grad_shape[1] != ctx.dim:
            raise ValueError(
                f"Gradient derivative of porosity has shape {grad_shape}, but the"
                f" element has dimension {ctx.dim}."
            )
        return fields
