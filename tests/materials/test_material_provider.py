"""Tests of fields computed from material laws, and of the energy time derivative
evaluated with them.

"""

from __future__ import annotations

import numpy as np
import pytest

import porousflow as pf
from porousflow.applications.test_utils.finite_differences import fd_local_jacobian

# Variable numbers: porepressure, phase-1 saturation, temperature, displacements
P, S, T, DX, DY = 0, 1, 2, 3, 4

# Linear triangle, nodes (0, 0), (1, 0) and (0, 1). Gradients are constant.
_GRADS = np.array([[-1.0, -1.0], [1.0, 0.0], [0.0, 1.0]])
GRAD_PHI = np.repeat(_GRADS[:, np.newaxis, :], 3, axis=1)


def _variables(rng, num_variables):
    values = rng.uniform(0.5, 1.5, (3, num_variables))
    # Small displacements
    values[:, 3:] *= 0.01
    return pf.NodalVariables(values, GRAD_PHI)


def _two_phase_thm_provider(variables, variables_old):
    dictator = pf.PorousFlowDictator([P, S, T, DX, DY], num_phases=2)
    phases = [
        pf.FluidPhase(pf.DensityConstBulk(1.0, 10.0), pf.InternalEnergyIdeal(2.0)),
        pf.FluidPhase(pf.DensityConstBulk(0.5, 2.0), pf.InternalEnergyIdeal(1.0)),
    ]
    provider = pf.MaterialFieldProvider(
        dictator,
        porosity=pf.PorosityTM(dictator, 0.3, 0.7, 0.1, T, [DX, DY]),
        matrix_energy=pf.MatrixInternalEnergy(dictator, 2.0, 1.0, T),
        variables=variables,
        variables_old=variables_old,
        temperature_var=T,
        saturation_model=pf.TwoPhasePS(dictator, P, S),
        fluid_phases=phases,
    )
    return dictator, provider


def _context(provider, dt=0.1):
    return pf.ElementContext(
        dt=dt, test=np.eye(3), grad_phi=GRAD_PHI, jxw=np.full(3, 1 / 6), fields=provider
    )


def test_fields_are_consistent():
    rng = np.random.default_rng(0)
    variables = _variables(rng, 5)
    dictator, provider = _two_phase_thm_provider(variables, variables)
    for node in range(3):
        fields = provider.fields(node)
        fields.check_dimensions(2, 5)
        # Same variables at both time levels
        assert fields.porosity.value == fields.porosity.value_old
        assert np.allclose(fields.phases.density, fields.phases.density_old)
        assert np.isclose(fields.phases.saturation.sum(), 1)


def test_no_change_gives_zero_residual():
    rng = np.random.default_rng(0)
    variables = _variables(rng, 5)
    dictator, provider = _two_phase_thm_provider(variables, variables)
    kernel = pf.EnergyTimeDerivative(T, dictator)
    assert np.allclose(kernel.local_residual(_context(provider)), 0)


def test_heating_increases_stored_energy():
    dictator = pf.PorousFlowDictator([T], num_phases=0)
    old = pf.NodalVariables(np.full((3, 1), 1.0), GRAD_PHI)
    new = pf.NodalVariables(np.full((3, 1), 2.0), GRAD_PHI)
    provider = pf.MaterialFieldProvider(
        dictator,
        porosity=pf.PorosityConst(0.2),
        matrix_energy=pf.MatrixInternalEnergy(dictator, 2.0, 3.0, T),
        variables=new,
        variables_old=old,
    )
    kernel = pf.EnergyTimeDerivative(T, dictator)
    residual = kernel.local_residual(_context(provider, dt=1.0))
    # (1 - 0.2) * 2 * 3 * (2 - 1) for each node, weighted by 1 / 6
    assert np.allclose(residual, 0.8)


@pytest.mark.parametrize("seed", [0, 1])
def test_jacobian_matches_finite_differences(seed):
    """Thermo-mechanical porosity couples nodes through the displacements."""
    rng = np.random.default_rng(seed)
    variables = _variables(rng, 5)
    variables_old = _variables(rng, 5)
    dictator, _ = _two_phase_thm_provider(variables, variables_old)
    kernel = pf.EnergyTimeDerivative(T, dictator)

    def context_for(nodal_variables):
        return _context(_two_phase_thm_provider(nodal_variables, variables_old)[1])

    ctx = context_for(variables)
    for pvar, jvar in enumerate(dictator.variable_numbers):
        jac = kernel.local_off_diag_jacobian(ctx, jvar)
        fd = fd_local_jacobian(kernel, context_for, variables, pvar)
        assert np.allclose(jac, fd, rtol=1e-5, atol=1e-5)

    # Displacements are the only variables coupling different nodes
    for jvar in (P, S, T):
        jac = kernel.local_off_diag_jacobian(ctx, jvar)
        assert np.allclose(jac - np.diag(np.diag(jac)), 0)
    assert not np.allclose(kernel.local_off_diag_jacobian(ctx, DX), 0)


def test_single_phase_jacobian_matches_finite_differences():
    rng = np.random.default_rng(4)
    dictator = pf.PorousFlowDictator([P, T], num_phases=1, variable_names=["p", "T"])
    old = pf.NodalVariables(rng.uniform(0.5, 1.5, (3, 2)), GRAD_PHI)

    def provider_for(nodal_variables):
        return pf.MaterialFieldProvider(
            dictator,
            porosity=pf.PorosityConst(0.1),
            matrix_energy=pf.MatrixInternalEnergy(dictator, 2.5, 1.0, T),
            variables=nodal_variables,
            variables_old=old,
            temperature_var=dictator.variable_number("T"),
            saturation_model=pf.FullySaturated(dictator, dictator.variable_number("p")),
            fluid_phases=[
                pf.FluidPhase(pf.DensityConstBulk(1.0, 5.0), pf.InternalEnergyIdeal(4.0))
            ],
        )

    kernel = pf.EnergyTimeDerivative(T, dictator)
    variables = pf.NodalVariables(rng.uniform(0.5, 1.5, (3, 2)), GRAD_PHI)
    ctx = _context(provider_for(variables))
    for pvar, jvar in enumerate(dictator.variable_numbers):
        fd = fd_local_jacobian(
            kernel, lambda v: _context(provider_for(v)), variables, pvar
        )
        assert np.allclose(
            kernel.local_off_diag_jacobian(ctx, jvar), fd, rtol=1e-5, atol=1e-5
        )


class TestInvalidConfiguration:
    def _laws(self, dictator):
        return {
            "porosity": pf.PorosityConst(0.1),
            "matrix_energy": pf.MatrixInternalEnergy(dictator, 1.0, 1.0, T),
        }

    def test_missing_saturation_model(self):
        dictator = pf.PorousFlowDictator([P, T], num_phases=1)
        variables = pf.NodalVariables(np.ones((3, 2)), GRAD_PHI)
        phase = pf.FluidPhase(pf.DensityConstBulk(1, 1), pf.InternalEnergyIdeal(1))
        with pytest.raises(ValueError, match="saturation model"):
            pf.MaterialFieldProvider(
                dictator,
                **self._laws(dictator),
                variables=variables,
                variables_old=variables,
                temperature_var=T,
                fluid_phases=[phase],
            )

    def test_phase_count_mismatch(self):
        dictator = pf.PorousFlowDictator([P, S, T], num_phases=2)
        variables = pf.NodalVariables(np.ones((3, 3)), GRAD_PHI)
        phase = pf.FluidPhase(pf.DensityConstBulk(1, 1), pf.InternalEnergyIdeal(1))
        with pytest.raises(ValueError):
            pf.MaterialFieldProvider(
                dictator,
                **self._laws(dictator),
                variables=variables,
                variables_old=variables,
                temperature_var=T,
                saturation_model=pf.FullySaturated(dictator, P),
                fluid_phases=[phase, phase],
            )

    def test_variables_mismatch(self):
        dictator = pf.PorousFlowDictator([P, T], num_phases=0)
        variables = pf.NodalVariables(np.ones((3, 3)), GRAD_PHI)
        with pytest.raises(ValueError, match="variables"):
            pf.MaterialFieldProvider(
                dictator,
                **self._laws(dictator),
                variables=variables,
                variables_old=variables,
            )

    def test_saturation_model_without_phases(self):
        dictator = pf.PorousFlowDictator([P, T], num_phases=0)
        variables = pf.NodalVariables(np.ones((3, 2)), GRAD_PHI)
        with pytest.raises(ValueError):
            pf.MaterialFieldProvider(
                dictator,
                **self._laws(dictator),
                variables=variables,
                variables_old=variables,
                saturation_model=pf.FullySaturated(dictator, P),
            )
