"""Synthetic nodal fields for testing kernels.

Two kinds of synthetic data are provided: independent random snapshots, for tests of
structural properties of kernels, and affine fields, which depend consistently on
the nodal variables so that Jacobians can be compared with finite differences.

"""

from __future__ import annotations

from typing import Optional

import numpy as np

from porousflow.materials.nodal_variables import NodalVariables
from porousflow.numerics.fields import NodalFields, NodalQuantity, PhaseFields


def random_nodal_fields(
    rng: np.random.Generator, num_phases: int, num_variables: int, dim: int = 2
) -> NodalFields:
    """Random, finite snapshot with the shapes expected for the given sizes.

    Values are drawn in physically admissible ranges (porosity and saturation in
    [0, 1], positive densities and energies); derivatives have either sign.

    """
    porosity = NodalQuantity(
        value=rng.uniform(0.05, 0.5),
        value_old=rng.uniform(0.05, 0.5),
        d_dvar=rng.normal(size=num_variables),
        d_dgradvar=rng.normal(size=(num_variables, dim)),
    )
    rock_energy = NodalQuantity(
        value=rng.uniform(1, 10),
        value_old=rng.uniform(1, 10),
        d_dvar=rng.normal(size=num_variables),
    )
    phases = None
    if num_phases > 0:
        shape = (num_phases, num_variables)
        phases = PhaseFields(
            density=rng.uniform(1, 10, num_phases),
            density_old=rng.uniform(1, 10, num_phases),
            ddensity_dvar=rng.normal(size=shape),
            saturation=rng.uniform(0, 1, num_phases),
            saturation_old=rng.uniform(0, 1, num_phases),
            dsaturation_dvar=rng.normal(size=shape),
            internal_energy=rng.uniform(1, 10, num_phases),
            internal_energy_old=rng.uniform(1, 10, num_phases),
            dinternal_energy_dvar=rng.normal(size=shape),
        )
    return NodalFields(porosity=porosity, rock_energy=rock_energy, phases=phases)


class AffineFieldProvider:
    """Fields that are affine functions of the nodal variables.

    At node ``i``, every field ``f`` is ``f0 + a . U[i]``, with random coefficients
    per node. Porosity in addition depends on the reconstructed gradients,
    ``phi = phi0 + a . U[i] + G : grad U(i)``. Old values are random constants.

    Parameters:
        variables: Nodal variables the fields are evaluated from.
        num_phases: Number of fluid phases.
        rng: Random generator for the coefficients.
        coefficients: Coefficients of another provider, to evaluate the same fields
            for different variables. Generated if not given.

    """

    def __init__(
        self,
        variables: NodalVariables,
        num_phases: int,
        rng: Optional[np.random.Generator] = None,
        coefficients: Optional[dict[str, np.ndarray]] = None,
    ) -> None:
        self.variables = variables
        self.num_phases = num_phases
        if coefficients is None:
            if rng is None:
                rng = np.random.default_rng()
            coefficients = self._random_coefficients(rng)
        self.coefficients = coefficients

    def _random_coefficients(self, rng: np.random.Generator) -> dict[str, np.ndarray]:
        n = self.variables.num_nodes
        p = self.variables.num_variables
        dim = self.variables.dim
        N = self.num_phases
        c = {
            "porosity": rng.uniform(0.1, 0.3, n),
            "porosity_a": rng.uniform(-0.05, 0.05, (n, p)),
            "porosity_g": rng.uniform(-0.05, 0.05, (n, p, dim)),
            "porosity_old": rng.uniform(0.1, 0.3, n),
            "rock_energy": rng.uniform(1, 2, n),
            "rock_energy_a": rng.normal(size=(n, p)),
            "rock_energy_old": rng.uniform(1, 2, n),
        }
        for name in ("density", "saturation", "internal_energy"):
            c[name] = rng.uniform(0.5, 1, (n, N))
            c[name + "_a"] = rng.uniform(-0.5, 0.5, (n, N, p))
            c[name + "_old"] = rng.uniform(0.5, 1, (n, N))
        return c

    def with_variables(self, variables: NodalVariables) -> AffineFieldProvider:
        """The same fields, evaluated from other nodal variables."""
        return AffineFieldProvider(
            variables, self.num_phases, coefficients=self.coefficients
        )

    def fields(self, node: int) -> NodalFields:
        c = self.coefficients
        u = self.variables.values(node)
        grad_u = self.variables.gradients(node)

        porosity = NodalQuantity(
            value=c["porosity"][node]
            + c["porosity_a"][node] @ u
            + np.sum(c["porosity_g"][node] * grad_u),
            value_old=c["porosity_old"][node],
            d_dvar=c["porosity_a"][node],
            d_dgradvar=c["porosity_g"][node],
        )
        rock_energy = NodalQuantity(
            value=c["rock_energy"][node] + c["rock_energy_a"][node] @ u,
            value_old=c["rock_energy_old"][node],
            d_dvar=c["rock_energy_a"][node],
        )

        phases = None
        if self.num_phases > 0:
            kw = {}
            for name in ("density", "saturation", "internal_energy"):
                deriv = c[name + "_a"][node]
                kw[name] = c[name][node] + deriv @ u
                kw[name + "_old"] = c[name + "_old"][node]
                kw["d" + name + "_dvar"] = deriv
            phases = PhaseFields(**kw)
        return NodalFields(porosity=porosity, rock_energy=rock_energy, phases=phases)
