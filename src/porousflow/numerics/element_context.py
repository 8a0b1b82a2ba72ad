"""Element-level data read by kernels during one residual or Jacobian evaluation."""

from __future__ import annotations

from dataclasses import dataclass, replace

import numpy as np

from porousflow.numerics.fields import FieldProvider


@dataclass(frozen=True)
class ElementContext:
    """Time step, shape functions and field provider of a single element.

    The fields are lumped to the nodes, and gradients of trial functions are needed
    at the nodes only.

    Raises:
        ValueError: If the time step is not strictly positive and finite, or if the
            shapes of the shape function arrays are inconsistent.

    """

    dt: float
    """Time step size."""

    test: np.ndarray
    """Test function values, shape ``(num_nodes, num_qp)``."""

    grad_phi: np.ndarray
    """Trial function gradients at the nodes, shape ``(num_nodes, num_nodes, dim)``.

    ``grad_phi[j, i]`` is the gradient of trial function ``j`` evaluated at node
    ``i``.

    """

    jxw: np.ndarray
    """Quadrature weights times Jacobian determinants, shape ``(num_qp,)``."""

    fields: FieldProvider
    """Provider of nodal field snapshots for this element."""

    qp: int = 0
    """Quadrature point currently evaluated."""

    def __post_init__(self) -> None:
        if not np.isfinite(self.dt) or self.dt <= 0:
            raise ValueError(f"Time step must be positive and finite, got {self.dt}.")

        test = np.asarray(self.test, dtype=float)
        grad_phi = np.asarray(self.grad_phi, dtype=float)
        jxw = np.asarray(self.jxw, dtype=float)
        if test.ndim != 2:
            raise ValueError("Test function values must be of shape (nodes, qps).")
        num_nodes, num_qp = test.shape
        if grad_phi.ndim != 3 or grad_phi.shape[:2] != (num_nodes, num_nodes):
            raise ValueError(
                f"Trial function gradients have shape {grad_phi.shape}, expected"
                f" ({num_nodes}, {num_nodes}, dim)."
            )
        if jxw.shape != (num_qp,):
            raise ValueError(
                f"Got {jxw.size} quadrature weights for {num_qp} quadrature points."
            )
        if not 0 <= self.qp < num_qp:
            raise ValueError(f"Quadrature point {self.qp} out of range.")

        # Bypass the freezing to store the arrays in canonical form.
        object.__setattr__(self, "test", test)
        object.__setattr__(self, "grad_phi", grad_phi)
        object.__setattr__(self, "jxw", jxw)

    @property
    def num_nodes(self) -> int:
        return self.test.shape[0]

    @property
    def num_qp(self) -> int:
        return self.test.shape[1]

    @property
    def dim(self) -> int:
        return self.grad_phi.shape[2]

    def at_qp(self, qp: int) -> ElementContext:
        """Copy of the context positioned at another quadrature point."""
        return replace(self, qp=qp)

    def test_value(self, i: int) -> float:
        """Value of test function ``i`` at the current quadrature point."""
        return self.test[i, self.qp]

    def trial_gradient(self, j: int, i: int) -> np.ndarray:
        """Gradient of trial function ``j`` at node ``i``."""
        return self.grad_phi[j, i]
