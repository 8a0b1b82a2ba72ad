"""
Defines types commonly used in PorousFlow.
"""

from typing import Optional

__all__ = [
    "VariableNumber",
    "CoupledIndex",
    "OptionalIndex",
]

VariableNumber = int
"""Global identifier of a primary unknown, as numbered by the host framework."""

CoupledIndex = int
"""Dense index in ``[0, P)`` of a primary unknown among the porous-flow variables.

Derivative vectors of nodal fields are indexed by this, never by the
:data:`VariableNumber`.

"""

OptionalIndex = Optional[CoupledIndex]
"""Result of a registry lookup: the coupled index, or ``None`` if not coupled."""
