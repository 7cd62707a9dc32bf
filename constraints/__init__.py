"""Constraint definition modules.

This package holds the configure-time half of a circuit: column handles,
gate expression trees, the ConstraintSystem registry, and the contexts that
evaluate gate expressions against an assignment grid.

Circuit-specific gate definitions are ConstraintModules. The
CONSTRAINT_REGISTRY dict maps circuit names to module classes.
"""

from .base import (
    ConstraintContext,
    ConstraintModule,
    GridConstraintContext,
    RowConstraintContext,
)
from .columns import Column, ColumnKind, Rotation
from .expressions import Add, Constant, Expression, Mul, Neg, Query, Sub
from .r1cs import R1CSConfig, R1CSConstraints
from .system import ConstraintSystem, Gate, VirtualCells

# Registry mapping circuit names to constraint module classes
CONSTRAINT_REGISTRY: dict[str, type[ConstraintModule]] = {
    "R1CS": R1CSConstraints,
}


def get_constraint_module(circuit_name: str, **kwargs) -> ConstraintModule:
    """Get constraint module instance for a circuit.

    Args:
        circuit_name: Name of the circuit (e.g., 'R1CS')
        **kwargs: Passed to the module constructor (e.g., mode=GateMode.UNCONDITIONAL)

    Returns:
        ConstraintModule instance for the circuit

    Raises:
        KeyError: If no constraint module is registered for the circuit
    """
    if circuit_name in CONSTRAINT_REGISTRY:
        return CONSTRAINT_REGISTRY[circuit_name](**kwargs)
    raise KeyError(
        f"No constraint module for circuit '{circuit_name}'. "
        f"Available: {list(CONSTRAINT_REGISTRY.keys())}"
    )


__all__ = [
    "Column",
    "ColumnKind",
    "Rotation",
    "Expression",
    "Constant",
    "Query",
    "Add",
    "Sub",
    "Mul",
    "Neg",
    "ConstraintSystem",
    "Gate",
    "VirtualCells",
    "ConstraintContext",
    "GridConstraintContext",
    "RowConstraintContext",
    "ConstraintModule",
    "R1CSConfig",
    "R1CSConstraints",
    "CONSTRAINT_REGISTRY",
    "get_constraint_module",
]
