"""Protocol - Grid layout, configuration and the error taxonomy.

The pipeline entry points import the constraint and witness packages, so they
are imported from their own modules:

    from protocol.circuit import R1CSCircuit, synthesize
    from protocol.checker import CheckMode, MockProver, check
"""

from protocol.errors import (
    AssignmentConflict,
    CircuitError,
    ConfigurationError,
    ConstraintNotSatisfied,
    InstanceLengthMismatch,
    InstanceTooLarge,
    NotEnoughRowsAvailable,
)
from protocol.data import AssignmentGrid, Cell, RegionSpan
from protocol.config import CircuitConfig, GateMode, RowOffset
from protocol.layouter import Layouter, Region, RegionShape, RowArena

__all__ = [
    # Errors
    "CircuitError",
    "ConfigurationError",
    "AssignmentConflict",
    "NotEnoughRowsAvailable",
    "InstanceLengthMismatch",
    "InstanceTooLarge",
    "ConstraintNotSatisfied",
    # Grid
    "AssignmentGrid",
    "Cell",
    "RegionSpan",
    # Configuration
    "CircuitConfig",
    "GateMode",
    "RowOffset",
    # Layout
    "Layouter",
    "Region",
    "RegionShape",
    "RowArena",
]
