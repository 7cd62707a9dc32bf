"""Error taxonomy for circuit configuration, synthesis and checking.

Three families:
    - programming errors (ConfigurationError, AssignmentConflict,
      NotEnoughRowsAvailable) abort synthesis immediately
    - caller errors (InstanceLengthMismatch, InstanceTooLarge) mean the public
      inputs must be resupplied
    - witness errors (ConstraintNotSatisfied) are reported by the checker, and
      only raised in strict mode
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from protocol.data import Cell


class CircuitError(ValueError):
    """Base class for every error raised by this package."""


class ConfigurationError(CircuitError):
    """Structural misuse of columns, gates or circuit parameters."""


class AssignmentConflict(CircuitError):
    """A cell was written twice."""

    def __init__(self, cell: 'Cell', region: Optional[str] = None):
        self.cell = cell
        self.region = region
        where = f" in region '{region}'" if region is not None else ""
        super().__init__(f"Cell {cell} assigned twice{where}")


class NotEnoughRowsAvailable(CircuitError):
    """An assignment landed outside the 2^k rows of the circuit."""

    def __init__(self, k: int, row: int):
        self.k = k
        self.row = row
        super().__init__(
            f"Row {row} is outside the circuit (k={k}, {1 << k} rows). "
            f"Increase k."
        )


class InstanceLengthMismatch(CircuitError):
    """The instance vector does not cover every row a gate reads from it."""

    def __init__(self, needed: int, got: int, column=None):
        self.needed = needed
        self.got = got
        self.column = column
        super().__init__(
            f"Instance column {column} needs at least {needed} values, got {got}"
        )


class InstanceTooLarge(CircuitError):
    """The instance vector has more values than the circuit has rows."""

    def __init__(self, k: int, got: int):
        self.k = k
        self.got = got
        super().__init__(f"Instance has {got} values but the circuit only has {1 << k} rows (k={k})")


class ConstraintNotSatisfied(CircuitError):
    """A gate polynomial evaluated to a nonzero value at a row.

    Attributes:
        gate_name: Name of the failing gate
        row: Absolute row where the gate was evaluated
        constraint_index: Index of the failing polynomial within the gate
        region: (region name, local offset) if the row lies inside a region
        cell_values: [(column, rotation, value)] for every query of the polynomial
    """

    def __init__(
        self,
        gate_name: str,
        row: int,
        constraint_index: int = 0,
        region: Optional[tuple[str, int]] = None,
        cell_values: Optional[list] = None,
    ):
        self.gate_name = gate_name
        self.row = row
        self.constraint_index = constraint_index
        self.region = region
        self.cell_values = cell_values or []
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.region is not None:
            location = f"in region '{self.region[0]}' at offset {self.region[1]} (row {self.row})"
        else:
            location = f"outside any region at row {self.row}"
        msg = f"Constraint {self.constraint_index} in gate '{self.gate_name}' is not satisfied {location}"
        for column, rotation, value in self.cell_values:
            msg += f"\n  {column}@{rotation} = {int(value)}"
        return msg

    def key(self) -> tuple[str, int, int]:
        """(gate_name, constraint_index, row): identity used for comparing reports."""
        return (self.gate_name, self.constraint_index, self.row)

    def __eq__(self, other):
        if not isinstance(other, ConstraintNotSatisfied):
            return NotImplemented
        return self.key() == other.key() and self.region == other.region

    def __hash__(self):
        return hash(self.key())
