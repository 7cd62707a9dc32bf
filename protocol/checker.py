"""Satisfaction checking of an assignment grid against its gates.

For every row r in [0, 2^k) and every gate, each gate polynomial is evaluated
with Query(col, rot) resolved to the value at row (r + rot) mod 2^k: the grid
for advice/fixed columns, the instance vector for instance columns. Cells that
were never assigned read as zero. Rows where a gate's selector is zero are
skipped. A gate holds at a row iff every polynomial is exactly zero there.

Two modes:
    STRICT:      row by row (gates in creation order), raise the first
                 ConstraintNotSatisfied
    DIAGNOSTIC:  evaluate each gate over the whole grid at once and return every
                 violation, ordered by gate, polynomial, then row

Checking never mutates the grid or the instance, so repeated calls on the same
inputs return identical results.
"""

import logging
from enum import Enum
from typing import Optional, Sequence

import galois
import numpy as np

from constraints import (
    Column,
    ColumnKind,
    ConstraintSystem,
    Expression,
    Gate,
    GridConstraintContext,
    RowConstraintContext,
)
from primitives.field import is_zero, nonzero_rows, to_field_array
from protocol.circuit import Circuit, synthesize
from protocol.data import AssignmentGrid
from protocol.errors import (
    ConfigurationError,
    ConstraintNotSatisfied,
    InstanceLengthMismatch,
    InstanceTooLarge,
)

logger = logging.getLogger(__name__)

Instances = Sequence  # one sequence per instance column, or a flat one for a single column


class CheckMode(Enum):
    STRICT = "strict"
    DIAGNOSTIC = "diagnostic"


def _is_flat(instances) -> bool:
    """True if `instances` is a single vector rather than one vector per column."""
    for value in instances:
        if isinstance(value, galois.FieldArray):
            return value.ndim == 0
        return not isinstance(value, (list, tuple, np.ndarray))
    return True


class SatisfactionChecker:
    """Checks grids produced for the gates of one ConstraintSystem."""

    def __init__(self, cs: ConstraintSystem):
        self.cs = cs

    # --- Instance handling ---

    def _active_rows(self, grid: AssignmentGrid, gate: Gate) -> np.ndarray:
        """Rows where `gate` reads real data: selector rows, else assigned rows."""
        if gate.selector is not None:
            return nonzero_rows(grid.column_values(gate.selector))
        return np.arange(grid.used_rows)

    def required_instance_lengths(self, grid: AssignmentGrid) -> dict[Column, int]:
        """Minimum length of each instance vector: highest row read + 1."""
        needed = {column: 0 for column in self.cs.instance_columns}
        for gate in self.cs.gates:
            instance_queries = [q for q in gate.queries() if q.column.kind == ColumnKind.INSTANCE]
            if not instance_queries:
                continue
            rows = self._active_rows(grid, gate)
            if len(rows) == 0:
                continue
            for query in instance_queries:
                referenced = (rows + int(query.rotation)) % grid.n
                needed[query.column] = max(needed[query.column], int(referenced.max()) + 1)
        return needed

    def prepare_instances(self, grid: AssignmentGrid, instances: Optional[Instances]) -> dict[Column, galois.FieldArray]:
        """Validate instance vectors and zero-pad them to 2^k rows.

        Raises:
            ConfigurationError: If the number of vectors differs from the number
                of instance columns
            InstanceTooLarge: If a vector is longer than 2^k
            InstanceLengthMismatch: If a vector is shorter than the rows its
                gates read
        """
        columns = self.cs.instance_columns
        instances = list(instances) if instances is not None else []
        if len(columns) == 1 and _is_flat(instances):
            instances = [instances]
        if len(instances) != len(columns):
            raise ConfigurationError(
                f"Expected {len(columns)} instance vectors, got {len(instances)}"
            )

        for values in instances:
            if len(values) > grid.n:
                raise InstanceTooLarge(grid.k, len(values))

        needed = self.required_instance_lengths(grid)
        prepared = {}
        for column, values in zip(columns, instances):
            if len(values) < needed[column]:
                raise InstanceLengthMismatch(needed[column], len(values), column)
            padded = grid.gf.Zeros(grid.n)
            if len(values):
                padded[:len(values)] = to_field_array(values, grid.gf)
            prepared[column] = padded
        return prepared

    # --- Evaluation ---

    def _violation(self, grid: AssignmentGrid, prepared, gate: Gate, index: int,
                   poly: Expression, row: int) -> ConstraintNotSatisfied:
        ctx = RowConstraintContext(grid, prepared, row)
        cell_values = [(q.column, q.rotation, q.evaluate(ctx)) for q in poly.queries()]
        return ConstraintNotSatisfied(
            gate.name, row, constraint_index=index,
            region=grid.region_at(row), cell_values=cell_values,
        )

    def _first_violation(self, grid: AssignmentGrid, prepared) -> Optional[ConstraintNotSatisfied]:
        for row in range(grid.n):
            ctx = RowConstraintContext(grid, prepared, row)
            for gate in self.cs.gates:
                if gate.selector is not None and is_zero(ctx.col(gate.selector)):
                    continue
                for index, poly in enumerate(gate.polys):
                    if not is_zero(poly.evaluate(ctx)):
                        return self._violation(grid, prepared, gate, index, poly, row)
        return None

    def _all_violations(self, grid: AssignmentGrid, prepared) -> list[ConstraintNotSatisfied]:
        ctx = GridConstraintContext(grid, prepared)
        violations = []
        for gate in self.cs.gates:
            enabled = ctx.col(gate.selector) if gate.selector is not None else None
            for index, poly in enumerate(gate.polys):
                values = poly.evaluate(ctx)
                if values.ndim == 0:
                    # Constant polynomial: same value on every row
                    values = grid.gf.Zeros(grid.n) + values
                for row in nonzero_rows(values):
                    if enabled is not None and is_zero(enabled[row]):
                        continue
                    violations.append(self._violation(grid, prepared, gate, index, poly, int(row)))
        return violations

    def assert_satisfied(self, grid: AssignmentGrid, instances: Optional[Instances]) -> None:
        """Strict mode: raise the first ConstraintNotSatisfied found."""
        prepared = self.prepare_instances(grid, instances)
        violation = self._first_violation(grid, prepared)
        if violation is not None:
            raise violation
        logger.info("all %d gates satisfied over %d rows", len(self.cs.gates), grid.n)

    def verify(self, grid: AssignmentGrid, instances: Optional[Instances]) -> list[ConstraintNotSatisfied]:
        """Diagnostic mode: return every violation (empty list if satisfied)."""
        prepared = self.prepare_instances(grid, instances)
        violations = self._all_violations(grid, prepared)
        if violations:
            logger.warning("%d constraint violations over %d rows", len(violations), grid.n)
        else:
            logger.info("all %d gates satisfied over %d rows", len(self.cs.gates), grid.n)
        return violations

    def check(self, grid: AssignmentGrid, instances: Optional[Instances],
              mode: CheckMode = CheckMode.STRICT) -> list[ConstraintNotSatisfied]:
        """Check in `mode`; returns [] on success, raises in STRICT on failure."""
        if mode is CheckMode.STRICT:
            self.assert_satisfied(grid, instances)
            return []
        return self.verify(grid, instances)


def check(cs: ConstraintSystem, grid: AssignmentGrid, instances: Optional[Instances],
          mode: CheckMode = CheckMode.STRICT) -> list[ConstraintNotSatisfied]:
    """Check `grid` against the gates of `cs`. See SatisfactionChecker.check."""
    return SatisfactionChecker(cs).check(grid, instances, mode)


class MockProver:
    """Configure, synthesize and check a circuit without producing a proof.

    Example:
        prover = MockProver.run(4, R1CSCircuit(a=[5, 4, 3], b=[3, 4, 10]), [[15, 16, 30]])
        prover.assert_satisfied()

    Passing k=None takes the row parameter from the circuit's CircuitConfig; an
    explicit k must agree with it.
    """

    def __init__(self, k: int, cs: ConstraintSystem, grid: AssignmentGrid, instances: Optional[Instances]):
        self.k = k
        self.cs = cs
        self.grid = grid
        self.instances = instances
        self._checker = SatisfactionChecker(cs)
        # Fail at run time, not at verify time, on malformed instances
        self._checker.prepare_instances(grid, instances)

    @classmethod
    def run(cls, k: Optional[int], circuit: Circuit, instances: Optional[Instances]) -> 'MockProver':
        cs, grid = synthesize(circuit, k)
        return cls(grid.k, cs, grid, instances)

    def verify(self) -> list[ConstraintNotSatisfied]:
        return self._checker.verify(self.grid, self.instances)

    def assert_satisfied(self) -> None:
        self._checker.assert_satisfied(self.grid, self.instances)
