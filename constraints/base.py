"""Base classes for gate evaluation.

ConstraintContext provides a uniform interface for evaluating gate expressions
that works both for a single row (returns scalars) and for the whole grid at
once (returns arrays). The same expression tree is evaluated in both contexts
thanks to galois broadcasting.

Example:
    poly = sel * (c - a * b)

    # Whole grid: one array of 2^k evaluations
    values = poly.evaluate(GridConstraintContext(grid, instances))

    # Single row: one field scalar
    value = poly.evaluate(RowConstraintContext(grid, instances, row=3))

Rotations wrap around the 2^k rows, so Rotation.next() at the last row reads
row 0.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Union

import galois
import numpy as np

from primitives.field import to_field
from .columns import Column, ColumnKind, Rotation

if TYPE_CHECKING:
    from protocol.data import AssignmentGrid
    from .system import ConstraintSystem

FFPoly = galois.FieldArray  # Array of field elements, one per row


class ConstraintContext(ABC):
    """Uniform interface for gate evaluation - works per row and per grid."""

    @abstractmethod
    def query(self, column: Column, rotation: Rotation) -> Union[FFPoly, galois.FieldArray]:
        """Get column value at current row + rotation.

        Returns:
            Grid context: array of values for every row (rolled by rotation)
            Row context: scalar value at one row
        """
        pass

    @abstractmethod
    def constant(self, value: int) -> galois.FieldArray:
        """Lift an integer constant into the field (scalar in both contexts)."""
        pass

    def col(self, column: Column) -> Union[FFPoly, galois.FieldArray]:
        """Get column at current row."""
        return self.query(column, Rotation.cur())


class GridConstraintContext(ConstraintContext):
    """Grid implementation - returns arrays over all 2^k rows.

    Column arrays are materialised lazily and cached; the grid itself is only
    read.
    """

    def __init__(self, grid: 'AssignmentGrid', instances: dict[Column, FFPoly]):
        self._grid = grid
        self._instances = instances
        self._cache: dict[Column, FFPoly] = {}

    def _column(self, column: Column) -> FFPoly:
        if column not in self._cache:
            if column.kind == ColumnKind.INSTANCE:
                self._cache[column] = self._instances[column]
            else:
                self._cache[column] = self._grid.column_values(column)
        return self._cache[column]

    def query(self, column: Column, rotation: Rotation) -> FFPoly:
        # Row r reads row r + rotation, hence the negative roll
        return np.roll(self._column(column), -int(rotation))

    def constant(self, value: int) -> galois.FieldArray:
        return to_field(value, self._grid.gf)


class RowConstraintContext(ConstraintContext):
    """Row implementation - returns scalars at a single row."""

    def __init__(self, grid: 'AssignmentGrid', instances: dict[Column, FFPoly], row: int):
        self._grid = grid
        self._instances = instances
        self.row = row

    def _row(self, rotation: Rotation) -> int:
        return (self.row + int(rotation)) % self._grid.n

    def query(self, column: Column, rotation: Rotation) -> galois.FieldArray:
        row = self._row(rotation)
        if column.kind == ColumnKind.INSTANCE:
            return self._instances[column][row]
        return self._grid.value(column, row)

    def constant(self, value: int) -> galois.FieldArray:
        return to_field(value, self._grid.gf)


class ConstraintModule(ABC):
    """Per-circuit gate definitions.

    A constraint module allocates the columns its gates need and registers the
    gates in a ConstraintSystem. The returned config carries the column
    handles the matching witness module writes to.
    """

    @abstractmethod
    def configure(self, cs: 'ConstraintSystem') -> Any:
        """Allocate columns and create gates.

        Args:
            cs: ConstraintSystem to register columns and gates in

        Returns:
            Module-specific config holding the allocated columns
        """
        pass
