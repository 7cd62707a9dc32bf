"""Data structures for witness synthesis and satisfaction checking.

Architecture Overview:
    A circuit run produces one AssignmentGrid:

    1. Layouter / Region (protocol/layouter.py)
       - Translate region-local offsets to absolute rows
       - Write every cell through AssignmentGrid.assign

    2. AssignmentGrid (this module)
       - Write-once mapping Cell -> field element
       - Records the span of every region for error reporting
       - Read by the checker through ConstraintContext implementations

    Instance values are not part of the grid; they are supplied per run to the
    checker.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

import galois

from constraints.columns import Column, ColumnKind
from primitives.field import FF, FieldLike, to_field
from protocol.errors import AssignmentConflict, ConfigurationError, NotEnoughRowsAvailable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Cell:
    """A (column, absolute row) pair - the unit of assignment."""
    column: Column
    row: int

    def __str__(self) -> str:
        return f"{self.column}[row {self.row}]"


@dataclass(frozen=True)
class RegionSpan:
    """Absolute row range occupied by a named region."""
    name: str
    start: int
    height: int

    @property
    def end(self) -> int:
        return self.start + self.height

    def contains(self, row: int) -> bool:
        return self.start <= row < self.end


@dataclass
class AssignmentGrid:
    """Write-once cell assignments for one circuit instance.

    Attributes:
        k: Circuit size parameter; the grid has 2^k rows
        gf: Field class every value belongs to
        cells: Assigned values keyed by Cell
        regions: Spans of every region laid out so far, in allocation order
    """
    k: int
    gf: type[galois.FieldArray] = FF
    cells: dict[Cell, galois.FieldArray] = field(default_factory=dict)
    regions: list[RegionSpan] = field(default_factory=list)

    def __post_init__(self):
        if self.k < 1:
            raise ConfigurationError(f"k must be >= 1, got {self.k}")

    @property
    def n(self) -> int:
        """Number of rows (2^k)."""
        return 1 << self.k

    @property
    def used_rows(self) -> int:
        """One past the highest row holding an assigned cell (0 if empty)."""
        if not self.cells:
            return 0
        return max(cell.row for cell in self.cells) + 1

    def assign(self, column: Column, row: int, value: FieldLike, region: Optional[str] = None) -> Cell:
        """Write a value to (column, row). A cell may only be written once."""
        if column.kind == ColumnKind.INSTANCE:
            raise ConfigurationError(f"Instance column {column} cannot be assigned in the grid")
        if not 0 <= row < self.n:
            raise NotEnoughRowsAvailable(self.k, row)
        cell = Cell(column, row)
        if cell in self.cells:
            raise AssignmentConflict(cell, region)
        self.cells[cell] = to_field(value, self.gf)
        logger.debug("assigned %s = %d", cell, int(self.cells[cell]))
        return cell

    def add_region(self, span: RegionSpan) -> None:
        self.regions.append(span)

    def value(self, column: Column, row: int) -> galois.FieldArray:
        """Value at (column, row); unassigned cells read as zero."""
        return self.cells.get(Cell(column, row), self.gf(0))

    def column_values(self, column: Column) -> galois.FieldArray:
        """Full column as a length-2^k array, zero where unassigned."""
        values = self.gf.Zeros(self.n)
        for cell, value in self.cells.items():
            if cell.column == column:
                values[cell.row] = value
        return values

    def region_at(self, row: int) -> Optional[tuple[str, int]]:
        """(region name, local offset) for the region containing `row`, if any."""
        for span in self.regions:
            if span.contains(row):
                return span.name, row - span.start
        return None
