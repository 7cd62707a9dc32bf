"""Region layout over the assignment grid.

Regions are laid out one after another on a row arena. Each call to
Layouter.assign_region runs the region body twice:

1. Shape pass: a RegionShape records the highest offset the body writes,
   giving the region height. Nothing is written to the grid.
2. Assignment pass: the arena allocates `height` rows starting at its cursor
   and a Region writes the body's values at start + offset.

The body must therefore be repeatable (no side effects other than region
writes). Because the arena cursor only moves forward, two regions never share
rows, even when their local offsets overlap.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional, TypeVar

from constraints.columns import Column, ColumnKind
from primitives.field import FieldLike
from protocol.data import AssignmentGrid, Cell, RegionSpan
from protocol.errors import ConfigurationError, NotEnoughRowsAvailable

logger = logging.getLogger(__name__)

T = TypeVar('T')


class RowArena:
    """Monotonic row allocator for a grid of 2^k rows."""

    def __init__(self, k: int):
        self.k = k
        self.n = 1 << k
        self.cursor = 0

    def allocate(self, height: int) -> int:
        """Reserve `height` consecutive rows and return the first one.

        Raises:
            NotEnoughRowsAvailable: If the rows would run past the grid; the
                cursor is left where it was
        """
        if height < 0:
            raise ConfigurationError(f"Region height must be >= 0, got {height}")
        start = self.cursor
        if start + height > self.n:
            raise NotEnoughRowsAvailable(self.k, start + height - 1)
        self.cursor += height
        return start


class RegionBase(ABC):
    """Interface shared by the shape and assignment passes."""

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def _write(self, annotation: str, column: Column, offset: int, value: FieldLike) -> Optional[Cell]:
        pass

    def _assign(self, annotation: str, column: Column, offset: int, value: FieldLike,
                kind: ColumnKind) -> Optional[Cell]:
        if column.kind != kind:
            raise ConfigurationError(
                f"'{annotation}': expected a {kind.value} column, got {column}"
            )
        if offset < 0:
            raise ConfigurationError(f"'{annotation}': negative region offset {offset}")
        return self._write(annotation, column, offset, value)

    def assign_advice(self, annotation: str, column: Column, offset: int, value: FieldLike) -> Optional[Cell]:
        """Assign a witness value to an advice column at a local offset."""
        return self._assign(annotation, column, offset, value, ColumnKind.ADVICE)

    def assign_fixed(self, annotation: str, column: Column, offset: int, value: FieldLike) -> Optional[Cell]:
        """Assign a constant to a fixed column at a local offset."""
        return self._assign(annotation, column, offset, value, ColumnKind.FIXED)

    def enable_selector(self, annotation: str, selector: Column, offset: int) -> Optional[Cell]:
        """Set a selector column to 1 at a local offset."""
        return self.assign_fixed(annotation, selector, offset, 1)


class RegionShape(RegionBase):
    """Shape pass: records the region height without touching the grid."""

    def __init__(self, name: str):
        super().__init__(name)
        self.height = 0

    def _write(self, annotation, column, offset, value):
        self.height = max(self.height, offset + 1)
        return None


class Region(RegionBase):
    """Assignment pass: writes values at absolute row start + offset."""

    def __init__(self, grid: AssignmentGrid, name: str, start: int):
        super().__init__(name)
        self.grid = grid
        self.start = start

    def _write(self, annotation, column, offset, value):
        return self.grid.assign(column, self.start + offset, value, region=self.name)


class Layouter:
    """Lays out regions on a grid, one after another in call order."""

    def __init__(self, grid: AssignmentGrid):
        self.grid = grid
        self.arena = RowArena(grid.k)

    def assign_region(self, name: str, body: Callable[[RegionBase], T]) -> T:
        """Allocate rows for `body`, run it against them and return its result."""
        shape = RegionShape(name)
        body(shape)

        start = self.arena.allocate(shape.height)
        logger.debug("region '%s': rows [%d, %d)", name, start, start + shape.height)

        region = Region(self.grid, name, start)
        result = body(region)
        self.grid.add_region(RegionSpan(name, start, shape.height))
        return result
