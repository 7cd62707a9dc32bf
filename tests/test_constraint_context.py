"""Tests for ConstraintContext ABC and implementations."""

import pytest

from constraints.columns import Column, ColumnKind, Rotation
from constraints.expressions import Query
from primitives.field import FF
from protocol.data import AssignmentGrid

A = Column(ColumnKind.ADVICE, 0)
B = Column(ColumnKind.ADVICE, 1)
C = Column(ColumnKind.INSTANCE, 0)


def _grid(values, k: int = 3) -> AssignmentGrid:
    grid = AssignmentGrid(k=k)
    for row, value in enumerate(values):
        grid.assign(A, row, value)
    return grid


def _ints(values) -> list[int]:
    return [int(v) for v in values]


def test_constraint_context_is_abstract() -> None:
    """ConstraintContext cannot be instantiated."""
    from constraints.base import ConstraintContext

    with pytest.raises(TypeError):
        ConstraintContext()


def test_grid_context_col_returns_array() -> None:
    """GridConstraintContext.col returns the full column."""
    from constraints.base import GridConstraintContext

    grid = _grid([1, 2, 3])
    ctx = GridConstraintContext(grid, {})

    result = ctx.col(A)
    assert len(result) == 8
    assert _ints(result) == [1, 2, 3, 0, 0, 0, 0, 0]


def test_grid_context_next_rotation_shifts() -> None:
    """Rotation.next() shifts values by -1 (circular)."""
    from constraints.base import GridConstraintContext

    ctx = GridConstraintContext(_grid([1, 2, 3, 4, 5, 6, 7, 8]), {})

    # next shifts by -1, so [1,2,3,4,5,6,7,8] -> [2,3,4,5,6,7,8,1]
    assert _ints(ctx.query(A, Rotation.next())) == [2, 3, 4, 5, 6, 7, 8, 1]


def test_grid_context_prev_rotation_shifts() -> None:
    """Rotation.prev() shifts values by +1 (circular)."""
    from constraints.base import GridConstraintContext

    ctx = GridConstraintContext(_grid([1, 2, 3, 4, 5, 6, 7, 8]), {})

    # prev shifts by +1, so [1,2,3,4,5,6,7,8] -> [8,1,2,3,4,5,6,7]
    assert _ints(ctx.query(A, Rotation.prev())) == [8, 1, 2, 3, 4, 5, 6, 7]


def test_grid_context_reads_instance() -> None:
    """Instance columns come from the instance dict, not the grid."""
    from constraints.base import GridConstraintContext

    instance = FF([9, 8, 7, 6, 5, 4, 3, 2])
    ctx = GridConstraintContext(_grid([]), {C: instance})

    assert _ints(ctx.col(C)) == [9, 8, 7, 6, 5, 4, 3, 2]


def test_row_context_col_returns_scalar() -> None:
    """RowConstraintContext.col returns the value at its row."""
    from constraints.base import RowConstraintContext

    ctx = RowConstraintContext(_grid([1, 2, 3]), {}, row=2)
    assert int(ctx.col(A)) == 3


def test_row_context_wraps_around() -> None:
    """Rotations past either end of the grid wrap."""
    from constraints.base import RowConstraintContext

    grid = _grid([1, 2, 3, 4, 5, 6, 7, 8])
    assert int(RowConstraintContext(grid, {}, row=7).query(A, Rotation.next())) == 1
    assert int(RowConstraintContext(grid, {}, row=0).query(A, Rotation.prev())) == 8


def test_row_context_unassigned_reads_zero() -> None:
    """Cells never assigned read as zero."""
    from constraints.base import RowConstraintContext

    ctx = RowConstraintContext(_grid([1]), {}, row=0)
    assert int(ctx.col(B)) == 0


def test_contexts_agree_row_by_row() -> None:
    """Grid and row evaluation of the same expression match at every row."""
    from constraints.base import GridConstraintContext, RowConstraintContext

    grid = _grid([3, 1, 4, 1, 5, 9, 2, 6])
    for row, value in enumerate([2, 7, 1, 8]):
        grid.assign(B, row, value)
    instance = FF([6, 7, 4, 8, 0, 0, 0, 1])
    instances = {C: instance}

    poly = Query(C) - Query(A) * Query(B, Rotation.next()) + 2
    by_grid = poly.evaluate(GridConstraintContext(grid, instances))
    by_row = [poly.evaluate(RowConstraintContext(grid, instances, row)) for row in range(grid.n)]

    assert _ints(by_grid) == _ints(by_row)


def test_grid_context_does_not_mutate_grid() -> None:
    """Evaluation only reads the grid."""
    from constraints.base import GridConstraintContext

    grid = _grid([1, 2, 3])
    before = {cell: int(v) for cell, v in grid.cells.items()}
    ctx = GridConstraintContext(grid, {})
    (Query(A, Rotation.next()) * 2).evaluate(ctx)
    assert {cell: int(v) for cell, v in grid.cells.items()} == before
