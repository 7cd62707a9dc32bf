"""Column registry and gate definitions.

ConstraintSystem is filled once at configure time and is read-only afterwards:

    cs = ConstraintSystem()
    a = cs.advice_column()
    c = cs.instance_column()
    sel = cs.selector()
    cs.create_gate("mul", lambda q: q.query_fixed(sel) * (q.query_instance(c) - ...),
                   selector=sel)

Gate builders receive a VirtualCells object and return one expression or a
list of expressions. They are called exactly once, inside create_gate.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Union

from protocol.errors import ConfigurationError
from .columns import Column, ColumnKind, Rotation
from .expressions import Expression, Query

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Gate:
    """Named set of polynomials that must vanish wherever the gate is enabled.

    Attributes:
        name: Gate name used in violation reports
        polys: Polynomials checked independently at each row
        selector: Fixed column enabling the gate, or None for every row
    """
    name: str
    polys: tuple[Expression, ...]
    selector: Optional[Column] = None

    def queries(self) -> list[Query]:
        """Distinct queries across all polynomials of the gate."""
        seen: dict[Query, None] = {}
        for poly in self.polys:
            for query in poly.queries():
                seen.setdefault(query, None)
        return list(seen)

    def degree(self) -> int:
        return max(poly.degree() for poly in self.polys)


class VirtualCells:
    """Query builder handed to gate builders."""

    def __init__(self, cs: 'ConstraintSystem'):
        self._cs = cs

    def query(self, column: Column, rotation: Union[Rotation, int] = Rotation.cur()) -> Query:
        """Query any registered column at a rotation."""
        if column not in self._cs.columns:
            raise ConfigurationError(f"Column {column} is not registered in this constraint system")
        if isinstance(rotation, int):
            rotation = Rotation(rotation)
        return Query(column, rotation)

    def _query_kind(self, column: Column, rotation, kind: ColumnKind) -> Query:
        if column.kind != kind:
            raise ConfigurationError(f"Expected a {kind.value} column, got {column}")
        return self.query(column, rotation)

    def query_advice(self, column: Column, rotation: Union[Rotation, int] = Rotation.cur()) -> Query:
        return self._query_kind(column, rotation, ColumnKind.ADVICE)

    def query_fixed(self, column: Column, rotation: Union[Rotation, int] = Rotation.cur()) -> Query:
        return self._query_kind(column, rotation, ColumnKind.FIXED)

    def query_instance(self, column: Column, rotation: Union[Rotation, int] = Rotation.cur()) -> Query:
        return self._query_kind(column, rotation, ColumnKind.INSTANCE)


class ConstraintSystem:
    """Registry of columns and gates for one circuit."""

    def __init__(self):
        self.columns: list[Column] = []
        self.selectors: list[Column] = []
        self.gates: list[Gate] = []
        self._counts = {kind: 0 for kind in ColumnKind}

    def _allocate(self, kind: ColumnKind) -> Column:
        column = Column(kind, self._counts[kind])
        self._counts[kind] += 1
        self.columns.append(column)
        logger.debug("allocated column %s", column)
        return column

    def advice_column(self) -> Column:
        return self._allocate(ColumnKind.ADVICE)

    def fixed_column(self) -> Column:
        return self._allocate(ColumnKind.FIXED)

    def instance_column(self) -> Column:
        return self._allocate(ColumnKind.INSTANCE)

    def selector(self) -> Column:
        """Allocate a fixed column whose values act as a gate-enable flag."""
        column = self.fixed_column()
        self.selectors.append(column)
        return column

    def columns_of(self, kind: ColumnKind) -> list[Column]:
        return [c for c in self.columns if c.kind == kind]

    @property
    def instance_columns(self) -> list[Column]:
        return self.columns_of(ColumnKind.INSTANCE)

    def create_gate(
        self,
        name: str,
        builder: Callable[[VirtualCells], Union[Expression, Sequence[Expression]]],
        selector: Optional[Column] = None,
    ) -> Gate:
        """Register a gate built by `builder`.

        Args:
            name: Gate name
            builder: Called once with a VirtualCells; returns the gate polynomial(s)
            selector: Fixed column gating the gate; rows where it is zero are skipped

        Returns:
            The registered Gate

        Raises:
            ConfigurationError: On unregistered columns, a non-fixed selector or
                a builder that returns no expression
        """
        if selector is not None:
            if selector.kind != ColumnKind.FIXED or selector not in self.columns:
                raise ConfigurationError(f"Gate '{name}': selector {selector} is not a registered fixed column")

        result = builder(VirtualCells(self))
        if isinstance(result, Expression):
            polys = (result,)
        elif isinstance(result, (list, tuple)):
            polys = tuple(result)
        else:
            raise ConfigurationError(
                f"Gate '{name}' builder returned {type(result).__name__}, expected an Expression or a list"
            )
        if not polys:
            raise ConfigurationError(f"Gate '{name}' has no polynomials")
        for poly in polys:
            if not isinstance(poly, Expression):
                raise ConfigurationError(
                    f"Gate '{name}' builder returned {type(poly).__name__}, expected an Expression"
                )

        gate = Gate(name, polys, selector)
        self.gates.append(gate)
        logger.debug("created gate '%s' (%d polys, degree %d)", name, len(polys), gate.degree())
        return gate
