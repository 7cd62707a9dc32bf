"""Gate polynomials as explicit expression trees.

A gate polynomial is built once at configure time from column queries and
field arithmetic, then evaluated by the checker through a ConstraintContext:

    a = Query(col_a, Rotation.cur())
    b = Query(col_b, Rotation.cur())
    c = Query(col_c, Rotation.cur())
    poly = sel * (c - a * b)

    poly.evaluate(RowConstraintContext(...))   # scalar at one row
    poly.evaluate(GridConstraintContext(...))  # array over all rows

The tree never calls back into user code, so it can be inspected (queries,
degree) and evaluated any number of times.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

import galois

from .columns import Column, Rotation

if TYPE_CHECKING:
    from .base import ConstraintContext


def _lift(value) -> 'Expression':
    """Wrap ints and field scalars as Constant; pass expressions through."""
    if isinstance(value, Expression):
        return value
    if isinstance(value, galois.FieldArray):
        return Constant(int(value))
    if isinstance(value, int):
        return Constant(value)
    raise TypeError(f"Cannot use {type(value).__name__} in a gate expression")


class Expression(ABC):
    """Node of a gate polynomial."""

    @abstractmethod
    def evaluate(self, ctx: 'ConstraintContext'):
        """Evaluate with column values supplied by `ctx`."""
        pass

    @abstractmethod
    def _children(self) -> tuple['Expression', ...]:
        pass

    @abstractmethod
    def degree(self) -> int:
        """Polynomial degree in the queried cells."""
        pass

    def queries(self) -> list['Query']:
        """All distinct queries in the tree, in first-seen order."""
        seen: dict[Query, None] = {}
        stack: list[Expression] = [self]
        while stack:
            node = stack.pop()
            if isinstance(node, Query):
                seen.setdefault(node, None)
            else:
                stack.extend(reversed(node._children()))
        return list(seen)

    def __add__(self, other):
        try:
            return Add(self, _lift(other))
        except TypeError:
            return NotImplemented

    def __radd__(self, other):
        try:
            return Add(_lift(other), self)
        except TypeError:
            return NotImplemented

    def __sub__(self, other):
        try:
            return Sub(self, _lift(other))
        except TypeError:
            return NotImplemented

    def __rsub__(self, other):
        try:
            return Sub(_lift(other), self)
        except TypeError:
            return NotImplemented

    def __mul__(self, other):
        try:
            return Mul(self, _lift(other))
        except TypeError:
            return NotImplemented

    def __rmul__(self, other):
        try:
            return Mul(_lift(other), self)
        except TypeError:
            return NotImplemented

    def __neg__(self):
        return Neg(self)


@dataclass(frozen=True, eq=True)
class Constant(Expression):
    value: int

    def evaluate(self, ctx):
        return ctx.constant(self.value)

    def _children(self):
        return ()

    def degree(self) -> int:
        return 0

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, eq=True)
class Query(Expression):
    """Value of `column` at (current row + rotation)."""
    column: Column
    rotation: Rotation = Rotation()

    def evaluate(self, ctx):
        return ctx.query(self.column, self.rotation)

    def _children(self):
        return ()

    def degree(self) -> int:
        return 1

    def __str__(self) -> str:
        return f"{self.column}@{self.rotation}"


@dataclass(frozen=True, eq=True)
class Add(Expression):
    left: Expression
    right: Expression

    def evaluate(self, ctx):
        return self.left.evaluate(ctx) + self.right.evaluate(ctx)

    def _children(self):
        return (self.left, self.right)

    def degree(self) -> int:
        return max(self.left.degree(), self.right.degree())

    def __str__(self) -> str:
        return f"({self.left} + {self.right})"


@dataclass(frozen=True, eq=True)
class Sub(Expression):
    left: Expression
    right: Expression

    def evaluate(self, ctx):
        return self.left.evaluate(ctx) - self.right.evaluate(ctx)

    def _children(self):
        return (self.left, self.right)

    def degree(self) -> int:
        return max(self.left.degree(), self.right.degree())

    def __str__(self) -> str:
        return f"({self.left} - {self.right})"


@dataclass(frozen=True, eq=True)
class Mul(Expression):
    left: Expression
    right: Expression

    def evaluate(self, ctx):
        return self.left.evaluate(ctx) * self.right.evaluate(ctx)

    def _children(self):
        return (self.left, self.right)

    def degree(self) -> int:
        return self.left.degree() + self.right.degree()

    def __str__(self) -> str:
        return f"{self.left} * {self.right}"


@dataclass(frozen=True, eq=True)
class Neg(Expression):
    inner: Expression

    def evaluate(self, ctx):
        return -self.inner.evaluate(ctx)

    def _children(self):
        return (self.inner,)

    def degree(self) -> int:
        return self.inner.degree()

    def __str__(self) -> str:
        return f"-{self.inner}"
