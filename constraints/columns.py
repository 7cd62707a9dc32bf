"""Column handles and row rotations."""

from dataclasses import dataclass
from enum import Enum


class ColumnKind(Enum):
    """Column types.

    Advice columns hold private witness values, Fixed columns hold circuit
    constants (selectors included) and Instance columns hold public inputs.
    """
    ADVICE = "advice"
    FIXED = "fixed"
    INSTANCE = "instance"


@dataclass(frozen=True)
class Column:
    """Opaque column handle. Unique per (kind, index) within a ConstraintSystem."""
    kind: ColumnKind
    index: int

    def __str__(self) -> str:
        return f"{self.kind.value}[{self.index}]"


@dataclass(frozen=True)
class Rotation:
    """Row offset relative to the row being evaluated."""
    offset: int = 0

    @classmethod
    def prev(cls) -> 'Rotation':
        return cls(-1)

    @classmethod
    def cur(cls) -> 'Rotation':
        return cls(0)

    @classmethod
    def next(cls) -> 'Rotation':
        return cls(1)

    def __int__(self) -> int:
        return self.offset

    def __str__(self) -> str:
        return str(self.offset)
