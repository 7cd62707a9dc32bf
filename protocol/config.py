"""Circuit configuration.

CircuitConfig bundles the parameters one circuit run needs:

- k: size parameter; the grid has 2^k rows
- gate_mode: whether the multiplication gate is selector-gated or checked at
  every row
- row_offset: where batched witnesses land inside their region
- field: name of the prime field ('bn254' or 'goldilocks')

Example:
    config = CircuitConfig.from_json("circuit.json")
    prover = MockProver.run(None, R1CSCircuit(a, b, config=config), [c])
"""

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Union

import galois

from primitives.field import FIELDS, get_field
from protocol.errors import ConfigurationError


class GateMode(Enum):
    """How the multiplication gate is enabled.

    SELECTOR_GATED: one single-row region per witness, gate multiplied by a
        fixed selector column so unused rows never constrain the instance.
    UNCONDITIONAL: all witnesses in one multi-row region, gate checked at every
        row with no selector.
    """
    SELECTOR_GATED = "selector_gated"
    UNCONDITIONAL = "unconditional"


class RowOffset(Enum):
    """Local offset of witness i inside a multi-row region.

    PER_WITNESS: offset i, each witness on its own row.
    ZERO: offset 0 for every witness. Only a single witness can be laid out
        this way; the second write to the same cell raises AssignmentConflict.
    """
    PER_WITNESS = "per_witness"
    ZERO = "zero"

    def offset(self, i: int) -> int:
        return i if self is RowOffset.PER_WITNESS else 0


def _parse_enum(enum_cls, value):
    """Accept an enum member, its value, or its name (case-insensitive)."""
    if isinstance(value, enum_cls):
        return value
    for member in enum_cls:
        if value == member.value or str(value).upper() == member.name:
            return member
    raise ConfigurationError(
        f"Invalid {enum_cls.__name__} '{value}'. "
        f"Available: {[m.value for m in enum_cls]}"
    )


@dataclass(frozen=True)
class CircuitConfig:
    """Parameters of one circuit run."""
    k: int = 4
    gate_mode: GateMode = GateMode.SELECTOR_GATED
    row_offset: RowOffset = RowOffset.PER_WITNESS
    field: str = "bn254"

    def __post_init__(self):
        if not isinstance(self.k, int) or self.k < 1:
            raise ConfigurationError(f"k must be a positive integer, got {self.k!r}")
        if not isinstance(self.field, str) or self.field.lower() not in FIELDS:
            raise ConfigurationError(
                f"Unknown field '{self.field}'. Available: {list(FIELDS.keys())}"
            )
        # Allow string values from callers constructing the dataclass directly
        object.__setattr__(self, 'gate_mode', _parse_enum(GateMode, self.gate_mode))
        object.__setattr__(self, 'row_offset', _parse_enum(RowOffset, self.row_offset))

    @property
    def n(self) -> int:
        """Number of rows (2^k)."""
        return 1 << self.k

    @property
    def gf(self) -> type[galois.FieldArray]:
        """Field class for this configuration."""
        return get_field(self.field)

    @classmethod
    def from_dict(cls, data: dict) -> 'CircuitConfig':
        """Build from a plain dict; unknown keys are rejected."""
        known = {'k', 'gate_mode', 'row_offset', 'field'}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown circuit config keys: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> 'CircuitConfig':
        """Load from a JSON file holding a single object."""
        with open(path) as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ConfigurationError(f"Circuit config in {path} must be a JSON object")
        return cls.from_dict(data)

    def to_dict(self) -> dict:
        return {
            'k': self.k,
            'gate_mode': self.gate_mode.value,
            'row_offset': self.row_offset.value,
            'field': self.field,
        }
