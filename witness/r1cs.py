"""R1CS witness synthesis.

Writes the witness pairs (a_i, b_i) into the advice columns of an R1CSConfig.
The layout depends on the gate mode the config was built with:

SELECTOR_GATED: one single-row region per pair
    region "a and b" #i: a[0] = a_i, b[0] = b_i, sel[0] = 1

UNCONDITIONAL: one region holding every pair
    region "a and b": a[off(i)] = a_i, b[off(i)] = b_i
    where off(i) is given by the RowOffset policy (i by default).
"""

import logging
from dataclasses import dataclass, field
from typing import Sequence

from constraints.r1cs import R1CSConfig
from primitives.field import FieldLike
from protocol.config import GateMode, RowOffset
from protocol.errors import ConfigurationError
from protocol.layouter import Layouter, RegionBase
from .base import WitnessModule

logger = logging.getLogger(__name__)


@dataclass
class R1CSWitnessData:
    """Witness vectors; row i must satisfy instance[i] = a[i] * b[i]."""
    a: Sequence[FieldLike] = field(default_factory=list)
    b: Sequence[FieldLike] = field(default_factory=list)

    def __post_init__(self):
        if len(self.a) != len(self.b):
            raise ConfigurationError(
                f"Witness vectors differ in length: len(a)={len(self.a)}, len(b)={len(self.b)}"
            )

    def __len__(self) -> int:
        return len(self.a)


class R1CSWitness(WitnessModule):
    """Witness synthesis for the R1CS circuit."""

    def __init__(self, row_offset: RowOffset = RowOffset.PER_WITNESS):
        self.row_offset = row_offset

    def assign(self, layouter: Layouter, config: R1CSConfig, witness: R1CSWitnessData) -> None:
        if config.mode is GateMode.SELECTOR_GATED:
            for a_i, b_i in zip(witness.a, witness.b):
                self._assign_pair(layouter, config, a_i, b_i)
        else:
            self._assign_all(layouter, config, witness)
        logger.debug("assigned %d witness pairs (%s)", len(witness), config.mode.value)

    def _assign_pair(self, layouter: Layouter, config: R1CSConfig, a: FieldLike, b: FieldLike) -> None:
        """One single-row region with the selector switched on."""

        def body(region: RegionBase):
            region.assign_advice("a", config.a, 0, a)
            region.assign_advice("b", config.b, 0, b)
            region.enable_selector("sel", config.sel, 0)

        layouter.assign_region("a and b", body)

    def _assign_all(self, layouter: Layouter, config: R1CSConfig, witness: R1CSWitnessData) -> None:
        """One region holding every pair, no selector."""

        def body(region: RegionBase):
            for i, (a_i, b_i) in enumerate(zip(witness.a, witness.b)):
                offset = self.row_offset.offset(i)
                region.assign_advice("a", config.a, offset, a_i)
                region.assign_advice("b", config.b, offset, b_i)

        layouter.assign_region("a and b", body)
