"""R1CS multiplication gate: instance - a*b = 0.

Columns:
    a, b: advice columns holding the witness pair of each row
    c: instance column holding the public product of each row
    sel: selector (fixed column), only in GateMode.SELECTOR_GATED

Gate per mode:
    SELECTOR_GATED: sel * (c - a*b) = 0, skipped where sel = 0
    UNCONDITIONAL:  c - a*b = 0 at every row
"""

from dataclasses import dataclass
from typing import Optional

from protocol.config import GateMode
from .base import ConstraintModule
from .columns import Column, Rotation
from .system import ConstraintSystem

GATE_NAME = {
    GateMode.SELECTOR_GATED: "sel*(c-a*b)",
    GateMode.UNCONDITIONAL: "c-a*b",
}


@dataclass(frozen=True)
class R1CSConfig:
    """Column handles allocated by R1CSConstraints.configure."""
    a: Column
    b: Column
    c: Column
    mode: GateMode
    sel: Optional[Column] = None


class R1CSConstraints(ConstraintModule):
    """Gate definition for the R1CS circuit, in either gate mode."""

    def __init__(self, mode: GateMode = GateMode.SELECTOR_GATED):
        self.mode = mode

    def configure(self, cs: ConstraintSystem) -> R1CSConfig:
        a = cs.advice_column()
        b = cs.advice_column()
        c = cs.instance_column()
        sel = cs.selector() if self.mode is GateMode.SELECTOR_GATED else None

        def mul_gate(meta):
            qa = meta.query_advice(a, Rotation.cur())
            qb = meta.query_advice(b, Rotation.cur())
            qc = meta.query_instance(c, Rotation.cur())
            poly = qc - qa * qb
            if sel is not None:
                poly = meta.query_fixed(sel, Rotation.cur()) * poly
            return [poly]

        cs.create_gate(GATE_NAME[self.mode], mul_gate, selector=sel)
        return R1CSConfig(a=a, b=b, c=c, mode=self.mode, sel=sel)
