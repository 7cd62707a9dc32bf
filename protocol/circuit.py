"""Circuit interface and the configure -> synthesize pipeline.

A Circuit pairs a ConstraintModule (configure time) with a WitnessModule
(synthesis time):

    circuit = R1CSCircuit(a=[5, 4, 3], b=[3, 4, 10])
    cs, grid = synthesize(circuit)          # k from circuit.config
    violations = check(cs, grid, [[15, 16, 30]], CheckMode.DIAGNOSTIC)

The resulting ConstraintSystem and AssignmentGrid are in-memory structures a
proving backend can consume as they are.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

import galois

from constraints import ConstraintSystem, get_constraint_module
from primitives.field import FF, FieldLike
from protocol.config import CircuitConfig
from protocol.data import AssignmentGrid
from protocol.errors import ConfigurationError
from protocol.layouter import Layouter
from witness import R1CSWitnessData, get_witness_module

logger = logging.getLogger(__name__)


class Circuit(ABC):
    """A circuit: gate definitions plus the witness that fills them."""

    gf: type[galois.FieldArray] = FF
    config: Optional[CircuitConfig] = None

    @abstractmethod
    def without_witnesses(self) -> 'Circuit':
        """Same circuit with an empty witness (configure-only use)."""
        pass

    @abstractmethod
    def configure(self, cs: ConstraintSystem) -> Any:
        """Allocate columns and gates; return the config passed to synthesize."""
        pass

    @abstractmethod
    def synthesize(self, config: Any, layouter: Layouter) -> None:
        """Write the witness through `layouter`."""
        pass


class R1CSCircuit(Circuit):
    """instance[i] = a[i] * b[i] for every witness pair."""

    def __init__(
        self,
        a: Sequence[FieldLike] = (),
        b: Sequence[FieldLike] = (),
        config: Optional[CircuitConfig] = None,
    ):
        self.config = config or CircuitConfig()
        self.witness = R1CSWitnessData(list(a), list(b))
        self.gf = self.config.gf
        self._constraints = get_constraint_module('R1CS', mode=self.config.gate_mode)
        self._witness = get_witness_module('R1CS', row_offset=self.config.row_offset)

    def without_witnesses(self) -> 'R1CSCircuit':
        return R1CSCircuit(config=self.config)

    def configure(self, cs: ConstraintSystem):
        return self._constraints.configure(cs)

    def synthesize(self, config, layouter: Layouter) -> None:
        self._witness.assign(layouter, config, self.witness)


def configure(circuit: Circuit) -> tuple[ConstraintSystem, Any]:
    """Build the constraint system of `circuit`.

    Returns:
        (cs, config) where config holds the circuit's column handles
    """
    cs = ConstraintSystem()
    config = circuit.configure(cs)
    return cs, config


def resolve_k(circuit: Circuit, k: Optional[int] = None) -> int:
    """Row parameter for `circuit`: its config's k unless the caller gives one.

    Raises:
        ConfigurationError: If `k` disagrees with the circuit config, or neither
            is set
    """
    if circuit.config is None:
        if k is None:
            raise ConfigurationError("k is required for a circuit without a CircuitConfig")
        return k
    if k is not None and k != circuit.config.k:
        raise ConfigurationError(f"k={k} conflicts with the circuit config (k={circuit.config.k})")
    return circuit.config.k


def synthesize(circuit: Circuit, k: Optional[int] = None) -> tuple[ConstraintSystem, AssignmentGrid]:
    """Configure `circuit` and lay out its witness on a fresh 2^k-row grid.

    `k` defaults to `circuit.config.k`.

    Raises:
        ConfigurationError: If `k` conflicts with the circuit config
        AssignmentConflict: If the witness writes a cell twice
        NotEnoughRowsAvailable: If the witness does not fit in 2^k rows
    """
    k = resolve_k(circuit, k)
    cs, config = configure(circuit)
    grid = AssignmentGrid(k=k, gf=circuit.gf)
    circuit.synthesize(config, Layouter(grid))
    logger.debug("synthesized %d cells in %d regions (k=%d)", len(grid.cells), len(grid.regions), k)
    return cs, grid
