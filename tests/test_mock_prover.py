"""End-to-end runs of the R1CS circuit through MockProver."""

import pytest

from primitives.field import FF_GOLDILOCKS
from protocol.checker import MockProver
from protocol.circuit import R1CSCircuit, configure, synthesize
from protocol.config import CircuitConfig, GateMode, RowOffset
from protocol.errors import (
    AssignmentConflict,
    ConstraintNotSatisfied,
    InstanceLengthMismatch,
    NotEnoughRowsAvailable,
)

MODES = [GateMode.SELECTOR_GATED, GateMode.UNCONDITIONAL]


@pytest.mark.parametrize("mode", MODES)
class TestMockProver:
    """MockProver.run followed by verify / assert_satisfied."""

    def test_three_multiplications(self, mode, r1cs_vectors) -> None:
        """5*3=15, 4*4=16, 3*10=30 at k=4."""
        circuit = R1CSCircuit(r1cs_vectors['a'], r1cs_vectors['b'],
                              config=CircuitConfig(gate_mode=mode))
        prover = MockProver.run(4, circuit, [r1cs_vectors['c']])
        prover.assert_satisfied()
        assert prover.verify() == []

    def test_wrong_product(self, mode) -> None:
        """5*3 != 14."""
        circuit = R1CSCircuit([5], [3], config=CircuitConfig(gate_mode=mode))
        prover = MockProver.run(4, circuit, [[14]])

        (violation,) = prover.verify()
        assert violation.row == 0
        with pytest.raises(ConstraintNotSatisfied):
            prover.assert_satisfied()

    def test_short_instance_fails_at_run(self, mode, r1cs_vectors) -> None:
        """Instance validation happens before any check is requested."""
        circuit = R1CSCircuit(r1cs_vectors['a'], r1cs_vectors['b'],
                              config=CircuitConfig(gate_mode=mode))
        with pytest.raises(InstanceLengthMismatch):
            MockProver.run(4, circuit, [[15, 16]])

    def test_without_witnesses(self, mode, r1cs_vectors) -> None:
        """The configure-only circuit has the same gates and an empty grid."""
        circuit = R1CSCircuit(r1cs_vectors['a'], r1cs_vectors['b'],
                              config=CircuitConfig(gate_mode=mode))
        empty = circuit.without_witnesses()

        assert len(empty.witness) == 0
        assert configure(empty)[0].gates == configure(circuit)[0].gates
        prover = MockProver.run(4, empty, [[]])
        assert prover.grid.cells == {}
        prover.assert_satisfied()

    def test_too_few_rows(self, mode) -> None:
        """Three witnesses do not fit in 2^1 rows."""
        circuit = R1CSCircuit([1, 2, 3], [1, 2, 3], config=CircuitConfig(k=1, gate_mode=mode))
        with pytest.raises(NotEnoughRowsAvailable):
            MockProver.run(1, circuit, [[1, 4, 9]])


def test_zero_offset_conflicts_on_second_witness(r1cs_vectors) -> None:
    """Unconditional mode with every witness at offset 0 writes a cell twice."""
    config = CircuitConfig(gate_mode=GateMode.UNCONDITIONAL, row_offset=RowOffset.ZERO)
    circuit = R1CSCircuit(r1cs_vectors['a'], r1cs_vectors['b'], config=config)
    with pytest.raises(AssignmentConflict):
        MockProver.run(4, circuit, [r1cs_vectors['c']])


def test_goldilocks_field() -> None:
    """The field is selected by the circuit config."""
    p = FF_GOLDILOCKS.order
    circuit = R1CSCircuit([p - 1], [2], config=CircuitConfig(field="goldilocks"))
    prover = MockProver.run(4, circuit, [[p - 2]])

    assert prover.grid.gf is FF_GOLDILOCKS
    prover.assert_satisfied()


class TestConfiguredRows:
    """The circuit config owns k."""

    def test_config_k_too_small(self) -> None:
        """CircuitConfig(k=1) cannot hold three witnesses."""
        circuit = R1CSCircuit([1, 2, 3], [1, 2, 3], config=CircuitConfig(k=1))
        with pytest.raises(NotEnoughRowsAvailable):
            MockProver.run(None, circuit, [[1, 4, 9]])

    def test_k_taken_from_config(self) -> None:
        """Without an explicit k the grid follows the config."""
        circuit = R1CSCircuit([5], [3], config=CircuitConfig(k=3))
        prover = MockProver.run(None, circuit, [[15]])
        assert prover.k == 3
        assert prover.grid.n == 8
        prover.assert_satisfied()

    def test_conflicting_k(self) -> None:
        """An explicit k may not override the configured one."""
        from protocol.errors import ConfigurationError

        circuit = R1CSCircuit([1, 2, 3], [1, 2, 3], config=CircuitConfig(k=1))
        with pytest.raises(ConfigurationError):
            MockProver.run(4, circuit, [[1, 4, 9]])
        with pytest.raises(ConfigurationError):
            synthesize(circuit, 4)

    def test_synthesize_default_k(self) -> None:
        """synthesize reads k from the config too."""
        _, grid = synthesize(R1CSCircuit([5], [3], config=CircuitConfig(k=2)))
        assert grid.k == 2
