"""Witness synthesis modules.

This module provides per-circuit witness synthesis: each circuit has its own
WitnessModule that writes witness values into regions of an assignment grid.
The WITNESS_REGISTRY dict maps circuit names to module classes, mirroring
constraints.CONSTRAINT_REGISTRY.
"""

from .base import WitnessModule
from .r1cs import R1CSWitness, R1CSWitnessData

# Registry mapping circuit names to witness module classes
WITNESS_REGISTRY: dict[str, type[WitnessModule]] = {
    'R1CS': R1CSWitness,
}


def get_witness_module(circuit_name: str, **kwargs) -> WitnessModule:
    """Get witness module instance for a circuit.

    Args:
        circuit_name: Name of the circuit (e.g., 'R1CS')
        **kwargs: Passed to the module constructor (e.g., row_offset=RowOffset.ZERO)

    Returns:
        WitnessModule instance for the circuit

    Raises:
        KeyError: If no witness module is registered for the circuit
    """
    if circuit_name in WITNESS_REGISTRY:
        return WITNESS_REGISTRY[circuit_name](**kwargs)
    raise KeyError(f"No witness module for circuit '{circuit_name}'. "
                  f"Available: {list(WITNESS_REGISTRY.keys())}")


__all__ = [
    'WitnessModule',
    'R1CSWitness',
    'R1CSWitnessData',
    'WITNESS_REGISTRY',
    'get_witness_module',
]
