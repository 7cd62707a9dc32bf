"""Base class for witness synthesis."""

from abc import ABC, abstractmethod
from typing import Any

from protocol.layouter import Layouter


class WitnessModule(ABC):
    """Per-circuit witness synthesis. Used to build the assignment grid only.

    Each circuit has a witness module that writes its witness values into
    regions through a Layouter. Unlike ConstraintModule, it never looks at the
    gates: the checker decides whether the written values satisfy them.
    """

    @abstractmethod
    def assign(self, layouter: Layouter, config: Any, witness: Any) -> None:
        """Write the witness into the grid behind `layouter`.

        Args:
            layouter: Layouter allocating regions on the grid
            config: Column handles returned by the matching ConstraintModule
            witness: Circuit-specific witness values

        Raises:
            AssignmentConflict: If a cell is written twice
            NotEnoughRowsAvailable: If the witness does not fit in 2^k rows
        """
        pass
