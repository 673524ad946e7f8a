"""Circuit interface.

A circuit declares its shape once (configure) and then fills one table
instance (synthesize). configure returns a config object, typically a
dataclass of columns and selectors, that synthesize receives back; chips
follow the same split (see gadgets.base.Chip).
"""

from abc import ABC, abstractmethod
from typing import Any

from circuit.constraint_system import ConstraintSystem
from circuit.layouter import Layouter


class Circuit(ABC):
    """A concrete circuit: witness values live on the instance."""

    @classmethod
    @abstractmethod
    def configure(cls, cs: ConstraintSystem) -> Any:
        """Declare columns, selectors and gates; return the config."""
        pass

    @abstractmethod
    def synthesize(self, config: Any, layouter: Layouter) -> None:
        """Assign witness and fixed values, enable selectors, add copies."""
        pass
