"""Reusable chips and the example circuits built from them.

Each chip exposes configure (declare columns, selectors and gates) and,
through construct(config), assignment helpers that write witness values
consistent with its gates. EXAMPLE_CIRCUITS maps short names to the circuit
classes built from these chips.
"""

from circuit.circuit import Circuit

from .arithmetic import ArithmeticChip, ArithmeticCircuit, ArithmeticConfig, PolynomialCircuit
from .base import Chip, load_advice, value_of
from .fibonacci import FibonacciCircuit, FiboChip, FiboConfig
from .function import FunctionChip, FunctionCircuit, FunctionConfig
from .is_zero import IsZeroChip, IsZeroConfig
from .range_check import RangeCheckChip, RangeCheckCircuit, RangeCheckConfig, range_check_expr

EXAMPLE_CIRCUITS: dict[str, type[Circuit]] = {
    "arithmetic": ArithmeticCircuit,
    "polynomial": PolynomialCircuit,
    "fibonacci": FibonacciCircuit,
    "function": FunctionCircuit,
    "range_check": RangeCheckCircuit,
}


def get_circuit(name: str) -> type[Circuit]:
    """Look up an example circuit class by name.

    Raises:
        KeyError: If no circuit is registered under `name`
    """
    if name in EXAMPLE_CIRCUITS:
        return EXAMPLE_CIRCUITS[name]
    raise KeyError(
        f"No example circuit '{name}'. "
        f"Available: {list(EXAMPLE_CIRCUITS.keys())}"
    )


__all__ = [
    "Chip",
    "load_advice",
    "value_of",
    "IsZeroChip",
    "IsZeroConfig",
    "RangeCheckChip",
    "RangeCheckConfig",
    "RangeCheckCircuit",
    "range_check_expr",
    "ArithmeticChip",
    "ArithmeticConfig",
    "ArithmeticCircuit",
    "PolynomialCircuit",
    "FiboChip",
    "FiboConfig",
    "FibonacciCircuit",
    "FunctionChip",
    "FunctionConfig",
    "FunctionCircuit",
    "EXAMPLE_CIRCUITS",
    "get_circuit",
]
