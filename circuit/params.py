"""Run parameters for building and checking a circuit instance."""

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional, Union

from primitives.field import GOLDILOCKS_PRIME, prime_field


@dataclass
class CircuitParams:
    """Table size, checker parallelism and field choice.

    Attributes:
        k: The table has 2^k rows
        workers: Threads used by the checker to evaluate gates (1 = sequential)
        field_modulus: Prime modulus of the field (default Goldilocks)
    """
    k: int
    workers: int = 1
    field_modulus: Optional[int] = None

    def __post_init__(self):
        if not 0 < self.k <= 32:
            raise ValueError(f"k must be in [1, 32], got {self.k}")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")

    @property
    def n_rows(self) -> int:
        return 1 << self.k

    @property
    def field(self) -> type:
        return prime_field(self.field_modulus or GOLDILOCKS_PRIME)

    @classmethod
    def from_dict(cls, data: dict) -> 'CircuitParams':
        modulus = data.get("field_modulus")
        if isinstance(modulus, str):
            modulus = int(modulus, 0)
        return cls(k=int(data["k"]), workers=int(data.get("workers", 1)), field_modulus=modulus)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> 'CircuitParams':
        """Load from a JSON file such as {"k": 4, "workers": 2}."""
        with open(path) as f:
            return cls.from_dict(json.load(f))

    def to_dict(self) -> dict:
        return asdict(self)
