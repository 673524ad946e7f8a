"""Column, selector and cell identifiers.

All three are small frozen dataclasses so they can key dicts, sit in sets and
sort deterministically (failure output is ordered by them).
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from circuit.layouter import Region


class ColumnKind(IntEnum):
    """Column kinds, ordered advice < fixed < instance for sorting."""
    ADVICE = 0    # witness, filled per instance
    FIXED = 1     # constants, filled during synthesis
    INSTANCE = 2  # public inputs/outputs, filled externally

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, order=True)
class Column:
    kind: ColumnKind
    index: int

    def __str__(self) -> str:
        return f"{self.kind.label}[{self.index}]"


@dataclass(frozen=True, order=True)
class Selector:
    """Per-row boolean flag that switches gates on."""
    index: int
    name: str = field(default="", compare=False)

    def enable(self, region: 'Region', offset: int) -> None:
        """Enable this selector at a region-relative offset."""
        region.enable_selector(self, offset)

    def __str__(self) -> str:
        return self.name or f"selector[{self.index}]"


@dataclass(frozen=True, order=True)
class Cell:
    """A (column, absolute row) pair."""
    column: Column
    row: int

    def __str__(self) -> str:
        return f"{self.column}@{self.row}"
