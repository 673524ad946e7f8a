"""Failure records produced by the satisfiability checker.

Two kinds, both plain frozen dataclasses:

- ConstraintNotSatisfied: a gate constraint evaluated to non-zero at a row
  where one of the gate's selectors is enabled.
- CopyConstraintViolated: two cells in the same copy class hold different
  values.

Each record knows how to sort itself (gates first by row, gate name and
constraint index, then copies by cell) so reports are deterministic, and
exposes to_dict() with the keys kind / gate_or_pair / region / row.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from circuit.column import Cell
from circuit.layouter import RegionInfo


@dataclass(frozen=True)
class FailureLocation:
    """Absolute row plus the region covering it, if any."""
    row: int
    region_index: Optional[int] = None
    region_name: Optional[str] = None
    offset: Optional[int] = None

    @classmethod
    def at(cls, row: int, region: Optional[RegionInfo]) -> 'FailureLocation':
        if region is None:
            return cls(row=row)
        return cls(row=row, region_index=region.index, region_name=region.name,
                   offset=row - region.start)

    @property
    def in_region(self) -> bool:
        return self.region_index is not None

    def __str__(self) -> str:
        if self.in_region:
            return f"in region {self.region_index} '{self.region_name}' at offset {self.offset} (row {self.row})"
        return f"outside any region at row {self.row}"


class VerifyFailure:
    """Base for failure records."""
    kind = "VerifyFailure"

    @property
    def row(self) -> int:
        raise NotImplementedError

    def sort_key(self) -> tuple:
        raise NotImplementedError

    def to_dict(self) -> dict:
        raise NotImplementedError


@dataclass(frozen=True)
class ConstraintNotSatisfied(VerifyFailure):
    gate_index: int
    gate_name: str
    constraint_index: int
    constraint_name: str
    location: FailureLocation
    # (query, value) pairs for every cell the gate reads at this row
    cell_values: Tuple[Tuple[str, str], ...] = ()

    kind = "ConstraintNotSatisfied"

    @property
    def row(self) -> int:
        return self.location.row

    def sort_key(self) -> tuple:
        return (0, self.row, self.gate_name, self.constraint_index)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "gate_or_pair": self.gate_name,
            "constraint_index": self.constraint_index,
            "constraint_name": self.constraint_name,
            "region": self.location.region_name,
            "row": self.row,
            "cell_values": dict(self.cell_values),
        }

    def __str__(self) -> str:
        name = f" '{self.constraint_name}'" if self.constraint_name else ""
        lines = [
            f"Constraint {self.constraint_index}{name} in gate {self.gate_index} "
            f"'{self.gate_name}' is not satisfied {self.location}"
        ]
        lines += [f"  - {query} = {value}" for query, value in self.cell_values]
        return "\n".join(lines)


@dataclass(frozen=True)
class CopyConstraintViolated(VerifyFailure):
    cell_a: Cell
    cell_b: Cell
    value_a: str
    value_b: str
    location_a: FailureLocation
    location_b: FailureLocation

    kind = "CopyConstraintViolated"

    @property
    def row(self) -> int:
        return self.cell_a.row

    def sort_key(self) -> tuple:
        return (1, self.cell_a, self.cell_b)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "gate_or_pair": (str(self.cell_a), str(self.cell_b)),
            "region": self.location_a.region_name,
            "row": self.row,
            "values": (self.value_a, self.value_b),
        }

    def __str__(self) -> str:
        return (
            f"Equality constraint not satisfied: {self.cell_a} = {self.value_a} "
            f"({self.location_a}) != {self.cell_b} = {self.value_b} ({self.location_b})"
        )


def sort_failures(failures: Iterable[VerifyFailure]) -> list:
    return sorted(failures, key=lambda f: f.sort_key())


def format_failures(failures: Iterable[VerifyFailure]) -> str:
    failures = list(failures)
    if not failures:
        return "All constraints satisfied"
    return "\n".join(str(f) for f in failures)
