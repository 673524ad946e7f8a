"""Regions and region placement.

A Region is a named span of rows. Chips address cells inside it by offset;
the region adds its start row to get the absolute row. The Layouter places
regions one after another: a new region starts on the first row after every
earlier region, so sibling regions never share rows. Sharing a column across
chips is explicit (the same Column value is passed to both).

Region names carry no meaning for evaluation; they only label failures.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, TypeVar, Union

from circuit.column import Cell, Column, ColumnKind, Selector
from circuit.errors import CircuitError, RowOutOfBounds
from circuit.permutation import CopyConstraints
from circuit.table import Table
from primitives.field import FieldLike, to_field

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(eq=False)
class AssignedCell:
    """A cell together with the value written into it."""
    cell: Cell
    value: object  # galois scalar
    annotation: str = ""

    def copy_advice(self, region: 'Region', column: Column, offset: int,
                    annotation: Optional[str] = None) -> 'AssignedCell':
        """Write this value into another advice cell and equate the two."""
        copied = region.assign_advice(column, offset, self.value, annotation or self.annotation)
        region.constrain_equal(self, copied)
        return copied


@dataclass
class RegionInfo:
    """Placement record of one region, kept for failure reporting."""
    index: int
    name: str
    start: int
    rows: int = 0

    @property
    def end(self) -> int:
        return self.start + self.rows

    def contains(self, row: int) -> bool:
        return self.start <= row < self.end

    def __str__(self) -> str:
        return f"region {self.index} '{self.name}'"


CellRef = Union[Cell, AssignedCell]


def _cell_of(ref: CellRef) -> Cell:
    return ref.cell if isinstance(ref, AssignedCell) else ref


class Region:
    """Assignment handle for one region; offsets are relative to its start."""

    def __init__(self, info: RegionInfo, table: Table, copies: CopyConstraints):
        self._info = info
        self._table = table
        self._copies = copies

    @property
    def name(self) -> str:
        return self._info.name

    @property
    def index(self) -> int:
        return self._info.index

    @property
    def start(self) -> int:
        return self._info.start

    @property
    def field(self) -> type:
        return self._table.field

    def _row(self, offset: int, column: Optional[Column] = None) -> int:
        if offset < 0:
            raise RowOutOfBounds(column, offset, self._table.n_rows, f"negative offset in {self._info}")
        self._info.rows = max(self._info.rows, offset + 1)
        return self._info.start + offset

    def enable_selector(self, selector: Selector, offset: int) -> None:
        self._table.enable_selector(selector, self._row(offset))

    def _assign(self, kind: ColumnKind, column: Column, offset: int, value: FieldLike,
                annotation: Optional[str]) -> AssignedCell:
        if column.kind != kind:
            raise CircuitError(f"Column {column} assigned as {kind.label}")
        value = to_field(value, self._table.field)
        cell = self._table.assign(column, self._row(offset, column), value)
        return AssignedCell(cell, value, annotation or "")

    def assign_advice(self, column: Column, offset: int, value: FieldLike,
                      annotation: Optional[str] = None) -> AssignedCell:
        return self._assign(ColumnKind.ADVICE, column, offset, value, annotation)

    def assign_fixed(self, column: Column, offset: int, value: FieldLike,
                     annotation: Optional[str] = None) -> AssignedCell:
        return self._assign(ColumnKind.FIXED, column, offset, value, annotation)

    def assign_advice_from_instance(self, instance: Column, index: int, advice: Column, offset: int,
                                    annotation: Optional[str] = None) -> AssignedCell:
        """Copy public input instance[index] into an advice cell and equate them."""
        if advice.kind != ColumnKind.ADVICE:
            raise CircuitError(f"Column {advice} assigned as advice")
        cell = self._table.assign_from_public_input(instance, index, advice, self._row(offset, advice))
        self._copies.equate(cell, Cell(instance, index))
        return AssignedCell(cell, self._table.value(advice, cell.row), annotation or "")

    def constrain_equal(self, cell_a: CellRef, cell_b: CellRef) -> None:
        self._copies.equate(_cell_of(cell_a), _cell_of(cell_b))


class Layouter:
    """Places regions sequentially and binds cells to public inputs."""

    def __init__(self, table: Table, copies: CopyConstraints):
        self._table = table
        self._copies = copies
        self._regions: List[RegionInfo] = []
        self._next_row = 0

    @property
    def regions(self) -> List[RegionInfo]:
        return list(self._regions)

    def assign_region(self, name: str, assignment: Callable[[Region], T]) -> T:
        """Open a region at the next free row, run `assignment`, close it."""
        info = RegionInfo(index=len(self._regions), name=name, start=self._next_row)
        self._regions.append(info)
        result = assignment(Region(info, self._table, self._copies))
        self._next_row = info.end
        logger.debug("Assigned %s at rows [%d, %d)", info, info.start, info.end)
        return result

    def constrain_instance(self, cell: CellRef, instance: Column, row: int) -> None:
        """Require `cell` to equal the public value at instance[row]."""
        if instance.kind != ColumnKind.INSTANCE:
            raise CircuitError(f"Column {instance} is not an instance column")
        if not 0 <= row < self._table.n_rows:
            raise RowOutOfBounds(instance, row, self._table.n_rows)
        self._copies.equate(_cell_of(cell), Cell(instance, row))

    def region_at(self, row: int) -> Optional[RegionInfo]:
        for info in self._regions:
            if info.contains(row):
                return info
        return None
