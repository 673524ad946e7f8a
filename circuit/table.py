"""Cell storage for one circuit instance.

Each column is a galois array of length n_rows plus a boolean "assigned" mask;
each selector is a boolean mask. Instance columns are filled from the public
input vectors when the table is created and are read-only afterwards.

The table has two states: building (assignments allowed) and sealed (read
only). The checker seals the table before evaluating anything.
"""

import logging
from typing import Dict, List, Optional, Sequence

import numpy as np

from circuit.column import Cell, Column, ColumnKind, Selector
from circuit.constraint_system import ConstraintSystem
from circuit.errors import (
    AlreadyAssignedDifferentValue,
    CellNotAssigned,
    CircuitError,
    InvalidInstances,
    RowOutOfBounds,
    TableSealed,
)
from primitives.field import FieldLike, field_repr, to_field

logger = logging.getLogger(__name__)


class Table:
    """Advice, fixed and instance values plus selector flags."""

    def __init__(self, cs: ConstraintSystem, n_rows: int, public_inputs: Sequence[Sequence[FieldLike]] = ()):
        if n_rows <= 0:
            raise ValueError(f"n_rows must be positive, got {n_rows}")
        self.field = cs.field
        self.n_rows = n_rows
        self._values: Dict[Column, np.ndarray] = {}
        self._assigned: Dict[Column, np.ndarray] = {}
        self._selectors: Dict[Selector, np.ndarray] = {}
        self._max_row = -1
        self._sealed = False

        for column in cs.columns():
            self._values[column] = self.field.Zeros(n_rows)
            self._assigned[column] = np.zeros(n_rows, dtype=bool)
        for selector in cs.selectors:
            self._selectors[selector] = np.zeros(n_rows, dtype=bool)

        self._load_instances(cs.columns(ColumnKind.INSTANCE), public_inputs)

    def _load_instances(self, columns: List[Column], public_inputs: Sequence[Sequence[FieldLike]]) -> None:
        if len(public_inputs) != len(columns):
            raise InvalidInstances(
                f"Expected {len(columns)} public input vectors, got {len(public_inputs)}"
            )
        for column, values in zip(columns, public_inputs):
            if len(values) > self.n_rows:
                raise InvalidInstances(
                    f"{len(values)} public inputs for {column} exceed {self.n_rows} rows"
                )
            for row, value in enumerate(values):
                self._values[column][row] = to_field(value, self.field)
            # Instance cells past the supplied inputs read as zero
            self._assigned[column][:] = True

    # --- State ---

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        """Freeze the table. Idempotent."""
        if not self._sealed:
            logger.debug("Sealing table: %d rows, %d used", self.n_rows, self.rows_used)
        self._sealed = True

    def _check_writable(self) -> None:
        if self._sealed:
            raise TableSealed("Table is sealed; no further assignments allowed")

    def _check_row(self, column: Optional[Column], row: int, context: Optional[str] = None) -> None:
        if not 0 <= row < self.n_rows:
            raise RowOutOfBounds(column, row, self.n_rows, context)

    def _check_column(self, column: Column) -> None:
        if column not in self._values:
            raise CircuitError(f"Column {column} is not declared in this table")

    @property
    def rows_used(self) -> int:
        """One past the highest row written by an assignment or selector."""
        return self._max_row + 1

    # --- Assignment ---

    def assign(self, column: Column, row: int, value: FieldLike) -> Cell:
        """Write `value` into (column, row).

        Re-assigning the same value is allowed; a different value raises
        AlreadyAssignedDifferentValue.
        """
        self._check_writable()
        self._check_column(column)
        if column.kind == ColumnKind.INSTANCE:
            raise CircuitError(f"Instance column {column} is filled from public inputs only")
        self._check_row(column, row)

        value = to_field(value, self.field)
        cell = Cell(column, row)
        if self._assigned[column][row]:
            existing = self._values[column][row]
            if existing != value:
                raise AlreadyAssignedDifferentValue(cell, field_repr(existing), field_repr(value))
            return cell

        self._values[column][row] = value
        self._assigned[column][row] = True
        self._max_row = max(self._max_row, row)
        return cell

    def assign_from_public_input(self, instance: Column, index: int, column: Column, row: int) -> Cell:
        """Copy the public value at instance[index] into (column, row)."""
        if instance.kind != ColumnKind.INSTANCE:
            raise CircuitError(f"Column {instance} is not an instance column")
        value = self.value(instance, index)
        return self.assign(column, row, value)

    def enable_selector(self, selector: Selector, row: int) -> None:
        """Set the selector flag at `row`. Idempotent."""
        self._check_writable()
        if selector not in self._selectors:
            raise CircuitError(f"Selector {selector} is not declared in this table")
        self._check_row(None, row, f"selector {selector}")
        self._selectors[selector][row] = True
        self._max_row = max(self._max_row, row)

    # --- Reads ---

    def read(self, column: Column, row: int):
        """Value at (column, row), or None if unassigned."""
        self._check_column(column)
        self._check_row(column, row)
        if not self._assigned[column][row]:
            return None
        return self._values[column][row]

    def value(self, column: Column, row: int, context: Optional[str] = None):
        """Value at (column, row); raises CellNotAssigned if unassigned."""
        self._check_column(column)
        self._check_row(column, row, context)
        if not self._assigned[column][row]:
            raise CellNotAssigned(column, row, context)
        return self._values[column][row]

    def is_assigned(self, column: Column, row: int) -> bool:
        self._check_column(column)
        self._check_row(column, row)
        return bool(self._assigned[column][row])

    def gather(self, column: Column, rows: np.ndarray, context: Optional[str] = None):
        """Values of `column` at many absolute rows at once."""
        self._check_column(column)
        rows = np.asarray(rows, dtype=np.int64)
        if rows.size == 0:
            return self.field.Zeros(0)
        out_of_range = (rows < 0) | (rows >= self.n_rows)
        if out_of_range.any():
            raise RowOutOfBounds(column, int(rows[out_of_range][0]), self.n_rows, context)
        missing = ~self._assigned[column][rows]
        if missing.any():
            raise CellNotAssigned(column, int(rows[missing][0]), context)
        return self._values[column][rows]

    def selector_mask(self, selector: Selector) -> np.ndarray:
        """Boolean flags of `selector` for every row (read-only view)."""
        if selector not in self._selectors:
            raise CircuitError(f"Selector {selector} is not declared in this table")
        mask = self._selectors[selector].view()
        mask.flags.writeable = False
        return mask

    def column_values(self, column: Column):
        """Copy of a whole column's values (unassigned cells read as zero)."""
        self._check_column(column)
        return self._values[column].copy()
