"""Structural errors.

These signal a malformed circuit or buggy assignment code and abort the run.
A witness that merely fails its constraints is never raised; the checker
returns it as failure records instead (see verifier.failure).
"""

from typing import Optional

from circuit.column import Cell, Column


class CircuitError(ValueError):
    """Base class for all structural errors."""


class CellNotAssigned(CircuitError):
    """A gate or copy constraint read a cell that was never assigned."""

    def __init__(self, column: Column, row: int, context: Optional[str] = None):
        self.column = column
        self.row = row
        self.context = context
        where = f" ({context})" if context else ""
        super().__init__(f"Cell {column}@{row} read before assignment{where}")


class AlreadyAssignedDifferentValue(CircuitError):
    """A cell was assigned twice with two different values."""

    def __init__(self, cell: Cell, existing: str, new: str):
        self.cell = cell
        self.existing = existing
        self.new = new
        super().__init__(f"Cell {cell} already holds {existing}, cannot assign {new}")


class RowOutOfBounds(CircuitError):
    """A row (absolute, after applying any rotation) lies outside the table."""

    def __init__(self, column: Optional[Column], row: int, n_rows: int, context: Optional[str] = None):
        self.column = column
        self.row = row
        self.n_rows = n_rows
        self.context = context
        target = f"{column}@{row}" if column is not None else f"row {row}"
        where = f" ({context})" if context else ""
        super().__init__(f"{target} outside table of {n_rows} rows{where}")


class ColumnNotInPermutation(CircuitError):
    """A copy constraint touched a column that was not enabled for equality."""

    def __init__(self, column: Column):
        self.column = column
        super().__init__(f"Column {column} was not enabled for equality constraints")


class InvalidInstances(CircuitError):
    """Public input vectors do not fit the declared instance columns."""


class TableSealed(CircuitError):
    """Mutation attempted after the table was sealed for checking."""
