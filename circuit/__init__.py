"""Circuit construction: columns, gates, table, copy constraints, regions."""

from circuit.circuit import Circuit
from circuit.column import Cell, Column, ColumnKind, Selector
from circuit.constraint_system import Constraints, ConstraintSystem, Gate, VirtualCells
from circuit.errors import (
    AlreadyAssignedDifferentValue,
    CellNotAssigned,
    CircuitError,
    ColumnNotInPermutation,
    InvalidInstances,
    RowOutOfBounds,
    TableSealed,
)
from circuit.expression import (
    ColumnQuery,
    Constant,
    EvaluationContext,
    Expression,
    Negated,
    Product,
    RowsContext,
    Scaled,
    SelectorQuery,
    Sum,
)
from circuit.layouter import AssignedCell, Layouter, Region, RegionInfo
from circuit.params import CircuitParams
from circuit.permutation import CopyConstraints
from circuit.table import Table

__all__ = [
    # Identifiers
    "Cell",
    "Column",
    "ColumnKind",
    "Selector",
    # Declaration
    "Circuit",
    "ConstraintSystem",
    "Constraints",
    "Gate",
    "VirtualCells",
    "CircuitParams",
    # Expressions
    "Expression",
    "Constant",
    "ColumnQuery",
    "SelectorQuery",
    "Negated",
    "Sum",
    "Product",
    "Scaled",
    "EvaluationContext",
    "RowsContext",
    # Assignment
    "Table",
    "CopyConstraints",
    "Layouter",
    "Region",
    "RegionInfo",
    "AssignedCell",
    # Errors
    "CircuitError",
    "CellNotAssigned",
    "AlreadyAssignedDifferentValue",
    "RowOutOfBounds",
    "ColumnNotInPermutation",
    "InvalidInstances",
    "TableSealed",
]
