"""Copy constraints.

Declared pairs of cells that must hold equal values. Pairs are merged into
equivalence classes with a union-find, so equality is transitive: equating
(A, B) and (B, C) also requires A == C.
"""

from typing import Iterable, List, Optional, Tuple

from circuit.column import Cell, Column
from circuit.errors import ColumnNotInPermutation, TableSealed
from primitives.union_find import UnionFind


class CopyConstraints:
    """Union-find over cells taking part in copy constraints."""

    def __init__(self, equality_columns: Optional[Iterable[Column]] = None):
        # None disables the equality-column check
        self._columns = frozenset(equality_columns) if equality_columns is not None else None
        self._sets: UnionFind[Cell] = UnionFind()
        self._pairs: List[Tuple[Cell, Cell]] = []
        self._sealed = False

    def seal(self) -> None:
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def _check_column(self, column: Column) -> None:
        if self._columns is not None and column not in self._columns:
            raise ColumnNotInPermutation(column)

    def equate(self, cell_a: Cell, cell_b: Cell) -> None:
        """Declare cell_a and cell_b equal."""
        if self._sealed:
            raise TableSealed("Copy constraints are sealed; no further equalities allowed")
        self._check_column(cell_a.column)
        self._check_column(cell_b.column)
        self._pairs.append((cell_a, cell_b))
        self._sets.union(cell_a, cell_b)

    @property
    def pairs(self) -> List[Tuple[Cell, Cell]]:
        return list(self._pairs)

    def connected(self, cell_a: Cell, cell_b: Cell) -> bool:
        if cell_a not in self._sets or cell_b not in self._sets:
            return cell_a == cell_b
        return self._sets.connected(cell_a, cell_b)

    def resolve(self) -> List[List[Cell]]:
        """Equivalence classes with at least two cells, deterministic order."""
        return [members for members in self._sets.classes() if len(members) > 1]

    def __len__(self) -> int:
        return len(self._pairs)
