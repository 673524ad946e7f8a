"""Circuit declaration: columns, selectors, gates and equality-enabled columns.

The ConstraintSystem is filled once by a circuit's configure step and is read
only afterwards. Gates are stored as expression trees.

Example:
    cs = ConstraintSystem()
    advice = [cs.advice_column() for _ in range(3)]
    s_mul = cs.selector()

    cs.create_gate("mul", lambda meta: [
        meta.query_selector(s_mul) * (
            meta.query_advice(advice[0], 0) * meta.query_advice(advice[1], 0)
            - meta.query_advice(advice[2], 0)
        )
    ])
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple, Union

from circuit.column import Column, ColumnKind, Selector
from circuit.errors import CircuitError
from circuit.expression import ColumnQuery, Expression, SelectorQuery
from primitives.field import FF

NamedConstraint = Tuple[str, Expression]
ConstraintLike = Union[Expression, NamedConstraint]


@dataclass
class Gate:
    """A named set of polynomial identities.

    The identities must vanish on every row where at least one selector the
    gate queries is enabled. A gate that queries no selector applies to every
    row of the table.
    """
    name: str
    constraint_names: List[str] = field(default_factory=list)
    polys: List[Expression] = field(default_factory=list)

    @property
    def constraints(self) -> List[NamedConstraint]:
        return list(zip(self.constraint_names, self.polys))

    def queried_selectors(self) -> List[Selector]:
        found = set()
        for poly in self.polys:
            found |= poly.queried_selectors()
        return sorted(found)

    def queried_columns(self) -> List[Tuple[Column, int]]:
        found = set()
        for poly in self.polys:
            found |= poly.queried_columns()
        return sorted(found)

    def degree(self) -> int:
        return max(poly.degree() for poly in self.polys)


class VirtualCells:
    """Query builder handed to gate callbacks."""

    def __init__(self, cs: 'ConstraintSystem'):
        self._cs = cs

    def _query(self, column: Column, kind: ColumnKind, rotation: int) -> ColumnQuery:
        if column.kind != kind:
            raise CircuitError(f"Column {column} queried as {kind.label}")
        return ColumnQuery(column, rotation)

    def query_advice(self, column: Column, rotation: int = 0) -> ColumnQuery:
        return self._query(column, ColumnKind.ADVICE, rotation)

    def query_fixed(self, column: Column, rotation: int = 0) -> ColumnQuery:
        return self._query(column, ColumnKind.FIXED, rotation)

    def query_instance(self, column: Column, rotation: int = 0) -> ColumnQuery:
        return self._query(column, ColumnKind.INSTANCE, rotation)

    def query_any(self, column: Column, rotation: int = 0) -> ColumnQuery:
        return ColumnQuery(column, rotation)

    def query_selector(self, selector: Selector) -> SelectorQuery:
        return SelectorQuery(selector)


class Constraints:
    """Helpers for building constraint lists."""

    @staticmethod
    def with_selector(selector: Expression, constraints: Iterable[ConstraintLike]) -> List[NamedConstraint]:
        """Multiply every constraint by `selector`, keeping names."""
        named = []
        for constraint in constraints:
            name, poly = _split(constraint)
            named.append((name, selector * poly))
        return named


def _split(constraint: ConstraintLike) -> NamedConstraint:
    if isinstance(constraint, Expression):
        return "", constraint
    name, poly = constraint
    return name, poly


class ConstraintSystem:
    """Shape of a circuit: what columns exist and what must hold on them."""

    def __init__(self, field: type = FF):
        self.field = field
        self._columns: Dict[ColumnKind, List[Column]] = {kind: [] for kind in ColumnKind}
        self._selectors: List[Selector] = []
        self._gates: List[Gate] = []
        self._equality: set = set()

    # --- Columns ---

    def declare_column(self, kind: ColumnKind) -> Column:
        column = Column(kind, len(self._columns[kind]))
        self._columns[kind].append(column)
        return column

    def advice_column(self) -> Column:
        return self.declare_column(ColumnKind.ADVICE)

    def fixed_column(self) -> Column:
        return self.declare_column(ColumnKind.FIXED)

    def instance_column(self) -> Column:
        return self.declare_column(ColumnKind.INSTANCE)

    def columns(self, kind: Optional[ColumnKind] = None) -> List[Column]:
        if kind is not None:
            return list(self._columns[kind])
        return [c for k in ColumnKind for c in self._columns[k]]

    @property
    def num_advice_columns(self) -> int:
        return len(self._columns[ColumnKind.ADVICE])

    @property
    def num_fixed_columns(self) -> int:
        return len(self._columns[ColumnKind.FIXED])

    @property
    def num_instance_columns(self) -> int:
        return len(self._columns[ColumnKind.INSTANCE])

    def enable_equality(self, column: Column) -> None:
        """Allow `column` to take part in copy constraints."""
        if column not in self._columns[column.kind]:
            raise CircuitError(f"Column {column} is not declared in this constraint system")
        self._equality.add(column)

    @property
    def equality_columns(self) -> FrozenSet[Column]:
        return frozenset(self._equality)

    # --- Selectors ---

    def new_selector(self, name: Optional[str] = None) -> Selector:
        index = len(self._selectors)
        selector = Selector(index, name or f"s{index}")
        self._selectors.append(selector)
        return selector

    selector = new_selector

    @property
    def selectors(self) -> List[Selector]:
        return list(self._selectors)

    # --- Gates ---

    def create_gate(self, name: str, builder: Callable[[VirtualCells], Sequence[ConstraintLike]]) -> Gate:
        """Build a gate by running `builder` against a VirtualCells query object.

        `builder` returns expressions or (name, expression) pairs.
        """
        constraints = [_split(c) for c in builder(VirtualCells(self))]
        if not constraints:
            raise CircuitError(f"Gate '{name}' has no constraints")
        gate = Gate(
            name=name,
            constraint_names=[n for n, _ in constraints],
            polys=[p for _, p in constraints],
        )
        self._gates.append(gate)
        return gate

    def add_gate(self, name: str, selector: Selector, polys: Sequence[ConstraintLike]) -> Gate:
        """Declare a gate whose constraints are all conditioned on `selector`."""
        return self.create_gate(
            name, lambda meta: Constraints.with_selector(meta.query_selector(selector), polys)
        )

    @property
    def gates(self) -> List[Gate]:
        return list(self._gates)

    def degree(self) -> int:
        """Maximum degree over all gate polynomials (at least 1)."""
        return max([gate.degree() for gate in self._gates] + [1])
