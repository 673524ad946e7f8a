"""Gate expressions.

An Expression is a polynomial over (column, rotation) queries, selector queries
and constants. Trees are built once with ordinary Python operators while the
circuit is configured and stored in the Gate as plain data:

    a = meta.query_advice(advice, 0)
    b = meta.query_advice(advice, 1)
    c = meta.query_advice(advice, 2)
    s = meta.query_selector(selector)
    poly = s * (a + b - c)

Evaluation goes through an EvaluationContext, which decides what a leaf means.
RowsContext, the one the checker uses, resolves every leaf to a galois array
over a batch of rows so the whole tree is evaluated for all active rows in a
single walk.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional, Set, Tuple, Union

import galois
import numpy as np

from circuit.column import Column, Selector
from primitives.field import to_field

if TYPE_CHECKING:
    from circuit.table import Table

Scalar = Union[int, np.integer, galois.FieldArray]


def _as_int(value: Scalar) -> int:
    # Field scalars are not hashable, expression nodes store plain ints.
    return int(value)


class Expression(ABC):
    """Base node. Subclasses are frozen dataclasses."""

    # Keep numpy/galois from broadcasting over expressions: `FF(3) * expr`
    # must fall through to Expression.__rmul__.
    __array_ufunc__ = None

    @abstractmethod
    def evaluate(self, ctx: 'EvaluationContext'):
        pass

    @abstractmethod
    def degree(self) -> int:
        pass

    def children(self) -> Tuple['Expression', ...]:
        return ()

    def walk(self) -> Iterator['Expression']:
        """Pre-order traversal of the tree."""
        yield self
        for child in self.children():
            yield from child.walk()

    def queried_columns(self) -> Set[Tuple[Column, int]]:
        return {(node.column, node.rotation) for node in self.walk() if isinstance(node, ColumnQuery)}

    def queried_selectors(self) -> Set[Selector]:
        return {node.selector for node in self.walk() if isinstance(node, SelectorQuery)}

    # --- Operators ---

    def __add__(self, other) -> 'Expression':
        return Sum(self, lift(other))

    def __radd__(self, other) -> 'Expression':
        return Sum(lift(other), self)

    def __sub__(self, other) -> 'Expression':
        return Sum(self, Negated(lift(other)))

    def __rsub__(self, other) -> 'Expression':
        return Sum(lift(other), Negated(self))

    def __mul__(self, other) -> 'Expression':
        if isinstance(other, Expression):
            return Product(self, other)
        return Scaled(self, _as_int(other))

    def __rmul__(self, other) -> 'Expression':
        if isinstance(other, Expression):
            return Product(other, self)
        return Scaled(self, _as_int(other))

    def __neg__(self) -> 'Expression':
        return Negated(self)


def lift(value: Union[Expression, Scalar]) -> Expression:
    """Promote ints and field scalars to Constant nodes."""
    if isinstance(value, Expression):
        return value
    return Constant(_as_int(value))


def _wrap(expr: Expression) -> str:
    if isinstance(expr, (Sum, Negated, Scaled)):
        return f"({expr})"
    return str(expr)


# --- Leaves ---

@dataclass(frozen=True)
class Constant(Expression):
    value: int

    def evaluate(self, ctx: 'EvaluationContext'):
        return ctx.constant(self.value)

    def degree(self) -> int:
        return 0

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class ColumnQuery(Expression):
    """Value of `column` at (current row + rotation)."""
    column: Column
    rotation: int = 0

    def evaluate(self, ctx: 'EvaluationContext'):
        return ctx.query(self.column, self.rotation)

    def degree(self) -> int:
        return 1

    def __str__(self) -> str:
        if self.rotation == 0:
            return str(self.column)
        return f"{self.column}<{self.rotation:+d}>"


@dataclass(frozen=True)
class SelectorQuery(Expression):
    selector: Selector

    def evaluate(self, ctx: 'EvaluationContext'):
        return ctx.selector(self.selector)

    def degree(self) -> int:
        return 1

    def __str__(self) -> str:
        return str(self.selector)


# --- Combinators ---

@dataclass(frozen=True)
class Negated(Expression):
    inner: Expression

    def evaluate(self, ctx: 'EvaluationContext'):
        return -self.inner.evaluate(ctx)

    def degree(self) -> int:
        return self.inner.degree()

    def children(self) -> Tuple[Expression, ...]:
        return (self.inner,)

    def __str__(self) -> str:
        return f"-{_wrap(self.inner)}"


@dataclass(frozen=True)
class Sum(Expression):
    left: Expression
    right: Expression

    def evaluate(self, ctx: 'EvaluationContext'):
        return self.left.evaluate(ctx) + self.right.evaluate(ctx)

    def degree(self) -> int:
        return max(self.left.degree(), self.right.degree())

    def children(self) -> Tuple[Expression, ...]:
        return (self.left, self.right)

    def __str__(self) -> str:
        if isinstance(self.right, Negated):
            return f"{self.left} - {_wrap(self.right.inner)}"
        return f"{self.left} + {self.right}"


@dataclass(frozen=True)
class Product(Expression):
    left: Expression
    right: Expression

    def evaluate(self, ctx: 'EvaluationContext'):
        return self.left.evaluate(ctx) * self.right.evaluate(ctx)

    def degree(self) -> int:
        return self.left.degree() + self.right.degree()

    def children(self) -> Tuple[Expression, ...]:
        return (self.left, self.right)

    def __str__(self) -> str:
        return f"{_wrap(self.left)} * {_wrap(self.right)}"


@dataclass(frozen=True)
class Scaled(Expression):
    inner: Expression
    factor: int

    def evaluate(self, ctx: 'EvaluationContext'):
        return self.inner.evaluate(ctx) * ctx.constant(self.factor)

    def degree(self) -> int:
        return self.inner.degree()

    def children(self) -> Tuple[Expression, ...]:
        return (self.inner,)

    def __str__(self) -> str:
        return f"{_wrap(self.inner)} * {self.factor}"


# --- Evaluation Contexts ---

class EvaluationContext(ABC):
    """Resolves expression leaves to field values."""

    @abstractmethod
    def constant(self, value: int):
        pass

    @abstractmethod
    def query(self, column: Column, rotation: int):
        pass

    @abstractmethod
    def selector(self, selector: Selector):
        pass


class RowsContext(EvaluationContext):
    """Evaluate at a batch of absolute rows of a table.

    Every leaf becomes a galois array aligned with `rows` (constants stay
    scalars and broadcast). Reads go through Table.gather, so an unassigned
    cell or a rotation past the table edge raises a structural error naming
    the first offending row.
    """

    def __init__(self, table: 'Table', rows: np.ndarray, label: Optional[str] = None):
        self._table = table
        self._rows = np.asarray(rows, dtype=np.int64)
        self._label = label

    @property
    def rows(self) -> np.ndarray:
        return self._rows

    def constant(self, value: int):
        return to_field(value, self._table.field)

    def query(self, column: Column, rotation: int):
        return self._table.gather(column, self._rows + rotation, context=self._label)

    def selector(self, selector: Selector):
        mask = self._table.selector_mask(selector)[self._rows]
        return self._table.field(mask.astype(np.uint64))
