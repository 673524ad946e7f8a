"""Is-zero gadget.

Produces a witnessed boolean `indicator` that is 1 when an expression x is
zero and 0 otherwise. The indicator is not trusted; two gates pin it down:

    x * inv = 1 - indicator      (is_zero inverse)
    indicator * x = 0            (is_zero indicator)

If x != 0 the second gate forces indicator = 0, and then the first forces
inv = x^-1. If x = 0 the first gate forces indicator = 1. Any other
assignment violates at least one of the two gates.

Layout (one row per check):

    value_inv | indicator | q_enable
    x^-1 or 0 |  0 or 1   |    1
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from circuit.column import Column
from circuit.constraint_system import ConstraintSystem, VirtualCells
from circuit.expression import ColumnQuery, Expression
from circuit.layouter import AssignedCell, Region
from primitives.field import FieldLike, inverse_or_zero, to_field

from .base import Chip


@dataclass
class IsZeroConfig:
    value_inv: Column
    indicator: Column

    def expr(self, rotation: int = 0) -> Expression:
        """The indicator, for use inside other gates."""
        return ColumnQuery(self.indicator, rotation)


class IsZeroChip(Chip[IsZeroConfig]):

    @classmethod
    def configure(
        cls,
        cs: ConstraintSystem,
        q_enable: Callable[[VirtualCells], Expression],
        value: Callable[[VirtualCells], Expression],
        value_inv: Column,
        indicator: Optional[Column] = None,
    ) -> IsZeroConfig:
        if indicator is None:
            indicator = cs.advice_column()

        def inverse_gate(meta: VirtualCells):
            q = q_enable(meta)
            x = value(meta)
            inv = meta.query_advice(value_inv)
            is_zero = meta.query_advice(indicator)
            return [("x * inv = 1 - indicator", q * (x * inv - (1 - is_zero)))]

        def indicator_gate(meta: VirtualCells):
            q = q_enable(meta)
            x = value(meta)
            is_zero = meta.query_advice(indicator)
            return [("indicator * x = 0", q * (is_zero * x))]

        cs.create_gate("is_zero inverse", inverse_gate)
        cs.create_gate("is_zero indicator", indicator_gate)
        return IsZeroConfig(value_inv=value_inv, indicator=indicator)

    def assign(self, region: Region, offset: int, value: FieldLike) -> AssignedCell:
        """Witness inv and indicator for x = value; returns the indicator cell."""
        x = to_field(value, region.field)
        if x == 0:
            inv, is_zero = 0, 1
        else:
            inv, is_zero = x ** -1, 0
        region.assign_advice(self.config.value_inv, offset, inv, "value_inv")
        return region.assign_advice(self.config.indicator, offset, is_zero, "is_zero")

    def assign_rows(self, region: Region, offset: int, values: Sequence[FieldLike]) -> list:
        """Witness consecutive rows starting at `offset`, one batch inversion."""
        xs = region.field([int(to_field(v, region.field)) for v in values])
        invs = inverse_or_zero(xs)
        cells = []
        for i, (x, inv) in enumerate(zip(xs, invs)):
            region.assign_advice(self.config.value_inv, offset + i, inv, "value_inv")
            cells.append(region.assign_advice(self.config.indicator, offset + i, int(x == 0), "is_zero"))
        return cells
