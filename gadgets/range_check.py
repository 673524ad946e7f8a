"""Range-check gadget.

Checks that the value witnessed in a cell lies in [0, RANGE):

    value | q_range_check
      v   |       1

The gate is the vanishing polynomial v * (1 - v) * (2 - v) * ... * (RANGE - 1 - v),
which has a root at every integer in range and nowhere else. Its degree grows
linearly with RANGE, so it only suits small ranges.
"""

from dataclasses import dataclass

from circuit.circuit import Circuit
from circuit.column import Column, Selector
from circuit.constraint_system import Constraints, ConstraintSystem
from circuit.expression import Expression
from circuit.layouter import AssignedCell, Layouter, Region
from primitives.field import FieldLike

from .base import Chip


def range_check_expr(value: Expression, range_: int) -> Expression:
    """v * (1 - v) * ... * (range_ - 1 - v)."""
    expr = value
    for i in range(1, range_):
        expr = expr * (i - value)
    return expr


@dataclass
class RangeCheckConfig:
    value: Column
    q_range_check: Selector
    range: int


class RangeCheckChip(Chip[RangeCheckConfig]):

    @classmethod
    def configure(cls, cs: ConstraintSystem, value: Column, range_: int) -> RangeCheckConfig:
        if range_ < 1:
            raise ValueError(f"range must be >= 1, got {range_}")
        q_range_check = cs.selector("q_range_check")

        cs.create_gate("range check", lambda meta: Constraints.with_selector(
            meta.query_selector(q_range_check),
            [("range check", range_check_expr(meta.query_advice(value), range_))],
        ))
        return RangeCheckConfig(value=value, q_range_check=q_range_check, range=range_)

    def assign_in_region(self, region: Region, offset: int, value: FieldLike) -> AssignedCell:
        self.config.q_range_check.enable(region, offset)
        return region.assign_advice(self.config.value, offset, value, "value")

    def assign(self, layouter: Layouter, value: FieldLike) -> AssignedCell:
        return layouter.assign_region(
            "Assign value", lambda region: self.assign_in_region(region, 0, value)
        )


class RangeCheckCircuit(Circuit):
    """Single range-checked value; subclass and override RANGE for other bounds."""

    RANGE = 8

    def __init__(self, value: FieldLike):
        self.value = value

    @classmethod
    def configure(cls, cs: ConstraintSystem) -> RangeCheckConfig:
        return RangeCheckChip.configure(cs, cs.advice_column(), cls.RANGE)

    def synthesize(self, config: RangeCheckConfig, layouter: Layouter) -> None:
        RangeCheckChip.construct(config).assign(layouter, self.value)
