"""Fibonacci chip over a single advice column.

    advice | selector
      a    |    s
      b    |
      c    |

Gate "add": s * (a(cur) + a(next) - a(next 2)). The two seeds are copied in
from the instance column (rows 0 and 1), each later row is the sum of the two
above it, and the final cell is bound to a third public input.

The selector is enabled on rows 0 .. nrows - 3. A selector on either of the
last two rows would reach past the assigned rows, and with every row up to
nrows - 3 enabled each computed cell is already covered by some gate row.
"""

from dataclasses import dataclass

from circuit.circuit import Circuit
from circuit.column import Column, Selector
from circuit.constraint_system import ConstraintSystem
from circuit.layouter import AssignedCell, Layouter, Region

from .base import Chip


@dataclass
class FiboConfig:
    advice: Column
    selector: Selector
    instance: Column


class FiboChip(Chip[FiboConfig]):

    @classmethod
    def configure(cls, cs: ConstraintSystem, advice: Column, instance: Column) -> FiboConfig:
        selector = cs.selector("s_fib")
        cs.enable_equality(advice)
        cs.enable_equality(instance)

        def add_gate(meta):
            s = meta.query_selector(selector)
            a = meta.query_advice(advice, 0)
            b = meta.query_advice(advice, 1)
            c = meta.query_advice(advice, 2)
            return [s * (a + b - c)]

        cs.create_gate("add", add_gate)
        return FiboConfig(advice=advice, selector=selector, instance=instance)

    def assign(self, layouter: Layouter, nrows: int) -> AssignedCell:
        """Fill `nrows` rows of the sequence; returns the last cell."""
        if nrows < 4:
            raise ValueError(f"nrows must be >= 4, got {nrows}")
        config = self.config

        def fill(region: Region) -> AssignedCell:
            config.selector.enable(region, 0)
            config.selector.enable(region, 1)
            a_cell = region.assign_advice_from_instance(config.instance, 0, config.advice, 0, "f(0)")
            b_cell = region.assign_advice_from_instance(config.instance, 1, config.advice, 1, "f(1)")

            for row in range(2, nrows):
                if row < nrows - 2:
                    config.selector.enable(region, row)
                c_cell = region.assign_advice(config.advice, row, a_cell.value + b_cell.value, f"f({row})")
                a_cell, b_cell = b_cell, c_cell
            return b_cell

        return layouter.assign_region("entire table", fill)

    def expose_public(self, layouter: Layouter, cell: AssignedCell, row: int) -> None:
        layouter.constrain_instance(cell, self.config.instance, row)


class FibonacciCircuit(Circuit):
    """Public inputs [f(0), f(1), f(nrows - 1)]."""

    def __init__(self, nrows: int = 10):
        self.nrows = nrows

    @classmethod
    def configure(cls, cs: ConstraintSystem) -> FiboConfig:
        return FiboChip.configure(cs, cs.advice_column(), cs.instance_column())

    def synthesize(self, config: FiboConfig, layouter: Layouter) -> None:
        chip = FiboChip.construct(config)
        out = chip.assign(layouter, self.nrows)
        chip.expose_public(layouter, out, 2)
