"""Arithmetic chip: addition and multiplication gates over three advice columns.

    advice[0] | advice[1] | advice[2] | constant | s_add | s_mul | s_add_c | s_mul_c
       lhs    |    rhs    |    out    |          |   1   |       |         |
       lhs    |    rhs    |    out    |          |       |   1   |         |
       lhs    |           |    out    |    k     |       |       |    1    |
       lhs    |           |    out    |    k     |       |       |         |    1

Inputs may be raw values or cells assigned earlier; the latter are copied in
with a copy constraint, so results chain across regions soundly.
"""

from dataclasses import dataclass
from typing import Tuple, Union

from circuit.circuit import Circuit
from circuit.column import Column, Selector
from circuit.constraint_system import ConstraintSystem
from circuit.layouter import AssignedCell, Layouter, Region
from primitives.field import FieldLike

from .base import Chip, load_advice, value_of

Operand = Union[AssignedCell, FieldLike]


@dataclass
class ArithmeticConfig:
    advice: Tuple[Column, Column, Column]
    instance: Column
    constant: Column
    s_add: Selector
    s_mul: Selector
    s_add_c: Selector
    s_mul_c: Selector


class ArithmeticChip(Chip[ArithmeticConfig]):

    @classmethod
    def configure(cls, cs: ConstraintSystem, advice: Tuple[Column, Column, Column],
                  instance: Column, constant: Column) -> ArithmeticConfig:
        cs.enable_equality(instance)
        for column in advice:
            cs.enable_equality(column)

        s_add = cs.selector("s_add")
        s_mul = cs.selector("s_mul")
        s_add_c = cs.selector("s_add_c")
        s_mul_c = cs.selector("s_mul_c")

        def binary(selector: Selector, op):
            def gate(meta):
                s = meta.query_selector(selector)
                lhs = meta.query_advice(advice[0])
                rhs = meta.query_advice(advice[1])
                out = meta.query_advice(advice[2])
                return [s * (op(lhs, rhs) - out)]
            return gate

        def with_constant(selector: Selector, op):
            def gate(meta):
                s = meta.query_selector(selector)
                lhs = meta.query_advice(advice[0])
                fixed = meta.query_fixed(constant)
                out = meta.query_advice(advice[2])
                return [s * (op(lhs, fixed) - out)]
            return gate

        cs.create_gate("add", binary(s_add, lambda a, b: a + b))
        cs.create_gate("mul", binary(s_mul, lambda a, b: a * b))
        cs.create_gate("add with constant", with_constant(s_add_c, lambda a, k: a + k))
        cs.create_gate("mul with constant", with_constant(s_mul_c, lambda a, k: a * k))

        return ArithmeticConfig(
            advice=tuple(advice),
            instance=instance,
            constant=constant,
            s_add=s_add,
            s_mul=s_mul,
            s_add_c=s_add_c,
            s_mul_c=s_mul_c,
        )

    # --- Row helpers (region-level) ---

    def add_row(self, region: Region, offset: int, a: Operand, b: Operand):
        out = value_of(a, region.field) + value_of(b, region.field)
        return self._binary_row(region, offset, self.config.s_add, a, b, out)

    def mul_row(self, region: Region, offset: int, a: Operand, b: Operand):
        out = value_of(a, region.field) * value_of(b, region.field)
        return self._binary_row(region, offset, self.config.s_mul, a, b, out)

    def add_constant_row(self, region: Region, offset: int, a: Operand, k: FieldLike):
        out = value_of(a, region.field) + value_of(k, region.field)
        return self._constant_row(region, offset, self.config.s_add_c, a, k, out)

    def mul_constant_row(self, region: Region, offset: int, a: Operand, k: FieldLike):
        out = value_of(a, region.field) * value_of(k, region.field)
        return self._constant_row(region, offset, self.config.s_mul_c, a, k, out)

    def _binary_row(self, region, offset, selector, a, b, out):
        advice = self.config.advice
        selector.enable(region, offset)
        a_cell = load_advice(region, advice[0], offset, a, "lhs")
        b_cell = load_advice(region, advice[1], offset, b, "rhs")
        c_cell = region.assign_advice(advice[2], offset, out, "out")
        return a_cell, b_cell, c_cell

    def _constant_row(self, region, offset, selector, a, k, out):
        advice = self.config.advice
        selector.enable(region, offset)
        a_cell = load_advice(region, advice[0], offset, a, "lhs")
        region.assign_fixed(self.config.constant, offset, k, "constant")
        c_cell = region.assign_advice(advice[2], offset, out, "out")
        return a_cell, c_cell

    # --- Single-row regions ---

    def assign_add(self, layouter: Layouter, a: Operand, b: Operand):
        return layouter.assign_region("add", lambda region: self.add_row(region, 0, a, b))

    def assign_mul(self, layouter: Layouter, a: Operand, b: Operand):
        return layouter.assign_region("mul", lambda region: self.mul_row(region, 0, a, b))

    def assign_add_constant(self, layouter: Layouter, a: Operand, k: FieldLike):
        return layouter.assign_region("add with constant", lambda region: self.add_constant_row(region, 0, a, k))

    def assign_mul_constant(self, layouter: Layouter, a: Operand, k: FieldLike):
        return layouter.assign_region("mul with constant", lambda region: self.mul_constant_row(region, 0, a, k))

    def expose_public(self, layouter: Layouter, cell: AssignedCell, row: int) -> None:
        layouter.constrain_instance(cell, self.config.instance, row)


def _configure_arithmetic(cs: ConstraintSystem) -> ArithmeticConfig:
    advice = (cs.advice_column(), cs.advice_column(), cs.advice_column())
    return ArithmeticChip.configure(cs, advice, cs.instance_column(), cs.fixed_column())


class ArithmeticCircuit(Circuit):
    """out = (a + b) * a, exposed at instance row 0."""

    def __init__(self, a: FieldLike, b: FieldLike):
        self.a = a
        self.b = b

    @classmethod
    def configure(cls, cs: ConstraintSystem) -> ArithmeticConfig:
        return _configure_arithmetic(cs)

    def synthesize(self, config: ArithmeticConfig, layouter: Layouter) -> None:
        chip = ArithmeticChip.construct(config)
        a_0, _, c_0 = chip.assign_add(layouter, self.a, self.b)
        _, _, out = chip.assign_mul(layouter, a_0, c_0)
        chip.expose_public(layouter, out, 0)


class PolynomialCircuit(Circuit):
    """out = u^2 + 3uv + v + 5, exposed at instance row 0.

    Values are laid out in a multiplication region and an addition region of
    three rows each; a separate empty region ties them together with explicit
    copy constraints.
    """

    def __init__(self, u: FieldLike, v: FieldLike):
        self.u = u
        self.v = v

    @classmethod
    def configure(cls, cs: ConstraintSystem) -> ArithmeticConfig:
        return _configure_arithmetic(cs)

    def synthesize(self, config: ArithmeticConfig, layouter: Layouter) -> None:
        chip = ArithmeticChip.construct(config)

        def multiplication(region: Region):
            row_1 = chip.mul_row(region, 0, self.u, self.u)            # t1 = u * u
            row_2 = chip.mul_row(region, 1, self.u, self.v)            # t2 = u * v
            row_3 = chip.mul_constant_row(region, 2, row_2[2].value, 3)  # t3 = 3 * t2
            return row_1, row_2, row_3

        (x_a1, x_b1, x_c1), (x_a2, x_b2, x_c2), (x_a3, x_c3) = layouter.assign_region(
            "multiplication region", multiplication
        )

        def addition(region: Region):
            row_4 = chip.add_row(region, 0, x_c1.value, x_c3.value)    # t4 = t1 + t3
            row_5 = chip.add_row(region, 1, row_4[2].value, self.v)    # t5 = t4 + v
            row_6 = chip.add_constant_row(region, 2, row_5[2].value, 5)  # t6 = t5 + 5
            return row_4, row_5, row_6

        (x_a4, x_b4, x_c4), (x_a5, x_b5, x_c5), (x_a6, x_c6) = layouter.assign_region(
            "addition region", addition
        )

        chip.expose_public(layouter, x_c6, 0)

        def equality(region: Region):
            region.constrain_equal(x_a1, x_a2)  # u
            region.constrain_equal(x_a2, x_b1)  # u
            region.constrain_equal(x_b2, x_b5)  # v
            region.constrain_equal(x_a4, x_c1)  # t1
            region.constrain_equal(x_a3, x_c2)  # t2
            region.constrain_equal(x_b4, x_c3)  # t3
            region.constrain_equal(x_a5, x_c4)  # t4
            region.constrain_equal(x_a6, x_c5)  # t5

        layouter.assign_region("equality", equality)
