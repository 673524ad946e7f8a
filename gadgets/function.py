"""Conditional function f(a, b, c) = c if a == b else a - b.

Branches without a native conditional: an is-zero gadget on (a - b) yields
eq, and the output gate enforces

    s * eq * (output - c) = 0
    s * (1 - eq) * (output - (a - b)) = 0
"""

from dataclasses import dataclass

from circuit.circuit import Circuit
from circuit.column import Column, Selector
from circuit.constraint_system import ConstraintSystem
from circuit.layouter import AssignedCell, Layouter, Region
from primitives.field import FieldLike, to_field

from .base import Chip
from .is_zero import IsZeroChip, IsZeroConfig


@dataclass
class FunctionConfig:
    selector: Selector
    a: Column
    b: Column
    c: Column
    output: Column
    a_equals_b: IsZeroConfig


class FunctionChip(Chip[FunctionConfig]):

    @classmethod
    def configure(cls, cs: ConstraintSystem) -> FunctionConfig:
        selector = cs.selector("s_function")
        a = cs.advice_column()
        b = cs.advice_column()
        c = cs.advice_column()
        output = cs.advice_column()

        a_equals_b = IsZeroChip.configure(
            cs,
            lambda meta: meta.query_selector(selector),
            lambda meta: meta.query_advice(a) - meta.query_advice(b),
            cs.advice_column(),
        )

        def gate(meta):
            s = meta.query_selector(selector)
            a_ = meta.query_advice(a)
            b_ = meta.query_advice(b)
            c_ = meta.query_advice(c)
            out = meta.query_advice(output)
            eq = a_equals_b.expr()
            return [
                ("a == b => output == c", s * (eq * (out - c_))),
                ("a != b => output == a - b", s * ((1 - eq) * (out - (a_ - b_)))),
            ]

        cs.create_gate("f(a, b, c) = if a == b {c} else {a-b}", gate)
        return FunctionConfig(selector=selector, a=a, b=b, c=c, output=output, a_equals_b=a_equals_b)

    def assign(self, layouter: Layouter, a: FieldLike, b: FieldLike, c: FieldLike) -> AssignedCell:
        config = self.config
        is_zero_chip = IsZeroChip.construct(config.a_equals_b)

        def fill(region: Region) -> AssignedCell:
            a_val = to_field(a, region.field)
            b_val = to_field(b, region.field)
            c_val = to_field(c, region.field)

            config.selector.enable(region, 0)
            region.assign_advice(config.a, 0, a_val, "a")
            region.assign_advice(config.b, 0, b_val, "b")
            region.assign_advice(config.c, 0, c_val, "c")
            is_zero_chip.assign(region, 0, a_val - b_val)

            output = c_val if a_val == b_val else a_val - b_val
            return region.assign_advice(config.output, 0, output, "output")

        return layouter.assign_region("f(a,b,c) = if a == b {c} else {a-b}", fill)


class FunctionCircuit(Circuit):

    def __init__(self, a: FieldLike, b: FieldLike, c: FieldLike):
        self.a = a
        self.b = b
        self.c = c

    @classmethod
    def configure(cls, cs: ConstraintSystem) -> FunctionConfig:
        return FunctionChip.configure(cs)

    def synthesize(self, config: FunctionConfig, layouter: Layouter) -> None:
        FunctionChip.construct(config).assign(layouter, self.a, self.b, self.c)
