"""Tests for the is-zero gadget."""

from dataclasses import dataclass
from typing import Optional

import pytest

from circuit.circuit import Circuit
from circuit.column import Column, ColumnKind, Selector
from gadgets.is_zero import IsZeroChip, IsZeroConfig
from primitives.field import FF
from verifier.mock_prover import MockProver


@dataclass
class Config:
    q: Selector
    x: Column
    is_zero: IsZeroConfig


class IsZeroCircuit(Circuit):
    """Witnesses x and runs the gadget on it.

    `inv` and `indicator` override the honest witness when given.
    """

    def __init__(self, xs, inv: Optional[int] = None, indicator: Optional[int] = None, batch: bool = False):
        self.xs = xs
        self.inv = inv
        self.indicator = indicator
        self.batch = batch

    @classmethod
    def configure(cls, cs) -> Config:
        q = cs.selector("q")
        x = cs.advice_column()
        is_zero = IsZeroChip.configure(
            cs,
            lambda meta: meta.query_selector(q),
            lambda meta: meta.query_advice(x),
            cs.advice_column(),
        )
        return Config(q, x, is_zero)

    def synthesize(self, config: Config, layouter) -> None:
        chip = IsZeroChip.construct(config.is_zero)

        def fill(region):
            for offset, x in enumerate(self.xs):
                config.q.enable(region, offset)
                region.assign_advice(config.x, offset, x)
            if self.inv is not None:
                region.assign_advice(config.is_zero.value_inv, 0, self.inv)
                region.assign_advice(config.is_zero.indicator, 0, self.indicator)
            elif self.batch:
                return chip.assign_rows(region, 0, self.xs)
            else:
                return [chip.assign(region, offset, x) for offset, x in enumerate(self.xs)]

        layouter.assign_region("is zero", fill)


class TestHonestWitness:
    """The assignment helpers produce satisfying witnesses."""

    def test_zero(self) -> None:
        assert MockProver.run(3, IsZeroCircuit([0])).verify() == []

    def test_nonzero(self) -> None:
        assert MockProver.run(3, IsZeroCircuit([5])).verify() == []

    def test_many_rows(self) -> None:
        xs = [0, 1, 7, 0, -3]
        assert MockProver.run(3, IsZeroCircuit(xs)).verify() == []

    def test_batch_rows(self) -> None:
        xs = [0, 1, 7, 0, -3]
        assert MockProver.run(3, IsZeroCircuit(xs, batch=True)).verify() == []

    def test_indicator_values(self) -> None:
        prover = MockProver.run(3, IsZeroCircuit([0, 9], batch=True))
        indicator = prover.table.column_values(Column(ColumnKind.ADVICE, 2))
        assert indicator[0] == FF(1)
        assert indicator[1] == FF(0)


class TestSoundness:
    """Only the honest (inv, indicator) pair satisfies both gates."""

    @pytest.mark.parametrize("x", [0, 5])
    @pytest.mark.parametrize("indicator", [0, 1, 2])
    @pytest.mark.parametrize("inv", ["zero", "one", "inverse"])
    def test_unique_witness(self, x, inv, indicator) -> None:
        honest_inv = int(FF(x) ** -1) if x != 0 else 0
        inv_value = {"zero": 0, "one": 1, "inverse": honest_inv}[inv]
        honest_indicator = 1 if x == 0 else 0
        prover = MockProver.run(3, IsZeroCircuit([x], inv=inv_value, indicator=indicator))
        satisfied = prover.verify() == []
        # x = 0 leaves inv unconstrained
        honest = indicator == honest_indicator and (x == 0 or inv_value == honest_inv)
        assert satisfied == honest

    def test_claiming_nonzero_is_zero(self) -> None:
        """Indicator 1 for x != 0 violates the indicator gate."""
        failures = MockProver.run(3, IsZeroCircuit([5], inv=0, indicator=1)).verify()
        assert [f.gate_name for f in failures] == ["is_zero indicator"]

    def test_claiming_zero_nonzero(self) -> None:
        """Indicator 0 for x = 0 violates the inverse gate."""
        failures = MockProver.run(3, IsZeroCircuit([0], inv=0, indicator=0)).verify()
        assert [f.gate_name for f in failures] == ["is_zero inverse"]
