"""Tests for the conditional function chip."""

import pytest

from circuit.layouter import Layouter
from gadgets.function import FunctionChip, FunctionCircuit
from gadgets.is_zero import IsZeroChip
from verifier.mock_prover import MockProver

K = 4


@pytest.mark.parametrize("a, b, c", [(10, 12, 15), (10, 10, 15), (0, 0, 0), (3, 7, 1)])
def test_honest_assignment(a, b, c) -> None:
    assert MockProver.run(K, FunctionCircuit(a, b, c)).verify() == []


def test_output_value() -> None:
    prover = MockProver.run(K, FunctionCircuit(10, 12, 15))
    output = prover.cs.columns()[3]
    assert int(prover.table.value(output, 0)) == prover.cs.field.order - 2


class BadOutputCircuit(FunctionCircuit):
    """Writes c as the output even when a != b."""

    def synthesize(self, config, layouter: Layouter) -> None:
        def fill(region):
            config.selector.enable(region, 0)
            region.assign_advice(config.a, 0, self.a)
            region.assign_advice(config.b, 0, self.b)
            region.assign_advice(config.c, 0, self.c)
            IsZeroChip.construct(config.a_equals_b).assign(region, 0, self.a - self.b)
            region.assign_advice(config.output, 0, self.c)

        layouter.assign_region("bad", fill)


def test_wrong_branch_fails() -> None:
    failures = MockProver.run(K, BadOutputCircuit(10, 12, 15)).verify()
    assert len(failures) == 1
    assert failures[0].gate_name == "f(a, b, c) = if a == b {c} else {a-b}"
    assert failures[0].constraint_index == 1
    assert failures[0].constraint_name == "a != b => output == a - b"


def test_equal_branch_uses_c() -> None:
    """With a == b the honest output is c, which BadOutputCircuit also writes."""
    assert MockProver.run(K, BadOutputCircuit(4, 4, 9)).verify() == []


def test_gates(cs) -> None:
    FunctionChip.configure(cs)
    assert [g.name for g in cs.gates] == [
        "is_zero inverse",
        "is_zero indicator",
        "f(a, b, c) = if a == b {c} else {a-b}",
    ]
    assert cs.degree() == 3
