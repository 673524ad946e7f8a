"""Tests for the Fibonacci chip."""

import pytest

from circuit.column import Cell, Column, ColumnKind
from circuit.params import CircuitParams
from gadgets.fibonacci import FiboChip, FibonacciCircuit
from verifier.failure import CopyConstraintViolated
from verifier.mock_prover import MockProver

K = 4
ADVICE = Column(ColumnKind.ADVICE, 0)
INSTANCE = Column(ColumnKind.INSTANCE, 0)


def test_tenth_term() -> None:
    prover = MockProver.run(K, FibonacciCircuit(), [[1, 1, 55]])
    assert prover.verify() == []


def test_wrong_public_output() -> None:
    """A wrong claimed output is a single copy failure, no gate failures."""
    failures = MockProver.run(K, FibonacciCircuit(), [[1, 1, 56]]).verify()
    assert len(failures) == 1
    failure = failures[0]
    assert isinstance(failure, CopyConstraintViolated)
    assert failure.cell_a == Cell(ADVICE, 9)
    assert failure.cell_b == Cell(INSTANCE, 2)
    assert (failure.value_a, failure.value_b) == ("0x37", "0x38")


def test_different_seeds() -> None:
    """Seeds come from the public inputs."""
    # 2, 3, 5, 8, 13, 21, 34, 55, 89, 144
    assert MockProver.run(K, FibonacciCircuit(), [[2, 3, 144]]).verify() == []


def test_selector_rows() -> None:
    prover = MockProver.run(K, FibonacciCircuit(), [[1, 1, 55]])
    selector = prover.cs.selectors[0]
    assert prover.table.selector_mask(selector).nonzero()[0].tolist() == list(range(8))


def test_column_values() -> None:
    prover = MockProver.run(K, FibonacciCircuit(), [[1, 1, 55]])
    values = prover.table.column_values(ADVICE)
    assert [int(v) for v in values[:10]] == [1, 1, 2, 3, 5, 8, 13, 21, 34, 55]
    assert prover.table.rows_used == 10


def test_other_length() -> None:
    assert MockProver.run(K, FibonacciCircuit(nrows=5), [[1, 1, 5]]).verify() == []


def test_too_few_rows() -> None:
    with pytest.raises(ValueError):
        MockProver.run(K, FibonacciCircuit(nrows=3), [[1, 1, 2]])


def test_small_field_params() -> None:
    """Runs unchanged over GF(101) loaded from params."""
    params = CircuitParams.from_dict({"k": 4, "field_modulus": 101})
    prover = MockProver.from_params(params, FibonacciCircuit(), [[1, 1, 55]])
    assert prover.cs.field.order == 101
    assert prover.verify() == []


def test_gate_shape(cs) -> None:
    config = FiboChip.configure(cs, cs.advice_column(), cs.instance_column())
    gate = cs.gates[0]
    assert gate.name == "add"
    assert gate.queried_columns() == [(config.advice, 0), (config.advice, 1), (config.advice, 2)]
    assert cs.equality_columns == frozenset({config.advice, config.instance})
    assert str(gate.polys[0]) == "s_fib * (advice[0] + advice[0]<+1> - advice[0]<+2>)"
