"""Tests for the arithmetic chip and its example circuits."""

import pytest

from circuit.column import Cell, Column, ColumnKind
from gadgets.arithmetic import ArithmeticCircuit, PolynomialCircuit
from primitives.field import FF
from verifier.failure import CopyConstraintViolated
from verifier.mock_prover import MockProver

ADVICE = [Column(ColumnKind.ADVICE, i) for i in range(3)]
FIXED = Column(ColumnKind.FIXED, 0)
INSTANCE = Column(ColumnKind.INSTANCE, 0)


class TestArithmeticCircuit:
    """(a + b) * a exposed as a public output."""

    def test_correct_output(self) -> None:
        prover = MockProver.run(4, ArithmeticCircuit(2, 1), [[6]])
        assert prover.verify() == []

    def test_wrong_output(self) -> None:
        failures = MockProver.run(4, ArithmeticCircuit(2, 1), [[7]]).verify()
        assert len(failures) == 1
        failure = failures[0]
        assert isinstance(failure, CopyConstraintViolated)
        assert failure.cell_a == Cell(ADVICE[2], 1)
        assert failure.cell_b == Cell(INSTANCE, 0)
        assert (failure.value_a, failure.value_b) == ("0x6", "0x7")
        assert failure.location_a.region_name == "mul"

    def test_regions(self) -> None:
        prover = MockProver.run(4, ArithmeticCircuit(2, 1), [[6]])
        assert [(r.name, r.start, r.rows) for r in prover.regions] == [("add", 0, 1), ("mul", 1, 1)]

    def test_intermediate_copies(self) -> None:
        """Mul inputs are copied from the add row."""
        prover = MockProver.run(4, ArithmeticCircuit(2, 1), [[6]])
        assert prover.copies.connected(Cell(ADVICE[0], 0), Cell(ADVICE[0], 1))
        assert prover.copies.connected(Cell(ADVICE[2], 0), Cell(ADVICE[1], 1))

    @pytest.mark.parametrize("a, b", [(0, 0), (3, 4), (-1, 5)])
    def test_other_inputs(self, a, b) -> None:
        out = (FF(a % FF.order) + FF(b % FF.order)) * FF(a % FF.order)
        assert MockProver.run(4, ArithmeticCircuit(a, b), [[int(out)]]).verify() == []


class TestPolynomialCircuit:
    """u^2 + 3uv + v + 5 with explicit copy constraints."""

    def test_correct_output(self) -> None:
        assert MockProver.run(4, PolynomialCircuit(2, 3), [[30]]).verify() == []

    def test_wrong_output(self) -> None:
        failures = MockProver.run(4, PolynomialCircuit(2, 3), [[31]]).verify()
        assert len(failures) == 1
        assert failures[0].cell_a == Cell(ADVICE[2], 5)

    def test_fixed_constants(self) -> None:
        prover = MockProver.run(4, PolynomialCircuit(2, 3), [[30]])
        assert prover.table.value(FIXED, 2) == FF(3)
        assert prover.table.value(FIXED, 5) == FF(5)
        assert prover.table.read(FIXED, 0) is None

    def test_layout(self) -> None:
        prover = MockProver.run(4, PolynomialCircuit(2, 3), [[30]])
        assert [(r.name, r.start, r.rows) for r in prover.regions] == [
            ("multiplication region", 0, 3),
            ("addition region", 3, 3),
            ("equality", 6, 0),
        ]
        assert len(prover.copies) == 9
