"""Satisfiability checker.

MockProver builds one circuit instance (configure + synthesize) and checks it
exhaustively: every gate at every row where it is switched on, then every
copy-constraint class. It never stops at the first problem; all failures are
collected and returned in a normalised order, so running verify() twice, or
with a different number of workers, yields the same list.

Structural errors (an unassigned cell read by an active gate, a rotation past
the table edge, an unassigned cell in a copy class) are raised instead.

Example:
    prover = MockProver.run(4, FibonacciCircuit(), [[1, 1, 55]])
    assert prover.verify() == []
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import List, Optional, Sequence

import numpy as np

from circuit.circuit import Circuit
from circuit.column import Cell, ColumnKind
from circuit.constraint_system import ConstraintSystem, Gate
from circuit.expression import ColumnQuery, RowsContext
from circuit.layouter import Layouter, RegionInfo
from circuit.params import CircuitParams
from circuit.permutation import CopyConstraints
from circuit.table import Table
from primitives.field import FF, FieldLike, field_repr
from verifier.failure import (
    ConstraintNotSatisfied,
    CopyConstraintViolated,
    FailureLocation,
    VerifyFailure,
    format_failures,
    sort_failures,
)

logger = logging.getLogger(__name__)


class CheckerState(Enum):
    BUILDING = "building"
    SEALED = "sealed"


class MockProver:
    """Checks a fully assigned table against its gates and copy constraints."""

    def __init__(
        self,
        cs: ConstraintSystem,
        table: Table,
        copies: CopyConstraints,
        regions: Sequence[RegionInfo] = (),
        workers: int = 1,
    ):
        self.cs = cs
        self.table = table
        self.copies = copies
        self.regions = list(regions)
        self.workers = workers

    @classmethod
    def run(
        cls,
        k: int,
        circuit: Circuit,
        public_inputs: Sequence[Sequence[FieldLike]] = (),
        field: type = FF,
        workers: int = 1,
    ) -> 'MockProver':
        """Configure and synthesize `circuit` into a table of 2^k rows."""
        cs = ConstraintSystem(field)
        config = circuit.configure(cs)
        table = Table(cs, 1 << k, public_inputs)
        copies = CopyConstraints(cs.equality_columns)
        layouter = Layouter(table, copies)
        circuit.synthesize(config, layouter)
        logger.debug(
            "Synthesized %s: %d regions, %d rows used of %d",
            type(circuit).__name__, len(layouter.regions), table.rows_used, table.n_rows,
        )
        return cls(cs, table, copies, layouter.regions, workers)

    @classmethod
    def from_params(
        cls,
        params: CircuitParams,
        circuit: Circuit,
        public_inputs: Sequence[Sequence[FieldLike]] = (),
    ) -> 'MockProver':
        return cls.run(params.k, circuit, public_inputs, field=params.field, workers=params.workers)

    # --- State ---

    @property
    def state(self) -> CheckerState:
        return CheckerState.SEALED if self.table.sealed else CheckerState.BUILDING

    def seal(self) -> None:
        self.table.seal()
        self.copies.seal()

    # --- Verification ---

    def verify(self) -> List[VerifyFailure]:
        """Seal and check everything; an empty list means satisfied."""
        self.seal()
        gates = list(enumerate(self.cs.gates))

        if self.workers > 1 and len(gates) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                per_gate = list(pool.map(lambda item: self._check_gate(*item), gates))
        else:
            per_gate = [self._check_gate(index, gate) for index, gate in gates]

        failures: List[VerifyFailure] = [f for found in per_gate for f in found]
        failures += self._check_copies()
        failures = sort_failures(failures)

        logger.info(
            "Checked %d gates and %d copy constraints over %d rows: %d failures",
            len(gates), len(self.copies), self.table.n_rows, len(failures),
        )
        return failures

    def is_satisfied(self) -> bool:
        return not self.verify()

    def assert_satisfied(self) -> None:
        failures = self.verify()
        if failures:
            raise AssertionError(f"Circuit is not satisfied:\n{format_failures(failures)}")

    # --- Gates ---

    def _active_rows(self, gate: Gate) -> np.ndarray:
        """Rows where any selector queried by `gate` is enabled."""
        selectors = gate.queried_selectors()
        if not selectors:
            return np.arange(self.table.n_rows, dtype=np.int64)
        active = np.zeros(self.table.n_rows, dtype=bool)
        for selector in selectors:
            active |= self.table.selector_mask(selector)
        return np.flatnonzero(active)

    def _check_gate(self, gate_index: int, gate: Gate) -> List[VerifyFailure]:
        rows = self._active_rows(gate)
        if rows.size == 0:
            return []
        logger.debug("Gate %d '%s': %d active rows", gate_index, gate.name, rows.size)

        failures: List[VerifyFailure] = []
        for constraint_index, (name, poly) in enumerate(gate.constraints):
            ctx = RowsContext(self.table, rows, label=f"gate '{gate.name}' constraint {constraint_index}")
            result = poly.evaluate(ctx)
            violated = np.broadcast_to(np.asarray(result) != 0, rows.shape)
            for row in rows[violated]:
                row = int(row)
                failures.append(ConstraintNotSatisfied(
                    gate_index=gate_index,
                    gate_name=gate.name,
                    constraint_index=constraint_index,
                    constraint_name=name,
                    location=self._location(row),
                    cell_values=self._cell_values(poly, row),
                ))
        return failures

    def _cell_values(self, poly, row: int):
        values = []
        for column, rotation in sorted(poly.queried_columns()):
            value = self.table.value(column, row + rotation)
            values.append((str(ColumnQuery(column, rotation)), field_repr(value)))
        return tuple(values)

    # --- Copy constraints ---

    def _check_copies(self) -> List[VerifyFailure]:
        failures: List[VerifyFailure] = []
        for members in self.copies.resolve():
            values = [self._copy_value(cell) for cell in members]
            first, first_value = members[0], values[0]
            for cell, value in zip(members[1:], values[1:]):
                if value != first_value:
                    failures.append(CopyConstraintViolated(
                        cell_a=first,
                        cell_b=cell,
                        value_a=field_repr(first_value),
                        value_b=field_repr(value),
                        location_a=self._cell_location(first),
                        location_b=self._cell_location(cell),
                    ))
        return failures

    def _copy_value(self, cell: Cell):
        return self.table.value(cell.column, cell.row, context="copy constraint")

    def _cell_location(self, cell: Cell) -> FailureLocation:
        # Instance cells are not laid out by regions
        if cell.column.kind == ColumnKind.INSTANCE:
            return FailureLocation(row=cell.row)
        return self._location(cell.row)

    def _location(self, row: int) -> FailureLocation:
        return FailureLocation.at(row, self._region_at(row))

    def _region_at(self, row: int) -> Optional[RegionInfo]:
        for info in self.regions:
            if info.contains(row):
                return info
        return None
