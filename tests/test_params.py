"""Tests for run parameters and the example-circuit registry."""

import json

import pytest

from circuit.params import CircuitParams
from gadgets import EXAMPLE_CIRCUITS, get_circuit
from gadgets.fibonacci import FibonacciCircuit
from primitives.field import FF


class TestCircuitParams:
    """Loading and validating parameters."""

    def test_defaults(self) -> None:
        params = CircuitParams(k=4)
        assert params.n_rows == 16
        assert params.workers == 1
        assert params.field is FF

    def test_from_dict_hex_modulus(self) -> None:
        params = CircuitParams.from_dict({"k": 3, "workers": 2, "field_modulus": "0x65"})
        assert params.field_modulus == 101
        assert params.field.order == 101
        assert params.workers == 2

    def test_from_json(self, tmp_path) -> None:
        path = tmp_path / "params.json"
        path.write_text(json.dumps({"k": 5, "workers": 3}))
        params = CircuitParams.from_json(path)
        assert (params.k, params.workers, params.field_modulus) == (5, 3, None)

    def test_to_dict_roundtrip(self) -> None:
        params = CircuitParams(k=6, workers=2, field_modulus=101)
        assert CircuitParams.from_dict(params.to_dict()) == params

    @pytest.mark.parametrize("k", [0, 33, -1])
    def test_invalid_k(self, k) -> None:
        with pytest.raises(ValueError):
            CircuitParams(k=k)

    def test_invalid_workers(self) -> None:
        with pytest.raises(ValueError):
            CircuitParams(k=4, workers=0)


class TestRegistry:
    """Lookup of example circuits by name."""

    def test_lookup(self) -> None:
        assert get_circuit("fibonacci") is FibonacciCircuit

    def test_unknown_name(self) -> None:
        with pytest.raises(KeyError, match="Available"):
            get_circuit("sha256")

    def test_registered_names(self) -> None:
        assert set(EXAMPLE_CIRCUITS) == {"arithmetic", "polynomial", "fibonacci", "function", "range_check"}
