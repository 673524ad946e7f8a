"""Unit tests for field helpers."""

import numpy as np
import pytest

from primitives.field import (
    FF,
    GOLDILOCKS_PRIME,
    batch_inverse,
    field_repr,
    inverse_or_zero,
    prime_field,
    to_field,
)


class TestToField:
    """Tests for coercion into the field."""

    def test_small_int(self) -> None:
        """Small integers map to themselves."""
        assert to_field(7) == FF(7)

    def test_negative_int_wraps(self) -> None:
        """Negative integers become additive inverses."""
        assert to_field(-1) == FF(GOLDILOCKS_PRIME - 1)
        assert to_field(-1) + FF(1) == FF(0)

    def test_field_element_passthrough(self) -> None:
        """Field elements of the same field are returned unchanged."""
        x = FF(12345)
        assert to_field(x) is x

    def test_foreign_field_rejected(self) -> None:
        """Elements of another field raise TypeError."""
        gf101 = prime_field(101)
        with pytest.raises(TypeError):
            to_field(gf101(3), FF)


class TestFieldRepr:
    """Tests for hex rendering of values."""

    def test_small_value(self) -> None:
        assert field_repr(FF(8)) == "0x8"

    def test_zero(self) -> None:
        assert field_repr(FF(0)) == "0x0"

    def test_negative_value(self) -> None:
        """p - 1 renders as -0x1."""
        assert field_repr(FF(GOLDILOCKS_PRIME - 1)) == "-0x1"


class TestInversion:
    """Tests for batch inversion helpers."""

    def test_batch_inverse_matches_scalar(self) -> None:
        """Batch inversion matches scalar inversion."""
        vals = FF([i * 7 + 13 for i in range(20)])
        results = batch_inverse(vals)
        for v, r in zip(vals, results):
            assert v * r == FF(1)

    def test_batch_inverse_single(self) -> None:
        vals = FF([5])
        assert batch_inverse(vals)[0] * FF(5) == FF(1)

    def test_inverse_or_zero_keeps_zeros(self) -> None:
        """Zero entries stay zero, others are inverted."""
        vals = FF([0, 3, 0, 9])
        results = inverse_or_zero(vals)
        assert results[0] == FF(0)
        assert results[2] == FF(0)
        assert results[1] * FF(3) == FF(1)
        assert results[3] * FF(9) == FF(1)

    def test_inverse_or_zero_all_zero(self) -> None:
        results = inverse_or_zero(FF.Zeros(4))
        assert np.array_equal(results, FF.Zeros(4))


def test_prime_field_default_is_goldilocks() -> None:
    """The default modulus reuses the module-level field class."""
    assert prime_field() is FF
    assert prime_field(101).order == 101
