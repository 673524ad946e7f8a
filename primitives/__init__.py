"""Primitives - Field arithmetic and small data structures."""

from primitives.field import (
    FF,
    GOLDILOCKS_PRIME,
    batch_inverse,
    field_repr,
    inverse_or_zero,
    prime_field,
    to_field,
)
from primitives.union_find import UnionFind

__all__ = [
    # Field
    "FF",
    "GOLDILOCKS_PRIME",
    "prime_field",
    "to_field",
    "field_repr",
    "batch_inverse",
    "inverse_or_zero",
    # Union-find
    "UnionFind",
]
