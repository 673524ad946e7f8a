"""Prime field arithmetic for the constraint engine.

Uses the galois library for all field arithmetic. FF is the default field
(Goldilocks, p = 2^64 - 2^32 + 1); any galois prime field class can be used
instead by passing it to the ConstraintSystem.

Cell values are galois scalars (0-d FieldArrays). Columns are galois arrays,
so gate evaluation runs over many rows at once through numpy broadcasting.
"""

from typing import Union

import galois
import numpy as np

# --- Field Construction ---

GOLDILOCKS_PRIME = 0xFFFFFFFF00000001

FF = galois.GF(GOLDILOCKS_PRIME)
"""Default field GF(p) - Goldilocks prime field."""

FieldLike = Union[int, np.integer, galois.FieldArray]


def prime_field(modulus: int = GOLDILOCKS_PRIME) -> type:
    """Return the galois field class for a prime modulus."""
    if modulus == GOLDILOCKS_PRIME:
        return FF
    return galois.GF(modulus)


# --- Conversion ---

def to_field(value: FieldLike, field: type = FF) -> galois.FieldArray:
    """Coerce an int or field scalar into `field`.

    Integers are reduced modulo the field order, so negative literals map to
    their additive inverses.
    """
    if isinstance(value, galois.FieldArray):
        if type(value) is not field:
            raise TypeError(f"Value belongs to {type(value).name}, expected {field.name}")
        return value
    return field(int(value) % field.order)


def field_repr(value: galois.FieldArray) -> str:
    """Short hex rendering: values closer to p than to 0 print as negatives."""
    v = int(value)
    neg = type(value).order - v
    if 0 < neg < v:
        return f"-{neg:#x}"
    return f"{v:#x}"


# --- Montgomery Batch Inversion ---

def batch_inverse(values):
    """Montgomery batch inversion for any galois array.

    Converts N field inversions into 3N-3 multiplications + 1 inversion.

    Algorithm:
    1. Forward pass: Compute prefix products cumprods[i] = a[0] * a[1] * ... * a[i]
    2. Single inversion: inv_total = cumprods[N-1]^(-1)
    3. Backward pass: Extract individual inverses using cumprods

    Args:
        values: Galois FieldArray to invert (must all be non-zero)

    Returns:
        Galois FieldArray where result[i] = values[i]^(-1)

    Raises:
        ZeroDivisionError: If any element is zero
    """
    n = len(values)
    if n == 0:
        return values
    if n == 1:
        return values ** -1

    field_type = type(values)

    cumprods = field_type.Zeros(n)
    cumprods[0] = values[0]
    for i in range(1, n):
        cumprods[i] = cumprods[i - 1] * values[i]

    inv_total = cumprods[n - 1] ** -1

    results = field_type.Zeros(n)
    z = inv_total
    for i in range(n - 1, 0, -1):
        results[i] = z * cumprods[i - 1]
        z = z * values[i]
    results[0] = z

    return results


def inverse_or_zero(values):
    """Invert every non-zero entry of a galois array; zeros stay zero.

    This is the witness for the is-zero gadget's helper column.
    """
    field_type = type(values)
    results = field_type.Zeros(len(values))
    nonzero = np.flatnonzero(np.asarray(values) != 0)
    if nonzero.size:
        results[nonzero] = batch_inverse(values[nonzero])
    return results
