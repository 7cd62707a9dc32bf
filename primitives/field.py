"""Prime fields GF(p) used by the constraint system.

Uses galois library for all field arithmetic. FF and FF_GOLDILOCKS are the field
types; every column value, instance value and gate evaluation is an element of
one of them.

FF is the BN254 scalar field (the `Fr` of the bn256 curve). Its primitive
element is passed explicitly so galois does not have to factor p - 1 on import.
"""

from typing import Union

import galois
import numpy as np

# --- Field Construction ---

BN254_SCALAR_PRIME = 0x30644E72E131A029B85045B68181585D2833E84879B9709143E1F593F0000001
GOLDILOCKS_PRIME = 0xFFFFFFFF00000001

FF = galois.GF(BN254_SCALAR_PRIME, primitive_element=5, verify=False)
"""Base field GF(r) - BN254 scalar field."""

FF_GOLDILOCKS = galois.GF(GOLDILOCKS_PRIME, primitive_element=7, verify=False)
"""Goldilocks prime field GF(2^64 - 2^32 + 1)."""

FIELDS: dict[str, type[galois.FieldArray]] = {
    "bn254": FF,
    "goldilocks": FF_GOLDILOCKS,
}

FieldLike = Union[int, galois.FieldArray]


def get_field(name: str) -> type[galois.FieldArray]:
    """Look up a field class by its short name ('bn254' or 'goldilocks')."""
    try:
        return FIELDS[name.lower()]
    except KeyError:
        raise KeyError(f"Unknown field '{name}'. Available: {list(FIELDS.keys())}") from None


# --- Conversion ---

def _check_integral(value) -> None:
    if not isinstance(value, (int, np.integer, galois.FieldArray)):
        raise TypeError(
            f"Field values must be integers or field elements, got {type(value).__name__} {value!r}"
        )


def to_field(value: FieldLike, field: type[galois.FieldArray] = FF) -> galois.FieldArray:
    """Convert an int or field element to a scalar of `field`.

    Ints are reduced mod p, so -1 maps to p - 1. Floats, strings and other
    non-integral values raise TypeError instead of being truncated.
    """
    if isinstance(value, field) and value.ndim == 0:
        return value
    _check_integral(value)
    return field(int(value) % field.order)


def to_field_array(values, field: type[galois.FieldArray] = FF) -> galois.FieldArray:
    """Convert a sequence of ints/field elements to a 1-D array of `field`."""
    if isinstance(values, field):
        return values
    reduced = []
    for v in values:
        _check_integral(v)
        reduced.append(int(v) % field.order)
    return field(reduced)


def is_zero(value: galois.FieldArray) -> bool:
    """Exact comparison against the additive identity."""
    return int(value) == 0


def nonzero_rows(values: galois.FieldArray) -> np.ndarray:
    """Indices of the nonzero entries of a 1-D field array."""
    return np.flatnonzero(values.view(np.ndarray))
