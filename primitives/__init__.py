"""Primitives - Low-level field arithmetic building blocks."""

from primitives.field import (
    BN254_SCALAR_PRIME,
    FF,
    FF_GOLDILOCKS,
    FIELDS,
    GOLDILOCKS_PRIME,
    FieldLike,
    get_field,
    is_zero,
    nonzero_rows,
    to_field,
    to_field_array,
)

__all__ = [
    # Field
    "FF",
    "FF_GOLDILOCKS",
    "FIELDS",
    "BN254_SCALAR_PRIME",
    "GOLDILOCKS_PRIME",
    "FieldLike",
    "get_field",
    # Conversion
    "to_field",
    "to_field_array",
    "is_zero",
    "nonzero_rows",
]
