"""
Core math modules для matrixkit

Численные допуски и примитивы валидации.
"""

from matrixkit.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    EPS_SINGULAR,
    EPS_ZERO_VECTOR,
    LAPLACE_WARN_SIZE,
    # Value checks
    ensure_real,
    is_real_number,
    is_valid_float,
    # Epsilon comparisons
    is_below_tolerance,
    is_close,
    sign_for,
    # Validation
    validate_index,
    validate_positive_size,
    validate_tolerance,
)

__all__ = [
    # Epsilon constants
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    "EPS_SINGULAR",
    "EPS_ZERO_VECTOR",
    "LAPLACE_WARN_SIZE",
    # Value checks
    "ensure_real",
    "is_real_number",
    "is_valid_float",
    # Epsilon comparisons
    "is_below_tolerance",
    "is_close",
    "sign_for",
    # Validation
    "validate_index",
    "validate_positive_size",
    "validate_tolerance",
]
