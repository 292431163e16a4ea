"""
Core math modules

Numerical primitives with stability guarantees used by the geometry core.
"""

from src.core.math.numerical_safeguards import (
    # Constants
    EPS_STEP_FRACTION,
    PLAIN_FRACTION_LIMIT,
    PLAIN_INTEGER_LIMIT,
    # Checks
    is_valid_float,
    reaches_bound,
    # Utilities
    clamp,
    format_number,
    # Validation
    validate_finite,
    validate_non_negative,
    validate_positive,
)

__all__ = [
    # Constants
    "EPS_STEP_FRACTION",
    "PLAIN_FRACTION_LIMIT",
    "PLAIN_INTEGER_LIMIT",
    # Checks
    "is_valid_float",
    "reaches_bound",
    # Utilities
    "clamp",
    "format_number",
    # Validation
    "validate_finite",
    "validate_non_negative",
    "validate_positive",
]
