"""
Numerical Safeguards — Safe Math Primitives

Numerical stability helpers shared by the geometry and calculus modules:
- Validation of float inputs (NaN/Inf, sign)
- Exclusive-bound detection for index-based sampling
- Clamping (used to keep acos/asin arguments inside their domain)
- Number formatting compatible with the equation text shown to users

CRITICAL INVARIANTS:
1. Invalid inputs are rejected with an explicit exception, never propagated as NaN
2. Sample-bound comparisons use an explicit step-relative tolerance
3. All operations are deterministic and reproducible
"""

import math
from decimal import Decimal
from typing import Final

# =============================================================================
# EPSILON PARAMETERS
# =============================================================================

# Fraction of a discretization step below which two sample positions coincide
EPS_STEP_FRACTION: Final[float] = 1e-9

# Magnitudes in [PLAIN_FRACTION_LIMIT, PLAIN_INTEGER_LIMIT) print without an exponent
PLAIN_INTEGER_LIMIT: Final[float] = 1e21
PLAIN_FRACTION_LIMIT: Final[float] = 1e-6


# =============================================================================
# NaN/Inf CHECKS
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Check whether a float is valid (not NaN, not Inf).

    Args:
        value: Value to check

    Returns:
        True if the value is finite, False for NaN or Inf
    """
    return math.isfinite(value)


# =============================================================================
# SAMPLING BOUNDS
# =============================================================================


def reaches_bound(position: float, bound: float, step: float) -> bool:
    """
    Check whether a sample position has reached an exclusive upper bound.

    Positions within a tiny fraction of the step below the bound count as
    reached, so `a + i * step` never yields a spurious extra sample at the
    end of the interval because of rounding.

    Args:
        position: Current sample position
        bound: Exclusive upper bound
        step: Discretization step (positive)

    Returns:
        True if no sample should be taken at `position`
    """
    return position >= bound or (bound - position) <= step * EPS_STEP_FRACTION


# =============================================================================
# UTILITIES
# =============================================================================


def clamp(
    value: float,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """
    Clamp a value to a range.

    Args:
        value: Source value
        min_value: Lower bound (optional)
        max_value: Upper bound (optional)

    Returns:
        The value restricted to [min_value, max_value]

    Examples:
        >>> clamp(5.0, 0.0, 10.0)
        5.0
        >>> clamp(1.0000000000000002, -1.0, 1.0)
        1.0
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result


def format_number(value: float) -> str:
    """
    Format a number the way the equation text has always displayed it.

    Integral values print without a fractional part, non-finite values print
    as `Infinity`, `-Infinity` and `NaN`, everything else uses the shortest
    round-trip representation.

    Examples:
        >>> format_number(2.0)
        '2'
        >>> format_number(0.5)
        '0.5'
        >>> format_number(float("inf"))
        'Infinity'
        >>> format_number(1e-7)
        '1e-7'
        >>> format_number(1.2345678901234568e20)
        '123456789012345680000'
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"

    value = float(value)
    text = repr(value)
    if value.is_integer() and "e" not in text:
        return str(int(value))

    if PLAIN_FRACTION_LIMIT <= abs(value) < PLAIN_INTEGER_LIMIT:
        # repr switches to exponent form earlier than the displayed text does
        return format(Decimal(text), "f") if "e" in text else text

    mantissa, _, exponent = text.partition("e")
    sign = "-" if exponent.startswith("-") else "+"
    digits = exponent.lstrip("+-").lstrip("0") or "0"
    return f"{mantissa}e{sign}{digits}"


# =============================================================================
# VALIDATION
# =============================================================================


def validate_finite(value: float, name: str) -> None:
    """
    Validate that a value is a finite float.

    Args:
        value: Value to check
        name: Parameter name (for the error message)

    Raises:
        ValueError: If value is NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")


def validate_positive(value: float, name: str, eps: float = 0.0) -> None:
    """
    Validate that a value is positive.

    Args:
        value: Value to check
        name: Parameter name (for the error message)
        eps: Minimum threshold (default: 0.0)

    Raises:
        ValueError: If value <= eps or NaN/Inf
    """
    validate_finite(value, name)

    if value <= eps:
        raise ValueError(f"{name} must be positive (> {eps}), got {value}")


def validate_non_negative(value: float, name: str) -> None:
    """
    Validate that a value is non-negative.

    Raises:
        ValueError: If value < 0 or NaN/Inf
    """
    validate_finite(value, name)

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
