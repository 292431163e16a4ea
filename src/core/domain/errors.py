"""
Geometry Errors — Error taxonomy of the geometry and calculus core

All failures are local, pure-function failures: value types are never
mutated, so there is no partial state to roll back and no retry is
meaningful. Callers decide whether to abort or substitute defaults.
"""


class GeometryError(Exception):
    """Base class for every error raised by the geometry core."""

    pass


class DivideByZeroError(GeometryError, ZeroDivisionError):
    """
    An operand has zero magnitude where a direction is required.

    Raised by Vector.unit, angle_between and project. The naive formulas
    produce NaN components; this error replaces that silent propagation.
    """

    pass


class DegenerateInputError(GeometryError, ValueError):
    """
    Input violates a construction invariant of a shape or graph.

    Examples: non-finite point components, negative circle radius,
    non-positive square side, polygon with fewer than 3 points,
    bisector of a zero-length line.
    """

    pass
