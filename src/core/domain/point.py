"""
Point — Math-space coordinate pair

Foundational value type of the geometry core. Immutable; the only
invariant is that both components are finite.
"""

import math
from dataclasses import dataclass

from src.core.domain.errors import DegenerateInputError
from src.core.math.numerical_safeguards import validate_finite


@dataclass(frozen=True)
class Point:
    """Immutable math-space point."""

    x: float
    y: float

    def __post_init__(self) -> None:
        try:
            validate_finite(self.x, "Point x")
            validate_finite(self.y, "Point y")
        except ValueError as e:
            raise DegenerateInputError(str(e)) from e

    def translate(self, dx: float, dy: float) -> "Point":
        """Return a new point shifted by (dx, dy)."""
        return Point(self.x + dx, self.y + dy)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance in math-space."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def midpoint(self, other: "Point") -> "Point":
        return Point((self.x + other.x) / 2, (self.y + other.y) / 2)


ORIGIN = Point(0.0, 0.0)
