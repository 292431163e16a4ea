"""
Vector — 2D free vector algebra

A Vector is a position treated as a free vector from the origin. The algebra
is immutable: every operation returns a new Vector.

Binary products (dot, cross, angle_between, project) are plain functions of
two vectors, not methods bound to one operand.

CRITICAL INVARIANTS:
1. unit / angle_between / project on a zero vector → DivideByZeroError (never NaN)
2. acos argument is clamped to [-1, 1] (rounding at near-parallel vectors)
3. dot is commutative, cross is anti-commutative

FORMULAS:
    |v| = hypot(x, y)
    angle(v) = atan2(y, x)  ∈ (-π, π]
    normal(v) = (-y, x)  (90° counter-clockwise)
    dot(u, v) = u.x·v.x + u.y·v.y
    cross(u, v) = u.x·v.y - u.y·v.x
    angle_between(u, v) = acos(dot(unit(u), unit(v)))
    project(u, v) = unit(v) · dot(unit(v), u)
"""

import math
from dataclasses import dataclass, field
from typing import Final

from src.core.contracts.descriptors import DrawDescriptor, close_path, line_to, move_to
from src.core.domain.errors import DivideByZeroError
from src.core.domain.point import ORIGIN, Point
from src.core.domain.scale import ScaleContext, resolve_scale
from src.core.math.numerical_safeguards import clamp

# Arrowhead geometry in the tip's frame, as fractions of the unit
ARROWHEAD_LENGTH_FRAC: Final[float] = 1 / 5
ARROWHEAD_HALF_WIDTH_FRAC: Final[float] = 1 / 10


# =============================================================================
# VECTOR
# =============================================================================


@dataclass(frozen=True)
class Vector:
    """Immutable free vector from the origin (default: the x unit vector)."""

    point: Point = field(default_factory=lambda: Point(1.0, 0.0))

    @classmethod
    def of(cls, x: float, y: float) -> "Vector":
        return cls(Point(x, y))

    @classmethod
    def from_points(cls, start: Point, end: Point) -> "Vector":
        """Displacement vector from start to end."""
        return cls(Point(end.x - start.x, end.y - start.y))

    @property
    def x(self) -> float:
        return self.point.x

    @property
    def y(self) -> float:
        return self.point.y

    # -------------------------------------------------------------------------
    # Linear-space operations
    # -------------------------------------------------------------------------

    def add(self, v: "Vector") -> "Vector":
        return Vector.of(self.x + v.x, self.y + v.y)

    def subtract(self, v: "Vector") -> "Vector":
        return Vector.of(self.x - v.x, self.y - v.y)

    def scale(self, s: float) -> "Vector":
        return Vector.of(self.x * s, self.y * s)

    # -------------------------------------------------------------------------
    # Derived quantities
    # -------------------------------------------------------------------------

    @property
    def magnitude(self) -> float:
        """Euclidean norm."""
        return math.hypot(self.x, self.y)

    @property
    def angle(self) -> float:
        """Direction angle atan2(y, x), range (-π, π]."""
        return math.atan2(self.y, self.x)

    @property
    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0

    @property
    def unit(self) -> "Vector":
        """
        Unit vector with the same direction.

        Raises:
            DivideByZeroError: If the vector has zero magnitude
        """
        magnitude = self.magnitude
        if magnitude == 0:
            raise DivideByZeroError(
                f"Cannot normalize a zero-magnitude vector ({self.x}, {self.y})"
            )
        return Vector.of(self.x / magnitude, self.y / magnitude)

    @property
    def normal(self) -> "Vector":
        """90° counter-clockwise rotation."""
        return Vector.of(-self.y, self.x)

    def to_point(self) -> Point:
        return self.point

    # -------------------------------------------------------------------------
    # Drawing
    # -------------------------------------------------------------------------

    def draw(self, scale: ScaleContext | None = None) -> DrawDescriptor:
        """
        Shaft from the origin to the tip plus a filled arrowhead.

        The arrowhead back corners sit at (-unit/5, ±unit/10) in the tip's
        frame, rotated by the vector angle.
        """
        ctx = resolve_scale(scale)
        tip_x, tip_y = ctx.to_device(self.point)
        origin_x, origin_y = ctx.to_device(ORIGIN)

        back = -ctx.unit * ARROWHEAD_LENGTH_FRAC
        half_width = ctx.unit * ARROWHEAD_HALF_WIDTH_FRAC
        cos_a = math.cos(self.angle)
        sin_a = math.sin(self.angle)

        corners = [
            (
                tip_x + back * cos_a - offset * sin_a,
                tip_y + back * sin_a + offset * cos_a,
            )
            for offset in (half_width, -half_width)
        ]

        return DrawDescriptor(
            shape="vector",
            commands=(
                move_to(origin_x, origin_y),
                line_to(tip_x, tip_y),
                move_to(tip_x, tip_y),
                line_to(*corners[0]),
                line_to(*corners[1]),
                close_path(),
            ),
            fill=True,
            stroke=True,
        )


# =============================================================================
# BINARY OPERATIONS
# =============================================================================


def dot(u: Vector, v: Vector) -> float:
    """Dot product (commutative)."""
    return u.x * v.x + u.y * v.y


def cross(u: Vector, v: Vector) -> float:
    """2D cross product, z-component (anti-commutative)."""
    return u.x * v.y - u.y * v.x


def angle_between(u: Vector, v: Vector) -> float:
    """
    Unsigned angle between two vectors, range [0, π].

    The cosine is clamped to [-1, 1] before acos so that rounding at
    near-parallel or near-antiparallel vectors cannot leave the domain.

    Raises:
        DivideByZeroError: If either vector has zero magnitude

    Examples:
        >>> angle_between(Vector.of(1, 0), Vector.of(0, 2))
        1.5707963267948966
    """
    if u.magnitude == 0 or v.magnitude == 0:
        raise DivideByZeroError(
            f"Angle undefined for zero-magnitude vector: "
            f"|u|={u.magnitude}, |v|={v.magnitude}"
        )
    return math.acos(clamp(dot(u.unit, v.unit), -1.0, 1.0))


def project(u: Vector, v: Vector) -> Vector:
    """
    Vector projection of u onto v.

    Raises:
        DivideByZeroError: If v has zero magnitude
    """
    direction = v.unit
    return direction.scale(dot(direction, u))
