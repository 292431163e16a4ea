"""
Shapes — Shape primitives of the geometry core

Each shape holds its minimal defining data (endpoints, center + radius,
vertices) and derives geometric quantities on demand. Nothing is cached:
every accessor recomputes from the stored fields, so repeated access is
idempotent.

Scale-dependent accessors take an optional ScaleContext (None → identity
scale). Lengths are reported in device units (× unit) and areas in device
units squared (× unit²), matching what the visualization tool displays.

Every shape emits a DrawDescriptor through draw(scale); no shape touches a
rendering surface.

CRITICAL INVARIANTS:
1. Circle radius >= 0, Square side > 0, Polygon has >= 3 points
   (violations → DegenerateInputError at construction)
2. Rectangle with inverted corners is a valid construction that yields
   negative width/height/area; use Rectangle.from_corners or normalized()
   for the ordered form
3. Vertical line slope is ±inf (a valid result, not an error)
4. Triangle and Polygon areas are absolute values (either winding accepted)
"""

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, Sequence

from src.core.contracts.descriptors import (
    DrawDescriptor,
    arc,
    close_path,
    line_to,
    move_to,
)
from src.core.domain.errors import DegenerateInputError
from src.core.domain.point import Point
from src.core.domain.scale import ScaleContext, resolve_scale
from src.core.domain.vector import Vector
from src.core.math.numerical_safeguards import (
    format_number,
    validate_non_negative,
    validate_positive,
)

logger = logging.getLogger(__name__)


def _closed_path(points: Sequence[Point], ctx: ScaleContext) -> tuple:
    """move → line … line → close over device-space vertices."""
    first, *rest = [ctx.to_device(p) for p in points]
    return (move_to(*first), *(line_to(*p) for p in rest), close_path())


# =============================================================================
# LINE
# =============================================================================


@dataclass(frozen=True)
class Line:
    """
    Directed segment from start to end.

    start == end is a degenerate (zero-length) but valid instance.
    """

    start: Point
    end: Point

    def length(self, scale: ScaleContext | None = None) -> float:
        """Euclidean length in device units."""
        return resolve_scale(scale).length(self.start.distance_to(self.end))

    @property
    def midpoint(self) -> Point:
        return self.start.midpoint(self.end)

    @property
    def direction(self) -> Vector:
        """Displacement vector start → end."""
        return Vector.from_points(self.start, self.end)

    @property
    def slope(self) -> float:
        """
        Slope dy/dx.

        Returns:
            +inf / -inf for a vertical line (sign of dy),
            nan for a zero-length line
        """
        dx = self.end.x - self.start.x
        dy = self.end.y - self.start.y
        if dx == 0:
            if dy == 0:
                return math.nan
            return math.inf if dy > 0 else -math.inf
        return dy / dx

    @property
    def intercept(self) -> float:
        """y-intercept of the supporting line (math-space)."""
        return self.start.y - self.slope * self.start.x

    def equation(self, scale: ScaleContext | None = None) -> str:
        """
        Slope-intercept text, e.g. "y = 2x + 1".

        The intercept is reported in device units.
        """
        ctx = resolve_scale(scale)
        return (
            f"y = {format_number(self.slope)}x + "
            f"{format_number(ctx.length(self.intercept))}"
        )

    def perpendicular_bisector_unbounded(self) -> "UnboundedLine":
        """
        Perpendicular bisector as an infinite line (midpoint + normal direction).

        Raises:
            DegenerateInputError: If the line has zero length
        """
        direction = self.direction
        if direction.is_zero:
            raise DegenerateInputError(
                f"Perpendicular bisector undefined for zero-length line at "
                f"({self.start.x}, {self.start.y})"
            )
        return UnboundedLine(anchor=self.midpoint, direction=direction.normal)

    def perpendicular_bisector(self, scale: ScaleContext | None = None) -> "Line":
        """
        Perpendicular bisector spanned across the viewport.

        The bisector has the negative-reciprocal slope and passes through the
        midpoint; it is bounded to x ∈ [-W/(2·unit), W/(2·unit)], or to the
        vertical extent when the segment is horizontal.

        Raises:
            DegenerateInputError: If the line has zero length
        """
        return self.perpendicular_bisector_unbounded().span(scale)

    def draw(self, scale: ScaleContext | None = None) -> DrawDescriptor:
        ctx = resolve_scale(scale)
        return DrawDescriptor(
            shape="line",
            commands=(
                move_to(*ctx.to_device(self.start)),
                line_to(*ctx.to_device(self.end)),
            ),
        )


@dataclass(frozen=True)
class UnboundedLine:
    """Infinite line through anchor along a non-zero direction."""

    anchor: Point
    direction: Vector

    def __post_init__(self) -> None:
        if self.direction.is_zero:
            raise DegenerateInputError("UnboundedLine direction must be non-zero")

    @property
    def is_vertical(self) -> bool:
        return self.direction.x == 0

    @property
    def slope(self) -> float:
        """Slope of the line; ±inf when vertical."""
        return Line(self.anchor, self.point_at(1.0)).slope

    def point_at(self, t: float) -> Point:
        """anchor + t · direction"""
        return Point(
            self.anchor.x + t * self.direction.x,
            self.anchor.y + t * self.direction.y,
        )

    def span(self, scale: ScaleContext | None = None) -> Line:
        """
        Bounded segment of this line across the viewport extent.

        Non-vertical lines span the full horizontal extent; vertical lines
        span the full vertical extent. A line so steep that its horizontal
        span overflows float range is spanned as vertical.
        """
        ctx = resolve_scale(scale)

        if not self.is_vertical:
            m = self.direction.y / self.direction.x
            b = self.anchor.y - m * self.anchor.x
            half = ctx.half_extent_x
            y_left, y_right = m * -half + b, m * half + b
            if math.isfinite(y_left) and math.isfinite(y_right):
                return Line(Point(-half, y_left), Point(half, y_right))
            logger.debug("Slope %s overflows the horizontal span; spanning as vertical", m)

        half = ctx.half_extent_y
        logger.debug("Spanning vertical line x=%s across ±%s", self.anchor.x, half)
        return Line(Point(self.anchor.x, -half), Point(self.anchor.x, half))


# =============================================================================
# CIRCLE
# =============================================================================


@dataclass(frozen=True)
class Circle:
    """Circle with center and non-negative radius (math-space)."""

    center: Point
    radius: float

    def __post_init__(self) -> None:
        try:
            validate_non_negative(self.radius, "Circle radius")
        except ValueError as e:
            raise DegenerateInputError(str(e)) from e

    def circumference(self, scale: ScaleContext | None = None) -> float:
        """2πr in device units."""
        return 2 * math.pi * resolve_scale(scale).length(self.radius)

    def area(self, scale: ScaleContext | None = None) -> float:
        """π·(r·unit)²"""
        return math.pi * resolve_scale(scale).length(self.radius) ** 2

    def diameter(self, scale: ScaleContext | None = None) -> float:
        return 2 * resolve_scale(scale).length(self.radius)

    def equation(self, scale: ScaleContext | None = None) -> str:
        """Standard-form text, e.g. "(x - 1)^2 + (y - 2)^2 = 9" (device units)."""
        ctx = resolve_scale(scale)
        cx, cy = ctx.to_device(self.center)
        r_squared = ctx.length(self.radius) ** 2
        return (
            f"(x - {format_number(cx)})^2 + (y - {format_number(cy)})^2 = "
            f"{format_number(r_squared)}"
        )

    @property
    def tangent(self) -> Line:
        """
        Horizontal line through (cx - r, cy)–(cx + r, cy).

        Fixed orientation; not parametrized by a point on the circle.
        """
        a, b, r = self.center.x, self.center.y, self.radius
        return Line(Point(a - r, b), Point(a + r, b))

    @property
    def normal(self) -> Line:
        """Vertical line through (cx, cy - r)–(cx, cy + r)."""
        a, b, r = self.center.x, self.center.y, self.radius
        return Line(Point(a, b - r), Point(a, b + r))

    def draw(self, scale: ScaleContext | None = None, fill: bool = False) -> DrawDescriptor:
        ctx = resolve_scale(scale)
        cx, cy = ctx.to_device(self.center)
        return DrawDescriptor(
            shape="circle",
            commands=(arc(cx, cy, ctx.length(self.radius), 0.0, 2 * math.pi),),
            fill=fill,
        )


# =============================================================================
# TRIANGLE
# =============================================================================


@dataclass(frozen=True)
class Triangle:
    """Triangle with vertices a, b, c (no degeneracy check)."""

    a: Point
    b: Point
    c: Point

    def _edges(self) -> tuple[float, float, float]:
        return (
            self.a.distance_to(self.b),
            self.b.distance_to(self.c),
            self.c.distance_to(self.a),
        )

    def perimeter(self, scale: ScaleContext | None = None) -> float:
        return resolve_scale(scale).length(sum(self._edges()))

    def area(self, scale: ScaleContext | None = None) -> float:
        """
        Shoelace area, absolute value; collinear vertices → 0.

        area = ½·|a.x(b.y - c.y) + b.x(c.y - a.y) + c.x(a.y - b.y)|
        """
        a, b, c = self.a, self.b, self.c
        signed_double = a.x * (b.y - c.y) + b.x * (c.y - a.y) + c.x * (a.y - b.y)
        return resolve_scale(scale).area(0.5 * abs(signed_double))

    def heron_area(self, scale: ScaleContext | None = None) -> float:
        """Area from edge lengths (Heron's formula), a cross-check for area()."""
        ab, bc, ca = self._edges()
        s = (ab + bc + ca) / 2
        # rounding can push the product slightly below zero for collinear points
        product = max(s * (s - ab) * (s - bc) * (s - ca), 0.0)
        return resolve_scale(scale).area(math.sqrt(product))

    @property
    def centroid(self) -> Point:
        return Point(
            (self.a.x + self.b.x + self.c.x) / 3,
            (self.a.y + self.b.y + self.c.y) / 3,
        )

    def draw(self, scale: ScaleContext | None = None, fill: bool = False) -> DrawDescriptor:
        return DrawDescriptor(
            shape="triangle",
            commands=_closed_path((self.a, self.b, self.c), resolve_scale(scale)),
            fill=fill,
        )


# =============================================================================
# AXIS-ALIGNED QUADRILATERALS (Rectangle / Square)
# =============================================================================


class AxisAlignedQuadrilateral(ABC):
    """
    Accessor contract shared by Rectangle and Square.

    Both variants implement every formula themselves; only the path
    construction from the two defining corners is shared.
    """

    @property
    @abstractmethod
    def corners(self) -> tuple[Point, Point]:
        """The two defining opposite corners (a, b)."""

    @property
    @abstractmethod
    def width(self) -> float: ...

    @property
    @abstractmethod
    def height(self) -> float: ...

    @abstractmethod
    def perimeter(self, scale: ScaleContext | None = None) -> float: ...

    @abstractmethod
    def area(self, scale: ScaleContext | None = None) -> float: ...

    @property
    @abstractmethod
    def diagonal(self) -> Line: ...

    @property
    @abstractmethod
    def center(self) -> Point: ...

    def draw(self, scale: ScaleContext | None = None, fill: bool = False) -> DrawDescriptor:
        a, b = self.corners
        corners = (a, Point(b.x, a.y), b, Point(a.x, b.y))
        return DrawDescriptor(
            shape=type(self).__name__.lower(),
            commands=_closed_path(corners, resolve_scale(scale)),
            fill=fill,
        )


@dataclass(frozen=True)
class Rectangle(AxisAlignedQuadrilateral):
    """
    Axis-aligned rectangle defined by two opposite corners.

    Expected: b.x >= a.x and b.y >= a.y. Inverted corners are accepted and
    yield negative width/height (and a negative perimeter or area).
    """

    a: Point
    b: Point

    def __post_init__(self) -> None:
        if self.is_inverted:
            logger.debug(
                "Rectangle with inverted corners a=%s b=%s; derived quantities will be negative",
                self.a,
                self.b,
            )

    @classmethod
    def from_corners(cls, p: Point, q: Point) -> "Rectangle":
        """Rectangle from any two opposite corners, ordered so a is bottom-left."""
        return cls(
            Point(min(p.x, q.x), min(p.y, q.y)),
            Point(max(p.x, q.x), max(p.y, q.y)),
        )

    @property
    def is_inverted(self) -> bool:
        return self.b.x < self.a.x or self.b.y < self.a.y

    @property
    def corners(self) -> tuple[Point, Point]:
        return (self.a, self.b)

    def normalized(self) -> "Rectangle":
        """Same rectangle with ordered corners."""
        return Rectangle.from_corners(self.a, self.b)

    @property
    def width(self) -> float:
        return self.b.x - self.a.x

    @property
    def height(self) -> float:
        return self.b.y - self.a.y

    def perimeter(self, scale: ScaleContext | None = None) -> float:
        """2·(width + height) in device units."""
        return resolve_scale(scale).length(2 * (self.width + self.height))

    def area(self, scale: ScaleContext | None = None) -> float:
        """width·height in device units squared."""
        return resolve_scale(scale).area(self.width * self.height)

    @property
    def diagonal(self) -> Line:
        return Line(self.a, self.b)

    @property
    def center(self) -> Point:
        return self.a.midpoint(self.b)


@dataclass(frozen=True)
class Square(AxisAlignedQuadrilateral):
    """
    Square defined by corner a and side length.

    All quantities are computed from side directly, never from the derived
    corner b.
    """

    a: Point
    side: float

    def __post_init__(self) -> None:
        try:
            validate_positive(self.side, "Square side")
        except ValueError as e:
            raise DegenerateInputError(str(e)) from e

    @property
    def b(self) -> Point:
        return self.a.translate(self.side, self.side)

    @property
    def corners(self) -> tuple[Point, Point]:
        return (self.a, self.b)

    @property
    def width(self) -> float:
        return self.side

    @property
    def height(self) -> float:
        return self.side

    def perimeter(self, scale: ScaleContext | None = None) -> float:
        """4·side in device units."""
        return 4 * resolve_scale(scale).length(self.side)

    def area(self, scale: ScaleContext | None = None) -> float:
        """(side·unit)²"""
        return resolve_scale(scale).length(self.side) ** 2

    @property
    def diagonal(self) -> Line:
        return Line(self.a, Point(self.a.x + self.side, self.a.y + self.side))

    @property
    def center(self) -> Point:
        return Point(self.a.x + self.side / 2, self.a.y + self.side / 2)

    def as_rectangle(self) -> Rectangle:
        return Rectangle(self.a, self.b)


# =============================================================================
# POLYGON
# =============================================================================


@dataclass(frozen=True)
class Polygon:
    """
    Simple polygon over an ordered sequence of at least 3 points.

    Closure is implicit: the last point connects to the first. Area is
    correct for convex and simple non-convex polygons; self-intersecting
    polygons yield the net signed area of their loops.
    """

    points: tuple[Point, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(self.points))
        if len(self.points) < 3:
            raise DegenerateInputError(
                f"Polygon must have at least 3 points, got {len(self.points)}"
            )

    def edges(self) -> Iterator[tuple[Point, Point]]:
        """Consecutive vertex pairs, including the closing edge."""
        count = len(self.points)
        for i in range(count):
            yield self.points[i], self.points[(i + 1) % count]

    def perimeter(self, scale: ScaleContext | None = None) -> float:
        total = sum(p.distance_to(q) for p, q in self.edges())
        return resolve_scale(scale).length(total)

    @property
    def signed_area(self) -> float:
        """
        Shoelace signed area (math-space), positive for counter-clockwise order.

        Σ (xᵢ·yᵢ₊₁ - xᵢ₊₁·yᵢ) / 2 over all edges including the closing edge.
        """
        return sum((p.x * q.y - q.x * p.y) / 2 for p, q in self.edges())

    def area(self, scale: ScaleContext | None = None) -> float:
        return resolve_scale(scale).area(abs(self.signed_area))

    @property
    def vertex_mean(self) -> Point:
        """Arithmetic mean of the vertices."""
        count = len(self.points)
        return Point(
            sum(p.x for p in self.points) / count,
            sum(p.y for p in self.points) / count,
        )

    def reversed(self) -> "Polygon":
        """Same polygon with opposite winding."""
        return Polygon(tuple(reversed(self.points)))

    def draw(self, scale: ScaleContext | None = None, fill: bool = False) -> DrawDescriptor:
        return DrawDescriptor(
            shape="polygon",
            commands=_closed_path(self.points, resolve_scale(scale)),
            fill=fill,
        )


# =============================================================================
# TEXT & NUMBER PLANE
# =============================================================================


@dataclass(frozen=True)
class Text:
    """Label anchored at a math-space position."""

    text: str
    position: Point

    def draw(self, scale: ScaleContext | None = None) -> DrawDescriptor:
        ctx = resolve_scale(scale)
        return DrawDescriptor(
            shape="text",
            commands=(move_to(*ctx.to_device(self.position)),),
            fill=True,
            stroke=False,
            text=self.text,
        )


class NumberPlane:
    """Unit grid and axes covering the viewport of a scale context."""

    def grid_lines(self, scale: ScaleContext | None = None) -> list[Line]:
        """
        Grid lines at every non-zero integer coordinate inside the viewport.

        Vertical lines first (x = ±1, ±2, …), then horizontal lines.
        """
        ctx = resolve_scale(scale)
        half_x, half_y = ctx.half_extent_x, ctx.half_extent_y

        lines = []
        k = 1
        while k <= half_x:
            for x in (k, -k):
                lines.append(Line(Point(x, -half_y), Point(x, half_y)))
            k += 1

        k = 1
        while k <= half_y:
            for y in (k, -k):
                lines.append(Line(Point(-half_x, y), Point(half_x, y)))
            k += 1

        return lines

    def axes(self, scale: ScaleContext | None = None) -> tuple[Line, Line]:
        """(y-axis, x-axis) spanning the viewport."""
        ctx = resolve_scale(scale)
        half_x, half_y = ctx.half_extent_x, ctx.half_extent_y
        return (
            Line(Point(0.0, -half_y), Point(0.0, half_y)),
            Line(Point(-half_x, 0.0), Point(half_x, 0.0)),
        )

    def draw(self, scale: ScaleContext | None = None) -> DrawDescriptor:
        ctx = resolve_scale(scale)
        commands = []
        for line in (*self.grid_lines(ctx), *self.axes(ctx)):
            commands.append(move_to(*ctx.to_device(line.start)))
            commands.append(line_to(*ctx.to_device(line.end)))
        return DrawDescriptor(shape="number_plane", commands=tuple(commands))
