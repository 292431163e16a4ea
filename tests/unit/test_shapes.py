"""
Tests for shape primitives: Line, Circle, Triangle, Rectangle, Square, Polygon

Checks:
1. Derived quantities (length, perimeter, area, centroid, center)
2. Device scaling (lengths × unit, areas × unit²)
3. Numeric special values (vertical slope ±inf) propagate without errors
4. Construction invariants → DegenerateInputError
5. Shoelace area vs Heron's formula
6. Idempotence of accessors
7. Draw descriptors
"""

import math
from dataclasses import FrozenInstanceError

import pytest

from src.core.contracts.descriptors import PathCommandKind
from src.core.domain import (
    AxisAlignedQuadrilateral,
    Circle,
    DegenerateInputError,
    Line,
    NumberPlane,
    Point,
    Polygon,
    Rectangle,
    ScaleContext,
    Square,
    Text,
    Triangle,
    UnboundedLine,
    Vector,
)

VIEWPORT = ScaleContext(unit=100.0, viewport_width=800.0, viewport_height=600.0)


# =============================================================================
# POINT
# =============================================================================


class TestPoint:
    """Tests for the Point value type"""

    def test_non_finite_components_rejected(self) -> None:
        with pytest.raises(DegenerateInputError, match="Point x"):
            Point(float("nan"), 0.0)
        with pytest.raises(DegenerateInputError, match="Point y"):
            Point(0.0, float("inf"))

    def test_degenerate_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            Point(float("-inf"), 0.0)

    def test_distance_and_midpoint(self) -> None:
        a, b = Point(0.0, 0.0), Point(3.0, 4.0)
        assert a.distance_to(b) == 5.0
        assert a.midpoint(b) == Point(1.5, 2.0)

    def test_point_immutable(self) -> None:
        with pytest.raises(FrozenInstanceError):
            Point(1.0, 2.0).x = 5.0  # type: ignore


# =============================================================================
# LINE
# =============================================================================


class TestLine:
    """Tests for Line"""

    def test_length(self) -> None:
        line = Line(Point(0.0, 0.0), Point(3.0, 4.0))
        assert line.length() == 5.0
        assert line.length(ScaleContext(unit=2.0)) == 10.0

    def test_midpoint(self) -> None:
        assert Line(Point(-2.0, 1.0), Point(4.0, 3.0)).midpoint == Point(1.0, 2.0)

    def test_slope(self) -> None:
        assert Line(Point(0.0, 1.0), Point(2.0, 5.0)).slope == 2.0
        assert Line(Point(0.0, 1.0), Point(2.0, 1.0)).slope == 0.0

    def test_vertical_slope_is_infinite(self) -> None:
        """Vertical line: ±inf is a valid numeric result"""
        assert Line(Point(1.0, 0.0), Point(1.0, 3.0)).slope == math.inf
        assert Line(Point(1.0, 3.0), Point(1.0, 0.0)).slope == -math.inf

    def test_zero_length_line_valid(self) -> None:
        line = Line(Point(2.0, 2.0), Point(2.0, 2.0))
        assert line.length() == 0.0
        assert math.isnan(line.slope)

    def test_equation(self) -> None:
        line = Line(Point(0.0, 1.0), Point(1.0, 3.0))
        assert line.equation() == "y = 2x + 1"

    def test_equation_fractional_slope(self) -> None:
        line = Line(Point(0.0, 0.0), Point(2.0, 1.0))
        assert line.equation() == "y = 0.5x + 0"

    def test_equation_intercept_device_scaled(self) -> None:
        line = Line(Point(0.0, 1.0), Point(1.0, 3.0))
        assert line.equation(ScaleContext(unit=10.0)) == "y = 2x + 10"

    def test_equation_vertical_line(self) -> None:
        line = Line(Point(0.0, 0.0), Point(0.0, 1.0))
        assert line.equation() == "y = Infinityx + NaN"

    def test_direction(self) -> None:
        direction = Line(Point(1.0, 1.0), Point(4.0, 5.0)).direction
        assert (direction.x, direction.y) == (3.0, 4.0)


class TestPerpendicularBisector:
    """Tests for the perpendicular bisector"""

    def test_diagonal_line(self) -> None:
        """Bisector of (0,0)-(2,2): slope -1 through (1,1), spanned across x ∈ [-4, 4]"""
        bisector = Line(Point(0.0, 0.0), Point(2.0, 2.0)).perpendicular_bisector(VIEWPORT)
        assert bisector.start.x == pytest.approx(-4.0)
        assert bisector.end.x == pytest.approx(4.0)
        assert bisector.start.y == pytest.approx(6.0)
        assert bisector.end.y == pytest.approx(-2.0)
        assert bisector.slope == pytest.approx(-1.0)

    def test_passes_through_midpoint(self) -> None:
        line = Line(Point(-1.0, 2.0), Point(3.0, -0.5))
        bisector = line.perpendicular_bisector(VIEWPORT)
        mid = line.midpoint
        assert bisector.slope * mid.x + bisector.intercept == pytest.approx(mid.y)
        assert bisector.slope * line.slope == pytest.approx(-1.0)

    def test_vertical_line_gives_horizontal_bisector(self) -> None:
        """Bisector slope 0 for a vertical segment is a valid result"""
        bisector = Line(Point(0.0, -1.0), Point(0.0, 3.0)).perpendicular_bisector(VIEWPORT)
        assert bisector.slope == 0.0
        assert bisector.start == Point(-4.0, 1.0)
        assert bisector.end == Point(4.0, 1.0)

    def test_horizontal_line_gives_vertical_bisector(self) -> None:
        """Vertical bisector spans the vertical extent instead of infinite y"""
        bisector = Line(Point(0.0, 0.0), Point(2.0, 0.0)).perpendicular_bisector(VIEWPORT)
        assert bisector.start == Point(1.0, -3.0)
        assert bisector.end == Point(1.0, 3.0)

    def test_default_scale_extent(self) -> None:
        bisector = Line(Point(0.0, -1.0), Point(0.0, 1.0)).perpendicular_bisector()
        assert bisector.start.x == -10.0
        assert bisector.end.x == 10.0

    def test_nearly_horizontal_line_spans_as_vertical(self) -> None:
        """Bisector slope overflows to -inf: span the vertical extent instead of raising"""
        bisector = Line(Point(0.0, 0.0), Point(1.0, 1e-310)).perpendicular_bisector()
        assert bisector.start == Point(0.5, -10.0)
        assert bisector.end == Point(0.5, 10.0)

    def test_steep_finite_slope_overflowing_extent_spans_as_vertical(self) -> None:
        line = UnboundedLine(anchor=Point(1.0, 0.0), direction=Vector.of(1e-297, 1e10))
        bisector = line.span(ScaleContext(unit=1e-3, viewport_width=1.0, viewport_height=1.0))
        assert bisector.start == Point(1.0, -500.0)
        assert bisector.end == Point(1.0, 500.0)

    def test_zero_length_line_raises(self) -> None:
        with pytest.raises(DegenerateInputError, match="zero-length"):
            Line(Point(1.0, 1.0), Point(1.0, 1.0)).perpendicular_bisector()

    def test_unbounded_bisector(self) -> None:
        bisector = Line(Point(0.0, 0.0), Point(2.0, 2.0)).perpendicular_bisector_unbounded()
        assert bisector.anchor == Point(1.0, 1.0)
        assert bisector.slope == pytest.approx(-1.0)
        assert bisector.point_at(1.0) == Point(-1.0, 3.0)

    def test_unbounded_line_requires_direction(self) -> None:
        with pytest.raises(DegenerateInputError):
            UnboundedLine(anchor=Point(0.0, 0.0), direction=Vector.of(0.0, 0.0))


# =============================================================================
# CIRCLE
# =============================================================================


class TestCircle:
    """Tests for Circle"""

    def test_math_space_quantities(self) -> None:
        circle = Circle(Point(0.0, 0.0), 2.0)
        assert circle.circumference() == pytest.approx(4 * math.pi)
        assert circle.area() == pytest.approx(4 * math.pi)
        assert circle.diameter() == 4.0

    def test_device_scaled_area(self) -> None:
        """area = π·(r·unit)², not the math-space area"""
        circle = Circle(Point(0.0, 0.0), 2.0)
        assert circle.area(ScaleContext(unit=10.0)) == pytest.approx(400 * math.pi)
        assert circle.circumference(ScaleContext(unit=10.0)) == pytest.approx(40 * math.pi)
        assert circle.diameter(ScaleContext(unit=10.0)) == 40.0

    def test_equation(self) -> None:
        circle = Circle(Point(1.0, 2.0), 3.0)
        assert circle.equation() == "(x - 1)^2 + (y - 2)^2 = 9"
        assert circle.equation(ScaleContext(unit=2.0)) == "(x - 2)^2 + (y - 4)^2 = 36"

    def test_equation_negative_center(self) -> None:
        circle = Circle(Point(-1.5, 0.0), 0.5)
        assert circle.equation() == "(x - -1.5)^2 + (y - 0)^2 = 0.25"

    def test_tangent_is_horizontal_through_rightmost_point(self) -> None:
        tangent = Circle(Point(1.0, 2.0), 3.0).tangent
        assert tangent == Line(Point(-2.0, 2.0), Point(4.0, 2.0))
        assert tangent.slope == 0.0

    def test_normal_is_vertical(self) -> None:
        normal = Circle(Point(1.0, 2.0), 3.0).normal
        assert normal == Line(Point(1.0, -1.0), Point(1.0, 5.0))
        assert normal.slope == math.inf

    def test_zero_radius_valid(self) -> None:
        circle = Circle(Point(0.0, 0.0), 0.0)
        assert circle.area() == 0.0

    def test_negative_radius_raises(self) -> None:
        with pytest.raises(DegenerateInputError, match="Circle radius must be non-negative"):
            Circle(Point(0.0, 0.0), -1.0)

    def test_nan_radius_raises(self) -> None:
        with pytest.raises(DegenerateInputError):
            Circle(Point(0.0, 0.0), float("nan"))


# =============================================================================
# TRIANGLE
# =============================================================================

TRIANGLES = [
    Triangle(Point(0.0, 0.0), Point(4.0, 0.0), Point(0.0, 3.0)),
    Triangle(Point(-1.0, -1.0), Point(5.0, 2.0), Point(1.0, 7.0)),
    Triangle(Point(0.3, 0.1), Point(0.9, 0.4), Point(0.2, 0.8)),
    Triangle(Point(10.0, 10.0), Point(-20.0, 15.0), Point(3.0, -40.0)),
    Triangle(Point(0.0, 0.0), Point(1.0, 0.0), Point(0.5, math.sqrt(3) / 2)),
]


class TestTriangle:
    """Tests for Triangle"""

    def test_right_triangle(self) -> None:
        triangle = TRIANGLES[0]
        assert triangle.perimeter() == pytest.approx(12.0)
        assert triangle.area() == pytest.approx(6.0)

    def test_device_scaling(self) -> None:
        triangle = TRIANGLES[0]
        scale = ScaleContext(unit=10.0)
        assert triangle.perimeter(scale) == pytest.approx(120.0)
        assert triangle.area(scale) == pytest.approx(600.0)

    @pytest.mark.parametrize("triangle", TRIANGLES)
    def test_shoelace_matches_heron(self, triangle: Triangle) -> None:
        assert triangle.area() == pytest.approx(triangle.heron_area(), rel=1e-6)

    def test_winding_order_irrelevant(self) -> None:
        t = TRIANGLES[1]
        assert Triangle(t.a, t.c, t.b).area() == pytest.approx(t.area())

    def test_collinear_vertices_zero_area(self) -> None:
        triangle = Triangle(Point(0.0, 0.0), Point(1.0, 1.0), Point(3.0, 3.0))
        assert triangle.area() == 0.0
        assert triangle.heron_area() == pytest.approx(0.0, abs=1e-6)

    def test_centroid(self) -> None:
        assert TRIANGLES[0].centroid == Point(4.0 / 3, 1.0)


# =============================================================================
# RECTANGLE / SQUARE
# =============================================================================


class TestRectangle:
    """Tests for Rectangle"""

    @pytest.fixture
    def rectangle(self) -> Rectangle:
        return Rectangle(Point(0.0, 0.0), Point(2.0, 3.0))

    def test_perimeter_and_area(self, rectangle: Rectangle) -> None:
        assert rectangle.perimeter(ScaleContext(unit=1.0)) == 10.0
        assert rectangle.area(ScaleContext(unit=1.0)) == 6.0

    def test_device_scaling(self, rectangle: Rectangle) -> None:
        assert rectangle.perimeter(ScaleContext(unit=10.0)) == 100.0
        assert rectangle.area(ScaleContext(unit=10.0)) == 600.0

    def test_diagonal_and_center(self, rectangle: Rectangle) -> None:
        assert rectangle.diagonal == Line(Point(0.0, 0.0), Point(2.0, 3.0))
        assert rectangle.diagonal.length() == pytest.approx(math.sqrt(13))
        assert rectangle.center == Point(1.0, 1.5)

    def test_inverted_corners_yield_negative_quantities(self) -> None:
        """Inverted construction is valid; derived quantities go negative"""
        rectangle = Rectangle(Point(2.0, 0.0), Point(0.0, 3.0))
        assert rectangle.is_inverted
        assert rectangle.width == -2.0
        assert rectangle.perimeter() == 2.0
        assert rectangle.area() == -6.0

    def test_fully_inverted_perimeter_negative(self) -> None:
        rectangle = Rectangle(Point(2.0, 3.0), Point(0.0, 0.0))
        assert rectangle.perimeter() == -10.0

    def test_normalized(self) -> None:
        rectangle = Rectangle(Point(2.0, 0.0), Point(0.0, 3.0)).normalized()
        assert not rectangle.is_inverted
        assert rectangle == Rectangle(Point(0.0, 0.0), Point(2.0, 3.0))
        assert rectangle.area() == 6.0

    def test_from_corners_orders_corners(self) -> None:
        rectangle = Rectangle.from_corners(Point(5.0, -1.0), Point(1.0, 2.0))
        assert rectangle.a == Point(1.0, -1.0)
        assert rectangle.b == Point(5.0, 2.0)


class TestSquare:
    """Tests for Square"""

    @pytest.fixture
    def square(self) -> Square:
        return Square(Point(0.0, 0.0), 3.0)

    def test_perimeter_area_diagonal(self, square: Square) -> None:
        assert square.perimeter(ScaleContext(unit=1.0)) == 12.0
        assert square.area(ScaleContext(unit=1.0)) == 9.0
        assert square.diagonal.length() == pytest.approx(3 * math.sqrt(2))

    def test_device_scaling(self, square: Square) -> None:
        assert square.perimeter(ScaleContext(unit=2.0)) == 24.0
        assert square.area(ScaleContext(unit=2.0)) == 36.0

    def test_derived_corner_and_center(self, square: Square) -> None:
        assert square.b == Point(3.0, 3.0)
        assert square.center == Point(1.5, 1.5)

    def test_matches_equivalent_rectangle(self, square: Square) -> None:
        rectangle = square.as_rectangle()
        assert rectangle.area() == square.area()
        assert rectangle.perimeter() == square.perimeter()

    def test_shared_contract(self, square: Square) -> None:
        """Square and Rectangle are distinct variants of one accessor contract"""
        assert isinstance(square, AxisAlignedQuadrilateral)
        assert isinstance(square.as_rectangle(), AxisAlignedQuadrilateral)
        assert not isinstance(square, Rectangle)

    @pytest.mark.parametrize("side", [0.0, -1.0, float("nan")])
    def test_non_positive_side_raises(self, side: float) -> None:
        with pytest.raises(DegenerateInputError, match="Square side"):
            Square(Point(0.0, 0.0), side)


# =============================================================================
# POLYGON
# =============================================================================


class TestPolygon:
    """Tests for Polygon"""

    @pytest.fixture
    def rectangle_polygon(self) -> Polygon:
        return Polygon((Point(0.0, 0.0), Point(4.0, 0.0), Point(4.0, 3.0), Point(0.0, 3.0)))

    def test_area_and_perimeter(self, rectangle_polygon: Polygon) -> None:
        assert rectangle_polygon.area() == 12.0
        assert rectangle_polygon.perimeter() == 14.0

    def test_reversed_order_same_area(self, rectangle_polygon: Polygon) -> None:
        assert rectangle_polygon.reversed().area() == rectangle_polygon.area()

    def test_signed_area_tracks_winding(self, rectangle_polygon: Polygon) -> None:
        assert rectangle_polygon.signed_area == 12.0
        assert rectangle_polygon.reversed().signed_area == -12.0

    def test_device_scaling(self, rectangle_polygon: Polygon) -> None:
        scale = ScaleContext(unit=10.0)
        assert rectangle_polygon.area(scale) == 1200.0
        assert rectangle_polygon.perimeter(scale) == 140.0

    def test_non_convex_polygon(self) -> None:
        """L-shape: 2×2 square minus a 1×1 corner"""
        polygon = Polygon(
            [
                Point(0.0, 0.0),
                Point(2.0, 0.0),
                Point(2.0, 1.0),
                Point(1.0, 1.0),
                Point(1.0, 2.0),
                Point(0.0, 2.0),
            ]
        )
        assert polygon.area() == 3.0
        assert polygon.perimeter() == 8.0

    def test_self_intersecting_polygon_cancels(self) -> None:
        """Bow-tie loops have opposite winding: net shoelace area is 0"""
        polygon = Polygon([Point(0.0, 0.0), Point(2.0, 2.0), Point(2.0, 0.0), Point(0.0, 2.0)])
        assert polygon.area() == 0.0

    def test_accepts_list_and_stores_tuple(self) -> None:
        polygon = Polygon([Point(0.0, 0.0), Point(1.0, 0.0), Point(0.0, 1.0)])
        assert isinstance(polygon.points, tuple)
        assert polygon.area() == 0.5

    def test_edges_include_closing_edge(self, rectangle_polygon: Polygon) -> None:
        edges = list(rectangle_polygon.edges())
        assert len(edges) == 4
        assert edges[-1] == (Point(0.0, 3.0), Point(0.0, 0.0))

    def test_vertex_mean(self, rectangle_polygon: Polygon) -> None:
        assert rectangle_polygon.vertex_mean == Point(2.0, 1.5)

    @pytest.mark.parametrize("count", [0, 1, 2])
    def test_fewer_than_three_points_raises(self, count: int) -> None:
        points = [Point(float(i), 0.0) for i in range(count)]
        with pytest.raises(DegenerateInputError, match="at least 3 points"):
            Polygon(points)


# =============================================================================
# IDEMPOTENCE
# =============================================================================


class TestIdempotence:
    """Accessors on immutable shapes return bit-identical results"""

    @pytest.mark.parametrize(
        "shape",
        [
            Circle(Point(0.1, 0.2), 0.3),
            TRIANGLES[2],
            Rectangle(Point(0.1, 0.2), Point(0.7, 1.3)),
            Square(Point(0.1, 0.2), 0.7),
            Polygon([Point(0.1, 0.2), Point(1.7, 0.4), Point(0.9, 2.3)]),
        ],
    )
    def test_area_and_perimeter_repeatable(self, shape) -> None:
        assert shape.area(VIEWPORT) == shape.area(VIEWPORT)
        measure = getattr(shape, "perimeter", None) or getattr(shape, "circumference")
        assert measure(VIEWPORT) == measure(VIEWPORT)

    def test_line_accessors_repeatable(self) -> None:
        line = Line(Point(0.1, 0.7), Point(2.3, -1.9))
        assert line.length(VIEWPORT) == line.length(VIEWPORT)
        assert line.slope == line.slope
        assert line.equation(VIEWPORT) == line.equation(VIEWPORT)
        assert line.perpendicular_bisector(VIEWPORT) == line.perpendicular_bisector(VIEWPORT)


# =============================================================================
# DRAW DESCRIPTORS
# =============================================================================


class TestShapeDraw:
    """Tests for shape draw descriptors"""

    def test_line_draw(self) -> None:
        descriptor = Line(Point(1.0, 2.0), Point(3.0, 4.0)).draw(ScaleContext(unit=10.0))
        kinds = [c.kind for c in descriptor.commands]
        assert kinds == [PathCommandKind.MOVE, PathCommandKind.LINE]
        assert (descriptor.commands[1].x, descriptor.commands[1].y) == (30.0, 40.0)
        assert descriptor.stroke and not descriptor.fill

    def test_circle_draw_is_full_arc(self) -> None:
        descriptor = Circle(Point(1.0, 1.0), 2.0).draw(ScaleContext(unit=10.0), fill=True)
        (command,) = descriptor.commands
        assert command.kind is PathCommandKind.ARC
        assert (command.x, command.y, command.radius) == (10.0, 10.0, 20.0)
        assert command.start_angle == 0.0
        assert command.end_angle == pytest.approx(2 * math.pi)
        assert descriptor.fill

    def test_rectangle_draw_corners(self) -> None:
        descriptor = Rectangle(Point(0.0, 0.0), Point(2.0, 3.0)).draw()
        points = [(c.x, c.y) for c in descriptor.commands[:-1]]
        assert points == [(0.0, 0.0), (2.0, 0.0), (2.0, 3.0), (0.0, 3.0)]
        assert descriptor.is_closed
        assert descriptor.shape == "rectangle"

    def test_square_draw(self) -> None:
        descriptor = Square(Point(1.0, 1.0), 1.0).draw()
        assert descriptor.shape == "square"
        assert len(descriptor.commands) == 5

    def test_triangle_and_polygon_closed(self) -> None:
        assert TRIANGLES[0].draw().is_closed
        polygon = Polygon([Point(0.0, 0.0), Point(1.0, 0.0), Point(1.0, 1.0), Point(0.0, 1.0)])
        descriptor = polygon.draw()
        assert descriptor.is_closed
        assert len(descriptor.commands) == 5

    def test_text_draw(self) -> None:
        descriptor = Text("A", Point(1.0, -1.0)).draw(ScaleContext(unit=4.0))
        assert descriptor.text == "A"
        assert (descriptor.commands[0].x, descriptor.commands[0].y) == (4.0, -4.0)
        assert descriptor.fill and not descriptor.stroke


class TestNumberPlane:
    """Tests for the NumberPlane grid"""

    SCALE = ScaleContext(unit=1.0, viewport_width=4.0, viewport_height=2.0)

    def test_grid_lines(self) -> None:
        lines = NumberPlane().grid_lines(self.SCALE)
        verticals = [line.start.x for line in lines if line.start.x == line.end.x]
        horizontals = [line.start.y for line in lines if line.start.y == line.end.y]
        assert sorted(verticals) == [-2, -1, 1, 2]
        assert sorted(horizontals) == [-1, 1]

    def test_grid_lines_span_viewport(self) -> None:
        first = NumberPlane().grid_lines(self.SCALE)[0]
        assert first == Line(Point(1.0, -1.0), Point(1.0, 1.0))

    def test_axes(self) -> None:
        y_axis, x_axis = NumberPlane().axes(self.SCALE)
        assert y_axis == Line(Point(0.0, -1.0), Point(0.0, 1.0))
        assert x_axis == Line(Point(-2.0, 0.0), Point(2.0, 0.0))

    def test_draw_has_move_line_pair_per_line(self) -> None:
        descriptor = NumberPlane().draw(self.SCALE)
        assert len(descriptor.commands) == (6 + 2) * 2

    def test_device_coordinates(self) -> None:
        scale = ScaleContext(unit=100.0, viewport_width=400.0, viewport_height=200.0)
        descriptor = NumberPlane().draw(scale)
        first_move, first_line = descriptor.commands[:2]
        assert (first_move.x, first_move.y) == (100.0, -100.0)
        assert (first_line.x, first_line.y) == (100.0, 100.0)
