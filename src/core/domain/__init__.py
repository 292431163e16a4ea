"""
Domain models and value objects.

Contains the geometry value types (Point, Vector, shapes), the function
Graph engine, the scale context and the error taxonomy.
"""

from src.core.domain.errors import (
    DegenerateInputError,
    DivideByZeroError,
    GeometryError,
)
from src.core.domain.graph import (
    DEFAULT_STEP,
    CalculusConfig,
    Graph,
    RiemannPartition,
    RiemannStrip,
)
from src.core.domain.point import ORIGIN, Point
from src.core.domain.scale import (
    DEFAULT_UNIT,
    DEFAULT_VIEWPORT_HEIGHT,
    DEFAULT_VIEWPORT_WIDTH,
    IDENTITY_SCALE,
    ScaleContext,
    resolve_scale,
)
from src.core.domain.shapes import (
    AxisAlignedQuadrilateral,
    Circle,
    Line,
    NumberPlane,
    Polygon,
    Rectangle,
    Square,
    Text,
    Triangle,
    UnboundedLine,
)
from src.core.domain.vector import Vector, angle_between, cross, dot, project

__all__ = [
    # Errors
    "GeometryError",
    "DivideByZeroError",
    "DegenerateInputError",
    # Point & scale
    "Point",
    "ORIGIN",
    "ScaleContext",
    "IDENTITY_SCALE",
    "DEFAULT_UNIT",
    "DEFAULT_VIEWPORT_WIDTH",
    "DEFAULT_VIEWPORT_HEIGHT",
    "resolve_scale",
    # Vector algebra
    "Vector",
    "dot",
    "cross",
    "angle_between",
    "project",
    # Shapes
    "Line",
    "UnboundedLine",
    "Circle",
    "Triangle",
    "AxisAlignedQuadrilateral",
    "Rectangle",
    "Square",
    "Polygon",
    "Text",
    "NumberPlane",
    # Graph engine
    "Graph",
    "CalculusConfig",
    "DEFAULT_STEP",
    "RiemannStrip",
    "RiemannPartition",
]
