"""
ScaleContext — Coordinate Scale Context

The single way to convert between:
- math-space (shape and vector coordinates)
- device-space (renderer linear units: math-space × unit)

It also carries the viewport extent used to bound otherwise infinite
geometry (bisector lines, the number plane grid). The context is owned by
the rendering collaborator and passed in by value; nothing in the core
keeps a global scale.

Mixing units without a converter from this module is not allowed.
"""

from typing import Final

from pydantic import BaseModel, Field

from src.core.domain.point import Point

# =============================================================================
# DEFAULTS
# =============================================================================

# Identity scale: one math-space unit per device unit
DEFAULT_UNIT: Final[float] = 1.0

# Default viewport extent (device units); with the identity scale the
# visible math-space window is [-10, 10] on both axes
DEFAULT_VIEWPORT_WIDTH: Final[float] = 20.0
DEFAULT_VIEWPORT_HEIGHT: Final[float] = 20.0


# =============================================================================
# SCALE CONTEXT MODEL
# =============================================================================


class ScaleContext(BaseModel):
    """
    Scale factor and viewport extent pair.

    Immutable model (frozen=True). The viewport is centered on the math-space
    origin, so the visible window spans
    [-viewport_width / (2 * unit), viewport_width / (2 * unit)] horizontally.
    """

    unit: float = Field(
        DEFAULT_UNIT,
        gt=0,
        allow_inf_nan=False,
        description="Device units per math-space unit",
    )
    viewport_width: float = Field(
        DEFAULT_VIEWPORT_WIDTH,
        gt=0,
        allow_inf_nan=False,
        description="Viewport width (device units)",
    )
    viewport_height: float = Field(
        DEFAULT_VIEWPORT_HEIGHT,
        gt=0,
        allow_inf_nan=False,
        description="Viewport height (device units)",
    )

    model_config = {"frozen": True}

    @property
    def half_extent_x(self) -> float:
        """Half of the visible math-space width."""
        return self.viewport_width / (2 * self.unit)

    @property
    def half_extent_y(self) -> float:
        """Half of the visible math-space height."""
        return self.viewport_height / (2 * self.unit)

    def length(self, value: float) -> float:
        """
        Conversion: math-space length → device length.

        Returns:
            value * unit
        """
        return value * self.unit

    def area(self, value: float) -> float:
        """
        Conversion: math-space area → device area.

        Returns:
            value * unit²
        """
        return value * self.unit * self.unit

    def to_device(self, point: Point) -> tuple[float, float]:
        """Project a math-space point to device coordinates."""
        return (point.x * self.unit, point.y * self.unit)

    def to_payload(self) -> dict:
        """JSON-compatible form (see schema/scale_context.json)."""
        return self.model_dump(mode="json")


IDENTITY_SCALE: Final[ScaleContext] = ScaleContext()


def resolve_scale(scale: ScaleContext | None) -> ScaleContext:
    """Return the given scale context or the identity scale."""
    return scale if scale is not None else IDENTITY_SCALE
