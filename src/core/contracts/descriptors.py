"""
Drawable Descriptors — Renderer-facing path protocol

Immutable Pydantic models describing how a shape is drawn, without any
access to a rendering surface. A descriptor is an ordered sequence of path
commands plus fill/stroke intent flags. Coordinates are device-space
(math-space × unit); the renderer is the only component that touches
device output.

Full compatibility with the JSON Schema contract
(src/core/contracts/schema/draw_descriptor.json).
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator


# =============================================================================
# ENUMS
# =============================================================================


class PathCommandKind(str, Enum):
    """Path command kind"""

    MOVE = "move"
    LINE = "line"
    ARC = "arc"
    CLOSE = "close"


# =============================================================================
# PATH COMMAND MODEL
# =============================================================================


class PathCommand(BaseModel):
    """
    A single path command.

    - move / line: target point (x, y)
    - arc: center (x, y), radius, start_angle and end_angle (radians)
    - close: no coordinates
    """

    kind: PathCommandKind = Field(..., description="Command kind")
    x: Optional[float] = Field(None, allow_inf_nan=False, description="X (device units)")
    y: Optional[float] = Field(None, allow_inf_nan=False, description="Y (device units)")
    radius: Optional[float] = Field(
        None, ge=0, allow_inf_nan=False, description="Arc radius (device units)"
    )
    start_angle: Optional[float] = Field(
        None, allow_inf_nan=False, description="Arc start angle (radians)"
    )
    end_angle: Optional[float] = Field(
        None, allow_inf_nan=False, description="Arc end angle (radians)"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_operands(self) -> "PathCommand":
        """Each kind carries exactly the operands it needs."""
        has_point = self.x is not None and self.y is not None
        arc_fields = (self.radius, self.start_angle, self.end_angle)

        if self.kind is PathCommandKind.CLOSE:
            if self.x is not None or self.y is not None or any(
                v is not None for v in arc_fields
            ):
                raise ValueError("close command takes no operands")
        elif not has_point:
            raise ValueError(f"{self.kind.value} command requires x and y")
        elif self.kind is PathCommandKind.ARC:
            if any(v is None for v in arc_fields):
                raise ValueError("arc command requires radius, start_angle and end_angle")
        elif any(v is not None for v in arc_fields):
            raise ValueError(f"{self.kind.value} command takes no arc operands")
        return self


def move_to(x: float, y: float) -> PathCommand:
    return PathCommand(kind=PathCommandKind.MOVE, x=x, y=y)


def line_to(x: float, y: float) -> PathCommand:
    return PathCommand(kind=PathCommandKind.LINE, x=x, y=y)


def arc(x: float, y: float, radius: float, start_angle: float, end_angle: float) -> PathCommand:
    return PathCommand(
        kind=PathCommandKind.ARC,
        x=x,
        y=y,
        radius=radius,
        start_angle=start_angle,
        end_angle=end_angle,
    )


def close_path() -> PathCommand:
    return PathCommand(kind=PathCommandKind.CLOSE)


# =============================================================================
# DRAW DESCRIPTOR MODEL
# =============================================================================


class DrawDescriptor(BaseModel):
    """
    Everything a renderer needs to draw one shape.

    Styling (colors, line widths) belongs to the renderer's theme; the
    descriptor only states the intent to fill and/or stroke.
    """

    shape: str = Field(..., min_length=1, description="Shape kind (e.g. 'circle')")
    commands: tuple[PathCommand, ...] = Field(
        ..., description="Ordered path commands"
    )
    fill: bool = Field(False, description="Fill the closed path")
    stroke: bool = Field(True, description="Stroke the path outline")
    text: Optional[str] = Field(
        None, description="Label drawn at the first move command (text shapes)"
    )

    model_config = {"frozen": True}

    @property
    def is_closed(self) -> bool:
        """True if the path ends with a close command."""
        return bool(self.commands) and self.commands[-1].kind is PathCommandKind.CLOSE

    def to_payload(self) -> dict:
        """
        JSON-compatible form for the renderer.

        Operands a command does not use are omitted.
        """
        return self.model_dump(mode="json", exclude_none=True)
