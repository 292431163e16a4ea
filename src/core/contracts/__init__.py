"""
Contract Module

Drawable descriptor models and JSON Schema validation of the payloads
handed to the renderer.
"""

from .descriptors import (
    DrawDescriptor,
    PathCommand,
    PathCommandKind,
    arc,
    close_path,
    line_to,
    move_to,
)
from .validators import (
    ContractValidator,
    DrawDescriptorValidator,
    ScaleContextValidator,
    SchemaLoader,
    validate_draw_descriptor,
    validate_scale_context,
)

__all__ = [
    # Descriptor models
    "DrawDescriptor",
    "PathCommand",
    "PathCommandKind",
    "move_to",
    "line_to",
    "arc",
    "close_path",
    # Validator classes
    "SchemaLoader",
    "ContractValidator",
    "DrawDescriptorValidator",
    "ScaleContextValidator",
    # Functions
    "validate_draw_descriptor",
    "validate_scale_context",
]
