"""Scene-graph model and sanitization."""

from .model import LayerType, ShapeType
from .sanitizer import SceneSanitizer, sanitize_animation_data

__all__ = [
    "LayerType",
    "ShapeType",
    "SceneSanitizer",
    "sanitize_animation_data",
]
