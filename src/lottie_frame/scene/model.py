"""Discriminants and keys of the Lottie scene-graph JSON."""

from enum import IntEnum
from typing import Any


class LayerType(IntEnum):
    """Layer discriminant values stored under ``ty``."""

    PRECOMP = 0
    SOLID = 1
    IMAGE = 2
    NULL = 3
    SHAPE = 4
    TEXT = 5


class ShapeType:
    """Shape discriminant values stored under ``ty``."""

    GROUP = "gr"
    STROKE = "st"
    FILL = "fl"
    RECT = "rc"
    ELLIPSE = "el"
    PATH = "sh"
    TRANSFORM = "tr"


# Keys the sanitizer reads or repairs
LAYERS_KEY = "layers"
ASSETS_KEY = "assets"
SHAPES_KEY = "shapes"
GROUP_ITEMS_KEY = "it"
DASH_KEY = "d"
REF_ID_KEY = "refId"
ASSET_ID_KEY = "id"


def is_absent(value: Any) -> bool:
    """Return True for values the scene format treats as missing.

    Empty lists and dicts count as present; ``None``, ``False``, ``0`` and
    ``""`` do not.
    """
    if value is None:
        return True
    if isinstance(value, (list, dict)):
        return False
    return not value


def is_layer_type(layer: dict[str, Any], layer_type: LayerType) -> bool:
    ty = layer.get("ty")
    return not isinstance(ty, bool) and ty == layer_type
