"""Repairs scene graphs that would otherwise crash the playback engine.

The engine indexes into ``shapes`` and ``it`` unconditionally and can hang
computing dash offsets for malformed stroke dash patterns, so every render
goes through :func:`sanitize_animation_data` first.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from ..errors import CatastrophicCopyError
from .model import (
    ASSET_ID_KEY,
    ASSETS_KEY,
    DASH_KEY,
    GROUP_ITEMS_KEY,
    LAYERS_KEY,
    REF_ID_KEY,
    SHAPES_KEY,
    LayerType,
    ShapeType,
    is_absent,
    is_layer_type,
)

logger = logging.getLogger(__name__)


@dataclass
class _VisitContext:
    """Per-document lookup state shared by one sanitizer pass."""
    assets_by_id: dict[str, dict[str, Any]]
    visited_assets: set[int] = field(default_factory=set)


class SceneSanitizer:
    """Recursive visitor enforcing the structural invariants of a scene graph."""

    def __init__(self, follow_precomp_refs: bool = False):
        """
        Initialize the sanitizer.

        Args:
            follow_precomp_refs: Also descend into the asset referenced by each
                precomposition layer. Every asset is still visited at most once,
                so cyclic references terminate.
        """
        self.follow_precomp_refs = follow_precomp_refs

    def sanitize(self, data: Any) -> Any:
        """
        Return a repaired, independent copy of ``data``.

        Args:
            data: Parsed scene-graph document, possibly malformed

        Returns:
            The sanitized copy, or ``None`` when ``data`` is ``None``

        Raises:
            CatastrophicCopyError: If ``data`` cannot be copied
        """
        if data is None:
            return None

        document = _independent_copy(data)
        if not isinstance(document, dict):
            return document

        context = _VisitContext(assets_by_id=_index_assets(document.get(ASSETS_KEY)))
        self.visit_layers(document.get(LAYERS_KEY), context)

        assets = document.get(ASSETS_KEY)
        if isinstance(assets, list):
            for asset in assets:
                self.visit_asset(asset, context)
        return document

    def visit_asset(self, asset: Any, context: _VisitContext) -> None:
        if not isinstance(asset, dict) or is_absent(asset.get(LAYERS_KEY)):
            return
        if id(asset) in context.visited_assets:
            return
        context.visited_assets.add(id(asset))
        self.visit_layers(asset[LAYERS_KEY], context)

    def visit_layers(self, layers: Any, context: _VisitContext) -> None:
        if not isinstance(layers, list):
            return
        for layer in layers:
            self.visit_layer(layer, context)

    def visit_layer(self, layer: Any, context: _VisitContext) -> None:
        if not isinstance(layer, dict):
            return

        if is_layer_type(layer, LayerType.SHAPE) and is_absent(layer.get(SHAPES_KEY)):
            layer[SHAPES_KEY] = []

        if not is_absent(layer.get(SHAPES_KEY)):
            layer[SHAPES_KEY] = self.visit_shapes(layer[SHAPES_KEY])

        if self.follow_precomp_refs and is_layer_type(layer, LayerType.PRECOMP):
            ref_id = layer.get(REF_ID_KEY)
            if isinstance(ref_id, str) and ref_id in context.assets_by_id:
                self.visit_asset(context.assets_by_id[ref_id], context)

    def visit_shapes(self, shapes: Any) -> list[Any]:
        """
        Sanitize a shape list in place; anything that is not a list becomes empty.

        Nested ``it`` lists are walked with an explicit worklist, so nesting
        depth is bounded only by what the JSON copy accepts.
        """
        if not isinstance(shapes, list):
            return []
        pending = [shapes]
        while pending:
            for shape in pending.pop():
                children = self.repair_shape(shape)
                if children is not None:
                    pending.append(children)
        return shapes

    def repair_shape(self, shape: Any) -> list[Any] | None:
        """Repair one shape and return its child list when it has one to visit."""
        # Nulls and foreign values pass through untouched
        if not isinstance(shape, dict):
            return None

        shape_type = shape.get("ty")
        if shape_type == ShapeType.GROUP and is_absent(shape.get(GROUP_ITEMS_KEY)):
            shape[GROUP_ITEMS_KEY] = []

        if shape_type == ShapeType.STROKE and DASH_KEY in shape:
            del shape[DASH_KEY]

        children = shape.get(GROUP_ITEMS_KEY)
        if is_absent(children):
            return None
        if not isinstance(children, list):
            shape[GROUP_ITEMS_KEY] = []
            return None
        return children


def sanitize_animation_data(data: Any, *, follow_precomp_refs: bool = False) -> Any:
    """Sanitize a scene graph with a fresh :class:`SceneSanitizer`."""
    return SceneSanitizer(follow_precomp_refs=follow_precomp_refs).sanitize(data)


def _independent_copy(data: Any) -> Any:
    try:
        return json.loads(json.dumps(data))
    except (TypeError, ValueError, RecursionError) as exc:
        logger.warning("Scene graph cannot be copied: %s", exc)
        raise CatastrophicCopyError(f"Scene graph cannot be copied: {exc}") from exc


def _index_assets(assets: Any) -> dict[str, dict[str, Any]]:
    if not isinstance(assets, list):
        return {}
    index: dict[str, dict[str, Any]] = {}
    for asset in assets:
        if isinstance(asset, dict) and isinstance(asset.get(ASSET_ID_KEY), str):
            index.setdefault(asset[ASSET_ID_KEY], asset)
    return index
