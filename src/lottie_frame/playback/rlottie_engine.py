"""Playback engine adapter that rasterizes frames with rlottie."""

import asyncio
import base64
import json
import logging
import xml.etree.ElementTree as ET
from collections import defaultdict
from io import BytesIO
from typing import Any, Callable

from PIL import Image

from ..constants import (
    DEFAULT_IMAGE_FORMAT,
    DEFAULT_PRESERVE_ASPECT_RATIO,
    DEFAULT_RENDERER,
    EVENT_CONFIG_READY,
    EVENT_DATA_FAILED,
    EVENT_DATA_READY,
    EVENT_DOM_LOADED,
    EVENT_ERROR,
    SUPPORTED_IMAGE_FORMATS,
    SVG_NAMESPACE,
)
from .base import EventCallback, LoadParams

logger = logging.getLogger(__name__)

AnimationLoader = Callable[[str], Any]


def load_rlottie_animation(data: str) -> Any:
    """Parse scene-graph JSON text into an ``rlottie_python.LottieAnimation``."""
    import rlottie_python as rl

    return rl.LottieAnimation.from_data(data)


def clamp_frame(frame: float, total_frames: int) -> int:
    """
    Clamp a requested frame into the animation's playable range.

    Negative frames clamp to the first frame, frames past the end clamp to
    the last one (``total_frames - 1``). Fractional frames are truncated.
    """
    if total_frames <= 0:
        return 0
    return min(max(int(frame), 0), total_frames - 1)


def encode_image_data_url(image: Image.Image, image_format: str) -> str:
    """Encode a Pillow image as a base64 data URL."""
    buffer = BytesIO()
    if image_format == "webp":
        image.save(buffer, format="webp", lossless=True, quality=100, method=4)
    else:
        image.save(buffer, format=image_format)
    base64_data = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/{image_format};base64,{base64_data}"


class RlottieAnimation:
    """An animation loaded by rlottie and mounted into a container as SVG."""

    def __init__(self, params: LoadParams, animation_loader: AnimationLoader):
        """
        Validate renderer settings and schedule loading on the running loop.

        Args:
            params: Load call arguments
            animation_loader: Callable parsing scene JSON into an rlottie animation

        Raises:
            ValueError: If renderer settings are malformed
            RuntimeError: If there is no running event loop
        """
        self.params = params
        self.animation_loader = animation_loader
        settings = params.renderer_settings
        self.image_format = str(settings.get("imageFormat", DEFAULT_IMAGE_FORMAT)).lower()
        if self.image_format not in SUPPORTED_IMAGE_FORMATS:
            supported = ", ".join(SUPPORTED_IMAGE_FORMATS)
            raise ValueError(
                f"Unsupported image format '{self.image_format}'. Supported formats: {supported}"
            )
        self.requested_size = (
            _optional_dimension(settings, "width"),
            _optional_dimension(settings, "height"),
        )

        self.width = 0
        self.height = 0
        self.output_size = (0, 0)
        self.total_frames = 0
        self.frame_rate = 0.0
        self.current_frame = 0
        self._animation: Any = None
        self._svg: ET.Element | None = None
        self._listeners: dict[str, list[EventCallback]] = defaultdict(list)

        asyncio.get_running_loop().call_soon(self._load)

    def add_event_listener(self, name: str, callback: EventCallback) -> None:
        self._listeners[name].append(callback)

    def go_to_and_stop(self, value: float, is_frame: bool = False) -> None:
        """
        Render the frame at ``value`` and keep the animation paused there.

        Args:
            value: Frame index when ``is_frame`` is set, otherwise time in ms
            is_frame: Whether ``value`` is a frame index
        """
        if self._animation is None or self._svg is None:
            raise RuntimeError("Animation is not loaded")

        frame = value if is_frame else value / 1000 * self.frame_rate
        self.current_frame = clamp_frame(frame, self.total_frames)

        image = self._animation.render_pillow_frame(frame_num=self.current_frame)
        if image.size != self.output_size:
            image = image.resize(self.output_size)

        for child in list(self._svg):
            self._svg.remove(child)
        ET.SubElement(
            self._svg,
            "image",
            {
                "width": str(self.width),
                "height": str(self.height),
                "href": encode_image_data_url(image, self.image_format),
            },
        )

    def _load(self) -> None:
        self._dispatch(EVENT_CONFIG_READY)
        try:
            animation = self.animation_loader(json.dumps(self.params.animation_data))
            width, height = animation.lottie_animation_get_size()
            total_frames = animation.lottie_animation_get_totalframe()
            frame_rate = animation.lottie_animation_get_framerate()
            if width <= 0 or height <= 0 or total_frames <= 0:
                raise ValueError(
                    f"Animation has no drawable content ({width}x{height}, {total_frames} frames)"
                )
        except Exception as exc:
            logger.warning("rlottie could not load animation data: %s", exc)
            self._dispatch(EVENT_DATA_FAILED, exc)
            return

        self._animation = animation
        self.width, self.height = int(width), int(height)
        self.total_frames = int(total_frames)
        self.frame_rate = float(frame_rate)
        self._dispatch(EVENT_DATA_READY)

        try:
            self.output_size = self._resolve_output_size()
            self._svg = self._build_render_tree()
        except Exception as exc:
            self._dispatch(EVENT_ERROR, exc)
            return
        self._dispatch(EVENT_DOM_LOADED)

    def _resolve_output_size(self) -> tuple[int, int]:
        width, height = self.requested_size
        if width and height:
            return width, height
        if width:
            return width, max(1, round(width * self.height / self.width))
        if height:
            return max(1, round(height * self.width / self.height)), height
        return self.width, self.height

    def _build_render_tree(self) -> ET.Element:
        settings = self.params.renderer_settings
        output_width, output_height = self.output_size
        svg = ET.SubElement(
            self.params.container,
            "svg",
            {
                "xmlns": SVG_NAMESPACE,
                "width": str(output_width),
                "height": str(output_height),
                "viewBox": f"0 0 {self.width} {self.height}",
                "preserveAspectRatio": str(
                    settings.get("preserveAspectRatio", DEFAULT_PRESERVE_ASPECT_RATIO)
                ),
            },
        )
        class_name = settings.get("className")
        if class_name:
            svg.set("class", str(class_name))
        return svg

    def _dispatch(self, name: str, *args: Any) -> None:
        for callback in list(self._listeners[name]):
            callback(*args)


class RlottieEngine:
    """Playback engine producing ``<svg>`` snapshots through rlottie."""

    def __init__(self, animation_loader: AnimationLoader = load_rlottie_animation):
        self.animation_loader = animation_loader

    def load_animation(self, params: LoadParams) -> RlottieAnimation:
        if params.renderer != DEFAULT_RENDERER:
            raise ValueError(
                f"Unsupported renderer '{params.renderer}'. Only '{DEFAULT_RENDERER}' is available"
            )
        if params.animation_data is None:
            raise TypeError("Animation data is required")
        return RlottieAnimation(params, self.animation_loader)


def _optional_dimension(settings: dict[str, Any], key: str) -> int | None:
    value = settings.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ValueError(f"Renderer setting '{key}' must be a positive number, got {value!r}")
    return max(1, int(value))
