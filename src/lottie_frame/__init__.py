"""Render single frames of Lottie animations to static markup."""

from .errors import (
    CatastrophicCopyError,
    DataLoadError,
    EngineError,
    RenderError,
    SeekExtractionError,
    SetupError,
)
from .host import EtreeHostEnvironment, HostEnvironment
from .orchestrator import FrameRenderer, RenderState
from .playback import LoadParams, PlaybackEngine, RlottieEngine
from .render_pipeline import encode_snapshot, render, render_sync
from .scene import SceneSanitizer, sanitize_animation_data

__all__ = [
    "CatastrophicCopyError",
    "DataLoadError",
    "EngineError",
    "RenderError",
    "SeekExtractionError",
    "SetupError",
    "EtreeHostEnvironment",
    "HostEnvironment",
    "FrameRenderer",
    "RenderState",
    "LoadParams",
    "PlaybackEngine",
    "RlottieEngine",
    "encode_snapshot",
    "render",
    "render_sync",
    "SceneSanitizer",
    "sanitize_animation_data",
]
