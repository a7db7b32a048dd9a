"""Playback engines the render orchestrator can drive."""

from .base import AnimationInstance, EventCallback, LoadParams, PlaybackEngine
from .rlottie_engine import RlottieAnimation, RlottieEngine, clamp_frame

__all__ = [
    "AnimationInstance",
    "EventCallback",
    "LoadParams",
    "PlaybackEngine",
    "RlottieAnimation",
    "RlottieEngine",
    "clamp_frame",
]
