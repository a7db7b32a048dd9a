"""Error types raised while sanitizing and rendering animations."""

from typing import Any


class RenderError(Exception):
    """Base exception for every failure of a render call."""
    pass


class DataLoadError(RenderError):
    """The playback engine could not load the scene data."""
    pass


class EngineError(RenderError):
    """The playback engine reported a generic internal error."""

    def __init__(self, message: str, payload: Any = None):
        super().__init__(message)
        self.payload = payload


class SeekExtractionError(RenderError):
    """Seeking to the requested frame or reading the markup failed after load."""
    pass


class SetupError(RenderError):
    """Building the container or initializing the engine failed."""
    pass


class CatastrophicCopyError(RenderError):
    """The scene graph could not be copied into an independent tree."""
    pass
