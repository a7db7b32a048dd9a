"""Drives an event-driven playback engine to a single rendered frame."""

import asyncio
import logging
import xml.etree.ElementTree as ET
from enum import Enum
from typing import Any, Callable, Mapping

from .constants import (
    CONTAINER_TAG,
    DEFAULT_FRAME,
    EVENT_CONFIG_READY,
    EVENT_DATA_FAILED,
    EVENT_DATA_READY,
    EVENT_DOM_LOADED,
    EVENT_ERROR,
)
from .errors import (
    CatastrophicCopyError,
    DataLoadError,
    EngineError,
    RenderError,
    SeekExtractionError,
    SetupError,
)
from .host import EtreeHostEnvironment, HostEnvironment
from .playback.base import AnimationInstance, LoadParams, PlaybackEngine
from .scene.sanitizer import SceneSanitizer

logger = logging.getLogger(__name__)


class RenderState(Enum):
    """Lifecycle of a single render call."""

    INITIALIZING = "initializing"
    LOADED = "loaded"
    FAILED = "failed"
    SETTLED = "settled"


class RenderSession:
    """Settle-once guard around the future of one render call."""

    def __init__(self, future: "asyncio.Future[str]"):
        self.future = future
        self.state = RenderState.INITIALIZING

    @property
    def is_closed(self) -> bool:
        return self.state in (RenderState.FAILED, RenderState.SETTLED) or self.future.done()

    def mark_loaded(self) -> None:
        self.state = RenderState.LOADED

    def resolve(self, markup: str) -> bool:
        if self.is_closed:
            return False
        self.state = RenderState.SETTLED
        self.future.set_result(markup)
        return True

    def fail(self, error: RenderError) -> bool:
        if self.is_closed:
            return False
        self.state = RenderState.FAILED
        self.future.set_exception(error)
        return True


class FrameRenderer:
    """Renders one frame of an animation to markup using an injected engine."""

    def __init__(
        self,
        engine: PlaybackEngine,
        host_factory: Callable[[], HostEnvironment] = EtreeHostEnvironment,
        sanitizer: SceneSanitizer | None = None,
    ):
        """
        Initialize the renderer.

        Args:
            engine: Playback engine used to load and seek animations
            host_factory: Builds a fresh document environment for every call
            sanitizer: Scene sanitizer; defaults to the flat asset pass
        """
        self.engine = engine
        self.host_factory = host_factory
        self.sanitizer = sanitizer or SceneSanitizer()

    async def render_frame(
        self,
        animation_data: Any,
        options: Mapping[str, Any] | None = None,
        frame_number: int | None = DEFAULT_FRAME,
    ) -> str:
        """
        Render ``frame_number`` of ``animation_data`` and return the container markup.

        The call stays pending until the engine fires a terminal event; callers
        wanting a deadline should wrap it in ``asyncio.wait_for``.

        Raises:
            CatastrophicCopyError: If the scene graph cannot be copied
            SetupError: If the container or engine cannot be initialized
            DataLoadError: If the engine cannot load the scene data
            EngineError: If the engine reports an internal error
            SeekExtractionError: If seeking or markup extraction fails
        """
        session = RenderSession(asyncio.get_running_loop().create_future())
        try:
            frame = _validate_frame_number(frame_number)
            host = self.host_factory()
            container = host.create_element(CONTAINER_TAG)
            host.append_to_body(container)

            safe_data = self.sanitizer.sanitize(animation_data)
            instance = self.engine.load_animation(
                LoadParams(
                    container=container,
                    animation_data=safe_data,
                    renderer_settings=dict(options or {}),
                )
            )
            self._register_listeners(session, instance, host, container, frame)
        except CatastrophicCopyError:
            raise
        except Exception as exc:
            logger.warning("Render setup failed: %s", exc)
            raise SetupError(f"Render setup failed: {exc}") from exc

        return await session.future

    def _register_listeners(
        self,
        session: RenderSession,
        instance: AnimationInstance,
        host: HostEnvironment,
        container: ET.Element,
        frame: int,
    ) -> None:
        def on_dom_loaded(*_: Any) -> None:
            if session.is_closed:
                logger.debug("Ignoring %s on a settled render", EVENT_DOM_LOADED)
                return
            session.mark_loaded()
            try:
                instance.go_to_and_stop(frame, True)
                markup = host.inner_markup(container)
            except Exception as exc:
                logger.warning("Seeking to frame %d failed: %s", frame, exc)
                error = SeekExtractionError(f"Failed to render frame {frame}: {exc}")
                error.__cause__ = exc
                session.fail(error)
                return
            session.resolve(markup)

        def on_data_failed(*args: Any) -> None:
            reason = args[0] if args else None
            error = DataLoadError(
                "Playback engine failed to load animation data"
                + (f": {reason}" if reason is not None else "")
            )
            if isinstance(reason, BaseException):
                error.__cause__ = reason
            if not session.fail(error):
                logger.debug("Ignoring %s on a settled render", EVENT_DATA_FAILED)

        def on_error(*args: Any) -> None:
            payload = args[0] if args else None
            error = EngineError(f"Playback engine error: {payload}", payload=payload)
            if isinstance(payload, BaseException):
                error.__cause__ = payload
            if not session.fail(error):
                logger.debug("Ignoring %s on a settled render", EVENT_ERROR)

        def on_advisory(name: str) -> Callable[..., None]:
            def log_event(*_: Any) -> None:
                logger.debug("Playback engine signalled %s", name)
            return log_event

        instance.add_event_listener(EVENT_DOM_LOADED, on_dom_loaded)
        instance.add_event_listener(EVENT_DATA_FAILED, on_data_failed)
        instance.add_event_listener(EVENT_ERROR, on_error)
        instance.add_event_listener(EVENT_CONFIG_READY, on_advisory(EVENT_CONFIG_READY))
        instance.add_event_listener(EVENT_DATA_READY, on_advisory(EVENT_DATA_READY))


def _validate_frame_number(frame_number: int | None) -> int:
    if frame_number is None:
        return DEFAULT_FRAME
    if isinstance(frame_number, bool) or not isinstance(frame_number, int):
        raise TypeError(f"Frame number must be an integer, got {frame_number!r}")
    if frame_number < 0:
        raise ValueError(f"Frame number must be non-negative, got {frame_number}")
    return frame_number
