"""Shared render entry points used by the CLI and web app."""

import asyncio
from typing import Any, Mapping

from .constants import DEFAULT_FRAME
from .orchestrator import FrameRenderer
from .output import resolve_output_provider
from .output.base import OutputProvider
from .playback.base import PlaybackEngine
from .playback.rlottie_engine import RlottieEngine


async def render(
    animation_data: Any,
    options: Mapping[str, Any] | None = None,
    frame_number: int | None = DEFAULT_FRAME,
    *,
    engine: PlaybackEngine | None = None,
    timeout: float | None = None,
) -> str:
    """
    Render one frame of a raw scene graph to markup.

    Args:
        animation_data: Unsanitized scene-graph document
        options: Renderer settings forwarded to the engine
        frame_number: Frame index to render, defaults to 0
        engine: Playback engine, defaults to :class:`RlottieEngine`
        timeout: Seconds to wait before giving up; ``None`` waits forever

    Raises:
        RenderError: One of its subclasses when rendering fails
        asyncio.TimeoutError: If ``timeout`` elapses first
    """
    renderer = FrameRenderer(engine or RlottieEngine())
    pending = renderer.render_frame(animation_data, options, frame_number)
    if timeout is None:
        return await pending
    return await asyncio.wait_for(pending, timeout)


def render_sync(
    animation_data: Any,
    options: Mapping[str, Any] | None = None,
    frame_number: int | None = DEFAULT_FRAME,
    *,
    engine: PlaybackEngine | None = None,
    timeout: float | None = None,
) -> str:
    """Blocking variant of :func:`render` for code without an event loop."""
    return asyncio.run(
        render(animation_data, options, frame_number, engine=engine, timeout=timeout)
    )


async def encode_snapshot(
    animation_data: Any,
    output_path: str,
    *,
    frame_number: int | None = DEFAULT_FRAME,
    options: Mapping[str, Any] | None = None,
    timeout: float | None = None,
    provider: OutputProvider | None = None,
    engine: PlaybackEngine | None = None,
) -> bytes:
    """Render a frame and encode it for the given output path or provider."""
    target_provider = provider or resolve_output_provider(output_path)
    markup = await render(
        animation_data, options, frame_number, engine=engine, timeout=timeout
    )
    return target_provider.encode(markup)
