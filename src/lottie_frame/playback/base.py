"""Contract between the render orchestrator and a playback engine."""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

from ..constants import DEFAULT_RENDERER

EventCallback = Callable[..., None]


@dataclass(frozen=True)
class LoadParams:
    """Arguments of an engine ``load_animation`` call."""

    container: ET.Element
    animation_data: Any
    renderer: str = DEFAULT_RENDERER
    loop: bool = False
    autoplay: bool = False
    renderer_settings: dict[str, Any] = field(default_factory=dict)


class AnimationInstance(Protocol):
    """A loaded animation bound to a container element."""

    def add_event_listener(self, name: str, callback: EventCallback) -> None:
        ...

    def go_to_and_stop(self, value: float, is_frame: bool = False) -> None:
        ...


class PlaybackEngine(Protocol):
    """Factory for animation instances."""

    def load_animation(self, params: LoadParams) -> AnimationInstance:
        ...
