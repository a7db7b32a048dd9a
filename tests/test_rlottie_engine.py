"""Tests for the rlottie playback engine adapter."""

import asyncio
import base64
import xml.etree.ElementTree as ET

import pytest
from PIL import Image

from lottie_frame.errors import DataLoadError, SetupError
from lottie_frame.playback import RlottieEngine, clamp_frame
from lottie_frame.render_pipeline import render


SAMPLE_DATA = {"v": "5.7.4", "fr": 30, "ip": 0, "op": 60, "w": 100, "h": 50, "layers": []}


class FakeRlottieAnimation:
    """Stands in for ``rlottie_python.LottieAnimation``."""

    def __init__(self, size=(100, 50), total_frames=60, frame_rate=30.0):
        self.size = size
        self.total_frames = total_frames
        self.frame_rate = frame_rate
        self.rendered_frames = []

    def lottie_animation_get_size(self):
        return self.size

    def lottie_animation_get_totalframe(self):
        return self.total_frames

    def lottie_animation_get_framerate(self):
        return self.frame_rate

    def render_pillow_frame(self, frame_num=0):
        self.rendered_frames.append(frame_num)
        return Image.new("RGBA", self.size, (255, 0, 0, 255))


def make_engine(animation=None):
    animation = animation or FakeRlottieAnimation()
    loaded = []

    def loader(data):
        loaded.append(data)
        return animation

    return RlottieEngine(animation_loader=loader), animation, loaded


def parse_markup(markup):
    root = ET.fromstring(markup)
    assert root.tag == "{http://www.w3.org/2000/svg}svg"
    return root


def decode_image(root):
    image = root.find("{http://www.w3.org/2000/svg}image")
    prefix, payload = image.get("href").split(",", 1)
    return prefix, base64.b64decode(payload)


@pytest.mark.parametrize(
    ("frame", "expected"),
    [(0, 0), (12, 12), (12.9, 12), (59, 59), (60, 59), (500, 59), (-3, 0)],
)
def test_clamp_frame(frame, expected):
    """Frames clamp into [0, total_frames - 1]."""
    assert clamp_frame(frame, 60) == expected


def test_clamp_frame_without_frames():
    """Animations without frames always render frame 0."""
    assert clamp_frame(10, 0) == 0


def test_renders_svg_with_embedded_png():
    """The snapshot is an svg render tree holding the frame as a PNG."""
    engine, animation, loaded = make_engine()

    markup = asyncio.run(render(SAMPLE_DATA, frame_number=12, engine=engine))

    root = parse_markup(markup)
    assert root.get("viewBox") == "0 0 100 50"
    assert root.get("preserveAspectRatio") == "xMidYMid meet"
    prefix, payload = decode_image(root)
    assert prefix == "data:image/png;base64"
    assert payload.startswith(b"\x89PNG")
    assert animation.rendered_frames == [12]
    assert '"layers": []' in loaded[0]


def test_frame_beyond_duration_renders_last_frame():
    """Requesting a frame past the end renders the last frame."""
    engine, animation, _ = make_engine()

    asyncio.run(render(SAMPLE_DATA, frame_number=500, engine=engine))

    assert animation.rendered_frames == [59]


def test_renderer_settings_shape_the_output():
    """Size, class, aspect ratio and image format settings are honoured."""
    engine, _, _ = make_engine()
    options = {
        "width": 40,
        "className": "hero",
        "preserveAspectRatio": "none",
        "imageFormat": "webp",
    }

    markup = asyncio.run(render(SAMPLE_DATA, options, 0, engine=engine))

    root = parse_markup(markup)
    assert (root.get("width"), root.get("height")) == ("40", "20")
    assert root.get("class") == "hero"
    assert root.get("preserveAspectRatio") == "none"
    prefix, payload = decode_image(root)
    assert prefix == "data:image/webp;base64"
    assert payload.startswith(b"RIFF")


def test_loader_failure_is_data_load_error():
    """Data rlottie cannot parse rejects with DataLoadError."""

    def loader(data):
        raise ValueError("not a lottie file")

    engine = RlottieEngine(animation_loader=loader)

    with pytest.raises(DataLoadError, match="not a lottie file"):
        asyncio.run(render(SAMPLE_DATA, engine=engine))


def test_empty_animation_is_data_load_error():
    """Animations without frames are reported as unloadable."""
    engine, _, _ = make_engine(FakeRlottieAnimation(total_frames=0))

    with pytest.raises(DataLoadError, match="no drawable content"):
        asyncio.run(render(SAMPLE_DATA, engine=engine))


def test_none_animation_data_is_setup_error():
    """Null scene data is rejected synchronously."""
    engine, _, _ = make_engine()

    with pytest.raises(SetupError, match="Animation data is required"):
        asyncio.run(render(None, engine=engine))


@pytest.mark.parametrize(
    "options",
    [{"imageFormat": "gif"}, {"width": -5}, {"height": "tall"}, {"width": True}],
)
def test_malformed_renderer_settings_are_setup_error(options):
    """Invalid renderer settings fail during setup."""
    engine, _, _ = make_engine()

    with pytest.raises(SetupError):
        asyncio.run(render(SAMPLE_DATA, options, engine=engine))


def test_real_rlottie_renders_a_frame():
    """The default loader renders a minimal animation end to end."""
    pytest.importorskip("rlottie_python")
    data = {
        "v": "5.7.4",
        "fr": 30,
        "ip": 0,
        "op": 10,
        "w": 32,
        "h": 32,
        "layers": [
            {
                "ty": 4,
                "ind": 1,
                "ip": 0,
                "op": 10,
                "st": 0,
                "ks": {
                    "o": {"a": 0, "k": 100},
                    "r": {"a": 0, "k": 0},
                    "p": {"a": 0, "k": [16, 16, 0]},
                    "a": {"a": 0, "k": [0, 0, 0]},
                    "s": {"a": 0, "k": [100, 100, 100]},
                },
            }
        ],
    }

    markup = asyncio.run(render(data, frame_number=3, engine=RlottieEngine(), timeout=10))

    root = parse_markup(markup)
    assert root.get("viewBox") == "0 0 32 32"
    prefix, payload = decode_image(root)
    assert payload.startswith(b"\x89PNG")
