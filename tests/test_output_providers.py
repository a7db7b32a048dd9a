"""Tests for output providers."""

import pytest

from lottie_frame.constants import INJECT_MARKER
from lottie_frame.output import (
    HtmlOutputProvider,
    MarkupInjectOutputProvider,
    SvgOutputProvider,
    create_output_provider,
    media_type_for_output_format,
    resolve_output_provider,
)
from lottie_frame.output.markup_inject_provider import inject_snippet

SNAPSHOT = '<svg xmlns="http://www.w3.org/2000/svg" width="4" height="4"><g /></svg>'


def test_svg_provider_adds_xml_declaration():
    """SvgOutputProvider should produce a standalone SVG document."""
    result = SvgOutputProvider().encode(SNAPSHOT)

    assert result.startswith(b"<?xml")
    assert SNAPSHOT.encode("utf-8") in result


def test_svg_provider_rejects_empty_markup():
    """SvgOutputProvider should refuse to write an empty snapshot."""
    with pytest.raises(ValueError, match="markup is empty"):
        SvgOutputProvider().encode("  ")


def test_svg_provider_rejects_non_svg_root():
    """SvgOutputProvider should reject snapshots that are not an svg."""
    with pytest.raises(ValueError, match="single <svg> root"):
        SvgOutputProvider().encode("<div />")


def test_svg_provider_rejects_multiple_roots():
    """SvgOutputProvider should reject markup with several top-level elements."""
    with pytest.raises(ValueError, match="not a single XML document"):
        SvgOutputProvider().encode(SNAPSHOT + SNAPSHOT)


def test_html_provider_wraps_markup():
    """HtmlOutputProvider should embed the snapshot in an HTML page."""
    result = HtmlOutputProvider(title="a < b").encode(SNAPSHOT).decode("utf-8")

    assert result.startswith("<!DOCTYPE html>")
    assert SNAPSHOT in result
    assert "<title>a &lt; b</title>" in result


def test_provider_write_requires_path():
    """Writing without an output path should fail."""
    with pytest.raises(ValueError, match="Output path not set"):
        SvgOutputProvider().write(b"data")


def test_provider_writes_file(tmp_path):
    """Providers write encoded bytes to their path."""
    path = tmp_path / "frame.svg"
    provider = SvgOutputProvider(str(path))

    provider.write(provider.encode(SNAPSHOT))

    assert path.read_bytes().startswith(b"<?xml")


def test_inject_provider_creates_new_file(tmp_path):
    """Injection into a missing file creates it with the markup."""
    path = tmp_path / "README.md"
    provider = MarkupInjectOutputProvider(str(path))

    provider.write(provider.encode("<svg>\n  <g />\n</svg>"))

    assert path.read_text() == "<svg> <g /> </svg>\n"


def test_inject_provider_replaces_marker_line(tmp_path):
    """Injection replaces the line holding the marker."""
    path = tmp_path / "README.md"
    path.write_text(f"# Title\n{INJECT_MARKER}\nfooter\n")
    provider = MarkupInjectOutputProvider(str(path))

    provider.write(provider.encode(SNAPSHOT))

    assert path.read_text() == f"# Title\n{SNAPSHOT}\nfooter\n"


def test_inject_provider_appends_without_marker(tmp_path):
    """Without a marker the markup is appended on its own line."""
    path = tmp_path / "README.md"
    path.write_text("# Title")
    provider = MarkupInjectOutputProvider(str(path))

    provider.write(provider.encode(SNAPSHOT))

    assert path.read_text() == f"# Title\n{SNAPSHOT}\n"


def test_resolve_svg_provider():
    """resolve_output_provider should return SvgOutputProvider for .svg files."""
    provider = resolve_output_provider("frame.svg")

    assert isinstance(provider, SvgOutputProvider)
    assert provider.path == "frame.svg"


@pytest.mark.parametrize("path", ["frame.html", "frame.htm", "FRAME.HTML"])
def test_resolve_html_provider(path):
    """resolve_output_provider should return HtmlOutputProvider for HTML files."""
    assert isinstance(resolve_output_provider(path), HtmlOutputProvider)


def test_resolve_unsupported_format():
    """resolve_output_provider should raise ValueError for unsupported formats."""
    with pytest.raises(ValueError, match="Unsupported output format"):
        resolve_output_provider("frame.png")


def test_create_provider_by_format_name():
    """Providers and media types resolve from format names."""
    assert isinstance(create_output_provider("SVG"), SvgOutputProvider)
    assert media_type_for_output_format("html") == "text/html"
    with pytest.raises(ValueError, match="Invalid format"):
        create_output_provider("gif")


def test_inject_snippet_replaces_first_marker_only():
    """Only the first marker line is replaced."""
    content = f"a\n{INJECT_MARKER}\nb\n{INJECT_MARKER}\n"

    result = inject_snippet(content, "<svg />")

    assert result == f"a\n<svg />\nb\n{INJECT_MARKER}\n"


def test_inject_snippet_into_empty_content():
    """Empty content becomes the snippet alone."""
    assert inject_snippet("", "<svg />") == "<svg />\n"
