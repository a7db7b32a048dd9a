"""SVG output provider."""

import xml.etree.ElementTree as ET

from .base import OutputProvider

_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


class SvgOutputProvider(OutputProvider):
    """Output provider writing the snapshot as a standalone SVG document."""

    def encode(self, markup: str) -> bytes:
        if not markup.strip():
            raise ValueError("Snapshot markup is empty; nothing was rendered")

        try:
            root = ET.fromstring(markup.strip())
        except ET.ParseError as exc:
            raise ValueError(f"Snapshot markup is not a single XML document: {exc}") from exc
        if root.tag not in ("svg", "{http://www.w3.org/2000/svg}svg"):
            raise ValueError(
                "SVG output only supports snapshots with a single <svg> root "
                f"(got <{root.tag}>)"
            )
        return (_XML_DECLARATION + markup.strip() + "\n").encode("utf-8")
