"""Synthetic document environment that render containers are mounted into."""

import xml.etree.ElementTree as ET
from typing import Protocol


class HostEnvironment(Protocol):
    """Document-tree capabilities the orchestrator needs from its host."""

    body: ET.Element

    def create_element(self, tag: str, attrib: dict[str, str] | None = None) -> ET.Element:
        ...

    def append_to_body(self, element: ET.Element) -> None:
        ...

    def inner_markup(self, element: ET.Element) -> str:
        ...


class EtreeHostEnvironment:
    """Minimal ``<html><body>`` document backed by ElementTree."""

    def __init__(self):
        self.document = ET.Element("html")
        self.body = ET.SubElement(self.document, "body")

    def create_element(self, tag: str, attrib: dict[str, str] | None = None) -> ET.Element:
        return ET.Element(tag, attrib or {})

    def append_to_body(self, element: ET.Element) -> None:
        self.body.append(element)

    def inner_markup(self, element: ET.Element) -> str:
        """Serialize the children of ``element`` (its inner HTML)."""
        parts = [element.text or ""]
        parts.extend(ET.tostring(child, encoding="unicode") for child in element)
        return "".join(parts)
