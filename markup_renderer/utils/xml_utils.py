"""Helper functions to parse markup with ElementTree."""
from __future__ import annotations

from typing import Union
from xml.etree import ElementTree as ET

from markup_renderer.exceptions import MarkupParseError


def parse_xml(data: Union[str, bytes]) -> ET.Element:
    """Parse markup and return the root element."""
    try:
        return ET.fromstring(data)
    except ET.ParseError as exc:
        raise MarkupParseError(f"Invalid markup: {exc}") from exc


def local_name(tag: str) -> str:
    """Return a tag name without its ``{namespace}`` prefix."""
    return tag.split("}", 1)[-1] if "}" in tag else tag
