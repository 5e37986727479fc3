"""Convert raw markup into the node tree consumed by the layout core."""
from __future__ import annotations

import math
import re
from pathlib import Path
from typing import Dict, List, Union
from xml.etree import ElementTree as ET

from markup_renderer.exceptions import MarkupParseError
from markup_renderer.model.elements import AttributeValue, Node
from markup_renderer.utils.logger import get_logger
from markup_renderer.utils.xml_utils import local_name, parse_xml

LOGGER = get_logger(__name__)

ROOT_TAG = "pdf"

_INTEGER = re.compile(r"^\s*[+-]?\d+\s*$")
_BOOLEAN = re.compile(r"^(?:true|false)$", re.IGNORECASE)


def coerce_attribute(value: str) -> AttributeValue:
    """Turn numeric strings into numbers and ``true``/``false`` into booleans."""
    if _BOOLEAN.match(value):
        return value.lower() == "true"
    if _INTEGER.match(value):
        return int(value)
    try:
        number = float(value)
    except ValueError:
        return value
    if math.isnan(number) or math.isinf(number):
        return value
    return number


class MarkupLoader:
    """Builds ``Node`` trees from ElementTree elements."""

    def load(self, source: Union[str, bytes]) -> Node:
        """Parse a whole document; the root element must be ``<pdf>``."""
        root = parse_xml(source)
        if local_name(root.tag).lower() != ROOT_TAG:
            raise MarkupParseError("Document must be wrapped in a <pdf></pdf> tag")
        tree = self._convert(root)
        LOGGER.debug("Loaded markup with %d top-level nodes", len(tree.children))
        return tree

    def _convert(self, element: ET.Element) -> Node:
        attributes: Dict[str, AttributeValue] = {
            local_name(key): coerce_attribute(value) for key, value in element.attrib.items()
        }
        children: List[Node] = []
        self._append_text(children, element.text)
        for child in element:
            children.append(self._convert(child))
            self._append_text(children, child.tail)
        return Node(name=local_name(element.tag).lower(), attributes=attributes, children=children)

    def _append_text(self, children: List[Node], text: str | None) -> None:
        if text and text.strip():
            children.append(Node.text_run(text))


def load_markup(source: Union[str, bytes]) -> Node:
    """Parse markup text into a node tree."""
    return MarkupLoader().load(source)


def load_markup_file(path: Path) -> Node:
    """Read and parse a markup file."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise MarkupParseError(f"Cannot read markup file {path}: {exc}") from exc
    return load_markup(data)
