"""Read configuration overrides and metadata from the document head."""
from __future__ import annotations

from typing import Any, Dict, MutableMapping, Optional

from markup_renderer.model.elements import Node
from markup_renderer.utils.logger import get_logger

LOGGER = get_logger(__name__)


def configure(root: MutableMapping[str, Any], node: Node) -> None:
    """Merge a head element tree into a configuration mapping.

    Attributes of ``node`` update ``root``; every element child configures
    the entry named after it, which is created when missing.
    """
    if node.attributes:
        LOGGER.debug("Configure %s %s", node.name, node.attributes)
        root.update(node.attributes)
    for child in node.iter_elements():
        entry = root.get(child.name)
        if not isinstance(entry, MutableMapping):
            entry = root[child.name] = {}
        configure(entry, child)


def extract_metadata(head: Optional[Node]) -> Dict[str, str]:
    """Collect document metadata from ``title``, ``filename`` and ``meta`` tags."""
    info: Dict[str, str] = {}
    if head is None:
        return info

    for title in head.children_named("title"):
        info["Title"] = title.text_content
    for filename in head.children_named("filename"):
        info["Filename"] = filename.text_content
    for meta in head.children_named("meta"):
        for item in meta.iter_elements():
            key = item.name[:1].upper() + item.name[1:]
            info[key] = item.text_content

    LOGGER.debug("Meta data %s", info)
    return info
