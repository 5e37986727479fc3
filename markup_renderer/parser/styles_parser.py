"""Build the style registry from configuration and cascade tag options."""
from __future__ import annotations

import os
from typing import Any, Dict, List, Mapping, Optional

from markup_renderer.model.style_model import (
    UNIVERSAL_STYLE,
    Behavior,
    ResolvedOptions,
    StyleDefinition,
    StylesCatalog,
)
from markup_renderer.utils.logger import get_logger
from markup_renderer.utils.paths import is_font_path
from markup_renderer.utils.units import is_numeric, num

LOGGER = get_logger(__name__)

EDGE_SUFFIXES = ("Top", "Left", "Right", "Bottom")
EDGE_SHORTHANDS = ("padding", "margin")


class StylesParser:
    """Turn the ``styles`` configuration block into a catalog of definitions."""

    def __init__(self, styles: Mapping[str, Mapping[str, Any]], registry: "StyleRegistry") -> None:
        self._styles = styles
        self._registry = registry

    def parse(self) -> StylesCatalog:
        """Normalize every configured style and return the catalog."""
        definitions: Dict[str, StyleDefinition] = {}
        for name, raw in self._styles.items():
            properties = dict(raw or {})
            extends = properties.pop("extends", None)
            definitions[name] = StyleDefinition(
                name=name,
                properties=self._registry.normalize(properties),
                extends=str(extends) if extends else None,
            )
        LOGGER.debug("Parsed %d style definitions", len(definitions))
        return StylesCatalog(definitions)


class StyleRegistry:
    """Named styles with single-parent inheritance plus alias tables."""

    def __init__(self, config: Mapping[str, Any]) -> None:
        self._colors: Dict[str, Any] = dict(config.get("colors") or {})
        self._fonts: Dict[str, Any] = dict(config.get("fonts") or {})
        self._base_path = str(config.get("basePath") or ".")
        self._catalog = StylesParser(config.get("styles") or {}, self).parse()

    @property
    def catalog(self) -> StylesCatalog:
        return self._catalog

    @property
    def base_path(self) -> str:
        return self._base_path

    def resolve_path(self, relative: str) -> str:
        """Resolve a file reference against the configured base path."""
        return os.path.abspath(os.path.join(self._base_path, relative))

    # ------------------------------------------------------------------
    # Normalization
    def normalize(self, options: Mapping[str, Any]) -> Dict[str, Any]:
        """Return a copy of ``options`` with aliases substituted and edges expanded."""
        cleaned = dict(options)
        for key in ("color", "backgroundColor"):
            if cleaned.get(key):
                cleaned[key] = self._colors.get(str(cleaned[key])) or cleaned[key]
        if cleaned.get("font"):
            font = self._fonts.get(str(cleaned["font"])) or cleaned["font"]
            if is_font_path(str(font)):
                font = self.resolve_path(str(font))
            cleaned["font"] = font
        for shorthand in EDGE_SHORTHANDS:
            self._expand_edges(cleaned, shorthand)
        return cleaned

    def _expand_edges(self, options: Dict[str, Any], key: str) -> None:
        if not is_numeric(options.get(key)):
            return
        fallback = num(options[key])
        for suffix in EDGE_SUFFIXES:
            edge = key + suffix
            options[edge] = num(options.get(edge), fallback)
        del options[key]

    # ------------------------------------------------------------------
    # Cascade
    def resolve(self, tag_name: str, inline_options: Optional[Mapping[str, Any]] = None) -> ResolvedOptions:
        """Cascade inline options, the named style, the tag style and ``*``.

        Keys already present win over anything merged later. Every name is
        visited at most once per resolution, so ``extends`` cycles terminate.
        """
        values = self.normalize(inline_options or {})
        visited: List[str] = []

        if values.get("style"):
            self._merge_chain(str(values["style"]), values, visited)
        self._merge_chain(tag_name, values, visited)
        self._merge_chain(UNIVERSAL_STYLE, values, visited)

        behavior = self._behavior(values, visited)

        LOGGER.debug("Resolved %s through %s as %s", tag_name, visited, behavior.name)
        return ResolvedOptions(values=values, behavior=behavior, chain=visited)

    @staticmethod
    def _behavior(values: Mapping[str, Any], visited: List[str]) -> Behavior:
        """An explicit ``behaviour`` option wins over the names in the chain."""
        explicit = values.get("behaviour")
        if explicit:
            return Behavior.for_style(str(explicit)) or Behavior.GENERIC
        for name in visited:
            candidate = Behavior.for_style(name)
            if candidate is not None:
                return candidate
        return Behavior.GENERIC

    def _merge_chain(self, name: Optional[str], values: Dict[str, Any], visited: List[str]) -> None:
        while name is not None and name not in visited:
            visited.append(name)
            style = self._catalog.require(name)
            for key, value in style.properties.items():
                if key not in values:
                    values[key] = value
            name = style.extends
