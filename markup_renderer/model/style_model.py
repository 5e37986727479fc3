"""Style model captures named style definitions and resolved tag options."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional

from markup_renderer.exceptions import StyleNotFoundError
from markup_renderer.utils.units import num

UNIVERSAL_STYLE = "*"


class Behavior(Enum):
    """Layout behaviors a tag can be rendered with."""

    GENERIC = "generic"
    HR = "hr"
    IMG = "img"
    INDENT = "indent"
    ROW = "row"
    COLUMN = "column"
    LINK = "a"

    @classmethod
    def for_style(cls, name: str) -> Optional["Behavior"]:
        """Return the specialized behavior a style name selects, if any."""
        return _BEHAVIORS_BY_NAME.get(name)


_BEHAVIORS_BY_NAME: Dict[str, Behavior] = {
    behavior.value: behavior for behavior in Behavior if behavior is not Behavior.GENERIC
}


@dataclass(slots=True)
class StyleDefinition:
    """A named style: normalized properties plus an optional parent style."""

    name: str
    properties: Dict[str, object] = field(default_factory=dict)
    extends: Optional[str] = None


class StylesCatalog:
    """Collection of style definitions keyed by name."""

    def __init__(self, styles: Mapping[str, StyleDefinition]):
        self._styles = dict(styles)

    def get(self, name: Optional[str]) -> Optional[StyleDefinition]:
        """Return the style definition given its name."""
        if name is None:
            return None
        return self._styles.get(name)

    def require(self, name: str) -> StyleDefinition:
        """Return the style definition or raise ``StyleNotFoundError``."""
        style = self.get(name)
        if style is None:
            raise StyleNotFoundError(name)
        return style

    def names(self) -> List[str]:
        return list(self._styles)


@dataclass(slots=True)
class ResolvedOptions:
    """Fully cascaded options of one tag occurrence."""

    values: Dict[str, object]
    behavior: Behavior = Behavior.GENERIC
    chain: List[str] = field(default_factory=list)

    def __getitem__(self, key: str) -> object:
        return self.values[key]

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def get(self, key: str, default: object = None) -> object:
        return self.values.get(key, default)

    def number(self, key: str, default: float = 0.0) -> float:
        return num(self.values.get(key), default)

    @property
    def display(self) -> str:
        return str(self.values.get("display") or "inline")

    @property
    def is_block(self) -> bool:
        return self.display == "block"
