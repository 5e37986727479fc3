"""In-memory representation of the markup tree, geometry and drawing calls."""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union

from markup_renderer.utils.units import is_numeric, num

AttributeValue = Union[str, int, float, bool]

TEXT_RUN = "text-run"


@dataclass(slots=True)
class Node:
    """Element of the markup tree; ``text`` is only set on text runs."""

    name: str
    attributes: Dict[str, AttributeValue] = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)
    text: Optional[str] = None

    @classmethod
    def text_run(cls, text: str) -> "Node":
        return cls(name=TEXT_RUN, text=text)

    @property
    def is_text(self) -> bool:
        return self.name == TEXT_RUN

    @property
    def text_content(self) -> str:
        """Own text for a run, otherwise the direct text-run children joined."""
        if self.is_text:
            return self.text or ""
        return "".join(child.text or "" for child in self.children if child.is_text)

    def children_named(self, name: str) -> List["Node"]:
        return [child for child in self.children if child.name == name]

    def first_child(self, name: str) -> Optional["Node"]:
        for child in self.children:
            if child.name == name:
                return child
        return None

    def iter_elements(self) -> Iterator["Node"]:
        """Yield element children, skipping text runs."""
        return (child for child in self.children if not child.is_text)


@dataclass(slots=True)
class Margins:
    """Page margins in points."""

    top: float = 0.0
    left: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    @classmethod
    def from_mapping(cls, values: Mapping[str, object], fallback: Optional["Margins"] = None) -> "Margins":
        base = fallback or cls()
        resolved = {}
        for edge in ("top", "left", "right", "bottom"):
            value = values.get(edge)
            resolved[edge] = num(value) if is_numeric(value) else getattr(base, edge)
        return cls(**resolved)


@dataclass(slots=True)
class Box:
    """Resolved geometry of a tag in page coordinates.

    ``left`` and ``right`` are distances from the page edges; ``None`` marks a
    value that is only known after the children are laid out.
    """

    top: float
    left: float
    right: float
    width: Optional[float] = None
    height: Optional[float] = None
    bottom: Optional[float] = None


# Markup attribute -> (TextStyle field, coercion)
STYLE_KEYS: Dict[str, Tuple[str, type]] = {
    "color": ("color", str),
    "font": ("font", str),
    "size": ("size", float),
    "underline": ("underline", bool),
    "strike": ("strike", bool),
    "align": ("align", str),
    "lineGap": ("line_gap", float),
    "paragraphGap": ("paragraph_gap", float),
    "pre": ("pre", bool),
    "trim": ("trim", bool),
}


@dataclass(slots=True)
class TextStyle:
    """Text style inherited down the tree."""

    color: Optional[str] = None
    font: Optional[str] = None
    size: Optional[float] = None
    underline: bool = False
    strike: bool = False
    align: Optional[str] = None
    line_gap: float = 0.0
    paragraph_gap: float = 0.0
    pre: bool = False
    trim: bool = False
    link: Optional[str] = None

    def copy(self) -> "TextStyle":
        return copy.deepcopy(self)

    def apply(self, options: Mapping[str, object]) -> None:
        """Take over the text-style keys set in a resolved option set."""
        for key, (attr, kind) in STYLE_KEYS.items():
            value = options.get(key)
            if value is None:
                continue
            if kind is float:
                if is_numeric(value):
                    setattr(self, attr, num(value))
            elif kind is bool:
                setattr(self, attr, bool(value))
            else:
                setattr(self, attr, str(value))


@dataclass(slots=True)
class ColumnContext:
    """Progress of the columns laid out inside a row."""

    row_top: float
    next_column_left: float
    row_bottom: float = 0.0


@dataclass(slots=True)
class PageOptions:
    """Page setup handed to the canvas when a page is created."""

    size: object = "A4"
    layout: str = "portrait"
    margins: Margins = field(default_factory=Margins)
    compress: bool = True


@dataclass(slots=True)
class PageHandle:
    """Page created by the canvas."""

    number: int
    width: float
    height: float
    margins: Margins


@dataclass(slots=True)
class TextOptions:
    """Everything the canvas needs to draw one text run."""

    color: Optional[str] = None
    font: Optional[str] = None
    size: Optional[float] = None
    underline: bool = False
    strike: bool = False
    align: Optional[str] = None
    line_gap: float = 0.0
    paragraph_gap: float = 0.0
    link: Optional[str] = None
    continued: bool = True
    left: float = 0.0
    right: float = 0.0

    @classmethod
    def from_style(cls, style: TextStyle, *, continued: bool, left: float, right: float) -> "TextOptions":
        return cls(
            color=style.color,
            font=style.font,
            size=style.size,
            underline=style.underline,
            strike=style.strike,
            align=style.align,
            line_gap=style.line_gap,
            paragraph_gap=style.paragraph_gap,
            link=style.link,
            continued=continued,
            left=left,
            right=right,
        )


@dataclass(slots=True)
class DrawCommand:
    """A canvas call captured by the recording canvas."""

    kind: str
    args: Dict[str, object] = field(default_factory=dict)
