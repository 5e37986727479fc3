"""Common helpers shared by canvas implementations."""
from __future__ import annotations

from typing import Iterable, Optional, Tuple

from reportlab.lib import colors
from reportlab.lib.colors import Color, HexColor
from reportlab.lib import pagesizes

from markup_renderer.exceptions import ConfigurationError
from markup_renderer.utils.units import num

DEFAULT_COLOR = "#000000"


def normalize_hex(value: str) -> str:
    """Expand ``#rgb`` shorthand to ``#rrggbb``."""
    token = value.strip()
    if token.startswith("#") and len(token) == 4:
        return "#" + "".join(ch * 2 for ch in token[1:])
    return token


def to_color(value: Optional[object], fallback: str = DEFAULT_COLOR) -> Color:
    """Convert a hex string or color name into a ReportLab color."""
    token = str(value or "").strip()
    if not token:
        return HexColor(fallback)
    if token.startswith("#"):
        try:
            return HexColor(normalize_hex(token))
        except (TypeError, ValueError):
            return HexColor(fallback)
    named = colors.getAllNamedColors().get(token.lower())
    if named is not None:
        return named
    return HexColor(fallback)


def page_dimensions(size: object, layout: Optional[str] = None) -> Tuple[float, float]:
    """Return ``(width, height)`` for a named page size or a ``[width, height]`` pair."""
    if isinstance(size, str):
        preset = getattr(pagesizes, size.upper(), None)
        if not isinstance(preset, tuple):
            raise ConfigurationError(f"Unsupported page size: {size}")
        width, height = float(preset[0]), float(preset[1])
    elif isinstance(size, Iterable):
        values = list(size)
        if len(values) != 2:
            raise ConfigurationError("Page size must contain exactly two values")
        width, height = num(values[0]), num(values[1])
    else:
        width, height = float(pagesizes.A4[0]), float(pagesizes.A4[1])

    if layout == "landscape" and width < height:
        width, height = height, width
    return width, height
