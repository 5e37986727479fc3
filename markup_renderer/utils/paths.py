"""Helpers for telling file references apart from registered names."""
from __future__ import annotations

import os

FONT_EXTENSIONS = (".ttf", ".otf")


def is_font_path(font: str) -> bool:
    """True when a font value names a file instead of a registered font."""
    return os.sep in font or "/" in font or font.lower().endswith(FONT_EXTENSIONS)
