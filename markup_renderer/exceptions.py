"""Error taxonomy for markup rendering."""
from __future__ import annotations

import copy
from typing import Optional


class MarkupRenderError(Exception):
    """Base error; carries the structural path of the node being rendered."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def at_path(self, path: str) -> "MarkupRenderError":
        """Return a copy of this error attributed to ``path``."""
        located = type(self).__new__(type(self))
        located.args = self.args
        located.__dict__.update(copy.copy(self.__dict__))
        located.path = path
        return located

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class ConfigurationError(MarkupRenderError):
    """Configuration or document error, such as a bad style reference."""


class StyleNotFoundError(ConfigurationError):
    """A referenced style name has no registered definition."""

    def __init__(self, style_name: str, path: Optional[str] = None) -> None:
        super().__init__(f"Style not found for {style_name}", path)
        self.style_name = style_name


class StructuralError(ConfigurationError):
    """A tag occurs outside the scope it requires."""


class CollaboratorError(MarkupRenderError):
    """The canvas or one of its resources (font, image) failed."""


class MarkupParseError(MarkupRenderError):
    """Markup could not be turned into a node tree."""
