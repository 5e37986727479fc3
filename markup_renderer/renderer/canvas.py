"""Drawing surface the layout core issues its commands against."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping, Optional, Sequence, Tuple

from markup_renderer.model.elements import PageHandle, PageOptions, TextOptions


class Canvas(ABC):
    """Interface for paginated drawing back ends.

    Coordinates are in points with the origin at the top-left corner of the
    current page.
    """

    @abstractmethod
    def new_page(self, options: PageOptions) -> PageHandle:
        """Start a new page and return its dimensions and margins."""

    @abstractmethod
    def draw_text(self, text: str, x: float, y: float, options: TextOptions) -> Tuple[float, float]:
        """Draw a text run starting at ``(x, y)`` and return the cursor after it.

        Every newline ends a line. A continued run leaves the cursor behind
        its last glyph; otherwise the cursor moves to the start of the line
        below the run, so a run ending in a newline only moves down once.
        """

    @abstractmethod
    def fill_rect(self, x: float, y: float, width: float, height: float, color: Optional[str]) -> None:
        """Paint a filled rectangle."""

    @abstractmethod
    def stroke_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        line_width: Optional[float] = None,
        color: Optional[str] = None,
    ) -> None:
        """Stroke the outline of a rectangle."""

    @abstractmethod
    def draw_image(
        self,
        path: str,
        x: float,
        y: float,
        width: Optional[float] = None,
        height: Optional[float] = None,
        fit: Optional[Sequence[float]] = None,
        scale: Optional[float] = None,
    ) -> Tuple[float, float]:
        """Place an image and return the drawn width and height."""

    @abstractmethod
    def set_metadata(self, info: Mapping[str, str]) -> None:
        """Record document metadata (title, author, ...)."""

    @abstractmethod
    def finalize(self) -> bytes:
        """Finish the document and return its serialized content."""
