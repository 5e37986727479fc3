"""Canvas that draws onto a PDF document using ReportLab."""
from __future__ import annotations

import io
import os
import re
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Set, Tuple

from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas as pdfcanvas

from markup_renderer.exceptions import CollaboratorError
from markup_renderer.model.elements import PageHandle, PageOptions, TextOptions
from markup_renderer.renderer.canvas import Canvas
from markup_renderer.renderer.utils import page_dimensions, to_color
from markup_renderer.utils.logger import get_logger
from markup_renderer.utils.paths import FONT_EXTENSIONS, is_font_path

LOGGER = get_logger(__name__)

DEFAULT_FONT = "Helvetica"
DEFAULT_FONT_SIZE = 12.0
DEFAULT_LINE_WIDTH = 1.0
UNDERLINE_OFFSET = 0.12
STRIKE_OFFSET = 0.3

_TOKENS = re.compile(r"\s+|\S+")

METADATA_SETTERS = {
    "Title": "setTitle",
    "Author": "setAuthor",
    "Subject": "setSubject",
    "Keywords": "setKeywords",
    "Creator": "setCreator",
    "Producer": "setProducer",
}


@dataclass(slots=True)
class _Fragment:
    """Piece of a line waiting to be drawn; ``y`` is the top of the line."""

    text: str
    x: float
    y: float
    width: float
    ascent: float
    font: str
    size: float
    right: float
    options: TextOptions


class ReportLabCanvas(Canvas):
    """Paginated canvas backed by ``reportlab.pdfgen.canvas.Canvas``.

    Text is collected line by line so a finished line can be shifted for
    ``center`` and ``right`` alignment before it is drawn. Coordinates come
    in top-down and are flipped against the current page height.
    """

    def __init__(self, compress: bool = True) -> None:
        self._buffer = io.BytesIO()
        self._pdf = pdfcanvas.Canvas(self._buffer, pageCompression=1 if compress else 0)
        self._page: Optional[PageHandle] = None
        self._page_options: Optional[PageOptions] = None
        self._line: List[_Fragment] = []
        self._fonts: Set[str] = set()

    @classmethod
    def from_config(cls, document: Mapping[str, Any]) -> "ReportLabCanvas":
        return cls(compress=bool(document.get("compress", True)))

    # ------------------------------------------------------------------
    # Pages
    def new_page(self, options: PageOptions) -> PageHandle:
        self._flush_line()
        if self._page is not None:
            self._pdf.showPage()

        width, height = page_dimensions(options.size, options.layout)
        self._pdf.setPageSize((width, height))
        number = self._page.number + 1 if self._page else 1
        self._page = PageHandle(number=number, width=width, height=height, margins=options.margins)
        self._page_options = options
        LOGGER.debug("Started PDF page %d (%.1f x %.1f)", number, width, height)
        return self._page

    # ------------------------------------------------------------------
    # Text
    def draw_text(self, text: str, x: float, y: float, options: TextOptions) -> Tuple[float, float]:
        font = self._font_name(options.font)
        size = options.size or DEFAULT_FONT_SIZE
        ascent, descent = pdfmetrics.getAscentDescent(font, size)
        line_height = ascent - descent + (options.line_gap or 0.0)
        right = options.right if options.right > options.left else self._page_width()

        lines = text.split("\n")
        for index, chunk in enumerate(lines):
            if index:
                self._flush_line()
                x = options.left
                y += line_height + (options.paragraph_gap or 0.0)
            x, y = self._place(chunk, x, y, options, font, size, ascent, line_height, right)

        if not options.continued:
            self._flush_line()
            if lines[-1]:
                y += line_height
            return options.left, y
        return x, y

    def _place(
        self,
        chunk: str,
        x: float,
        y: float,
        options: TextOptions,
        font: str,
        size: float,
        ascent: float,
        line_height: float,
        right: float,
    ) -> Tuple[float, float]:
        for token in _TOKENS.findall(chunk):
            width = pdfmetrics.stringWidth(token, font, size)
            blank = token.isspace()
            if not blank and x + width > right and x > options.left:
                self._flush_line()
                x = options.left
                y += line_height
            if blank and x <= options.left and not self._line:
                continue
            if self._line and self._line[0].y != y:
                self._flush_line()
            if not self._line:
                y = self._fit_line(y, line_height)
            self._append(token, x, y, width, ascent, font, size, right, options)
            x += width
        return x, y

    def _fit_line(self, y: float, line_height: float) -> float:
        """Move a line that would cross the bottom margin onto a fresh page."""
        page = self._page
        if page is None or self._page_options is None:
            return y
        if y + line_height <= page.height - page.margins.bottom or y <= page.margins.top:
            return y
        LOGGER.debug("Text overflows page %d at y=%.1f", page.number, y)
        return self.new_page(self._page_options).margins.top

    def _append(
        self,
        token: str,
        x: float,
        y: float,
        width: float,
        ascent: float,
        font: str,
        size: float,
        right: float,
        options: TextOptions,
    ) -> None:
        last = self._line[-1] if self._line else None
        if last is not None and last.options is options and last.y == y:
            last.text += token
            last.width += width
            return
        self._line.append(_Fragment(token, x, y, width, ascent, font, size, right, options))

    def _flush_line(self) -> None:
        if not self._line:
            return
        fragments, self._line = self._line, []

        while fragments and fragments[-1].text.isspace():
            fragments.pop()
        if not fragments:
            return

        last = fragments[-1]
        end = last.x + last.width
        align = last.options.align
        shift = 0.0
        if align == "center":
            shift = (last.right - end) / 2
        elif align == "right":
            shift = last.right - end

        top = fragments[0].y
        baseline_ascent = max(fragment.ascent for fragment in fragments)
        baseline = self._page_height() - top - baseline_ascent
        for fragment in fragments:
            self._draw_fragment(fragment, fragment.x + shift, baseline)

    def _draw_fragment(self, fragment: _Fragment, x: float, baseline: float) -> None:
        options = fragment.options
        color = to_color(options.color)
        width = pdfmetrics.stringWidth(fragment.text.rstrip(), fragment.font, fragment.size)

        self._pdf.setFillColor(color)
        self._pdf.setFont(fragment.font, fragment.size)
        self._pdf.drawString(x, baseline, fragment.text)

        if options.underline or options.strike:
            self._pdf.setStrokeColor(color)
            self._pdf.setLineWidth(max(fragment.size / 18.0, 0.5))
            if options.underline:
                offset = baseline - fragment.size * UNDERLINE_OFFSET
                self._pdf.line(x, offset, x + width, offset)
            if options.strike:
                offset = baseline + fragment.size * STRIKE_OFFSET
                self._pdf.line(x, offset, x + width, offset)

        if options.link:
            rect = (x, baseline - fragment.size * UNDERLINE_OFFSET, x + fragment.width, baseline + fragment.ascent)
            self._pdf.linkURL(options.link, rect, relative=0)

    # ------------------------------------------------------------------
    # Shapes and images
    def fill_rect(self, x: float, y: float, width: float, height: float, color: Optional[str]) -> None:
        self._pdf.saveState()
        self._pdf.setFillColor(to_color(color))
        self._pdf.rect(x, self._page_height() - y - height, width, height, fill=1, stroke=0)
        self._pdf.restoreState()

    def stroke_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        line_width: Optional[float] = None,
        color: Optional[str] = None,
    ) -> None:
        self._pdf.saveState()
        self._pdf.setStrokeColor(to_color(color))
        self._pdf.setLineWidth(line_width or DEFAULT_LINE_WIDTH)
        self._pdf.rect(x, self._page_height() - y - height, width, height, fill=0, stroke=1)
        self._pdf.restoreState()

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
        try:
            reader = ImageReader(path)
            natural_width, natural_height = reader.getSize()
        except Exception as exc:
            raise CollaboratorError(f"Cannot load image {path}: {exc}") from exc

        drawn_width, drawn_height = image_size(natural_width, natural_height, width, height, fit, scale)
        LOGGER.debug("Image %s drawn at %.1fx%.1f", path, drawn_width, drawn_height)
        self._pdf.drawImage(
            reader,
            x,
            self._page_height() - y - drawn_height,
            width=drawn_width,
            height=drawn_height,
            mask="auto",
        )
        return drawn_width, drawn_height

    # ------------------------------------------------------------------
    # Document
    def set_metadata(self, info: Mapping[str, str]) -> None:
        for key, value in info.items():
            setter = METADATA_SETTERS.get(key)
            if setter and value:
                getattr(self._pdf, setter)(value)

    def finalize(self) -> bytes:
        self._flush_line()
        self._pdf.save()
        return self._buffer.getvalue()

    # ------------------------------------------------------------------
    # Helpers
    def _page_width(self) -> float:
        return self._page.width if self._page else float(self._pdf._pagesize[0])

    def _page_height(self) -> float:
        return self._page.height if self._page else float(self._pdf._pagesize[1])

    def _font_name(self, font: Optional[str]) -> str:
        """Return a registered font name, registering TrueType files on first use."""
        if not font:
            return DEFAULT_FONT
        if font in self._fonts:
            return font

        if is_font_path(font):
            path = _font_file(font)
            if path is None:
                raise CollaboratorError(f"Font file not found: {font}")
            try:
                pdfmetrics.registerFont(TTFont(font, path))
            except Exception as exc:
                raise CollaboratorError(f"Cannot register font {path}: {exc}") from exc
            LOGGER.debug("Registered font %s from %s", font, path)
        else:
            try:
                pdfmetrics.getFont(font)
            except Exception as exc:
                raise CollaboratorError(f"Unknown font {font}") from exc

        self._fonts.add(font)
        return font


def _font_file(font: str) -> Optional[str]:
    candidates = [font] + [font + extension for extension in FONT_EXTENSIONS]
    for candidate in candidates:
        if os.path.isfile(candidate):
            return candidate
    return None


def image_size(
    natural_width: float,
    natural_height: float,
    width: Optional[float],
    height: Optional[float],
    fit: Optional[Sequence[float]],
    scale: Optional[float],
) -> Tuple[float, float]:
    """Size an image the way the requested options ask for, keeping its ratio."""
    if fit:
        factor = min(fit[0] / natural_width, fit[1] / natural_height) if natural_width and natural_height else 1.0
        return natural_width * factor, natural_height * factor
    if width and height:
        return width, height
    if width:
        return width, (natural_height * width / natural_width if natural_width else 0.0)
    if height:
        return (natural_width * height / natural_height if natural_height else 0.0), height
    factor = scale or 1.0
    return natural_width * factor, natural_height * factor
