"""Canvas that records drawing commands instead of producing a PDF."""
from __future__ import annotations

import json
from dataclasses import asdict
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from markup_renderer.model.elements import DrawCommand, PageHandle, PageOptions, TextOptions
from markup_renderer.renderer.canvas import Canvas
from markup_renderer.renderer.utils import page_dimensions

DEFAULT_FONT_SIZE = 12.0
CHAR_WIDTH_RATIO = 0.5


class RecordingCanvas(Canvas):
    """Deterministic canvas used for previews, debugging and tests.

    Text metrics are fixed: every character advances ``0.5 * size`` and a
    line is ``size + line_gap`` high. Image sizes come from the requested
    dimensions or from ``image_sizes``.
    """

    def __init__(self, image_sizes: Optional[Mapping[str, Tuple[float, float]]] = None) -> None:
        self.commands: List[DrawCommand] = []
        self.pages: List[PageHandle] = []
        self.metadata: Dict[str, str] = {}
        self._image_sizes = dict(image_sizes or {})

    # ------------------------------------------------------------------
    # Canvas API
    def new_page(self, options: PageOptions) -> PageHandle:
        width, height = page_dimensions(options.size, options.layout)
        page = PageHandle(number=len(self.pages) + 1, width=width, height=height, margins=options.margins)
        self.pages.append(page)
        self._record("new_page", number=page.number, width=width, height=height, margins=asdict(options.margins))
        return page

    def draw_text(self, text: str, x: float, y: float, options: TextOptions) -> Tuple[float, float]:
        self._record("draw_text", text=text, x=x, y=y, **asdict(options))
        size = options.size or DEFAULT_FONT_SIZE
        line_height = size + (options.line_gap or 0.0)

        lines = text.split("\n")
        if len(lines) > 1:
            y += line_height * (len(lines) - 1)
            x = options.left
        x += len(lines[-1]) * size * CHAR_WIDTH_RATIO

        if not options.continued:
            if lines[-1]:
                y += line_height
            return options.left, y
        return x, y

    def fill_rect(self, x: float, y: float, width: float, height: float, color: Optional[str]) -> None:
        self._record("fill_rect", x=x, y=y, width=width, height=height, color=color)

    def stroke_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        line_width: Optional[float] = None,
        color: Optional[str] = None,
    ) -> None:
        self._record("stroke_rect", x=x, y=y, width=width, height=height, line_width=line_width, color=color)

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
        self._record(
            "draw_image",
            path=path,
            x=x,
            y=y,
            width=width,
            height=height,
            fit=list(fit) if fit else None,
            scale=scale,
        )
        natural_width, natural_height = self._image_sizes.get(path, (0.0, 0.0))
        if fit:
            return float(fit[0]), float(fit[1])
        if width and height:
            return width, height
        if width:
            ratio = natural_height / natural_width if natural_width else 0.0
            return width, width * ratio
        if height:
            ratio = natural_width / natural_height if natural_height else 0.0
            return height * ratio, height
        factor = scale or 1.0
        return natural_width * factor, natural_height * factor

    def set_metadata(self, info: Mapping[str, str]) -> None:
        self.metadata.update(info)
        self._record("set_metadata", info=dict(info))

    def finalize(self) -> bytes:
        payload = [{"kind": command.kind, **command.args} for command in self.commands]
        return json.dumps(payload, indent=2).encode("utf-8")

    # ------------------------------------------------------------------
    # Inspection helpers
    def of_kind(self, kind: str) -> List[DrawCommand]:
        """Return the recorded commands of one kind, in order."""
        return [command for command in self.commands if command.kind == kind]

    def _record(self, kind: str, **args: object) -> None:
        self.commands.append(DrawCommand(kind=kind, args=args))
