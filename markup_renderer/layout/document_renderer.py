"""Top-level render loop: head configuration, pages, output handle."""
from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional

from markup_renderer.config.loader import build_config, deep_merge
from markup_renderer.exceptions import CollaboratorError, MarkupRenderError
from markup_renderer.layout.tag_behaviors import TagRenderer
from markup_renderer.layout.traversal_state import TraversalState
from markup_renderer.model.document_model import RenderedDocument
from markup_renderer.model.elements import Margins, Node, PageOptions, TextStyle
from markup_renderer.parser.head_parser import configure, extract_metadata
from markup_renderer.parser.styles_parser import StyleRegistry
from markup_renderer.renderer.canvas import Canvas
from markup_renderer.renderer.pdf_renderer import ReportLabCanvas
from markup_renderer.utils.logger import get_logger
from markup_renderer.utils.units import is_numeric, num

LOGGER = get_logger(__name__)

CanvasFactory = Callable[[Mapping[str, Any]], Canvas]

PAGE_EDGES = ("top", "left", "right", "bottom")
BASE_TEXT_STYLE = "p"


def _default_canvas_factory(document: Mapping[str, Any]) -> Canvas:
    return ReportLabCanvas.from_config(document)


def suggested_filename(metadata: Mapping[str, str]) -> Optional[str]:
    """Explicit ``Filename`` metadata, else the title with a ``.pdf`` suffix."""
    if metadata.get("Filename"):
        return metadata["Filename"]
    if metadata.get("Title"):
        return metadata["Title"] + ".pdf"
    return None


class DocumentRenderer:
    """Render a ``<pdf>`` node tree onto a canvas."""

    def __init__(
        self,
        root: Node,
        options: Optional[Mapping[str, Any]] = None,
        canvas_factory: Optional[CanvasFactory] = None,
    ) -> None:
        self.config: Dict[str, Any] = build_config(options)
        self.head = root.first_child("head")
        self.pages = root.children_named("page")

        if self.head is not None:
            configure(self.config, self.head)

        self.registry = StyleRegistry(self.config)
        self._canvas_factory = canvas_factory or _default_canvas_factory
        self._tags = TagRenderer(self.registry, debug=bool(self.config.get("debug")))

    def render(self) -> RenderedDocument:
        """Lay out every page and return the finished document."""
        LOGGER.info("Rendering document with %d page(s)", len(self.pages))

        canvas = self._canvas_factory(self.config.get("document") or {})
        metadata = extract_metadata(self.head)
        state = TraversalState(canvas=canvas, path="pdf")

        try:
            canvas.set_metadata(metadata)
            for index, page in enumerate(self.pages, start=1):
                state.path = f"page({index})"
                state.style = self.base_text_style()
                self.render_page(state, page)
            content = canvas.finalize()
        except MarkupRenderError as error:
            raise error.at_path(state.path) from error
        except Exception as error:
            raise CollaboratorError(str(error), path=state.path) from error

        filename = suggested_filename(metadata)
        LOGGER.info("Rendered %d page(s)%s", len(self.pages), f" as {filename}" if filename else "")
        return RenderedDocument(content=content, filename=filename, metadata=metadata)

    def base_text_style(self) -> TextStyle:
        """Text style in effect before any tag sets its own."""
        style = TextStyle()
        style.apply(self.registry.resolve(BASE_TEXT_STYLE).values)
        return style

    def page_options(self, page: Node) -> PageOptions:
        """Merge page attributes over the document defaults."""
        options = deep_merge(self.config.get("document") or {}, page.attributes)
        margins = Margins.from_mapping(options.get("margins") or {})

        if is_numeric(options.get("margin")):
            for edge in PAGE_EDGES:
                setattr(margins, edge, num(options["margin"]))
        for edge in PAGE_EDGES:
            value = options.get("margin" + edge.capitalize())
            if is_numeric(value):
                setattr(margins, edge, num(value))

        return PageOptions(
            size=options.get("size") or "A4",
            layout=str(options.get("layout") or "portrait"),
            margins=margins,
            compress=bool(options.get("compress", True)),
        )

    def render_page(self, state: TraversalState, page: Node) -> None:
        options = self.page_options(page)
        LOGGER.debug("Page added %s %s", state.path, options)

        handle = state.canvas.new_page(options)
        state.start_page(handle)
        self._tags.render_children(state, page.children)
