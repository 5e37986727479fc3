"""Entry-point for the markup renderer pipeline."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from markup_renderer.config.loader import load_config_file
from markup_renderer.exceptions import MarkupRenderError
from markup_renderer.layout.document_renderer import CanvasFactory, DocumentRenderer
from markup_renderer.model.document_model import RenderedDocument
from markup_renderer.model.elements import Node
from markup_renderer.parser.markup_loader import load_markup
from markup_renderer.renderer.html_renderer import HtmlRenderer
from markup_renderer.renderer.recording_canvas import RecordingCanvas
from markup_renderer.utils.debug import DebugDumper
from markup_renderer.utils.logger import get_logger, set_verbosity

LOGGER = get_logger(__name__)

DEFAULT_FILENAME = "document.pdf"


def _options_with_base(options: Optional[Mapping[str, Any]], base_path: Union[str, Path]) -> Dict[str, Any]:
    merged = dict(options or {})
    merged.setdefault("basePath", str(base_path))
    return merged


def render_markup(
    markup: Union[str, bytes, Node],
    base_path: Union[str, Path] = ".",
    options: Optional[Mapping[str, Any]] = None,
    canvas_factory: Optional[CanvasFactory] = None,
) -> RenderedDocument:
    """Parse markup (or take a ready node tree) and render it.

    Relative font and image references resolve against ``base_path`` unless
    ``options`` already carries a ``basePath``.
    """
    tree = markup if isinstance(markup, Node) else load_markup(markup)
    renderer = DocumentRenderer(tree, _options_with_base(options, base_path), canvas_factory)
    return renderer.render()


def render_to_file(
    markup: Union[str, bytes, Node],
    base_path: Union[str, Path],
    dest: Optional[Union[str, Path]] = None,
    options: Optional[Mapping[str, Any]] = None,
) -> Path:
    """Render markup to a PDF on disk and return the written path.

    Without ``dest`` the file is named after the document metadata and
    placed in ``base_path``.
    """
    document = render_markup(markup, base_path, options)
    target = Path(dest) if dest else Path(base_path) / (document.filename or DEFAULT_FILENAME)
    LOGGER.info("Writing %s", target)
    return document.write_to(target)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render XML markup into a paginated PDF")
    parser.add_argument("input", help="Path to the input markup file")
    parser.add_argument("--output", help="PDF file to write; defaults to the document filename")
    parser.add_argument("--config", help="JSON file with configuration merged over the defaults")
    parser.add_argument("--debug", action="store_true", help="Outline every box and dump intermediate artifacts")
    parser.add_argument("--preview-html", action="store_true", help="Write an HTML preview next to the PDF")
    parser.add_argument("--verbose", action="store_true", help="Log layout decisions")
    return parser


def cli(argv: Optional[List[str]] = None) -> int:
    """Command line entry point; returns the process exit code."""
    args = _build_parser().parse_args(argv)
    set_verbosity(args.verbose)

    input_path = Path(args.input).resolve()
    if not input_path.exists():
        LOGGER.error("Markup file not found: %s", input_path)
        return 1

    try:
        options: Dict[str, Any] = load_config_file(Path(args.config)) if args.config else {}
        if args.debug:
            options["debug"] = True
        options = _options_with_base(options, input_path.parent)

        tree = load_markup(input_path.read_bytes())
        document = render_markup(tree, input_path.parent, options)
        output = Path(args.output) if args.output else input_path.with_name(document.filename or input_path.stem + ".pdf")
        document.write_to(output)
        LOGGER.info("Rendered %s into %s", input_path.name, output)

        if args.preview_html or args.debug:
            recording = RecordingCanvas()
            render_markup(tree, input_path.parent, options, canvas_factory=lambda _document: recording)
            if args.preview_html:
                HtmlRenderer(output.with_suffix(".html")).render(recording)
            if args.debug:
                DebugDumper(output.parent / f"{output.stem}_debug").dump(tree, recording.commands, options)
    except MarkupRenderError as exc:
        LOGGER.error("Rendering failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(cli())
