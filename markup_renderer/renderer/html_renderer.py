"""Render recorded canvas commands into an HTML preview."""
from __future__ import annotations

import html
from pathlib import Path
from typing import Dict, Iterable, List

from markup_renderer.model.elements import DrawCommand
from markup_renderer.renderer.recording_canvas import RecordingCanvas


def style_to_css(args: Dict[str, object]) -> Dict[str, str]:
    """Translate text options of a ``draw_text`` command into CSS properties."""
    css: Dict[str, str] = {}
    if args.get("color"):
        css["color"] = str(args["color"])
    if args.get("size"):
        css["font-size"] = f"{args['size']}px"
    if args.get("font"):
        css["font-family"] = f"'{args['font']}'"
    decorations = [name for name, key in (("underline", "underline"), ("line-through", "strike")) if args.get(key)]
    if decorations:
        css["text-decoration"] = " ".join(decorations)
    return css


class HtmlRenderer:
    """Produce an absolutely positioned HTML representation of a recorded document."""

    def __init__(self, output_path: Path) -> None:
        self._output_path = output_path

    def render(self, canvas: RecordingCanvas) -> None:
        self._output_path.write_text(self.build_html(canvas.commands), encoding="utf-8")

    def build_html(self, commands: Iterable[DrawCommand]) -> str:
        pages: List[List[str]] = []
        sizes: List[Dict[str, object]] = []
        for command in commands:
            if command.kind == "new_page":
                pages.append([])
                sizes.append(command.args)
                continue
            if not pages:
                continue
            element = self._command_to_div(command)
            if element:
                pages[-1].append(element)

        body = "\n".join(self._page_to_div(size, elements) for size, elements in zip(sizes, pages))
        return f"""<!DOCTYPE html>
<html lang=\"en\">
<head>
  <meta charset=\"utf-8\" />
  <title>Markup Preview</title>
  <style>
    body {{ margin: 0; padding: 16px; background: #eee; }}
    .page {{ position: relative; margin: 0 auto 16px; background: #fff; overflow: hidden; }}
    .markup-box {{ position: absolute; white-space: pre; }}
  </style>
</head>
<body>
{body}
</body>
</html>
"""

    def _page_to_div(self, size: Dict[str, object], elements: List[str]) -> str:
        content = "\n".join(elements)
        return f"<div class=\"page\" style=\"width: {size['width']}px; height: {size['height']}px\">\n{content}\n</div>"

    def _command_to_div(self, command: DrawCommand) -> str:
        args = command.args
        style: Dict[str, str] = {"left": f"{args.get('x', 0)}px", "top": f"{args.get('y', 0)}px"}

        if command.kind == "draw_text":
            text = str(args.get("text", "")).replace("\n", "")
            if not text:
                return ""
            style.update(style_to_css(args))
            content = html.escape(text)
            if args.get("link"):
                content = f"<a href=\"{html.escape(str(args['link']))}\">{content}</a>"
        elif command.kind in ("fill_rect", "stroke_rect", "draw_image"):
            style["width"] = f"{args.get('width') or 0}px"
            style["height"] = f"{args.get('height') or 0}px"
            content = ""
            if command.kind == "fill_rect":
                style["background"] = str(args.get("color") or "#000")
            elif command.kind == "stroke_rect":
                style["border"] = f"{args.get('line_width') or 1}px solid {args.get('color') or '#000'}"
            else:
                content = f"<img src=\"{html.escape(str(args['path']))}\" style=\"width: 100%; height: 100%\" />"
        else:
            return ""

        style_str = "; ".join(f"{k}: {v}" for k, v in style.items())
        return f"  <div class=\"markup-box\" style=\"{style_str}\">{content}</div>"
