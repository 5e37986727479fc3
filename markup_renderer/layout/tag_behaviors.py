"""Per-tag layout behaviors driven by the traversal state."""
from __future__ import annotations

from typing import Callable, Dict, Optional, Sequence

from markup_renderer.exceptions import ConfigurationError, StructuralError
from markup_renderer.layout.traversal_state import TraversalState
from markup_renderer.model.elements import Box, ColumnContext, Node, TextOptions
from markup_renderer.model.style_model import Behavior, ResolvedOptions
from markup_renderer.parser.layout_calculator import compute_box
from markup_renderer.parser.styles_parser import StyleRegistry
from markup_renderer.utils.logger import get_logger
from markup_renderer.utils.text_normalizer import normalize_run_text
from markup_renderer.utils.units import is_numeric, num, percentage_value

LOGGER = get_logger(__name__)

DEBUG_BLOCK_COLOR = "#f77"
DEBUG_INLINE_COLOR = "#7f7"

Handler = Callable[[TraversalState, ResolvedOptions, Box, Node], None]


class TagRenderer:
    """Lay out tags and text runs against the canvas held by the state."""

    def __init__(self, registry: StyleRegistry, debug: bool = False) -> None:
        self._registry = registry
        self._debug = debug
        self._handlers: Dict[Behavior, Handler] = {
            Behavior.GENERIC: self.render_generic,
            Behavior.HR: self.render_rule,
            Behavior.IMG: self.render_image,
            Behavior.INDENT: self.render_indent,
            Behavior.ROW: self.render_row,
            Behavior.COLUMN: self.render_column,
            Behavior.LINK: self.render_link,
        }

    # ------------------------------------------------------------------
    # Traversal
    def render_children(self, state: TraversalState, children: Optional[Sequence[Node]]) -> None:
        """Render each child in its own scope, numbering tags per name."""
        if not children:
            return

        LOGGER.debug("Rendering children of %s", state.path)
        indexes: Dict[str, int] = {}
        for child in children:
            with state.scope():
                if child.is_text:
                    self.render_text(state, child.text)
                    continue
                index = indexes[child.name] = indexes.get(child.name, 0) + 1
                state.path = f"{state.parent.path}.{child.name}({index})"
                self.render_tag(state, child)

    def render_tag(self, state: TraversalState, node: Node) -> None:
        LOGGER.debug("Rendering tag %s", state.path)
        options = self._registry.resolve(node.name, node.attributes)

        if options.is_block:
            self.close_text_run(state)

        state.style.apply(options.values)
        box = compute_box(state, options)

        state.cursor_y = box.top
        state.cursor_x = box.left
        if options.is_block:
            state.left = box.left
            state.right = box.right
            state.pending_trim = True

        self._handlers[options.behavior](state, options, box, node)

        if self._debug or options.get("debug"):
            self._stroke_outline(state, options, box)

        if options.is_block:
            state.cursor_y += options.number("marginBottom")
            self.close_text_run(state)
            state.cursor_x = state.parent.left
            state.pending_trim = True
        else:
            state.cursor_x += options.number("marginRight")

    def render_text(self, state: TraversalState, text: Optional[str]) -> None:
        """Draw a text run continuing the current line."""
        trim = state.style.trim or state.pending_trim
        content = normalize_run_text(text, preserve_whitespace=state.style.pre, trim=trim)
        if trim:
            state.pending_trim = False
        if not content:
            return

        options = TextOptions.from_style(
            state.style, continued=True, left=state.left, right=state.content_right_x
        )
        LOGGER.debug("Text %r at %s (%.2f, %.2f)", content, state.path, state.cursor_x, state.cursor_y)
        state.cursor_x, state.cursor_y = state.canvas.draw_text(content, state.cursor_x, state.cursor_y, options)
        state.continued = True

    def close_text_run(self, state: TraversalState) -> None:
        """End an open text run with a line break."""
        if not state.continued:
            return
        options = TextOptions.from_style(
            state.style, continued=False, left=state.left, right=state.content_right_x
        )
        state.cursor_x, state.cursor_y = state.canvas.draw_text("\n", state.cursor_x, state.cursor_y, options)
        state.continued = False

    # ------------------------------------------------------------------
    # Behaviors
    def render_generic(self, state: TraversalState, options: ResolvedOptions, box: Box, node: Node) -> None:
        if options.is_block:
            background = options.get("backgroundColor")
            if background and box.width and box.height:
                LOGGER.debug("Background %s %s %s", state.path, box, background)
                state.canvas.fill_rect(box.left, box.top, box.width, box.height, str(background))

            state.cursor_y += options.number("paddingTop")
            state.left += options.number("paddingLeft")
            state.right += options.number("paddingRight")
        else:
            state.cursor_x += options.number("paddingLeft")

        self.render_children(state, node.children)

        if not options.is_block:
            state.cursor_x += options.number("paddingRight")
            return

        if box.height is not None:
            state.cursor_y = box.top + box.height
        else:
            state.cursor_y += options.number("paddingBottom")
            box.height = state.cursor_y - box.top

        border = options.get("border")
        if border:
            border_color = options.get("borderColor")
            LOGGER.debug("Border %s %s %s %s", state.path, box, border, border_color)
            state.canvas.stroke_rect(
                box.left,
                box.top,
                box.width,
                box.height,
                line_width=num(border) if is_numeric(border) else None,
                color=str(border_color) if border_color else None,
            )

    def render_rule(self, state: TraversalState, options: ResolvedOptions, box: Box, node: Node) -> None:
        thickness = options.number("thickness")
        color = options.get("color")
        state.canvas.fill_rect(state.cursor_x, state.cursor_y, box.width, thickness, str(color) if color else None)
        state.cursor_y += thickness

    def render_image(self, state: TraversalState, options: ResolvedOptions, box: Box, node: Node) -> None:
        source = options.get("src")
        if not source:
            raise ConfigurationError("<img> tag requires a src attribute")

        width = box.width or None
        height = box.height or None
        scale = percentage_value(options.get("scale")) if options.get("scale") else None
        fit = None
        if options.get("fit") and width and height:
            fit = (width, height)
            width = height = None

        path = self._registry.resolve_path(str(source))
        LOGGER.debug("Image %s at %s", path, state.path)
        _, drawn_height = state.canvas.draw_image(
            path, state.cursor_x, state.cursor_y, width=width, height=height, fit=fit, scale=scale
        )
        state.cursor_y += drawn_height

    def render_indent(self, state: TraversalState, options: ResolvedOptions, box: Box, node: Node) -> None:
        state.left += options.number("paddingLeft")
        state.cursor_x = state.left

        self.render_children(state, node.children)

        height = state.cursor_y - box.top
        thickness = options.get("thickness")
        color = options.get("color")
        if thickness and color:
            state.canvas.fill_rect(box.left, box.top, num(thickness), height, str(color))

    def render_row(self, state: TraversalState, options: ResolvedOptions, box: Box, node: Node) -> None:
        state.column_context = ColumnContext(
            row_top=box.top,
            next_column_left=box.left,
            row_bottom=box.top + box.height if box.height else 0.0,
        )

        self.render_generic(state, options, box, node)

        columns = state.column_context
        if columns.row_bottom:
            box.height = columns.row_bottom - box.top
            state.cursor_y = columns.row_bottom

        state.column_context = None

    def render_column(self, state: TraversalState, options: ResolvedOptions, box: Box, node: Node) -> None:
        columns = state.column_context
        if columns is None:
            raise StructuralError("<column> tag must be within a <row> tag")

        parent = state.parent
        margin_left = options.number("marginLeft")
        padding_left = options.number("paddingLeft")
        padding_right = options.number("paddingRight")
        left = columns.next_column_left + margin_left

        # A column wider than the whole row never wraps.
        overflow = (left + box.width) - (parent.left + parent.width)
        if columns.row_bottom and 0 < overflow < parent.width:
            LOGGER.debug("Wrapping column %s by %.2f", state.path, overflow)
            left = parent.left + margin_left
            columns.row_top = columns.row_bottom
            columns.row_bottom = 0.0

        top = columns.row_top + options.number("marginTop")

        state.cursor_y = top + options.number("paddingTop")
        state.left = left + padding_left
        state.cursor_x = state.left
        state.width = box.width - padding_left - padding_right
        LOGGER.debug("Column %s x=%.2f y=%.2f width=%.2f", state.path, state.cursor_x, state.cursor_y, state.width)

        self.render_children(state, node.children)

        state.cursor_y += options.number("paddingBottom")
        state.cursor_x = parent.left

        columns.next_column_left = left + box.width + options.number("marginRight")
        columns.row_bottom = max(state.cursor_y + options.number("marginBottom"), columns.row_bottom)

        box.left = left
        box.top = top
        box.height = columns.row_bottom - top

    def render_link(self, state: TraversalState, options: ResolvedOptions, box: Box, node: Node) -> None:
        href = str(options.get("href") or node.text_content or "")
        if not href.startswith("http"):
            href = "https://" + href
        state.style.link = href

        self.render_generic(state, options, box, node)

    # ------------------------------------------------------------------
    # Debug
    def _stroke_outline(self, state: TraversalState, options: ResolvedOptions, box: Box) -> None:
        width = box.width or (state.page_width - box.right - box.left)
        height = box.height or (state.cursor_y - box.top)
        color = DEBUG_BLOCK_COLOR if options.is_block else DEBUG_INLINE_COLOR
        state.canvas.stroke_rect(box.left, box.top, width, height, color=color)
