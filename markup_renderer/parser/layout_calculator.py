"""Compute the page-coordinate box of a tag from the traversal cursor and its options."""
from __future__ import annotations

from typing import TYPE_CHECKING

from markup_renderer.model.elements import Box
from markup_renderer.model.style_model import ResolvedOptions
from markup_renderer.utils.logger import get_logger
from markup_renderer.utils.units import is_numeric, percentage_value

if TYPE_CHECKING:
    from markup_renderer.layout.traversal_state import TraversalState

LOGGER = get_logger(__name__)


def compute_box(state: "TraversalState", options: ResolvedOptions) -> Box:
    """Return the box of a tag about to be rendered at the current cursor.

    ``left`` and ``right`` are distances from the page edges. Explicit
    ``left``/``right``/``top`` attributes resolve against the page size, a
    ``width`` against the parent's content width. The width is always
    recomputed from ``left`` and ``right`` last.
    """
    parent = state.parent
    margin_left = options.number("marginLeft")
    margin_right = options.number("marginRight")

    origin = parent.left if options.is_block else state.cursor_x
    box = Box(
        top=state.cursor_y + options.number("marginTop"),
        left=origin + margin_left,
        right=parent.right + margin_right,
    )

    width = options.get("width")
    if is_numeric(width):
        available_width = state.width - margin_left - margin_right
        box.width = percentage_value(width, available_width)
        box.right = state.page_width - box.left - box.width

    left = options.get("left")
    if is_numeric(left):
        box.left = percentage_value(left, state.page_width)

    right = options.get("right")
    if is_numeric(right):
        box.right = percentage_value(right, state.page_width)
        if not is_numeric(left):
            box.left = state.page_width - box.right - (box.width or 0.0)

    box.width = state.page_width - box.left - box.right

    top = options.get("top")
    if is_numeric(top):
        box.top = percentage_value(top, state.page_height)

    height = options.get("height")
    if is_numeric(height):
        box.height = percentage_value(height, state.page_height)

    bottom = options.get("bottom")
    if is_numeric(bottom):
        box.bottom = percentage_value(bottom, state.page_height)
        if box.height is not None:
            box.top = state.page_height - box.bottom - box.height
        else:
            box.height = state.page_height - box.bottom - box.top

    LOGGER.debug(
        "Box %s %s (parent left=%s right=%s)", state.path, box, parent.left, parent.right
    )
    return box
