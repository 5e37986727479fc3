"""Cursor and inherited style threaded through the recursive tree walk."""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from markup_renderer.model.elements import ColumnContext, Margins, PageHandle, TextStyle
from markup_renderer.renderer.canvas import Canvas


@dataclass(frozen=True, slots=True)
class StateSnapshot:
    """Scoped fields of a traversal state, saved before a child is rendered."""

    margin_left: float
    margin_right: float
    page_width: float
    page_height: float
    page_margins: Margins
    style: TextStyle
    path: str
    column_context: Optional[ColumnContext]

    @property
    def left(self) -> float:
        return self.margin_left

    @property
    def right(self) -> float:
        return self.margin_right

    @property
    def width(self) -> float:
        return self.page_width - self.margin_left - self.margin_right


@dataclass(slots=True)
class TraversalState:
    """Mutable layout state of one render.

    ``margin_left``/``margin_right`` are the current content edges as
    distances from the page edges. ``continued`` (an open text run) and
    ``pending_trim`` are document-wide modes and survive ``pop``; the cursor
    also survives ``pop`` so siblings flow after each other.
    """

    canvas: Canvas
    page_width: float = 0.0
    page_height: float = 0.0
    page_margins: Margins = field(default_factory=Margins)
    cursor_x: float = 0.0
    cursor_y: float = 0.0
    margin_left: float = 0.0
    margin_right: float = 0.0
    style: TextStyle = field(default_factory=TextStyle)
    path: str = ""
    column_context: Optional[ColumnContext] = None
    continued: bool = False
    pending_trim: bool = False
    _stack: List[StateSnapshot] = field(default_factory=list)

    # ------------------------------------------------------------------
    # Derived geometry
    @property
    def left(self) -> float:
        return self.margin_left

    @left.setter
    def left(self, value: Optional[float]) -> None:
        self.margin_left = self.page_margins.left if value is None else value

    @property
    def right(self) -> float:
        return self.margin_right

    @right.setter
    def right(self, value: Optional[float]) -> None:
        self.margin_right = self.page_margins.right if value is None else value

    @property
    def width(self) -> float:
        """Width between the current content edges."""
        return self.page_width - self.margin_left - self.margin_right

    @width.setter
    def width(self, value: Optional[float]) -> None:
        if value is None:
            self.margin_left = self.margin_right = 0.0
            return
        self.margin_right = self.page_width - self.margin_left - value

    @property
    def content_right_x(self) -> float:
        """x coordinate of the right content edge."""
        return self.page_width - self.margin_right

    @property
    def parent(self) -> StateSnapshot:
        """The scope the current node was entered from."""
        if self._stack:
            return self._stack[-1]
        return StateSnapshot(
            margin_left=self.page_margins.left,
            margin_right=self.page_margins.right,
            page_width=self.page_width,
            page_height=self.page_height,
            page_margins=self.page_margins,
            style=self.style,
            path=self.path,
            column_context=None,
        )

    # ------------------------------------------------------------------
    # Save / restore
    def push(self) -> None:
        """Save the scoped fields; the live style continues as a copy."""
        self._stack.append(
            StateSnapshot(
                margin_left=self.margin_left,
                margin_right=self.margin_right,
                page_width=self.page_width,
                page_height=self.page_height,
                page_margins=self.page_margins,
                style=self.style,
                path=self.path,
                column_context=self.column_context,
            )
        )
        self.style = self.style.copy()

    def pop(self) -> None:
        """Restore the scoped fields saved by the matching ``push``."""
        if not self._stack:
            return
        snapshot = self._stack.pop()
        self.margin_left = snapshot.margin_left
        self.margin_right = snapshot.margin_right
        self.page_width = snapshot.page_width
        self.page_height = snapshot.page_height
        self.page_margins = snapshot.page_margins
        self.style = snapshot.style
        self.path = snapshot.path
        self.column_context = snapshot.column_context

    @contextmanager
    def scope(self) -> Iterator["TraversalState"]:
        """Run a block between ``push`` and ``pop``.

        An exception skips the ``pop`` so the state still describes the
        failing node when the error reaches the driver.
        """
        self.push()
        yield self
        self.pop()

    # ------------------------------------------------------------------
    # Pages
    def start_page(self, page: PageHandle) -> None:
        """Reset geometry for a freshly created page."""
        self.page_width = page.width
        self.page_height = page.height
        self.page_margins = page.margins
        self.margin_left = page.margins.left
        self.margin_right = page.margins.right
        self.cursor_x = self.margin_left
        self.cursor_y = page.margins.top
        self.continued = False
