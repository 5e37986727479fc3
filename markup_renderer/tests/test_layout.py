"""Tests covering box geometry resolution."""
import unittest

from markup_renderer.config.loader import build_config
from markup_renderer.layout.traversal_state import TraversalState
from markup_renderer.model.elements import Margins
from markup_renderer.parser.layout_calculator import compute_box
from markup_renderer.parser.styles_parser import StyleRegistry
from markup_renderer.renderer.recording_canvas import RecordingCanvas


class ComputeBoxTest(unittest.TestCase):
    """A 1000x1000 page with 10pt side margins and the cursor at (30, 10)."""

    def setUp(self):
        self.registry = StyleRegistry(build_config())
        self.state = TraversalState(
            canvas=RecordingCanvas(),
            page_width=1000,
            page_height=1000,
            page_margins=Margins(top=10, left=10, right=10, bottom=10),
            cursor_x=30,
            cursor_y=10,
            margin_left=10,
            margin_right=10,
        )

    def box(self, tag, **attributes):
        return compute_box(self.state, self.registry.resolve(tag, attributes))

    def test_block_fills_parent_width(self):
        box = self.box("div")

        self.assertEqual((box.top, box.left, box.right, box.width), (10, 10, 10, 980))
        self.assertIsNone(box.height)
        self.assertIsNone(box.bottom)

    def test_inline_starts_at_cursor(self):
        box = self.box("span")

        self.assertEqual(box.left, 30)
        self.assertEqual(box.right, 10)
        self.assertEqual(box.width, 960)

    def test_margins_shrink_block(self):
        box = self.box("div", marginTop=1, marginBottom=2, marginLeft=3, marginRight=4, height=20)

        self.assertEqual(box.top, 11)
        self.assertEqual(box.left, 13)
        self.assertEqual(box.right, 14)
        self.assertEqual(box.width, 973)
        self.assertEqual(box.height, 20)

    def test_explicit_left_and_top(self):
        box = self.box("div", left=20, top=40)

        self.assertEqual(box.left, 20)
        self.assertEqual(box.top, 40)
        self.assertEqual(box.width, 970)

    def test_explicit_left_and_right(self):
        box = self.box("div", left=20, right=40)

        self.assertEqual(box.width, 940)

    def test_right_and_bottom_anchor_box(self):
        box = self.box("div", height=100, right=20, width=500, bottom=30)

        self.assertEqual(box.left, 480)
        self.assertEqual(box.width, 500)
        self.assertEqual(box.top, 870)
        self.assertEqual(box.height, 100)

    def test_top_and_bottom_give_height(self):
        box = self.box("div", top=100, bottom=30)

        self.assertEqual(box.height, 870)

    def test_percentages_resolve_against_page(self):
        box = self.box("div", left="10%", top="50%", width="50%")

        self.assertEqual(box.left, 100)
        self.assertEqual(box.top, 500)

    def test_width_percentage_of_parent_content(self):
        self.state.margin_left = 100
        self.state.margin_right = 100
        self.state.push()

        box = self.box("div", width="50%")

        self.assertEqual(box.left, 100)
        self.assertEqual(box.width, 400)

    def test_width_always_matches_edges(self):
        cases = [
            {},
            {"left": 20},
            {"right": 15},
            {"width": 300},
            {"width": "25%", "right": "10%"},
            {"marginLeft": 7, "width": 100, "left": 50},
        ]
        for attributes in cases:
            box = self.box("div", **attributes)
            self.assertAlmostEqual(box.width, 1000 - box.left - box.right, msg=f"Failed for {attributes}")


if __name__ == "__main__":
    unittest.main()
