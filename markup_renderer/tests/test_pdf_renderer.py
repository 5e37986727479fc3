"""Tests for the ReportLab canvas."""
import re
import tempfile
import unittest
from pathlib import Path

from markup_renderer.exceptions import CollaboratorError
from markup_renderer.main import render_markup
from markup_renderer.model.elements import Margins, PageOptions, TextOptions
from markup_renderer.renderer.pdf_renderer import ReportLabCanvas, image_size


class BaselineCanvas(ReportLabCanvas):
    def __init__(self):
        super().__init__(compress=False)
        self.drawn = []

    def _draw_fragment(self, fragment, x, baseline):
        self.drawn.append((fragment.text, x, baseline))
        super()._draw_fragment(fragment, x, baseline)


SAMPLE = """
<pdf>
  <head>
    <title>Sample</title>
    <meta><author>Ada</author></meta>
  </head>
  <page>
    <h1>Heading</h1>
    <p>Some <strong>bold</strong> text and a <a href="example.com">link</a>.</p>
    <p align="center" underline="true">Centered</p>
    <p align="right" strike="true">Right</p>
    <hr/>
    <div backgroundColor="#eee" height="40" border="1" borderColor="red">Boxed</div>
    <indent><p>Quoted text</p></indent>
    <row>
      <column width="50%"><p>Left column</p></column>
      <column width="50%"><p>Right column</p></column>
    </row>
  </page>
  <page size="A5" layout="landscape">
    <p pre="true">  keep   spaces</p>
  </page>
</pdf>
""".strip()


class ReportLabCanvasTest(unittest.TestCase):
    def setUp(self):
        self.canvas = ReportLabCanvas(compress=False)
        self.page = self.canvas.new_page(PageOptions(size=[400, 400], margins=Margins(10, 10, 10, 10)))

    def options(self, **overrides):
        values = {"size": 10, "continued": True, "left": 10, "right": 390}
        values.update(overrides)
        return TextOptions(**values)

    def test_new_page_handle(self):
        self.assertEqual((self.page.number, self.page.width, self.page.height), (1, 400, 400))
        second = self.canvas.new_page(PageOptions(size="A4"))
        self.assertEqual(second.number, 2)

    def test_continued_text_stays_on_line(self):
        x, y = self.canvas.draw_text("Hello", 10, 10, self.options())

        self.assertGreater(x, 10)
        self.assertEqual(y, 10)

    def test_finished_text_moves_to_next_line(self):
        x, y = self.canvas.draw_text("Hello", 10, 10, self.options(continued=False))

        self.assertEqual(x, 10)
        self.assertGreater(y, 10)

    def test_closing_newline_moves_down_once(self):
        x, y = self.canvas.draw_text("Hello", 10, 10, self.options())
        _, closed = self.canvas.draw_text("\n", x, y, self.options(continued=False))
        _, finished = self.canvas.draw_text("Hello", 10, 10, self.options(continued=False))

        self.assertAlmostEqual(closed, finished)

    def test_long_text_wraps_within_edges(self):
        _, y = self.canvas.draw_text("word " * 40, 10, 10, self.options(right=100))

        self.assertGreater(y, 10)

    def test_text_past_bottom_margin_starts_new_page(self):
        x, y = self.canvas.draw_text("word " * 2000, 10, 10, self.options(continued=False))

        self.assertEqual(x, 10)
        self.assertLessEqual(y, 390)
        self.assertGreater(self.canvas.new_page(PageOptions(size=[400, 400])).number, 2)

    def test_lines_never_cross_bottom_margin(self):
        canvas = BaselineCanvas()
        canvas.new_page(PageOptions(size=[400, 400], margins=Margins(10, 10, 10, 10)))

        canvas.draw_text("word " * 2000, 10, 10, self.options(continued=False))

        self.assertTrue(all(baseline > 10 for _, _, baseline in canvas.drawn))

    def test_text_moved_down_is_drawn_on_its_own_line(self):
        canvas = BaselineCanvas()
        canvas.new_page(PageOptions(size=[400, 400], margins=Margins(10, 10, 10, 10)))

        x, y = canvas.draw_text("before ", 10, 10, self.options())
        canvas.draw_text("after", x, y + 50, self.options(continued=False))

        self.assertEqual([text.strip() for text, _, _ in canvas.drawn], ["before", "after"])
        self.assertAlmostEqual(canvas.drawn[0][2] - canvas.drawn[1][2], 50)

    def test_metadata_is_written(self):
        self.canvas.set_metadata({"Title": "Quarterly Report", "Author": "Ada", "Unknown": "x"})
        self.canvas.draw_text("Hello", 10, 10, self.options(continued=False))

        content = self.canvas.finalize()

        self.assertTrue(content.startswith(b"%PDF"))
        self.assertIn(b"Quarterly Report", content)

    def test_missing_image(self):
        with self.assertRaises(CollaboratorError):
            self.canvas.draw_image("/nonexistent/image.png", 10, 10, width=10, height=10)

    def test_unknown_font(self):
        with self.assertRaises(CollaboratorError):
            self.canvas.draw_text("x", 10, 10, self.options(font="NoSuchFont"))

    def test_missing_font_file(self):
        with self.assertRaises(CollaboratorError):
            self.canvas.draw_text("x", 10, 10, self.options(font="/nonexistent/fonts/times"))


class ImageSizeTest(unittest.TestCase):
    def test_fit_keeps_ratio(self):
        self.assertEqual(image_size(400, 100, None, None, (200, 100), None), (200, 50))

    def test_single_dimension_keeps_ratio(self):
        self.assertEqual(image_size(400, 200, 100, None, None, None), (100, 50))
        self.assertEqual(image_size(400, 200, None, 50, None, None), (100, 50))

    def test_explicit_dimensions(self):
        self.assertEqual(image_size(400, 200, 30, 40, None, None), (30, 40))

    def test_scale(self):
        self.assertEqual(image_size(400, 200, None, None, None, 0.5), (200, 100))
        self.assertEqual(image_size(400, 200, None, None, None, None), (400, 200))


class RenderPdfTest(unittest.TestCase):
    def test_sample_document(self):
        document = render_markup(SAMPLE)

        self.assertTrue(document.content.startswith(b"%PDF"))
        self.assertEqual(document.filename, "Sample.pdf")
        self.assertRegex(document.content, re.compile(rb"/Count 2\b"))
        self.assertEqual(document.metadata, {"Title": "Sample", "Author": "Ada"})
        self.assertEqual(document.stream().read(4), b"%PDF")

    def test_missing_image_is_reported_with_path(self):
        with tempfile.TemporaryDirectory() as directory:
            with self.assertRaises(CollaboratorError) as ctx:
                render_markup(
                    '<pdf><page><p>x</p><img src="missing.png" width="10" height="10"/></page></pdf>',
                    base_path=directory,
                )

        self.assertEqual(ctx.exception.path, "page(1).img(1)")

    def test_long_paragraph_spans_pages(self):
        document = render_markup("<pdf><page><p>" + "word " * 3000 + "</p></page></pdf>")

        count = re.search(rb"/Count (\d+)", document.content)
        self.assertIsNotNone(count)
        self.assertGreater(int(count.group(1)), 1)

    def test_uncompressed_output(self):
        document = render_markup("<pdf><page><p>x</p></page></pdf>", options={"document": {"compress": False}})

        self.assertTrue(document.content.startswith(b"%PDF"))

    def test_write_to(self):
        document = render_markup("<pdf><page><p>x</p></page></pdf>")
        with tempfile.TemporaryDirectory() as directory:
            path = document.write_to(Path(directory) / "nested" / "x.pdf")

            self.assertEqual(path.read_bytes(), document.content)


if __name__ == "__main__":
    unittest.main()
