"""Test cases for text run normalization."""

import unittest

from markup_renderer.utils.text_normalizer import TextNormalizer, normalize_run_text


class TextNormalizerTest(unittest.TestCase):
    """Test whitespace collapsing and line-start trimming."""

    def setUp(self):
        self.normalizer = TextNormalizer(preserve_whitespace=False)
        self.preserve_normalizer = TextNormalizer(preserve_whitespace=True)

    def test_whitespace_collapses_to_single_space(self):
        test_cases = [
            ("  multiple   spaces  ", " multiple spaces "),
            ("line\nbreak", "line break"),
            ("\t\ttabs\t\t", " tabs "),
            ("a \n \n b", "a b"),
        ]
        for input_text, expected in test_cases:
            self.assertEqual(self.normalizer.normalize_text(input_text), expected, f"Failed for {input_text!r}")

    def test_trim_strips_leading_whitespace(self):
        self.assertEqual(self.normalizer.normalize_text("   Hello  world", trim=True), "Hello world")

    def test_preformatted_text_keeps_whitespace(self):
        text = "def f():\n    return 1"
        self.assertEqual(self.preserve_normalizer.normalize_text(text), text)

    def test_preformatted_trim_strips_every_line_start(self):
        text = "  first\n    second"
        self.assertEqual(self.preserve_normalizer.normalize_text(text, trim=True), "first\nsecond")

    def test_empty_text(self):
        self.assertEqual(self.normalizer.normalize_text(""), "")


class NormalizeRunTextTest(unittest.TestCase):
    """Test the convenience wrapper used by the tag renderer."""

    def test_numbers_become_strings(self):
        self.assertEqual(normalize_run_text(42), "42")
        self.assertEqual(normalize_run_text(1.5), "1.5")

    def test_missing_content_is_empty(self):
        self.assertEqual(normalize_run_text(None), "")
        self.assertEqual(normalize_run_text(True), "")

    def test_whitespace_only_run_trims_to_empty(self):
        self.assertEqual(normalize_run_text("  \n  ", trim=True), "")


if __name__ == "__main__":
    unittest.main()
