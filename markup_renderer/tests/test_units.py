"""Tests for lenient numeric parsing and percentage resolution."""
import unittest

from markup_renderer.utils.units import is_numeric, num, parse_number, percentage_value


class ParseNumberTest(unittest.TestCase):
    """Leading numbers are read from strings the way markup attributes arrive."""

    def test_reads_numeric_prefix(self):
        cases = [
            ("12", 12.0),
            ("12px", 12.0),
            ("25%", 25.0),
            (".5", 0.5),
            ("-3.25em", -3.25),
            ("1e2", 100.0),
            ("  7 ", 7.0),
            (4, 4.0),
            (2.5, 2.5),
        ]
        for value, expected in cases:
            self.assertEqual(parse_number(value), expected, f"Failed for {value!r}")

    def test_non_numbers_give_none(self):
        for value in ("abc", "", "px12", None, True, False, float("nan"), [1]):
            self.assertIsNone(parse_number(value), f"Failed for {value!r}")

    def test_is_numeric(self):
        self.assertTrue(is_numeric("0"))
        self.assertTrue(is_numeric(0))
        self.assertFalse(is_numeric("auto"))
        self.assertFalse(is_numeric(None))

    def test_num_defaults(self):
        self.assertEqual(num("abc"), 0.0)
        self.assertEqual(num(None, 5), 5)
        self.assertEqual(num("8pt", 5), 8.0)


class PercentageValueTest(unittest.TestCase):
    """Percentages resolve against a total, other values pass through."""

    def test_percentage_of_total(self):
        self.assertEqual(percentage_value("25%", 1000), 250.0)
        self.assertEqual(percentage_value("100%", 980), 980.0)

    def test_plain_values(self):
        self.assertEqual(percentage_value(40, 1000), 40.0)
        self.assertEqual(percentage_value("40", 1000), 40.0)
        self.assertEqual(percentage_value("abc", 1000), 0.0)

    def test_missing_or_invalid_total_counts_as_one(self):
        self.assertEqual(percentage_value("25%"), 0.25)
        self.assertEqual(percentage_value("25%", "abc"), 0.25)
        self.assertEqual(percentage_value("25%", float("inf")), 0.25)


if __name__ == "__main__":
    unittest.main()
