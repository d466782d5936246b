"""Tests for dirbench.formatting — shared text helpers."""

from __future__ import annotations

import unittest

from dirbench.formatting import format_rate, format_relative, format_table, format_time_ms


class TestFormatTimeMs(unittest.TestCase):
    """Tests for format_time_ms()."""

    def test_units(self) -> None:
        self.assertEqual(format_time_ms(0.0005), "500ns")
        self.assertEqual(format_time_ms(0.25), "250.0µs")
        self.assertEqual(format_time_ms(3.21749), "3.217ms")
        self.assertEqual(format_time_ms(1500.0), "1.50s")

    def test_special_values(self) -> None:
        self.assertEqual(format_time_ms(float("nan")), "N/A")
        self.assertEqual(format_time_ms(float("inf")), "inf")


class TestFormatRate(unittest.TestCase):
    """Tests for format_rate()."""

    def test_large_rates_rounded(self) -> None:
        self.assertEqual(format_rate(12345.6), "12,346")

    def test_small_rates_keep_decimals(self) -> None:
        self.assertEqual(format_rate(12.345), "12.35")

    def test_special_values(self) -> None:
        self.assertEqual(format_rate(float("inf")), "inf")
        self.assertEqual(format_rate(float("nan")), "N/A")


class TestFormatRelative(unittest.TestCase):
    """Tests for format_relative()."""

    def test_fastest(self) -> None:
        self.assertEqual(format_relative(1.0, fastest=True), "fastest")

    def test_tie_is_not_fastest(self) -> None:
        self.assertEqual(format_relative(1.0), "1.00x")
        self.assertEqual(format_relative(1.004), "1.00x")
        self.assertEqual(format_relative(1.006), "1.01x slower")

    def test_slower(self) -> None:
        self.assertEqual(format_relative(2.5), "2.50x slower")
        self.assertEqual(format_relative(float("inf")), "inf slower")


class TestFormatTable(unittest.TestCase):
    """Tests for format_table()."""

    def test_alignment(self) -> None:
        table = format_table(
            ["Name", "Count"],
            [["alpha", "1"], ["b", "100"]],
            alignments=["l", "r"],
            indent=0,
        )
        lines = table.splitlines()
        self.assertEqual(lines[0], "Name   Count")
        self.assertEqual(lines[1], "─" * 12)
        self.assertEqual(lines[2], "alpha      1")
        self.assertEqual(lines[3], "b        100")

    def test_short_rows_padded(self) -> None:
        table = format_table(["A", "B"], [["x"]], rule=False, indent=0)
        self.assertEqual(table.splitlines(), ["A  B", "x"])

    def test_indent(self) -> None:
        table = format_table(["A"], [["x"]], rule=False)
        self.assertTrue(table.startswith("  A"))

    def test_empty_headers(self) -> None:
        self.assertEqual(format_table([], []), "")


if __name__ == "__main__":
    unittest.main()
