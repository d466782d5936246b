"""Tests for dirbench.bench.display — terminal formatting for reports."""

from __future__ import annotations

import unittest

from bench_test_helpers import make_result

from dirbench.bench.config import BenchConfig
from dirbench.bench.display import format_ranking_table, format_report
from dirbench.bench.results import build_report


def _two_candidate_report(**config_kwargs: object):  # type: ignore[no-untyped-def]
    config = BenchConfig(**config_kwargs)  # type: ignore[arg-type]
    return build_report(
        config,
        [
            make_result("linguist-js", [12.0, 12.5, 11.5]),
            make_result("linguisto (native)", [3.0, 3.1, 2.9]),
        ],
        target="/home/dev/project",
    )


class TestFormatReport(unittest.TestCase):
    """Tests for format_report()."""

    def test_header(self) -> None:
        output = format_report(_two_candidate_report(name="Directory scan"))
        lines = output.splitlines()
        self.assertEqual(lines[0], "Directory scan")
        self.assertEqual(lines[1], "─" * len("Directory scan"))
        self.assertIn("Target: /home/dev/project", output)
        self.assertIn("Budget: 1000ms per candidate", output)
        self.assertIn("min 10 samples", output)

    def test_default_title(self) -> None:
        self.assertTrue(format_report(_two_candidate_report()).startswith("Benchmark\n"))

    def test_max_samples_in_config_line(self) -> None:
        output = format_report(_two_candidate_report(max_samples=50))
        self.assertIn("max 50 samples", output)

    def test_each_candidate_once_in_rank_order(self) -> None:
        output = format_report(_two_candidate_report())
        self.assertEqual(output.count("linguisto (native)"), 1)
        self.assertEqual(output.count("linguist-js "), 1)
        self.assertLess(output.index("linguisto (native)"), output.index("linguist-js"))

    def test_relative_column(self) -> None:
        output = format_report(_two_candidate_report())
        self.assertIn("fastest", output)
        self.assertIn("4.00x slower", output)

    def test_tie_marks_only_first_as_fastest(self) -> None:
        report = build_report(
            BenchConfig(),
            [make_result("first", [2.0, 2.0]), make_result("second", [2.0, 2.0])],
        )
        table = format_ranking_table(report.ranking)
        rows = table.splitlines()[2:]
        self.assertTrue(rows[0].endswith("fastest"))
        self.assertTrue(rows[1].endswith("1.00x"))
        self.assertEqual(table.count("fastest"), 1)

    def test_errored_section(self) -> None:
        report = build_report(
            BenchConfig(),
            [
                make_result("ok", [1.0, 1.0]),
                make_result("broken", [], error=PermissionError("denied")),
            ],
        )
        output = format_report(report)
        self.assertIn("Errored", output)
        self.assertIn("broken: Candidate 'broken' failed: PermissionError: denied", output)
        # Errored candidates are not in the table.
        table = output.split("Errored")[0]
        self.assertNotIn("broken", table)

    def test_no_successful_candidates(self) -> None:
        report = build_report(BenchConfig(), [make_result("x", [], error=OSError("gone"))])
        output = format_report(report)
        self.assertIn("No successful candidates.", output)
        self.assertNotIn("ops/s", output)


class TestFormatRankingTable(unittest.TestCase):
    """Tests for format_ranking_table()."""

    def test_columns(self) -> None:
        report = _two_candidate_report()
        table = format_ranking_table(report.ranking)
        header = table.splitlines()[0]
        for column in ("#", "Candidate", "Samples", "Mean", "±", "ops/s", "Relative"):
            self.assertIn(column, header)

    def test_row_values(self) -> None:
        report = _two_candidate_report()
        rows = format_ranking_table(report.ranking).splitlines()[2:]
        self.assertEqual(len(rows), 2)
        self.assertIn("3.000ms", rows[0])
        self.assertIn("333", rows[0])  # ops/s for a 3 ms mean
        self.assertIn("12.000ms", rows[1])


if __name__ == "__main__":
    unittest.main()
