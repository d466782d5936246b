"""Terminal display formatting for benchmark reports.

One row per successful candidate in ranking order, followed by the
errored candidates and the error each one raised.
"""

from __future__ import annotations

from dirbench.bench.results import BenchReport, RankingEntry
from dirbench.formatting import format_rate, format_relative, format_table, format_time_ms

REPORT_HEADERS = ["#", "Candidate", "Samples", "Mean", "\u00b1", "ops/s", "Relative"]


def format_report(report: BenchReport) -> str:
    """Format a complete benchmark report for display.

    Args:
        report: BenchReport returned by ``BenchRunner.run()``.

    Returns:
        Formatted string for terminal output.
    """
    lines: list[str] = []

    title = report.config.name or "Benchmark"
    lines.append(title)
    lines.append("\u2500" * len(title))
    if report.target:
        lines.append(f"Target: {report.target}")
    lines.append(_format_config_line(report))
    lines.append("")

    if report.ranking:
        lines.append(format_ranking_table(report.ranking))
    else:
        lines.append("No successful candidates.")

    if report.errored:
        lines.append("")
        lines.append("Errored")
        lines.append("\u2500" * 7)
        for result in report.errored:
            lines.append(f"  {result.name}: {result.error}")

    return "\n".join(lines)


def format_ranking_table(ranking: list[RankingEntry]) -> str:
    """Format the ranking as an aligned table."""
    rows = [
        [
            str(entry.rank),
            entry.name,
            str(entry.stats.n),
            format_time_ms(entry.stats.mean),
            f"{entry.stats.rme:.2f}%",
            format_rate(entry.stats.throughput),
            format_relative(entry.relative, fastest=entry.is_fastest),
        ]
        for entry in ranking
    ]
    return format_table(
        REPORT_HEADERS,
        rows,
        alignments=["r", "l", "r", "r", "r", "r", "l"],
    )


def _format_config_line(report: BenchReport) -> str:
    cfg = report.config
    line = (
        f"Budget: {cfg.time_budget_ms:g}ms per candidate, "
        f"min {cfg.min_samples} samples, {cfg.warmup_iterations} warm-up"
    )
    if cfg.max_samples is not None:
        line += f", max {cfg.max_samples} samples"
    return line
