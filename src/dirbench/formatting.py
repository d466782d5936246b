"""Shared text formatting helpers for dirbench.

Provides adaptive time and rate formatting plus an aligned text table
used by the console report.
"""

from __future__ import annotations

import math


def format_time_ms(ms: float, precision: int = 3) -> str:
    """Format a duration given in milliseconds with adaptive units.

    Examples: ``'850ns'``, ``'12.4\u00b5s'``, ``'3.217ms'``, ``'1.50s'``.
    """
    if math.isnan(ms):
        return "N/A"
    if math.isinf(ms):
        return "inf"
    if ms < 0.001:
        return f"{ms * 1_000_000:.0f}ns"
    if ms < 1:
        return f"{ms * 1000:.1f}\u00b5s"
    if ms < 1000:
        return f"{ms:.{precision}f}ms"
    return f"{ms / 1000:.2f}s"


def format_rate(ops_per_sec: float) -> str:
    """Format a throughput with thousands separators: ``'12,345.6'``."""
    if math.isnan(ops_per_sec):
        return "N/A"
    if math.isinf(ops_per_sec):
        return "inf"
    if ops_per_sec >= 100:
        return f"{ops_per_sec:,.0f}"
    return f"{ops_per_sec:,.2f}"


def format_relative(factor: float, *, fastest: bool = False) -> str:
    """Describe a mean as a multiple of the fastest mean.

    Only the entry marked *fastest* reads ``"fastest"``; a tie with it
    reads ``"1.00x"``.
    """
    if fastest:
        return "fastest"
    if math.isnan(factor):
        return "N/A"
    if math.isinf(factor):
        return "inf slower"
    text = f"{factor:.2f}x"
    if text == "1.00x":
        return text
    return f"{text} slower"


def format_table(
    headers: list[str],
    rows: list[list[str]],
    *,
    alignments: list[str] | None = None,
    indent: int = 2,
    rule: bool = True,
) -> str:
    """Format rows as an aligned text table.

    Column widths come from the widest cell.  Columns marked ``'r'`` in
    *alignments* are right-aligned, everything else left-aligned.  With
    *rule*, a line of box-drawing characters separates the header.
    """
    if not headers:
        return ""

    ncols = len(headers)
    aligns = list(alignments or [])
    aligns += ["l"] * (ncols - len(aligns))

    cells = [(list(row) + [""] * ncols)[:ncols] for row in rows]

    widths = [len(h) for h in headers]
    for row in cells:
        for ci, cell in enumerate(row):
            widths[ci] = max(widths[ci], len(cell))

    def _line(values: list[str]) -> str:
        parts = [
            v.rjust(widths[i]) if aligns[i] == "r" else v.ljust(widths[i])
            for i, v in enumerate(values)
        ]
        return (" " * indent + "  ".join(parts)).rstrip()

    lines = [_line(headers)]
    if rule:
        lines.append(" " * indent + "\u2500" * (sum(widths) + 2 * (ncols - 1)))
    lines.extend(_line(row) for row in cells)
    return "\n".join(lines)
