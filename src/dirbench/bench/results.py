"""Benchmark result data structures.

Hierarchy::

    BenchReport (one benchmark execution)
      → candidates: list[CandidateResult]   every registered candidate
      → ranking: list[RankingEntry]         successful, fastest first
      → errored: list[CandidateResult]      failed, with their error

Summaries are never stored: they are recomputed from a candidate's
samples whenever they are asked for.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any

from dirbench.bench.config import BenchConfig
from dirbench.bench.errors import CandidateExecutionError, InsufficientSamplesError
from dirbench.bench.stats import DescriptiveStats, describe

log = logging.getLogger("dirbench")


# ---------------------------------------------------------------------------
# Candidate-level result
# ---------------------------------------------------------------------------


@dataclass
class CandidateResult:
    """Samples and outcome for one candidate."""

    name: str
    samples: list[float] = field(default_factory=list)  # milliseconds, execution order
    error: CandidateExecutionError | None = None
    warmup_completed: int = 0
    elapsed_ms: float = 0.0  # Measurement phase wall time

    @property
    def state(self) -> str:
        """``"errored"``, ``"ok"``, or ``"pending"`` if it has not run."""
        if self.error is not None:
            return "errored"
        if self.samples:
            return "ok"
        return "pending"

    def summary(self) -> DescriptiveStats:
        """Compute statistics over the recorded samples.

        Raises:
            InsufficientSamplesError: If no samples were recorded.
        """
        if not self.samples:
            raise InsufficientSamplesError(self.name)
        return describe(self.samples)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict (samples excluded)."""
        data: dict[str, Any] = {
            "name": self.name,
            "state": self.state,
            "samples": len(self.samples),
            "warmup_completed": self.warmup_completed,
            "elapsed_ms": round(self.elapsed_ms, 3),
        }
        if self.error is not None:
            data["error"] = str(self.error)
            data["error_type"] = type(self.error.cause).__name__
        elif self.samples:
            data["summary"] = self.summary().to_dict()
        return data


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------


@dataclass
class RankingEntry:
    """A successful candidate's place in the comparison."""

    rank: int  # 1-based, 1 = fastest
    name: str
    stats: DescriptiveStats
    relative: float  # mean / fastest mean, always >= 1

    @property
    def is_fastest(self) -> bool:
        return self.rank == 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "rank": self.rank,
            "name": self.name,
            "relative": round(self.relative, 4) if math.isfinite(self.relative) else None,
            "summary": self.stats.to_dict(),
        }


def relative_factor(mean: float, fastest_mean: float) -> float:
    """Express *mean* as a multiple of *fastest_mean*.

    Zero-duration means can occur with a coarse clock; an equal zero
    compares as 1.0 and anything slower than zero as infinity.
    """
    if fastest_mean > 0:
        return mean / fastest_mean
    return 1.0 if mean <= 0 else float("inf")


def rank_candidates(results: list[CandidateResult]) -> list[RankingEntry]:
    """Rank successful candidates by mean duration, fastest first.

    Ties keep registration order.  Errored candidates are ignored.

    Raises:
        InsufficientSamplesError: If a candidate has neither samples nor
            an error.
    """
    summaries: list[tuple[str, DescriptiveStats]] = []
    for result in results:
        if result.error is not None:
            continue
        summaries.append((result.name, result.summary()))

    summaries.sort(key=lambda item: item[1].mean)
    if not summaries:
        return []

    fastest = summaries[0][1].mean
    return [
        RankingEntry(
            rank=i + 1,
            name=name,
            stats=stats,
            relative=relative_factor(stats.mean, fastest),
        )
        for i, (name, stats) in enumerate(summaries)
    ]


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------


@dataclass
class BenchReport:
    """Everything a finished benchmark run produced."""

    config: BenchConfig
    candidates: list[CandidateResult] = field(default_factory=list)
    ranking: list[RankingEntry] = field(default_factory=list)
    errored: list[CandidateResult] = field(default_factory=list)
    target: str = ""
    start_time: str = ""
    end_time: str = ""

    @property
    def fastest(self) -> RankingEntry | None:
        return self.ranking[0] if self.ranking else None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "name": self.config.name,
            "target": self.target,
            "config": self.config.to_dict(),
            "start_time": self.start_time,
            "end_time": self.end_time,
            "candidates": [c.to_dict() for c in self.candidates],
            "ranking": [r.to_dict() for r in self.ranking],
            "errored": [c.name for c in self.errored],
        }


def build_report(
    config: BenchConfig,
    results: list[CandidateResult],
    *,
    target: str = "",
    start_time: str = "",
    end_time: str = "",
) -> BenchReport:
    """Partition candidate results into a ranking and an errored set.

    Raises:
        InsufficientSamplesError: If any candidate finished without
            samples and without an error.
    """
    ranking = rank_candidates(results)
    errored = [r for r in results if r.error is not None]
    log.debug(
        "Report: %d ranked, %d errored",
        len(ranking),
        len(errored),
    )
    return BenchReport(
        config=config,
        candidates=list(results),
        ranking=ranking,
        errored=errored,
        target=target,
        start_time=start_time,
        end_time=end_time,
    )
