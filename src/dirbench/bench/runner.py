"""Benchmark execution engine.

Orchestrates:
1. Candidate registration
2. Configuration validation
3. Warm-up and measured invocations, one candidate at a time
4. Failure containment per candidate
5. Progress reporting
6. Report construction

Everything is strictly sequential: candidates run in registration
order, and each invocation is awaited before the next one starts.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable

from dirbench.bench.candidates import Operation
from dirbench.bench.config import BenchConfig, validate_config
from dirbench.bench.errors import CandidateExecutionError, DuplicateNameError
from dirbench.bench.results import BenchReport, CandidateResult, build_report
from dirbench.bench.timing import Clock, default_clock, time_invocation

log = logging.getLogger("dirbench")


# ---------------------------------------------------------------------------
# Candidate
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Candidate:
    """A named operation under comparison."""

    name: str
    operation: Operation


# ---------------------------------------------------------------------------
# Progress callback
# ---------------------------------------------------------------------------


@dataclass
class BenchProgress:
    """Progress info passed to the callback."""

    phase: str  # "start", "done", "errored"
    candidate: str
    candidates_done: int
    candidates_total: int
    samples: int = 0
    mean_ms: float = 0.0
    detail: str = ""


ProgressCallback = Callable[[BenchProgress], None]


# ---------------------------------------------------------------------------
# BenchRunner
# ---------------------------------------------------------------------------


class BenchRunner:
    """Times repeated invocations of registered candidates.

    Usage::

        runner = BenchRunner(target="path/to/project")
        runner.register("reference", reference_op)
        runner.register("native", native_op)
        report = await runner.run(BenchConfig(time_budget_ms=1000))
    """

    def __init__(
        self,
        *,
        target: str = "",
        clock: Clock = default_clock,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        self.target = target
        self.clock = clock
        self.progress: ProgressCallback = progress_callback or self._default_progress
        self._candidates: dict[str, Candidate] = {}
        self._results: list[CandidateResult] = []
        self._config: BenchConfig | None = None
        self._running = False
        self._start_time = ""
        self._end_time = ""

    @property
    def candidates(self) -> list[Candidate]:
        """Registered candidates in registration order."""
        return list(self._candidates.values())

    def register(self, name: str, operation: Operation) -> BenchRunner:
        """Add a candidate.  Returns the runner so calls can be chained.

        Raises:
            DuplicateNameError: If *name* is already registered.
            ValueError: If *name* is empty.
            TypeError: If *operation* is not callable.
            RuntimeError: If a run is in progress.
        """
        if self._running:
            raise RuntimeError("Cannot register candidates while a benchmark is running.")
        if not name or not name.strip():
            raise ValueError("Candidate names must be non-empty.")
        if not callable(operation):
            raise TypeError(f"Operation for candidate '{name}' is not callable.")
        if name in self._candidates:
            raise DuplicateNameError(name)

        self._candidates[name] = Candidate(name=name, operation=operation)
        log.debug("Registered candidate '%s'", name)
        return self

    async def run(self, config: BenchConfig | None = None) -> BenchReport:
        """Execute the full benchmark.

        Returns:
            The BenchReport for this run.

        Raises:
            ValueError: If configuration is invalid.
            RuntimeError: If a run is already in progress.
        """
        if self._running:
            raise RuntimeError("A benchmark run is already in progress.")
        config = config or BenchConfig()

        errors = validate_config(config)
        fatal = [e for e in errors if e.severity == "error"]
        warnings = [e for e in errors if e.severity == "warning"]
        for w in warnings:
            log.warning("Config warning: %s: %s", w.field, w.message)
        if fatal:
            messages = [f"  {e.field}: {e.message}" for e in fatal]
            raise ValueError("Invalid benchmark configuration:\n" + "\n".join(messages))

        candidates = self.candidates
        if not candidates:
            log.warning("No candidates registered; nothing to benchmark.")

        self._running = True
        self._start_time = time.strftime("%Y-%m-%dT%H:%M:%S%z")
        results: list[CandidateResult] = []
        try:
            for idx, candidate in enumerate(candidates):
                self.progress(
                    BenchProgress(
                        phase="start",
                        candidate=candidate.name,
                        candidates_done=idx,
                        candidates_total=len(candidates),
                    )
                )
                result = await self._run_candidate(candidate, config)
                results.append(result)

                if result.error is not None:
                    progress = BenchProgress(
                        phase="errored",
                        candidate=candidate.name,
                        candidates_done=idx + 1,
                        candidates_total=len(candidates),
                        samples=len(result.samples),
                        detail=str(result.error),
                    )
                else:
                    progress = BenchProgress(
                        phase="done",
                        candidate=candidate.name,
                        candidates_done=idx + 1,
                        candidates_total=len(candidates),
                        samples=len(result.samples),
                        mean_ms=sum(result.samples) / len(result.samples),
                    )
                self.progress(progress)
        finally:
            self._running = False
            self._end_time = time.strftime("%Y-%m-%dT%H:%M:%S%z")

        self._config = config
        self._results = results
        return self.report()

    def report(self) -> BenchReport:
        """Build the report for the most recent run.

        Candidates registered after that run are included as pending.

        Raises:
            InsufficientSamplesError: If a candidate has no samples and
                did not error, which includes every candidate when no
                run has happened yet.
        """
        config = self._config or BenchConfig()
        measured = {r.name for r in self._results}
        results = list(self._results)
        results.extend(
            CandidateResult(name=name) for name in self._candidates if name not in measured
        )
        return build_report(
            config,
            results,
            target=self.target,
            start_time=self._start_time,
            end_time=self._end_time,
        )

    async def _run_candidate(self, candidate: Candidate, config: BenchConfig) -> CandidateResult:
        """Warm up and measure one candidate until its budget is spent."""
        result = CandidateResult(name=candidate.name)

        for _ in range(config.warmup_iterations):
            timed = await time_invocation(candidate.operation, clock=self.clock)
            if timed.error is not None:
                self._record_failure(result, timed.error, phase="warm-up")
                return result
            result.warmup_completed += 1

        start = self.clock()
        elapsed_ms = 0.0
        while not _budget_spent(len(result.samples), elapsed_ms, config):
            timed = await time_invocation(candidate.operation, clock=self.clock)
            elapsed_ms = (self.clock() - start) * 1000
            if timed.error is not None:
                self._record_failure(result, timed.error, phase="measurement")
                break
            result.samples.append(timed.wall_time_ms)

        result.elapsed_ms = max(elapsed_ms, 0.0)
        log.debug(
            "Candidate '%s': %d samples in %.1f ms",
            candidate.name,
            len(result.samples),
            result.elapsed_ms,
        )
        return result

    @staticmethod
    def _record_failure(result: CandidateResult, exc: Exception, *, phase: str) -> None:
        """Mark *result* as errored with *exc* as the cause."""
        result.error = CandidateExecutionError(result.name, exc)
        log.error(
            "Candidate '%s' failed during %s after %d samples: %s",
            result.name,
            phase,
            len(result.samples),
            exc,
        )
        log.debug("Failure detail for '%s'", result.name, exc_info=exc)

    @staticmethod
    def _default_progress(progress: BenchProgress) -> None:
        """Default progress callback: log one line per event."""
        counter = f"[{progress.candidates_done}/{progress.candidates_total}]"
        if progress.phase == "start":
            log.info("  %s Measuring %s...", counter, progress.candidate)
        elif progress.phase == "done":
            log.info(
                "  %s %-30s %6d samples  %10.4f ms",
                counter,
                progress.candidate,
                progress.samples,
                progress.mean_ms,
            )
        elif progress.phase == "errored":
            log.info("  %s %-30s [error] %s", counter, progress.candidate, progress.detail)


def _budget_spent(samples: int, elapsed_ms: float, config: BenchConfig) -> bool:
    """Whether a candidate should stop taking new samples."""
    if config.max_samples is not None and samples >= config.max_samples:
        return True
    return samples >= config.min_samples and elapsed_ms >= config.time_budget_ms
