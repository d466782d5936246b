"""Command-line interface for dirbench.

Provides the main CLI entry point with the ``run`` subcommand.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import click

from dirbench import __version__
from dirbench.bench.candidates import analyzer_operation, load_analyzer
from dirbench.bench.config import BenchConfig, parse_candidate_spec
from dirbench.bench.display import format_report
from dirbench.bench.errors import DuplicateNameError
from dirbench.bench.runner import BenchRunner
from dirbench.logging import get_logger, setup_logging

log = get_logger("cli")


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """dirbench: compare directory analyzers by wall-clock time."""


@main.command()
@click.argument(
    "path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
)
@click.option(
    "--candidate",
    "candidate_specs",
    type=str,
    multiple=True,
    required=True,
    help="Candidate: 'name=module:attr[,key=value...]' (repeatable).",
)
@click.option(
    "--time-budget-ms",
    type=float,
    default=1000.0,
    show_default=True,
    help="Soft measurement time per candidate.",
)
@click.option(
    "--min-samples",
    type=int,
    default=10,
    show_default=True,
    help="Samples required before the time budget is honored.",
)
@click.option(
    "--max-samples",
    type=int,
    default=None,
    help="Stop a candidate after this many samples.",
)
@click.option(
    "--warmup",
    type=int,
    default=1,
    show_default=True,
    help="Warm-up invocations per candidate.",
)
@click.option("--name", type=str, default="", help="Human-readable benchmark name.")
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON.")
@click.option("-v", "--verbose", is_flag=True, help="Show detailed output.")
@click.option("-q", "--quiet", is_flag=True, help="Only show errors.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write a DEBUG log to this file.",
)
def run(
    path: Path,
    candidate_specs: tuple[str, ...],
    time_budget_ms: float,
    min_samples: int,
    max_samples: int | None,
    warmup: int,
    name: str,
    as_json: bool,
    verbose: bool,
    quiet: bool,
    log_file: Path | None,
) -> None:
    """Benchmark directory analyzers against PATH.

    Each candidate names an analyzer callable taking the directory path
    (plus any options) and is run repeatedly until its time budget and
    sample floor are both met.

    \b
    Examples:
        dirbench run ./project \\
            --candidate "reference=pygount.analysis:analyze" \\
            --candidate "native=linguisto:analyze_directory,offline=true"

        dirbench run . --candidate "mine=myproj.scan:scan" --min-samples 50 --json
    """
    setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)

    runner = BenchRunner(target=str(path))
    for spec_text in candidate_specs:
        try:
            spec = parse_candidate_spec(spec_text)
            analyzer = load_analyzer(spec.target)
            runner.register(spec.name, analyzer_operation(analyzer, path, spec.options))
        except (ValueError, DuplicateNameError) as exc:
            raise click.UsageError(f"--candidate: {exc}") from exc

    config = BenchConfig(
        name=name,
        time_budget_ms=time_budget_ms,
        min_samples=min_samples,
        max_samples=max_samples,
        warmup_iterations=warmup,
    )
    log.debug("Benchmark config: %s", config.to_dict())

    if not as_json:
        click.echo("Running benchmark...")
    try:
        report = asyncio.run(runner.run(config))
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc
    except KeyboardInterrupt:
        click.echo("\nBenchmark interrupted.", err=True)
        raise SystemExit(130)  # noqa: B904

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        click.echo()
        click.echo(format_report(report))

    if report.errored:
        raise SystemExit(1)
