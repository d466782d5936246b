"""Benchmark configuration and candidate definitions.

Handles:
- The resolved run configuration (time budget, sample floor and cap,
  warm-up).
- Validating the configuration before execution.
- Parsing candidate definitions given on the command line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

log = logging.getLogger("dirbench")


# ---------------------------------------------------------------------------
# BenchConfig
# ---------------------------------------------------------------------------


@dataclass
class BenchConfig:
    """Resolved configuration for a benchmark run."""

    name: str = ""  # Human-readable title

    # Stopping rules, applied per candidate
    time_budget_ms: float = 1000.0  # Soft: an in-flight invocation finishes
    min_samples: int = 10  # Floor before the time budget is honored
    max_samples: int | None = None  # Hard cap, None = unlimited

    warmup_iterations: int = 1  # Invocations run before measuring

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "name": self.name,
            "time_budget_ms": self.time_budget_ms,
            "min_samples": self.min_samples,
            "max_samples": self.max_samples,
            "warmup_iterations": self.warmup_iterations,
        }


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


@dataclass
class ValidationError:
    """A single configuration validation error."""

    field: str
    message: str
    severity: str = "error"  # "error" or "warning"


def validate_config(config: BenchConfig) -> list[ValidationError]:
    """Validate a benchmark configuration.

    Returns a list of validation errors.  Empty list means valid.
    """
    errors: list[ValidationError] = []

    if config.time_budget_ms < 0:
        errors.append(
            ValidationError(
                field="time_budget_ms",
                message=f"Time budget cannot be negative (got {config.time_budget_ms}).",
            )
        )

    if config.min_samples < 1:
        errors.append(
            ValidationError(
                field="min_samples",
                message=(
                    f"Need at least 1 sample per candidate to compute a summary "
                    f"(got {config.min_samples})."
                ),
            )
        )
    elif config.min_samples < 3:
        errors.append(
            ValidationError(
                field="min_samples",
                message=(
                    f"Fewer than 3 samples gives a meaningless margin of error "
                    f"(got {config.min_samples})."
                ),
                severity="warning",
            )
        )

    if config.max_samples is not None and config.max_samples < config.min_samples:
        errors.append(
            ValidationError(
                field="max_samples",
                message=(
                    f"max_samples ({config.max_samples}) must not be lower than "
                    f"min_samples ({config.min_samples})."
                ),
            )
        )

    if config.warmup_iterations < 0:
        errors.append(
            ValidationError(
                field="warmup_iterations",
                message=(
                    f"Warm-up iterations cannot be negative (got {config.warmup_iterations})."
                ),
            )
        )

    return errors


# ---------------------------------------------------------------------------
# Candidate definitions from the command line
# ---------------------------------------------------------------------------


@dataclass
class CandidateSpec:
    """A candidate as described on the command line."""

    name: str
    target: str  # "package.module:attr"
    options: dict[str, Any] = field(default_factory=dict)


def parse_candidate_spec(spec: str) -> CandidateSpec:
    """Parse a candidate definition.

    Format: ``"name=module:attr"`` optionally followed by
    ``",key=value,..."`` analyzer options.  Values ``true``/``false``
    and numbers are converted; anything else stays a string.

    Examples::

        "reference=pygount.analysis:analyze"
        "native=linguisto:analyze_directory,offline=true,max_depth=8"

    Raises:
        ValueError: If the spec is malformed.
    """
    if "=" not in spec:
        raise ValueError(f"Invalid candidate spec: '{spec}'. Expected format: 'name=module:attr'")

    name, rest = spec.split("=", 1)
    name = name.strip()
    if not name:
        raise ValueError("Candidate name cannot be empty.")

    target, *pairs = [part.strip() for part in rest.split(",")]
    if ":" not in target or target.startswith(":") or target.endswith(":"):
        raise ValueError(
            f"Invalid analyzer reference for candidate '{name}': '{target}'. "
            f"Expected 'module:attr'."
        )

    candidate = CandidateSpec(name=name, target=target)
    for pair in pairs:
        if not pair:
            continue
        if "=" not in pair:
            raise ValueError(f"Invalid key=value pair in candidate '{name}': '{pair}'")
        key, value = pair.split("=", 1)
        key = key.strip()
        if not key:
            raise ValueError(f"Empty option name in candidate '{name}'.")
        candidate.options[key] = _coerce_value(value.strip())

    return candidate


def _coerce_value(value: str) -> Any:
    """Convert an option value to bool, int or float where it looks like one."""
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return value
