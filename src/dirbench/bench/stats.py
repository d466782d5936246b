"""Summary statistics for benchmark samples.

Computes the descriptive statistics reported for each candidate: mean,
spread, percentiles, throughput, and a margin of error based on
Student's t-distribution.  Pure Python, no external dependencies.

The t-distribution quantile is obtained by bisection on the two-tailed
p-value, which is evaluated with the regularized incomplete beta
function.

Reference: Numerical Recipes, Chapter 6.4.
"""

from __future__ import annotations

import math
import statistics
from dataclasses import dataclass
from typing import Sequence

from dirbench.bench.errors import InsufficientSamplesError

_NORMAL_APPROX_DF = 2000


# ---------------------------------------------------------------------------
# Descriptive statistics
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DescriptiveStats:
    """Summary of a candidate's samples.  Times are in milliseconds."""

    n: int
    mean: float
    median: float
    variance: float
    stdev: float
    min: float
    max: float
    p75: float  # 75th percentile
    p99: float  # 99th percentile
    moe: float  # margin of error of the mean (95% confidence)
    rme: float  # relative margin of error, in percent

    @property
    def throughput(self) -> float:
        """Operations per second (1 / mean duration)."""
        if self.mean <= 0:
            return float("inf")
        return 1000.0 / self.mean

    def to_dict(self) -> dict[str, float | int]:
        """Serialize to a dict with rounded values."""
        return {
            "n": self.n,
            "mean_ms": round(self.mean, 6),
            "median_ms": round(self.median, 6),
            "variance": round(self.variance, 6),
            "stdev_ms": round(self.stdev, 6),
            "min_ms": round(self.min, 6),
            "max_ms": round(self.max, 6),
            "p75_ms": round(self.p75, 6),
            "p99_ms": round(self.p99, 6),
            "moe_ms": round(self.moe, 6),
            "rme_pct": round(self.rme, 4),
            "ops_per_sec": round(self.throughput, 3),
        }


def describe(values: Sequence[float], *, confidence: float = 0.95) -> DescriptiveStats:
    """Compute summary statistics for a sample.

    Args:
        values: Durations in milliseconds.  Must not be empty.
        confidence: Confidence level for the margin of error.

    Returns:
        DescriptiveStats.  With a single value the variance, stdev and
        margin of error are 0.0.

    Raises:
        InsufficientSamplesError: If *values* is empty.
    """
    if not values:
        raise InsufficientSamplesError()

    sorted_v = sorted(values)
    n = len(sorted_v)
    mean = statistics.fmean(sorted_v)
    median = statistics.median(sorted_v)

    if n >= 2:
        variance = statistics.variance(sorted_v, xbar=mean)
        stdev = math.sqrt(variance)
        sem = stdev / math.sqrt(n)
        moe = sem * t_critical(n - 1, confidence=confidence)
    else:
        variance = 0.0
        stdev = 0.0
        moe = 0.0

    if mean > 0:
        rme = moe / mean * 100
    else:
        rme = 0.0

    return DescriptiveStats(
        n=n,
        mean=mean,
        median=median,
        variance=variance,
        stdev=stdev,
        min=sorted_v[0],
        max=sorted_v[-1],
        p75=_percentile(sorted_v, 0.75),
        p99=_percentile(sorted_v, 0.99),
        moe=moe,
        rme=rme,
    )


def _percentile(sorted_values: list[float], p: float) -> float:
    """Compute the p-th percentile using linear interpolation.

    Assumes sorted_values is sorted in ascending order.
    """
    n = len(sorted_values)
    if n == 0:
        return float("nan")
    if n == 1:
        return sorted_values[0]

    k = (n - 1) * p
    f = math.floor(k)
    c = math.ceil(k)
    if f == c:
        return sorted_values[int(k)]
    d = k - f
    return sorted_values[int(f)] * (1 - d) + sorted_values[int(c)] * d


# ---------------------------------------------------------------------------
# Student's t-distribution
# ---------------------------------------------------------------------------


def t_critical(df: float, *, confidence: float = 0.95) -> float:
    """Return the two-tailed critical value of Student's t.

    That is the ``t`` for which ``P(|T| > t) = 1 - confidence`` with
    ``df`` degrees of freedom (12.706 for df=1, 1.96 as df grows).

    Raises:
        ValueError: If df is not positive or confidence is not in (0, 1).
    """
    if df <= 0 or math.isnan(df):
        raise ValueError(f"Degrees of freedom must be positive (got {df}).")
    if not 0 < confidence < 1:
        raise ValueError(f"Confidence must be between 0 and 1 (got {confidence}).")

    alpha = 1 - confidence

    # The continued fraction converges slowly for huge df, where t is
    # within 0.001 of the normal quantile anyway.
    if df > _NORMAL_APPROX_DF:
        return statistics.NormalDist().inv_cdf(1 - alpha / 2)

    # Bracket the root; the p-value decreases monotonically in t.
    lo, hi = 0.0, 1.0
    while _t_two_tailed_p(hi, df) > alpha:
        lo, hi = hi, hi * 2

    for _ in range(100):
        mid = (lo + hi) / 2
        if _t_two_tailed_p(mid, df) > alpha:
            lo = mid
        else:
            hi = mid
        if hi - lo < 1e-10:
            break
    return (lo + hi) / 2


def _t_two_tailed_p(t: float, df: float) -> float:
    """Compute P(|T| > t) for Student's t with ``df`` degrees of freedom.

    Uses ``P = I_x(df/2, 1/2)`` with ``x = df / (df + t^2)``.
    """
    if math.isinf(t):
        return 0.0
    x = df / (df + t * t)
    p = _regularized_incomplete_beta(x, df / 2.0, 0.5)
    return min(max(p, 0.0), 1.0)


def _regularized_incomplete_beta(x: float, a: float, b: float) -> float:
    """Compute the regularized incomplete beta function I_x(a, b).

    Continued fraction expansion evaluated with Lentz's method.
    """
    if x < 0 or x > 1:
        return float("nan")
    if x == 0:
        return 0.0
    if x == 1:
        return 1.0

    # Symmetry relation converges faster on this side.
    if x > (a + 1) / (a + b + 2):
        return 1.0 - _regularized_incomplete_beta(1 - x, b, a)

    lbeta = math.lgamma(a) + math.lgamma(b) - math.lgamma(a + b)
    prefactor = math.exp(a * math.log(x) + b * math.log(1 - x) - lbeta - math.log(a))

    max_iter = 200
    epsilon = 1e-14
    tiny = 1e-30

    c = 1.0
    d = 1.0 - (a + b) * x / (a + 1)
    if abs(d) < tiny:
        d = tiny
    d = 1.0 / d
    f = d

    for m in range(1, max_iter + 1):
        # Even step.
        num = m * (b - m) * x / ((a + 2 * m - 1) * (a + 2 * m))
        d = 1.0 + num * d
        if abs(d) < tiny:
            d = tiny
        c = 1.0 + num / c
        if abs(c) < tiny:
            c = tiny
        d = 1.0 / d
        f *= c * d

        # Odd step.
        num = -((a + m) * (a + b + m) * x / ((a + 2 * m) * (a + 2 * m + 1)))
        d = 1.0 + num * d
        if abs(d) < tiny:
            d = tiny
        c = 1.0 + num / c
        if abs(c) < tiny:
            c = tiny
        d = 1.0 / d
        delta = c * d
        f *= delta

        if abs(delta - 1.0) < epsilon:
            break

    return prefactor * f
