"""Timing capture for single candidate invocations.

Each invocation is awaited to completion between two reads of the
run's clock, so timed regions never overlap.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

log = logging.getLogger("dirbench")

# Returns seconds from an arbitrary, monotonic origin.
Clock = Callable[[], float]

default_clock: Clock = time.perf_counter


# ---------------------------------------------------------------------------
# TimedResult
# ---------------------------------------------------------------------------


@dataclass
class TimedResult:
    """Outcome of one timed invocation."""

    wall_time_ms: float
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ---------------------------------------------------------------------------
# Core timing implementation
# ---------------------------------------------------------------------------


async def time_invocation(
    operation: Callable[[], Awaitable[Any]],
    *,
    clock: Clock = default_clock,
) -> TimedResult:
    """Invoke *operation* once and measure how long it takes.

    Exceptions raised by the operation are captured in the result
    rather than propagated.  ``BaseException`` subclasses such as
    ``asyncio.CancelledError`` and ``KeyboardInterrupt`` are not caught.

    Args:
        operation: Zero-argument callable returning an awaitable.
        clock: Time source in seconds.

    Returns:
        TimedResult with the elapsed wall time in milliseconds and the
        exception, if any.
    """
    start = clock()
    try:
        await operation()
    except Exception as exc:  # noqa: BLE001
        elapsed = clock() - start
        log.debug("Invocation raised %s after %.3f ms", type(exc).__name__, elapsed * 1000)
        return TimedResult(wall_time_ms=max(elapsed * 1000, 0.0), error=exc)
    elapsed = clock() - start

    return TimedResult(wall_time_ms=max(elapsed * 1000, 0.0))
