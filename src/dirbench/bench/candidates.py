"""Adapters from directory analyzers to benchmark operations.

A candidate operation takes no arguments and returns nothing; the
harness only observes how long it took and whether it raised.  The
analyzers under comparison have the shape ``analyze(path, **options)``
and may be plain functions or coroutine functions.
"""

from __future__ import annotations

import importlib
import inspect
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable

log = logging.getLogger("dirbench")

Operation = Callable[[], Awaitable[Any]]
Analyzer = Callable[..., Any]


def analyzer_operation(
    analyze: Analyzer,
    path: str | Path,
    options: dict[str, Any] | None = None,
) -> Operation:
    """Wrap ``analyze(path, **options)`` as a zero-argument async operation.

    The analysis result is awaited if needed and then discarded.
    Synchronous analyzers run on the event loop thread, so their time is
    attributed to the invocation that called them.
    """
    target = str(path)
    kwargs = dict(options or {})

    async def operation() -> None:
        result = analyze(target, **kwargs)
        if inspect.isawaitable(result):
            await result

    return operation


def load_analyzer(reference: str) -> Analyzer:
    """Import an analyzer from a ``"package.module:attr"`` reference.

    The attribute part may be dotted (``"pkg.mod:Class.method"``).

    Raises:
        ValueError: If the reference is malformed, its module raises
            while importing, or it does not name a callable.
    """
    module_name, sep, attr_path = reference.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Invalid analyzer reference '{reference}'. Expected 'module:attr'.")

    try:
        obj: Any = importlib.import_module(module_name)
    except Exception as exc:
        raise ValueError(
            f"Cannot import module '{module_name}': {type(exc).__name__}: {exc}"
        ) from exc

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as exc:
            raise ValueError(f"'{module_name}' has no attribute '{attr_path}'") from exc

    if not callable(obj):
        raise ValueError(f"Analyzer '{reference}' is not callable.")

    log.debug("Loaded analyzer %s", reference)
    return obj
