"""Exceptions raised by the benchmark harness."""

from __future__ import annotations


class BenchError(Exception):
    """Base class for benchmark harness errors."""


class DuplicateNameError(BenchError):
    """A candidate with this name is already registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Candidate '{name}' is already registered.")
        self.name = name


class CandidateExecutionError(BenchError):
    """A candidate's operation failed during a timed invocation.

    The original exception is available as ``cause`` (and as
    ``__cause__``, so tracebacks show both).
    """

    def __init__(self, candidate: str, cause: BaseException) -> None:
        super().__init__(f"Candidate '{candidate}' failed: {type(cause).__name__}: {cause}")
        self.candidate = candidate
        self.cause = cause
        self.__cause__ = cause


class InsufficientSamplesError(BenchError):
    """A summary was requested for a candidate with no samples."""

    def __init__(self, candidate: str = "") -> None:
        if candidate:
            message = f"Candidate '{candidate}' has no samples to summarize."
        else:
            message = "Cannot summarize an empty sample sequence."
        super().__init__(message)
        self.candidate = candidate
