"""dirbench: compare directory-analysis implementations by wall-clock time."""

__version__ = "0.1.0"
