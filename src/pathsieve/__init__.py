"""pathsieve — include/exclude path filtering for file-walking tools."""

from pathsieve.filter import PathFilter, Resolution, should_include
from pathsieve.pattern import PatternError, compile_glob, validate_patterns

__version__ = "0.1.0"

__all__ = [
    "PathFilter",
    "PathsieveError",
    "PatternError",
    "Resolution",
    "compile_glob",
    "should_include",
    "validate_patterns",
]


class PathsieveError(Exception):
    """User-facing CLI error.

    Raised for invalid arguments and rejected patterns. The message is
    printed to stderr and the process exits with code 1.
    """
