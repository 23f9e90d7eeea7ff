"""Path filtering: include/exclude pattern sets with include-priority tie-break."""

from __future__ import annotations

import enum
import logging
import os
from collections.abc import Iterable
from pathlib import Path

from pathsieve.pattern import (
    CompiledPattern,
    DiagnosticSink,
    MatchTarget,
    compile_exclude,
    compile_include,
)

logger = logging.getLogger(__name__)

StrPath = str | os.PathLike[str]


class Resolution(enum.Enum):
    """How a candidate path is turned into the string globs match against.

    ``STRICT`` canonicalizes through the filesystem and requires the path
    to exist. ``LEXICAL`` only makes the path absolute and collapses
    ``.``/``..``; symlinks are left alone.
    """

    STRICT = "strict"
    LEXICAL = "lexical"


def _resolve(path: StrPath, resolution: Resolution) -> Path:
    """Return the absolute form of *path* used for glob matching.

    Raises:
        OSError: If the path cannot be resolved.
        RuntimeError: On symlink loops (older interpreters).
    """
    raw = os.fspath(path)
    if not raw:
        raise FileNotFoundError("empty path")
    if resolution is Resolution.LEXICAL:
        return Path(os.path.abspath(raw))
    # resolve() collapses 'file/..' textually; stat() rejects it
    os.stat(raw)
    return Path(raw).resolve(strict=True)


def _base_name(path: StrPath) -> str:
    """Return the final component of *path*, or ``""`` when there is none."""
    name = Path(path).name
    return "" if name == ".." else name


class PathFilter:
    """Decide whether paths are kept, given include and exclude patterns.

    Patterns are compiled once, so a single instance can be applied to
    every path of a walk, from any number of threads.

    Decision for a path matched by the include set (``included``) and/or
    the exclude set (``excluded``):

    ========  ========  ===========================
    included  excluded  result
    ========  ========  ===========================
    yes       yes       ``include_priority``
    yes       no        kept
    no        yes       dropped
    no        no        kept only if no includes
    ========  ========  ===========================

    Paths that cannot be resolved are always dropped.
    """

    def __init__(
        self,
        include_patterns: Iterable[str] | None = None,
        exclude_patterns: Iterable[str] | None = None,
        include_priority: bool = False,
        *,
        resolution: Resolution = Resolution.STRICT,
        sink: DiagnosticSink | None = None,
    ) -> None:
        """Initialize and compile both pattern sets.

        Args:
            include_patterns: Patterns a path must match to be kept. Empty
                or ``None`` keeps everything not excluded.
            exclude_patterns: Glob patterns that drop a path.
            include_priority: Result when a path matches both sets.
            resolution: Path resolution mode.
            sink: Diagnostics receiver. Defaults to this module's logger.
        """
        self._sink: DiagnosticSink = sink if sink is not None else logger
        self._resolution = resolution
        self._include_priority = include_priority
        self._includes: tuple[CompiledPattern, ...] = tuple(
            compile_include(p, self._sink) for p in include_patterns or ()
        )
        self._excludes: tuple[CompiledPattern, ...] = tuple(
            compile_exclude(p, self._sink) for p in exclude_patterns or ()
        )

    @property
    def include_patterns(self) -> tuple[str, ...]:
        return tuple(p.source for p in self._includes)

    @property
    def exclude_patterns(self) -> tuple[str, ...]:
        return tuple(p.source for p in self._excludes)

    @property
    def include_priority(self) -> bool:
        return self._include_priority

    @property
    def resolution(self) -> Resolution:
        return self._resolution

    def should_include(self, path: StrPath) -> bool:
        """Return whether *path* should be kept.

        Args:
            path: Candidate path, absolute or relative to the working
                directory.

        Returns:
            bool: ``True`` to keep the path. ``False`` when it is filtered
            out or cannot be resolved.
        """
        try:
            canonical = _resolve(path, self._resolution)
        except (OSError, RuntimeError) as exc:
            self._sink.error("Failed to canonicalize path: %s", exc)
            return False

        target = MatchTarget(path_str=str(canonical), file_name=_base_name(path))
        included = any(p.matches(target) for p in self._includes)
        excluded = any(p.matches(target) for p in self._excludes)

        if included and excluded:
            result = self._include_priority
        elif included:
            result = True
        elif excluded:
            result = False
        else:
            result = not self._includes

        self._sink.debug(
            "Checking path: %r, included: %s, excluded: %s, decision: %s",
            target.path_str,
            included,
            excluded,
            result,
        )
        return result

    __call__ = should_include


def should_include(
    path: StrPath,
    include_patterns: Iterable[str],
    exclude_patterns: Iterable[str],
    include_priority: bool = False,
    *,
    resolution: Resolution = Resolution.STRICT,
    sink: DiagnosticSink | None = None,
) -> bool:
    """Return whether *path* should be kept under the given patterns.

    One-shot form of :class:`PathFilter`; callers checking many paths
    should build a ``PathFilter`` once instead.
    """
    path_filter = PathFilter(
        include_patterns,
        exclude_patterns,
        include_priority,
        resolution=resolution,
        sink=sink,
    )
    return path_filter.should_include(path)
