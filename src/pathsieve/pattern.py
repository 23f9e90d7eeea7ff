"""Pattern dialect: glob, prefix-wildcard and exact base-name rules.

A pattern string is compiled once into a tuple of rules. Include patterns
try, in order:

1. glob syntax against the canonical absolute path,
2. ``prefix*`` against the base name,
3. exact equality with the base name.

Exclude patterns use the glob rule only.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


class PatternError(ValueError):
    """Invalid glob syntax.

    Attributes:
        pattern: The offending pattern string.
        pos: Character offset where parsing failed.
        msg: Short description of the problem.
    """

    def __init__(self, pattern: str, pos: int, msg: str) -> None:
        super().__init__(f"invalid pattern {pattern!r} at position {pos}: {msg}")
        self.pattern = pattern
        self.pos = pos
        self.msg = msg


class DiagnosticSink(Protocol):
    """Anything that accepts ``logging``-style diagnostic calls.

    ``logging.Logger`` and ``logging.LoggerAdapter`` both satisfy it.
    """

    def debug(self, msg: str, *args: object) -> None: ...

    def warning(self, msg: str, *args: object) -> None: ...

    def error(self, msg: str, *args: object) -> None: ...


@dataclass(frozen=True, slots=True)
class MatchTarget:
    """Values a rule is matched against.

    Attributes:
        path_str: Canonical absolute path as a string.
        file_name: Base name of the path as the caller gave it.
    """

    path_str: str
    file_name: str


@dataclass(frozen=True, slots=True)
class GlobRule:
    """Glob matched against the full canonical path."""

    source: str
    regex: re.Pattern[str]

    def matches(self, target: MatchTarget) -> bool:
        return self.regex.fullmatch(target.path_str) is not None


@dataclass(frozen=True, slots=True)
class PrefixRule:
    """``foo*`` matched as a base-name prefix."""

    prefix: str

    def matches(self, target: MatchTarget) -> bool:
        return target.file_name.startswith(self.prefix)


@dataclass(frozen=True, slots=True)
class ExactRule:
    """Exact base-name equality."""

    name: str

    def matches(self, target: MatchTarget) -> bool:
        return target.file_name == self.name


Rule = GlobRule | PrefixRule | ExactRule


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A pattern string together with the rules it compiled to.

    Attributes:
        source: Original pattern string.
        rules: Rules tried in order; empty means the pattern never matches.
    """

    source: str
    rules: tuple[Rule, ...]

    def matches(self, target: MatchTarget) -> bool:
        return any(rule.matches(target) for rule in self.rules)


def _translate_class(pattern: str, start: int) -> tuple[str, int]:
    """Translate a ``[...]`` class beginning at *start*.

    Returns:
        tuple[str, int]: Regex fragment and index just past the closing ``]``.

    Raises:
        PatternError: If the class is not terminated.
    """
    # A ']' right after '[' or '[!' is a member, not the terminator.
    negated = pattern.startswith("!", start + 1)
    i = start + 2 if negated else start + 1
    close = pattern.find("]", i + 1)
    if close == -1:
        raise PatternError(pattern, start, "invalid range pattern")

    body = pattern[i:close]
    parts: list[str] = []
    j = 0
    while j < len(body):
        if j + 2 < len(body) and body[j + 1] == "-":
            low, high = body[j], body[j + 2]
            # reversed ranges match nothing
            if low <= high:
                parts.append(f"{re.escape(low)}-{re.escape(high)}")
            j += 3
        else:
            parts.append(re.escape(body[j]))
            j += 1

    if not parts:
        return ("." if negated else "(?!)"), close + 1
    return f"[{'^' if negated else ''}{''.join(parts)}]", close + 1


def _translate_stars(pattern: str, start: int) -> tuple[str, int]:
    """Translate a run of ``*`` beginning at *start*.

    Returns:
        tuple[str, int]: Regex fragment and index just past the run.

    Raises:
        PatternError: On ``***`` or a ``**`` that is not a whole component.
    """
    end = start
    while end < len(pattern) and pattern[end] == "*":
        end += 1
    count = end - start

    if count == 1:
        return ".*", end
    if count > 2:
        raise PatternError(
            pattern, start + 2, "wildcards are either regular `*` or recursive `**`"
        )

    if start > 0 and pattern[start - 1] != "/":
        raise PatternError(
            pattern, start - 1, "recursive wildcards must form a single path component"
        )
    if end == len(pattern):
        return ".*", end
    if pattern[end] != "/":
        raise PatternError(
            pattern, end, "recursive wildcards must form a single path component"
        )
    # '**/' swallows its slash and matches zero or more directories.
    return "(?:.*/)?", end + 1


def compile_glob(pattern: str) -> GlobRule:
    """Compile *pattern* into a glob rule.

    ``*`` matches across ``/``; ``**`` must be a whole path component.

    Args:
        pattern: Glob pattern string.

    Returns:
        GlobRule: Compiled rule anchored at both ends.

    Raises:
        PatternError: If *pattern* is not valid glob syntax.
    """
    out: list[str] = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "*":
            fragment, i = _translate_stars(pattern, i)
        elif ch == "?":
            fragment, i = ".", i + 1
        elif ch == "[":
            fragment, i = _translate_class(pattern, i)
        else:
            fragment, i = re.escape(ch), i + 1
        out.append(fragment)
    return GlobRule(source=pattern, regex=re.compile("".join(out), re.DOTALL))


def compile_include(pattern: str, sink: DiagnosticSink | None = None) -> CompiledPattern:
    """Compile an include pattern into glob, prefix and exact rules.

    An invalid glob drops only the glob rule; the base-name rules remain.
    """
    diag = sink if sink is not None else logger
    rules: list[Rule] = []
    try:
        rules.append(compile_glob(pattern))
    except PatternError as exc:
        diag.debug("Include pattern is not a valid glob, using name rules: %s", exc)
    if pattern.endswith("*"):
        rules.append(PrefixRule(prefix=pattern[:-1]))
    rules.append(ExactRule(name=pattern))
    return CompiledPattern(source=pattern, rules=tuple(rules))


def compile_exclude(pattern: str, sink: DiagnosticSink | None = None) -> CompiledPattern:
    """Compile an exclude pattern into its glob rule.

    An invalid glob yields a pattern that never matches.
    """
    diag = sink if sink is not None else logger
    try:
        rule = compile_glob(pattern)
    except PatternError as exc:
        diag.warning("Ignoring invalid exclude pattern: %s", exc)
        return CompiledPattern(source=pattern, rules=())
    return CompiledPattern(source=pattern, rules=(rule,))


def validate_patterns(patterns: list[str] | tuple[str, ...]) -> list[PatternError]:
    """Return a ``PatternError`` for every pattern that is not a valid glob."""
    errors: list[PatternError] = []
    for pattern in patterns:
        try:
            compile_glob(pattern)
        except PatternError as exc:
            errors.append(exc)
    return errors
