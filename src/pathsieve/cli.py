"""CLI entry point for pathsieve — I/O boundary only."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from pathsieve import PathsieveError
from pathsieve.filter import PathFilter, Resolution
from pathsieve.pattern import validate_patterns


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser for the ``pathsieve`` command.
    """
    parser = argparse.ArgumentParser(
        prog="pathsieve",
        description="print the paths kept by include/exclude patterns",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        metavar="PATH",
        help="Candidate paths (default: read one per line from stdin)",
    )
    parser.add_argument(
        "-i",
        "--include",
        action="append",
        default=[],
        dest="include_patterns",
        help="Keep paths matching pattern (can be specified multiple times)",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        action="append",
        default=[],
        dest="exclude_patterns",
        help="Drop paths matching glob pattern (can be specified multiple times)",
    )
    parser.add_argument(
        "--include-priority",
        action="store_true",
        dest="include_priority",
        help="Keep paths matched by both an include and an exclude pattern",
    )
    parser.add_argument(
        "--lexical",
        action="store_true",
        help="Normalize paths without touching the filesystem "
        "(nonexistent paths can match)",
    )
    parser.add_argument(
        "--check-patterns",
        action="store_true",
        dest="check_patterns",
        help="Fail on invalid glob patterns instead of skipping them",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log the matching decision for every path",
    )
    return parser


def run_pathsieve(argv: list[str] | None = None, stdin: TextIO | None = None) -> str:
    """Run pathsieve with provided CLI args and return the kept paths.

    Args:
        argv: Command-line argument list without program name. If ``None``,
            uses process arguments via ``argparse`` defaults.
        stdin: Source of candidate paths when none are given as arguments.
            Defaults to ``sys.stdin``.

    Returns:
        str: Kept paths, one per line, in input order.

    Raises:
        PathsieveError: On any user-facing validation error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    return _run_with_args(args, stdin)


def _check_patterns(args: argparse.Namespace) -> None:
    """Reject invalid glob patterns in either list.

    Args:
        args: Parsed CLI namespace.

    Raises:
        PathsieveError: If any pattern is not valid glob syntax.
    """
    errors = validate_patterns(args.include_patterns + args.exclude_patterns)
    if errors:
        raise PathsieveError("; ".join(str(exc) for exc in errors))


def _read_candidates(args: argparse.Namespace, stdin: TextIO | None) -> list[str]:
    if args.paths:
        return list(args.paths)
    source = stdin if stdin is not None else sys.stdin
    return [line.rstrip("\r\n") for line in source if line.strip()]


def _run_with_args(args: argparse.Namespace, stdin: TextIO | None = None) -> str:
    """Filter candidate paths for parsed arguments.

    Args:
        args: Parsed CLI namespace.
        stdin: Fallback source of candidate paths.

    Returns:
        str: Rendered output.

    Raises:
        PathsieveError: On any user-facing validation error.
    """
    if args.check_patterns:
        _check_patterns(args)

    path_filter = PathFilter(
        args.include_patterns,
        args.exclude_patterns,
        args.include_priority,
        resolution=Resolution.LEXICAL if args.lexical else Resolution.STRICT,
    )
    kept = [path for path in _read_candidates(args, stdin) if path_filter(path)]
    return "\n".join(kept)


def main() -> None:
    """Run the CLI entry point with process arguments.

    Parses args exactly once and writes kept paths to stdout.
    Exits with code 1 on user-facing errors.
    """
    parser = build_parser()
    args = parser.parse_args()  # single parse

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )

    try:
        output = _run_with_args(args)
    except PathsieveError as exc:
        sys.stderr.write(f"pathsieve: {exc}\n")
        sys.exit(1)

    if output:
        sys.stdout.write(output + "\n")
