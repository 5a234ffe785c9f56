"""Batch runner: apply assignments and print expansions, one line at a time."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from shellvars.parsing.argument_splitter import ArgumentSplitter
from shellvars.variables import Variables

log = logging.getLogger(__name__)

LOG_FORMAT = "shellvars: %(message)s"


def run_line(line: str, variables: Variables) -> str | None:
    """Run one line and return the text it prints, if any.

    ``let <statement>`` assigns; any other line is split into arguments,
    each expanded, and the words are joined with single spaces.
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None
    if stripped == "let" or stripped.startswith(("let ", "let\t")):
        variables.assign(stripped[3:])
        return None
    words: list[str] = []
    for argument in ArgumentSplitter(stripped):
        words.extend(variables.expand(argument))
    return " ".join(words)


def run_lines(lines: list[str], variables: Variables, verbose: bool = False) -> None:
    """Run each line, printing what it produces."""
    for line in lines:
        if verbose:
            log.debug("> %s", line.rstrip("\n"))
        result = run_line(line, variables)
        if result is not None:
            print(result)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    arg_parser = argparse.ArgumentParser(
        description="Apply typed shell assignments and print expanded text"
    )
    arg_parser.add_argument(
        "-c", "--command",
        action="append",
        default=[],
        help="Run a single line (may be repeated)",
    )
    arg_parser.add_argument(
        "-f", "--file",
        type=Path,
        help="Run lines from a file",
    )
    arg_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log each line before running it",
    )

    args = arg_parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )

    lines: list[str] = list(args.command)
    if args.file:
        if not args.file.exists():
            print(f"Error: File not found: {args.file}", file=sys.stderr)
            return 1
        lines.extend(args.file.read_text().splitlines())
    elif not args.command:
        lines.extend(sys.stdin.read().splitlines())

    run_lines(lines, Variables(), args.verbose)
    return 0


if __name__ == "__main__":
    sys.exit(main())
