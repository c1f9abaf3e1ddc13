"""Command line interface for matrixops.

Usage:
    matrix operation [source1 [source2]]

Operations:
    dims        Print "rows cols"
    transpose   Print the transpose
    mean        Print the column means, tab separated
    add         Print source1 + source2
    multiply    Print the matrix product source1 . source2 (alias: dot)

A missing source1, or "-", reads the matrix from standard input.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .core.config import get_settings
from .core.errors import MatrixError
from .core.logging import get_context_logger, setup_logging
from .math.matrix import Matrix, format_vector, parse
from .math.numeric import NUMBER_TYPES, get_number_type

USAGE_TEXT = "Usage: matrix operation [source1 [source2]]\n"
STDIN_SOURCE = "-"

UNARY_OPERATIONS = ("dims", "transpose", "mean")
BINARY_OPERATIONS = ("add", "multiply", "dot")


class CommandError(Exception):
    """A failure to report to the user, prefixed with what was being done."""

    def __init__(self, context: str, cause: Exception):
        self.context = context
        self.cause = cause
        super().__init__(f"{context}: {cause}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="matrix",
        description="Basic operations on tab or space separated integer matrices.",
    )
    parser.add_argument(
        "operation",
        nargs="?",
        help="One of: " + ", ".join(UNARY_OPERATIONS + BINARY_OPERATIONS),
    )
    parser.add_argument(
        "sources",
        nargs="*",
        metavar="source",
        help="Matrix file (default or '-': standard input).",
    )
    parser.add_argument(
        "--type",
        dest="number_type",
        choices=sorted(NUMBER_TYPES),
        help="Element type (default: i32, or MATRIX_NUMBER_TYPE).",
    )
    parser.add_argument(
        "--keep-blank-lines",
        action="store_true",
        help="Treat blank lines as empty rows instead of skipping them.",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (default: WARNING, or MATRIX_LOG_LEVEL).",
    )
    parser.add_argument(
        "--log-format",
        choices=["text", "json"],
        help="Log record format.",
    )
    return parser


def usage() -> int:
    sys.stderr.write(USAGE_TEXT)
    return 1


def read_source(source: str | None) -> str:
    """Read the full text of a file, or of stdin for None / '-'."""
    if source is None or source == STDIN_SOURCE:
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def load_matrix(
    index: int,
    source: str | None,
    number_type: str,
    skip_blank_lines: bool,
) -> Matrix:
    try:
        text = read_source(source)
    except (OSError, UnicodeDecodeError) as exc:
        raise CommandError(f"Error reading matrix {index}", exc) from exc

    try:
        return parse(text, number_type, skip_blank_lines=skip_blank_lines)
    except MatrixError as exc:
        raise CommandError(f"Error parsing matrix {index}", exc) from exc


def run_operation(operation: str, first: Matrix, second: Matrix | None = None) -> str:
    """Apply an operation and return the text to print."""
    if operation == "dims":
        rows, cols = first.dims()
        return f"{rows} {cols}\n"
    if operation == "transpose":
        return first.transpose().to_text()
    if operation == "mean":
        return format_vector(first.column_means(), first.number_type) + "\n"

    if second is None:
        raise ValueError(f"Operation {operation!r} needs two matrices")
    if operation == "add":
        return first.add(second).to_text()
    if operation in ("multiply", "dot"):
        return first.dot(second).to_text()

    raise ValueError(f"Unknown operation {operation!r}")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_format)
    logger = get_context_logger(__name__, operation=args.operation)

    operation = args.operation
    sources = args.sources
    if operation not in UNARY_OPERATIONS + BINARY_OPERATIONS or len(sources) > 2:
        return usage()
    if operation in BINARY_OPERATIONS and len(sources) < 2:
        return usage()
    if operation in UNARY_OPERATIONS and len(sources) > 1:
        logger.warning("Ignoring extra source %r for %s", sources[1], operation)

    settings = get_settings()
    try:
        number_type = get_number_type(args.number_type or settings.NUMBER_TYPE).name
    except MatrixError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    skip_blank_lines = settings.SKIP_BLANK_LINES and not args.keep_blank_lines

    try:
        first = load_matrix(1, sources[0] if sources else None, number_type, skip_blank_lines)
        second = None
        if operation in BINARY_OPERATIONS:
            second = load_matrix(2, sources[1], number_type, skip_blank_lines)
        logger.debug(
            "Loaded operands",
            context={
                "number_type": number_type,
                "first": first.dims(),
                "second": second.dims() if second is not None else None,
            },
        )

        try:
            output = run_operation(operation, first, second)
        except MatrixError as exc:
            raise CommandError(f"Error computing {operation}", exc) from exc
    except CommandError as exc:
        logger.debug("Command failed", context={"error": exc.cause.__class__.__name__}, exc_info=True)
        print(exc, file=sys.stderr)
        return 1

    sys.stdout.write(output)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
