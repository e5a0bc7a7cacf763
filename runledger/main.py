"""
Command-line entry point.

Reads a ledger document, evaluates its running balance and prints the
re-aligned document to stdout. Parse errors are rendered to stderr against the
source; evaluation errors are reported as a single message.

Exit status: 0 on success, 1 for parse errors or unreadable input, 2 for
evaluation errors or invalid configuration.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from runledger.diagnostics import render_diagnostics
from runledger.errors import EvalError, ParseError
from runledger.evaluator import evaluate
from runledger.parser import parse_document
from runledger.printer import DEFAULT_PRECISION, pretty_print
from runledger.settings import LOG_FORMAT, LOG_LEVELS, load_settings

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PARSE_ERROR = 1
EXIT_EVAL_ERROR = 2
EXIT_CONFIG_ERROR = 2


def process(text: str, precision: int = DEFAULT_PRECISION) -> str:
    """Parse, evaluate and re-render a document.

    Raises:
        ParseError: if any line does not parse
        EvalError: if the arithmetic is undefined (e.g. interval / interval)
    """
    document = parse_document(text)
    evaluate(document)
    return pretty_print(document, precision)


def read_source(path: str) -> str:
    if path == '-':
        return sys.stdin.read()
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="runledger",
        description="Evaluate a running-ledger document and print it with aligned subtotals.",
    )
    parser.add_argument(
        "path",
        help="Path to the ledger document, or '-' to read standard input.",
    )
    parser.add_argument(
        "--precision",
        type=int,
        help=f"Decimal places shown for values (default: {DEFAULT_PRECISION}, or RUNLEDGER_PRECISION).",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (default: WARNING, or RUNLEDGER_LOG_LEVEL).",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(precision=args.precision, log_level=args.log_level)
    except ValidationError as e:
        print(f"error: invalid configuration: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT, stream=sys.stderr)

    source_id = '<stdin>' if args.path == '-' else args.path
    try:
        text = read_source(args.path)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read {source_id}: {e}")
        print(f"error: cannot read {source_id}: {e}", file=sys.stderr)
        return EXIT_PARSE_ERROR

    try:
        output = process(text, settings.precision)
    except ParseError as e:
        sys.stderr.write(render_diagnostics(source_id, text, e.diagnostics))
        return EXIT_PARSE_ERROR
    except EvalError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_EVAL_ERROR

    sys.stdout.write(output)
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
