from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from graphql import GraphQLSyntaxError

from rowsync.app import read_rows, run_operation, strip_source
from rowsync.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run GraphQL operations and mirror their results into a row store"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Execute an operation and apply row directives")
    run.add_argument("document", type=str, help="Path to a .graphql file, or - for stdin")
    run.add_argument(
        "--var",
        dest="variables",
        action="append",
        default=[],
        metavar="NAME=JSON",
        help="Operation variable; the value is parsed as JSON, falling back to a string",
    )
    run.add_argument(
        "--operation-name",
        type=str,
        help="Operation to execute when the document defines several",
    )

    strip = subparsers.add_parser("strip", help="Print a document without row directives")
    strip.add_argument("document", type=str, help="Path to a .graphql file, or - for stdin")

    rows = subparsers.add_parser("rows", help="Print the stored rows of a table as JSON")
    rows.add_argument("table", type=str, help="Table name")

    return parser.parse_args(list(argv))


def _read_document(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"Cannot read document {path}: {exc.strerror}") from exc


def _parse_variables(pairs: Sequence[str]) -> dict[str, object]:
    variables: dict[str, object] = {}
    for pair in pairs:
        name, separator, raw = pair.partition("=")
        if not separator or not name.strip():
            raise ValueError(f"Invalid variable (expected NAME=JSON): {pair}")
        try:
            variables[name.strip()] = json.loads(raw)
        except json.JSONDecodeError:
            variables[name.strip()] = raw
    return variables


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        source = (
            _read_document(parsed_args.document)
            if parsed_args.command in {"run", "strip"}
            else ""
        )
        variables = (
            _parse_variables(parsed_args.variables) if parsed_args.command == "run" else {}
        )
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "run":
            result, reconciliation = run_operation(
                source,
                variables=variables,
                operation_name=parsed_args.operation_name,
            )
            for error in result.errors:
                log.error("GraphQL error: %s", error.message)
            log.info(
                "Operation applied: merged=%s, deleted=%s, skipped=%s",
                reconciliation.merged,
                reconciliation.deleted,
                reconciliation.skipped,
            )
            if not result.has_data:
                sys.exit(1)
        elif parsed_args.command == "strip":
            sys.stdout.write(strip_source(source) + "\n")
        elif parsed_args.command == "rows":
            rows = read_rows(parsed_args.table)
            sys.stdout.write(json.dumps(rows, indent=2, sort_keys=True) + "\n")
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except GraphQLSyntaxError as exc:
        log.error("Invalid GraphQL document: %s", exc.message)  # noqa: TRY400
        sys.exit(2)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
