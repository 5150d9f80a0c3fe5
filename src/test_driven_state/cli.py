"""CLI entrypoint: verify implementations and chart programs from the shell."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import TypeVar

from pydantic import ValidationError

from test_driven_state import __version__
from test_driven_state.config import TdsSettings
from test_driven_state.errors import MissingProgramError, ObjectLoadError
from test_driven_state.implementation import Implementation
from test_driven_state.loader import load_object
from test_driven_state.logging import configure_logging
from test_driven_state.program import Program
from test_driven_state.verification import format_report

logger = logging.getLogger(__name__)

T = TypeVar("T")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tds",
        description="Verify state machine implementations against declared traces",
    )
    parser.add_argument("--version", action="version", version=f"test-driven-state {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    verify = subparsers.add_parser("verify", help="Replay traces against an implementation")
    verify.add_argument(
        "implementation",
        help="Implementation reference in the form 'package.module:attribute'",
    )
    verify.add_argument(
        "--program",
        default=None,
        help="Program reference (defaults to the program bound to the implementation)",
    )

    chart = subparsers.add_parser("chart", help="Print a Mermaid state diagram of a program")
    chart.add_argument(
        "program",
        help="Program (or bound Implementation) reference in the form 'package.module:attribute'",
    )
    chart.add_argument(
        "--distinct",
        action="store_true",
        default=None,
        help="Emit repeated edges once (default from TDS_CHART_DISTINCT)",
    )

    return parser


def _load(reference: str, expected: type[T]) -> T:
    obj = load_object(reference)
    if not isinstance(obj, expected):
        raise ObjectLoadError(
            f"{reference!r} is a {type(obj).__name__}, expected {expected.__name__}"
        )
    return obj


def _verify(args: argparse.Namespace, settings: TdsSettings) -> int:
    impl = _load(args.implementation, Implementation)
    program = impl.program
    if args.program is not None:
        program = _load(args.program, Program)
    if program is None:
        raise MissingProgramError()

    records = asyncio.run(impl.verify(program))
    print(format_report(program, records, settings))

    failed = [r for r in records if not r.passed]
    logger.info(
        "Verification finished",
        extra={"records": len(records), "failed": len(failed)},
    )
    return 1 if failed else 0


def _chart(args: argparse.Namespace, settings: TdsSettings) -> int:
    obj = load_object(args.program)
    if isinstance(obj, Implementation):
        if obj.program is None:
            raise MissingProgramError()
        obj = obj.program
    if not isinstance(obj, Program):
        raise ObjectLoadError(f"{args.program!r} is a {type(obj).__name__}, expected Program")

    distinct = settings.chart_distinct if args.distinct is None else args.distinct
    print(obj.chart(distinct=distinct))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = TdsSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your TDS_* environment):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level, json_output=settings.log_json)

    try:
        if args.command == "verify":
            return _verify(args, settings)
        if args.command == "chart":
            return _chart(args, settings)

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except (ObjectLoadError, MissingProgramError) as e:
        logger.error(str(e))
        print(str(e), file=sys.stderr)
        return 2

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
