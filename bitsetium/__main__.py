#!/usr/bin/env python3
"""
bitsetium/__main__.py — command-line interface
==============================================

Usage::

    python -m bitsetium eval '(union (set 1 3) (complement (range 0 8)))'
    python -m bitsetium eval '(set 5 9)' --capacity 1024 --limit 10
    python -m bitsetium capacities

Exit codes
----------
0   success
1   the expression is malformed or names an index past the capacity
2   usage or infrastructure error (bad option, unknown capacity, crash)
"""

from __future__ import annotations

import argparse
import itertools
import logging
import os
import sys
import textwrap
from typing import List, Optional, Sequence

from termcolor import colored

from bitsetium import __version__
from bitsetium.capacities import CAPACITIES
from bitsetium.config import EvalConfig
from bitsetium.errors import BitsetError, ConfigurationError
from bitsetium.search import iter_set
from bitsetium.sexpr import evaluate

_log = logging.getLogger("bitsetium")

# Exit codes ----------------------------------------------------------------

EXIT_OK: int = 0
EXIT_ERROR: int = 1
EXIT_INFRA: int = 2


# ===========================================================================
# Utility helpers
# ===========================================================================

def _configure_logging(verbosity: int) -> None:
    """Set up the ``bitsetium`` logger.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    handler.set_name("bitsetium-cli")
    root = logging.getLogger("bitsetium")
    # repeated in-process calls replace the previous CLI handler
    for old in [h for h in root.handlers if h.get_name() == "bitsetium-cli"]:
        root.removeHandler(old)
    root.setLevel(level)
    root.addHandler(handler)


def _use_color(args: argparse.Namespace) -> bool:
    if args.no_color or os.environ.get("NO_COLOR"):
        return False
    return sys.stdout.isatty()


def _paint(text: str, enabled: bool, color: str, bold: bool = False) -> str:
    if not enabled:
        return text
    return colored(text, color, attrs=["bold"] if bold else None)


# ===========================================================================
# Subcommands
# ===========================================================================

# ---------------------------------------------------------------------------
# eval
# ---------------------------------------------------------------------------

def cmd_eval(args: argparse.Namespace) -> int:
    """Evaluate a set expression and list its first set indices."""
    config = EvalConfig(
        capacity=args.capacity if args.capacity is not None else EvalConfig.capacity,
        list_limit=args.limit,
        lower_bound=args.start,
        color=_use_color(args),
    )
    problems = config.validate()
    if problems:
        for problem in problems:
            _log.error("Invalid option: %s", problem)
        return EXIT_INFRA

    _log.info("Evaluating %r at capacity %s", args.expr, config.capacity)
    try:
        value = evaluate(args.expr, config=config)
    except ConfigurationError as exc:
        _log.error("%s", exc)
        return EXIT_INFRA
    except BitsetError as exc:
        _log.error("%s", exc)
        return EXIT_ERROR

    found: List[int] = list(itertools.islice(
        iter_set(value, config.lower_bound), config.list_limit + 1))
    truncated = len(found) > config.list_limit
    found = found[:config.list_limit]

    print(_paint(str(value), config.color, "cyan", bold=True))
    if not found:
        print(_paint("(no set bits)", config.color, "yellow"))
    else:
        listing = ", ".join(str(i) for i in found)
        if truncated:
            listing += ", ..."
        print(f"{_paint('set', config.color, 'green')}: {listing}")
    return EXIT_OK


# ---------------------------------------------------------------------------
# capacities
# ---------------------------------------------------------------------------

def cmd_capacities(args: argparse.Namespace) -> int:
    """List the pre-named capacities."""
    color = _use_color(args)
    for bits in sorted(CAPACITIES):
        cls = CAPACITIES[bits]
        unset = "yes" if cls.SUPPORTS_UNSET else "no"
        name = _paint(f"{cls.__name__:<14}", color, "cyan")
        print(f"{name} max_set_index={cls.MAX_SET_INDEX:<10} unset={unset}")
    print(f"\n{len(CAPACITIES)} capacities available.")
    return EXIT_OK


# ===========================================================================
# Argument parser construction
# ===========================================================================

def _build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="bitsetium",
        description="Evaluate lazy bitset compositions from set expressions.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            examples:
              bitsetium eval '(union (set 1 3) (set 2 3))'
              bitsetium eval '(difference (full) (range 0 100))' --limit 5
              bitsetium capacities
        """),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v info, -vv debug).",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable coloured output (also honours NO_COLOR).",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    p_eval = subparsers.add_parser(
        "eval",
        help="Evaluate a set expression.",
    )
    p_eval.add_argument("expr", help="S-expression, e.g. '(set 1 2 3)'.")
    p_eval.add_argument(
        "--capacity",
        default=None,
        help="Capacity of literal sets: a bit count or name (default 256).",
    )
    p_eval.add_argument(
        "--limit",
        type=int,
        default=EvalConfig.list_limit,
        help="Maximum number of indices to print.",
    )
    p_eval.add_argument(
        "--from",
        dest="start",
        type=int,
        default=EvalConfig.lower_bound,
        help="Lower bound of the listing.",
    )
    p_eval.set_defaults(func=cmd_eval)

    p_caps = subparsers.add_parser(
        "capacities",
        help="List the pre-named capacities.",
    )
    p_caps.set_defaults(func=cmd_capacities)

    return parser


# ===========================================================================
# Entry point
# ===========================================================================

def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point; returns the process exit code."""
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else EXIT_INFRA

    _configure_logging(args.verbose)

    if not hasattr(args, "func"):
        parser.print_help(sys.stderr)
        return EXIT_INFRA

    try:
        return args.func(args)
    except KeyboardInterrupt:
        _log.info("Interrupted by user.")
        return 130
    except Exception as exc:
        _log.error("Unhandled exception: %s", exc, exc_info=True)
        return EXIT_INFRA


if __name__ == "__main__":
    raise SystemExit(main())
