"""Command-line front door for ratch.

Parses the interval and flags, treats everything from the first positional
argument on as the command to watch, and dispatches into the runtime loop.
"""

from __future__ import annotations

import argparse
import math
import os
import shlex
import sys
from collections.abc import Sequence

from .config import WatchDefaults, config_path, load_watch_defaults
from .logs import default_log_path, setup_logger
from .runtime import WatchOptions, run_watch


def _positive_float(value: str) -> float:
    """argparse type for a positive, finite number of seconds."""
    try:
        parsed = float(value.strip())
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"could not take {value!r} as a float value") from exc
    if not math.isfinite(parsed) or parsed <= 0:
        raise argparse.ArgumentTypeError("interval must be a positive number of seconds")
    return parsed


def _stdin_is_tty() -> bool:
    try:
        return os.isatty(sys.stdin.fileno())
    except (AttributeError, OSError, ValueError):
        return False


def build_parser(defaults: WatchDefaults) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ratch",
        description="A better `watch`: re-run a command periodically and browse its output.",
    )
    parser.add_argument(
        "-n",
        "--interval",
        type=_positive_float,
        default=defaults.interval,
        metavar="SECONDS",
        help=f"Seconds between runs (default: {defaults.interval:g}).",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Print startup diagnostics and write a debug log.")
    parser.add_argument(
        "-u",
        "--unconstrain",
        action="store_true",
        help="Do not clamp the scroll position to the output bounds.",
    )
    parser.add_argument("command", nargs=argparse.REMAINDER, help="Command to watch, with its arguments.")
    return parser


def debug_report(options: WatchOptions) -> str:
    """Startup diagnostics printed by ``--debug`` before the screen is taken over."""
    lines = [
        f"Interval: {options.interval:g}s",
        f"Command: {shlex.join(options.command)}",
        f"Constrained: {'yes' if options.constrain else 'no'}",
        f"Max in-flight runs: {options.max_in_flight}",
        f"Config: {config_path()}",
        f"Log: {default_log_path()}",
    ]
    return "\n".join(lines) + "\n"


def main(argv: Sequence[str] | None = None) -> None:
    """Parse CLI arguments and watch the given command until the user quits."""
    defaults = load_watch_defaults()
    parser = build_parser(defaults)
    args = parser.parse_args(argv)

    command = list(args.command)
    if command and command[0] == "--":
        command = command[1:]
    if not command:
        parser.error("missing command to watch")

    options = WatchOptions(
        command=tuple(command),
        interval=args.interval,
        constrain=defaults.constrain and not args.unconstrain,
        max_in_flight=defaults.max_in_flight,
        status_seconds=defaults.status_seconds,
    )
    if args.debug:
        sys.stderr.write(debug_report(options))
        sys.stderr.flush()

    if not _stdin_is_tty():
        raise SystemExit("ratch: stdin is not a terminal")

    setup_logger(args.debug)
    run_watch(options)


if __name__ == "__main__":
    main()
