"""Command-line entry point for the static forwarding simulator."""

from __future__ import annotations

import argparse
from contextlib import ExitStack
import logging
import sys
from typing import Optional, Sequence

from forwarding_sim.errors import SourceUnavailable
from forwarding_sim.router_core import StaticRouter
from forwarding_sim.services.packet_processing import process_stream

LOG_FORMAT = "%(asctime)s [%(levelname)s] forwarding_sim: %(message)s"
DEFAULT_DEBUG_LEVEL = 4

# -d の値と logging レベルの対応
_DEBUG_LEVELS = {
    0: logging.CRITICAL,
    1: logging.ERROR,
    2: logging.WARNING,
    3: logging.INFO,
    4: logging.DEBUG,
}


def _debug_level(value: str) -> int:
    try:
        level = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid debug level: {value}") from exc
    if level < 0:
        raise argparse.ArgumentTypeError("debug level must not be negative")
    return level


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="forwarding-sim",
        description=(
            "Decide how a statically configured router forwards each destination "
            "address. Input and output default to stdin and stdout."
        ),
    )
    parser.add_argument("-c", "--config", required=True, help="interface configuration file")
    parser.add_argument("-r", "--routes", required=True, help="route table file")
    parser.add_argument("-i", "--input", help="destination address file (default: stdin)")
    parser.add_argument("-o", "--output", help="decision output file (default: stdout)")
    parser.add_argument(
        "-d",
        "--debug",
        type=_debug_level,
        default=DEFAULT_DEBUG_LEVEL,
        help="diagnostic level, 0 (critical only) to 4 (debug)",
    )
    parser.add_argument(
        "--show-tables",
        action="store_true",
        help="print the loaded interface and route tables before processing",
    )
    return parser.parse_args(argv)


def configure_logging(debug: int) -> logging.Logger:
    level = _DEBUG_LEVELS.get(min(debug, DEFAULT_DEBUG_LEVEL), logging.DEBUG)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    logger = logging.getLogger("forwarding_sim")
    logger.setLevel(level)
    return logger


def _open_stream(path: str, mode: str):
    try:
        return open(path, mode, encoding="utf-8", errors="replace")
    except OSError as exc:
        raise SourceUnavailable(path, exc.strerror or str(exc)) from exc


def run(args: argparse.Namespace, logger: logging.Logger) -> int:
    try:
        router = StaticRouter.from_files(args.config, args.routes, logger=logger)
    except SourceUnavailable as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    logger.debug("Proper flags received.")

    if args.show_tables:
        print(router.show_ip_interface_brief(), file=sys.stderr)
        print(router.show_ip_route(), file=sys.stderr)

    with ExitStack() as stack:
        try:
            if args.input:
                source = stack.enter_context(_open_stream(args.input, "r"))
                logger.debug("Now opening input file %s", args.input)
            else:
                source = sys.stdin
                if hasattr(source, "reconfigure"):
                    source.reconfigure(errors="replace")
                print("No input file specified. Ready to use stdin.", file=sys.stderr)
            if args.output:
                sink = stack.enter_context(_open_stream(args.output, "w"))
                logger.debug("Now opening output file %s", args.output)
            else:
                sink = sys.stdout
        except SourceUnavailable as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1

        count = process_stream(router, source, sink)
        sink.flush()

    logger.info("Processed %d destination(s)", count)
    print("Packets done processing! Program will now exit.", file=sys.stderr)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logger = configure_logging(args.debug)
    return run(args, logger)


if __name__ == "__main__":  # pragma: no cover - 手動実行用
    sys.exit(main())
