#!/usr/bin/env python
"""
Command-line entry point for diskhound.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from rich.console import Console

from . import __version__
from .config import build_scan_config, load_defaults, platform_config_default
from .errors import ConfigurationError, FatalRootError
from .renderer import render_text, to_json
from .scanner import scan
from .size_utils import format_bytes_binary


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG = 2
EXIT_ROOT = 3


def _make_console() -> Console:
    if sys.stdout.isatty():
        return Console()
    # Captured or redirected output: widen and disable styling to avoid ANSI
    return Console(width=200, force_terminal=False, no_color=True, highlight=False, soft_wrap=False)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def _epilog() -> str:
    return (
        "Examples:\n"
        "  diskhound ~/projects --top 5\n"
        "  diskhound / -x proc -x sys --depth 2 --min-size 1GiB\n"
        "  diskhound . --json > usage.json\n"
        "\n"
        "Sizes accept B, K/KB/KiB, M/MB/MiB, G/GB/GiB, T/TB/TiB (all 1024-based).\n"
        f"Default config path: {platform_config_default()}\n"
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="diskhound",
        description="Find the largest subdirectories in a given path.",
        epilog=_epilog(),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("path", nargs="?", default=".", help="Directory to scan (defaults to current directory).")
    p.add_argument("-n", "--top", type=int, default=None, metavar="N", help="Number of groups to show (default: 10).")
    p.add_argument(
        "-x", "--exclude", action="append", default=None, metavar="NAME",
        help="Directory name to skip everywhere in the tree. Repeatable.",
    )
    p.add_argument("-d", "--depth", type=int, default=None, metavar="N", help="Path components used for grouping (default: 1).")
    p.add_argument("-m", "--min-size", default=None, metavar="SIZE", help="Hide groups smaller than SIZE, e.g. 500K, 100MB, 1.5GiB.")
    p.add_argument("-j", "--json", action="store_true", help="Emit a JSON summary instead of the bar chart.")
    p.add_argument("-c", "--config", default=None, help="Path to config TOML (overrides DISKHOUND_CONFIG & default).")
    p.add_argument("-w", "--workers", type=int, default=None, metavar="N", help="Threads used to list directories (default: 1).")
    p.add_argument("-l", "--log-skipped", action="store_true", help="Log entries that could not be read instead of skipping silently.")
    p.add_argument("-p", "--progress", action="store_true", help="Show a progress spinner on stderr while scanning.")
    p.add_argument("-v", "--verbose", action="store_true", help="Verbose logging.")
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    args = build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    try:
        defaults = load_defaults(args.config)
        config = build_scan_config(
            args.path,
            top=args.top,
            depth=args.depth,
            exclude=args.exclude,
            min_size=args.min_size,
            workers=args.workers,
            log_skipped=args.log_skipped,
            defaults=defaults,
        )
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_CONFIG

    if defaults.source:
        logger.debug("using defaults from %s", defaults.source)

    try:
        result = scan(config, show_progress=args.progress and not args.json)
    except FatalRootError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ROOT

    if args.json:
        print(to_json(result, format_bytes_binary))
    else:
        render_text(result, _make_console(), format_bytes_binary)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
