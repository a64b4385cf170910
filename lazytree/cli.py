"""Command-line front door for lazytree.

Parses CLI options, configures logging, resolves the start directory, and
dispatches into the interactive browser or a one-shot ``--render``.
"""

from __future__ import annotations

import argparse
import os
import shutil
import sys
from pathlib import Path

from .navigation import TraversalMode
from .runtime import BrowserOptions, render_once, run_tree_browser
from .runtime.logs import configure_logging
from .ui_theme import available_theme_names


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _write_stdout(data: bytes) -> None:
    """Write raw bytes so directory names that are not valid UTF-8 survive."""
    sys.stdout.flush()
    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazytree",
        description="Browse cached directories as a tree and print or change to the chosen one.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Start directory. Defaults to current directory.")
    parser.add_argument(
        "--panel",
        action="store_true",
        help="Run as a framed panel: Enter changes directory instead of exiting.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--linear",
        dest="navigation_mode",
        action="store_const",
        const=TraversalMode.LINEAR,
        help="Up/Down visit every directory in order.",
    )
    mode.add_argument(
        "--hierarchical",
        dest="navigation_mode",
        action="store_const",
        const=TraversalMode.HIERARCHICAL,
        help="Up/Down stay among siblings; Left/Right change level.",
    )
    parser.add_argument("--cache", type=Path, default=None, help="Directory cache file to load and save.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--render", action="store_true", help="Print one frame and exit.")
    parser.add_argument("--height", type=_positive_int, default=None, help="Rows for --render (default: terminal).")
    parser.add_argument("--width", type=_positive_int, default=None, help="Columns for --render (default: terminal).")
    parser.add_argument("--log-file", type=Path, default=None, help="Write JSON logs to this file.")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More log detail (-v info, -vv debug).")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run lazytree.

    A modal run prints the chosen directory on stdout; aborting it exits
    with status 1.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.verbose)

    path = Path(args.path) if args.path is not None else Path.cwd()
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")

    options = BrowserOptions(
        start_path=str(path.absolute()),
        is_panel=args.panel,
        navigation_mode=args.navigation_mode,
        cache_path=args.cache,
        theme_name=args.theme,
    )

    if args.render:
        term = shutil.get_terminal_size((80, 24))
        rows = args.height if args.height is not None else term.lines
        cols = args.width if args.width is not None else term.columns
        for line in render_once(options, rows, cols):
            _write_stdout((line + "\n").encode("utf-8", errors="replace"))
        return

    if not (sys.stdin.isatty() and (sys.stdout.isatty() or sys.stderr.isatty())):
        raise SystemExit("lazytree needs an interactive terminal (use --render for a single frame).")

    result = run_tree_browser(options)
    if args.panel:
        return
    if result is None:
        raise SystemExit(1)
    _write_stdout(os.fsencode(result) + b"\n")


if __name__ == "__main__":
    main()
