"""Command-line front door for lazyrunner.

Parses CLI options, validates the root directory, and configures logging.
Then dispatches into the interactive browser runtime.
"""

from __future__ import annotations

import argparse
import locale
from pathlib import Path

from .app import run_browser
from .config import DEFAULT_PREVIEW_LINES, DEFAULT_STYLE, build_config
from .log import configure_logging


def _nonnegative_int(value: str) -> int:
    """argparse type for non-negative integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazyrunner",
        description="Browse a directory tree and run .ts / .js scripts from the terminal.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Root directory. Defaults to current directory.")
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for file previews.")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output.")
    parser.add_argument(
        "--preview-lines",
        type=_nonnegative_int,
        default=DEFAULT_PREVIEW_LINES,
        help=f"Lines of the selected file to preview (0 disables, default {DEFAULT_PREVIEW_LINES}).",
    )
    parser.add_argument("--list", action="store_true", help="Print the root listing and exit.")
    parser.add_argument("--log-level", default=None, help="Write logs at LEVEL (debug, info, warning, error).")
    return parser


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch the browser rooted at the chosen directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args()

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path) if args.path is not None else default_path
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")

    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        pass

    config = build_config(
        path,
        style=args.style,
        no_color=args.no_color,
        preview_lines=args.preview_lines,
        log_level=args.log_level,
    )
    configure_logging(config.log_level, config.log_dir)
    run_browser(config, list_only=args.list)


if __name__ == "__main__":
    main()
