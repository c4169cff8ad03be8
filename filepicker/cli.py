"""Command-line front door for filepicker.

Parses CLI options, loads environment settings, configures logging, then
either prints a plain listing or dispatches into the interactive browser.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path

from .app import run_browser
from .config import Settings, load_settings
from .errors import ReadError, TerminalModeError
from .file_model import Entry, read_directory
from .ui_theme import available_theme_names

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(settings: Settings) -> logging.Handler | None:
    """Attach a debug file handler when debug logging is enabled.

    Log output never goes to the terminal, which belongs to the TUI.
    """
    if not settings.debug:
        return None
    settings.log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(settings.log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("filepicker")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)
    return handler


def format_listing(entries: list[Entry]) -> str:
    """Render a non-interactive listing, one name per line, dirs suffixed ``/``."""
    return "".join(f"{entry.name}/\n" if entry.is_dir else f"{entry.name}\n" for entry in entries)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filepicker",
        description="Browse a directory tree, mark entries, and open files in $EDITOR.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Start directory. Defaults to current directory.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--list", action="store_true", help="Print the sorted listing and exit.")
    parser.add_argument(
        "--print-selection",
        action="store_true",
        help="Print marked paths to stdout after quitting.",
    )
    return parser


def main(argv: list[str] | None = None, default_path: Path | None = None) -> int:
    """Parse arguments, run the browser, and return the process exit code.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)

    settings = load_settings()
    if args.no_color:
        settings = replace(settings, no_color=True)
    if args.theme is not None:
        settings = replace(settings, theme_name=args.theme)
    configure_logging(settings)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path).resolve()
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")

    if args.list or not os.isatty(sys.stdin.fileno()):
        try:
            entries = read_directory(path)
        except ReadError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
        sys.stdout.write(format_listing(entries))
        return 0

    try:
        marked = run_browser(path, settings)
    except (ReadError, TerminalModeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130

    if args.print_selection:
        sys.stdout.write("".join(f"{marked_path}\n" for marked_path in marked))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
