"""Runtime composition layer for filepicker.

Builds the browser state, binds keys and the editor launcher to the
terminal, and runs the loop inside the raw-mode scope.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from functools import partial
from pathlib import Path

from .config import Settings
from .editor import EditorLauncher
from .errors import TerminalModeError
from .keys import KeyContext, build_key_registry, handle_key
from .loop import RuntimeLoopCallbacks, run_main_loop
from .render import listing_rows
from .state import AppState, BrowserState
from .terminal import TerminalController
from .ui_theme import resolve_theme

LOGGER = logging.getLogger(__name__)

CONTROLLING_TTY = "/dev/tty"


@contextmanager
def interactive_output_fd() -> Iterator[int]:
    """Yield the fd the browser draws on.

    That is stdout when it is a terminal; otherwise the controlling terminal
    is opened so redirected stdout only receives the final selection.
    """
    stdout_fd = sys.stdout.fileno()
    if os.isatty(stdout_fd):
        yield stdout_fd
        return
    try:
        tty_fd = os.open(CONTROLLING_TTY, os.O_WRONLY)
    except OSError as exc:
        raise TerminalModeError(
            f"stdout is not a terminal and {CONTROLLING_TTY} is unavailable: {exc}"
        ) from exc
    LOGGER.debug("stdout is redirected; drawing on %s", CONTROLLING_TTY)
    try:
        yield tty_fd
    finally:
        os.close(tty_fd)


def run_browser(start_dir: Path, settings: Settings) -> list[Path]:
    """Browse from ``start_dir`` until quit and return the marked paths.

    The initial listing happens before the terminal switches modes, so a
    ``ReadError`` there leaves the terminal untouched. ``TerminalModeError``
    propagates after best-effort restoration.
    """
    stdin_fd = sys.stdin.fileno()
    with interactive_output_fd() as out_fd:
        terminal = TerminalController(stdin_fd, out_fd)
        redirected = out_fd != sys.stdout.fileno()
        launcher = EditorLauncher(terminal.suspended, stdout_fd=out_fd if redirected else None)
        browser = BrowserState(start_dir, open_file=launcher.open)
        state = AppState(browser=browser)
        theme = resolve_theme(settings.theme_name, no_color=settings.no_color)

        registry = build_key_registry(
            KeyContext(
                state=state,
                visible_rows=lambda: listing_rows(terminal.size().lines),
            )
        )
        callbacks = RuntimeLoopCallbacks(handle_key=partial(handle_key, registry=registry))

        LOGGER.debug("starting in %s with theme %s", start_dir, theme.name)
        with terminal.raw_mode():
            run_main_loop(state, terminal, stdin_fd, theme, callbacks)
    LOGGER.debug("quit with %d marked paths", browser.selection.count())
    return browser.selection.sorted_paths()
