"""Main interactive event loop for the terminal UI.

Single-threaded: render when dirty, block on input for a bounded interval,
dispatch the key. Idle wakeups only check for resize and status expiry.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from .config import POLL_TIMEOUT_MS
from .input import read_key
from .render import RenderContext, listing_rows, render_frame, scroll_start_for_cursor
from .state import AppState
from .terminal import TerminalController
from .ui_theme import UITheme


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``."""

    handle_key: Callable[[str], bool]
    read_key: Callable[[int, int], str] = read_key
    render: Callable[[RenderContext, int], None] = render_frame


def _render_context(state: AppState, width: int, height: int, theme: UITheme) -> RenderContext:
    browser = state.browser
    state.list_start = scroll_start_for_cursor(
        browser.cursor,
        state.list_start,
        listing_rows(height),
        len(browser.entries),
    )
    return RenderContext(
        cwd=browser.cwd,
        entries=browser.entries,
        cursor=browser.cursor,
        selection=browser.selection,
        list_start=state.list_start,
        width=width,
        height=height,
        status_message=state.status_message,
        theme=theme,
    )


def normalize_enter(state: AppState, key: str) -> str | None:
    """Fold CR, LF, and CR+LF into one ``ENTER``; ``None`` means swallow the key."""
    if key == "ENTER_LF" and state.skip_next_lf:
        state.skip_next_lf = False
        return None
    state.skip_next_lf = key == "ENTER_CR"
    if key in {"ENTER_CR", "ENTER_LF"}:
        return "ENTER"
    return key


def run_main_loop(
    state: AppState,
    terminal: TerminalController,
    stdin_fd: int,
    theme: UITheme,
    callbacks: RuntimeLoopCallbacks,
    poll_timeout_ms: int = POLL_TIMEOUT_MS,
) -> None:
    """Run the interactive loop until a quit action occurs.

    The caller owns the terminal mode scope; this function only draws and
    reads. Exceptions other than ``KeyboardInterrupt`` propagate.
    """
    while True:
        size = terminal.size()
        current_size = (size.columns, size.lines)
        if current_size != state.last_size:
            state.last_size = current_size
            state.dirty = True
        state.expire_status(time.monotonic())

        if state.dirty:
            context = _render_context(state, size.columns, size.lines, theme)
            callbacks.render(context, terminal.stdout_fd)
            state.dirty = False

        try:
            key = callbacks.read_key(stdin_fd, poll_timeout_ms)
        except KeyboardInterrupt:
            continue
        if key == "":
            continue
        normalized = normalize_enter(state, key)
        if normalized is None:
            continue
        if callbacks.handle_key(normalized):
            break
