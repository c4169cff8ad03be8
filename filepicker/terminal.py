"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle and alternate-screen switching, both as scoped
resources: ``raw_mode`` for the whole session and ``suspended`` for handing
the terminal to a child program.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

from .errors import TerminalModeError

ENTER_TUI_SEQUENCE = b"\x1b[?1049h\x1b[?25l"
LEAVE_TUI_SEQUENCE = b"\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Manage raw/alternate-screen transitions for one pair of tty descriptors."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except (termios.error, OSError) as exc:
            raise TerminalModeError(f"cannot read terminal attributes: {exc}") from exc
        self.tui_active = False

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        try:
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
            os.write(self.stdout_fd, ENTER_TUI_SEQUENCE)
        except (termios.error, OSError) as exc:
            raise TerminalModeError(f"cannot enter interactive mode: {exc}") from exc
        self.tui_active = True

    def disable_tui_mode(self) -> None:
        """Show the cursor, leave the alternate screen, and restore tty attributes."""
        try:
            os.write(self.stdout_fd, LEAVE_TUI_SEQUENCE)
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        except (termios.error, OSError) as exc:
            raise TerminalModeError(f"cannot leave interactive mode: {exc}") from exc
        self.tui_active = False

    def restore_best_effort(self) -> None:
        """Undo TUI mode ignoring individual failures; used on fatal paths."""
        with contextlib.suppress(OSError):
            os.write(self.stdout_fd, LEAVE_TUI_SEQUENCE)
        with contextlib.suppress(termios.error, OSError):
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        self.tui_active = False

    def size(self) -> os.terminal_size:
        """Return current terminal size, defaulting to 80x24 when unknown."""
        try:
            return os.get_terminal_size(self.stdout_fd)
        except OSError:
            return os.terminal_size((80, 24))

    @contextlib.contextmanager
    def raw_mode(self):
        """Bracket the session with TUI enter/exit.

        A clean exit must restore the terminal or raise ``TerminalModeError``;
        any exception from the body triggers best-effort restoration first.
        """
        try:
            self.enable_tui_mode()
            yield
        except BaseException:
            self.restore_best_effort()
            raise
        try:
            self.disable_tui_mode()
        except TerminalModeError:
            self.restore_best_effort()
            raise

    @contextlib.contextmanager
    def suspended(self):
        """Hand the normal screen to a child program, then re-enter TUI mode.

        Re-entry runs even when the body raises; a failure to re-enter is
        raised as ``TerminalModeError``.
        """
        self.disable_tui_mode()
        try:
            yield
        finally:
            self.enable_tui_mode()
