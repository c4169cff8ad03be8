"""Editor launch helper for opening a file outside the TUI.

Leaves raw/alternate-screen mode, runs ``$EDITOR`` (or a fallback viewer)
on the target, waits for it, then restores the TUI. A non-zero exit is
reported back as a message; only "nothing could be started" is an error.
"""

from __future__ import annotations

import logging
import re
import subprocess
from collections.abc import Callable, Mapping
from contextlib import AbstractContextManager
from pathlib import Path

from .config import FALLBACK_PROGRAMS, resolve_editor_command
from .errors import SpawnError

LOGGER = logging.getLogger(__name__)

_SHELL_SAFE_RE = re.compile(r"[A-Za-z0-9_\-./:@]+")


def shell_quote(text: str) -> str:
    """Quote ``text`` for a POSIX shell command line.

    Strings made only of ASCII alphanumerics and ``-_./:@`` pass through
    unchanged. Anything else is single-quoted, with each embedded ``'``
    written as ``'\\''`` (close, escaped quote, reopen).
    """
    if not text:
        return "''"
    if _SHELL_SAFE_RE.fullmatch(text):
        return text
    return "'" + text.replace("'", "'\\''") + "'"


def build_editor_command(editor: str, target: Path) -> list[str]:
    """Build argv for ``editor`` on ``target``.

    An editor string containing whitespace carries its own flags, so it is
    handed to ``sh -c`` with the quoted path appended. A bare program name
    is executed directly with the path as its single argument.
    """
    if any(ch.isspace() for ch in editor):
        return ["sh", "-c", f"{editor} {shell_quote(str(target))}"]
    return [editor, str(target)]


class EditorLauncher:
    """Run an external program on a path with the TUI suspended around it."""

    def __init__(
        self,
        suspend: Callable[[], AbstractContextManager[None]],
        *,
        environ: Mapping[str, str] | None = None,
        fallbacks: tuple[str, ...] = FALLBACK_PROGRAMS,
        run: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        stdout_fd: int | None = None,
    ) -> None:
        self._suspend = suspend
        self._stdout_fd = stdout_fd
        self._environ = environ
        self._fallbacks = fallbacks
        self._run = run

    def candidate_commands(self, target: Path) -> list[list[str]]:
        """Configured command first, then each fallback program, without duplicates."""
        editor = resolve_editor_command(self._environ)
        commands = [build_editor_command(editor, target)]
        for program in self._fallbacks:
            command = [program, str(target)]
            if command not in commands:
                commands.append(command)
        return commands

    def _spawn(self, target: Path) -> int:
        attempts: list[tuple[str, OSError]] = []
        for index, command in enumerate(self.candidate_commands(target)):
            if index > 0:
                LOGGER.info("falling back to %s", command[0])
            LOGGER.debug("running %r", command)
            try:
                if self._stdout_fd is None:
                    completed = self._run(command, check=False)
                else:
                    completed = self._run(command, check=False, stdout=self._stdout_fd)
            except OSError as exc:
                LOGGER.info("cannot start %s: %s", command[0], exc)
                attempts.append((command[0], exc))
                continue
            return completed.returncode
        LOGGER.error("no program could open %s", target)
        raise SpawnError(target, attempts)

    def open(self, target: Path) -> str | None:
        """Open ``target`` and block until the program exits.

        Returns a warning message for a non-zero exit status, ``None`` on
        success. Raises ``SpawnError`` when every candidate failed to start;
        the TUI is restored before either outcome reaches the caller.
        """
        with self._suspend():
            returncode = self._spawn(target)
        if returncode != 0:
            LOGGER.warning("editor exited with status %s for %s", returncode, target)
            return f"Editor exited with status {returncode}"
        return None
