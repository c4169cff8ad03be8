"""Exception taxonomy shared by the browser, launcher, and terminal layers.

``ReadError`` and ``SpawnError`` are recoverable at the UI level.
``TerminalModeError`` is fatal because the tty may be left unusable.
"""

from __future__ import annotations

from pathlib import Path


class PickerError(Exception):
    """Base class for all filepicker failures."""


class ReadError(PickerError):
    """A directory could not be listed."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"cannot read directory {path}: {reason}")


class SpawnError(PickerError):
    """No editor or fallback program could be started for ``path``."""

    def __init__(self, path: Path, attempts: list[tuple[str, OSError]]) -> None:
        self.path = path
        self.attempts = attempts
        tried = ", ".join(program for program, _exc in attempts) or "nothing"
        super().__init__(f"no program could open {path} (tried {tried})")


class TerminalModeError(PickerError):
    """Entering or leaving raw/alternate-screen mode failed."""


__all__ = [
    "PickerError",
    "ReadError",
    "SpawnError",
    "TerminalModeError",
]
