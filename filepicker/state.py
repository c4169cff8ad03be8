"""Browser navigation state machine plus screen-session bookkeeping.

``BrowserState`` owns the working directory, listing, cursor, and marks.
``AppState`` wraps it with the transient UI fields the loop needs.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .errors import SpawnError
from .file_model import Entry, read_directory
from .selection import SelectionSet

STATUS_MESSAGE_SECONDS = 3.0


class BrowserState:
    """Navigation over one directory listing at a time.

    Invariant: ``cursor`` is ``None`` exactly when ``entries`` is empty,
    otherwise ``0 <= cursor < len(entries)``. ``cwd`` only changes after the
    new directory was listed successfully, so a ``ReadError`` leaves the
    previous directory, listing, and cursor untouched.
    """

    def __init__(
        self,
        cwd: Path,
        *,
        read_dir: Callable[[Path], list[Entry]] = read_directory,
        open_file: Callable[[Path], str | None] | None = None,
        selection: SelectionSet | None = None,
    ) -> None:
        self.cwd = cwd
        self.entries: list[Entry] = []
        self.cursor: int | None = None
        self.selection = selection if selection is not None else SelectionSet()
        self._read_dir = read_dir
        self._open_file = open_file
        self.reload()

    @property
    def selected_entry(self) -> Entry | None:
        if self.cursor is None:
            return None
        return self.entries[self.cursor]

    def reload(self) -> None:
        """Re-list ``cwd`` and keep the cursor valid for the new listing."""
        entries = self._read_dir(self.cwd)
        self.entries = entries
        if not entries:
            self.cursor = None
        elif self.cursor is None:
            self.cursor = 0
        else:
            self.cursor = min(self.cursor, len(entries) - 1)

    def _change_directory(self, target: Path) -> None:
        entries = self._read_dir(target)
        self.cwd = target
        self.entries = entries
        self.cursor = 0 if entries else None

    def move_by(self, delta: int) -> None:
        """Move the cursor by ``delta`` rows, wrapping at both ends."""
        if not self.entries:
            self.cursor = None
            return
        start = self.cursor if self.cursor is not None else 0
        # Python's % is already Euclidean for a positive modulus.
        self.cursor = (start + delta) % len(self.entries)

    def next(self) -> None:
        self.move_by(1)

    def prev(self) -> None:
        self.move_by(-1)

    def first(self) -> None:
        if self.entries:
            self.cursor = 0

    def last(self) -> None:
        if self.entries:
            self.cursor = len(self.entries) - 1

    def toggle_mark(self) -> None:
        entry = self.selected_entry
        if entry is None:
            return
        self.selection.toggle(entry.path)

    def enter(self) -> str | None:
        """Descend into the directory at the cursor or open the file there.

        Returns a user-facing message when opening a file produced one (a
        non-zero editor exit or no launchable program); ``ReadError`` from
        listing a new directory propagates.
        """
        entry = self.selected_entry
        if entry is None:
            return None
        if entry.is_dir:
            self._change_directory(entry.path)
            return None
        if self._open_file is None:
            return f"No editor configured for {entry.name}"
        try:
            return self._open_file(entry.path)
        except SpawnError as exc:
            return str(exc)

    def up_dir(self) -> None:
        """Move to the parent directory; silently does nothing at the root."""
        parent = self.cwd.parent
        if parent == self.cwd:
            return
        self._change_directory(parent)


@dataclass
class AppState:
    """Per-session UI fields layered over the browser state."""

    browser: BrowserState
    list_start: int = 0
    dirty: bool = True
    status_message: str = ""
    status_message_until: float = 0.0
    last_size: tuple[int, int] | None = None
    skip_next_lf: bool = False

    def set_status(self, message: str, seconds: float = STATUS_MESSAGE_SECONDS) -> None:
        self.status_message = message
        self.status_message_until = time.monotonic() + seconds
        self.dirty = True

    def clear_status(self) -> None:
        self.status_message = ""
        self.status_message_until = 0.0
        self.dirty = True

    def expire_status(self, now: float) -> None:
        if self.status_message and now >= self.status_message_until:
            self.clear_status()
