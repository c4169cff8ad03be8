"""Filesystem scanning for the single-directory listing.

Children are read with ``os.scandir`` and sorted directories-first, then by
lowercased name. Unreadable children are skipped; an unreadable directory
raises ``ReadError``.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterable
from pathlib import Path

from ..errors import ReadError
from .types import Entry

LOGGER = logging.getLogger(__name__)


def entry_sort_key(entry: Entry) -> tuple[bool, str]:
    """Directories before files, then case-insensitive name order."""
    return (not entry.is_dir, entry.name.lower())


def sort_entries(entries: Iterable[Entry]) -> list[Entry]:
    """Return ``entries`` in listing order (stable for equal keys)."""
    return sorted(entries, key=entry_sort_key)


def read_directory(directory: Path) -> list[Entry]:
    """List immediate children of ``directory`` as sorted ``Entry`` rows.

    Symlinks are followed so linked directories stay enterable; a child whose
    metadata cannot be read (broken link, deleted mid-scan) is dropped.
    Raises ``ReadError`` when the directory itself cannot be scanned.
    """
    entries: list[Entry] = []
    try:
        with os.scandir(directory) as children:
            for child in children:
                try:
                    child_stat = child.stat()
                except OSError as exc:
                    LOGGER.debug("skipping %s: %s", child.path, exc)
                    continue
                entries.append(
                    Entry(
                        name=child.name,
                        path=Path(child.path),
                        is_dir=stat.S_ISDIR(child_stat.st_mode),
                    )
                )
    except OSError as exc:
        LOGGER.warning("cannot read directory %s: %s", directory, exc)
        raise ReadError(directory, exc) from exc

    return sort_entries(entries)


__all__ = [
    "entry_sort_key",
    "sort_entries",
    "read_directory",
]
