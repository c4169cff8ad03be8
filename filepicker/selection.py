"""Path-keyed mark set, independent of whatever is currently listed."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path


class SelectionSet:
    """Unordered set of marked paths.

    Marks are keyed by path, never by listing position, so they survive
    reloads and directory changes.
    """

    def __init__(self, paths: set[Path] | None = None) -> None:
        self._paths: set[Path] = set(paths) if paths else set()

    def toggle(self, path: Path) -> bool:
        """Flip membership of ``path`` and return whether it is now marked."""
        if path in self._paths:
            self._paths.discard(path)
            return False
        self._paths.add(path)
        return True

    def contains(self, path: Path) -> bool:
        return path in self._paths

    def count(self) -> int:
        return len(self._paths)

    def sorted_paths(self) -> list[Path]:
        """Marked paths in a deterministic order for output."""
        return sorted(self._paths, key=str)

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[Path]:
        return iter(set(self._paths))
