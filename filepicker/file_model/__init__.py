"""Domain model for directory listings.

This package contains non-UI listing primitives:
- the immutable ``Entry`` row type
- directory scanning and the directories-first sort order
"""

from __future__ import annotations

from .types import Entry
from .fs import entry_sort_key, read_directory, sort_entries

__all__ = [
    "Entry",
    "entry_sort_key",
    "read_directory",
    "sort_entries",
]
