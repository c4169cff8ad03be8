"""Domain datatype for one listed directory child."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Entry:
    """Immutable listing row; identity for marking purposes is ``path``."""

    name: str
    path: Path
    is_dir: bool


__all__ = ["Entry"]
