"""Environment-derived runtime settings.

Nothing is persisted: every value comes from the process environment at
startup. The debug log location defaults to the platform's user log dir.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "filepicker"
LOG_FILENAME = "filepicker.log"
EDITOR_ENV_VAR = "EDITOR"
DEFAULT_EDITOR = "less"
FALLBACK_PROGRAMS: tuple[str, ...] = ("less", "vi")
THEME_ENV_VAR = "FILEPICKER_THEME"
DEBUG_ENV_VAR = "FILEPICKER_DEBUG"
LOG_PATH_ENV_VAR = "FILEPICKER_LOG"
POLL_TIMEOUT_MS = 250


def default_log_path() -> Path:
    """Return the per-user log file path for debug logging."""
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def resolve_editor_command(environ: Mapping[str, str] | None = None) -> str:
    """Return the configured editor command, or the default viewer when unset/blank."""
    env = os.environ if environ is None else environ
    value = env.get(EDITOR_ENV_VAR, "").strip()
    return value if value else DEFAULT_EDITOR


@dataclass(frozen=True)
class Settings:
    """Startup settings for one browser session."""

    theme_name: str | None
    no_color: bool
    debug: bool
    log_path: Path


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Read all settings from ``environ`` (defaults to ``os.environ``).

    Blank values count as unset. ``NO_COLOR`` follows the no-color.org
    convention: any non-empty value disables colour.
    """
    env = os.environ if environ is None else environ
    theme = env.get(THEME_ENV_VAR, "").strip() or None
    raw_log_path = env.get(LOG_PATH_ENV_VAR, "").strip()
    return Settings(
        theme_name=theme,
        no_color=bool(env.get("NO_COLOR", "")),
        debug=bool(env.get(DEBUG_ENV_VAR, "").strip()),
        log_path=Path(raw_log_path).expanduser() if raw_log_path else default_log_path(),
    )
