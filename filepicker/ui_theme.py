"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the title row, listing rows, and status row.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reverse: str
    reset: str
    title: str
    title_info: str
    dir_name: str
    file_name: str
    mark_on: str
    mark_off: str
    status_hint: str
    status_message: str


DEFAULT_THEME = UITheme(
    name="default",
    reverse="\033[7m",
    reset="\033[0m",
    title="\033[1m",
    title_info="\033[2;38;5;250m",
    dir_name="\033[1;36m",
    file_name="",
    mark_on="\033[38;5;214m",
    mark_off="\033[2m",
    status_hint="\033[2;38;5;250m",
    status_message="\033[1;38;5;229m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reverse="\033[7m",
    reset="\033[0m",
    title="\033[1;38;5;45m",
    title_info="\033[2;38;5;110m",
    dir_name="\033[1;38;5;45m",
    file_name="\033[38;5;252m",
    mark_on="\033[38;5;84m",
    mark_off="\033[2;38;5;31m",
    status_hint="\033[2;38;5;110m",
    status_message="\033[1;38;5;153m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reverse="",
    reset="",
    title="",
    title_info="",
    dir_name="",
    file_name="",
    mark_on="",
    mark_off="",
    status_hint="",
    status_message="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]
