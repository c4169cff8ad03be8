"""Rendering of the single-pane browser frame.

Builds title, listing, and status rows from a ``RenderContext`` and writes
the composed ANSI frame in one ``os.write`` call.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .ansi import clip_ansi_line, pad_ansi_line
from .file_model import Entry
from .selection import SelectionSet
from .ui_theme import DEFAULT_THEME, UITheme

TITLE_TEXT = "File Picker"
HIGHLIGHT_SYMBOL = "➤ "
NO_HIGHLIGHT = "  "
MARK_ON_GLYPH = "●"
MARK_OFF_GLYPH = "○"
DIR_GLYPH = "📁"
FILE_GLYPH = "📄"
EMPTY_LISTING_TEXT = "(empty directory)"
KEY_HINT_TEXT = "↑/↓ move  ␣ toggle  Enter open  ⌫ up  r refresh  q quit"
CHROME_ROWS = 2


@dataclass
class RenderContext:
    cwd: Path
    entries: list[Entry]
    cursor: int | None
    selection: SelectionSet
    list_start: int
    width: int
    height: int
    status_message: str = ""
    theme: UITheme = DEFAULT_THEME


def listing_rows(height: int) -> int:
    """Rows available for entries once title and status rows are taken."""
    return max(1, height - CHROME_ROWS)


def scroll_start_for_cursor(cursor: int | None, list_start: int, visible_rows: int, count: int) -> int:
    """Return a list offset that keeps ``cursor`` inside the visible window."""
    if cursor is None or count <= 0:
        return 0
    visible_rows = max(1, visible_rows)
    start = list_start
    if cursor < start:
        start = cursor
    elif cursor >= start + visible_rows:
        start = cursor - visible_rows + 1
    return max(0, min(start, max(0, count - visible_rows)))


def format_title(cwd: Path, selected_count: int, theme: UITheme) -> str:
    return (
        f"{theme.title} {TITLE_TEXT} {theme.reset}"
        f"{theme.title_info} cwd: {cwd}  |  selected: {selected_count}{theme.reset}"
    )


def format_entry_row(entry: Entry, marked: bool, highlighted: bool, theme: UITheme) -> str:
    """Format one listing row: highlight symbol, mark glyph, kind glyph, name."""
    symbol = HIGHLIGHT_SYMBOL if highlighted else NO_HIGHLIGHT
    if marked:
        mark = f"{theme.mark_on}{MARK_ON_GLYPH}{theme.reset}"
    else:
        mark = f"{theme.mark_off}{MARK_OFF_GLYPH}{theme.reset}"
    glyph = DIR_GLYPH if entry.is_dir else FILE_GLYPH
    name_style = theme.dir_name if entry.is_dir else theme.file_name
    name = f"{name_style}{entry.name}{theme.reset}" if name_style else entry.name
    return f"{symbol}{mark} {glyph} {name}"


def format_status(status_message: str, theme: UITheme) -> str:
    if status_message:
        return f"{theme.status_message}{status_message}{theme.reset}"
    return f"{theme.status_hint}{KEY_HINT_TEXT}{theme.reset}"


def build_frame_lines(context: RenderContext) -> list[str]:
    """Return exactly ``context.height`` rows (at least three) clipped to width."""
    theme = context.theme
    line_width = max(1, context.width - 1)
    rows = listing_rows(context.height)

    out = [clip_ansi_line(format_title(context.cwd, context.selection.count(), theme), line_width)]
    if not context.entries:
        out.append(clip_ansi_line(f"{NO_HIGHLIGHT}{EMPTY_LISTING_TEXT}", line_width))
        out.extend("" for _ in range(rows - 1))
    else:
        visible = context.entries[context.list_start : context.list_start + rows]
        for offset, entry in enumerate(visible):
            index = context.list_start + offset
            highlighted = index == context.cursor
            row = format_entry_row(entry, context.selection.contains(entry.path), highlighted, theme)
            if highlighted and theme.reverse:
                row = theme.reverse + pad_ansi_line(row.replace(theme.reset, theme.reset + theme.reverse), line_width)
                row += theme.reset
            out.append(clip_ansi_line(row, line_width))
        out.extend("" for _ in range(rows - len(visible)))
    out.append(clip_ansi_line(format_status(context.status_message, theme), line_width))
    return out


def render_frame(context: RenderContext, stdout_fd: int) -> None:
    out: list[str] = ["\033[H\033[J"]
    for index, line in enumerate(build_frame_lines(context)):
        if index:
            out.append("\r\n")
        out.append(line)
        if "\033" in line:
            out.append("\033[0m")
    os.write(stdout_fd, "".join(out).encode("utf-8", errors="replace"))
