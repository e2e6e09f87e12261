"""Colour palette, text styles and layout helpers for the terminal interface."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from wcwidth import wcswidth, wcwidth

_ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*m")
_RESET = "\x1b[0m"


class AppState(enum.IntEnum):
    """State of the application's loop as shown in the interface."""

    READY = 0
    RUNNING = 1
    PAUSED = 2
    STOPPED = 3
    COMPLETE = 4
    ERROR = 5

    @classmethod
    def _missing_(cls, value):
        if not isinstance(value, int):
            return None
        member = int.__new__(cls, value)
        member._name_ = "UNKNOWN"
        member._value_ = value
        return member

    def __str__(self) -> str:
        if self._name_ == "UNKNOWN":
            return "Unknown"
        return self._name_.title()

    @property
    def can_start(self) -> bool:
        """Whether the loop may be started from this state."""
        return self in (AppState.READY, AppState.PAUSED)

    @property
    def can_pause(self) -> bool:
        """Whether the loop may be paused from this state."""
        return self == AppState.RUNNING

    @property
    def can_stop(self) -> bool:
        """Whether the loop may be stopped from this state."""
        return self in (AppState.RUNNING, AppState.PAUSED)


def _hex_to_rgb(color: str) -> tuple[int, int, int]:
    value = color.lstrip("#")
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    if len(value) != 6:
        raise ValueError(f"invalid colour: {color!r}")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def _sgr(foreground: str | None, background: str | None, bold: bool) -> str:
    codes = []
    if bold:
        codes.append("1")
    if foreground:
        r, g, b = _hex_to_rgb(foreground)
        codes.append(f"38;2;{r};{g};{b}")
    if background:
        r, g, b = _hex_to_rgb(background)
        codes.append(f"48;2;{r};{g};{b}")
    return f"\x1b[{';'.join(codes)}m" if codes else ""


def _line_width(line: str) -> int:
    width = wcswidth(line)
    if width >= 0:
        return width
    return sum(max(wcwidth(ch), 0) for ch in line)


def visible_width(text: str) -> int:
    """Return the widest line of ``text`` in terminal cells, ignoring colour codes."""
    plain = _ANSI_PATTERN.sub("", text)
    return max((_line_width(line) for line in plain.split("\n")), default=0)


def _pad_right(line: str, width: int) -> str:
    missing = width - visible_width(line)
    return line + " " * missing if missing > 0 else line


@dataclass(frozen=True)
class Style:
    """A text style: colours, boldness, padding, a rounded border and a size.

    ``width`` and ``height`` include the padding but not the border. Lines
    wider than the width are kept whole.
    """

    foreground: str | None = None
    background: str | None = None
    bold: bool = False
    padding: tuple[int, int] = (0, 0)
    border: bool = False
    border_foreground: str | None = None
    width: int = 0
    height: int = 0

    def render(self, text: str) -> str:
        """Return ``text`` laid out and coloured according to this style."""
        lines = str(text).split("\n")
        vertical, horizontal = self.padding
        if self.width > 0:
            inner = max(self.width - 2 * horizontal, 0)
        else:
            inner = max(visible_width(line) for line in lines)

        side = " " * horizontal
        rows = [side + _pad_right(line, inner) + side for line in lines]
        body_width = max(visible_width(row) for row in rows)
        blank = " " * body_width
        rows = [blank] * vertical + [_pad_right(row, body_width) for row in rows] + [blank] * vertical
        if self.height > len(rows):
            rows.extend([blank] * (self.height - len(rows)))

        prefix = _sgr(self.foreground, self.background, self.bold)
        if prefix:
            rows = [prefix + row.replace(_RESET, _RESET + prefix) + _RESET for row in rows]

        if self.border:
            edge = _sgr(self.border_foreground, None, False)

            def paint(segment: str) -> str:
                return f"{edge}{segment}{_RESET}" if edge else segment

            top = paint("╭" + "─" * body_width + "╮")
            bottom = paint("╰" + "─" * body_width + "╯")
            bar = paint("│")
            rows = [top, *(bar + row + bar for row in rows), bottom]

        return "\n".join(rows)


def join_horizontal(*blocks: str) -> str:
    """Place text blocks side by side, aligned at the top."""
    if not blocks:
        return ""
    split = [block.split("\n") for block in blocks]
    widths = [max(visible_width(line) for line in lines) for lines in split]
    height = max(len(lines) for lines in split)
    columns = [
        [_pad_right(line, width) for line in lines] + [" " * width] * (height - len(lines))
        for lines, width in zip(split, widths)
    ]
    return "\n".join("".join(row) for row in zip(*columns))


def center_modal(modal: str, width: int, height: int) -> str:
    """Centre a rendered modal on a screen of the given size."""
    lines = modal.split("\n")
    modal_width = max((visible_width(line) for line in lines), default=0)
    top = max((height - len(lines)) // 2, 0)
    left = " " * max((width - modal_width) // 2, 0)
    return "\n" * top + "".join(f"{left}{line}\n" for line in lines)


# Colour palette
PRIMARY_COLOR = "#00D7FF"
SUCCESS_COLOR = "#5AF78E"
WARNING_COLOR = "#F3F99D"
ERROR_COLOR = "#FF5C57"
MUTED_COLOR = "#6C7086"
BORDER_COLOR = "#45475A"

TEXT_COLOR = "#CDD6F4"
TEXT_MUTED_COLOR = "#6C7086"
TEXT_BRIGHT_COLOR = "#FFFFFF"

BG_COLOR = "#1E1E2E"
BG_SELECTED_COLOR = "#313244"
BG_HIGHLIGHT_COLOR = "#45475A"

# Header and footer
HEADER_STYLE = Style(bold=True, foreground=PRIMARY_COLOR, padding=(0, 1))
HEADER_BORDER_STYLE = Style(foreground=BORDER_COLOR)
FOOTER_STYLE = Style(foreground=MUTED_COLOR, padding=(0, 1))
SHORTCUT_KEY_STYLE = Style(foreground=PRIMARY_COLOR, bold=True)
SHORTCUT_DESC_STYLE = Style(foreground=MUTED_COLOR)

# Panels
PANEL_STYLE = Style(border=True, border_foreground=BORDER_COLOR, padding=(0, 1))
PANEL_ACTIVE_STYLE = Style(border=True, border_foreground=PRIMARY_COLOR, padding=(0, 1))
PANEL_TITLE_STYLE = Style(bold=True, foreground=PRIMARY_COLOR)

# Selection
SELECTED_STYLE = Style(background=BG_SELECTED_COLOR, foreground=TEXT_COLOR)
UNSELECTED_STYLE = Style(foreground=TEXT_COLOR)

# Story status
STATUS_PASSED_STYLE = Style(foreground=SUCCESS_COLOR)
STATUS_IN_PROGRESS_STYLE = Style(foreground=PRIMARY_COLOR)
STATUS_PENDING_STYLE = Style(foreground=MUTED_COLOR)
STATUS_FAILED_STYLE = Style(foreground=ERROR_COLOR)
STATUS_PAUSED_STYLE = Style(foreground=WARNING_COLOR)

# Application state badges
STATE_READY_STYLE = Style(bold=True, foreground=MUTED_COLOR)
STATE_RUNNING_STYLE = Style(bold=True, foreground=PRIMARY_COLOR)
STATE_PAUSED_STYLE = Style(bold=True, foreground=WARNING_COLOR)
STATE_STOPPED_STYLE = Style(bold=True, foreground=MUTED_COLOR)
STATE_COMPLETE_STYLE = Style(bold=True, foreground=SUCCESS_COLOR)
STATE_ERROR_STYLE = Style(bold=True, foreground=ERROR_COLOR)

# Titles and labels
TITLE_STYLE = Style(bold=True, foreground=TEXT_COLOR)
LABEL_STYLE = Style(foreground=PRIMARY_COLOR, bold=True)
SUBTITLE_STYLE = Style(foreground=MUTED_COLOR)
DESCRIPTION_STYLE = Style(foreground=TEXT_COLOR)

# Progress bar
PROGRESS_BAR_FILL_STYLE = Style(foreground=SUCCESS_COLOR)
PROGRESS_BAR_EMPTY_STYLE = Style(foreground=MUTED_COLOR)
PROGRESS_PERCENT_STYLE = Style(foreground=MUTED_COLOR)

# Activity line
ACTIVITY_RUNNING_STYLE = Style(foreground=PRIMARY_COLOR, padding=(0, 1))
ACTIVITY_ERROR_STYLE = Style(foreground=ERROR_COLOR, padding=(0, 1))
ACTIVITY_COMPLETE_STYLE = Style(foreground=SUCCESS_COLOR, padding=(0, 1))
ACTIVITY_MUTED_STYLE = Style(foreground=MUTED_COLOR, padding=(0, 1))

# Dividers
DIVIDER_STYLE = Style(foreground=BORDER_COLOR)
THICK_DIVIDER_STYLE = Style(foreground=BORDER_COLOR, bold=True)

# Tab bar
TAB_STYLE = Style(border=True, border_foreground=BORDER_COLOR, padding=(0, 1))
TAB_ACTIVE_STYLE = Style(
    border=True,
    border_foreground=PRIMARY_COLOR,
    background=BG_SELECTED_COLOR,
    bold=True,
    padding=(0, 1),
)
TAB_RUNNING_STYLE = Style(border=True, border_foreground=PRIMARY_COLOR, padding=(0, 1))
TAB_ERROR_STYLE = Style(border=True, border_foreground=ERROR_COLOR, padding=(0, 1))
TAB_NEW_STYLE = Style(
    border=True, border_foreground=MUTED_COLOR, foreground=MUTED_COLOR, padding=(0, 1)
)

# Status icons
ICON_PASSED = "✓"
ICON_IN_PROGRESS = "●"
ICON_PENDING = "○"
ICON_FAILED = "✗"
ICON_PAUSED = "◐"


def get_status_icon(passed: bool, in_progress: bool) -> str:
    """Return the coloured icon for a story's status."""
    if passed:
        return STATUS_PASSED_STYLE.render(ICON_PASSED)
    if in_progress:
        return STATUS_IN_PROGRESS_STYLE.render(ICON_IN_PROGRESS)
    return STATUS_PENDING_STYLE.render(ICON_PENDING)


_STATE_STYLES = {
    AppState.RUNNING: STATE_RUNNING_STYLE,
    AppState.PAUSED: STATE_PAUSED_STYLE,
    AppState.COMPLETE: STATE_COMPLETE_STYLE,
    AppState.ERROR: STATE_ERROR_STYLE,
    AppState.STOPPED: STATE_STOPPED_STYLE,
}

_ACTIVITY_STYLES = {
    AppState.RUNNING: ACTIVITY_RUNNING_STYLE,
    AppState.ERROR: ACTIVITY_ERROR_STYLE,
    AppState.COMPLETE: ACTIVITY_COMPLETE_STYLE,
}


def get_state_style(state: AppState) -> Style:
    """Return the badge style for an application state."""
    return _STATE_STYLES.get(state, STATE_READY_STYLE)


def get_activity_style(state: AppState) -> Style:
    """Return the activity line style for an application state."""
    return _ACTIVITY_STYLES.get(state, ACTIVITY_MUTED_STYLE)