"""Tab bar listing the PRDs of a project and the state of their loops."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable

from chief.styles import (
    ERROR_COLOR,
    PRIMARY_COLOR,
    SUCCESS_COLOR,
    TAB_ACTIVE_STYLE,
    TAB_ERROR_STYLE,
    TAB_NEW_STYLE,
    TAB_RUNNING_STYLE,
    TAB_STYLE,
    TEXT_BRIGHT_COLOR,
    TEXT_COLOR,
    WARNING_COLOR,
    Style,
    join_horizontal,
)

MAX_NAME_LENGTH = 8
MAX_COMPACT_NAME_LENGTH = 5
MAX_BRANCH_LENGTH = 20


class LoopState(enum.IntEnum):
    """State of the loop working on a PRD."""

    READY = 0
    RUNNING = 1
    PAUSED = 2
    STOPPED = 3
    COMPLETE = 4
    ERROR = 5


@dataclass
class TabEntry:
    """One PRD tab."""

    name: str
    path: str = ""
    branch: str = ""
    loop_state: LoopState = LoopState.READY
    completed: int = 0
    total: int = 0
    iteration: int = 0
    is_active: bool = False


_STATE_TEXT_COLORS = {
    LoopState.RUNNING: PRIMARY_COLOR,
    LoopState.PAUSED: WARNING_COLOR,
    LoopState.COMPLETE: SUCCESS_COLOR,
    LoopState.ERROR: ERROR_COLOR,
}

_COMPACT_INDICATORS = {
    LoopState.RUNNING: "▶",
    LoopState.PAUSED: "⏸",
    LoopState.COMPLETE: "✓",
    LoopState.ERROR: "✗",
}


def _shorten(text: str, limit: int, marker: str) -> str:
    return text[: limit - 1] + marker if len(text) > limit else text


def _tab_style(entry: TabEntry) -> Style:
    if entry.is_active:
        return TAB_ACTIVE_STYLE
    if entry.loop_state == LoopState.RUNNING:
        return TAB_RUNNING_STYLE
    if entry.loop_state == LoopState.ERROR:
        return TAB_ERROR_STYLE
    return TAB_STYLE


def _state_indicator(entry: TabEntry) -> str:
    state = entry.loop_state
    if state == LoopState.RUNNING:
        return f" ▶ {entry.iteration}"
    if state == LoopState.PAUSED:
        return " ⏸"
    if state == LoopState.COMPLETE:
        return " ✓"
    if state == LoopState.ERROR:
        return " ✗"
    if entry.total > 0:
        indicator = f" [{entry.completed}/{entry.total}]"
        if entry.completed == entry.total:
            indicator += " ✓"
        return indicator
    return ""


class TabBar:
    """The always-visible bar of PRD tabs followed by a "+ New" button."""

    def __init__(self, current_prd: str = "", entries: Iterable[TabEntry] = ()) -> None:
        self.current_prd = current_prd
        self.width = 0
        self.active_index = 0
        self.entries: list[TabEntry] = []
        self.set_entries(entries)

    def set_entries(self, entries: Iterable[TabEntry]) -> None:
        """Replace the tabs, marking the one named after the current PRD active."""
        self.entries = list(entries)
        for index, entry in enumerate(self.entries):
            entry.is_active = entry.name == self.current_prd
            if entry.is_active:
                self.active_index = index

    def set_active_by_name(self, name: str) -> None:
        """Make the tab called ``name`` the active one."""
        self.current_prd = name
        for index, entry in enumerate(self.entries):
            entry.is_active = entry.name == name
            if entry.is_active:
                self.active_index = index

    def get_entry(self, index: int) -> TabEntry | None:
        """Return the tab at a 0-based index, or ``None`` when out of range."""
        if 0 <= index < len(self.entries):
            return self.entries[index]
        return None

    def count(self) -> int:
        """Return the number of PRD tabs, not counting "+ New"."""
        return len(self.entries)

    def set_size(self, width: int) -> None:
        """Set the width available to the bar."""
        self.width = width

    def render(self) -> str:
        """Render the full tab bar."""
        new_tab = TAB_NEW_STYLE.render("+ New")
        if not self.entries:
            return new_tab
        tabs = [self.render_tab(entry) for entry in self.entries]
        return join_horizontal(*tabs, new_tab)

    def render_compact(self) -> str:
        """Render a narrow version of the tab bar."""
        new_tab = TAB_NEW_STYLE.render("+")
        if not self.entries:
            return new_tab
        tabs = [self.render_compact_tab(entry) for entry in self.entries]
        return join_horizontal(*tabs, new_tab)

    def render_tab(self, entry: TabEntry) -> str:
        """Render one tab with its name, branch and progress."""
        parts = []
        if entry.is_active:
            parts.append("◉ ")
        parts.append(_shorten(entry.name, MAX_NAME_LENGTH, "."))
        if entry.branch:
            parts.append(f" [{_shorten(entry.branch, MAX_BRANCH_LENGTH, '…')}]")
        parts.append(_state_indicator(entry))
        content = "".join(parts)

        color = _STATE_TEXT_COLORS.get(entry.loop_state)
        if color is None:
            color = TEXT_BRIGHT_COLOR if entry.is_active else TEXT_COLOR
        content = Style(foreground=color).render(content)
        return _tab_style(entry).render(content)

    def render_compact_tab(self, entry: TabEntry) -> str:
        """Render one tab with a short name and a one-character state."""
        content = "".join(
            [
                "◉" if entry.is_active else "",
                _shorten(entry.name, MAX_COMPACT_NAME_LENGTH, "."),
                _COMPACT_INDICATORS.get(entry.loop_state, ""),
            ]
        )
        return _tab_style(entry).render(content)