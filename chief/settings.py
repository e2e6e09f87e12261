"""Settings overlay for editing project configuration from the interface.

The overlay reads from and writes to any configuration object with the
attributes ``worktree.setup``, ``on_complete.push`` and
``on_complete.create_pr``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from chief.styles import (
    DIVIDER_STYLE,
    ERROR_COLOR,
    MUTED_COLOR,
    PRIMARY_COLOR,
    SUCCESS_COLOR,
    TEXT_BRIGHT_COLOR,
    TEXT_COLOR,
    Style,
    center_modal,
    visible_width,
)

CONFIG_PATH_HINT = "~/.chief/projects/.../config.yaml"


class SettingsItemType(enum.Enum):
    """The kind of value a settings item holds."""

    BOOL = 0
    STRING = 1


@dataclass
class SettingsItem:
    """One editable setting."""

    section: str
    label: str
    key: str
    type: SettingsItemType
    bool_val: bool = False
    string_val: str = ""


def _set_setup(config, item: SettingsItem) -> None:
    config.worktree.setup = item.string_val


def _set_push(config, item: SettingsItem) -> None:
    config.on_complete.push = item.bool_val


def _set_create_pr(config, item: SettingsItem) -> None:
    config.on_complete.create_pr = item.bool_val


_APPLIERS = {
    "worktree.setup": _set_setup,
    "onComplete.push": _set_push,
    "onComplete.createPR": _set_create_pr,
}


class SettingsOverlay:
    """State and rendering of the settings modal."""

    def __init__(self) -> None:
        self.width = 0
        self.height = 0
        self.items: list[SettingsItem] = []
        self.selected_index = 0
        self.editing = False
        self.edit_buffer = ""
        self.gh_error = ""
        self.show_gh_error = False

    def set_size(self, width: int, height: int) -> None:
        """Set the screen size the overlay is centred in."""
        self.width = width
        self.height = height

    def load_from_config(self, config) -> None:
        """Fill the items from a configuration and reset the overlay state."""
        self.items = [
            SettingsItem(
                "Worktree",
                "Setup command",
                "worktree.setup",
                SettingsItemType.STRING,
                string_val=config.worktree.setup,
            ),
            SettingsItem(
                "On Complete",
                "Push to remote",
                "onComplete.push",
                SettingsItemType.BOOL,
                bool_val=config.on_complete.push,
            ),
            SettingsItem(
                "On Complete",
                "Create pull request",
                "onComplete.createPR",
                SettingsItemType.BOOL,
                bool_val=config.on_complete.create_pr,
            ),
        ]
        self.selected_index = 0
        self.editing = False
        self.edit_buffer = ""
        self.gh_error = ""
        self.show_gh_error = False

    def apply_to_config(self, config) -> None:
        """Write the current values back into a configuration."""
        for item in self.items:
            apply = _APPLIERS.get(item.key)
            if apply is not None:
                apply(config, item)

    def move_up(self) -> None:
        """Move the selection up."""
        if self.selected_index > 0:
            self.selected_index -= 1

    def move_down(self) -> None:
        """Move the selection down."""
        if self.selected_index < len(self.items) - 1:
            self.selected_index += 1

    def is_editing(self) -> bool:
        """Whether a string value is being edited."""
        return self.editing

    def _selected_of_type(self, kind: SettingsItemType) -> SettingsItem | None:
        item = self.selected_item()
        return item if item is not None and item.type is kind else None

    def start_editing(self) -> None:
        """Begin editing the selected string value."""
        item = self._selected_of_type(SettingsItemType.STRING)
        if item is not None:
            self.editing = True
            self.edit_buffer = item.string_val

    def confirm_edit(self) -> None:
        """Store the edit buffer in the selected item."""
        item = self.selected_item()
        if self.editing and item is not None:
            item.string_val = self.edit_buffer
            self.editing = False
            self.edit_buffer = ""

    def cancel_edit(self) -> None:
        """Discard the edit buffer."""
        self.editing = False
        self.edit_buffer = ""

    def add_edit_char(self, ch: str) -> None:
        """Append a character to the edit buffer."""
        self.edit_buffer += ch

    def delete_edit_char(self) -> None:
        """Remove the last character from the edit buffer."""
        self.edit_buffer = self.edit_buffer[:-1]

    def toggle_bool(self) -> tuple[str, bool]:
        """Flip the selected boolean and return its key and new value.

        Returns ``("", False)`` when the selection is not a boolean.
        """
        item = self._selected_of_type(SettingsItemType.BOOL)
        if item is None:
            return "", False
        item.bool_val = not item.bool_val
        return item.key, item.bool_val

    def revert_toggle(self) -> None:
        """Undo the last toggle of the selected boolean."""
        item = self._selected_of_type(SettingsItemType.BOOL)
        if item is not None:
            item.bool_val = not item.bool_val

    def set_gh_error(self, message: str) -> None:
        """Show a GitHub CLI error."""
        self.gh_error = message
        self.show_gh_error = True

    def has_gh_error(self) -> bool:
        """Whether a GitHub CLI error is shown."""
        return self.show_gh_error

    def dismiss_gh_error(self) -> None:
        """Hide the GitHub CLI error."""
        self.show_gh_error = False
        self.gh_error = ""

    def selected_item(self) -> SettingsItem | None:
        """Return the selected item, or ``None`` when there is none."""
        if 0 <= self.selected_index < len(self.items):
            return self.items[self.selected_index]
        return None

    def render(self) -> str:
        """Render the overlay centred on the screen."""
        modal_width = max(min(60, self.width - 10), 40)
        modal_height = max(min(18, self.height - 6), 12)
        divider = DIVIDER_STYLE.render("─" * (modal_width - 4))

        title = Style(bold=True, foreground=PRIMARY_COLOR).render("Settings")
        path = Style(foreground=MUTED_COLOR).render(CONFIG_PATH_HINT)
        title_padding = max(modal_width - 4 - visible_width(title) - visible_width(path), 1)

        parts = [" ", title, " " * title_padding, path, "\n", divider, "\n\n"]
        if self.show_gh_error:
            parts.append(self._render_gh_error())
        else:
            parts.append(self._render_items(modal_width))

        parts += ["\n", divider, "\n"]
        footer_style = Style(foreground=MUTED_COLOR, padding=(0, 1))
        if self.show_gh_error:
            footer = "Press any key to dismiss"
        elif self.editing:
            footer = "Enter: save  │  Esc: cancel"
        else:
            footer = "Enter: toggle/edit  │  j/k: navigate  │  Esc: close"
        parts.append(footer_style.render(footer))

        modal_style = Style(
            border=True,
            border_foreground=PRIMARY_COLOR,
            padding=(1, 2),
            width=modal_width,
            height=modal_height,
        )
        modal = modal_style.render("".join(parts))
        return center_modal(modal, self.width, self.height)

    def _render_value(self, item: SettingsItem, selected: bool, modal_width: int) -> str:
        value_style = Style(foreground=SUCCESS_COLOR)
        value_off_style = Style(foreground=MUTED_COLOR)

        if item.type is SettingsItemType.BOOL:
            return value_style.render("Yes") if item.bool_val else value_off_style.render("No")

        if selected and self.editing:
            edit_style = Style(foreground=TEXT_BRIGHT_COLOR)
            cursor = Style(foreground=PRIMARY_COLOR).render("█")
            return edit_style.render(self.edit_buffer or "(empty)") + cursor
        if not item.string_val:
            return value_off_style.render("(not set)")

        value = item.string_val
        max_width = max(modal_width - 4 - 4 - len(item.label) - 4, 10)
        if len(value) > max_width:
            value = value[: max_width - 1] + "…"
        return value_style.render(value)

    def _render_items(self, modal_width: int) -> str:
        section_style = Style(bold=True, foreground=PRIMARY_COLOR, padding=(0, 1))
        label_style = Style(foreground=TEXT_COLOR)
        selected_label_style = Style(foreground=TEXT_BRIGHT_COLOR, bold=True)
        cursor_style = Style(foreground=PRIMARY_COLOR, bold=True)

        parts: list[str] = []
        current_section = ""
        for index, item in enumerate(self.items):
            if item.section != current_section:
                if current_section:
                    parts.append("\n")
                parts += [section_style.render(item.section), "\n"]
                current_section = item.section

            selected = index == self.selected_index
            parts.append(cursor_style.render("  > ") if selected else "    ")
            style = selected_label_style if selected else label_style
            parts.append(style.render(item.label))

            value = self._render_value(item, selected, modal_width)
            label_width = visible_width(item.label) + 4
            padding = max(modal_width - 4 - label_width - visible_width(value) - 2, 2)
            parts += [" " * padding, value, "\n"]
        return "".join(parts)

    def _render_gh_error(self) -> str:
        header_style = Style(bold=True, foreground=ERROR_COLOR, padding=(0, 1))
        message_style = Style(foreground=TEXT_COLOR, padding=(0, 1))
        hint_style = Style(foreground=MUTED_COLOR, padding=(0, 1))
        return "".join(
            [
                header_style.render("GitHub CLI Error"),
                "\n\n",
                message_style.render(self.gh_error),
                "\n\n",
                hint_style.render("Install: https://cli.github.com"),
                "\n",
                hint_style.render("PR creation has been disabled."),
            ]
        )