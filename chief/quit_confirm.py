"""Confirmation dialog shown when quitting while a loop is running."""

from __future__ import annotations

import enum

from chief.styles import (
    DIVIDER_STYLE,
    MUTED_COLOR,
    PRIMARY_COLOR,
    TEXT_COLOR,
    WARNING_COLOR,
    Style,
    center_modal,
)


class QuitConfirmOption(enum.Enum):
    """The choices offered by the quit confirmation dialog."""

    QUIT = 0
    CANCEL = 1


_OPTION_LABELS = (
    (QuitConfirmOption.QUIT, "Quit and stop loop"),
    (QuitConfirmOption.CANCEL, "Cancel"),
)


class QuitConfirmation:
    """State and rendering of the quit confirmation dialog.

    The selection starts on Cancel, the safe choice.
    """

    def __init__(self) -> None:
        self.width = 0
        self.height = 0
        self._selected = QuitConfirmOption.CANCEL

    def set_size(self, width: int, height: int) -> None:
        """Set the screen size the dialog is centred in."""
        self.width = width
        self.height = height

    def move_up(self) -> None:
        """Move the selection towards the first option."""
        if self._selected is QuitConfirmOption.CANCEL:
            self._selected = QuitConfirmOption.QUIT

    def move_down(self) -> None:
        """Move the selection towards the last option."""
        if self._selected is QuitConfirmOption.QUIT:
            self._selected = QuitConfirmOption.CANCEL

    def selected(self) -> QuitConfirmOption:
        """Return the option currently selected."""
        return self._selected

    def reset(self) -> None:
        """Return the selection to Cancel."""
        self._selected = QuitConfirmOption.CANCEL

    def render(self) -> str:
        """Render the dialog centred on the screen."""
        modal_width = max(min(55, self.width - 10), 40)
        divider = DIVIDER_STYLE.render("─" * (modal_width - 4))

        title_style = Style(bold=True, foreground=WARNING_COLOR)
        message_style = Style(foreground=TEXT_COLOR)
        option_style = Style(foreground=TEXT_COLOR)
        selected_style = Style(foreground=PRIMARY_COLOR, bold=True)
        footer_style = Style(foreground=MUTED_COLOR)

        parts = [
            title_style.render("Quit Chief?"),
            "\n",
            divider,
            "\n\n",
            message_style.render("A Ralph loop is currently running."),
            "\n",
            message_style.render("Exiting will stop the loop."),
            "\n\n",
        ]
        for option, label in _OPTION_LABELS:
            if option is self._selected:
                parts.append(selected_style.render("▶ " + label))
            else:
                parts.append(option_style.render("  " + label))
            parts.append("\n")

        parts.extend(
            [
                "\n",
                divider,
                "\n",
                footer_style.render("↑/↓: Navigate  Enter: Select  Esc: Cancel"),
            ]
        )

        modal_style = Style(
            border=True,
            border_foreground=WARNING_COLOR,
            padding=(1, 2),
            width=modal_width,
        )
        modal = modal_style.render("".join(parts))
        return center_modal(modal, self.width, self.height)