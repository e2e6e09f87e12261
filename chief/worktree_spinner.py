"""Progress overlay shown while a worktree is being set up."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from chief.styles import (
    DIVIDER_STYLE,
    ERROR_COLOR,
    MUTED_COLOR,
    PRIMARY_COLOR,
    SUCCESS_COLOR,
    TEXT_COLOR,
    Style,
    center_modal,
)

SPINNER_FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")

_COMPLETED_WORDING = (
    ("Creating branch", "Created branch"),
    ("Creating worktree", "Created worktree"),
    ("Running setup", "Ran setup"),
)


class WorktreeSpinnerStep(enum.IntEnum):
    """The steps of setting up a worktree, in order."""

    CREATE_BRANCH = 0
    CREATE_WORKTREE = 1
    RUN_SETUP = 2
    DONE = 3


@dataclass
class _StepInfo:
    label: str
    complete: bool = False
    active: bool = False
    error: str = ""


class WorktreeSpinner:
    """State and rendering of the worktree setup overlay."""

    def __init__(self) -> None:
        self.width = 0
        self.height = 0
        self.prd_name = ""
        self.branch_name = ""
        self.default_branch = ""
        self.worktree_path = ""
        self.setup_command = ""
        self.spinner_frame = 0
        self.error = ""
        self._step = WorktreeSpinnerStep.CREATE_BRANCH
        self._steps: list[_StepInfo] = []
        self._cancelled = False

    @property
    def steps(self) -> tuple[_StepInfo, ...]:
        """The displayed steps, in order."""
        return tuple(self._steps)

    def configure(
        self,
        prd_name: str,
        branch_name: str,
        default_branch: str,
        worktree_path: str,
        setup_command: str,
    ) -> None:
        """Prepare the overlay for a new setup run."""
        self.prd_name = prd_name
        self.branch_name = branch_name
        self.default_branch = default_branch
        self.worktree_path = worktree_path
        self.setup_command = setup_command
        self._step = WorktreeSpinnerStep.CREATE_BRANCH
        self.spinner_frame = 0
        self.error = ""
        self._cancelled = False

        self._steps = [
            _StepInfo(f"Creating branch '{branch_name}' from '{default_branch}'"),
            _StepInfo(f"Creating worktree at {worktree_path}"),
        ]
        if setup_command:
            self._steps.append(_StepInfo(f"Running setup: {setup_command}"))
        self._steps[0].active = True

    def set_size(self, width: int, height: int) -> None:
        """Set the screen size the overlay is centred in."""
        self.width = width
        self.height = height

    def _step_info(self, step: int) -> _StepInfo | None:
        return self._steps[step] if step < len(self._steps) else None

    def advance_step(self) -> None:
        """Complete the current step and activate the next one."""
        info = self._step_info(self._step)
        if info is not None:
            info.complete = True
            info.active = False

        following = min(self._step + 1, WorktreeSpinnerStep.DONE)
        if following == WorktreeSpinnerStep.RUN_SETUP and not self.setup_command:
            following = WorktreeSpinnerStep.DONE
        self._step = WorktreeSpinnerStep(following)

        info = self._step_info(self._step)
        if info is not None:
            info.active = True

    def set_error(self, message: str) -> None:
        """Mark the current step as failed with ``message``."""
        self.error = message
        info = self._step_info(self._step)
        if info is not None:
            info.error = message
            info.active = False

    def has_error(self) -> bool:
        """Whether a step has failed."""
        return self.error != ""

    def is_done(self) -> bool:
        """Whether every step has completed."""
        return self._step >= WorktreeSpinnerStep.DONE

    def current_step(self) -> WorktreeSpinnerStep:
        """Return the step in progress."""
        return self._step

    def has_setup_command(self) -> bool:
        """Whether a setup command is configured."""
        return self.setup_command != ""

    def is_cancelled(self) -> bool:
        """Whether the user cancelled the setup."""
        return self._cancelled

    def cancel(self) -> None:
        """Mark the setup as cancelled."""
        self._cancelled = True

    def tick(self) -> None:
        """Advance the spinner animation by one frame."""
        self.spinner_frame += 1

    def _completed_step_labels(self) -> list[str]:
        labels = [
            f"Created branch '{self.branch_name}' from '{self.default_branch}'",
            f"Created worktree at {self.worktree_path}",
        ]
        if self.setup_command:
            labels.append(f"Ran setup: {self.setup_command}")
        return labels

    def render(self) -> str:
        """Render the overlay centred on the screen."""
        modal_width = max(min(65, self.width - 10), 40)
        divider = DIVIDER_STYLE.render("─" * (modal_width - 4))

        title_style = Style(bold=True, foreground=PRIMARY_COLOR)
        spinner_style = Style(foreground=PRIMARY_COLOR)
        check_style = Style(foreground=SUCCESS_COLOR)
        error_style = Style(foreground=ERROR_COLOR)
        text_style = Style(foreground=TEXT_COLOR)
        muted_style = Style(foreground=MUTED_COLOR)

        parts = [title_style.render("Setting up worktree"), "\n", divider, "\n\n"]

        for step in self._steps:
            if step.complete:
                label = step.label
                for present, past in _COMPLETED_WORDING:
                    label = label.replace(present, past, 1)
                parts += [check_style.render("✓"), " ", text_style.render(label)]
            elif step.error:
                parts += [
                    error_style.render("✗"),
                    " ",
                    error_style.render(step.label),
                    "\n",
                    "  ",
                    error_style.render(step.error),
                ]
            elif step.active:
                frame = SPINNER_FRAMES[self.spinner_frame % len(SPINNER_FRAMES)]
                parts += [spinner_style.render(frame), " ", text_style.render(step.label)]
            else:
                parts += [muted_style.render("○"), " ", muted_style.render(step.label)]
            parts.append("\n")

        if self.is_done():
            parts += ["\n", check_style.render("Starting loop...")]

        parts += ["\n", divider, "\n"]

        footer_style = Style(foreground=MUTED_COLOR)
        if self.has_error():
            parts.append(footer_style.render("Esc: Cancel and clean up"))
        elif not self.is_done():
            parts.append(footer_style.render("Esc: Cancel"))

        modal_style = Style(
            border=True,
            border_foreground=PRIMARY_COLOR,
            padding=(1, 2),
            width=modal_width,
        )
        modal = modal_style.render("".join(parts))
        return center_modal(modal, self.width, self.height)