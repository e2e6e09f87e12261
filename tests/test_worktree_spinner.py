import re

from chief.worktree_spinner import WorktreeSpinner, WorktreeSpinnerStep

_ANSI = re.compile(r"\x1b\[[0-9;]*m")


def _plain(text):
    return _ANSI.sub("", text)


def _spinner(setup=""):
    spinner = WorktreeSpinner()
    spinner.configure("auth", "chief/auth", "main", ".chief/worktrees/auth/", setup)
    return spinner


def test_configure():
    s = _spinner()
    assert s.prd_name == "auth"
    assert s.branch_name == "chief/auth"
    assert s.default_branch == "main"
    assert len(s.steps) == 2
    assert s.steps[0].active


def test_configure_with_setup():
    s = _spinner("npm install")
    assert len(s.steps) == 3
    assert s.has_setup_command()


def test_configure_without_setup_has_no_setup_command():
    s = _spinner()
    assert not s.has_setup_command()


def test_advance_step():
    s = _spinner("npm install")
    assert s.current_step() == WorktreeSpinnerStep.CREATE_BRANCH
    assert not s.is_done()

    s.advance_step()
    assert s.current_step() == WorktreeSpinnerStep.CREATE_WORKTREE
    assert s.steps[0].complete
    assert s.steps[1].active

    s.advance_step()
    assert s.current_step() == WorktreeSpinnerStep.RUN_SETUP

    s.advance_step()
    assert s.is_done()


def test_advance_step_skips_setup():
    s = _spinner()
    s.advance_step()
    s.advance_step()
    assert s.is_done()
    assert s.current_step() == WorktreeSpinnerStep.DONE


def test_advance_past_done_stays_done():
    s = _spinner()
    for _ in range(5):
        s.advance_step()
    assert s.is_done()
    assert all(step.complete for step in s.steps)


def test_set_error():
    s = _spinner()
    s.set_error("branch already exists")
    assert s.has_error()
    assert s.steps[0].error == "branch already exists"
    assert not s.steps[0].active


def test_cancel():
    s = _spinner()
    assert not s.is_cancelled()
    s.cancel()
    assert s.is_cancelled()


def test_configure_clears_cancel_and_error():
    s = _spinner()
    s.cancel()
    s.set_error("branch already exists")
    s.configure("auth", "chief/auth", "main", ".chief/worktrees/auth/", "")
    assert not s.is_cancelled()
    assert not s.has_error()


def test_tick():
    s = _spinner()
    assert s.spinner_frame == 0
    s.tick()
    assert s.spinner_frame == 1


def test_tick_changes_rendered_frame():
    s = _spinner()
    s.set_size(80, 24)
    assert "⠋" in s.render()
    s.tick()
    rendered = s.render()
    assert "⠙" in rendered
    assert "⠋" not in rendered


def test_render():
    s = _spinner("npm install")
    s.set_size(80, 24)
    rendered = _plain(s.render())
    assert "Setting up worktree" in rendered
    assert "chief/auth" in rendered
    assert ".chief/worktrees/auth/" in rendered
    assert "npm install" in rendered
    assert "Esc" in rendered


def test_render_complete():
    s = _spinner()
    s.set_size(80, 24)
    s.advance_step()
    s.advance_step()
    rendered = _plain(s.render())
    assert "Starting loop..." in rendered
    assert "✓" in rendered
    assert "Created branch 'chief/auth' from 'main'" in rendered
    assert "Esc" not in rendered


def test_render_error():
    s = _spinner()
    s.set_size(80, 24)
    s.set_error("branch already exists")
    rendered = _plain(s.render())
    assert "✗" in rendered
    assert "branch already exists" in rendered
    assert "clean up" in rendered


def test_render_lines_are_aligned():
    s = _spinner("npm install")
    s.set_size(100, 40)
    lines = [line for line in _plain(s.render()).split("\n") if line]
    assert lines[0].lstrip().startswith("╭")
    assert lines[-1].lstrip().startswith("╰")
    indents = {len(line) - len(line.lstrip(" ")) for line in lines}
    assert len(indents) == 1