# chief

Building blocks for the terminal interface of an autonomous PRD agent: styled
text rendering, modal dialogs, a tab bar, a settings overlay and a worktree
setup progress overlay. The package also checks a releases endpoint for newer
versions and can replace an installed binary with the latest release.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `chief.styles`: the colour palette, the `Style` class (foreground and
  background colours as 24-bit ANSI codes, bold, padding, rounded border,
  width and height), `visible_width`, `join_horizontal`, `center_modal`, the
  `AppState` enum (with `can_start`, `can_pause` and `can_stop`), and
  `get_status_icon`, `get_state_style` and `get_activity_style`.
- `chief.update`: `check_for_update` and `perform_update` against a releases
  endpoint configured through `Options`; `normalize_version`, `base_version`
  and `compare_versions`; `find_assets`, `check_write_permission`,
  `download_to_temp` and `verify_checksum`. Failures raise `UpdateError`;
  `perform_update` raises `RateLimitedError` when the endpoint answers 403,
  while `check_for_update` then reports no update.
- `chief.quit_confirm`: `QuitConfirmation`, the "Quit Chief?" dialog, whose
  selection (`QuitConfirmOption`) starts on Cancel.
- `chief.worktree_spinner`: `WorktreeSpinner`, a step-by-step overlay for
  creating a branch, creating a worktree and optionally running a setup
  command (`WorktreeSpinnerStep`).
- `chief.settings`: `SettingsOverlay` with inline string editing and boolean
  toggles. It reads and writes any configuration object that has the
  attributes `worktree.setup`, `on_complete.push` and `on_complete.create_pr`.
- `chief.tabbar`: `TabBar` and `TabEntry`, with full (`render`) and compact
  (`render_compact`) renderings and a `LoopState` per tab.

## Examples

```python
from chief.worktree_spinner import WorktreeSpinner

spinner = WorktreeSpinner()
spinner.configure("auth", "chief/auth", "main", ".chief/worktrees/auth/", "npm install")
spinner.set_size(80, 24)
spinner.advance_step()
print(spinner.render())
```

```python
from chief.tabbar import LoopState, TabBar, TabEntry

bar = TabBar(current_prd="auth")
bar.set_entries([
    TabEntry("auth", branch="chief/auth", loop_state=LoopState.RUNNING, iteration=3),
    TabEntry("payments", completed=2, total=5),
])
print(bar.render())
```

```python
from chief.update import Options, check_for_update

result = check_for_update("0.5.0", Options(releases_url="http://localhost:8000/latest"))
if result.update_available:
    print(f"New version available: {result.latest_version}")
```

Version comparison accounts for versions produced by `git describe`:

```python
from chief.update import base_version, compare_versions

base_version("v0.4.0-61-gd06835b")              # "0.4.0"
compare_versions("0.4.0-61-gd06835b", "0.4.0")  # False
compare_versions("0.5.0", "0.5.1")              # True
```

## What this package does not do

These are components, not a running application. There is no command line
program, no main screen, dashboard or log viewer, and no key handling: the
caller decides when to move selections, toggle settings or advance steps, and
prints the rendered strings itself. Nothing reads or writes configuration
files or PRD files: the settings overlay works on a configuration object it is
given, and the tab bar shows the entries it is given through `set_entries`.