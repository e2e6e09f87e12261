from dataclasses import dataclass, field

from chief.settings import SettingsItemType, SettingsOverlay


@dataclass
class _WorktreeConfig:
    setup: str = ""


@dataclass
class _OnCompleteConfig:
    push: bool = False
    create_pr: bool = False


@dataclass
class _Config:
    worktree: _WorktreeConfig = field(default_factory=_WorktreeConfig)
    on_complete: _OnCompleteConfig = field(default_factory=_OnCompleteConfig)


def _loaded(config=None):
    overlay = SettingsOverlay()
    overlay.load_from_config(config or _Config())
    return overlay


def test_load_from_config():
    overlay = _loaded(
        _Config(_WorktreeConfig("npm install"), _OnCompleteConfig(push=True, create_pr=False))
    )
    assert len(overlay.items) == 3
    assert overlay.items[0].key == "worktree.setup"
    assert overlay.items[0].string_val == "npm install"
    assert overlay.items[0].type is SettingsItemType.STRING
    assert overlay.items[1].key == "onComplete.push"
    assert overlay.items[1].bool_val is True
    assert overlay.items[2].key == "onComplete.createPR"
    assert overlay.items[2].bool_val is False
    assert overlay.selected_index == 0


def test_apply_to_config():
    overlay = _loaded()
    overlay.items[0].string_val = "go mod download"
    overlay.items[1].bool_val = True
    overlay.items[2].bool_val = True

    result = _Config()
    overlay.apply_to_config(result)
    assert result.worktree.setup == "go mod download"
    assert result.on_complete.push is True
    assert result.on_complete.create_pr is True


def test_navigation():
    overlay = _loaded()
    assert overlay.selected_index == 0
    overlay.move_down()
    assert overlay.selected_index == 1
    overlay.move_down()
    assert overlay.selected_index == 2
    overlay.move_down()
    assert overlay.selected_index == 2
    overlay.move_up()
    assert overlay.selected_index == 1
    overlay.move_up()
    overlay.move_up()
    assert overlay.selected_index == 0


def test_toggle_bool():
    overlay = _loaded(_Config(on_complete=_OnCompleteConfig(push=False)))
    overlay.move_down()
    assert overlay.toggle_bool() == ("onComplete.push", True)
    key, value = overlay.toggle_bool()
    assert value is False
    assert key == "onComplete.push"


def test_toggle_bool_on_string_item():
    overlay = _loaded()
    assert overlay.toggle_bool() == ("", False)


def test_revert_toggle():
    overlay = _loaded(_Config(on_complete=_OnCompleteConfig(push=False)))
    overlay.move_down()
    overlay.toggle_bool()
    assert overlay.items[1].bool_val is True
    overlay.revert_toggle()
    assert overlay.items[1].bool_val is False


def test_string_editing():
    overlay = _loaded()
    assert not overlay.is_editing()
    overlay.start_editing()
    assert overlay.is_editing()
    assert overlay.edit_buffer == ""

    for ch in "npm":
        overlay.add_edit_char(ch)
    assert overlay.edit_buffer == "npm"

    overlay.delete_edit_char()
    assert overlay.edit_buffer == "np"

    overlay.confirm_edit()
    assert not overlay.is_editing()
    assert overlay.items[0].string_val == "np"


def test_delete_edit_char_removes_whole_character():
    overlay = _loaded()
    overlay.start_editing()
    overlay.add_edit_char("a")
    overlay.add_edit_char("é")
    overlay.delete_edit_char()
    assert overlay.edit_buffer == "a"
    overlay.delete_edit_char()
    overlay.delete_edit_char()
    assert overlay.edit_buffer == ""


def test_cancel_edit():
    overlay = _loaded(_Config(worktree=_WorktreeConfig("original")))
    overlay.start_editing()
    overlay.add_edit_char("x")
    overlay.cancel_edit()
    assert not overlay.is_editing()
    assert overlay.items[0].string_val == "original"


def test_start_editing_on_bool_item():
    overlay = _loaded()
    overlay.move_down()
    overlay.start_editing()
    assert overlay.is_editing() is False


def test_gh_error():
    overlay = _loaded()
    assert not overlay.has_gh_error()
    overlay.set_gh_error("gh not found")
    assert overlay.has_gh_error()
    overlay.dismiss_gh_error()
    assert not overlay.has_gh_error()
    assert overlay.gh_error == ""


def test_render():
    overlay = _loaded(
        _Config(_WorktreeConfig("npm install"), _OnCompleteConfig(push=True, create_pr=False))
    )
    overlay.set_size(80, 24)
    rendered = overlay.render()
    for text in ("Settings", "config.yaml", "Worktree", "On Complete", "npm install", "Yes", "No", "Esc: close"):
        assert text in rendered


def test_render_gh_error():
    overlay = _loaded()
    overlay.set_size(80, 24)
    overlay.set_gh_error("gh not found")
    rendered = overlay.render()
    assert "GitHub CLI Error" in rendered
    assert "gh not found" in rendered
    assert "Press any key to dismiss" in rendered


def test_render_editing():
    overlay = _loaded()
    overlay.set_size(80, 24)
    overlay.start_editing()
    rendered = overlay.render()
    assert "Enter: save" in rendered
    assert "(empty)" in rendered
    assert "█" in rendered


def test_render_selected_indicator():
    overlay = _loaded()
    overlay.set_size(80, 24)
    assert ">" in overlay.render()


def test_render_empty_string_value():
    overlay = _loaded()
    overlay.set_size(80, 24)
    assert "(not set)" in overlay.render()


def test_render_truncates_long_value():
    long_value = "x" * 50
    overlay = _loaded(_Config(worktree=_WorktreeConfig(long_value)))
    overlay.set_size(80, 24)
    rendered = overlay.render()
    assert long_value not in rendered
    assert "x" * 34 + "…" in rendered


def test_selected_item():
    overlay = _loaded()
    item = overlay.selected_item()
    assert item is not None
    assert item.key == "worktree.setup"
    overlay.move_down()
    assert overlay.selected_item().key == "onComplete.push"


def test_selected_item_without_items():
    assert SettingsOverlay().selected_item() is None