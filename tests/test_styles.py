import re

import pytest

from chief.styles import (
    ACTIVITY_COMPLETE_STYLE,
    ACTIVITY_ERROR_STYLE,
    ACTIVITY_MUTED_STYLE,
    ACTIVITY_RUNNING_STYLE,
    ICON_IN_PROGRESS,
    ICON_PASSED,
    ICON_PENDING,
    STATE_COMPLETE_STYLE,
    STATE_ERROR_STYLE,
    STATE_PAUSED_STYLE,
    STATE_READY_STYLE,
    STATE_RUNNING_STYLE,
    STATE_STOPPED_STYLE,
    AppState,
    Style,
    center_modal,
    get_activity_style,
    get_state_style,
    get_status_icon,
    join_horizontal,
    visible_width,
)

ANSI = re.compile(r"\x1b\[[0-9;]*m")


def plain(text):
    return ANSI.sub("", text)


@pytest.mark.parametrize(
    "state, expected",
    [
        (AppState.READY, "Ready"),
        (AppState.RUNNING, "Running"),
        (AppState.PAUSED, "Paused"),
        (AppState.STOPPED, "Stopped"),
        (AppState.COMPLETE, "Complete"),
        (AppState.ERROR, "Error"),
        (AppState(99), "Unknown"),
    ],
)
def test_app_state_str(state, expected):
    assert str(state) == expected


@pytest.mark.parametrize(
    "state, can_start, can_pause, can_stop",
    [
        (AppState.READY, True, False, False),
        (AppState.RUNNING, False, True, True),
        (AppState.PAUSED, True, False, True),
        (AppState.STOPPED, False, False, False),
        (AppState.COMPLETE, False, False, False),
        (AppState.ERROR, False, False, False),
    ],
)
def test_state_transitions(state, can_start, can_pause, can_stop):
    assert state.can_start is can_start
    assert state.can_pause is can_pause
    assert state.can_stop is can_stop


def test_visible_width_ignores_colour_codes():
    assert visible_width("\x1b[1mab\x1b[0m") == 2


def test_visible_width_wide_characters_and_lines():
    assert visible_width("日本") == 4
    assert visible_width("a\nabcd\nab") == 4
    assert visible_width("") == 0


def test_render_plain_pads_lines_to_block_width():
    assert Style().render("ab\nc") == "ab\nc "


def test_render_applies_colour_codes():
    assert Style(foreground="#00D7FF").render("x") == "\x1b[38;2;0;215;255mx\x1b[0m"
    assert Style(bold=True).render("x") == "\x1b[1mx\x1b[0m"


def test_render_border_and_width():
    rendered = Style(border=True, padding=(1, 2), width=20).render("hello\nworld")
    lines = rendered.split("\n")
    assert len(lines) == 2 + 2 + 2
    assert all(visible_width(line) == 22 for line in lines)
    assert plain(lines[0]).startswith("╭")
    assert plain(lines[-1]).endswith("╯")
    assert "hello" in plain(lines[2])


def test_render_height_adds_rows():
    rendered = Style(height=5).render("a")
    assert rendered.split("\n") == ["a", " ", " ", " ", " "]


def test_render_keeps_outer_colour_after_inner_reset():
    inner = Style(bold=True).render("in")
    outer = Style(foreground="#FFFFFF").render(inner + "out")
    assert "\x1b[0m\x1b[38;2;255;255;255mout" in outer


def test_join_horizontal_top_aligned():
    assert join_horizontal("a\nb", "ccc") == "accc\nb   "


def test_join_horizontal_empty():
    assert join_horizontal() == ""


def test_center_modal():
    assert center_modal("ab\ncd", 10, 6) == "\n\n    ab\n    cd\n"


def test_center_modal_clamps_negative_padding():
    assert center_modal("abcdef", 2, 0) == "abcdef\n"


def test_get_status_icon():
    assert plain(get_status_icon(True, True)) == ICON_PASSED
    assert plain(get_status_icon(False, True)) == ICON_IN_PROGRESS
    assert plain(get_status_icon(False, False)) == ICON_PENDING


@pytest.mark.parametrize(
    "state, expected",
    [
        (AppState.RUNNING, STATE_RUNNING_STYLE),
        (AppState.PAUSED, STATE_PAUSED_STYLE),
        (AppState.COMPLETE, STATE_COMPLETE_STYLE),
        (AppState.ERROR, STATE_ERROR_STYLE),
        (AppState.STOPPED, STATE_STOPPED_STYLE),
        (AppState.READY, STATE_READY_STYLE),
        (AppState(42), STATE_READY_STYLE),
    ],
)
def test_get_state_style(state, expected):
    assert get_state_style(state) is expected


@pytest.mark.parametrize(
    "state, expected",
    [
        (AppState.RUNNING, ACTIVITY_RUNNING_STYLE),
        (AppState.ERROR, ACTIVITY_ERROR_STYLE),
        (AppState.COMPLETE, ACTIVITY_COMPLETE_STYLE),
        (AppState.PAUSED, ACTIVITY_MUTED_STYLE),
        (AppState.READY, ACTIVITY_MUTED_STYLE),
    ],
)
def test_get_activity_style(state, expected):
    assert get_activity_style(state) is expected