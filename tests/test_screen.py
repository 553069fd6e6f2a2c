import io

import pytest

from brewtui import screen


def run(fn, *args):
    w = io.StringIO()
    fn(w, *args)
    return w.getvalue()


def test_change_scrolling_region():
    w = io.StringIO()
    screen.change_scrolling_region(w, 16, 22)
    assert w.getvalue() == "\x1b[16;22r"


def test_clear_line():
    w = io.StringIO()
    screen.clear_line(w)
    assert w.getvalue() == "\x1b[2K"


def test_insert_line():
    w = io.StringIO()
    screen.insert_line(w, 12)
    assert w.getvalue() == "\x1b[12L"


def test_hide_cursor():
    w = io.StringIO()
    screen.hide_cursor(w)
    assert w.getvalue() == "\x1b[?25l"


def test_show_cursor():
    w = io.StringIO()
    screen.show_cursor(w)
    assert w.getvalue() == "\x1b[?25h"


def test_cursor_up():
    w = io.StringIO()
    screen.cursor_up(w)
    assert w.getvalue() == "\x1b[1A"


def test_cursor_down():
    w = io.StringIO()
    screen.cursor_down(w)
    assert w.getvalue() == "\x1b[1B"


def test_move_cursor():
    w = io.StringIO()
    screen.move_cursor(w, 10, 20)
    assert w.getvalue() == "\x1b[10;20H"


def test_cursor_back():
    w = io.StringIO()
    screen.cursor_back(w, 15)
    assert w.getvalue() == "\x1b[15D"


def test_enter_alt_screen_homes_cursor():
    w = io.StringIO()
    screen.enter_alt_screen(w)
    out = w.getvalue()
    home = io.StringIO()
    screen.move_cursor(home, 0, 0)
    assert out.endswith(home.getvalue())
    assert out.startswith("\x1b[?1049")


@pytest.mark.parametrize(
    "enable, disable",
    [
        (screen.enter_alt_screen, screen.exit_alt_screen),
        (screen.enable_mouse_cell_motion, screen.disable_mouse_cell_motion),
        (screen.enable_mouse_all_motion, screen.disable_mouse_all_motion),
    ],
)
def test_enable_and_disable_differ_only_in_final_letter(enable, disable):
    on = run(enable)
    off = run(disable)
    assert on[: len(off) - 1] == off[:-1]
    assert on[len(off) - 1] == "h"
    assert off[-1] == "l"


def test_cell_and_all_motion_are_distinct_modes():
    cell_on = io.StringIO()
    all_on = io.StringIO()
    screen.enable_mouse_cell_motion(cell_on)
    screen.enable_mouse_all_motion(all_on)
    assert cell_on.getvalue() != all_on.getvalue()
    assert cell_on.getvalue().startswith("\x1b[?")
    cell_off = io.StringIO()
    all_off = io.StringIO()
    screen.disable_mouse_cell_motion(cell_off)
    screen.disable_mouse_all_motion(all_off)
    assert cell_off.getvalue() != all_off.getvalue()
    assert cell_off.getvalue().endswith("l")