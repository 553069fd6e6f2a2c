import io

import pytest

from brewtui.options import (
    StartupOptions,
    with_alt_screen,
    with_ansi_compressor,
    with_input,
    with_input_tty,
    with_mouse_all_motion,
    with_mouse_cell_motion,
    with_output,
    without_catch_panics,
    without_renderer,
)
from brewtui.program import new_program
from brewtui.renderer import NilRenderer


def test_output():
    buf = io.StringIO()
    p = new_program(None, with_output(buf))
    assert p.output is buf


def test_input():
    buf = io.BytesIO()
    p = new_program(None, with_input(buf))
    assert p.input is buf
    assert p.startup_options.has(StartupOptions.CUSTOM_INPUT)


def test_catch_panics_default_and_disabled():
    assert new_program(None).catch_panics is True
    assert new_program(None, without_catch_panics()).catch_panics is False


def test_renderer():
    assert new_program(None).renderer is None
    p = new_program(None, without_renderer())
    assert isinstance(p.renderer, NilRenderer)
    p.renderer.alt_screen = True
    assert p.renderer.alt_screen is False


@pytest.mark.parametrize(
    "option, expected",
    [
        (with_input_tty(), StartupOptions.INPUT_TTY),
        (with_alt_screen(), StartupOptions.ALT_SCREEN),
        (with_ansi_compressor(), StartupOptions.ANSI_COMPRESSOR),
    ],
)
def test_startup_options(option, expected):
    p = new_program(None, option)
    assert p.startup_options.has(expected)


def test_mouse_cell_motion_overrides_all_motion():
    p = new_program(None, with_mouse_all_motion(), with_mouse_cell_motion())
    assert p.startup_options.has(StartupOptions.MOUSE_CELL_MOTION)
    assert not p.startup_options.has(StartupOptions.MOUSE_ALL_MOTION)


def test_mouse_all_motion_overrides_cell_motion():
    p = new_program(None, with_mouse_cell_motion(), with_mouse_all_motion())
    assert p.startup_options.has(StartupOptions.MOUSE_ALL_MOTION)
    assert not p.startup_options.has(StartupOptions.MOUSE_CELL_MOTION)


def test_multiple():
    p = new_program(None, with_mouse_all_motion(), with_alt_screen(), with_input_tty())
    for opt in (
        StartupOptions.MOUSE_ALL_MOTION,
        StartupOptions.ALT_SCREEN,
        StartupOptions.INPUT_TTY,
    ):
        assert p.startup_options.has(opt)
    assert not p.startup_options.has(StartupOptions.CUSTOM_INPUT)


def test_has_on_empty_and_combined_flags():
    assert StartupOptions(0).has(StartupOptions.ALT_SCREEN) is False
    combined = StartupOptions.ALT_SCREEN | StartupOptions.INPUT_TTY
    assert combined.has(StartupOptions.INPUT_TTY) is True
    assert combined.has(StartupOptions.MOUSE_CELL_MOTION) is False