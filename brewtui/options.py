"""Options that configure a Program when it is created."""

from __future__ import annotations

from enum import IntFlag
from typing import Any, BinaryIO, Callable, Optional, TextIO

from .renderer import NilRenderer

__all__ = [
    "StartupOptions",
    "ProgramOption",
    "with_output",
    "with_input",
    "with_input_tty",
    "without_catch_panics",
    "with_alt_screen",
    "with_mouse_cell_motion",
    "with_mouse_all_motion",
    "without_renderer",
    "with_ansi_compressor",
]


class StartupOptions(IntFlag):
    """Settings applied while a program starts, kept as bit flags."""

    ALT_SCREEN = 1
    MOUSE_CELL_MOTION = 2
    MOUSE_ALL_MOTION = 4
    INPUT_TTY = 8
    CUSTOM_INPUT = 16
    ANSI_COMPRESSOR = 32

    def has(self, option: "StartupOptions") -> bool:
        """Whether any of the bits in ``option`` is set."""
        return bool(self & option)


ProgramOption = Callable[[Any], None]


def with_output(output: TextIO) -> ProgramOption:
    """Write to ``output`` instead of standard output."""

    def apply(program: Any) -> None:
        program.output = output

    return apply


def with_input(stream: Optional[BinaryIO]) -> ProgramOption:
    """Read input from ``stream`` instead of standard input."""

    def apply(program: Any) -> None:
        program.input = stream
        program.startup_options |= StartupOptions.CUSTOM_INPUT

    return apply


def with_input_tty() -> ProgramOption:
    """Open the controlling terminal for input."""

    def apply(program: Any) -> None:
        program.startup_options |= StartupOptions.INPUT_TTY

    return apply


def without_catch_panics() -> ProgramOption:
    """Leave the terminal as it is when the program fails with an exception."""

    def apply(program: Any) -> None:
        program.catch_panics = False

    return apply


def with_alt_screen() -> ProgramOption:
    """Start in the alternate screen buffer (full window mode)."""

    def apply(program: Any) -> None:
        program.startup_options |= StartupOptions.ALT_SCREEN

    return apply


def with_mouse_cell_motion() -> ProgramOption:
    """Report clicks, releases, wheel and drag events from the start."""

    def apply(program: Any) -> None:
        program.startup_options = (
            program.startup_options | StartupOptions.MOUSE_CELL_MOTION
        ) & ~StartupOptions.MOUSE_ALL_MOTION

    return apply


def with_mouse_all_motion() -> ProgramOption:
    """Report all mouse events, including motion with no button pressed."""

    def apply(program: Any) -> None:
        program.startup_options = (
            program.startup_options | StartupOptions.MOUSE_ALL_MOTION
        ) & ~StartupOptions.MOUSE_CELL_MOTION

    return apply


def without_renderer() -> ProgramOption:
    """Disable rendering so output behaves as in a plain command-line tool."""

    def apply(program: Any) -> None:
        program.renderer = NilRenderer()

    return apply


def with_ansi_compressor() -> ProgramOption:
    """Drop redundant ANSI style sequences from rendered output."""

    def apply(program: Any) -> None:
        program.startup_options |= StartupOptions.ANSI_COMPRESSOR

    return apply