"""Writers for the ANSI control sequences used to drive the terminal."""

from __future__ import annotations

from typing import TextIO

__all__ = [
    "hide_cursor",
    "show_cursor",
    "clear_line",
    "cursor_up",
    "cursor_down",
    "insert_line",
    "move_cursor",
    "change_scrolling_region",
    "cursor_back",
    "enter_alt_screen",
    "exit_alt_screen",
    "enable_mouse_cell_motion",
    "disable_mouse_cell_motion",
    "enable_mouse_all_motion",
    "disable_mouse_all_motion",
]

CSI = "\x1b["


def hide_cursor(w: TextIO) -> None:
    w.write(CSI + "?25l")


def show_cursor(w: TextIO) -> None:
    w.write(CSI + "?25h")


def clear_line(w: TextIO) -> None:
    w.write(f"{CSI}2K")


def cursor_up(w: TextIO) -> None:
    w.write(f"{CSI}1A")


def cursor_down(w: TextIO) -> None:
    w.write(f"{CSI}1B")


def insert_line(w: TextIO, num_lines: int) -> None:
    w.write(f"{CSI}{num_lines}L")


def move_cursor(w: TextIO, row: int, col: int) -> None:
    w.write(f"{CSI}{row};{col}H")


def change_scrolling_region(w: TextIO, top: int, bottom: int) -> None:
    w.write(f"{CSI}{top};{bottom}r")


def cursor_back(w: TextIO, n: int) -> None:
    w.write(f"{CSI}{n}D")


def enter_alt_screen(w: TextIO) -> None:
    """Switch to the alternate screen buffer and home the cursor."""
    w.write(CSI + "?1049h")
    move_cursor(w, 0, 0)


def exit_alt_screen(w: TextIO) -> None:
    w.write(CSI + "?1049l")


def enable_mouse_cell_motion(w: TextIO) -> None:
    w.write(CSI + "?1002h")


def disable_mouse_cell_motion(w: TextIO) -> None:
    w.write(CSI + "?1002l")


def enable_mouse_all_motion(w: TextIO) -> None:
    w.write(CSI + "?1003h")


def disable_mouse_all_motion(w: TextIO) -> None:
    w.write(CSI + "?1003l")