"""Built-in messages and the commands that produce them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional

__all__ = [
    "Msg",
    "Cmd",
    "QuitMsg",
    "BatchMsg",
    "SequenceMsg",
    "EnterAltScreenMsg",
    "ExitAltScreenMsg",
    "EnableMouseCellMotionMsg",
    "EnableMouseAllMotionMsg",
    "DisableMouseMsg",
    "HideCursorMsg",
    "WindowSizeMsg",
    "batch",
    "sequence",
    "quit",
    "enter_alt_screen",
    "exit_alt_screen",
    "enable_mouse_cell_motion",
    "enable_mouse_all_motion",
    "disable_mouse",
    "hide_cursor",
]

Msg = Any
Cmd = Callable[[], Msg]


@dataclass(frozen=True)
class QuitMsg:
    """Tells the program to exit."""


@dataclass(frozen=True)
class BatchMsg:
    """Commands to run concurrently, with no ordering guarantee."""

    cmds: tuple[Cmd, ...] = ()

    def __iter__(self) -> Iterator[Cmd]:
        return iter(self.cmds)

    def __len__(self) -> int:
        return len(self.cmds)


@dataclass(frozen=True)
class SequenceMsg:
    """Commands to run one at a time, in order."""

    cmds: tuple[Optional[Cmd], ...] = ()

    def __iter__(self) -> Iterator[Optional[Cmd]]:
        return iter(self.cmds)

    def __len__(self) -> int:
        return len(self.cmds)


@dataclass(frozen=True)
class EnterAltScreenMsg:
    """Tells the program to enter the alternate screen buffer."""


@dataclass(frozen=True)
class ExitAltScreenMsg:
    """Tells the program to leave the alternate screen buffer."""


@dataclass(frozen=True)
class EnableMouseCellMotionMsg:
    """Tells the program to report clicks, wheel and drag events."""


@dataclass(frozen=True)
class EnableMouseAllMotionMsg:
    """Tells the program to report all mouse motion, pressed or not."""


@dataclass(frozen=True)
class DisableMouseMsg:
    """Tells the program to stop reporting mouse events."""


@dataclass(frozen=True)
class HideCursorMsg:
    """Tells the program to hide the cursor."""


@dataclass(frozen=True)
class WindowSizeMsg:
    """Reports the terminal size, initially and on every resize."""

    width: int
    height: int


def batch(*cmds: Optional[Cmd]) -> Optional[Cmd]:
    """Combine commands to run concurrently; None entries are dropped.

    Returns None when no command is left.
    """
    valid = tuple(c for c in cmds if c is not None)
    if not valid:
        return None

    def run_batch() -> BatchMsg:
        return BatchMsg(valid)

    return run_batch


def sequence(*cmds: Optional[Cmd]) -> Cmd:
    """Combine commands to run one at a time, in order."""
    ordered = tuple(cmds)

    def run_sequence() -> SequenceMsg:
        return SequenceMsg(ordered)

    return run_sequence


def quit() -> QuitMsg:  # noqa: A001 - public command name
    """Command that makes the program exit."""
    return QuitMsg()


def enter_alt_screen() -> EnterAltScreenMsg:
    """Command that enters the alternate screen buffer."""
    return EnterAltScreenMsg()


def exit_alt_screen() -> ExitAltScreenMsg:
    """Command that leaves the alternate screen buffer."""
    return ExitAltScreenMsg()


def enable_mouse_cell_motion() -> EnableMouseCellMotionMsg:
    """Command that enables cell-motion mouse reporting."""
    return EnableMouseCellMotionMsg()


def enable_mouse_all_motion() -> EnableMouseAllMotionMsg:
    """Command that enables all-motion mouse reporting."""
    return EnableMouseAllMotionMsg()


def disable_mouse() -> DisableMouseMsg:
    """Command that stops mouse reporting."""
    return DisableMouseMsg()


def hide_cursor() -> HideCursorMsg:
    """Command that hides the cursor."""
    return HideCursorMsg()