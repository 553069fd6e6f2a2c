"""Keypress messages and the decoder that turns raw terminal input into them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import BinaryIO

from .messages import Msg
from .mouse import MouseMsg, NotMouseEventError, parse_x10_mouse_events

__all__ = [
    "KeyType",
    "Key",
    "KeyMsg",
    "InputDecodeError",
    "read_inputs",
]

_READ_SIZE = 256
_ESC = "\x1b"


class KeyType(IntEnum):
    """The key pressed: a control key, a special key, or RUNES for text."""

    # Control keys (C0 codes) and their aliases.
    NULL = 0
    CTRL_AT = 0
    CTRL_A = 1
    CTRL_B = 2
    BREAK = 3
    CTRL_C = 3
    CTRL_D = 4
    CTRL_E = 5
    CTRL_F = 6
    CTRL_G = 7
    CTRL_H = 8
    TAB = 9
    CTRL_I = 9
    CTRL_J = 10
    CTRL_K = 11
    CTRL_L = 12
    ENTER = 13
    CTRL_M = 13
    CTRL_N = 14
    CTRL_O = 15
    CTRL_P = 16
    CTRL_Q = 17
    CTRL_R = 18
    CTRL_S = 19
    CTRL_T = 20
    CTRL_U = 21
    CTRL_V = 22
    CTRL_W = 23
    CTRL_X = 24
    CTRL_Y = 25
    CTRL_Z = 26
    ESC = 27
    ESCAPE = 27
    CTRL_OPEN_BRACKET = 27
    CTRL_BACKSLASH = 28
    CTRL_CLOSE_BRACKET = 29
    CTRL_CARET = 30
    CTRL_UNDERSCORE = 31
    BACKSPACE = 127
    CTRL_QUESTION_MARK = 127

    # Other keys.
    RUNES = -1
    UP = -2
    DOWN = -3
    RIGHT = -4
    LEFT = -5
    SHIFT_TAB = -6
    HOME = -7
    END = -8
    PGUP = -9
    PGDOWN = -10
    DELETE = -11
    SPACE = -12
    CTRL_UP = -13
    CTRL_DOWN = -14
    CTRL_RIGHT = -15
    CTRL_LEFT = -16
    SHIFT_UP = -17
    SHIFT_DOWN = -18
    SHIFT_RIGHT = -19
    SHIFT_LEFT = -20
    CTRL_SHIFT_UP = -21
    CTRL_SHIFT_DOWN = -22
    CTRL_SHIFT_LEFT = -23
    CTRL_SHIFT_RIGHT = -24
    F1 = -25
    F2 = -26
    F3 = -27
    F4 = -28
    F5 = -29
    F6 = -30
    F7 = -31
    F8 = -32
    F9 = -33
    F10 = -34
    F11 = -35
    F12 = -36
    F13 = -37
    F14 = -38
    F15 = -39
    F16 = -40
    F17 = -41
    F18 = -42
    F19 = -43
    F20 = -44

    def __str__(self) -> str:
        return _KEY_NAMES.get(int(self), "")


_CONTROL_NAMES = {
    0: "ctrl+@",
    9: "tab",
    13: "enter",
    27: "esc",
    28: "ctrl+\\",
    29: "ctrl+]",
    30: "ctrl+^",
    31: "ctrl+_",
    127: "backspace",
}

_KEY_NAMES: dict[int, str] = {
    **{code: f"ctrl+{chr(ord('a') + code - 1)}" for code in range(1, 27)},
    **_CONTROL_NAMES,
    KeyType.RUNES: "runes",
    KeyType.UP: "up",
    KeyType.DOWN: "down",
    KeyType.RIGHT: "right",
    KeyType.SPACE: " ",
    KeyType.LEFT: "left",
    KeyType.SHIFT_TAB: "shift+tab",
    KeyType.HOME: "home",
    KeyType.END: "end",
    KeyType.PGUP: "pgup",
    KeyType.PGDOWN: "pgdown",
    KeyType.DELETE: "delete",
    KeyType.CTRL_UP: "ctrl+up",
    KeyType.CTRL_DOWN: "ctrl+down",
    KeyType.CTRL_RIGHT: "ctrl+right",
    KeyType.CTRL_LEFT: "ctrl+left",
    KeyType.SHIFT_UP: "shift+up",
    KeyType.SHIFT_DOWN: "shift+down",
    KeyType.SHIFT_RIGHT: "shift+right",
    KeyType.SHIFT_LEFT: "shift+left",
    KeyType.CTRL_SHIFT_UP: "ctrl+shift+up",
    KeyType.CTRL_SHIFT_DOWN: "ctrl+shift+down",
    KeyType.CTRL_SHIFT_LEFT: "ctrl+shift+left",
    KeyType.CTRL_SHIFT_RIGHT: "ctrl+shift+right",
    **{int(KeyType[f"F{n}"]): f"f{n}" for n in range(1, 21)},
}


@dataclass(frozen=True)
class Key:
    """A keypress. ``runes`` holds the typed text for RUNES and SPACE keys."""

    type: KeyType | int = KeyType.RUNES
    runes: str = ""
    alt: bool = False

    def __str__(self) -> str:
        prefix = "alt+" if self.alt else ""
        if self.type == KeyType.RUNES:
            return prefix + self.runes
        name = _KEY_NAMES.get(int(self.type))
        if name is None:
            return ""
        return prefix + name


class KeyMsg(Key):
    """A keypress delivered to a program's update function."""


class InputDecodeError(ValueError):
    """Raised when terminal input cannot be decoded into characters."""


def _k(key_type: KeyType, alt: bool = False) -> KeyMsg:
    return KeyMsg(type=key_type, alt=alt)


_T = KeyType

_SEQUENCES: dict[str, KeyMsg] = {
    # Arrow keys
    "\x1b[A": _k(_T.UP),
    "\x1b[B": _k(_T.DOWN),
    "\x1b[C": _k(_T.RIGHT),
    "\x1b[D": _k(_T.LEFT),
    "\x1b[1;2A": _k(_T.SHIFT_UP),
    "\x1b[1;2B": _k(_T.SHIFT_DOWN),
    "\x1b[1;2C": _k(_T.SHIFT_RIGHT),
    "\x1b[1;2D": _k(_T.SHIFT_LEFT),
    "\x1b[OA": _k(_T.SHIFT_UP),
    "\x1b[OB": _k(_T.SHIFT_DOWN),
    "\x1b[OC": _k(_T.SHIFT_RIGHT),
    "\x1b[OD": _k(_T.SHIFT_LEFT),
    "\x1b[a": _k(_T.SHIFT_UP),
    "\x1b[b": _k(_T.SHIFT_DOWN),
    "\x1b[c": _k(_T.SHIFT_RIGHT),
    "\x1b[d": _k(_T.SHIFT_LEFT),
    "\x1b[1;3A": _k(_T.UP, True),
    "\x1b[1;3B": _k(_T.DOWN, True),
    "\x1b[1;3C": _k(_T.RIGHT, True),
    "\x1b[1;3D": _k(_T.LEFT, True),
    "\x1b\x1b[A": _k(_T.UP, True),
    "\x1b\x1b[B": _k(_T.DOWN, True),
    "\x1b\x1b[C": _k(_T.RIGHT, True),
    "\x1b\x1b[D": _k(_T.LEFT, True),
    "\x1b[1;4A": _k(_T.SHIFT_UP, True),
    "\x1b[1;4B": _k(_T.SHIFT_DOWN, True),
    "\x1b[1;4C": _k(_T.SHIFT_RIGHT, True),
    "\x1b[1;4D": _k(_T.SHIFT_LEFT, True),
    "\x1b\x1b[a": _k(_T.SHIFT_UP, True),
    "\x1b\x1b[b": _k(_T.SHIFT_DOWN, True),
    "\x1b\x1b[c": _k(_T.SHIFT_RIGHT, True),
    "\x1b\x1b[d": _k(_T.SHIFT_LEFT, True),
    "\x1b[1;5A": _k(_T.CTRL_UP),
    "\x1b[1;5B": _k(_T.CTRL_DOWN),
    "\x1b[1;5C": _k(_T.CTRL_RIGHT),
    "\x1b[1;5D": _k(_T.CTRL_LEFT),
    "\x1b[Oa": _k(_T.CTRL_UP, True),
    "\x1b[Ob": _k(_T.CTRL_DOWN, True),
    "\x1b[Oc": _k(_T.CTRL_RIGHT, True),
    "\x1b[Od": _k(_T.CTRL_LEFT, True),
    "\x1b[1;6A": _k(_T.CTRL_SHIFT_UP),
    "\x1b[1;6B": _k(_T.CTRL_SHIFT_DOWN),
    "\x1b[1;6C": _k(_T.CTRL_SHIFT_RIGHT),
    "\x1b[1;6D": _k(_T.CTRL_SHIFT_LEFT),
    "\x1b[1;7A": _k(_T.CTRL_UP, True),
    "\x1b[1;7B": _k(_T.CTRL_DOWN, True),
    "\x1b[1;7C": _k(_T.CTRL_RIGHT, True),
    "\x1b[1;7D": _k(_T.CTRL_LEFT, True),
    "\x1b[1;8A": _k(_T.CTRL_SHIFT_UP, True),
    "\x1b[1;8B": _k(_T.CTRL_SHIFT_DOWN, True),
    "\x1b[1;8C": _k(_T.CTRL_SHIFT_RIGHT, True),
    "\x1b[1;8D": _k(_T.CTRL_SHIFT_LEFT, True),
    # Miscellaneous keys
    "\x1b[Z": _k(_T.SHIFT_TAB),
    "\x1b[3~": _k(_T.DELETE),
    "\x1b[3;3~": _k(_T.DELETE, True),
    "\x1b[1~": _k(_T.HOME),
    "\x1b[1;3H~": _k(_T.HOME, True),
    "\x1b[4~": _k(_T.END),
    "\x1b[1;3F~": _k(_T.END, True),
    "\x1b[5~": _k(_T.PGUP),
    "\x1b[5;3~": _k(_T.PGUP, True),
    "\x1b[6~": _k(_T.PGDOWN),
    "\x1b[6;3~": _k(_T.PGDOWN, True),
    "\x1b[7~": _k(_T.HOME),
    "\x1b[8~": _k(_T.END),
    "\x1b\x1b[3~": _k(_T.DELETE, True),
    "\x1b\x1b[5~": _k(_T.PGUP, True),
    "\x1b\x1b[6~": _k(_T.PGDOWN, True),
    "\x1b\x1b[7~": _k(_T.HOME, True),
    "\x1b\x1b[8~": _k(_T.END, True),
    # Function keys, Linux console
    "\x1b[[A": _k(_T.F1),
    "\x1b[[B": _k(_T.F2),
    "\x1b[[C": _k(_T.F3),
    "\x1b[[D": _k(_T.F4),
    "\x1b[[E": _k(_T.F5),
    # Function keys, X11
    "\x1bOP": _k(_T.F1),
    "\x1bOQ": _k(_T.F2),
    "\x1bOR": _k(_T.F3),
    "\x1bOS": _k(_T.F4),
    "\x1b[15~": _k(_T.F5),
    "\x1b[17~": _k(_T.F6),
    "\x1b[18~": _k(_T.F7),
    "\x1b[19~": _k(_T.F8),
    "\x1b[20~": _k(_T.F9),
    "\x1b[21~": _k(_T.F10),
    "\x1b[23~": _k(_T.F11),
    "\x1b[24~": _k(_T.F12),
    "\x1b[1;2P": _k(_T.F13),
    "\x1b[1;2Q": _k(_T.F14),
    "\x1b[1;2R": _k(_T.F15),
    "\x1b[1;2S": _k(_T.F16),
    "\x1b[15;2~": _k(_T.F17),
    "\x1b[17;2~": _k(_T.F18),
    "\x1b[18;2~": _k(_T.F19),
    "\x1b[19;2~": _k(_T.F20),
    # Function keys with the alt modifier, X11
    "\x1b[1;3P": _k(_T.F1, True),
    "\x1b[1;3Q": _k(_T.F2, True),
    "\x1b[1;3R": _k(_T.F3, True),
    "\x1b[1;3S": _k(_T.F4, True),
    "\x1b[15;3~": _k(_T.F5, True),
    "\x1b[17;3~": _k(_T.F6, True),
    "\x1b[18;3~": _k(_T.F7, True),
    "\x1b[19;3~": _k(_T.F8, True),
    "\x1b[20;3~": _k(_T.F9, True),
    "\x1b[21;3~": _k(_T.F10, True),
    "\x1b[23;3~": _k(_T.F11, True),
    "\x1b[24;3~": _k(_T.F12, True),
    # Function keys, urxvt
    "\x1b[11~": _k(_T.F1),
    "\x1b[12~": _k(_T.F2),
    "\x1b[13~": _k(_T.F3),
    "\x1b[14~": _k(_T.F4),
    "\x1b[25~": _k(_T.F13),
    "\x1b[26~": _k(_T.F14),
    "\x1b[28~": _k(_T.F15),
    "\x1b[29~": _k(_T.F16),
    "\x1b[31~": _k(_T.F17),
    "\x1b[32~": _k(_T.F18),
    "\x1b[33~": _k(_T.F19),
    "\x1b[34~": _k(_T.F20),
    # Function keys with the alt modifier, urxvt
    "\x1b\x1b[11~": _k(_T.F1, True),
    "\x1b\x1b[12~": _k(_T.F2, True),
    "\x1b\x1b[13~": _k(_T.F3, True),
    "\x1b\x1b[14~": _k(_T.F4, True),
    "\x1b\x1b[25~": _k(_T.F13, True),
    "\x1b\x1b[26~": _k(_T.F14, True),
    "\x1b\x1b[28~": _k(_T.F15, True),
    "\x1b\x1b[29~": _k(_T.F16, True),
    "\x1b\x1b[31~": _k(_T.F17, True),
    "\x1b\x1b[32~": _k(_T.F18, True),
    "\x1b\x1b[33~": _k(_T.F19, True),
    "\x1b\x1b[34~": _k(_T.F20, True),
}

# Inputs that need special handling.
_SPECIAL: dict[str, KeyMsg] = {
    "\x1b\r": _k(_T.ENTER, True),
    "\x1b\x7f": _k(_T.BACKSPACE, True),
    # PowerShell arrow keys
    "\x1bOA": _k(_T.UP),
    "\x1bOB": _k(_T.DOWN),
    "\x1bOC": _k(_T.RIGHT),
    "\x1bOD": _k(_T.LEFT),
}


def _split_key_sequences(text: str) -> list[str]:
    """Split text wherever an escape starts a new key sequence."""
    groups: list[str] = []
    current = ""
    for ch in text:
        if ch == _ESC and len(current) > 1:
            groups.append(current)
            current = ""
        current += ch
    groups.append(current)
    return groups


def _keys_for(group: str) -> list[KeyMsg]:
    known = _SEQUENCES.get(group) or _SPECIAL.get(group)
    if known is not None:
        return [known]

    # A leading escape before other input means the alt key was held.
    alt = len(group) > 1 and group[0] == _ESC
    if alt:
        group = group[1:]

    keys = []
    for ch in group:
        code = ord(ch)
        if code <= KeyType.CTRL_UNDERSCORE or code == KeyType.BACKSPACE:
            keys.append(KeyMsg(type=KeyType(code), alt=alt))
        elif ch == " ":
            keys.append(KeyMsg(type=KeyType.SPACE, runes=ch, alt=alt))
        else:
            keys.append(KeyMsg(type=KeyType.RUNES, runes=ch, alt=alt))
    return keys


def read_inputs(stream: BinaryIO) -> list[Msg]:
    """Read one chunk of terminal input and return the key or mouse messages in it.

    Raises EOFError when the stream is exhausted and InputDecodeError when the
    bytes are not valid UTF-8.
    """
    data = stream.read(_READ_SIZE)
    if not data:
        raise EOFError("end of input")

    try:
        events = parse_x10_mouse_events(data)
    except NotMouseEventError:
        pass
    else:
        return [
            MouseMsg(x=e.x, y=e.y, type=e.type, alt=e.alt, ctrl=e.ctrl)
            for e in events
        ]

    try:
        text = bytes(data).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InputDecodeError("could not decode rune") from exc
    if "\ufffd" in text:
        raise InputDecodeError("could not decode rune")

    return [key for group in _split_key_sequences(text) for key in _keys_for(group)]