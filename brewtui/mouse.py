"""Mouse events and the X10 mouse-report parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

__all__ = [
    "MouseEventType",
    "MouseEvent",
    "MouseMsg",
    "NotMouseEventError",
    "parse_x10_mouse_events",
]


class MouseEventType(IntEnum):
    """The kind of mouse event that occurred."""

    UNKNOWN = 0
    LEFT = 1
    RIGHT = 2
    MIDDLE = 3
    RELEASE = 4
    WHEEL_UP = 5
    WHEEL_DOWN = 6
    MOTION = 7


_EVENT_NAMES = {
    MouseEventType.UNKNOWN: "unknown",
    MouseEventType.LEFT: "left",
    MouseEventType.RIGHT: "right",
    MouseEventType.MIDDLE: "middle",
    MouseEventType.RELEASE: "release",
    MouseEventType.WHEEL_UP: "wheel up",
    MouseEventType.WHEEL_DOWN: "wheel down",
    MouseEventType.MOTION: "motion",
}


@dataclass(frozen=True)
class MouseEvent:
    """A click, wheel movement, cursor movement or a combination of them."""

    x: int = 0
    y: int = 0
    type: MouseEventType | int = MouseEventType.UNKNOWN
    alt: bool = False
    ctrl: bool = False

    def __str__(self) -> str:
        prefix = ("ctrl+" if self.ctrl else "") + ("alt+" if self.alt else "")
        return prefix + _EVENT_NAMES.get(self.type, "")


class MouseMsg(MouseEvent):
    """A mouse event delivered to a program's update function."""


class NotMouseEventError(ValueError):
    """Raised when a buffer does not hold X10 mouse events."""


_X10_PREFIX = b"\x1b[M"
_BYTE_OFFSET = 32

_BIT_ALT = 0b0000_1000
_BIT_CTRL = 0b0001_0000
_BIT_MOTION = 0b0010_0000
_BIT_WHEEL = 0b0100_0000
_BITS_MASK = 0b0000_0011
_BITS_RELEASE = 0b0000_0011

_WHEEL_BUTTONS = {0: MouseEventType.WHEEL_UP, 1: MouseEventType.WHEEL_DOWN}
_CLICK_BUTTONS = {0: MouseEventType.LEFT, 1: MouseEventType.MIDDLE, 2: MouseEventType.RIGHT}


def _decode_button(e: int) -> MouseEventType:
    low = e & _BITS_MASK
    if e & _BIT_WHEEL:
        return _WHEEL_BUTTONS.get(low, MouseEventType.UNKNOWN)
    if low == _BITS_RELEASE:
        return MouseEventType.MOTION if e & _BIT_MOTION else MouseEventType.RELEASE
    return _CLICK_BUTTONS[low]


def parse_x10_mouse_events(buf: bytes) -> list[MouseEvent]:
    """Parse one or more X10-encoded mouse reports (ESC [ M Cb Cx Cy).

    Raises NotMouseEventError if the buffer is not made of such reports.
    """
    data = bytes(buf or b"")
    if _X10_PREFIX not in data:
        raise NotMouseEventError("not an X10 mouse event")

    events = []
    for chunk in data.split(_X10_PREFIX):
        if not chunk:
            continue
        if len(chunk) != 3:
            raise NotMouseEventError("not an X10 mouse event")

        e = (chunk[0] - _BYTE_OFFSET) & 0xFF
        events.append(
            MouseEvent(
                # (1,1) is the upper left; normalise it to (0,0).
                x=chunk[1] - _BYTE_OFFSET - 1,
                y=chunk[2] - _BYTE_OFFSET - 1,
                type=_decode_button(e),
                alt=bool(e & _BIT_ALT),
                ctrl=bool(e & _BIT_CTRL),
            )
        )
    return events