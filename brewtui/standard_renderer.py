"""A framerate-based terminal renderer and its high-performance scroll commands."""

from __future__ import annotations

import io
import re
import threading
from contextlib import nullcontext
from dataclasses import dataclass
from typing import Any, Optional, TextIO

from wcwidth import wcwidth

from .messages import Cmd, Msg, WindowSizeMsg
from .renderer import Renderer, RepaintMsg
from .screen import (
    change_scrolling_region,
    clear_line,
    cursor_back,
    cursor_down,
    cursor_up,
    insert_line,
    move_cursor,
)

__all__ = [
    "StandardRenderer",
    "SyncScrollAreaMsg",
    "ClearScrollAreaMsg",
    "ScrollUpMsg",
    "ScrollDownMsg",
    "PrintLineMsg",
    "sync_scroll_area",
    "clear_scroll_area",
    "scroll_up",
    "scroll_down",
    "println",
    "printf",
]

DEFAULT_FRAMERATE = 1 / 60

_ESC = "\x1b"
_RESET = "\x1b[0m"
_SGR_RE = re.compile(r"\x1b\[[0-9;]*m")
_INCOMPLETE_ESCAPE_RE = re.compile(r"\x1b(\[[0-?]*[ -/]*)?")


def _is_terminator(ch: str) -> bool:
    code = ord(ch)
    return 0x40 <= code <= 0x5A or 0x61 <= code <= 0x7A


def _truncate(line: str, width: int) -> str:
    """Cut ``line`` to ``width`` printable cells, leaving escape sequences intact."""
    out: list[str] = []
    cells = 0
    in_escape = False
    seq: list[str] = []
    last_sgr = ""
    for ch in line:
        if ch == _ESC:
            in_escape = True
            seq = [ch]
        elif in_escape:
            seq.append(ch)
            if _is_terminator(ch):
                in_escape = False
                text = "".join(seq)
                if text.endswith("[0m"):
                    last_sgr = ""
                elif ch == "m":
                    last_sgr = text
        else:
            cells += max(wcwidth(ch), 0)
        if cells > width:
            if last_sgr:
                out.append(_RESET)
            return "".join(out)
        out.append(ch)
    return "".join(out)


class _AnsiCompressor:
    """Forwards text, dropping SGR sequences that would not change the style."""

    def __init__(self, forward: TextIO) -> None:
        self._forward = forward
        self._pending = ""
        self._active: Optional[str] = None

    def write(self, text: str) -> int:
        data = self._pending + text
        self._pending = ""
        cut = data.rfind(_ESC)
        if cut != -1 and _INCOMPLETE_ESCAPE_RE.fullmatch(data[cut:]):
            self._pending = data[cut:]
            data = data[:cut]

        pieces: list[str] = []
        pos = 0
        for match in _SGR_RE.finditer(data):
            pieces.append(data[pos:match.start()])
            pos = match.end()
            seq = match.group()
            if seq in ("\x1b[m", _RESET):
                if self._active != "":
                    pieces.append(seq)
                    self._active = ""
            elif seq != self._active:
                pieces.append(seq)
                self._active = seq
        pieces.append(data[pos:])
        self._forward.write("".join(pieces))
        return len(text)

    def flush(self) -> None:
        flush = getattr(self._forward, "flush", None)
        if flush is not None:
            flush()

    def close(self) -> None:
        if self._pending:
            self._forward.write(self._pending)
            self._pending = ""
        self.flush()


class StandardRenderer(Renderer):
    """Renders views at a fixed framerate, repainting only lines that changed.

    Ranges of lines can be excluded from rendering so that they can be written
    to directly with the scroll commands.
    """

    def __init__(
        self,
        out: TextIO,
        lock: Any = None,
        use_ansi_compressor: bool = False,
    ) -> None:
        self._lock = lock if lock is not None else threading.Lock()
        self._use_ansi_compressor = use_ansi_compressor
        self._out: Any = _AnsiCompressor(out) if use_ansi_compressor else out
        self.framerate = DEFAULT_FRAMERATE
        self._buf = ""
        self._queued_lines: list[str] = []
        self._last_render = ""
        self._lines_rendered = 0
        self._alt_screen_active = False
        self._ignore_lines: set[int] = set()
        self._done = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.width = 0
        self.height = 0

    def _emit(self, text: str) -> None:
        self._out.write(text)
        flush = getattr(self._out, "flush", None)
        if flush is not None:
            flush()

    def start(self) -> None:
        """Start flushing the buffer at the configured framerate."""
        self._done = threading.Event()
        self._thread = threading.Thread(target=self._listen, daemon=True)
        self._thread.start()

    def _listen(self) -> None:
        while not self._done.wait(self.framerate):
            self.flush()

    def _halt(self) -> None:
        self._done.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        self._thread = None

    def stop(self) -> None:
        """Render the final frame and halt the renderer for good."""
        self.flush()
        out = io.StringIO()
        clear_line(out)
        self._emit(out.getvalue())
        self._halt()
        if self._use_ansi_compressor:
            self._out.close()

    def kill(self) -> None:
        """Halt the renderer without rendering the final frame."""
        out = io.StringIO()
        clear_line(out)
        self._emit(out.getvalue())
        self._halt()

    def flush(self) -> None:
        """Render the buffered view, if it differs from the last one rendered."""
        with self._lock:
            view = self._buf
            if not view or view == self._last_render:
                return

            out = io.StringIO()
            new_lines = view.split("\n")
            num_lines_this_flush = len(new_lines)
            old_lines = self._last_render.split("\n")
            skip_lines: set[int] = set()

            if self._queued_lines and not self._alt_screen_active:
                new_lines = self._queued_lines + new_lines
                self._queued_lines = []

            # Clear the lines painted last time, keeping unchanged ones.
            if self._lines_rendered > 0:
                for i in range(self._lines_rendered - 1, 0, -1):
                    if (
                        len(new_lines) <= len(old_lines)
                        and len(new_lines) > i
                        and len(old_lines) > i
                        and new_lines[i] == old_lines[i]
                    ):
                        skip_lines.add(i)
                    elif i not in self._ignore_lines:
                        clear_line(out)
                    cursor_up(out)

                if 0 not in self._ignore_lines:
                    cursor_back(out, self.width)
                    clear_line(out)

            skip_lines |= self._ignore_lines

            last = len(new_lines) - 1
            for i, line in enumerate(new_lines):
                if i in skip_lines:
                    if i < last:
                        cursor_down(out)
                    continue
                # Truncate wide lines so that wrapping does not break the layout.
                if self.width > 0:
                    line = _truncate(line, self.width)
                out.write(line)
                if i < last:
                    out.write("\r\n")
            self._lines_rendered = num_lines_this_flush

            # Leave the cursor at the start of the last line.
            if self._alt_screen_active:
                move_cursor(out, self._lines_rendered, 0)
            else:
                cursor_back(out, self.width)

            self._emit(out.getvalue())
            self._last_render = view
            self._buf = ""

    def write(self, view: str) -> None:
        """Replace the buffered view; an empty view renders as a single space."""
        with self._lock:
            self._buf = view or " "

    def repaint(self) -> None:
        self._last_render = ""

    @property
    def alt_screen(self) -> bool:
        return self._alt_screen_active

    @alt_screen.setter
    def alt_screen(self, active: bool) -> None:
        self._alt_screen_active = active
        self.repaint()

    def set_ignored_lines(self, start: int, end: int) -> None:
        """Stop rendering lines ``start`` up to, not including, ``end`` and erase them."""
        guard = self._lock if self._lines_rendered > 0 else nullcontext()
        with guard:
            self._ignore_lines.update(range(start, end))

            if self._lines_rendered > 0:
                out = io.StringIO()
                for i in range(self._lines_rendered - 1, -1, -1):
                    if i in self._ignore_lines:
                        clear_line(out)
                    cursor_up(out)
                move_cursor(out, self._lines_rendered, 0)
                self._emit(out.getvalue())

    def clear_ignored_lines(self) -> None:
        """Hand every ignored line back to normal rendering."""
        self._ignore_lines = set()

    def insert_top(self, lines: list[str], top_boundary: int, bottom_boundary: int) -> None:
        """Insert lines at the top of a scrolling region, pushing the rest down."""
        with self._lock:
            out = io.StringIO()
            change_scrolling_region(out, top_boundary, bottom_boundary)
            move_cursor(out, top_boundary, 0)
            insert_line(out, len(lines))
            out.write("\r\n".join(lines))
            change_scrolling_region(out, 0, self.height)
            move_cursor(out, self._lines_rendered, 0)
            self._emit(out.getvalue())

    def insert_bottom(self, lines: list[str], top_boundary: int, bottom_boundary: int) -> None:
        """Append lines at the bottom of a scrolling region, pushing the rest up."""
        with self._lock:
            out = io.StringIO()
            change_scrolling_region(out, top_boundary, bottom_boundary)
            move_cursor(out, bottom_boundary, 0)
            out.write("\r\n" + "\r\n".join(lines))
            change_scrolling_region(out, 0, self.height)
            move_cursor(out, self._lines_rendered, 0)
            self._emit(out.getvalue())

    def handle_messages(self, msg: Msg) -> None:
        """React to the messages meant for the renderer."""
        match msg:
            case RepaintMsg():
                with self._lock:
                    self.repaint()
            case WindowSizeMsg():
                with self._lock:
                    self.width = msg.width
                    self.height = msg.height
            case ClearScrollAreaMsg():
                self.clear_ignored_lines()
                with self._lock:
                    self.repaint()
            case SyncScrollAreaMsg():
                self.clear_ignored_lines()
                self.set_ignored_lines(msg.top_boundary, msg.bottom_boundary)
                self.insert_top(list(msg.lines), msg.top_boundary, msg.bottom_boundary)
                with self._lock:
                    self.repaint()
            case ScrollUpMsg():
                self.insert_top(list(msg.lines), msg.top_boundary, msg.bottom_boundary)
            case ScrollDownMsg():
                self.insert_bottom(list(msg.lines), msg.top_boundary, msg.bottom_boundary)
            case PrintLineMsg():
                if not self._alt_screen_active:
                    with self._lock:
                        self._queued_lines.extend(msg.message_body.split("\n"))
                        self.repaint()


@dataclass(frozen=True)
class SyncScrollAreaMsg:
    """Paints the whole scrollable region."""

    lines: tuple[str, ...]
    top_boundary: int
    bottom_boundary: int


@dataclass(frozen=True)
class ClearScrollAreaMsg:
    """Returns the scrollable region to normal rendering."""


@dataclass(frozen=True)
class ScrollUpMsg:
    """Adds lines to the top of the scrollable region."""

    lines: tuple[str, ...]
    top_boundary: int
    bottom_boundary: int


@dataclass(frozen=True)
class ScrollDownMsg:
    """Adds lines to the bottom of the scrollable region."""

    lines: tuple[str, ...]
    top_boundary: int
    bottom_boundary: int


@dataclass(frozen=True)
class PrintLineMsg:
    """Text to print above the program's view."""

    message_body: str


def sync_scroll_area(lines: list[str], top_boundary: int, bottom_boundary: int) -> Cmd:
    """Command that paints the whole scrollable region; also needed after a resize."""
    msg = SyncScrollAreaMsg(tuple(lines), top_boundary, bottom_boundary)
    return lambda: msg


def clear_scroll_area() -> ClearScrollAreaMsg:
    """Command that releases the scrollable region back to normal rendering."""
    return ClearScrollAreaMsg()


def scroll_up(new_lines: list[str], top_boundary: int, bottom_boundary: int) -> Cmd:
    """Command that adds lines to the top of the scrollable region."""
    msg = ScrollUpMsg(tuple(new_lines), top_boundary, bottom_boundary)
    return lambda: msg


def scroll_down(new_lines: list[str], top_boundary: int, bottom_boundary: int) -> Cmd:
    """Command that adds lines to the bottom of the scrollable region."""
    msg = ScrollDownMsg(tuple(new_lines), top_boundary, bottom_boundary)
    return lambda: msg


def _sprint(args: tuple[Any, ...]) -> str:
    """Join values, spacing adjacent operands when neither is a string."""
    pieces: list[str] = []
    previous: Any = ""
    for arg in args:
        if pieces and not isinstance(arg, str) and not isinstance(previous, str):
            pieces.append(" ")
        pieces.append(str(arg))
        previous = arg
    return "".join(pieces)


def println(*args: Any) -> Cmd:
    """Command that prints its arguments on their own line above the program."""
    return lambda: PrintLineMsg(_sprint(args))


def printf(template: str, *args: Any) -> Cmd:
    """Command that prints a %-formatted line above the program."""
    return lambda: PrintLineMsg(template % args)