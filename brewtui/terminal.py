"""Terminal access: raw mode, a cancellable input reader and resize watching."""

from __future__ import annotations

import errno
import os
import selectors
import termios
import threading
import tty
from typing import Any, BinaryIO, Callable, Optional, Union

from .messages import WindowSizeMsg

__all__ = [
    "Console",
    "CancelReader",
    "ReadCanceledError",
    "console_from_file",
    "open_input_tty",
    "terminal_size",
    "listen_for_resize",
]

_RESIZE_POLL_INTERVAL = 0.1


def _fd_of(f: Union[int, Any]) -> int:
    return f if isinstance(f, int) else f.fileno()


class Console:
    """A terminal whose original settings are kept so they can be restored."""

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._original = termios.tcgetattr(fd)

    def set_raw(self) -> None:
        """Put the terminal into raw mode."""
        tty.setraw(self.fd, termios.TCSANOW)

    def reset(self) -> None:
        """Restore the settings the terminal had when this console was made."""
        termios.tcsetattr(self.fd, termios.TCSANOW, self._original)


def console_from_file(f: Any) -> Console:
    """Return a Console for ``f``; raises OSError if it is not a terminal."""
    fd = _fd_of(f)
    if not os.isatty(fd):
        raise OSError(errno.ENOTTY, "not a terminal")
    return Console(fd)


def open_input_tty() -> BinaryIO:
    """Open the controlling terminal for reading."""
    return open("/dev/tty", "rb", buffering=0)


def terminal_size(f: Any) -> tuple[int, int]:
    """Return the (width, height) of the terminal behind ``f``."""
    size = os.get_terminal_size(_fd_of(f))
    return size.columns, size.lines


class ReadCanceledError(Exception):
    """Raised by CancelReader.read once the reader has been canceled."""


class CancelReader:
    """Reads from a stream in a way that another thread can interrupt.

    Streams with a selectable file descriptor are watched together with an
    internal pipe, so cancel() wakes a blocked read. Other streams cannot be
    interrupted: cancel() returns False and only later reads are refused.
    """

    def __init__(self, stream: Any) -> None:
        self._stream = stream
        self._canceled = False
        self._fd: Optional[int] = None
        self._selector: Optional[selectors.BaseSelector] = None
        self._wake_r: Optional[int] = None
        self._wake_w: Optional[int] = None

        try:
            fd = stream.fileno()
        except (AttributeError, OSError, ValueError):
            return

        selector = selectors.DefaultSelector()
        try:
            selector.register(fd, selectors.EVENT_READ)
        except (OSError, ValueError):
            selector.close()
            return

        self._wake_r, self._wake_w = os.pipe()
        selector.register(self._wake_r, selectors.EVENT_READ)
        self._fd = fd
        self._selector = selector

    def read(self, n: int = -1) -> bytes:
        """Read up to ``n`` bytes; raises ReadCanceledError after cancel()."""
        if self._canceled:
            raise ReadCanceledError("read canceled")

        if self._selector is None:
            data = self._stream.read(n)
            if self._canceled:
                raise ReadCanceledError("read canceled")
            return data

        ready = {key.fd for key, _ in self._selector.select()}
        if self._canceled or self._wake_r in ready:
            raise ReadCanceledError("read canceled")
        return os.read(self._fd, n if n > 0 else 65536)

    def cancel(self) -> bool:
        """Cancel pending and future reads; True if a blocked read is woken."""
        self._canceled = True
        if self._wake_w is None:
            return False
        try:
            os.write(self._wake_w, b"c")
        except OSError:
            return False
        return True

    def close(self) -> None:
        """Release the reader's own resources; the stream stays open."""
        if self._selector is not None:
            self._selector.close()
            self._selector = None
        for fd in (self._wake_r, self._wake_w):
            if fd is not None:
                os.close(fd)
        self._wake_r = self._wake_w = None

    def __enter__(self) -> "CancelReader":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


def listen_for_resize(
    output: Any,
    on_resize: Callable[[WindowSizeMsg], None],
    on_error: Callable[[Exception], None],
    stop_event: threading.Event,
) -> None:
    """Report size changes of the terminal behind ``output`` until ``stop_event`` is set.

    Blocks, so run it in its own thread. The size is polled; each change is
    passed to ``on_resize`` as a WindowSizeMsg. If the size cannot be read,
    the error goes to ``on_error`` and listening ends.
    """
    try:
        last = terminal_size(output)
    except OSError as exc:
        on_error(exc)
        return

    while not stop_event.wait(_RESIZE_POLL_INTERVAL):
        try:
            current = terminal_size(output)
        except OSError as exc:
            on_error(exc)
            return
        if current != last:
            last = current
            if stop_event.is_set():
                return
            on_resize(WindowSizeMsg(*current))