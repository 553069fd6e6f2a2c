"""The program: runs a model's update/view loop against a terminal."""

from __future__ import annotations

import os
import queue
import signal
import sys
import termios
import threading
import time
from abc import ABC, abstractmethod
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Any, Optional

from . import screen
from .key import read_inputs
from .messages import (
    BatchMsg,
    Cmd,
    DisableMouseMsg,
    EnableMouseAllMotionMsg,
    EnableMouseCellMotionMsg,
    EnterAltScreenMsg,
    ExitAltScreenMsg,
    HideCursorMsg,
    Msg,
    QuitMsg,
    SequenceMsg,
    WindowSizeMsg,
)
from .options import ProgramOption, StartupOptions
from .renderer import Renderer, RepaintMsg
from .standard_renderer import StandardRenderer
from .standard_renderer import printf as _printf_cmd
from .standard_renderer import println as _println_cmd
from .terminal import (
    CancelReader,
    Console,
    ReadCanceledError,
    console_from_file,
    listen_for_resize,
    open_input_tty,
    terminal_size,
)

__all__ = ["Model", "Program", "new_program"]

_READ_LOOP_GRACE = 0.5


class Model(ABC):
    """A program's state together with its init, update and view functions."""

    @abstractmethod
    def init(self) -> Optional[Cmd]:
        """Return an optional command to run when the program starts."""

    @abstractmethod
    def update(self, msg: Msg) -> tuple["Model", Optional[Cmd]]:
        """Handle a message; return the new model and an optional command."""

    @abstractmethod
    def view(self) -> str:
        """Render the user interface as a string."""


class _Kill:
    """Marker telling the event loop to stop at once."""


_KILL = _Kill()


@dataclass(frozen=True)
class _Failure:
    error: BaseException


class Program:
    """A terminal user interface driven by a Model."""

    def __init__(self, model: Optional[Model], *options: ProgramOption) -> None:
        self.initial_model = model
        self.startup_options = StartupOptions(0)
        self.output: Any = sys.stdout
        self.input: Any = getattr(sys.stdin, "buffer", sys.stdin)
        self.renderer: Optional[Renderer] = None
        self.catch_panics = True

        self._lock = threading.RLock()
        self._msgs: "queue.SimpleQueue[Any]" = queue.SimpleQueue()
        self._done = threading.Event()
        self._alt_screen_active = False
        self._alt_screen_was_active = False
        self._ignore_signals = False
        self._console: Optional[Console] = None
        self._cancel_reader: Optional[CancelReader] = None
        self._read_thread: Optional[threading.Thread] = None
        self._resize_thread: Optional[threading.Thread] = None
        self._shut_down = False

        for option in options:
            option(self)

    # Running

    def start_returning_model(self) -> Optional[Model]:
        """Run the program until it quits and return the final model.

        Returns None if the program was killed. Errors from reading input or
        from commands are raised after the terminal has been restored.
        """
        self._done = threading.Event()
        self._shut_down = False
        with ExitStack() as stack:
            stack.callback(self._close_input_reader)
            stack.callback(self._done.set)
            self._open_input(stack)
            self._install_signal_handlers(stack)
            try:
                return self._run()
            except BaseException:
                if self.catch_panics and not self._shut_down:
                    self._shutdown(kill=True)
                raise

    def start(self) -> None:
        """Run the program until it quits, discarding the final model."""
        self.start_returning_model()

    def _run(self) -> Optional[Model]:
        self._init_terminal()

        if self.renderer is None:
            self.renderer = StandardRenderer(
                self.output,
                self._lock,
                self.startup_options.has(StartupOptions.ANSI_COMPRESSOR),
            )

        if self.startup_options.has(StartupOptions.ALT_SCREEN):
            self.enter_alt_screen()
        if self.startup_options.has(StartupOptions.MOUSE_CELL_MOTION):
            self.enable_mouse_cell_motion()
        elif self.startup_options.has(StartupOptions.MOUSE_ALL_MOTION):
            self.enable_mouse_all_motion()

        model = self.initial_model
        self._run_cmd(model.init())

        self.renderer.start()
        self.renderer.alt_screen = self._alt_screen_active
        self.renderer.write(model.view())

        if self.input is not None:
            self._init_cancel_reader()
        self._watch_window_size()

        while True:
            event = self._msgs.get()
            if event is _KILL:
                return None
            if isinstance(event, _Failure):
                self._stop_background()
                self._shutdown(kill=False)
                raise event.error

            msg = event
            if isinstance(msg, QuitMsg):
                self._stop_background()
                self._shutdown(kill=False)
                return model
            if isinstance(msg, BatchMsg):
                for cmd in msg:
                    self._run_cmd(cmd)
                continue

            self._handle_internal(msg)
            if isinstance(self.renderer, StandardRenderer):
                self.renderer.handle_messages(msg)

            model, cmd = model.update(msg)
            self._run_cmd(cmd)
            self.renderer.write(model.view())

    def _handle_internal(self, msg: Msg) -> None:
        match msg:
            case WindowSizeMsg():
                with self._lock:
                    self.renderer.repaint()
            case EnterAltScreenMsg():
                self.enter_alt_screen()
            case ExitAltScreenMsg():
                self.exit_alt_screen()
            case EnableMouseCellMotionMsg():
                self.enable_mouse_cell_motion()
            case EnableMouseAllMotionMsg():
                self.enable_mouse_all_motion()
            case DisableMouseMsg():
                self.disable_mouse_cell_motion()
                self.disable_mouse_all_motion()
            case HideCursorMsg():
                with self._lock:
                    screen.hide_cursor(self.output)
                    self._flush_output()
            case SequenceMsg():
                threading.Thread(target=self._deliver, args=tuple(msg), daemon=True).start()

    def _run_cmd(self, cmd: Optional[Cmd]) -> None:
        # Commands may run for a long time, so they are never waited on.
        if cmd is None:
            return
        threading.Thread(target=self._deliver, args=(cmd,), daemon=True).start()

    def _deliver(self, *cmds: Optional[Cmd]) -> None:
        for cmd in cmds:
            if cmd is None:
                continue
            try:
                msg = cmd()
            except Exception as exc:  # a failing command ends the program
                msg = _Failure(exc)
            if self._done.is_set():
                return
            self._msgs.put(msg)

    def _post(self, msg: Any) -> None:
        if not self._done.is_set():
            self._msgs.put(msg)

    def _stop_background(self) -> None:
        self._done.set()
        woke = self._cancel_reader.cancel() if self._cancel_reader is not None else False
        if woke and self._read_thread is not None:
            self._read_thread.join(_READ_LOOP_GRACE)
        if self._resize_thread is not None:
            self._resize_thread.join()

    # Messages from outside

    def send(self, msg: Msg) -> None:
        """Inject a message into the program's update loop."""
        self._msgs.put(msg)

    def quit(self) -> None:
        """Ask the program to quit from outside of it."""
        self.send(QuitMsg())

    def kill(self) -> None:
        """Stop at once and restore the terminal, skipping the final render."""
        self._msgs.put(_KILL)
        self._shutdown(kill=True)

    def println(self, *args: Any) -> None:
        """Print the arguments on their own line above the program."""
        self.send(_println_cmd(*args)())

    def printf(self, template: str, *args: Any) -> None:
        """Print a %-formatted line above the program."""
        self.send(_printf_cmd(template, *args)())

    # Screen control

    def enter_alt_screen(self) -> None:
        """Switch to the alternate screen buffer, which fills the window."""
        with self._lock:
            if self._alt_screen_active:
                return
            screen.enter_alt_screen(self.output)
            self._flush_output()
            self._alt_screen_active = True
            if self.renderer is not None:
                self.renderer.alt_screen = True

    def exit_alt_screen(self) -> None:
        """Leave the alternate screen buffer."""
        with self._lock:
            if not self._alt_screen_active:
                return
            screen.exit_alt_screen(self.output)
            self._flush_output()
            self._alt_screen_active = False
            if self.renderer is not None:
                self.renderer.alt_screen = False

    def enable_mouse_cell_motion(self) -> None:
        """Report clicks, releases, wheel and drag events."""
        self._write_locked(screen.enable_mouse_cell_motion)

    def disable_mouse_cell_motion(self) -> None:
        """Stop cell-motion mouse reporting."""
        self._write_locked(screen.disable_mouse_cell_motion)

    def enable_mouse_all_motion(self) -> None:
        """Report all mouse events, pressed button or not."""
        self._write_locked(screen.enable_mouse_all_motion)

    def disable_mouse_all_motion(self) -> None:
        """Stop all-motion mouse reporting."""
        self._write_locked(screen.disable_mouse_all_motion)

    def _write_locked(self, writer: Any) -> None:
        with self._lock:
            writer(self.output)
            self._flush_output()

    def _flush_output(self) -> None:
        flush = getattr(self.output, "flush", None)
        if flush is not None:
            flush()

    # Terminal handling

    def release_terminal(self) -> None:
        """Restore the original terminal state and stop reading input."""
        self._ignore_signals = True
        if self._cancel_reader is not None:
            self._cancel_reader.cancel()
        self._alt_screen_was_active = self._alt_screen_active
        if self._alt_screen_active:
            self.exit_alt_screen()
            time.sleep(0.01)  # give the terminal a moment to catch up
        self._restore_terminal_state()

    def restore_terminal(self) -> None:
        """Take the terminal back after release_terminal and repaint."""
        self._ignore_signals = False
        self._init_terminal()
        self._init_cancel_reader()
        if self._alt_screen_was_active:
            self.enter_alt_screen()
        self.send(RepaintMsg())

    def _shutdown(self, kill: bool) -> None:
        self._shut_down = True
        if self.renderer is not None:
            if kill:
                self.renderer.kill()
            else:
                self.renderer.stop()
        self.exit_alt_screen()
        self.disable_mouse_cell_motion()
        self.disable_mouse_all_motion()
        try:
            self._restore_terminal_state()
        except (OSError, termios.error):
            pass

    def _init_terminal(self) -> None:
        self._init_input()
        if self._console is not None:
            self._console.set_raw()
        with self._lock:
            screen.hide_cursor(self.output)
            self._flush_output()

    def _init_input(self) -> None:
        if self.input is None:
            return
        try:
            self._console = console_from_file(self.input)
        except (AttributeError, OSError, ValueError, termios.error):
            # Not a terminal; input is read as it is.
            pass

    def _restore_terminal_state(self) -> None:
        with self._lock:
            screen.show_cursor(self.output)
            self._flush_output()
        if self._console is not None:
            self._console.reset()

    def _open_input(self, stack: ExitStack) -> None:
        if self.startup_options.has(StartupOptions.INPUT_TTY):
            self.input = stack.enter_context(open_input_tty())
        elif not self.startup_options.has(StartupOptions.CUSTOM_INPUT) and self._input_is_redirected():
            # Piped or redirected input: read keys from the terminal instead.
            self.input = stack.enter_context(open_input_tty())

    def _input_is_redirected(self) -> bool:
        try:
            fd = self.input.fileno()
        except (AttributeError, OSError, ValueError):
            return False
        return not os.isatty(fd)

    def _install_signal_handlers(self, stack: ExitStack) -> None:
        if threading.current_thread() is not threading.main_thread():
            return

        def handler(signum: int, frame: Any) -> None:
            if not self._ignore_signals:
                self._msgs.put(QuitMsg())

        for sig in (signal.SIGINT, signal.SIGTERM):
            previous = signal.signal(sig, handler)
            stack.callback(signal.signal, sig, previous if previous is not None else signal.SIG_DFL)

    def _init_cancel_reader(self) -> None:
        old = self._cancel_reader
        if old is not None:
            old.cancel()
            if self._read_thread is not None:
                self._read_thread.join(_READ_LOOP_GRACE)
            old.close()

        reader = CancelReader(self.input)
        self._cancel_reader = reader
        self._read_thread = threading.Thread(target=self._read_loop, args=(reader,), daemon=True)
        self._read_thread.start()

    def _read_loop(self, reader: CancelReader) -> None:
        while not self._done.is_set():
            try:
                msgs = read_inputs(reader)
            except (EOFError, ReadCanceledError):
                return
            except Exception as exc:
                self._msgs.put(_Failure(exc))
                return
            for msg in msgs:
                self._msgs.put(msg)

    def _close_input_reader(self) -> None:
        if self._cancel_reader is not None:
            self._cancel_reader.cancel()
            self._cancel_reader.close()
            self._cancel_reader = None

    def _watch_window_size(self) -> None:
        self._resize_thread = None
        try:
            is_tty = os.isatty(self.output.fileno())
        except (AttributeError, OSError, ValueError):
            is_tty = False
        if not is_tty:
            return

        def report_initial_size() -> None:
            try:
                width, height = terminal_size(self.output)
            except OSError as exc:
                self._msgs.put(_Failure(exc))
                return
            self._post(WindowSizeMsg(width, height))

        threading.Thread(target=report_initial_size, daemon=True).start()
        self._resize_thread = threading.Thread(
            target=listen_for_resize,
            args=(
                self.output,
                self._post,
                lambda exc: self._msgs.put(_Failure(exc)),
                self._done,
            ),
            daemon=True,
        )
        self._resize_thread.start()


def new_program(model: Optional[Model], *options: ProgramOption) -> Program:
    """Create a program for ``model`` with the given options applied."""
    return Program(model, *options)