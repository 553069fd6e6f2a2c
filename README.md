# brewtui

A small framework for terminal user interfaces built around a model, an
update function and a view. Your program is a *model* (a subclass of
`brewtui.program.Model`) that:

- returns an optional first command from `init()`,
- receives messages in `update(msg)` and returns the new model and an
  optional command,
- renders itself as a plain string in `view()`.

The framework reads keys and mouse events from the terminal, turns them into
messages, runs commands in background threads and redraws the screen at a
fixed frame rate, repainting only the lines that changed.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## A first program

```python
from brewtui.key import KeyMsg
from brewtui.messages import quit
from brewtui.program import Model, new_program


class Counter(Model):
    def __init__(self):
        self.count = 0

    def init(self):
        return None

    def update(self, msg):
        if isinstance(msg, KeyMsg):
            if str(msg) in ("q", "ctrl+c"):
                return self, quit
            if str(msg) == "up":
                self.count += 1
            elif str(msg) == "down":
                self.count -= 1
        return self, None

    def view(self):
        return f"Count: {self.count}\n\nup/down to change, q to quit.\n"


if __name__ == "__main__":
    new_program(Counter()).start()
```

## Messages and commands

A command is a callable that takes no arguments and returns a message. The
program runs it in a background thread and passes the result to `update`. If a
command raises, the program shuts down and re-raises the error.

`brewtui.messages` holds the built-in commands:

- `quit` ends the program,
- `batch(*cmds)` runs several commands at once with no ordering (`None`
  entries are dropped; it returns `None` if nothing is left),
- `sequence(*cmds)` runs commands one after another, in order,
- `enter_alt_screen`, `exit_alt_screen`, `hide_cursor`,
- `enable_mouse_cell_motion`, `enable_mouse_all_motion`, `disable_mouse`.

The model also receives:

- `WindowSizeMsg(width, height)` at start-up and when the terminal size
  changes (the size is polled), as long as the output is a terminal;
- `brewtui.key.KeyMsg` for every key press. `str(msg)` gives a name such as
  `"a"`, `"enter"`, `"ctrl+c"`, `"alt+up"` or `"f5"`; `msg.type` is a
  `brewtui.key.KeyType` and `msg.runes` holds typed text;
- `brewtui.mouse.MouseMsg` for mouse events once the mouse is on, with `x`,
  `y`, `alt`, `ctrl` and a `brewtui.mouse.MouseEventType`. Only X10-encoded
  mouse reports are understood.

`brewtui.standard_renderer` adds `println(*args)` and
`printf(template, *args)` (a `%`-style template), which print lines above the
program that persist across redraws while the alternate screen is off, and the
scroll-area commands `sync_scroll_area`, `scroll_up`, `scroll_down` and
`clear_scroll_area` for high-performance, full-window programs.

## Program options

`new_program(model, *options)` takes any of these from `brewtui.options`:

- `with_alt_screen()`: start in full-window mode,
- `with_mouse_cell_motion()` / `with_mouse_all_motion()`: turn the mouse on
  (the later one wins),
- `with_input(stream)` / `with_output(stream)`: use other streams than
  stdin and stdout,
- `with_input_tty()`: open `/dev/tty` for input, useful when stdin is a pipe
  (this also happens on its own when stdin is redirected and no custom input
  was given),
- `without_renderer()`: use `brewtui.renderer.NilRenderer`, which draws
  nothing,
- `without_catch_panics()`: do not restore the terminal when an unhandled
  exception escapes,
- `with_ansi_compressor()`: drop style sequences that would not change the
  current style.

`Program.start()` runs until the model quits; `Program.start_returning_model()`
does the same and returns the final model, or `None` if the program was
killed. From outside the loop, use `Program.send(msg)`, `Program.quit()`,
`Program.kill()`, `Program.println(...)` and `Program.printf(...)`. When run
from the main thread, SIGINT and SIGTERM make the program quit.
`Program.release_terminal()` and `Program.restore_terminal()` hand the terminal
to something else for a while and take it back.

## Logging

The program occupies the terminal, so debugging output is best sent to a file.
`brewtui.logfile.log_to_file(path, prefix)` points the root logger at `path`
(appending), puts `prefix` and a space before each message, and returns the
open file:

```python
import logging

from brewtui.logfile import log_to_file

with log_to_file("debug.log", "debug"):
    logging.info("started")
```

## Sample programs

Two small programs come with the package:

```
brewtui-basics
```

a shopping list you move through with the arrow keys (or `j`/`k`) and tick with
enter or space; `q` or ctrl+c quits.

```
brewtui-status [URL]
```

requests `URL` (by default `https://example.com/`) in the background, shows the
HTTP status it answered with and quits; ctrl+c quits early.

## What it does not do

- It runs on POSIX systems only: terminal handling relies on `termios` and
  `/dev/tty`, and there is no Windows console support.
- Window size changes are found by polling every tenth of a second, not by a
  resize signal.
- Only plain key sequences and X10 mouse reports are decoded; other mouse
  encodings and terminal reports are read as ordinary keys.