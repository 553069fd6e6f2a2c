import io
import threading

from brewtui.messages import WindowSizeMsg
from brewtui.renderer import RepaintMsg
from brewtui.standard_renderer import (
    ClearScrollAreaMsg,
    PrintLineMsg,
    ScrollDownMsg,
    ScrollUpMsg,
    StandardRenderer,
    SyncScrollAreaMsg,
    clear_scroll_area,
    printf,
    println,
    scroll_down,
    scroll_up,
    sync_scroll_area,
)


def drain(buf):
    value = buf.getvalue()
    buf.seek(0)
    buf.truncate()
    return value


def make():
    out = io.StringIO()
    return StandardRenderer(out), out


def test_flush_with_nothing_written_outputs_nothing():
    r, out = make()
    r.flush()
    assert out.getvalue() == ""


def test_flush_outputs_view():
    r, out = make()
    r.write("hello")
    r.flush()
    assert out.getvalue().startswith("hello")


def test_same_view_is_not_rendered_twice():
    r, out = make()
    r.write("hello")
    r.flush()
    drain(out)
    r.write("hello")
    r.flush()
    assert out.getvalue() == ""


def test_repaint_renders_same_view_again():
    r, out = make()
    r.write("hello")
    r.flush()
    drain(out)
    r.handle_messages(RepaintMsg())
    r.write("hello")
    r.flush()
    assert "hello" in out.getvalue()


def test_empty_view_renders_a_space():
    r, out = make()
    r.write("")
    r.flush()
    assert out.getvalue().startswith(" ")


def test_multiline_view_uses_crlf():
    r, out = make()
    r.write("a\nb")
    r.flush()
    assert out.getvalue().startswith("a\r\nb")


def test_unchanged_lines_are_skipped():
    r, out = make()
    r.write("a\nkeep")
    r.flush()
    drain(out)
    r.write("x\nkeep")
    r.flush()
    second = out.getvalue()
    assert "x" in second
    assert "keep" not in second


def test_width_truncates_lines():
    r, out = make()
    r.handle_messages(WindowSizeMsg(3, 10))
    assert (r.width, r.height) == (3, 10)
    r.write("abcdef")
    r.flush()
    text = out.getvalue()
    assert "abc" in text
    assert "abcd" not in text


def test_truncation_resets_active_style():
    r, out = make()
    r.handle_messages(WindowSizeMsg(2, 10))
    r.write("\x1b[1mabcd")
    r.flush()
    assert "\x1b[1mab\x1b[0m" in out.getvalue()


def test_printed_lines_come_before_view():
    r, out = make()
    r.handle_messages(PrintLineMsg("hello"))
    r.write("view")
    r.flush()
    text = out.getvalue()
    assert text.index("hello") < text.index("view")


def test_printed_lines_dropped_in_alt_screen():
    r, out = make()
    r.alt_screen = True
    assert r.alt_screen is True
    r.handle_messages(PrintLineMsg("hello"))
    r.write("view")
    r.flush()
    assert "hello" not in out.getvalue()


def test_ignored_lines_are_not_painted():
    r, out = make()
    r.set_ignored_lines(1, 2)
    r.write("a\nb\nc")
    r.flush()
    text = out.getvalue()
    assert "a" in text and "c" in text
    assert "b" not in text


def test_clear_scroll_area_restores_lines():
    r, out = make()
    r.set_ignored_lines(1, 2)
    r.write("a\nb\nc")
    r.flush()
    drain(out)
    r.handle_messages(ClearScrollAreaMsg())
    r.write("a\nb\nc")
    r.flush()
    assert "b" in out.getvalue()


def test_sync_scroll_area_paints_and_ignores_region():
    r, out = make()
    r.write("a\nb\nc")
    r.flush()
    drain(out)
    r.handle_messages(SyncScrollAreaMsg(("z",), 1, 2))
    assert "z" in drain(out)
    r.write("a\nb\nc")
    r.flush()
    assert "b" not in out.getvalue()


def test_insert_top_output():
    r, out = make()
    r.handle_messages(ScrollUpMsg(("x", "y"), 2, 5))
    text = out.getvalue()
    assert text.startswith("\x1b[2;5r")
    assert "\x1b[2L" in text
    assert "x\r\ny" in text
    assert text.endswith("\x1b[0;0H")


def test_insert_bottom_output():
    r, out = make()
    r.handle_messages(ScrollDownMsg(("x", "y"), 2, 5))
    text = out.getvalue()
    assert text.startswith("\x1b[2;5r")
    assert "\x1b[5;0H\r\nx\r\ny" in text


def test_start_and_stop_render_final_frame():
    out = io.StringIO()
    r = StandardRenderer(out, threading.Lock())
    r.start()
    r.write("final")
    r.stop()
    text = out.getvalue()
    assert "final" in text
    assert text.endswith("\x1b[2K")


def test_kill_does_not_render_buffer():
    out = io.StringIO()
    r = StandardRenderer(out)
    r.write("never")
    r.kill()
    assert "never" not in out.getvalue()


def test_ansi_compressor_drops_repeated_style():
    out = io.StringIO()
    r = StandardRenderer(out, use_ansi_compressor=True)
    r.write("\x1b[1mA\x1b[1mB")
    r.stop()
    text = out.getvalue()
    assert text.count("\x1b[1m") == 1
    assert "AB" in text


def test_scroll_commands_build_messages():
    assert sync_scroll_area(["a"], 1, 2)() == SyncScrollAreaMsg(("a",), 1, 2)
    assert scroll_up(["a"], 1, 2)() == ScrollUpMsg(("a",), 1, 2)
    assert scroll_down(["a"], 1, 2)() == ScrollDownMsg(("a",), 1, 2)
    assert clear_scroll_area() == ClearScrollAreaMsg()


def test_println_spacing():
    assert println("a", 1, 2)() == PrintLineMsg("a1 2")
    assert println("x", "y")() == PrintLineMsg("xy")


def test_printf_formats():
    assert printf("%d-%s", 3, "x")() == PrintLineMsg("3-x")