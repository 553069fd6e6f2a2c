import io

import pytest

from brewtui.key import InputDecodeError, Key, KeyMsg, KeyType, read_inputs
from brewtui.mouse import MouseEventType, MouseMsg


def test_key_string_alt_space():
    assert str(KeyMsg(type=KeyType.SPACE, alt=True)) == "alt+ "


def test_key_string_runes():
    assert str(KeyMsg(type=KeyType.RUNES, runes="a")) == "a"


def test_key_string_invalid():
    assert str(KeyMsg(type=99999)) == ""


def test_key_string_enter():
    assert str(Key(type=KeyType.ENTER)) == "enter"


def test_key_string_alt_runes():
    assert str(Key(type=KeyType.RUNES, runes="a", alt=True)) == "alt+a"


def test_key_string_multiple_runes():
    assert str(Key(type=KeyType.RUNES, runes="你好")) == "你好"


def test_key_type_string_space():
    assert str(KeyType(KeyType.SPACE.value)) == " "


def test_key_type_invalid_value():
    with pytest.raises(ValueError):
        KeyType(99999)


@pytest.mark.parametrize(
    "key_type, expected",
    [
        (KeyType.CTRL_C, "ctrl+c"),
        (KeyType.BREAK, "ctrl+c"),
        (KeyType.CTRL_AT, "ctrl+@"),
        (KeyType.TAB, "tab"),
        (KeyType.ESC, "esc"),
        (KeyType.CTRL_BACKSLASH, "ctrl+\\"),
        (KeyType.BACKSPACE, "backspace"),
        (KeyType.F20, "f20"),
        (KeyType.CTRL_SHIFT_RIGHT, "ctrl+shift+right"),
        (KeyType.PGDOWN, "pgdown"),
    ],
)
def test_key_type_names(key_type, expected):
    assert str(key_type) == expected


def test_key_type_aliases_share_values():
    assert KeyType(13) == KeyType.CTRL_M == KeyType.ENTER
    assert str(KeyType(13)) == "enter"
    assert KeyType(27) == KeyType.CTRL_OPEN_BRACKET == KeyType.ESCAPE
    assert KeyType(127) == KeyType.CTRL_QUESTION_MARK
    assert str(KeyType(127)) == "backspace"


def _read(data: bytes):
    return read_inputs(io.BytesIO(data))


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"a", [KeyMsg(type=KeyType.RUNES, runes="a")]),
        (b" ", [KeyMsg(type=KeyType.SPACE, runes=" ")]),
        (bytes([1]), [KeyMsg(type=KeyType.CTRL_A)]),
        (b"\x1ba", [KeyMsg(type=KeyType.RUNES, runes="a", alt=True)]),
        (
            b"abcd",
            [KeyMsg(type=KeyType.RUNES, runes=c) for c in "abcd"],
        ),
        (b"\x1b[A", [KeyMsg(type=KeyType.UP)]),
        (b"\x1b[Z", [KeyMsg(type=KeyType.SHIFT_TAB)]),
        (b"\x1b\r", [KeyMsg(type=KeyType.ENTER, alt=True)]),
        (b"\x1b\x01", [KeyMsg(type=KeyType.CTRL_A, alt=True)]),
    ],
    ids=["a", "space", "ctrl+a", "alt+a", "abcd", "up", "shift+tab", "alt+enter", "alt+ctrl+a"],
)
def test_read_input_keys(data, expected):
    assert read_inputs(io.BytesIO(data)) == expected


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"a", "a"),
        (b" ", " "),
        (bytes([1]), "ctrl+a"),
        (b"\x1ba", "alt+a"),
        (b"\x1b[A", "up"),
        (b"\x1b[Z", "shift+tab"),
        (b"\x1b\r", "alt+enter"),
        (b"\x1b\x01", "alt+ctrl+a"),
    ],
)
def test_read_input_key_strings(data, expected):
    msgs = read_inputs(io.BytesIO(data))
    assert len(msgs) == 1
    assert str(msgs[0]) == expected


def test_read_input_wheel_up():
    msgs = _read(bytes([0x1B, ord("["), ord("M"), 32 + 0b0100_0000, 65, 49]))
    assert len(msgs) == 1
    assert isinstance(msgs[0], MouseMsg)
    assert msgs[0].type == MouseEventType.WHEEL_UP
    assert str(msgs[0]) == "wheel up"
    assert (msgs[0].x, msgs[0].y) == (32, 16)


def test_read_input_alt_arrow_urxvt():
    assert _read(b"\x1b\x1b[A") == [KeyMsg(type=KeyType.UP, alt=True)]


def test_read_input_splits_sequences():
    assert _read(b"\x1b[A\x1b[B") == [KeyMsg(type=KeyType.UP), KeyMsg(type=KeyType.DOWN)]


def test_read_input_function_key():
    assert [str(m) for m in _read(b"\x1b[15;3~")] == ["alt+f5"]


def test_read_input_alt_backspace():
    assert _read(b"\x1b\x7f") == [KeyMsg(type=KeyType.BACKSPACE, alt=True)]


def test_read_input_powershell_arrow():
    assert _read(b"\x1bOA") == [KeyMsg(type=KeyType.UP)]


def test_read_input_unicode_runes():
    msgs = _read("日本".encode("utf-8"))
    assert [m.runes for m in msgs] == ["日", "本"]
    assert all(m.type == KeyType.RUNES for m in msgs)


def test_read_input_plain_escape():
    assert _read(b"\x1b") == [KeyMsg(type=KeyType.ESC)]


def test_read_input_invalid_utf8():
    with pytest.raises(InputDecodeError):
        _read(b"\xff\xfe")


def test_read_input_eof():
    with pytest.raises(EOFError):
        _read(b"")


def test_read_input_reads_one_chunk_at_a_time():
    stream = io.BytesIO(b"x" * 300)
    first = read_inputs(stream)
    second = read_inputs(stream)
    assert len(first) == 256
    assert len(second) == 44