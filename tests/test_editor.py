"""Tests for editor module (position translation, in-memory buffer, event)."""
from editor import Position, TextBuffer, TextEvent, offset_to_position, position_to_offset


def test_offset_to_position():
    text = "ab\ncde\n\nf"
    assert offset_to_position(text, 0) == Position(0, 0)
    assert offset_to_position(text, 2) == Position(0, 2)
    assert offset_to_position(text, 3) == Position(1, 0)
    assert offset_to_position(text, 5) == Position(1, 2)
    assert offset_to_position(text, 8) == Position(3, 0)
    assert offset_to_position(text, 99) == Position(3, 1)


def test_position_round_trip_on_line_starts():
    text = "one\ntwo\nthree"
    for offset in (0, 4, 8, len(text)):
        assert position_to_offset(text, offset_to_position(text, offset)) == offset


def test_replace_selection_moves_cursor():
    buf = TextBuffer("hello world", selection=(6, 11))
    assert buf.get_selected_text() == "world"
    buf.replace_selection("there")
    assert buf.get_value() == "hello there"
    assert buf.get_cursor() == Position(0, 11)
    assert buf.get_selected_text() == ""


def test_replace_range_keeps_cursor_after_edit():
    buf = TextBuffer("a PLACEHOLDER b")
    buf.replace_range("X", Position(0, 2), Position(0, 13))
    assert buf.get_value() == "a X b"
    assert buf.get_cursor() == Position(0, 5)


def test_get_range_multiline():
    buf = TextBuffer("ab\ncd")
    assert buf.get_range(Position(0, 1), Position(1, 1)) == "b\nc"


def test_text_event():
    ev = TextEvent("https://example.com")
    assert ev.get_data("text/plain") == "https://example.com"
    assert ev.get_data("text/html") == ""
    ev.prevent_default()
    ev.stop_propagation()
    assert ev.default_prevented and ev.propagation_stopped
