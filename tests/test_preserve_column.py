"""Tests for remembering the intended column across vertical motion."""

from plume.buffer import TextBuffer, CursorPosition


def test_column_survives_short_line():
    buffer = TextBuffer(["abcdefgh", "ab", "abcdefgh"])
    buffer.cursor_position = CursorPosition(6, 0)

    buffer.move_cursor_down()
    assert buffer.cursor == (6, 1)
    assert buffer.render_cursor_position() == (2, 1)

    buffer.move_cursor_down()
    assert buffer.cursor == (6, 2)
    assert buffer.render_cursor_position() == (6, 2)


def test_column_survives_empty_line_going_up():
    buffer = TextBuffer(["hello world", "", "x"])
    buffer.cursor_position = CursorPosition(8, 2)
    buffer.move_cursor_up()
    assert buffer.render_cursor_position() == (0, 1)
    buffer.move_cursor_up()
    assert buffer.cursor == (8, 0)
    assert buffer.render_cursor_position() == (8, 0)


def test_horizontal_move_forgets_remembered_column():
    buffer = TextBuffer(["abcdefgh", "ab", "abcdefgh"])
    buffer.cursor_position = CursorPosition(6, 0)
    buffer.move_cursor_down()
    buffer.move_cursor_right()
    assert buffer.cursor == (2, 1)
    buffer.move_cursor_down()
    assert buffer.cursor == (2, 2)


def test_end_sets_column_to_line_length():
    buffer = TextBuffer(["abc", "abcdef"])
    buffer.move_cursor_end()
    buffer.move_cursor_down()
    assert buffer.cursor == (3, 1)


def test_column_counts_codepoints_not_bytes():
    buffer = TextBuffer(["åäö€", "😀😀😀😀😀"])
    buffer.move_cursor_end()
    buffer.move_cursor_down()
    assert buffer.render_cursor_position() == (4, 1)
