"""Tests for the main loop: input, redraws, resize and Ctrl-C."""

import os
from unittest.mock import MagicMock, patch

import pytest

from conftest import ctrl
from plume.controller import Editing, Saving
from plume.editor import Editor


@pytest.fixture
def editor(fake_fs):
    terminal = MagicMock()
    terminal.width = 80
    terminal.height = 24
    editor = Editor(terminal=terminal, filesystem=fake_fs)
    with patch.object(editor, '_disable_flow_control', return_value=None):
        yield editor


def run_with(editor, ready_sequence, keys):
    with patch('plume.editor.select.select', side_effect=ready_sequence) as mock_select:
        with patch.object(editor.keyboard, 'get_key_event', side_effect=keys) as mock_get_key_event:
            editor.run()
    return mock_select, mock_get_key_event


def test_quit_ends_loop_and_restores_terminal(editor):
    mock_select, mock_get_key_event = run_with(editor, [([0], [], [])], [ctrl("q")])
    assert editor.controller.is_quitting
    assert editor.running is False
    editor.terminal.setup.assert_called_once()
    editor.terminal.cleanup.assert_called_once()
    mock_get_key_event.assert_called_with(timeout=0)
    assert mock_select.call_args[0][3] == editor.settings.poll_interval


def test_idle_timeout_redraws(editor):
    run_with(editor, [([], [], []), ([], [], []), ([0], [], [])], [ctrl("q")])
    # Initial frame plus one per timeout
    assert editor.terminal.draw_frame.call_count == 3


def test_keys_reach_controller(editor):
    keys = [ctrl("s"), ctrl("q"), ctrl("c"), ctrl("q")]
    _, mock_get_key_event = run_with(editor, [([0], [], [])] * 4, keys)
    # Ctrl-Q inside the save prompt is not a quit, so the loop keeps reading
    assert mock_get_key_event.call_count == 4
    assert editor.controller.is_quitting


def test_resize_invalidates_and_redraws(editor):
    os.write(editor._resize_pipe_w, b'R')
    ready = [([editor._resize_pipe_r], [], []), ([0], [], [])]
    with patch.object(editor.controller, 'resize', wraps=editor.controller.resize) as mock_resize:
        run_with(editor, ready, [ctrl("q")])
    editor.terminal.invalidate_frame.assert_called_once()
    mock_resize.assert_called_once_with(80, 24)
    assert editor.terminal.draw_frame.call_count == 2


def test_sigint_cancels_save_prompt(editor):
    editor.controller.handle_key_event(ctrl("s"))
    assert isinstance(editor.controller.state, Saving)
    editor._handle_sigint(None, None)
    ready = [([editor._resize_pipe_r], [], []), ([0], [], [])]
    run_with(editor, ready, [ctrl("q")])
    # Cancel returned to editing, where Ctrl-Q quits
    assert editor.controller.is_quitting
    editor.terminal.invalidate_frame.assert_not_called()


def test_too_small_terminal_shows_error(editor):
    editor.terminal.width = 10
    run_with(editor, [([0], [], [])], [ctrl("q")])
    assert editor.error_mode is True
    editor.terminal.draw_error_message.assert_called_once_with(
        "Terminal too small! Need at least 20x3.", "Current size: 10x24.")
    editor.terminal.draw_frame.assert_not_called()


def test_empty_key_read_is_ignored(editor):
    run_with(editor, [([0], [], []), ([0], [], [])], [None, ctrl("q")])
    assert editor.controller.is_quitting
    assert editor.terminal.draw_frame.call_count == 1


def test_load_file_delegates_to_controller(editor, fake_fs):
    fake_fs.files["notes.txt"] = "a\nb".encode('utf-8')
    editor.load_file("notes.txt")
    assert editor.controller.buffer.lines == ("a", "b")
    assert isinstance(editor.controller.state, Editing)
