"""Shared helpers for the plume test suite."""

import pytest

from plume.keyboard import KeyEvent, KeyType


class FakeFilesystem:
    """In-memory filesystem recording every write."""

    def __init__(self, files=None, fail_with=None):
        self.files = dict(files or {})
        self.writes = []
        self.fail_with = fail_with

    def exists(self, path):
        return path in self.files

    def write_all(self, path, data):
        if self.fail_with is not None:
            raise self.fail_with
        self.files[path] = data
        self.writes.append(path)

    def read_text(self, path):
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path].decode('utf-8')


def ctrl(letter):
    return KeyEvent(key_type=KeyType.CTRL, value=letter, raw=chr(ord(letter) - 96), is_ctrl=True)


def special(name):
    return KeyEvent(key_type=KeyType.SPECIAL, value=name, raw=f"<{name.upper()}>")


def char(c):
    return KeyEvent(key_type=KeyType.REGULAR, value=c, raw=c)


def type_text(controller, text):
    for c in text:
        controller.handle_key_event(char(c))


@pytest.fixture
def fake_fs():
    return FakeFilesystem()
