"""Tests for atomic saving and save error messages."""

import errno
import os
import stat

import pytest

from plume.controller import EditorController, Saved
from plume.filesystem import LocalFilesystem, describe_save_error


def test_write_creates_file(tmp_path):
    target = tmp_path / "new.txt"
    LocalFilesystem().write_all(str(target), "åäö".encode('utf-8'))
    assert target.read_bytes() == "åäö".encode('utf-8')


def test_write_replaces_existing_and_leaves_no_temp_files(tmp_path):
    target = tmp_path / "doc.txt"
    target.write_bytes(b"old contents")
    LocalFilesystem().write_all(str(target), b"new")
    assert target.read_bytes() == b"new"
    assert os.listdir(tmp_path) == ["doc.txt"]


def test_write_keeps_permissions(tmp_path):
    target = tmp_path / "script.sh"
    target.write_bytes(b"echo hi")
    os.chmod(target, 0o750)
    LocalFilesystem().write_all(str(target), b"echo bye")
    assert stat.S_IMODE(os.stat(target).st_mode) == 0o750


@pytest.mark.parametrize("umask,expected", [(0o022, 0o644), (0o077, 0o600), (0o002, 0o664)])
def test_new_file_gets_creation_mode_from_umask(tmp_path, umask, expected):
    target = tmp_path / "new.txt"
    old_umask = os.umask(umask)
    try:
        LocalFilesystem().write_all(str(target), b"x")
    finally:
        os.umask(old_umask)
    assert stat.S_IMODE(os.stat(target).st_mode) == expected


def test_save_through_controller_is_not_private(tmp_path):
    target = tmp_path / "new.txt"
    controller = EditorController(filesystem=LocalFilesystem())
    old_umask = os.umask(0o022)
    try:
        assert isinstance(controller.try_save(str(target)), Saved)
    finally:
        os.umask(old_umask)
    assert stat.S_IMODE(os.stat(target).st_mode) == 0o644


def test_write_relative_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    LocalFilesystem().write_all("plain.txt", b"x")
    assert (tmp_path / "plain.txt").read_bytes() == b"x"


def test_missing_directory_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        LocalFilesystem().write_all(str(tmp_path / "missing" / "f.txt"), b"x")
    assert not (tmp_path / "missing").exists()


def test_failed_rename_cleans_up_temp_file(tmp_path, monkeypatch):
    target = tmp_path / "doc.txt"
    target.write_bytes(b"old")

    def failing_replace(src, dst):
        raise OSError(errno.EIO, "rename failed")

    monkeypatch.setattr("plume.filesystem.os.replace", failing_replace)
    with pytest.raises(OSError):
        LocalFilesystem().write_all(str(target), b"new")
    assert target.read_bytes() == b"old"
    assert os.listdir(tmp_path) == ["doc.txt"]


@pytest.mark.skipif(hasattr(os, "geteuid") and os.geteuid() == 0,
                    reason="root ignores directory permissions")
def test_read_only_directory(tmp_path):
    locked = tmp_path / "locked"
    locked.mkdir()
    os.chmod(locked, 0o500)
    try:
        with pytest.raises(PermissionError):
            LocalFilesystem().write_all(str(locked / "f.txt"), b"x")
    finally:
        os.chmod(locked, 0o700)


def test_exists_and_read_text(tmp_path):
    target = tmp_path / "doc.txt"
    filesystem = LocalFilesystem()
    assert not filesystem.exists(str(target))
    target.write_bytes(b"a\r\nb")
    assert filesystem.exists(str(target))
    assert filesystem.read_text(str(target)) == "a\r\nb"


def test_read_invalid_utf8_raises(tmp_path):
    target = tmp_path / "bin.dat"
    target.write_bytes(b"\xff\xfe\x00")
    with pytest.raises(UnicodeDecodeError):
        LocalFilesystem().read_text(str(target))


@pytest.mark.parametrize("error,expected", [
    (PermissionError(errno.EACCES, "denied"), "Error: Permission denied saving a.txt"),
    (OSError(errno.ENOSPC, "full"), "Error: No space left on device"),
    (FileNotFoundError(errno.ENOENT, "gone"), "Error: Directory does not exist for a.txt"),
    (IsADirectoryError(errno.EISDIR, "dir"), "Error: Cannot save to a.txt"),
])
def test_describe_save_error(error, expected):
    assert describe_save_error("a.txt", error) == expected
