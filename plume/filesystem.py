"""Filesystem access used when loading and saving documents."""

import errno
import logging
import os
import shutil
import tempfile
from typing import Protocol

from .constants import EditorConstants

logger = logging.getLogger(__name__)


def _current_umask() -> int:
    # The umask can only be read by setting it
    mask = os.umask(0)
    os.umask(mask)
    return mask


class Filesystem(Protocol):
    """What loading and saving need from the filesystem."""

    def exists(self, path: str) -> bool:
        ...

    def read_text(self, path: str) -> str:
        ...

    def write_all(self, path: str, data: bytes) -> None:
        """Replace the contents of ``path`` with ``data``; raise OSError on failure."""
        ...


class LocalFilesystem:
    """Filesystem backed by the local disk.

    Writes go to a temporary file in the target's directory which is then
    renamed over the target, so a failed write leaves any existing file
    untouched. Missing parent directories are not created.
    """

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def read_text(self, path: str) -> str:
        with open(path, 'r', encoding=EditorConstants.ENCODING, newline='') as f:
            return f.read()

    def write_all(self, path: str, data: bytes) -> None:
        dir_name = os.path.dirname(path) or '.'
        base_name = os.path.basename(path)
        temp_filename = None
        try:
            with tempfile.NamedTemporaryFile(mode='wb',
                                             dir=dir_name,
                                             prefix=EditorConstants.ATOMIC_SAVE_PREFIX + base_name,
                                             suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(data)
                temp_file.flush()
                os.fsync(temp_file.fileno())  # Ensure data is on disk before the rename

            if os.path.exists(path):
                shutil.copymode(path, temp_filename)
            else:
                # New files get the usual creation mode instead of the 0600 of temp files
                os.chmod(temp_filename, 0o666 & ~_current_umask())
            # Atomic on POSIX; overwrites the target on Windows too
            os.replace(temp_filename, path)
        except OSError:
            if temp_filename is not None and os.path.exists(temp_filename):
                try:
                    os.remove(temp_filename)
                except OSError as cleanup_error:
                    logger.warning(f"Could not remove temporary file {temp_filename}: {cleanup_error}")
            raise


def describe_save_error(path: str, error: OSError) -> str:
    """Turn a failed save into a message for the status line."""
    if isinstance(error, PermissionError):
        return EditorConstants.PERMISSION_DENIED_MESSAGE.format(path)
    if error.errno == errno.ENOSPC:  # No space left on device
        return EditorConstants.NO_SPACE_MESSAGE
    if isinstance(error, FileNotFoundError):
        return EditorConstants.MISSING_DIRECTORY_MESSAGE.format(path)
    return EditorConstants.CANNOT_SAVE_MESSAGE.format(path)
