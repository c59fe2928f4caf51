"""Plume - a small terminal text editor."""

from .indexed_string import IndexedString, BoundsError
from .buffer import TextBuffer, CursorPosition
from .input_field import InputField
from .controller import (
    EditorController,
    Editing,
    Saving,
    Overwriting,
    Quitting,
    Saved,
    Conflict,
    SaveFailed,
)

__version__ = "0.1.0"

__all__ = [
    'IndexedString',
    'BoundsError',
    'TextBuffer',
    'CursorPosition',
    'InputField',
    'EditorController',
    'Editing',
    'Saving',
    'Overwriting',
    'Quitting',
    'Saved',
    'Conflict',
    'SaveFailed',
]
