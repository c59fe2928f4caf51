"""Command pattern implementation for editing actions.

Commands act on an edit target: the document buffer while editing, or the
active prompt field while saving. Both expose the same single-line editing
primitives; only the buffer binds vertical motion, Home/End and line
breaks.
"""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType

if TYPE_CHECKING:
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, target, key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            target: TextBuffer or InputField being edited
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the text
        """


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, target, key_event: 'KeyEvent') -> bool:
        self._move(target)
        return False

    @abstractmethod
    def _move(self, target):
        """Perform the movement."""


class LeftCharCommand(MovementCommand):
    def _move(self, target):
        target.move_cursor_left()


class RightCharCommand(MovementCommand):
    def _move(self, target):
        target.move_cursor_right()


class UpLineCommand(MovementCommand):
    def _move(self, target):
        target.move_cursor_up()


class DownLineCommand(MovementCommand):
    def _move(self, target):
        target.move_cursor_down()


class BeginningOfLineCommand(MovementCommand):
    def _move(self, target):
        target.move_cursor_home()


class EndOfLineCommand(MovementCommand):
    def _move(self, target):
        target.move_cursor_end()


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, target, key_event: 'KeyEvent') -> bool:
        self._edit(target, key_event)
        return True

    @abstractmethod
    def _edit(self, target, key_event: 'KeyEvent'):
        """Perform the edit."""


class BackspaceCommand(EditCommand):
    def _edit(self, target, key_event):
        target.remove_before()


class DeleteCharCommand(EditCommand):
    def _edit(self, target, key_event):
        target.remove_after()


class InsertNewlineCommand(EditCommand):
    def _edit(self, target, key_event):
        target.break_line()


class InsertTextCommand(EditCommand):
    def _edit(self, target, key_event):
        for char in key_event.value:
            # Filter out control characters
            if char.isprintable():
                target.write_character(char)


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self, multiline: bool = True):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self.multiline = multiline
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        self.register((KeyType.SPECIAL, 'left'), LeftCharCommand())
        self.register((KeyType.SPECIAL, 'right'), RightCharCommand())

        # Editing commands
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), DeleteCharCommand())

        if self.multiline:
            self.register((KeyType.SPECIAL, 'up'), UpLineCommand())
            self.register((KeyType.SPECIAL, 'down'), DownLineCommand())
            self.register((KeyType.SPECIAL, 'home'), BeginningOfLineCommand())
            self.register((KeyType.SPECIAL, 'end'), EndOfLineCommand())
            self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, target, key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the text was modified
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command.execute(target, key_event)

        # Handle regular text input
        if key_event.key_type == KeyType.REGULAR:
            return InsertTextCommand().execute(target, key_event)

        return False
