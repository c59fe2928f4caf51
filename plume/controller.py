"""Save/overwrite state machine driving the editing session.

Every mode is its own variant carrying only the data that mode needs: the
path prompt exists while saving, and the overwrite confirmation exists only
while an overwrite is being confirmed. A file is written by ``try_save`` only
when it does not exist yet or the user confirmed the overwrite.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .buffer import TextBuffer
from .commands import CommandRegistry
from .constants import EditorConstants
from .filesystem import Filesystem, LocalFilesystem, describe_save_error
from .indexed_string import IndexedString
from .input_field import InputField
from .keyboard import KeyEvent
from .render import PromptLine, Rect, RenderModel
from .settings import EditorSettings

logger = logging.getLogger(__name__)


# --- Modes ---

@dataclass(frozen=True)
class Editing:
    pass


@dataclass(frozen=True)
class Saving:
    path_field: InputField


@dataclass(frozen=True)
class Overwriting:
    path_field: InputField
    confirm_field: InputField


@dataclass(frozen=True)
class Quitting:
    pass


EditorState = Union[Editing, Saving, Overwriting, Quitting]


# --- Save outcomes ---

@dataclass(frozen=True)
class Saved:
    path: str


@dataclass(frozen=True)
class Conflict:
    path: str


@dataclass(frozen=True)
class SaveFailed:
    path: str
    reason: str


SaveResult = Union[Saved, Conflict, SaveFailed]


class EditorController:
    """Owns the document buffer and routes key events according to the mode."""

    def __init__(self,
                 buffer: Optional[TextBuffer] = None,
                 filesystem: Optional[Filesystem] = None,
                 settings: Optional[EditorSettings] = None,
                 path: str = ""):
        self.buffer = buffer or TextBuffer()
        self.filesystem = filesystem or LocalFilesystem()
        self.settings = settings or EditorSettings()
        self.path = IndexedString(path)  # Last path the buffer was saved to
        self.save_prompt = InputField(EditorConstants.SAVE_PROMPT_LABEL)
        self.state: EditorState = Editing()
        self.status_message: Optional[str] = None
        self.buffer_commands = CommandRegistry(multiline=True)
        self.field_commands = CommandRegistry(multiline=False)

    @property
    def is_quitting(self) -> bool:
        return isinstance(self.state, Quitting)

    @property
    def active_field(self) -> Optional[InputField]:
        if isinstance(self.state, Overwriting):
            return self.state.confirm_field
        if isinstance(self.state, Saving):
            return self.state.path_field
        return None

    def _set_state(self, state: EditorState) -> None:
        logger.debug(f"{type(self.state).__name__} -> {type(state).__name__}")
        self.state = state

    # --- Loading ---

    def load_file(self, path: str) -> None:
        """Load ``path`` into the buffer and remember it as the save path.

        A missing file starts an empty document that will be saved there.
        Other read errors propagate to the caller.
        """
        self.path = IndexedString(path)
        try:
            text = self.filesystem.read_text(path)
        except FileNotFoundError:
            logger.info(f"{path} does not exist yet, starting empty document")
            return
        self.buffer = TextBuffer.from_text(text)

    # --- Saving ---

    def try_save(self, path: str, force: bool = False) -> SaveResult:
        """Write the buffer to ``path`` unless that would overwrite unasked.

        Args:
            path: Destination file
            force: Overwrite an existing file

        Returns:
            Saved when written, Conflict when the file exists and force is
            not set (nothing is written), SaveFailed on filesystem errors
        """
        if not path:
            return SaveFailed(path, EditorConstants.NO_FILENAME_MESSAGE)

        try:
            if self.filesystem.exists(path) and not force:
                logger.info(f"Not overwriting existing file {path} without confirmation")
                return Conflict(path)
            self.filesystem.write_all(path, self.buffer.serialize().encode(EditorConstants.ENCODING))
        except OSError as e:
            logger.warning(f"Saving to {path} failed: {e}")
            return SaveFailed(path, describe_save_error(path, e))

        self.path = IndexedString(path)
        self.buffer.modified = False
        logger.info(f"Saved {self.buffer.line_count} lines to {path}")
        return Saved(path)

    def _finish_save(self, result: SaveResult) -> None:
        if isinstance(result, Saved):
            self.status_message = EditorConstants.SAVED_MESSAGE.format(result.path)
            self._set_state(Editing())
        elif isinstance(result, SaveFailed):
            # Stay in the current mode so the user can fix the path or retry
            self.status_message = result.reason

    # --- Key handling ---

    def _is_cancel(self, key_event: KeyEvent) -> bool:
        return key_event.is_ctrl_key(self.settings.cancel_key) or key_event.is_special('escape')

    def handle_key_event(self, key_event: KeyEvent) -> None:
        """Process one key event in the current mode."""
        state = self.state
        if isinstance(state, Editing):
            self._handle_edit_key(key_event)
        elif isinstance(state, Saving):
            self._handle_save_key(state, key_event)
        elif isinstance(state, Overwriting):
            self._handle_overwrite_key(state, key_event)

    def _handle_edit_key(self, key_event: KeyEvent) -> None:
        self.status_message = None
        if key_event.is_ctrl_key(self.settings.quit_key):
            self._set_state(Quitting())
        elif key_event.is_ctrl_key(self.settings.save_key):
            self.save_prompt.set_answer(self.path.as_str())
            self.save_prompt.move_cursor_end()
            self._set_state(Saving(self.save_prompt))
        else:
            self.buffer_commands.execute(self.buffer, key_event)

    def _handle_save_key(self, state: Saving, key_event: KeyEvent) -> None:
        if self._is_cancel(key_event):
            self.status_message = None
            self._set_state(Editing())
        elif key_event.is_special('enter'):
            path = state.path_field.get_answer()
            result = self.try_save(path, force=False)
            if isinstance(result, Conflict):
                self.status_message = None
                label = EditorConstants.OVERWRITE_PROMPT_LABEL.format(path)
                self._set_state(Overwriting(state.path_field, InputField(label)))
            else:
                self._finish_save(result)
        else:
            self.status_message = None
            self.field_commands.execute(state.path_field, key_event)

    def _handle_overwrite_key(self, state: Overwriting, key_event: KeyEvent) -> None:
        if self._is_cancel(key_event):
            self.status_message = None
            self._set_state(Saving(state.path_field))
        elif key_event.is_special('enter'):
            if state.confirm_field.get_answer().lower() == EditorConstants.CONFIRM_ANSWER:
                result = self.try_save(state.path_field.get_answer(), force=True)
                assert not isinstance(result, Conflict)
                self._finish_save(result)
            else:
                self._set_state(Saving(state.path_field))
        else:
            self.status_message = None
            self.field_commands.execute(state.confirm_field, key_event)

    # --- Rendering ---

    def resize(self, width: int, height: int) -> None:
        """Re-fit the document viewport to a new screen size."""
        area = self.text_area(width, height)
        self.buffer.adjust_viewport(area.width, area.height)

    @staticmethod
    def text_area(width: int, height: int) -> Rect:
        # The bottom row is reserved for the prompt / status line
        return Rect(0, 0, max(width, 1), max(height - 1, 1))

    def render(self, width: int, height: int) -> RenderModel:
        """Build the frame for a screen of ``width`` x ``height`` cells."""
        area = self.text_area(width, height)
        self.buffer.adjust_viewport(area.width, area.height)
        frame = RenderModel(
            area=area,
            spans=self.buffer.visible_spans(area.width, area.height),
            cursor=self.buffer.render_cursor_position((area.x, area.y)),
            status=self.status_message,
            hint=EditorConstants.HELP_HINT.format(self.settings.save_key.upper(),
                                                  self.settings.quit_key.upper()),
            modified=self.buffer.modified,
        )

        field = self.active_field
        if field is not None:
            status_row = area.y + area.height
            label = field.label
            if self.status_message:
                # Failed saves keep the prompt open, so show the reason in front of it
                label = f" {self.status_message} |{label}"
            field_x = len(label)
            field_width = max(width - field_x, 1)
            field.adjust_viewport(field_width)
            frame.prompt = PromptLine(label, field.visible_text(field_width))
            frame.cursor = (min(field.render_cursor_position(field_x), max(width - 1, 0)), status_row)
        return frame
