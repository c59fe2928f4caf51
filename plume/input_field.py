"""Single-line editable prompt used for the save path and confirmations."""

from .indexed_string import IndexedString
from .scroll import ScrollWindow


class InputField:
    """One editable row with a static label and a horizontal viewport."""

    def __init__(self, label: str, answer: str = ""):
        self.label = label
        self._answer = IndexedString(answer)
        self.cursor = 0
        self._window = ScrollWindow()

    def __repr__(self) -> str:
        return f"InputField({self.label!r}, {self.get_answer()!r})"

    def get_answer(self) -> str:
        return self._answer.as_str()

    def set_answer(self, value: str) -> None:
        """Replace the content, keeping the cursor inside the new text."""
        self._answer = IndexedString(value)
        self.cursor = min(self.cursor, len(self._answer))
        self._window.follow(self.cursor)

    def __len__(self) -> int:
        return len(self._answer)

    # --- Editing ---

    def write_character(self, ch: str) -> None:
        self._answer.insert(self.cursor, ch)
        self.cursor += 1
        self._window.follow(self.cursor)

    def remove_before(self) -> None:
        if self.cursor > 0:
            self._answer.remove(self.cursor - 1)
            self.cursor -= 1
            self._window.follow(self.cursor)

    def remove_after(self) -> None:
        if self.cursor < len(self._answer):
            self._answer.remove(self.cursor)

    def move_cursor_left(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1
        self._window.follow(self.cursor)

    def move_cursor_right(self) -> None:
        if self.cursor < len(self._answer):
            self.cursor += 1
        self._window.follow(self.cursor)

    def move_cursor_end(self) -> None:
        self.cursor = len(self._answer)
        self._window.follow(self.cursor)

    # --- Viewport ---

    @property
    def viewport_offset(self) -> int:
        return self._window.offset

    def adjust_viewport(self, visible_width: int) -> None:
        self._window.follow(self.cursor, visible_width)

    def render_cursor_position(self, origin_x: int = 0) -> int:
        return self._window.to_screen(self.cursor, origin_x)

    def visible_text(self, visible_width: int) -> str:
        return self._answer.suffix_from(self._window.offset)[:max(visible_width, 0)]
