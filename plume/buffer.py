"""Multi-line document buffer with cursor and viewport coordination."""

from dataclasses import dataclass
from typing import Iterable, Optional

from .indexed_string import IndexedString
from .scroll import ScrollWindow


@dataclass
class CursorPosition:
    column: int = 0
    row: int = 0


class TextBuffer:
    """Ordered lines of text plus a 2D cursor and a scrolling viewport.

    The stored column is allowed to exceed the length of the current line so
    that vertical movement remembers the intended column. Every operation that
    needs a valid index clamps it first; rendering clamps without storing.
    """

    cursor_position: CursorPosition

    def __init__(self, lines: Optional[Iterable[str]] = None):
        self._lines = [IndexedString(line) for line in (lines if lines is not None else [""])]
        if not self._lines:
            self._lines.append(IndexedString())
        self.cursor_position = CursorPosition()
        self._columns = ScrollWindow()
        self._rows = ScrollWindow()
        self.modified = False

    @classmethod
    def from_text(cls, text: str) -> "TextBuffer":
        """Build a buffer by splitting ``text`` on newlines."""
        return cls(text.split('\n'))

    # --- Queries ---

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(line.as_str() for line in self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def cursor(self) -> tuple[int, int]:
        """Stored cursor as ``(column, row)``, possibly past the line end."""
        return (self.cursor_position.column, self.cursor_position.row)

    @property
    def viewport_offset(self) -> tuple[int, int]:
        return (self._columns.offset, self._rows.offset)

    @property
    def current_line(self) -> IndexedString:
        return self._lines[self.cursor_position.row]

    def _clamped_column(self) -> int:
        return min(self.cursor_position.column, len(self.current_line))

    def _clamp_cursor(self) -> None:
        self.cursor_position.column = self._clamped_column()

    def serialize(self) -> str:
        return '\n'.join(line.as_str() for line in self._lines)

    # --- Editing ---

    def write_character(self, ch: str) -> None:
        self._clamp_cursor()
        self.current_line.insert(self.cursor_position.column, ch)
        self.cursor_position.column += 1
        self.modified = True
        self._follow_cursor()

    def remove_before(self) -> None:
        """Backspace: delete the previous codepoint or join with the line above."""
        self._clamp_cursor()
        pos = self.cursor_position
        if pos.column > 0:
            self.current_line.remove(pos.column - 1)
            pos.column -= 1
        elif pos.row > 0:
            removed = self._lines.pop(pos.row)
            pos.row -= 1
            previous = self.current_line
            pos.column = len(previous)
            previous.push_str(removed.as_str())
        else:
            return
        self.modified = True
        self._follow_cursor()

    def remove_after(self) -> None:
        """Delete: remove the codepoint under the cursor or join the next line."""
        self._clamp_cursor()
        pos = self.cursor_position
        if pos.column < len(self.current_line):
            self.current_line.remove(pos.column)
        elif pos.row < len(self._lines) - 1:
            following = self._lines.pop(pos.row + 1)
            self.current_line.push_str(following.as_str())
        else:
            return
        self.modified = True
        self._follow_cursor()

    def break_line(self) -> None:
        self._clamp_cursor()
        pos = self.cursor_position
        line = self.current_line
        suffix = line.drain(pos.column, len(line))
        self._lines.insert(pos.row + 1, IndexedString(suffix))
        pos.column = 0
        pos.row += 1
        self.modified = True
        self._follow_cursor()

    # --- Cursor motion ---

    def move_cursor_up(self) -> None:
        # Column deliberately left unclamped
        if self.cursor_position.row > 0:
            self.cursor_position.row -= 1
        self._follow_cursor()

    def move_cursor_down(self) -> None:
        if self.cursor_position.row < len(self._lines) - 1:
            self.cursor_position.row += 1
        self._follow_cursor()

    def move_cursor_left(self) -> None:
        self._clamp_cursor()
        if self.cursor_position.column > 0:
            self.cursor_position.column -= 1
        self._follow_cursor()

    def move_cursor_right(self) -> None:
        self._clamp_cursor()
        if self.cursor_position.column < len(self.current_line):
            self.cursor_position.column += 1
        self._follow_cursor()

    def move_cursor_home(self) -> None:
        self.cursor_position.column = 0
        self._follow_cursor()

    def move_cursor_end(self) -> None:
        self.cursor_position.column = len(self.current_line)
        self._follow_cursor()

    # --- Viewport ---

    def adjust_viewport(self, visible_width: int, visible_height: int) -> None:
        """Scroll the viewport by the minimal distance that shows the cursor.

        The size is remembered so later cursor motion keeps following it.
        """
        self._columns.follow(self._clamped_column(), visible_width)
        self._rows.follow(self.cursor_position.row, visible_height)

    def _follow_cursor(self) -> None:
        self._columns.follow(self._clamped_column())
        self._rows.follow(self.cursor_position.row)

    def render_cursor_position(self, origin: tuple[int, int] = (0, 0)) -> tuple[int, int]:
        """Screen position of the cursor for a viewport drawn at ``origin``."""
        x, y = origin
        return (
            self._columns.to_screen(self._clamped_column(), x),
            self._rows.to_screen(self.cursor_position.row, y),
        )

    def visible_spans(self, visible_width: int, visible_height: int) -> list[str]:
        """Return the text of each visible line, sliced to the viewport."""
        col_offset = self._columns.offset
        first = self._rows.offset
        spans = []
        for line in self._lines[first:first + max(visible_height, 0)]:
            if len(line) >= col_offset:
                spans.append(line.suffix_from(col_offset)[:max(visible_width, 0)])
            else:
                spans.append("")
        return spans
