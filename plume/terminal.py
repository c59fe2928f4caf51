"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import select
import sys
from typing import Optional

import blessed

from .render import Rect, RenderModel

logger = logging.getLogger(__name__)


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        # Virtual screen state for minimal updates
        self._last_lines: Optional[list[str]] = None
        self._last_status: Optional[str] = None
        self._last_area: Optional[Rect] = None

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        self.invalidate_frame()
        if self._curtsies_input is None:
            try:
                from curtsies import Input  # type: ignore
                self._curtsies_input = Input(keynames='curtsies')
                self._curtsies_input.__enter__()
            except Exception as e:
                # curtsies cannot put some terminals (CI, pipes) into raw mode;
                # the editor then runs without input rather than crashing
                logger.warning(f"Keyboard input unavailable: {e}")
                self._curtsies_input = None

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except Exception as e:
                # Teardown must reach the end so the terminal is usable again
                logger.warning(f"Could not restore keyboard mode: {e}")
            finally:
                self._curtsies_input = None

    def invalidate_frame(self) -> None:
        """Forget the cached frame so the next draw repaints everything."""
        self._last_lines = None
        self._last_status = None
        self._last_area = None

    def draw_frame(self, frame: RenderModel) -> None:
        """Draw the visible text, the status row and the cursor.

        Only rows that changed since the previous frame are rewritten; a
        change of geometry forces a full clear.
        """
        area = frame.area
        if self._last_lines is None or self._last_area != area:
            print(self.term.home + self.term.clear, end='')
            self._last_lines = [None] * area.height
            self._last_status = None
            self._last_area = area

        for y in range(area.height):
            text = frame.spans[y] if y < len(frame.spans) else ""
            display_line = text[:area.width].ljust(area.width)
            if display_line != self._last_lines[y]:
                print(self.term.move(area.y + y, area.x) + display_line, end='')
                self._last_lines[y] = display_line

        status_text = frame.bottom_line(self.term.width)
        if status_text != self._last_status:
            print(self.term.move(area.y + area.height, 0) + self.term.reverse + status_text
                  + self.term.normal, end='')
            self._last_status = status_text

        cursor_x, cursor_y = frame.cursor
        print(self.term.move(cursor_y, cursor_x) + self.term.normal_cursor, end='', flush=True)

    def draw_error_message(self, message1: str, message2: str = ""):
        """Draw an error message in the center of the screen."""
        self.invalidate_frame()
        print(self.term.home + self.term.clear, end='')
        center_y = self.term.height // 2
        for offset, message in enumerate(m for m in (message1, message2) if m):
            x = max((self.term.width - len(message)) // 2, 0)
            print(self.term.move(max(center_y - 1 + offset, 0), x) + message[:self.term.width], end='')
        print(self.term.hide_cursor, end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name as a string, or None if nothing arrived
        """
        if self._curtsies_input is None:
            return None
        if timeout is not None:
            ready, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not ready:
                return None
        event = next(self._curtsies_input)
        return str(event) if event is not None else None

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows, including the status row."""
        return self.term.height
