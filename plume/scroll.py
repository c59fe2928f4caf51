"""Viewport offset tracking shared by the text buffer and prompt fields."""

from dataclasses import dataclass
from typing import Optional


def scroll_offset(position: int, offset: int, size: int) -> int:
    """Return the offset that keeps ``position`` inside a window of ``size``.

    Scrolls by the minimal distance: back to the position when it lies before
    the window, forward by exactly the overflow when it lies past the end.
    A window smaller than one cell is treated as one cell wide.
    """
    size = max(size, 1)
    if position < offset:
        return position
    if position - offset > size - 1:
        return position - (size - 1)
    return offset


@dataclass
class ScrollWindow:
    """One axis of a viewport: the first visible index and the last known size."""

    offset: int = 0
    size: Optional[int] = None

    def follow(self, position: int, size: Optional[int] = None) -> int:
        """Scroll so that ``position`` is visible and return the new offset.

        Args:
            position: Cursor position along this axis
            size: Visible size; the last known size is used when omitted
        """
        if size is not None:
            self.size = size
        if self.size is None:
            # Size unknown until the first render; only scroll back
            self.offset = min(self.offset, position)
            return self.offset
        self.offset = scroll_offset(position, self.offset, self.size)
        return self.offset

    def to_screen(self, position: int, origin: int = 0) -> int:
        return origin + position - self.offset
