"""Frame description handed from the controller to the terminal."""

from dataclasses import dataclass, field
from typing import Optional

from .constants import EditorConstants


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class PromptLine:
    label: str
    text: str


@dataclass
class RenderModel:
    """Everything needed to draw one frame.

    ``spans`` are already sliced to the viewport, one entry per visible row of
    ``area``. ``cursor`` is an absolute ``(x, y)`` screen position.
    """

    area: Rect
    spans: list[str] = field(default_factory=list)
    cursor: tuple[int, int] = (0, 0)
    prompt: Optional[PromptLine] = None
    status: Optional[str] = None
    hint: str = ""
    modified: bool = False

    def bottom_line(self, width: int) -> str:
        """Compose the status row: prompt, message, or the key hint."""
        if self.prompt is not None:
            text = self.prompt.label + self.prompt.text
            return text[:width].ljust(width)
        if self.status:
            return f" {self.status}"[:width].ljust(width)
        # Unsaved marker on the left, key hint on the right
        left = f" {EditorConstants.MODIFIED_MARKER}" if self.modified else ""
        hint = self.hint
        if not hint or len(left) + len(hint) + 1 > width:
            return left[:width].ljust(width)
        return left + (" " * (width - len(left) - len(hint) - 1)) + hint + " "
