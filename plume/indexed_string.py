"""Codepoint-indexed text storage for buffer lines and prompt answers.

Text is kept as UTF-8 bytes alongside a table holding the byte position at
which every codepoint starts, so any codepoint can be located without
re-decoding the line. Edits shift the tail of the table in a single pass.
"""

from typing import Iterable, Optional


class BoundsError(IndexError):
    """An index or range argument falls outside an IndexedString."""

    def __init__(self, message: str, index: Optional[int] = None, length: Optional[int] = None):
        super().__init__(message)
        self.index = index
        self.length = length


def _encode_codepoint(ch: str) -> bytes:
    if not isinstance(ch, str) or len(ch) != 1:
        raise ValueError(f"Expected a single codepoint, got {ch!r}")
    return ch.encode('utf-8')


class IndexedString:
    """Mutable string addressed by codepoint index.

    ``offsets[i]`` is the byte position where codepoint ``i`` begins. The
    table is strictly increasing and has exactly one entry per codepoint.
    """

    __slots__ = ('_data', '_offsets')

    def __init__(self, text: str = ""):
        self._data = bytearray()
        self._offsets: list[int] = []
        if text:
            self.push_str(text)

    @classmethod
    def from_str(cls, text: str) -> "IndexedString":
        return cls(text)

    # --- Queries ---

    def length(self) -> int:
        """Number of codepoints."""
        return len(self._offsets)

    def __len__(self) -> int:
        return len(self._offsets)

    @property
    def offsets(self) -> tuple[int, ...]:
        return tuple(self._offsets)

    def as_str(self) -> str:
        return self._data.decode('utf-8')

    def __str__(self) -> str:
        return self.as_str()

    def __repr__(self) -> str:
        return f"IndexedString({self.as_str()!r})"

    def __eq__(self, other) -> bool:
        if isinstance(other, IndexedString):
            return self._data == other._data
        return NotImplemented

    def copy(self) -> "IndexedString":
        clone = IndexedString()
        clone._data = bytearray(self._data)
        clone._offsets = list(self._offsets)
        return clone

    def char_at(self, idx: int) -> str:
        """Return codepoint ``idx`` without decoding the rest of the text."""
        if not 0 <= idx < len(self._offsets):
            raise BoundsError(f"Index {idx} out of range", index=idx, length=len(self._offsets))
        return self._data[self._offsets[idx]:self._byte_end(idx + 1)].decode('utf-8')

    def suffix_from(self, idx: int) -> str:
        """Return the text from codepoint ``idx`` to the end.

        Args:
            idx: Codepoint index, at most ``length()``

        Returns:
            The suffix, or an empty string when ``idx == length()``
        """
        if not 0 <= idx <= len(self._offsets):
            raise BoundsError(f"Suffix index {idx} out of range", index=idx, length=len(self._offsets))
        if idx == len(self._offsets):
            return ""
        return self._data[self._offsets[idx]:].decode('utf-8')

    def _byte_end(self, idx: int) -> int:
        # Byte position just past codepoint idx - 1
        if idx >= len(self._offsets):
            return len(self._data)
        return self._offsets[idx]

    # --- Mutation ---

    def push(self, ch: str) -> None:
        encoded = _encode_codepoint(ch)
        self._offsets.append(len(self._data))
        self._data += encoded

    def push_str(self, text: Iterable[str]) -> None:
        for ch in text:
            self.push(ch)

    def insert(self, idx: int, ch: str) -> None:
        """Insert one codepoint before codepoint ``idx``.

        Raises:
            BoundsError: If ``idx`` is greater than ``length()``
        """
        length = len(self._offsets)
        if not 0 <= idx <= length:
            raise BoundsError(f"Insert index {idx} out of range", index=idx, length=length)
        if idx == length:
            self.push(ch)
            return

        encoded = _encode_codepoint(ch)
        width = len(encoded)
        position = self._offsets[idx]
        self._data[position:position] = encoded
        self._offsets.insert(idx, position)
        offsets = self._offsets
        for i in range(idx + 1, len(offsets)):
            offsets[i] += width

    def remove(self, idx: int) -> str:
        """Remove codepoint ``idx`` and return it.

        Raises:
            BoundsError: If ``idx`` is not below ``length()``
        """
        length = len(self._offsets)
        if not 0 <= idx < length:
            raise BoundsError(f"Remove index {idx} out of range", index=idx, length=length)

        start = self._offsets[idx]
        end = self._byte_end(idx + 1)
        removed = self._data[start:end].decode('utf-8')
        del self._data[start:end]
        del self._offsets[idx]
        width = end - start
        offsets = self._offsets
        for i in range(idx, len(offsets)):
            offsets[i] -= width
        return removed

    def drain(self, start: int, end: int) -> str:
        """Remove codepoints ``[start, end)`` and return them as a string.

        Raises:
            BoundsError: Unless ``0 <= start <= end <= length()``
        """
        length = len(self._offsets)
        if not 0 <= start <= end <= length:
            raise BoundsError(
                f"Drain range {start}..{end} out of range", index=end, length=length
            )
        if start == end:
            return ""

        byte_start = self._offsets[start]
        byte_end = self._byte_end(end)
        removed = self._data[byte_start:byte_end].decode('utf-8')
        del self._data[byte_start:byte_end]
        del self._offsets[start:end]
        width = byte_end - byte_start
        offsets = self._offsets
        for i in range(start, len(offsets)):
            offsets[i] -= width
        return removed
