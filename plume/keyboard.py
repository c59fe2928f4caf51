"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"


_ALIASES = {
    'pageup': 'page_up',
    'pagedown': 'page_down',
    'esc': 'escape',
    'return': 'enter',
    'del': 'delete',
}


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str = ""  # The raw key string from the terminal
    is_alt: bool = False
    is_ctrl: bool = False

    def is_special(self, name: str) -> bool:
        return self.key_type == KeyType.SPECIAL and self.value == name

    def is_ctrl_key(self, letter: str) -> bool:
        return self.key_type == KeyType.CTRL and self.value == letter


def _special(name: str, raw: str) -> KeyEvent:
    return KeyEvent(key_type=KeyType.SPECIAL, value=name, raw=raw)


def _ctrl_letter(letter: str, raw: str) -> KeyEvent:
    # Terminals send Ctrl-J / Ctrl-M for Enter and Ctrl-H for Backspace
    if letter in ('j', 'm'):
        return _special('enter', raw)
    if letter == 'h':
        return _special('backspace', raw)
    return KeyEvent(key_type=KeyType.CTRL, value=letter, raw=raw, is_ctrl=True)


def parse_token(token: str) -> KeyEvent:
    """Parse a curtsies key name such as '<LEFT>', '<Ctrl-s>' or '<Esc+x>'."""
    name = token[1:-1].lower().replace('+', '-')
    parts = name.split('-') if '-' in name and name != '-' else [name]
    base = _ALIASES.get(parts[-1], parts[-1])
    mods = set(parts[:-1])
    if mods & {'meta', 'esc'}:
        mods.add('alt')

    if not mods:
        if base in ('space', 'spacebar', 'spc'):
            return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
        if base == 'tab':
            return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t')
    if 'ctrl' in mods and len(base) == 1:
        return _ctrl_letter(base, token)
    if 'alt' in mods:
        return KeyEvent(key_type=KeyType.ALT, value=base, raw=token, is_alt=True)
    # Unknown tokens (function keys, shifted arrows) stay SPECIAL and unbound
    return _special(base, token)


def parse_key(key) -> KeyEvent:
    """Parse a raw key string (or an object with a str form) into a KeyEvent."""
    key_str = str(key)

    if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
        return parse_token(key_str)

    if key_str == '\x1b':
        return _special('escape', key_str)
    if key_str == '\x7f':
        return _special('backspace', key_str)
    if len(key_str) == 1 and 1 <= ord(key_str) <= 26:  # Ctrl-A .. Ctrl-Z
        return _ctrl_letter(chr(ord('a') + ord(key_str) - 1), key_str)
    if len(key_str) == 2 and key_str[0] == '\x1b':
        return KeyEvent(key_type=KeyType.ALT, value=key_str[1], raw=key_str, is_alt=True)

    return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)


class KeyboardHandler:
    """Reads keys from the terminal interface and parses them."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return parse_key(key)
