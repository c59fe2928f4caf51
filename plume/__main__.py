"""Plume CLI entry point.

Allows running via `python -m plume` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import sys
from typing import Optional

from .settings import configure_logging, load_settings
from .version import get_version_string


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def run_keyboard_test() -> None:
    """Print parsed key events until ESC is pressed."""
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler

    print("Keyboard test mode - press keys to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    term.setup()
    kb = KeyboardHandler(term)
    try:
        while True:
            ev = kb.get_key_event(timeout=None)
            if not ev:
                continue
            if ev.is_special('escape'):
                print("Exiting keyboard test.")
                break
            parts = [f"type={ev.key_type.value}", f"value={ev.value!r}", f"raw='{_escape_bytes(ev.raw)}'"]
            print(' '.join(parts) + '\r')
    finally:
        term.cleanup()


def main(argv: Optional[list[str]] = None) -> int:
    # Small arg parsing for keyboard test mode, version, and optional filename
    args = sys.argv[1:] if argv is None else argv
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return 0
    if args and args[0] in ('--keytest', '--keyboard-test'):
        run_keyboard_test()
        return 0

    configure_logging()
    settings = load_settings()

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    editor = Editor(settings=settings)
    if args:
        try:
            editor.load_file(args[0])
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error loading file: {e}", file=sys.stderr)
            return 1
    editor.run()
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
