"""Application loop tying the terminal, keyboard and controller together."""

import logging
import os
import select
import signal
import sys
import termios
from typing import Optional

from .constants import EditorConstants
from .controller import EditorController
from .filesystem import Filesystem
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .settings import EditorSettings
from .terminal import TerminalInterface

logger = logging.getLogger(__name__)


class Editor:
    """Main editor application."""

    def __init__(self,
                 settings: Optional[EditorSettings] = None,
                 terminal: Optional[TerminalInterface] = None,
                 filesystem: Optional[Filesystem] = None):
        """Initialize the editor components."""
        self.settings = settings or EditorSettings()
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.controller = EditorController(filesystem=filesystem, settings=self.settings)
        self.running = False
        self.error_mode = False  # True when the terminal is too small
        self._interrupted = False
        # Pipe for waking select() from signal handlers
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()

    def load_file(self, filename: str):
        """Open a file for editing; see EditorController.load_file."""
        self.controller.load_file(filename)

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def _handle_sigint(self, signum, frame):
        """Handle SIGINT (Ctrl-C) as a key press instead of an interrupt."""
        del signum, frame  # Unused
        self._interrupted = True
        os.write(self._resize_pipe_w, EditorConstants.INTERRUPT_PIPE_MARKER)

    def _disable_flow_control(self):
        """Let Ctrl-S and Ctrl-Q reach the editor instead of the tty driver.

        Returns:
            The previous termios settings, or None if they could not be changed
        """
        try:
            old_settings = termios.tcgetattr(sys.stdin)
            new_settings = list(old_settings)
            new_settings[0] &= ~(termios.IXON | termios.IXOFF)
            termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
            return old_settings
        except (termios.error, OSError) as e:
            logger.warning(f"Could not disable flow control: {e}")
            return None

    def run(self):
        """Run the main editor loop until the controller reaches Quitting."""
        self.terminal.setup()
        self.running = True

        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        original_int_handler = signal.signal(signal.SIGINT, self._handle_sigint)

        try:
            with self.terminal.term.cbreak():
                old_settings = self._disable_flow_control()
                try:
                    self._loop()
                finally:
                    if old_settings is not None:
                        try:
                            termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                        except (termios.error, OSError) as e:
                            logger.warning(f"Could not restore terminal settings: {e}")
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            signal.signal(signal.SIGINT, original_int_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self.terminal.cleanup()
            self.running = False

    def _loop(self):
        need_draw = True
        while self.running and not self.controller.is_quitting:
            if need_draw:
                self._draw()
                need_draw = False

            # Bounded wait so the screen is refreshed even without input
            ready, _, _ = select.select([0, self._resize_pipe_r], [], [], self.settings.poll_interval)
            if not ready:
                need_draw = True
                continue

            if self._resize_pipe_r in ready:
                data = os.read(self._resize_pipe_r, 1024)
                if self._interrupted:
                    self._interrupted = False
                    self._handle_key_event(KeyEvent(
                        key_type=KeyType.CTRL,
                        value='c',
                        raw='\x03',
                        is_ctrl=True
                    ))
                if EditorConstants.RESIZE_PIPE_MARKER in data:
                    self.terminal.invalidate_frame()
                    self.controller.resize(self.terminal.width, self.terminal.height)
                need_draw = True
            elif 0 in ready:
                key_event = self.keyboard.get_key_event(timeout=0)
                if key_event:
                    self._handle_key_event(key_event)
                    need_draw = True

    def _handle_key_event(self, key_event: KeyEvent):
        """Handle a keyboard event."""
        self.controller.handle_key_event(key_event)

    def _draw(self):
        """Draw the current editor state to terminal."""
        width = self.terminal.width
        height = self.terminal.height
        if width < EditorConstants.MIN_TERMINAL_WIDTH or height < EditorConstants.MIN_TERMINAL_HEIGHT:
            self.error_mode = True
            self.terminal.draw_error_message(
                EditorConstants.TERMINAL_TOO_SMALL_MESSAGE.format(
                    EditorConstants.MIN_TERMINAL_WIDTH, EditorConstants.MIN_TERMINAL_HEIGHT),
                EditorConstants.CURRENT_SIZE_MESSAGE.format(width, height),
            )
            return
        self.error_mode = False
        self.terminal.draw_frame(self.controller.render(width, height))
