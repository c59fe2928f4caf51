"""Constants and configuration for the plume editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Main loop
    POLL_INTERVAL = 0.5  # Upper bound on the wait for input before redrawing (seconds)

    # Default key bindings (letter combined with Ctrl)
    QUIT_KEY = "q"
    SAVE_KEY = "s"
    CANCEL_KEY = "c"

    # Terminal requirements
    MIN_TERMINAL_WIDTH = 20
    MIN_TERMINAL_HEIGHT = 3

    # Prompts
    SAVE_PROMPT_LABEL = " File to save in: "
    OVERWRITE_PROMPT_LABEL = " {} exists. Overwrite? (y/n): "
    CONFIRM_ANSWER = "y"

    # File operations
    ENCODING = "utf-8"
    ATOMIC_SAVE_PREFIX = "."  # Prefix for temporary save files
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize
    INTERRUPT_PIPE_MARKER = b'C'  # Byte written to pipe when SIGINT arrives

    # Status messages
    HELP_HINT = "^{} Save  ^{} Quit"
    MODIFIED_MARKER = "Modified"
    SAVED_MESSAGE = "Saved to {}"
    NO_FILENAME_MESSAGE = "Error: No file name given"
    PERMISSION_DENIED_MESSAGE = "Error: Permission denied saving {}"
    NO_SPACE_MESSAGE = "Error: No space left on device"
    MISSING_DIRECTORY_MESSAGE = "Error: Directory does not exist for {}"
    CANNOT_SAVE_MESSAGE = "Error: Cannot save to {}"
    TERMINAL_TOO_SMALL_MESSAGE = "Terminal too small! Need at least {}x{}."
    CURRENT_SIZE_MESSAGE = "Current size: {}x{}."
