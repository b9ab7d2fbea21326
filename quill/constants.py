"""Constants and configuration for the quill editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    VERSION = "0.1.0"

    # Rendering
    TAB_STOP = 8  # Tabs expand to the next multiple of this column
    RESERVED_ROWS = 2  # Status bar + message bar below the text area
    FILLER = "~"  # Drawn on rows past the end of the document
    WELCOME_MESSAGE = "quill editor -- version {}"

    # Status messages
    STATUS_MESSAGE_MAX = 79  # Longest message kept for the message bar
    MESSAGE_TIMEOUT = 5  # Seconds a status message stays visible
    HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find"
    NO_NAME = "[No Name]"
    STATUS_FILENAME_WIDTH = 20  # Filename truncation in the status bar

    # Quitting with unsaved changes
    QUIT_TIMES = 3
    QUIT_WARNING = "WARNING: file has unsaved changes. Press Ctrl-Q {} more times to quit."

    # Prompts
    SAVE_AS_PROMPT = "Save as: {} (ESC to cancel)"
    SEARCH_PROMPT = "Search: {} (ESC/Enter to cancel, Arrows to navigate)"

    # File operations
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize
