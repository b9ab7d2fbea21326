"""Terminal interface using Blessed for display and Curtsies for input."""

from typing import Optional

import blessed

from .view import Frame


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None

    def setup(self):
        """Enter fullscreen mode and put the keyboard in raw mode."""
        print(self.term.enter_fullscreen + self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            from curtsies import Input
            # Input's context manager owns raw mode for the whole session
            self._curtsies_input = Input(keynames='curtsies')
            self._curtsies_input.__enter__()

    def cleanup(self):
        """Leave raw mode and fullscreen, restoring the terminal."""
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)
            finally:
                self._curtsies_input = None
        if self.is_fullscreen:
            print(self.term.normal + self.term.exit_fullscreen + self.term.normal_cursor,
                  end='', flush=True)
            self.is_fullscreen = False

    def draw_frame(self, frame: Frame):
        """Paint a whole frame in one write.

        The cursor is hidden while painting so it does not flicker across
        the screen.
        """
        term = self.term
        out = [term.hide_cursor, term.home]
        for y, row in enumerate(frame.rows):
            out.append(term.move(y, 0) + row + term.clear_eol)
        status_y = len(frame.rows)
        out.append(term.move(status_y, 0) + frame.status)
        out.append(term.move(status_y + 1, 0) + frame.message + term.clear_eol)
        out.append(term.move(frame.cursor_y, frame.cursor_x))
        out.append(term.normal_cursor)
        print(''.join(str(part) for part in out), end='', flush=True)

    def get_key(self, timeout=None):
        """Get the next input event from the user.

        Keys still buffered by curtsies from an earlier read are returned
        before waiting on the terminal.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name, a curtsies PasteEvent for pasted text,
            or None if nothing arrived in time.
        """
        if self._curtsies_input is None:
            return None
        return self._curtsies_input.send(timeout)

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows, including the status and message lines."""
        return self.term.height
