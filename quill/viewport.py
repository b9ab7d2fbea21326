"""Cursor position and the scrollable window onto the document."""

from dataclasses import dataclass, replace

from .constants import EditorConstants
from .model import Document
from .projection import cx_to_rx


@dataclass
class Cursor:
    """Cursor in raw coordinates. ``cy`` may equal numrows (the row past the end)."""
    cx: int = 0
    cy: int = 0

    def rx(self, document: Document) -> int:
        """Render column of the cursor, derived from (cy, cx)."""
        if self.cy < document.numrows:
            return cx_to_rx(document.lines[self.cy].chars, self.cx)
        return 0

    def clamp(self, document: Document):
        """Pull cx back inside the current row after a vertical move."""
        self.cy = max(0, min(self.cy, document.numrows))
        self.cx = max(0, min(self.cx, document.row_length(self.cy)))

    # --- Movement (arrow keys) ---
    def left(self, document: Document):
        if self.cx > 0:
            self.cx -= 1
        elif self.cy > 0:
            self.cy -= 1
            self.cx = document.row_length(self.cy)

    def right(self, document: Document):
        if self.cy >= document.numrows:
            return
        if self.cx < document.row_length(self.cy):
            self.cx += 1
        else:
            self.cy += 1
            self.cx = 0

    def up(self, document: Document):
        if self.cy > 0:
            self.cy -= 1
        self.clamp(document)

    def down(self, document: Document):
        if self.cy < document.numrows:
            self.cy += 1
        self.clamp(document)

    def home(self, document: Document):
        self.cx = 0

    def end(self, document: Document):
        if self.cy < document.numrows:
            self.cx = document.row_length(self.cy)


@dataclass
class Viewport:
    """Top-left corner of the visible window and the size of the text area."""
    row_offset: int = 0
    col_offset: int = 0
    screen_rows: int = 1
    screen_cols: int = 1

    @classmethod
    def for_terminal(cls, height: int, width: int) -> "Viewport":
        viewport = cls()
        viewport.resize(height, width)
        return viewport

    def resize(self, height: int, width: int):
        """Set the text area from the full terminal size, minus the status lines."""
        self.screen_rows = max(1, height - EditorConstants.RESERVED_ROWS)
        self.screen_cols = max(1, width)


def scroll(cursor: Cursor, document: Document, viewport: Viewport) -> Viewport:
    """Return offsets that keep the cursor inside the viewport.

    The offsets move by the smallest amount that brings the cursor back
    on screen; they are left alone when it is already visible.
    """
    rx = cursor.rx(document)
    row_offset = viewport.row_offset
    col_offset = viewport.col_offset

    if cursor.cy < row_offset:
        row_offset = cursor.cy
    if cursor.cy >= row_offset + viewport.screen_rows:
        row_offset = cursor.cy - viewport.screen_rows + 1
    if rx < col_offset:
        col_offset = rx
    if rx >= col_offset + viewport.screen_cols:
        col_offset = rx - viewport.screen_cols + 1

    return replace(viewport, row_offset=row_offset, col_offset=col_offset)
