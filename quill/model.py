"""In-memory document model: an ordered list of lines plus their derived forms."""

from dataclasses import dataclass, field
from typing import Optional, Iterable

from .projection import to_render
from .syntax import Highlight, SyntaxProfile, select_syntax, update_syntax


@dataclass
class Line:
    """One row of the document.

    ``render`` and ``highlight`` are derived from ``chars`` and must be
    refreshed with :meth:`update` whenever ``chars`` changes.
    """
    chars: str = ""
    render: str = ""
    highlight: list[Highlight] = field(default_factory=list)

    def update(self, syntax: Optional[SyntaxProfile]):
        self.render = to_render(self.chars)
        self.highlight = update_syntax(self.render, syntax)

    def __len__(self):
        return len(self.chars)


class Document:
    """The lines being edited, their dirty count, filename and syntax profile.

    All mutations take 0-based (row, col) raw coordinates. Out-of-range
    coordinates make a mutation a no-op rather than an error.
    """

    def __init__(self, lines: Optional[Iterable[str]] = None, filename: Optional[str] = None,
                 syntax: Optional[SyntaxProfile] = None):
        self.filename = filename
        self.syntax = syntax
        self.dirty = 0
        self.lines: list[Line] = []
        for text in lines or []:
            line = Line(chars=text)
            line.update(self.syntax)
            self.lines.append(line)

    @classmethod
    def from_text(cls, text: str, filename: Optional[str] = None) -> "Document":
        """Build a document from file content, one line per source line.

        Trailing carriage returns are stripped along with the newline.
        """
        parts = text.split('\n')
        if parts[-1] == '':
            # Text ending in a newline (or empty text) has no extra line
            parts.pop()
        lines = [raw.rstrip('\r') for raw in parts]
        return cls(lines, filename=filename, syntax=select_syntax(filename))

    @property
    def numrows(self) -> int:
        return len(self.lines)

    def row_length(self, row: int) -> int:
        """Length of a row's raw content; 0 for the virtual row past the end."""
        if 0 <= row < self.numrows:
            return len(self.lines[row].chars)
        return 0

    # --- Syntax ---
    def set_syntax(self, syntax: Optional[SyntaxProfile]):
        """Change the profile and reclassify every line."""
        self.syntax = syntax
        for line in self.lines:
            line.highlight = update_syntax(line.render, syntax)

    def select_syntax(self, filename: Optional[str] = None):
        self.set_syntax(select_syntax(filename if filename is not None else self.filename))

    # --- Line operations ---
    def insert_line(self, at: int, text: str):
        if at < 0 or at > self.numrows:
            return
        line = Line(chars=text)
        line.update(self.syntax)
        self.lines.insert(at, line)
        self.dirty += 1

    def delete_line(self, at: int):
        if at < 0 or at >= self.numrows:
            return
        del self.lines[at]
        self.dirty += 1

    def append_string(self, row: int, text: str):
        if row < 0 or row >= self.numrows:
            return
        line = self.lines[row]
        line.chars += text
        line.update(self.syntax)
        self.dirty += 1

    # --- Character operations ---
    def insert_char(self, row: int, col: int, ch: str) -> int:
        """Insert ch at (row, col), appending a line when typing past the end.

        Returns:
            The raw column just after the inserted character.
        """
        if row == self.numrows:
            self.insert_line(self.numrows, "")
        if row < 0 or row >= self.numrows:
            return col
        line = self.lines[row]
        col = max(0, min(col, len(line.chars)))
        line.chars = line.chars[:col] + ch + line.chars[col:]
        line.update(self.syntax)
        self.dirty += 1
        return col + len(ch)

    def delete_char(self, row: int, col: int):
        if row < 0 or row >= self.numrows:
            return
        line = self.lines[row]
        if col < 0 or col >= len(line.chars):
            return
        line.chars = line.chars[:col] + line.chars[col + 1:]
        line.update(self.syntax)
        self.dirty += 1

    def split_line(self, row: int, col: int) -> tuple[int, int]:
        """Break the line at col (Enter key).

        Returns:
            The cursor position after the split, (row + 1, 0).
        """
        if row < 0 or row > self.numrows:
            return row, col
        if row == self.numrows:
            self.insert_line(row, "")
            return row + 1, 0
        line = self.lines[row]
        col = max(0, min(col, len(line.chars)))
        if col == 0:
            self.insert_line(row, "")
        else:
            self.insert_line(row + 1, line.chars[col:])
            line.chars = line.chars[:col]
            line.update(self.syntax)
        return row + 1, 0

    def join_with_previous(self, row: int) -> Optional[tuple[int, int]]:
        """Append a row to the row above it and remove it (Backspace at column 0).

        Returns:
            The cursor position at the join point, or None when nothing
            was joined.
        """
        if row <= 0 or row >= self.numrows:
            return None
        prev_len = len(self.lines[row - 1].chars)
        self.append_string(row - 1, self.lines[row].chars)
        self.delete_line(row)
        return row - 1, prev_len

    def backspace(self, row: int, col: int) -> tuple[int, int]:
        """Delete the character left of (row, col), joining lines at column 0.

        Returns:
            The new cursor position.
        """
        if row >= self.numrows or (row == 0 and col == 0):
            return row, col
        if col > 0:
            self.delete_char(row, col - 1)
            return row, col - 1
        joined = self.join_with_previous(row)
        return joined if joined is not None else (row, col)

    # --- Serialization ---
    def serialize(self) -> str:
        """Return the on-disk form: every line followed by a newline."""
        return ''.join(line.chars + '\n' for line in self.lines)

    def mark_clean(self):
        self.dirty = 0
