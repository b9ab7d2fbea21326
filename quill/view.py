"""Frame composition: visible text rows, status bar and message bar."""

from dataclasses import dataclass
from typing import Optional

from .constants import EditorConstants
from .model import Document, Line
from .search import SearchSession
from .syntax import Highlight, syntax_to_color
from .viewport import Cursor, Viewport


@dataclass
class Frame:
    """Everything the terminal needs to paint one screen."""
    rows: list[str]  # One styled string per text-area row
    status: str
    message: str
    cursor_y: int
    cursor_x: int


class FrameRenderer:
    """Builds frames using the styling strings of a blessed Terminal."""

    def __init__(self, term, version: str = EditorConstants.VERSION):
        self.term = term
        self.version = version

    def _style(self, hl: Highlight) -> str:
        if hl == Highlight.NORMAL:
            return str(self.term.normal)
        return str(getattr(self.term, syntax_to_color(hl)))

    def draw_line(self, line: Line, highlight: list[Highlight], viewport: Viewport) -> str:
        """Draw the visible slice of one line.

        A style sequence is written only where the classification changes
        from the previous character, never once per character.
        """
        start = viewport.col_offset
        end = start + viewport.screen_cols
        text = line.render[start:end]
        classes = highlight[start:end]

        out = []
        current = Highlight.NORMAL
        for ch, hl in zip(text, classes):
            if hl != current:
                out.append(self._style(hl))
                current = hl
            out.append(ch)
        if current != Highlight.NORMAL:
            out.append(str(self.term.normal))
        return ''.join(out)

    def welcome_row(self, width: int) -> str:
        welcome = EditorConstants.WELCOME_MESSAGE.format(self.version)[:width]
        padding = (width - len(welcome)) // 2
        row = ""
        if padding:
            row += EditorConstants.FILLER
            padding -= 1
        return row + " " * padding + welcome

    def draw_rows(self, document: Document, viewport: Viewport,
                  search: Optional[SearchSession] = None) -> list[str]:
        rows = []
        for y in range(viewport.screen_rows):
            filerow = y + viewport.row_offset
            if filerow >= document.numrows:
                if document.numrows == 0 and y == viewport.screen_rows // 3:
                    rows.append(self.welcome_row(viewport.screen_cols))
                else:
                    rows.append(EditorConstants.FILLER)
                continue
            line = document.lines[filerow]
            highlight = search.highlight_for(filerow, line) if search else line.highlight
            rows.append(self.draw_line(line, highlight, viewport))
        return rows

    def status_bar(self, document: Document, cursor: Cursor, width: int) -> str:
        """Filename, line count and modified flag on the left; file type and
        current line on the right, in reverse video."""
        name = document.filename or EditorConstants.NO_NAME
        name = name[:EditorConstants.STATUS_FILENAME_WIDTH]
        modified = "(modified)" if document.dirty else ""
        status = f"{name} - {document.numrows} lines {modified}"[:width]
        filetype = document.syntax.filetype if document.syntax else "text"
        rstatus = f"{filetype} | {cursor.cy + 1}/{document.numrows}"
        if len(status) + len(rstatus) <= width:
            status = status + " " * (width - len(status) - len(rstatus)) + rstatus
        else:
            status = status.ljust(width)
        return f"{self.term.reverse}{status}{self.term.normal}"

    def message_bar(self, message: Optional[str], width: int) -> str:
        return (message or "")[:width]

    def compose(self, document: Document, cursor: Cursor, viewport: Viewport,
                message: Optional[str] = None,
                search: Optional[SearchSession] = None) -> Frame:
        """Build the frame for the current state.

        The viewport must already be scrolled to the cursor.
        """
        return Frame(
            rows=self.draw_rows(document, viewport, search),
            status=self.status_bar(document, cursor, viewport.screen_cols),
            message=self.message_bar(message, viewport.screen_cols),
            cursor_y=cursor.cy - viewport.row_offset,
            cursor_x=cursor.rx(document) - viewport.col_offset,
        )
