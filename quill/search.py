"""Incremental search over the rendered lines of a document."""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from .model import Document, Line
from .projection import rx_to_cx
from .syntax import Highlight
from .viewport import Cursor, Viewport

logger = logging.getLogger(__name__)


class SearchNav(Enum):
    """What the last key asked the search to do."""
    NEXT = "next"
    PREVIOUS = "previous"
    EDIT = "edit"  # Query changed; restart from the top


@dataclass
class SearchMatch:
    row: int
    cx: int  # Raw column of the match start
    start: int  # Render span of the match
    end: int


class SearchSession:
    """State of one incremental search, from begin() to end().

    The current match is kept as an overlay and merged into a line's
    classification only when it is drawn, so line highlight data is never
    modified by searching.
    """

    def __init__(self):
        self.query = ""
        self.last_match = -1
        self.direction = 1
        self.match: Optional[SearchMatch] = None
        self._saved_cursor: Optional[Cursor] = None
        self._saved_viewport: Optional[Viewport] = None

    @property
    def active(self) -> bool:
        return self._saved_cursor is not None

    def begin(self, cursor: Cursor, viewport: Viewport):
        """Start a search, remembering where to go back to on cancel."""
        self.query = ""
        self.last_match = -1
        self.direction = 1
        self.match = None
        self._saved_cursor = replace(cursor)
        self._saved_viewport = replace(viewport)

    def step(self, document: Document, query: str, nav: SearchNav) -> Optional[SearchMatch]:
        """Run one search step after a key press.

        Args:
            document: Document being searched
            query: Current query text
            nav: NEXT/PREVIOUS to move between matches, EDIT when the
                query changed

        Returns:
            The new match, or None when the query is empty or nothing
            matched (the previous position is then kept).
        """
        if nav is SearchNav.NEXT:
            self.direction = 1
        elif nav is SearchNav.PREVIOUS:
            self.direction = -1
        else:
            self.last_match = -1
            self.direction = 1

        self.match = None
        self.query = query
        if not query:
            return None

        if self.last_match == -1:
            self.direction = 1

        current = self.last_match
        for _ in range(document.numrows):
            current += self.direction
            if current == -1:
                current = document.numrows - 1
            elif current == document.numrows:
                current = 0
            line = document.lines[current]
            offset = line.render.find(query)
            if offset != -1:
                self.last_match = current
                self.match = SearchMatch(
                    row=current,
                    cx=rx_to_cx(line.chars, offset),
                    start=offset,
                    end=min(offset + len(query), len(line.render)),
                )
                return self.match

        logger.debug("No match for %r", query)
        return None

    def end(self, accepted: bool) -> Optional[tuple[Cursor, Viewport]]:
        """Finish the search.

        Returns:
            The cursor and viewport saved by begin() when the search was
            cancelled, so the caller can put them back; None otherwise.
        """
        saved = None
        if not accepted and self._saved_cursor is not None:
            saved = (self._saved_cursor, self._saved_viewport)
        self.match = None
        self.last_match = -1
        self.direction = 1
        self._saved_cursor = None
        self._saved_viewport = None
        return saved

    def highlight_for(self, row: int, line: Line) -> list[Highlight]:
        """Line classification with the current match painted over it."""
        if self.match is None or self.match.row != row:
            return line.highlight
        merged = list(line.highlight)
        for i in range(self.match.start, min(self.match.end, len(merged))):
            merged[i] = Highlight.MATCH
        return merged
