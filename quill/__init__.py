"""quill - a small terminal text editor."""

from .model import Document, Line
from .search import SearchSession
from .syntax import Highlight, SyntaxProfile
from .view import FrameRenderer
from .viewport import Cursor, Viewport

__all__ = [
    'Document',
    'Line',
    'Highlight',
    'SyntaxProfile',
    'Cursor',
    'Viewport',
    'FrameRenderer',
    'SearchSession',
]
