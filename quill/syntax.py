"""Per-line syntax classification driven by a file type profile."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional
import os


class Highlight(IntEnum):
    """Classification tag for one rendered character."""
    NORMAL = 0
    COMMENT = 1
    KEYWORD1 = 2
    KEYWORD2 = 3
    STRING = 4
    NUMBER = 5
    MATCH = 6


HL_HIGHLIGHT_NUMBERS = 1 << 0
HL_HIGHLIGHT_STRINGS = 1 << 1

# Keywords ending with this marker are secondary (types, builtins)
SECONDARY_MARKER = '|'

SEPARATORS = ",.()+-/*=~%<>[];"


@dataclass
class SyntaxProfile:
    """Highlighting rules for one file type."""
    filetype: str
    filematch: tuple[str, ...]
    keywords: tuple[str, ...]
    singleline_comment: Optional[str] = None
    flags: int = 0
    # (text, class) pairs, longest first; built from keywords
    _candidates: list[tuple[str, Highlight]] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self):
        candidates = []
        for kw in self.keywords:
            if kw.endswith(SECONDARY_MARKER):
                candidates.append((kw[:-1], Highlight.KEYWORD2))
            else:
                candidates.append((kw, Highlight.KEYWORD1))
        # sorted() is stable, so equal-length keywords keep their listed order
        self._candidates = sorted(candidates, key=lambda c: len(c[0]), reverse=True)

    @property
    def highlight_numbers(self) -> bool:
        return bool(self.flags & HL_HIGHLIGHT_NUMBERS)

    @property
    def highlight_strings(self) -> bool:
        return bool(self.flags & HL_HIGHLIGHT_STRINGS)

    def keyword_candidates(self) -> list[tuple[str, Highlight]]:
        return self._candidates


C_HL_EXTENSIONS = (".c", ".h", ".cpp")
C_HL_KEYWORDS = (
    "switch", "if", "while", "for", "break", "continue", "return",
    "else", "struct", "union", "typedef", "static", "enum", "class",
    "case",
    "int|", "long|", "double|", "float|", "char|", "unsigned|",
    "signed|", "void|",
)

PY_HL_EXTENSIONS = (".py", ".pyw")
PY_HL_KEYWORDS = (
    "and", "as", "assert", "async", "await", "break", "class", "continue",
    "def", "del", "elif", "else", "except", "finally", "for", "from",
    "global", "if", "import", "in", "is", "lambda", "nonlocal", "not",
    "or", "pass", "raise", "return", "try", "while", "with", "yield",
    "None|", "True|", "False|", "int|", "str|", "bytes|", "float|",
    "bool|", "list|", "dict|", "set|", "tuple|", "self|",
)

HLDB: tuple[SyntaxProfile, ...] = (
    SyntaxProfile(
        filetype="c",
        filematch=C_HL_EXTENSIONS,
        keywords=C_HL_KEYWORDS,
        singleline_comment="//",
        flags=HL_HIGHLIGHT_NUMBERS | HL_HIGHLIGHT_STRINGS,
    ),
    SyntaxProfile(
        filetype="python",
        filematch=PY_HL_EXTENSIONS,
        keywords=PY_HL_KEYWORDS,
        singleline_comment="#",
        flags=HL_HIGHLIGHT_NUMBERS | HL_HIGHLIGHT_STRINGS,
    ),
)


def is_separator(c: str) -> bool:
    """Return True for the characters that delimit keywords and numbers.

    The empty string stands for the end of the line.
    """
    return c == '' or c == '\0' or c.isspace() or c in SEPARATORS


def select_syntax(filename: Optional[str], database=HLDB) -> Optional[SyntaxProfile]:
    """Pick the profile matching a filename.

    Patterns starting with '.' must equal the filename's last extension;
    any other pattern matches anywhere in the filename.
    """
    if not filename:
        return None
    ext = os.path.splitext(filename)[1]
    for profile in database:
        for pattern in profile.filematch:
            if pattern.startswith('.'):
                if ext == pattern:
                    return profile
            elif pattern in filename:
                return profile
    return None


def update_syntax(render: str, profile: Optional[SyntaxProfile]) -> list[Highlight]:
    """Classify every character of a rendered line.

    Args:
        render: Tab-expanded line content
        profile: Active syntax profile, or None to disable highlighting

    Returns:
        A list the same length as render.
    """
    hl = [Highlight.NORMAL] * len(render)
    if profile is None:
        return hl

    scs = profile.singleline_comment
    candidates = profile.keyword_candidates()

    prev_sep = True
    in_string = ''
    i = 0
    n = len(render)
    while i < n:
        c = render[i]
        prev_hl = hl[i - 1] if i > 0 else Highlight.NORMAL

        if scs and not in_string and render.startswith(scs, i):
            for j in range(i, n):
                hl[j] = Highlight.COMMENT
            break

        if profile.highlight_strings:
            if in_string:
                hl[i] = Highlight.STRING
                if c == '\\' and i + 1 < n:
                    hl[i + 1] = Highlight.STRING
                    i += 2
                    continue
                if c == in_string:
                    in_string = ''
                i += 1
                prev_sep = True
                continue
            if c in ('"', "'"):
                in_string = c
                hl[i] = Highlight.STRING
                i += 1
                continue

        if profile.highlight_numbers:
            if ((c.isdigit() and (prev_sep or prev_hl == Highlight.NUMBER))
                    or (c == '.' and prev_hl == Highlight.NUMBER)):
                hl[i] = Highlight.NUMBER
                i += 1
                prev_sep = False
                continue

        if prev_sep:
            matched = None
            for text, kind in candidates:
                end = i + len(text)
                if render.startswith(text, i) and is_separator(render[end:end + 1]):
                    matched = (text, kind)
                    break
            if matched:
                text, kind = matched
                for j in range(i, i + len(text)):
                    hl[j] = kind
                i += len(text)
                prev_sep = False
                continue

        prev_sep = is_separator(c)
        i += 1

    return hl


# Colour per class, as blessed attribute names
_COLORS = {
    Highlight.COMMENT: 'cyan',
    Highlight.KEYWORD1: 'yellow',
    Highlight.KEYWORD2: 'green',
    Highlight.STRING: 'magenta',
    Highlight.NUMBER: 'red',
    Highlight.MATCH: 'blue',
}


def syntax_to_color(hl: Highlight) -> str:
    return _COLORS.get(hl, 'white')
