"""Mapping between raw line content and its tab-expanded screen form.

A line is stored exactly as typed ("raw" columns, ``cx``) and displayed with
every tab expanded to the next tab stop ("render" columns, ``rx``).
"""

from .constants import EditorConstants

TAB_STOP = EditorConstants.TAB_STOP


def to_render(chars: str) -> str:
    """Expand tabs so each one ends on a multiple of TAB_STOP.

    Every other character passes through unchanged, one column each.
    """
    out = []
    col = 0
    for ch in chars:
        if ch == '\t':
            out.append(' ')
            col += 1
            while col % TAB_STOP != 0:
                out.append(' ')
                col += 1
        else:
            out.append(ch)
            col += 1
    return ''.join(out)


def cx_to_rx(chars: str, cx: int) -> int:
    """Convert a raw column to the render column it is drawn at.

    Args:
        chars: Raw line content
        cx: Raw column, 0..len(chars)

    Returns:
        The render column. Never decreases as cx grows.
    """
    rx = 0
    for ch in chars[:cx]:
        if ch == '\t':
            rx += (TAB_STOP - 1) - (rx % TAB_STOP)
        rx += 1
    return rx


def rx_to_cx(chars: str, rx: int) -> int:
    """Convert a render column back to a raw column.

    Returns the first raw column whose cumulative render width exceeds rx,
    so a render column that falls inside a tab's expansion maps to the
    column of that tab. A render column past the end of the line maps to
    len(chars).
    """
    cur_rx = 0
    for cx, ch in enumerate(chars):
        if ch == '\t':
            cur_rx += (TAB_STOP - 1) - (cur_rx % TAB_STOP)
        cur_rx += 1
        if cur_rx > rx:
            return cx
    return len(chars)
