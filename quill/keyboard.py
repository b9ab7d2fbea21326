"""Keyboard input decoding from curtsies key names."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from curtsies.events import PasteEvent

logger = logging.getLogger(__name__)


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"  # Printable character (or tab)
    CTRL = "ctrl"  # Ctrl-<letter>
    SPECIAL = "special"  # Named key: arrows, home, enter, ...


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The character, control letter, or special key name
    raw: str  # The key string as delivered by curtsies

    def is_special(self, *names: str) -> bool:
        return self.key_type == KeyType.SPECIAL and self.value in names

    def is_ctrl(self, letter: str) -> bool:
        return self.key_type == KeyType.CTRL and self.value == letter


SPECIAL_KEYS = {
    'left': 'left', 'right': 'right', 'up': 'up', 'down': 'down',
    'home': 'home', 'end': 'end',
    'pageup': 'page_up', 'page_up': 'page_up',
    'pagedown': 'page_down', 'page_down': 'page_down',
    'delete': 'delete', 'backspace': 'backspace',
    'enter': 'enter', 'return': 'enter',
    'esc': 'escape', 'escape': 'escape',
}

WHITESPACE_KEYS = {'space': ' ', 'tab': '\t'}


class KeyboardHandler:
    """Turns terminal keypresses into KeyEvents, one per call."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface
        # Keys from a paste not yet handed out
        self._pending: list[KeyEvent] = []

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get the next key event, or None if no key arrived in time.

        A paste arrives as a single curtsies PasteEvent; its keys are
        queued and returned one at a time.
        """
        while not self._pending:
            key = self.terminal.get_key(timeout)
            if not key:
                return None
            if isinstance(key, PasteEvent):
                self._pending.extend(self.parse_key(k) for k in key.events)
            elif isinstance(key, str):
                return self.parse_key(key)
            else:
                logger.debug("Ignoring input event %r", key)
        return self._pending.pop(0)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies key name (e.g. '<LEFT>', '<Ctrl-f>') or a raw character."""
        key_str = str(key)

        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            name = key_str[1:-1].lower().replace('+', '-')
            mods, _, base = name.rpartition('-')
            if mods == 'ctrl' and len(base) == 1:
                return self._ctrl(base, key_str)
            if not mods and base in WHITESPACE_KEYS:
                return KeyEvent(KeyType.REGULAR, WHITESPACE_KEYS[base], key_str)
            if not mods and base in SPECIAL_KEYS:
                return KeyEvent(KeyType.SPECIAL, SPECIAL_KEYS[base], key_str)
            # Unknown names (function keys, Alt combinations) are passed on
            # as specials so nothing inserts them as text
            return KeyEvent(KeyType.SPECIAL, name, key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            if key_str in ('\r', '\n'):
                return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
            if key_str == '\t':
                return KeyEvent(KeyType.REGULAR, '\t', key_str)
            if key_str == '\x1b':
                return KeyEvent(KeyType.SPECIAL, 'escape', key_str)
            if o in (8, 127):
                return KeyEvent(KeyType.SPECIAL, 'backspace', key_str)
            if 1 <= o <= 26:
                return self._ctrl(chr(ord('a') + o - 1), key_str)

        return KeyEvent(KeyType.REGULAR, key_str, key_str)

    @staticmethod
    def _ctrl(letter: str, raw: str) -> KeyEvent:
        # Ctrl-J / Ctrl-M are what terminals send for Enter, Ctrl-H for Backspace
        if letter in ('j', 'm'):
            return KeyEvent(KeyType.SPECIAL, 'enter', raw)
        if letter == 'h':
            return KeyEvent(KeyType.SPECIAL, 'backspace', raw)
        return KeyEvent(KeyType.CTRL, letter, raw)
