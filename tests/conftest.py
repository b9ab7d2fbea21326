"""Shared fixtures: a fake blessed terminal and an editor wired to it."""

import pytest

from quill.editor import Editor
from quill.keyboard import KeyEvent, KeyType
from quill.settings import Settings


class FakeTerm:
    """Stands in for blessed.Terminal; every style is a visible marker like '<yellow>'."""

    def __init__(self, width=80, height=24):
        self.width = width
        self.height = height

    def __getattr__(self, name):
        if name.startswith('_'):
            raise AttributeError(name)
        return f"<{name}>"

    def move(self, y, x):
        return f"<move {y},{x}>"


class FakeTerminal:
    """Minimal TerminalInterface replacement recording drawn frames."""

    def __init__(self, width=80, height=24):
        self.term = FakeTerm(width, height)
        self.frames = []
        self.keys = []

    def setup(self):
        pass

    def cleanup(self):
        pass

    def draw_frame(self, frame):
        self.frames.append(frame)

    def get_key(self, timeout=None):
        return self.keys.pop(0) if self.keys else None

    @property
    def width(self):
        return self.term.width

    @property
    def height(self):
        return self.term.height


@pytest.fixture
def fake_term():
    return FakeTerm()


@pytest.fixture
def settings(tmp_path):
    return Settings(config_dir=tmp_path / "config")


@pytest.fixture
def editor(settings):
    return Editor(terminal=FakeTerminal(), settings=settings)


def key(value, key_type=KeyType.REGULAR):
    return KeyEvent(key_type=key_type, value=value, raw=value)


def special(name):
    return KeyEvent(key_type=KeyType.SPECIAL, value=name, raw=f"<{name.upper()}>")


def ctrl(letter):
    return KeyEvent(key_type=KeyType.CTRL, value=letter, raw=f"<Ctrl-{letter}>")


def type_text(ed, text):
    for ch in text:
        ed.handle_key_event(key(ch))
