"""Line-editing prompt shown in the message bar."""

from enum import Enum

from .keyboard import KeyEvent, KeyType


class PromptMode(Enum):
    """What the message-bar prompt is currently collecting."""
    NONE = "none"
    SAVE_AS = "save_as"
    SEARCH = "search"


class PromptResult(Enum):
    EDITING = "editing"
    ACCEPTED = "accepted"
    CANCELLED = "cancelled"


class Prompt:
    """Text typed into the message-bar prompt.

    Accepts printable ASCII; Backspace/Delete erase the last character,
    Escape cancels and Enter accepts a non-empty input.
    """

    def __init__(self, mode: PromptMode = PromptMode.NONE, template: str = "{}"):
        self.mode = mode
        self.template = template
        self.text = ""

    @property
    def active(self) -> bool:
        return self.mode is not PromptMode.NONE

    def message(self) -> str:
        return self.template.format(self.text)

    def feed(self, key_event: KeyEvent) -> PromptResult:
        if key_event.is_special('backspace', 'delete'):
            self.text = self.text[:-1]
        elif key_event.is_special('escape'):
            return PromptResult.CANCELLED
        elif key_event.is_special('enter'):
            if self.text:
                return PromptResult.ACCEPTED
        elif key_event.key_type == KeyType.REGULAR:
            ch = key_event.value
            if len(ch) == 1 and 32 <= ord(ch) < 127:
                self.text += ch
        return PromptResult.EDITING
