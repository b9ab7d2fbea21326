"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the document
        """


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Movement commands don't modify the document."""
        self._move(editor)
        return False

    @abstractmethod
    def _move(self, editor: 'Editor'):
        """Perform the movement."""


class LeftCharCommand(MovementCommand):
    def _move(self, editor):
        editor.cursor.left(editor.document)


class RightCharCommand(MovementCommand):
    def _move(self, editor):
        editor.cursor.right(editor.document)


class UpLineCommand(MovementCommand):
    def _move(self, editor):
        editor.cursor.up(editor.document)


class DownLineCommand(MovementCommand):
    def _move(self, editor):
        editor.cursor.down(editor.document)


class BeginningOfLineCommand(MovementCommand):
    def _move(self, editor):
        editor.cursor.home(editor.document)


class EndOfLineCommand(MovementCommand):
    def _move(self, editor):
        editor.cursor.end(editor.document)


class PageUpCommand(MovementCommand):
    def _move(self, editor):
        # Jump to the top of the screen, then a screenful further up
        editor.cursor.cy = editor.viewport.row_offset
        for _ in range(editor.viewport.screen_rows):
            editor.cursor.up(editor.document)


class PageDownCommand(MovementCommand):
    def _move(self, editor):
        cy = editor.viewport.row_offset + editor.viewport.screen_rows - 1
        editor.cursor.cy = min(cy, editor.document.numrows)
        for _ in range(editor.viewport.screen_rows):
            editor.cursor.down(editor.document)


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        dirty_before = editor.document.dirty
        self._edit(editor, key_event)
        return editor.document.dirty != dirty_before

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the edit."""


class InsertTextCommand(EditCommand):
    def _edit(self, editor, key_event):
        char = key_event.value
        # Filter out control characters
        if len(char) != 1 or (ord(char) < 32 and char != '\t'):
            return
        cursor = editor.cursor
        cursor.cx = editor.document.insert_char(cursor.cy, cursor.cx, char)


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        cursor = editor.cursor
        cursor.cy, cursor.cx = editor.document.split_line(cursor.cy, cursor.cx)


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        cursor = editor.cursor
        cursor.cy, cursor.cx = editor.document.backspace(cursor.cy, cursor.cx)


class DeleteForwardCommand(EditCommand):
    def _edit(self, editor, key_event):
        # Delete removes the character under the cursor: step right, then
        # erase to the left of the new position
        cursor = editor.cursor
        cursor.right(editor.document)
        cursor.cy, cursor.cx = editor.document.backspace(cursor.cy, cursor.cx)


class SystemCommand(EditorCommand):
    """Base class for system commands like save, quit, find."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """System commands don't modify document content directly."""
        self._execute_system(editor, key_event)
        return False

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""


class QuitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.request_quit()


class SaveCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.handle_save()


class FindCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.start_search()


class NoOpCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        pass


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        self.register((KeyType.SPECIAL, 'left'), LeftCharCommand())
        self.register((KeyType.SPECIAL, 'right'), RightCharCommand())
        self.register((KeyType.SPECIAL, 'up'), UpLineCommand())
        self.register((KeyType.SPECIAL, 'down'), DownLineCommand())
        self.register((KeyType.SPECIAL, 'home'), BeginningOfLineCommand())
        self.register((KeyType.SPECIAL, 'end'), EndOfLineCommand())
        self.register((KeyType.SPECIAL, 'page_up'), PageUpCommand())
        self.register((KeyType.SPECIAL, 'page_down'), PageDownCommand())

        # Editing commands
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), DeleteForwardCommand())

        # System commands
        self.register((KeyType.CTRL, 'q'), QuitCommand())
        self.register((KeyType.CTRL, 's'), SaveCommand())
        self.register((KeyType.CTRL, 'f'), FindCommand())
        self.register((KeyType.CTRL, 'l'), NoOpCommand())
        self.register((KeyType.SPECIAL, 'escape'), NoOpCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the document was modified
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command.execute(editor, key_event)

        # Handle regular text input
        if key_event.key_type == KeyType.REGULAR:
            return InsertTextCommand().execute(editor, key_event)

        return False
