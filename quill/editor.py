"""Main editor controller: key dispatch, prompts, file I/O and the event loop."""

import logging
import os
import select
import signal
import sys
import tempfile
import termios
import time
from dataclasses import replace
from typing import Optional

from .commands import CommandRegistry
from .constants import EditorConstants
from .keyboard import KeyboardHandler, KeyEvent
from .model import Document
from .prompt import Prompt, PromptMode, PromptResult
from .search import SearchNav, SearchSession
from .settings import Settings, get_settings
from .terminal import TerminalInterface
from .view import FrameRenderer
from .version import get_version
from .viewport import Cursor, Viewport, scroll

logger = logging.getLogger(__name__)


class Editor:
    """Text editor application controller.

    Holds the whole editing session: the document, the cursor, the viewport
    and whatever prompt is open. Every key is handled to completion before
    the next frame is drawn.
    """

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 settings: Optional[Settings] = None):
        """Initialize the editor components."""
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.renderer = FrameRenderer(self.terminal.term, version=get_version())
        self.settings = settings or get_settings()
        self.command_registry = CommandRegistry()

        self.document = Document()
        self.cursor = Cursor()
        self.viewport = Viewport.for_terminal(self.terminal.height, self.terminal.width)
        self.search = SearchSession()
        self.prompt = Prompt()

        self.status_message = ""
        self.status_time = 0.0
        self.quit_times = self.settings.quit_times
        self.running = False
        # Resize signaling pipe, open only while run() is active
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None

    # --- Geometry ---
    def update_window_size(self):
        """Resize the text area to the terminal, keeping scroll offsets."""
        self.viewport.resize(self.terminal.height, self.terminal.width)

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        if self._resize_pipe_w is not None:
            os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    # --- Status messages ---
    def set_status_message(self, fmt: str, *args):
        """Show a message in the message bar for a few seconds."""
        message = fmt % args if args else fmt
        self.status_message = message[:EditorConstants.STATUS_MESSAGE_MAX]
        self.status_time = time.monotonic()

    def current_message(self) -> str:
        """The message bar text: the open prompt, or a message that has not expired."""
        if self.prompt.active:
            return self.prompt.message()
        if self.status_message and time.monotonic() - self.status_time < self.settings.message_timeout:
            return self.status_message
        return ""

    # --- Drawing ---
    def scroll(self):
        self.viewport = scroll(self.cursor, self.document, self.viewport)

    def refresh_screen(self):
        """Scroll to the cursor and paint the next frame."""
        self.scroll()
        frame = self.renderer.compose(
            self.document, self.cursor, self.viewport,
            message=self.current_message(),
            search=self.search if self.search.active else None,
        )
        self.terminal.draw_frame(frame)

    # --- Key handling ---
    def handle_key_event(self, key_event: KeyEvent):
        """Handle a keyboard event.

        Args:
            key_event: KeyEvent object with parsed key information
        """
        if self.prompt.active:
            self._handle_prompt(key_event)
            return

        self.command_registry.execute(self, key_event)

        # Any key other than Ctrl-Q restarts the unsaved-changes countdown
        if not key_event.is_ctrl('q'):
            self.quit_times = self.settings.quit_times

    def request_quit(self):
        """Quit, or warn first when there are unsaved changes."""
        if self.document.dirty and self.quit_times > 0:
            self.set_status_message(EditorConstants.QUIT_WARNING.format(self.quit_times))
            self.quit_times -= 1
            return
        self.running = False

    def _open_prompt(self, mode: PromptMode, template: str):
        self.prompt = Prompt(mode, template)

    def _close_prompt(self):
        self.prompt = Prompt()

    def _handle_prompt(self, key_event: KeyEvent):
        result = self.prompt.feed(key_event)
        if self.prompt.mode is PromptMode.SAVE_AS:
            self._handle_save_as_prompt(result)
        elif self.prompt.mode is PromptMode.SEARCH:
            self._handle_search_prompt(key_event, result)

    # --- Saving ---
    def handle_save(self):
        """Handle Ctrl-S: save, asking for a filename first if there is none."""
        if self.document.filename:
            self.save_file(self.document.filename)
        else:
            self._open_prompt(PromptMode.SAVE_AS, EditorConstants.SAVE_AS_PROMPT)

    def _handle_save_as_prompt(self, result: PromptResult):
        if result is PromptResult.CANCELLED:
            self._close_prompt()
            self.set_status_message("Save aborted!")
        elif result is PromptResult.ACCEPTED:
            filename = self.prompt.text
            self._close_prompt()
            self.document.filename = filename
            self.document.select_syntax(filename)
            self.save_file(filename)

    # --- Searching ---
    def start_search(self):
        """Handle Ctrl-F: open the incremental search prompt."""
        self.search.begin(self.cursor, self.viewport)
        self._open_prompt(PromptMode.SEARCH, EditorConstants.SEARCH_PROMPT)

    def _handle_search_prompt(self, key_event: KeyEvent, result: PromptResult):
        if result is not PromptResult.EDITING:
            accepted = result is PromptResult.ACCEPTED
            saved = self.search.end(accepted)
            if saved is not None:
                # Only the scroll position comes back; the screen size is current
                self.cursor, saved_viewport = saved
                self.viewport = replace(self.viewport,
                                        row_offset=saved_viewport.row_offset,
                                        col_offset=saved_viewport.col_offset)
            self._close_prompt()
            self.set_status_message("")
            return

        if key_event.is_special('right', 'down'):
            nav = SearchNav.NEXT
        elif key_event.is_special('left', 'up'):
            nav = SearchNav.PREVIOUS
        else:
            nav = SearchNav.EDIT

        match = self.search.step(self.document, self.prompt.text, nav)
        if match is not None:
            self.cursor = Cursor(cx=match.cx, cy=match.row)
            # Past every row, so the next scroll brings the match to the top
            self.viewport = replace(self.viewport, row_offset=self.document.numrows)

    # --- File I/O ---
    def load_file(self, filename: str):
        """Load a file into the editor.

        Any error opening or reading the file, including a missing file,
        is fatal.

        Args:
            filename: Path to file to load
        """
        try:
            with open(filename, 'r', encoding='utf-8', errors='replace', newline='') as f:
                content = f.read()
        except OSError as e:
            logger.error("Cannot open %s: %s", filename, e)
            raise SystemExit(f"quill: cannot open {filename}: {e.strerror or e}") from e
        self.document = Document.from_text(content, filename=filename)
        logger.info("Loaded %s (%d lines)", filename, self.document.numrows)
        self.cursor = Cursor()
        self.viewport = replace(self.viewport, row_offset=0, col_offset=0)

    def save_file(self, filename: str) -> bool:
        """Save the current document to a file atomically.

        Args:
            filename: Path to save file to

        Returns:
            True if save succeeded, False otherwise
        """
        content = self.document.serialize()
        temp_filename = None
        try:
            # Temp file must share the target's directory for os.replace
            dir_name = os.path.dirname(filename) or '.'
            with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', newline='',
                                             dir=dir_name,
                                             suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(content)
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_filename, filename)
        except OSError as e:
            logger.warning("Saving %s failed: %s", filename, e)
            self.set_status_message("Can't save! I/O error: %s", e.strerror or str(e))
            if temp_filename and os.path.exists(temp_filename):
                try:
                    os.remove(temp_filename)
                except OSError:
                    pass
            return False

        self.document.mark_clean()
        size = len(content.encode('utf-8'))
        logger.info("Wrote %d bytes to %s", size, filename)
        self.set_status_message("%d bytes written to disk", size)
        return True

    # --- Event loop ---
    def _disable_flow_control(self):
        """Let Ctrl-S and Ctrl-Q through to the editor.

        Returns:
            The previous termios settings, or None if they could not be read.
        """
        try:
            old_settings = termios.tcgetattr(sys.stdin)
            new_settings = list(old_settings)
            new_settings[0] &= ~(termios.IXON | termios.IXOFF)
            termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
            return old_settings
        except (termios.error, OSError) as e:
            logger.debug("Could not change flow control: %s", e)
            return None

    def process_input(self):
        """Handle every key that is already available without blocking.

        Pasted text and bursts of keys are buffered by the terminal input
        layer, so it is drained before waiting on the file descriptor again.
        """
        key_event = self.keyboard.get_key_event(timeout=0)
        while key_event is not None and self.running:
            self.handle_key_event(key_event)
            key_event = self.keyboard.get_key_event(timeout=0)

    def run(self):
        """Run the main editor loop."""
        if self.terminal.height < EditorConstants.RESERVED_ROWS + 1 or self.terminal.width < 1:
            raise SystemExit("quill: terminal is too small")

        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        old_settings = None
        try:
            self.terminal.setup()
            old_settings = self._disable_flow_control()
            self.running = True
            self.set_status_message(EditorConstants.HELP_MESSAGE)

            while self.running:
                self.refresh_screen()

                # Wait for input on stdin or resize pipe
                ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

                if self._resize_pipe_r in ready:
                    os.read(self._resize_pipe_r, 1024)
                    self.update_window_size()
                if 0 in ready:
                    self.process_input()
        finally:
            if old_settings is not None:
                try:
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                except (termios.error, OSError):
                    pass
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self._resize_pipe_r = self._resize_pipe_w = None
            self.terminal.cleanup()
