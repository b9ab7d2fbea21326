"""quill CLI entry point.

Allows running via `python -m quill` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import argparse

from .log import setup_logging
from .version import get_version_string


def run_keyboard_test() -> None:
    """Print decoded key events until Escape is pressed."""
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler

    print("Keyboard test mode: press keys to see parsed events. Quit with ESC.")
    term = TerminalInterface()
    term.setup()
    kb = KeyboardHandler(term)
    try:
        while True:
            ev = kb.get_key_event(timeout=None)
            if not ev:
                continue
            if ev.is_special('escape'):
                break
            raw = ev.raw.encode('unicode_escape').decode('ascii')
            print(f"type={ev.key_type.value} value={ev.value!r} raw='{raw}'\r")
    finally:
        term.cleanup()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="quill", description="A small terminal text editor.")
    parser.add_argument("filename", nargs="?", help="file to open")
    parser.add_argument("-V", "--version", action="store_true", help="print version and exit")
    parser.add_argument("--keytest", action="store_true", help="show decoded key events")
    parser.add_argument("--log-level", help="write a log file at this level (e.g. DEBUG)")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    if args.version:
        print(get_version_string())
        return

    setup_logging(args.log_level)
    if args.keytest:
        run_keyboard_test()
        return

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    editor = Editor()
    if args.filename:
        editor.load_file(args.filename)
    editor.run()


if __name__ == "__main__":  # pragma: no cover
    main()
