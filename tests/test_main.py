"""Tests for the command line entry point."""

import pytest

from quill import __main__ as cli
from quill.version import get_version


def test_parser_defaults():
    args = cli.build_parser().parse_args([])
    assert args.filename is None
    assert not args.version
    assert not args.keytest
    assert args.log_level is None


def test_parser_filename_and_options():
    args = cli.build_parser().parse_args(["--log-level", "DEBUG", "main.c"])
    assert args.filename == "main.c"
    assert args.log_level == "DEBUG"


def test_version_flag(capsys):
    cli.main(["--version"])
    out = capsys.readouterr().out
    assert out.startswith(f"quill {get_version()}")


def test_main_opens_file_and_runs(monkeypatch, tmp_path):
    calls = []

    class StubEditor:
        def load_file(self, filename):
            calls.append(("load", filename))

        def run(self):
            calls.append(("run",))

    monkeypatch.setattr("quill.editor.Editor", StubEditor)
    monkeypatch.setattr(cli, "setup_logging", lambda level: calls.append(("log", level)))
    cli.main(["--log-level", "INFO", str(tmp_path / "a.c")])
    assert calls == [("log", "INFO"), ("load", str(tmp_path / "a.c")), ("run",)]


def test_bad_option_exits():
    with pytest.raises(SystemExit):
        cli.main(["--no-such-option"])
