"""Tests for log file setup."""

import logging

import pytest

from quill.log import LOG_ENV_VAR, logger, setup_logging


@pytest.fixture(autouse=True)
def reset_logger(monkeypatch):
    monkeypatch.delenv(LOG_ENV_VAR, raising=False)
    yield
    setup_logging()


def test_disabled_by_default(tmp_path):
    assert setup_logging(log_dir=tmp_path) is None
    assert [type(h) for h in logger.handlers] == [logging.NullHandler]
    assert not list(tmp_path.iterdir())


def test_level_writes_log_file(tmp_path):
    path = setup_logging("debug", log_dir=tmp_path / "logs")
    assert path == tmp_path / "logs" / "quill.log"
    logging.getLogger("quill.editor").debug("hello from the editor")
    for handler in logger.handlers:
        handler.flush()
    assert "DEBUG quill.editor: hello from the editor" in path.read_text()


def test_environment_variable(tmp_path, monkeypatch):
    monkeypatch.setenv(LOG_ENV_VAR, "INFO")
    path = setup_logging(log_dir=tmp_path)
    assert path is not None
    assert logger.level == logging.INFO


def test_repeated_setup_replaces_handlers(tmp_path):
    setup_logging("INFO", log_dir=tmp_path)
    setup_logging("INFO", log_dir=tmp_path)
    assert len(logger.handlers) == 1


def test_unknown_level(tmp_path):
    with pytest.raises(ValueError):
        setup_logging("chatty", log_dir=tmp_path)
