"""Tests for logging setup and the logging notifier."""

import logging
import logging.handlers

import pytest

from src.logging_config import (
    CONSOLE_HANDLER_NAME,
    FILE_HANDLER_NAME,
    LOG_LEVEL_ENV,
    setup_logging,
)
from src.sport_manager.notifications import LoggingNotifier, Severity


@pytest.fixture
def root_logger(monkeypatch):
    """Root logger restored to its prior handlers and levels after the test."""
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    saved_levels = {name: logging.getLogger(name).level for name in ("urllib3", "requests")}
    yield root
    for handler in root.handlers:
        if handler.get_name() in (FILE_HANDLER_NAME, CONSOLE_HANDLER_NAME):
            handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)
    for name, level in saved_levels.items():
        logging.getLogger(name).setLevel(level)


def _own_handlers(root):
    return {
        h.get_name(): h
        for h in root.handlers
        if h.get_name() in (FILE_HANDLER_NAME, CONSOLE_HANDLER_NAME)
    }


class TestSetupLogging:
    def test_installs_file_and_console_handlers(self, tmp_path, root_logger):
        setup_logging("debug", log_dir=tmp_path / "logs")

        handlers = _own_handlers(root_logger)
        assert isinstance(handlers[FILE_HANDLER_NAME], logging.handlers.RotatingFileHandler)
        assert type(handlers[CONSOLE_HANDLER_NAME]) is logging.StreamHandler
        assert root_logger.level == logging.DEBUG
        assert (tmp_path / "logs" / "sport_matcher.log").exists()

    def test_foreign_handlers_do_not_block_setup(self, tmp_path, root_logger):
        root_logger.addHandler(logging.NullHandler())
        setup_logging(log_dir=tmp_path)
        assert FILE_HANDLER_NAME in _own_handlers(root_logger)

    def test_second_call_is_noop(self, tmp_path, root_logger):
        setup_logging(log_dir=tmp_path)
        first = _own_handlers(root_logger)
        setup_logging("debug", log_dir=tmp_path / "other")
        assert _own_handlers(root_logger) == first
        assert not (tmp_path / "other").exists()

    def test_level_from_environment(self, tmp_path, root_logger, monkeypatch):
        monkeypatch.setenv(LOG_LEVEL_ENV, "warning")
        setup_logging(log_dir=tmp_path)
        assert root_logger.level == logging.WARNING
        assert logging.getLogger("urllib3").level == logging.WARNING

    def test_messages_reach_log_file(self, tmp_path, root_logger):
        setup_logging("info", log_dir=tmp_path)
        logging.getLogger("src.sport_manager.sport_sync").warning("Sport %s out of sync", "rowing")
        _own_handlers(root_logger)[FILE_HANDLER_NAME].flush()
        assert "Sport rowing out of sync" in (tmp_path / "sport_matcher.log").read_text()


class TestLoggingNotifier:
    @pytest.mark.parametrize(
        "severity, level",
        [
            (Severity.SUCCESS, logging.INFO),
            (Severity.WARNING, logging.WARNING),
            (Severity.ERROR, logging.ERROR),
        ],
    )
    def test_maps_severity_to_level(self, caplog, severity, level):
        with caplog.at_level(logging.DEBUG, logger="src.sport_manager.notifications"):
            LoggingNotifier().notify("Sport judo deleted.", severity)
        record = caplog.records[-1]
        assert record.levelno == level
        assert "Sport judo deleted." in record.getMessage()
