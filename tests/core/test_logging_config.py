"""Tests for logging setup."""

import logging

import pytest

from exchange_api.app.core.logging_config import setup_logging


@pytest.fixture
def bare_root(monkeypatch):
    """Return a helper that empties the root logger's handlers for one test.

    Handlers and level are restored afterwards.
    """
    root = logging.getLogger()
    level = root.level

    def _strip():
        monkeypatch.setattr(root, "handlers", [])
        return root

    yield _strip

    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler):
            handler.close()
    root.setLevel(level)


class TestSetupLogging:
    """Test setup_logging."""

    def test_console_and_file_handlers(self, bare_root, tmp_path):
        root = bare_root()
        logfile = tmp_path / "logs" / "exchange.log"

        setup_logging("debug", str(logfile))
        logging.getLogger("exchange_api.test").info("stage changed")

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
        for handler in root.handlers:
            handler.flush()
        assert "[INFO] exchange_api.test: stage changed" in logfile.read_text(encoding="utf-8")

    def test_unknown_level_falls_back_to_info(self, bare_root):
        root = bare_root()

        setup_logging("chatty")

        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_configures_once(self, bare_root):
        root = bare_root()

        setup_logging("INFO")
        setup_logging("DEBUG")

        assert root.level == logging.INFO
        assert len(root.handlers) == 1
