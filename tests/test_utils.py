"""Tests for logging and configuration helpers."""

import logging

import pytest
from rich.logging import RichHandler

from blogwire.config import Settings
from blogwire.utils.logging import LOG_FILE_NAME, LogContext, get_logger, setup_logging


class TestLogging:
    @pytest.fixture(autouse=True)
    def _reset_handlers(self):
        yield
        logger = logging.getLogger("blogwire")
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    def test_get_logger_namespaces(self):
        assert get_logger("client").name == "blogwire.client"
        assert get_logger("blogwire.client").name == "blogwire.client"
        assert get_logger().name == "blogwire"

    def test_setup_logging_console_only_by_default(self, tmp_path):
        logger = setup_logging(Settings(data_dir=tmp_path, log_level="warning"))

        assert [type(h) for h in logger.handlers] == [RichHandler]
        assert logger.level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING
        assert not (tmp_path / "logs").exists()

    def test_setup_logging_writes_file_under_logs_dir(self, tmp_path):
        settings = Settings(data_dir=tmp_path, log_to_file=True)
        logger = setup_logging(settings, logging.DEBUG)

        assert any(isinstance(h, logging.FileHandler) for h in logger.handlers)
        get_logger("tests").debug("written")
        assert "written" in (settings.logs_dir / LOG_FILE_NAME).read_text()

    def test_setup_logging_rejects_unknown_level(self, tmp_path):
        with pytest.raises(ValueError):
            setup_logging(Settings(data_dir=tmp_path), "loud")

    def test_log_context_times_the_call(self, caplog):
        caplog.set_level(logging.DEBUG, logger="blogwire")

        with LogContext(get_logger("tests"), "metaWeblog.getPost", 3) as context:
            pass

        assert context.elapsed is not None and context.elapsed >= 0
        assert "Starting: metaWeblog.getPost #3" in caplog.text
        assert "Completed: metaWeblog.getPost #3 in" in caplog.text

    def test_log_context_does_not_swallow(self, caplog):
        logger = get_logger("tests")
        caplog.set_level(logging.DEBUG, logger="blogwire")

        with pytest.raises(ValueError):
            with LogContext(logger, "step"):
                raise ValueError("bad")

        assert "Failed: step after" in caplog.text
        assert caplog.records[-1].levelno == logging.WARNING
        assert caplog.text.rstrip().endswith("- bad")


class TestSettings:
    def test_defaults(self, tmp_path):
        settings = Settings(data_dir=tmp_path)
        assert settings.auth_ttl_seconds == 600
        assert settings.categories_dir == tmp_path / "categories"

    def test_environment_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("BLOGWIRE_REQUEST_TIMEOUT", "5")
        monkeypatch.setenv("BLOGWIRE_AUTH_TTL_SECONDS", "30")
        settings = Settings(data_dir=tmp_path)
        assert settings.request_timeout == 5.0
        assert settings.auth_ttl_seconds == 30

    def test_ensure_directories(self, tmp_path):
        settings = Settings(data_dir=tmp_path / "data")
        settings.ensure_directories()
        assert settings.categories_dir.is_dir()
        assert settings.logs_dir.is_dir()
