"""Tests for ViewerConfig and logging setup."""

import logging

import pytest

from changelens.config import DEFAULT_DB_URL, ViewerConfig, setup_logging

_ENV_VARS = (
    "CHANGELENS_DB_URL",
    "CHANGELENS_API_TOKEN",
    "CHANGELENS_TIMEOUT",
    "CHANGELENS_CANCEL_KEY",
    "CHANGELENS_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestViewerConfig:
    def test_defaults(self):
        config = ViewerConfig.from_env()
        assert config.db_url == DEFAULT_DB_URL
        assert config.api_token is None
        assert config.request_timeout == 10.0
        assert config.cancel_key == "Escape"
        assert config.log_level == "WARNING"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("CHANGELENS_DB_URL", "https://db.example.org")
        monkeypatch.setenv("CHANGELENS_API_TOKEN", "secret")
        monkeypatch.setenv("CHANGELENS_TIMEOUT", "2.5")
        monkeypatch.setenv("CHANGELENS_CANCEL_KEY", "q")
        monkeypatch.setenv("CHANGELENS_LOG_LEVEL", "debug")

        config = ViewerConfig.from_env()

        assert config.db_url == "https://db.example.org"
        assert config.api_token == "secret"
        assert config.request_timeout == 2.5
        assert config.cancel_key == "q"
        assert config.log_level == "DEBUG"

    def test_empty_token_is_none(self, monkeypatch):
        monkeypatch.setenv("CHANGELENS_API_TOKEN", "")
        assert ViewerConfig.from_env().api_token is None

    @pytest.mark.parametrize("value", ["soon", "0", "-1"])
    def test_invalid_timeout(self, monkeypatch, value):
        monkeypatch.setenv("CHANGELENS_TIMEOUT", value)
        with pytest.raises(ValueError):
            ViewerConfig.from_env()


class TestSetupLogging:
    def test_handler_added_once(self):
        logger = logging.getLogger("changelens")
        before = list(logger.handlers)
        try:
            setup_logging("INFO")
            setup_logging("DEBUG")
            stream_handlers = [h for h in logger.handlers if isinstance(h, logging.StreamHandler)]
            assert len(stream_handlers) == 1
            assert logger.level == logging.DEBUG
        finally:
            logger.handlers = before
            logger.setLevel(logging.NOTSET)
