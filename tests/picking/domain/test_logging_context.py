"""Tests for the log context helpers."""

import structlog
from picking.utils.logging import add_context, clear_context, get_log_level, get_logger, pick_context


class TestPickContext:
    def test_binds_session_inside_block_only(self):
        with pick_context(42, product_id="tomato"):
            bound = structlog.contextvars.get_contextvars()
            assert bound["session_id"] == "42"
            assert bound["product_id"] == "tomato"
        assert "session_id" not in structlog.contextvars.get_contextvars()

    def test_add_and_clear_context(self):
        add_context(picker_name="Ana")
        assert structlog.contextvars.get_contextvars()["picker_name"] == "Ana"
        clear_context()
        assert structlog.contextvars.get_contextvars() == {}


class TestLogLevel:
    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "error")
        assert get_log_level() == "ERROR"

    def test_level_follows_environment(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.setenv("PROTEAN_ENV", "production")
        assert get_log_level() == "INFO"
        monkeypatch.setenv("PROTEAN_ENV", "test")
        assert get_log_level() == "WARNING"


class TestGetLogger:
    def test_logger_accepts_keyword_context(self):
        logger = get_logger("picking.session.starting")
        assert hasattr(logger, "bind")
        assert logger.bind(session_id="42") is not None
