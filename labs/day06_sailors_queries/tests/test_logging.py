"""
Tests for logging setup and run context binding.
"""

import json

import pytest
import structlog
from day06_sailors_queries.src.utils.logging_config import (
    get_logger,
    log_context,
    resolve_level,
    setup_logging,
)


@pytest.fixture
def structured_logging():
    setup_logging("INFO", structured=True)
    yield
    structlog.reset_defaults()


class TestResolveLevel:
    """Test log level resolution"""

    def test_explicit_level(self):
        assert resolve_level("debug") == "DEBUG"

    def test_uninterpolated_placeholder_uses_env(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")

        assert resolve_level("${LOG_LEVEL}") == "WARNING"

    def test_default(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        assert resolve_level(None) == "INFO"


class TestLogContext:
    """Test contextvar binding"""

    def test_binds_only_inside_block(self):
        with log_context(technique="join"):
            with log_context(query="q2"):
                assert structlog.contextvars.get_contextvars() == {
                    "technique": "join",
                    "query": "q2",
                }
            assert structlog.contextvars.get_contextvars() == {"technique": "join"}

        assert structlog.contextvars.get_contextvars() == {}

    def test_events_carry_context(self, structured_logging, capsys):
        with log_context(technique="composite_key"):
            get_logger("runner").info("query_completed", query="q1", rows=3)

        event = json.loads(capsys.readouterr().out.strip().splitlines()[-1])

        assert event["event"] == "query_completed"
        assert event["technique"] == "composite_key"
        assert event["module"] == "runner"
        assert event["level"] == "info"

    def test_filters_below_level(self, capsys):
        setup_logging("WARNING", structured=True)
        try:
            get_logger().info("hidden")
            get_logger().warning("shown")
        finally:
            structlog.reset_defaults()

        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "shown" in out
