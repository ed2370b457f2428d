"""
Unit tests for the structured logging subsystem.
"""

import json
import logging

import pytest

from roster.core.logging import (
    LogContext,
    clear_log_context,
    get_log_context,
    set_log_context,
    setup_logging,
    shutdown_logging,
)
from roster.core.logging.logger import ContextFilter, JSONFormatter


def _record(message="Character created", **extra):
    record = logging.LogRecord(
        name="roster.modules.character.service",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def _clean_context():
    clear_log_context()
    yield
    clear_log_context()


@pytest.mark.unit
class TestLogContext:
    """Test ContextVar-backed log context."""

    def test_context_is_bound_inside_block_only(self):
        with LogContext(component="character_service", operation="level_up_character"):
            context = get_log_context()
            assert context["operation"] == "level_up_character"
            assert context["correlation_id"]

        assert get_log_context() == {}

    def test_nested_context_inherits_correlation_id(self):
        with LogContext(operation="outer", correlation_id="abc12345"):
            with LogContext(operation="inner", character="Rex"):
                context = get_log_context()

        assert context["correlation_id"] == "abc12345"
        assert context["operation"] == "inner"
        assert context["character"] == "Rex"

    async def test_async_context_manager(self):
        async with LogContext(operation="async_op"):
            assert get_log_context()["operation"] == "async_op"

        assert get_log_context() == {}

    def test_set_log_context(self):
        set_log_context(component="roster", request="r-1")

        assert get_log_context() == {"component": "roster", "request": "r-1"}


@pytest.mark.unit
class TestContextFilter:
    """Test record enrichment."""

    def test_filter_adds_context_fields(self):
        record = _record()

        with LogContext(component="character_service", operation="create_character", character="Rex"):
            assert ContextFilter().filter(record) is True

        assert record.component == "character_service"
        assert record.operation == "create_character"
        assert record.character == "Rex"

    def test_filter_defaults_without_context(self):
        record = _record()

        ContextFilter().filter(record)

        assert record.correlation_id == "N/A"
        assert record.component == "roster"
        assert record.operation == "N/A"


@pytest.mark.unit
class TestJSONFormatter:
    """Test JSON rendering."""

    def test_formats_message_context_and_extra(self):
        # Arrange
        record = _record(character_name="Rex", level=95)
        with LogContext(operation="create_character", correlation_id="cid00001"):
            ContextFilter().filter(record)

        # Act
        data = json.loads(JSONFormatter().format(record))

        # Assert
        assert data["message"] == "Character created"
        assert data["level"] == "INFO"
        assert data["logger"] == "roster.modules.character.service"
        assert data["operation"] == "create_character"
        assert data["correlation_id"] == "cid00001"
        assert data["extra"]["character_name"] == "Rex"
        assert data["extra"]["level"] == 95

    def test_unserializable_extra_is_stringified(self):
        record = _record(payload={"level": object()})

        data = json.loads(JSONFormatter().format(record))

        assert isinstance(data["extra"]["payload"]["level"], str)


@pytest.mark.unit
class TestSetupLogging:
    """Test logging lifecycle."""

    def test_setup_is_idempotent_and_shutdown_detaches(self):
        root = logging.getLogger()
        before = list(root.handlers)

        setup_logging()
        installed = [h for h in root.handlers if h not in before]
        setup_logging()

        try:
            assert len(installed) == 1
            assert [h for h in root.handlers if h not in before] == installed
            assert any(isinstance(f, ContextFilter) for f in installed[0].filters)
        finally:
            shutdown_logging()

        assert root.handlers == before
