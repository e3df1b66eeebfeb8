"""Tests for structured logging helpers."""

import logging

import pytest

from ragchat.observability.log_utils import log_exception_with_context, safe_log_value


class TestSafeLogValue:
    """Tests for safe_log_value()."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, "None"),
            ("short", "short"),
            ([0.1] * 1536, "list(1536 items)"),
            ((1, 2), "tuple(2 items)"),
            ({"a": 1}, "dict(1 keys)"),
            (42, "42"),
        ],
    )
    def test_safe_log_value_should_summarize(self, value, expected: str) -> None:
        assert safe_log_value(value) == expected

    def test_safe_log_value_should_truncate_long_strings(self) -> None:
        result = safe_log_value("x" * 300, max_length=10)

        assert result == "x" * 10 + "... (truncated, 300 total)"

    def test_safe_log_value_should_survive_broken_str(self) -> None:
        class Broken:
            def __str__(self) -> str:
                raise RuntimeError("boom")

        assert safe_log_value(Broken()) == "<unable to log: RuntimeError>"


class TestLogExceptionWithContext:
    """Tests for log_exception_with_context()."""

    def test_should_log_error_type_and_context(self, caplog: pytest.LogCaptureFixture) -> None:
        # Arrange
        logger = logging.getLogger("ragchat.test")

        # Act
        with caplog.at_level(logging.WARNING, logger="ragchat.test"):
            log_exception_with_context(
                logger,
                "Retrieval failed",
                ValueError("bad vector"),
                level=logging.WARNING,
                embedding=[0.0] * 1536,
            )

        # Assert
        record = caplog.records[0]
        assert record.levelno == logging.WARNING
        assert record.error_type == "ValueError"
        assert record.error_msg == "bad vector"
        assert record.embedding == "list(1536 items)"
        assert record.exc_info is not None
