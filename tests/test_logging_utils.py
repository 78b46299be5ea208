"""Tests for logging utilities."""

import logging
from unittest.mock import patch

import pytest

from session_planner.logging_utils import TRACE_LEVEL, configure_logging, get_logger


@pytest.mark.unit
class TestLoggingUtils:
    """Test trace level registration and logging configuration."""

    def test_get_logger_supports_trace(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("session_planner.test")

        with caplog.at_level(TRACE_LEVEL, logger="session_planner.test"):
            logger.trace("step %s", 1)  # type: ignore[attr-defined]

        assert logging.getLevelName(TRACE_LEVEL) == "TRACE"
        assert caplog.records[-1].levelno == TRACE_LEVEL
        assert caplog.records[-1].getMessage() == "step 1"

    def test_trace_is_filtered_above_trace_level(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("session_planner.quiet")

        with caplog.at_level(logging.DEBUG, logger="session_planner.quiet"):
            logger.trace("hidden")  # type: ignore[attr-defined]

        assert caplog.records == []

    @pytest.mark.parametrize(
        ("verbose", "trace", "level"),
        [(False, False, logging.INFO), (True, False, logging.DEBUG), (False, True, TRACE_LEVEL)],
    )
    def test_configure_logging_levels(self, verbose: bool, trace: bool, level: int) -> None:
        with patch("session_planner.logging_utils.logging.basicConfig") as mock_basic_config:
            configure_logging(verbose=verbose, trace=trace)

        assert mock_basic_config.call_args.kwargs["level"] == level
