# topmark:header:start
#
#   project      : WheelCI
#   file         : test_logging_setup.py
#   file_relpath : tests/config/test_logging_setup.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the TRACE-aware logging helpers."""

from __future__ import annotations

import logging

import pytest

from tests.conftest import parametrize
from wheelci.config.logging import (
    TRACE_LEVEL,
    ChalkFormatter,
    WheelciLogger,
    get_logger,
    resolve_env_log_level,
    setup_logging,
)


@parametrize(
    "value, expected",
    [("TRACE", TRACE_LEVEL), ("debug", logging.DEBUG), (" warn ", logging.WARNING), ("20", 20), ("bogus", None)],
)
def test_resolve_env_log_level(monkeypatch: pytest.MonkeyPatch, value: str, expected: int | None) -> None:
    """Names and numbers are accepted; unknown names are ignored."""
    monkeypatch.setenv("WHEELCI_LOG_LEVEL", value)
    assert resolve_env_log_level() == expected


def test_resolve_env_log_level_unset() -> None:
    """The autouse fixture clears the variable."""
    assert resolve_env_log_level() is None


def test_module_loggers_support_trace(caplog: pytest.LogCaptureFixture) -> None:
    """Package loggers are WheelciLogger instances with a trace method."""
    logger: WheelciLogger = get_logger("wheelci.tests.trace")
    assert isinstance(logger, WheelciLogger)
    caplog.set_level(TRACE_LEVEL, logger="wheelci.tests.trace")
    logger.trace("expanded %s", "platforms")
    assert "expanded platforms" in caplog.text
    assert caplog.records[-1].levelname == "TRACE"


def test_setup_logging_installs_a_single_chalk_handler() -> None:
    """Repeated setup does not stack handlers."""
    setup_logging(logging.INFO)
    setup_logging(logging.INFO)
    root: logging.Logger = logging.getLogger()
    chalk_handlers = [h for h in root.handlers if isinstance(h.formatter, ChalkFormatter)]
    assert len(chalk_handlers) == 1
    assert root.level == logging.INFO
    setup_logging(TRACE_LEVEL)
