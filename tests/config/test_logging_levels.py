# topmark:header:start
#
#   project      : TreeShift
#   file         : test_logging_levels.py
#   file_relpath : tests/config/test_logging_levels.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the TRACE level and environment-driven log level resolution."""

from __future__ import annotations

import logging as std_logging

import pytest

from tests.conftest import parametrize
from treeshift.config import logging


@parametrize(
    ("raw", "expected"),
    [
        ("TRACE", logging.TRACE_LEVEL),
        ("debug", std_logging.DEBUG),
        (" warn ", std_logging.WARNING),
        ("10", 10),
        ("bogus", None),
    ],
)
def test_resolve_env_log_level(monkeypatch: pytest.MonkeyPatch, raw: str, expected: int | None) -> None:
    monkeypatch.setenv(logging.LOG_LEVEL_ENV_VAR, raw)

    assert logging.resolve_env_log_level() == expected


def test_unset_env_resolves_to_none() -> None:
    assert logging.resolve_env_log_level() is None


def test_trace_is_below_debug_and_named() -> None:
    assert logging.TRACE_LEVEL < std_logging.DEBUG
    assert std_logging.getLevelName(logging.TRACE_LEVEL) == "TRACE"


def test_get_logger_supports_trace(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.get_logger("treeshift.tests.trace")

    with caplog.at_level(logging.TRACE_LEVEL, logger="treeshift.tests.trace"):
        logger.trace("walking %s", "root")

    assert [(r.levelname, r.getMessage()) for r in caplog.records] == [("TRACE", "walking root")]
