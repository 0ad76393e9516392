"""
Pytest fixtures for the account kernel test suite.

Provides:
- Structured logging configured for every test, with captured output
- A fixed "now" so date arithmetic in tests is deterministic
- Ready-made open and closed accounts
"""

import json
import logging
from datetime import datetime, timezone
from io import StringIO

import pytest

from account_kernel.domain.account import Account, close_time, new_account
from account_kernel.domain.values import CurrencyCode
from account_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)

FIXED_NOW = datetime(2024, 6, 15, 9, 30, 0, 123456, tzinfo=timezone.utc)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture account_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            new_account("Current", "EUR", now)
            logs = captured_logs()
            assert any(r["message"] == "account_created" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("account_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def eur() -> CurrencyCode:
    return CurrencyCode("EUR")


@pytest.fixture
def open_account(now, eur) -> Account:
    """An open account that started at ``now``."""
    return new_account("Test Account", eur, now)


@pytest.fixture
def closed_account(now, eur) -> Account:
    """An account open from ``now`` and closed one year later."""
    return new_account("Test Account", eur, now, close_time(now.replace(year=now.year + 1)))
