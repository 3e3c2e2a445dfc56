"""
Pytest fixtures for the currencies kernel test suite.

Provides:
- Structured logging configured for every test session
- Log capture as parsed JSON records
- Amount classes for the currencies most tests use
- A scratch directory of currency sets
"""

import json
import logging
from io import StringIO
from pathlib import Path

import pytest

from currencies_kernel import Amount, Checked
from currencies_kernel.domain.currency import DOT, ETH, USD
from currencies_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)

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
    Capture currencies_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            Amount[USD].parse("oops")
            logs = captured_logs()
            assert any(r["message"] == "amount_parse_failed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("currencies_kernel")
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
# Amount classes
# =============================================================================


@pytest.fixture
def usd():
    return Amount[USD]


@pytest.fixture
def usd_checked():
    return Amount[USD, Checked]


@pytest.fixture
def eth():
    return Amount[ETH]


@pytest.fixture
def dot():
    return Amount[DOT]


# =============================================================================
# Currency sets
# =============================================================================


@pytest.fixture
def sets_dir(tmp_path: Path):
    """
    Factory writing a currency set YAML under a temporary sets directory.

    Usage::

        def test_x(sets_dir):
            root = sets_dir("mine", "set_id: mine\\nversion: 1\\n...")
            get_currency_set("mine", config_dir=root)
    """

    def _write(name: str, content: str, pin: str | None = None) -> Path:
        set_dir = tmp_path / name
        set_dir.mkdir(parents=True, exist_ok=True)
        (set_dir / "currencies.yaml").write_text(content, encoding="utf-8")
        if pin is not None:
            (set_dir / "APPROVED_FINGERPRINT").write_text(pin + "\n")
        return tmp_path

    return _write
