"""
Pytest fixtures for the fieldmap test suite.

Provides:
- Structured logging setup and a JSON log capture fixture
- A schema registry loaded from the bundled CRM entity definitions
- A FieldAssigner over that registry
"""

import json
import logging
from io import StringIO

import pytest

from fieldmap_config import load_default_schema
from fieldmap_ingestion.mapping.assigner import FieldAssigner
from fieldmap_kernel.logging_config import (
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
    Capture fieldmap_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, assigner):
            assigner.assign(record, "x", "Account", "Name")
            logs = captured_logs()
            assert any(r["message"] == "field_assigned" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("fieldmap_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


@pytest.fixture
def diagnostics(captured_logs):
    """WARNING-and-above records only: the diagnostics a caller would see."""

    def _get() -> list[dict]:
        return [r for r in captured_logs() if r["level"] in ("WARNING", "ERROR")]

    return _get


# =============================================================================
# Schema fixtures
# =============================================================================


@pytest.fixture
def crm_schema():
    """Registry built from the bundled CRM entity definitions."""
    return load_default_schema()


@pytest.fixture
def assigner(crm_schema):
    return FieldAssigner(crm_schema)
