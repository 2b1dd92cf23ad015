"""Shared pytest configuration."""

import pytest

from depgraph.log_config import configure_logging


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    """Only show warnings and errors from graph modules during the test run."""
    configure_logging(level="WARNING", json_logs=False)
