"""
Shared pytest configuration and fixtures for the ABI JSON serializer tests.

Keeps log files out of the project tree and provides common sample trees.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from config.loader import ConfigLoader
from shared.types import ElementaryKind, ValueNode
from tests.factories import elem, tup

# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True, scope="session")
def isolated_log_dir(tmp_path_factory):
    """Route all module log files into a temporary directory."""
    log_dir = tmp_path_factory.mktemp("logs")
    with patch("serializer_logging.logger_manager._LOG_DIR", str(log_dir)):
        yield log_dir


# ---------------------------------------------------------------------------
# Config loader singleton
# ---------------------------------------------------------------------------


@pytest.fixture
def reset_config_singleton():
    """Reset the ConfigLoader singleton around a test."""
    ConfigLoader._instance = None
    yield
    ConfigLoader._instance = None


# ---------------------------------------------------------------------------
# Sample trees
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_tuple() -> ValueNode:
    """Tuple with one named and one unnamed field: (uint256 a, uint8)."""
    return tup(
        [
            elem(ElementaryKind.UINT, 1, name="a", type_string="uint256"),
            elem(ElementaryKind.UINT, 2, type_string="uint8"),
        ]
    )
