"""
Pytest configuration and shared fixtures for CivisGrid tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

sample_vectors = _common.sample_vectors
make_order_message = _common.make_order_message
make_trade_message = _common.make_trade_message
make_subscription_message = _common.make_subscription_message


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def five_items():
    """The one-byte vectors [1]..[5]."""
    return sample_vectors(5)


@pytest.fixture
def five_item_tree(five_items):
    """Tree over [1]..[5]: [1,2,3,4,5] -> [12,34,5] -> [1234,5] -> root."""
    from core.merkle import build_merkle_tree
    return build_merkle_tree(five_items)


@pytest.fixture
def feed_lines():
    """A short JSON-lines capture: one ack, two orders, one trade."""
    return [
        make_subscription_message(),
        make_order_message(order_id=1, price="25000.5"),
        "",
        make_order_message(order_id=2, price="25001.0", event="order_changed"),
        make_trade_message(trade_id=7),
    ]


@pytest.fixture(autouse=True)
def _reset_default_config():
    """Drop the cached process-wide config between tests."""
    from core.config.runtime import set_default_config
    set_default_config(None)
    yield
    set_default_config(None)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
