"""Root pytest configuration for test discovery and auto-skip behavior.

All tests stay visible to the collector; tests that need Docker or a
human are auto-skipped unless explicitly enabled.

Test Structure:
    tests/
    ├── idlink/                # Identity reconciliation and credentials
    │   ├── unit/              # Fast, isolated tests (mocks only)
    │   ├── persistence/       # In-memory SQLite through the real runner
    │   └── integration/       # Testcontainers PostgreSQL
    ├── idlink_auth/           # Password hashing and session tokens
    ├── idlink_config/         # Settings loading
    └── shared/                # Shared fixtures

Environment Variables:
    RUN_INTEGRATION=1    Run @pytest.mark.integration tests
    RUN_MANUAL=1         Run @pytest.mark.manual tests
    RUN_ALL_TESTS=1      Run all tests (overrides other settings)

Pytest Options:
    --run-integration    Run integration tests
    --run-manual         Run manual tests
    --run-all            Run all tests
"""

import os

import pytest
from dotenv import load_dotenv

from idlink_config import clear_settings_cache, get_config_dir

# Integration runs pick up local credentials the same way development does
if (get_config_dir() / ".env.test").exists():
    load_dotenv(get_config_dir() / ".env.test")

_TRUTHY = ("1", "true", "yes")


def _flag(config, option: str, env_var: str) -> bool:
    return config.getoption(option) or os.environ.get(env_var, "").lower() in _TRUTHY


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run tests marked with @pytest.mark.integration",
    )
    parser.addoption(
        "--run-manual",
        action="store_true",
        default=False,
        help="Run tests marked with @pytest.mark.manual",
    )
    parser.addoption(
        "--run-all",
        action="store_true",
        default=False,
        help="Run all tests regardless of markers",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: Tests that need a PostgreSQL container (auto-skipped)",
    )
    config.addinivalue_line(
        "markers",
        "manual: Tests requiring manual intervention (auto-skipped)",
    )
    config.addinivalue_line(
        "markers",
        "slow: Tests that take more than 1 second",
    )


def pytest_collection_modifyitems(config, items):
    """Auto-skip tests based on markers unless explicitly enabled."""
    if _flag(config, "--run-all", "RUN_ALL_TESTS"):
        return

    run_integration = _flag(config, "--run-integration", "RUN_INTEGRATION")
    run_manual = _flag(config, "--run-manual", "RUN_MANUAL")

    skip_integration = pytest.mark.skip(
        reason="Integration test - run with --run-integration or RUN_INTEGRATION=1",
    )
    skip_manual = pytest.mark.skip(
        reason="Manual test - run with --run-manual or RUN_MANUAL=1",
    )

    for item in items:
        # Explicit markers only, not folder names
        item_markers = {mark.name for mark in item.iter_markers()}

        if not run_integration and "integration" in item_markers:
            item.add_marker(skip_integration)

        if not run_manual and "manual" in item_markers:
            item.add_marker(skip_manual)


@pytest.fixture(autouse=True)
def _fresh_settings_cache():
    """Keep cached Settings from leaking between tests."""
    clear_settings_cache()
    yield
    clear_settings_cache()
