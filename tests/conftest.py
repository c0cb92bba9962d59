"""Pytest configuration and shared fixtures."""

import os
from pathlib import Path

import pytest

from docsearch_e2e.core.config import ENV_OVERRIDES


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run browser e2e tests (requires DOCSEARCH_BASE_URL or a config file)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip e2e tests unless explicitly enabled."""
    if config.getoption("--run-e2e") or os.getenv("DOCSEARCH_BASE_URL"):
        return

    skip_e2e = pytest.mark.skip(reason="need --run-e2e option or DOCSEARCH_BASE_URL to run")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


@pytest.fixture(scope="session")
def project_root():
    """Get project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def configs_dir(project_root):
    """Get configs directory."""
    return project_root / "configs"


@pytest.fixture
def clean_env(monkeypatch):
    """Remove DOCSEARCH_* variables so unit tests see only what they set."""
    for name in (*ENV_OVERRIDES, "DOCSEARCH_CONFIG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_config_dict():
    """Sample configuration dictionary."""
    return {
        "base_url": "https://docs.example.com",
        "search": {
            "api_url_pattern": "https://search.example.com/**",
            "matching_query": "g",
            "non_matching_query": "zzz",
        },
        "browser": {
            "browser_type": "chromium",
            "headless": True,
            "expect_timeout_ms": 5000,
        },
    }
