"""Fixtures for the browser scenarios.

These tests drive a real browser against a live documentation site:
    DOCSEARCH_BASE_URL=https://docs.example.com pytest tests/e2e/

Every test gets its own browser and context, so recent and favorite
searches stored by the widget never leak between scenarios.
"""

import os

import pytest
import pytest_asyncio

from docsearch_e2e.browser import PlaywrightBrowserClient
from docsearch_e2e.core.config import load_config, setup_logging
from docsearch_e2e.widget import DocSearchPage


@pytest.fixture(scope="session")
def suite_config():
    """Suite configuration from configs/, DOCSEARCH_CONFIG and the environment."""
    config = load_config()
    if config.base_url is None:
        pytest.skip("DOCSEARCH_BASE_URL is not set")
    setup_logging(os.getenv("DOCSEARCH_LOG_LEVEL", "INFO"))
    return config


@pytest_asyncio.fixture
async def browser_client(suite_config):
    async with PlaywrightBrowserClient(
        suite_config.browser, base_url=str(suite_config.base_url)
    ) as client:
        yield client


@pytest_asyncio.fixture
async def docsearch(browser_client, suite_config):
    """Widget helper bound to a fresh page."""
    page = await browser_client.new_page()
    yield DocSearchPage(page, suite_config)
    await browser_client.close_page(page)
