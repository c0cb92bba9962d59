"""Playwright-based browser client providing isolated pages per scenario."""

import logging
from typing import Any

from playwright.async_api import (
    Browser,
    BrowserContext,
    Page,
    async_playwright,
    expect,
)

from ..core.types import BrowserConfig

logger = logging.getLogger(__name__)


class PlaywrightBrowserClient:
    """Owns one browser process and hands out isolated pages.

    Each call to ``new_page`` creates a fresh browser context, so cookies and
    local storage (where the widget keeps recent and favorite searches) never
    leak between scenarios.
    """

    def __init__(self, config: BrowserConfig | None = None, base_url: str | None = None):
        """Initialize Playwright browser client.

        Args:
            config: Browser launch and timing configuration
            base_url: Base URL that relative page.goto() paths resolve against
        """
        self.config = config or BrowserConfig()
        self.base_url = base_url
        self._playwright: Any = None
        self._browser: Browser | None = None
        self._contexts: list[BrowserContext] = []

    async def __aenter__(self) -> "PlaywrightBrowserClient":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.disconnect()

    async def connect(self) -> None:
        """Launch the configured browser engine."""
        logger.info("Launching %s browser...", self.config.browser_type)

        self._playwright = await async_playwright().start()
        launcher = getattr(self._playwright, self.config.browser_type)
        self._browser = await launcher.launch(
            headless=self.config.headless,
            slow_mo=self.config.slow_mo_ms or None,
        )
        expect.set_options(timeout=self.config.expect_timeout_ms)

        logger.info("Browser launched")

    async def new_page(self) -> Page:
        """Create a page in a new, isolated browser context.

        Returns:
            The new page
        """
        if not self.is_browser_alive():
            raise RuntimeError("Browser not connected")

        context_options: dict[str, Any] = {
            "viewport": {
                "width": self.config.viewport_width,
                "height": self.config.viewport_height,
            },
            "locale": self.config.locale,
        }
        if self.base_url:
            context_options["base_url"] = self.base_url

        context = await self._browser.new_context(**context_options)
        context.set_default_timeout(self.config.default_timeout_ms)
        context.set_default_navigation_timeout(self.config.default_timeout_ms)
        self._contexts.append(context)

        page = await context.new_page()
        logger.debug("Opened page in context #%d", len(self._contexts))
        return page

    async def close_page(self, page: Page) -> None:
        """Close a page together with the context that owns it."""
        context = page.context
        try:
            await context.close()
        except Exception as e:
            logger.warning(f"Failed to close context: {e}")
        finally:
            if context in self._contexts:
                self._contexts.remove(context)

    async def disconnect(self) -> None:
        """Close browser and cleanup.

        Each resource is closed independently so a failure in one
        does not prevent cleanup of the others.
        """
        for context in list(self._contexts):
            try:
                await context.close()
            except Exception as e:
                logger.warning(f"Failed to close context: {e}")
        self._contexts.clear()

        if self._browser:
            try:
                await self._browser.close()
            except Exception as e:
                logger.warning(f"Failed to close browser: {e}")
            finally:
                self._browser = None

        if self._playwright:
            try:
                await self._playwright.stop()
            except Exception as e:
                logger.warning(f"Failed to stop playwright: {e}")
            finally:
                self._playwright = None

        logger.info("Browser closed")

    def is_browser_alive(self) -> bool:
        """Check whether the browser process is still running."""
        return self._browser is not None and self._browser.is_connected()
