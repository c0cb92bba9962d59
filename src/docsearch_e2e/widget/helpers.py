"""Interaction helpers for the DocSearch modal.

Each helper performs one or more primitive actions and then waits for the
UI condition that confirms them before returning. Waits are Playwright
``expect`` polls, never fixed sleeps, with one exception: the forward-slash
shortcut readiness fallback (see ``wait_for_shortcut_listeners``).
"""

import logging
import re
from collections.abc import Awaitable, Sequence
from typing import Any

from playwright.async_api import Locator, Page, expect

from ..browser.errors import ExpectationFailed, InvalidTransitionError, classify_error
from ..core.types import ModalState, ModalTrigger, SavedSearch, SuiteConfig
from .state import ModalStateMachine, SearchHistory

logger = logging.getLogger(__name__)

DEFAULT_NAVIGATION_KEYS = ("ArrowDown", "ArrowDown", "ArrowUp")


class DocSearchPage:
    """Drives the DocSearch widget on one page.

    Tracks the modal state and search history the UI is expected to show,
    and keeps an ordered log of performed actions so a failed expectation
    can be traced back to the steps that led to it.
    """

    def __init__(self, page: Page, config: SuiteConfig):
        """Initialize the helper.

        Args:
            page: Playwright page showing the documentation site
            config: Suite configuration (selectors, texts, search settings)
        """
        self.page = page
        self.config = config
        self.selectors = config.selectors
        self.texts = config.texts
        self.modal = ModalStateMachine()
        self.history = SearchHistory()
        self.actions: list[str] = []
        self.last_query: str | None = None

    # ------------------------------------------------------------------
    # Locators
    # ------------------------------------------------------------------

    @property
    def button(self) -> Locator:
        return self.page.locator(self.selectors.button)

    @property
    def modal_dialog(self) -> Locator:
        return self.page.locator(self.selectors.modal)

    @property
    def input(self) -> Locator:
        return self.page.locator(self.selectors.input)

    @property
    def hits(self) -> Locator:
        return self.page.locator(self.selectors.hits)

    def hit(self, group: int, item: int) -> Locator:
        """Locator of the result at ``item`` within hit group ``group``."""
        return self.page.locator(self.selectors.hit_item.format(group=group, item=item))

    def recent_item(self, index: int) -> Locator:
        return self.page.locator(self.selectors.recent_item.format(index=index))

    def favorite_item(self, index: int) -> Locator:
        return self.page.locator(self.selectors.favorite_item.format(index=index))

    # ------------------------------------------------------------------
    # Bookkeeping
    # ------------------------------------------------------------------

    def _record(self, action: str) -> None:
        logger.debug("Action: %s", action)
        self.actions.append(action)

    async def _expect(
        self, expectation: str, assertion: Awaitable[Any], navigating: bool = False
    ) -> None:
        try:
            await assertion
        except ExpectationFailed:
            raise
        except Exception as e:
            kind = classify_error(e, navigating=navigating)
            logger.error("Expectation failed: %s (%s)", expectation, kind.value)
            raise ExpectationFailed(expectation, kind, self.actions) from e

    # ------------------------------------------------------------------
    # Page lifecycle
    # ------------------------------------------------------------------

    async def goto(self) -> None:
        """Navigate to the site root; the modal starts closed."""
        path = self.config.root_path
        self._record(f"goto {path}")
        await self._expect(f"{path} to load", self.page.goto(path), navigating=True)
        self.modal.reset()

    async def wait_for_load(self) -> None:
        """Block until the search button is rendered."""
        await self._expect(
            f"{self.selectors.button} to be rendered", self.button.wait_for()
        )

    async def wait_for_shortcut_listeners(self) -> None:
        """Wait until the page's keyboard listeners can receive '/'.

        Uses the configured readiness expression when there is one, otherwise
        falls back to a fixed settle delay.
        """
        expression = self.config.shortcut_ready_expression
        if expression:
            self._record(f"wait for {expression!r}")
            await self._expect(
                "shortcut listeners to be attached", self.page.wait_for_function(expression)
            )
            return

        self._record(f"wait {self.config.shortcut_settle_ms}ms for shortcut listeners")
        await self.page.wait_for_timeout(self.config.shortcut_settle_ms)

    # ------------------------------------------------------------------
    # Modal transitions
    # ------------------------------------------------------------------

    async def _dispatch(self, trigger: ModalTrigger) -> None:
        if trigger.is_keyboard:
            self._record(f"press {trigger.value}")
            await self.page.keyboard.press(trigger.value)
            return

        selector = (
            self.selectors.button if trigger is ModalTrigger.CLICK else self.selectors.container
        )
        self._record(f"click {selector}")
        await self.page.locator(selector).click()

    async def open_modal(self, trigger: ModalTrigger = ModalTrigger.CLICK) -> None:
        """Open the modal and confirm it is visible with the input focused.

        Raises:
            InvalidTransitionError: If ``trigger`` cannot open the modal from its current state
            ExpectationFailed: If the modal did not open
        """
        if self.modal.next_state(trigger) is not ModalState.OPEN:
            raise InvalidTransitionError(f"{trigger.value!r} does not open the modal")
        await self._dispatch(trigger)
        await self.modal_is_visible_and_focused()
        self.modal.apply(trigger)
        logger.info("Modal opened via %s", trigger.value)

    async def close_modal(self, trigger: ModalTrigger = ModalTrigger.ESCAPE) -> None:
        """Close the modal and confirm the active marker and the dialog are gone.

        Raises:
            InvalidTransitionError: If ``trigger`` cannot close the modal from its current state
            ExpectationFailed: If the modal did not close
        """
        if self.modal.next_state(trigger) is not ModalState.CLOSED:
            raise InvalidTransitionError(f"{trigger.value!r} does not close the modal")
        await self._dispatch(trigger)
        await self.modal_is_not_visible()
        self.modal.apply(trigger)
        logger.info("Modal closed via %s", trigger.value)

    async def modal_is_visible_and_focused(self) -> None:
        await self._expect(
            f"{self.selectors.modal} to be visible", expect(self.modal_dialog).to_be_visible()
        )
        await self._expect(
            f"{self.selectors.input} to be focused", expect(self.input).to_be_focused()
        )

    async def modal_is_not_visible(self) -> None:
        active = re.compile(rf"(^|\s){re.escape(self.selectors.active_class)}(\s|$)")
        await self._expect(
            f"body not to have class {self.selectors.active_class}",
            expect(self.page.locator("body")).not_to_have_class(active),
        )
        await self._expect(
            f"{self.selectors.modal} to be hidden", expect(self.modal_dialog).not_to_be_visible()
        )

    # ------------------------------------------------------------------
    # Searching
    # ------------------------------------------------------------------

    async def search(self, query: str) -> None:
        """Type ``query`` and wait for the one search response it triggers.

        The response listener is registered before the input changes so the
        request cannot fire ahead of it.
        """
        search = self.config.search
        self._record(f"fill {self.selectors.input} with {query!r}")
        filled = False
        try:
            async with self.page.expect_response(
                search.api_url_pattern, timeout=search.response_timeout_ms
            ) as response_info:
                await self.input.fill(query)
                filled = True
            response = await response_info.value
        except Exception as e:
            kind = classify_error(e, waiting_for_response=filled)
            if filled:
                expectation = f"a response from {search.api_url_pattern} for {query!r}"
            else:
                expectation = f"{self.selectors.input} to accept {query!r}"
            logger.error("Search for %r failed: %s (%s)", query, expectation, kind.value)
            raise ExpectationFailed(expectation, kind, self.actions) from e

        self.last_query = query
        logger.debug("Search %r answered with HTTP %s", query, response.status)

    async def type_query_matching(self) -> None:
        await self.search(self.config.search.matching_query)

    async def type_query_not_matching(self) -> None:
        await self.search(self.config.search.non_matching_query)

    async def results_are_visible(self) -> None:
        await self._expect(
            f"{self.selectors.hits} to be visible", expect(self.hits.first).to_be_visible()
        )

    async def clear_query(self) -> None:
        """Reset the query and confirm the result list is gone."""
        self._record(f"click {self.selectors.reset}")
        await self.page.locator(self.selectors.reset).click()
        self.last_query = None
        await self.results_are_hidden()

    async def results_are_hidden(self) -> None:
        await self._expect(
            f"{self.selectors.hits} to be hidden", expect(self.hits).not_to_be_visible()
        )

    # ------------------------------------------------------------------
    # Navigating to a result
    # ------------------------------------------------------------------

    async def navigate_with_keyboard(self, keys: Sequence[str] = DEFAULT_NAVIGATION_KEYS) -> None:
        """Move the selection with ``keys`` and open the selected hit with Enter."""
        for key in (*keys, "Enter"):
            self._record(f"press {key} on {self.selectors.input}")
            await self.input.press(key)
        self._visited_hit()

    async def click_hit(self, group: int = 0, item: int = 0, force: bool = False) -> None:
        """Click the link of a hit.

        Args:
            group: Hit group index
            item: Item index within the group
            force: Skip Playwright's actionability checks
        """
        selector = self.selectors.hit_item.format(group=group, item=item)
        self._record(f"click {selector} > a" + (" (forced)" if force else ""))
        await self.hit(group, item).locator(":scope > a").click(force=force)
        self._visited_hit()

    def _visited_hit(self) -> None:
        # Opening a hit closes the modal and the widget remembers the query
        if self.last_query is not None:
            self.history.record(SavedSearch(query=self.last_query))
        self.modal.reset()

    async def url_changed_from(self, url: str) -> None:
        await self._expect(f"URL to differ from {url}", expect(self.page).not_to_have_url(url))

    # ------------------------------------------------------------------
    # Recent and favorite searches
    # ------------------------------------------------------------------

    async def remove_recent(self, index: int = 0) -> None:
        self._record(f"remove recent search #{index}")
        await self.recent_item(index).get_by_title(self.texts.remove_recent).click()
        self.history.remove_recent(index)

    async def save_recent(self, index: int = 0) -> None:
        """Promote a recent search to the favorites."""
        self._record(f"save recent search #{index}")
        await self.recent_item(index).get_by_title(self.texts.save_recent).click()
        self.history.save(index)

    async def remove_favorite(self, index: int = 0) -> None:
        self._record(f"remove favorite search #{index}")
        await self.favorite_item(index).get_by_title(self.texts.remove_favorite).click()
        self.history.remove_favorite(index)

    async def history_matches(self) -> None:
        """Check the sections the tracked history says should be on screen."""
        if self.history.is_empty:
            await self.text_is_visible(self.texts.empty_history)
            return

        headings = {"Recent": self.texts.recent_heading, "Favorite": self.texts.favorite_heading}
        for section in self.history.sections:
            await self.text_is_visible(headings[section])
        for index in range(len(self.history.recent)):
            await self._expect(
                f"recent search #{index} to be visible",
                expect(self.recent_item(index)).to_be_visible(),
            )
        for index in range(len(self.history.favorites)):
            await self._expect(
                f"favorite search #{index} to be visible",
                expect(self.favorite_item(index)).to_be_visible(),
            )

    async def text_is_visible(self, text: str) -> None:
        await self._expect(
            f"{text!r} to be visible", expect(self.page.get_by_text(text)).to_be_visible()
        )
