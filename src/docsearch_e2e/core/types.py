"""Type definitions for the DocSearch end-to-end suite."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, HttpUrl


class ModalState(str, Enum):
    """Visibility state of the search modal."""

    CLOSED = "closed"
    OPEN = "open"


class ModalTrigger(str, Enum):
    """User actions that can open or close the modal.

    Keyboard triggers carry the Playwright key string they dispatch.
    """

    CLICK = "click"
    OUTSIDE_CLICK = "outside_click"
    CTRL_K = "Control+k"
    CTRL_K_CAPS = "Control+K"
    META_K = "Meta+k"
    META_K_CAPS = "Meta+K"
    SLASH = "/"
    ESCAPE = "Escape"

    @property
    def is_keyboard(self) -> bool:
        """Whether the trigger is dispatched as a key press."""
        return self not in (ModalTrigger.CLICK, ModalTrigger.OUTSIDE_CLICK)


class SavedSearch(BaseModel):
    """A search remembered by the widget, either recent or favorite."""

    query: str = Field(description="Query text typed before the hit was visited")
    title: str | None = Field(default=None, description="Title of the visited hit")


# Configuration models


class SelectorsConfig(BaseModel):
    """CSS selectors and id templates the widget renders."""

    button: str = Field(default=".DocSearch-Button", description="Trigger button")
    modal: str = Field(default=".DocSearch-Modal", description="Modal dialog")
    input: str = Field(default=".DocSearch-Input", description="Search input")
    container: str = Field(
        default=".DocSearch-Container", description="Backdrop around the modal"
    )
    hits: str = Field(default=".DocSearch-Hits", description="Result list section")
    reset: str = Field(default=".DocSearch-Reset", description="Query reset control")
    hit_item: str = Field(
        default="#docsearch-hits{group}-item-{item}",
        description="Template for a hit, by hit group and item index",
    )
    recent_item: str = Field(
        default="#docsearch-recentSearches-item-{index}",
        description="Template for a recent search entry",
    )
    favorite_item: str = Field(
        default="#docsearch-favoriteSearches-item-{index}",
        description="Template for a favorite search entry",
    )
    active_class: str = Field(
        default="DocSearch--active", description="Body class set while the modal is open"
    )


class HistoryTitlesConfig(BaseModel):
    """Title attributes of the recent/favorite action buttons and section texts."""

    remove_recent: str = Field(default="Remove this search from history")
    save_recent: str = Field(default="Save this search")
    remove_favorite: str = Field(default="Remove this search from favorites")
    recent_heading: str = Field(default="Recent")
    favorite_heading: str = Field(default="Favorite")
    empty_history: str = Field(default="No recent searches")
    no_results: str = Field(default="No results for")


class SearchConfig(BaseModel):
    """Search interaction configuration."""

    api_url_pattern: str = Field(
        default="https://r2iyf7eth7-dsn.algolia.net/*/**",
        description="Glob matching the search API responses to wait for",
    )
    matching_query: str = Field(default="g", description="Query expected to return hits")
    non_matching_query: str = Field(
        default="zzz", description="Query expected to return no hits"
    )
    response_timeout_ms: int = Field(
        default=30000, gt=0, description="Timeout for the search API response"
    )


class BrowserConfig(BaseModel):
    """Browser launch and timing configuration."""

    browser_type: Literal["chromium", "firefox", "webkit"] = Field(
        default="chromium", description="Playwright browser engine"
    )
    headless: bool = Field(default=True, description="Run browser in headless mode")
    viewport_width: int = Field(default=1280, gt=0, description="Browser viewport width")
    viewport_height: int = Field(default=720, gt=0, description="Browser viewport height")
    default_timeout_ms: int = Field(
        default=30000, gt=0, description="Default timeout for actions and navigation"
    )
    expect_timeout_ms: int = Field(
        default=5000, gt=0, description="Polling timeout for expect() assertions"
    )
    slow_mo_ms: int = Field(default=0, ge=0, description="Delay between Playwright operations")
    locale: str = Field(default="en-US", description="BCP-47 locale of the browser context")


class SuiteConfig(BaseModel):
    """Complete suite configuration."""

    base_url: HttpUrl | None = Field(
        default=None, description="Documentation site hosting the widget"
    )
    root_path: str = Field(default="/", description="Path each scenario navigates to")
    selectors: SelectorsConfig = Field(default_factory=SelectorsConfig)
    texts: HistoryTitlesConfig = Field(default_factory=HistoryTitlesConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    shortcut_settle_ms: int = Field(
        default=1000,
        ge=0,
        description="Fixed wait before the '/' shortcut when no readiness expression is set",
    )
    shortcut_ready_expression: str | None = Field(
        default=None,
        description="JavaScript predicate signalling the page's key listeners are attached",
    )
