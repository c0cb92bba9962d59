"""Failure classification for DocSearch scenarios."""

from collections.abc import Sequence
from enum import Enum


class FailureKind(str, Enum):
    """Classifies why a scenario step failed."""

    ELEMENT_TIMEOUT = "element_timeout"
    NETWORK_TIMEOUT = "network_timeout"
    NAVIGATION = "navigation"
    PAGE_CLOSED = "page_closed"
    BROWSER_DEAD = "browser_dead"
    NOT_CONNECTED = "not_connected"
    UNKNOWN = "unknown"


class DocSearchError(Exception):
    """Base class for suite errors."""


class InvalidTransitionError(DocSearchError):
    """A trigger was applied in a modal state where it has no effect."""


class ExpectationFailed(DocSearchError, AssertionError):
    """A helper's expected UI condition was not met.

    Subclasses AssertionError so pytest reports it as a test failure rather
    than an error.
    """

    def __init__(self, expectation: str, kind: FailureKind, actions: Sequence[str] = ()):
        self.expectation = expectation
        self.kind = kind
        self.terminal = is_terminal(kind)
        self.actions = list(actions)
        super().__init__(self._format())

    def _format(self) -> str:
        lines = [f"Expected {self.expectation} ({self.kind.value})"]
        if self.actions:
            lines.append("Actions before failure:")
            lines.extend(f"  {i}. {action}" for i, action in enumerate(self.actions, 1))
        return "\n".join(lines)


def classify_error(
    exc: BaseException, waiting_for_response: bool = False, navigating: bool = False
) -> FailureKind:
    """Classify an exception raised while driving the widget.

    Uses isinstance checks against Playwright exception types first,
    then falls back to message parsing for closed-state errors.

    Args:
        exc: The exception to classify.
        waiting_for_response: The failing step was awaiting a network response.
        navigating: The failing step was loading a page.

    Returns:
        The corresponding FailureKind.
    """
    # Import lazily to avoid hard dependency at module level
    from playwright.async_api import Error as PlaywrightError
    from playwright.async_api import TimeoutError as PlaywrightTimeoutError

    if isinstance(exc, PlaywrightTimeoutError):
        if navigating:
            return FailureKind.NAVIGATION
        if waiting_for_response:
            return FailureKind.NETWORK_TIMEOUT
        return FailureKind.ELEMENT_TIMEOUT

    if isinstance(exc, PlaywrightError):
        msg = str(exc).lower()
        if "target page, context or browser has been closed" in msg:
            return FailureKind.BROWSER_DEAD
        if "browser has been closed" in msg or "context has been closed" in msg:
            return FailureKind.BROWSER_DEAD
        if "page has been closed" in msg or "page closed" in msg:
            return FailureKind.PAGE_CLOSED
        if "net::" in msg or "ns_error" in msg or "navigat" in msg:
            return FailureKind.NAVIGATION
        return FailureKind.UNKNOWN

    # expect() reports unmet polling assertions as AssertionError
    if isinstance(exc, AssertionError):
        return FailureKind.ELEMENT_TIMEOUT

    if isinstance(exc, RuntimeError) and "not connected" in str(exc).lower():
        return FailureKind.NOT_CONNECTED

    return FailureKind.UNKNOWN



def is_terminal(kind: FailureKind) -> bool:
    """Return True if a failure of this kind ends the enclosing scenario.

    Scenarios have no retry layer, so every kind is terminal.

    Args:
        kind: The classified failure kind.
    """
    return isinstance(kind, FailureKind)
