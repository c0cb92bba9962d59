"""Browser automation module."""

from .errors import (
    DocSearchError,
    ExpectationFailed,
    FailureKind,
    InvalidTransitionError,
    classify_error,
    is_terminal,
)
from .playwright_client import PlaywrightBrowserClient

__all__ = [
    "DocSearchError",
    "ExpectationFailed",
    "FailureKind",
    "InvalidTransitionError",
    "PlaywrightBrowserClient",
    "classify_error",
    "is_terminal",
]
