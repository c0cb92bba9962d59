"""Configuration and type definitions."""

from .config import load_config, merge_configs, setup_logging
from .types import (
    BrowserConfig,
    ModalState,
    ModalTrigger,
    SavedSearch,
    SearchConfig,
    SelectorsConfig,
    SuiteConfig,
)

__all__ = [
    "BrowserConfig",
    "ModalState",
    "ModalTrigger",
    "SavedSearch",
    "SearchConfig",
    "SelectorsConfig",
    "SuiteConfig",
    "load_config",
    "merge_configs",
    "setup_logging",
]
