"""Configuration loading and management."""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from .types import SuiteConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent.parent / "configs" / "default.yaml"

# Environment variable -> dotted config key
ENV_OVERRIDES = {
    "DOCSEARCH_BASE_URL": "base_url",
    "DOCSEARCH_HEADLESS": "browser.headless",
    "DOCSEARCH_BROWSER": "browser.browser_type",
    "DOCSEARCH_API_URL_PATTERN": "search.api_url_pattern",
}

_FALSY = {"0", "false", "no", "off"}


def load_yaml(file_path: Path) -> dict[str, Any]:
    """Load YAML configuration file.

    Args:
        file_path: Path to YAML file

    Returns:
        Parsed YAML as dictionary (empty for an empty file)

    Raises:
        FileNotFoundError: If file doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")

    with open(file_path, encoding="utf-8") as f:
        result: dict[str, Any] | None = yaml.safe_load(f)
        return result or {}


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge two configuration dictionaries.

    Args:
        base: Base configuration
        override: Override configuration (takes precedence)

    Returns:
        Merged configuration
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def env_overrides(environ: dict[str, str] | None = None) -> dict[str, Any]:
    """Build a nested override dictionary from DOCSEARCH_* environment variables.

    Args:
        environ: Mapping to read from (default: os.environ)

    Returns:
        Nested dictionary suitable for merge_configs
    """
    if environ is None:
        environ = dict(os.environ)

    overrides: dict[str, Any] = {}
    for env_name, dotted_key in ENV_OVERRIDES.items():
        raw = environ.get(env_name)
        if raw is None or raw == "":
            continue

        value: Any = raw
        if dotted_key == "browser.headless":
            value = raw.strip().lower() not in _FALSY

        *parents, leaf = dotted_key.split(".")
        node = overrides
        for part in parents:
            node = node.setdefault(part, {})
        node[leaf] = value

    return overrides


def load_config(
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
    use_env: bool = True,
) -> SuiteConfig:
    """Load and merge configuration from files, overrides and environment.

    Precedence, lowest first: default config, ``config_path`` (or the file
    named by ``DOCSEARCH_CONFIG``), ``overrides``, environment variables.

    Args:
        config_path: Path to a suite-specific config file
        overrides: Additional runtime overrides
        use_env: Apply DOCSEARCH_* environment variables

    Returns:
        Validated SuiteConfig instance

    Raises:
        FileNotFoundError: If an explicitly requested config file is missing
        ValueError: If configuration is invalid
    """
    if use_env:
        load_dotenv()

    config_dict: dict[str, Any] = {}
    if DEFAULT_CONFIG_PATH.exists():
        config_dict = load_yaml(DEFAULT_CONFIG_PATH)

    if config_path is None and use_env and os.getenv("DOCSEARCH_CONFIG"):
        config_path = Path(os.environ["DOCSEARCH_CONFIG"])

    if config_path is not None:
        logger.debug("Loading config from %s", config_path)
        config_dict = merge_configs(config_dict, load_yaml(config_path))

    if overrides:
        config_dict = merge_configs(config_dict, overrides)

    if use_env:
        config_dict = merge_configs(config_dict, env_overrides())

    try:
        return SuiteConfig(**config_dict)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e


def setup_logging(level: str = "INFO") -> None:
    """Setup logging configuration.

    Args:
        level: Logging level
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
