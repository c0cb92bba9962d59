"""Tests for configuration loading."""

import pytest

from docsearch_e2e.core.config import env_overrides, load_config, load_yaml, merge_configs
from docsearch_e2e.core.types import SuiteConfig


def test_merge_configs():
    """Test configuration merging."""
    base = {
        "base_url": "https://docs.example.com",
        "browser": {"headless": True, "expect_timeout_ms": 5000},
    }

    override = {
        "browser": {"expect_timeout_ms": 10000},
        "search": {"matching_query": "react"},
    }

    merged = merge_configs(base, override)

    assert merged["base_url"] == "https://docs.example.com"
    assert merged["browser"]["headless"] is True  # Preserved
    assert merged["browser"]["expect_timeout_ms"] == 10000  # Overridden
    assert merged["search"]["matching_query"] == "react"  # Added


def test_merge_configs_does_not_mutate_base():
    base = {"browser": {"headless": True}}
    merge_configs(base, {"browser": {"headless": False}})
    assert base["browser"]["headless"] is True


def test_load_yaml_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Config file not found"):
        load_yaml(tmp_path / "missing.yaml")


def test_load_yaml_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_yaml(path) == {}


def test_default_config_file_is_valid(configs_dir):
    """The shipped default config validates on its own."""
    config = SuiteConfig(**load_yaml(configs_dir / "default.yaml"))
    assert config.search.matching_query == "g"
    assert config.search.non_matching_query == "zzz"
    assert config.shortcut_settle_ms == 1000


def test_load_config_defaults(clean_env):
    config = load_config(use_env=False)
    assert config.base_url is None
    assert config.root_path == "/"
    assert config.browser.browser_type == "chromium"


def test_load_config_from_file(tmp_path, clean_env):
    path = tmp_path / "site.yaml"
    path.write_text(
        "base_url: https://docs.example.com\nbrowser:\n  headless: false\n", encoding="utf-8"
    )

    config = load_config(config_path=path, use_env=False)

    assert str(config.base_url).startswith("https://docs.example.com")
    assert config.browser.headless is False
    # Defaults from configs/default.yaml survive the merge
    assert config.browser.expect_timeout_ms == 5000


def test_load_config_overrides_take_precedence(tmp_path, clean_env):
    path = tmp_path / "site.yaml"
    path.write_text("search:\n  matching_query: hooks\n", encoding="utf-8")

    config = load_config(
        config_path=path, overrides={"search": {"matching_query": "state"}}, use_env=False
    )

    assert config.search.matching_query == "state"


def test_load_config_reads_environment(monkeypatch, clean_env):
    monkeypatch.setenv("DOCSEARCH_BASE_URL", "https://docs.example.org")
    monkeypatch.setenv("DOCSEARCH_HEADLESS", "false")
    monkeypatch.setenv("DOCSEARCH_BROWSER", "firefox")

    config = load_config(overrides={"browser": {"headless": True}})

    assert str(config.base_url).startswith("https://docs.example.org")
    assert config.browser.headless is False
    assert config.browser.browser_type == "firefox"


def test_load_config_uses_config_file_from_environment(tmp_path, monkeypatch, clean_env):
    path = tmp_path / "env.yaml"
    path.write_text("root_path: /docs/\n", encoding="utf-8")
    monkeypatch.setenv("DOCSEARCH_CONFIG", str(path))

    config = load_config()

    assert config.root_path == "/docs/"


def test_load_config_invalid_values(clean_env):
    with pytest.raises(ValueError, match="Invalid configuration"):
        load_config(overrides={"browser": {"browser_type": "netscape"}}, use_env=False)


class TestEnvOverrides:
    """Test suite for env_overrides."""

    def test_empty_environment(self):
        assert env_overrides({}) == {}

    def test_blank_values_are_ignored(self):
        assert env_overrides({"DOCSEARCH_BASE_URL": ""}) == {}

    def test_nested_keys(self):
        overrides = env_overrides(
            {
                "DOCSEARCH_BROWSER": "webkit",
                "DOCSEARCH_API_URL_PATTERN": "https://search.example.com/**",
            }
        )
        assert overrides == {
            "browser": {"browser_type": "webkit"},
            "search": {"api_url_pattern": "https://search.example.com/**"},
        }

    @pytest.mark.parametrize(
        "raw,expected",
        [("1", True), ("true", True), ("yes", True), ("0", False), ("False", False), ("off", False)],
    )
    def test_headless_parsing(self, raw, expected):
        assert env_overrides({"DOCSEARCH_HEADLESS": raw}) == {"browser": {"headless": expected}}
