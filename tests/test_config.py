"""Tests for sleeplog/config.py — YAML settings merged over defaults."""

from __future__ import annotations

import logging

import pytest

from sleeplog.config import CONFIG_ENV_VAR, DEFAULT_CONFIG, configure_logging, load_config
from tests.conftest import PROJECT_ROOT


@pytest.fixture(autouse=True)
def no_config_env(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


def test_defaults_without_path():
    cfg = load_config()
    assert cfg == DEFAULT_CONFIG
    assert cfg is not DEFAULT_CONFIG


def test_override_merges_nested(tmp_path):
    path = tmp_path / "sleep.yaml"
    path.write_text("data_path: other.csv\nheatmap:\n  row_height: 30\n", encoding="utf-8")
    cfg = load_config(path)
    assert cfg["data_path"] == "other.csv"
    assert cfg["heatmap"] == {"row_height": 30}
    assert cfg["log_level"] == "INFO"
    # defaults untouched
    assert DEFAULT_CONFIG["heatmap"]["row_height"] == 25


def test_env_var_points_at_file(tmp_path, monkeypatch):
    path = tmp_path / "env.yaml"
    path.write_text("log_level: DEBUG\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    assert load_config()["log_level"] == "DEBUG"


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == DEFAULT_CONFIG


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_non_mapping_root(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_config(path)


def test_example_config_loads():
    cfg = load_config(PROJECT_ROOT / "config" / "sleep.yaml")
    assert cfg["data_path"] == "data/sleep-data.csv"


def test_configure_logging_accepts_level_names():
    configure_logging("DEBUG")
    assert logging.getLogger().handlers


def test_page_title_and_heatmap_keys():
    cfg = load_config(PROJECT_ROOT / "config" / "sleep.yaml")
    assert cfg["page_title"]
    # Heatmap fills the page container; only the row height is configurable
    assert set(cfg["heatmap"]) == {"row_height"}
