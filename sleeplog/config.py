"""YAML settings for the sleep dashboard, merged over built-in defaults."""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SLEEPLOG_CONFIG"

DEFAULT_CONFIG: dict[str, Any] = {
    "data_path": "data/sleep-data.csv",
    "log_level": "INFO",
    "page_title": "Sleep is hard.",
    "heatmap": {
        "row_height": 25,
    },
}


def read_settings_file(path: str | Path) -> dict[str, Any]:
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")
    settings = yaml.safe_load(path.read_text(encoding="utf-8"))
    if settings is None:
        return {}
    if not isinstance(settings, dict):
        raise ValueError(f"Settings in {path} must be a mapping, got {type(settings).__name__}")
    return settings


def apply_overrides(settings: dict[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Copy of settings with overrides applied; sections (dicts) are updated key by key."""
    merged = copy.deepcopy(settings)
    for key, value in overrides.items():
        section = merged.get(key)
        if isinstance(section, dict) and isinstance(value, Mapping):
            merged[key] = apply_overrides(section, value)
        else:
            merged[key] = value
    return merged


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """
    Load settings. With no path, falls back to $SLEEPLOG_CONFIG and then to
    the defaults alone.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or None
    if path is None:
        return copy.deepcopy(DEFAULT_CONFIG)

    cfg = apply_overrides(DEFAULT_CONFIG, read_settings_file(path))
    logger.debug("Loaded config from %s", path)
    return cfg


def configure_logging(level: str | int = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
