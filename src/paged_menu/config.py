"""YAML configuration for paged-menu.

Config lives at ~/.config/paged-menu/config.yaml (XDG_CONFIG_HOME is
honored) and is deep-merged over DEFAULT_CONFIG. A missing or unreadable
file yields the defaults.
"""

from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from .themes import Theme

# Default config
DEFAULT_CONFIG: dict[str, Any] = {
    "debug": False,
    "title": "Menu",
    "sort": False,
    "multi_select": False,
    "theme": {},  # Theme field overrides: {field_name: value}
}

DEBUG_ENV_VAR = "PAGED_MENU_DEBUG"


def get_config_dir() -> Path:
    """Get the paged-menu config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(xdg_config) / "paged-menu"


def get_config_path() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / "config.yaml"


def get_log_path() -> Path:
    """Get the path to the debug log file."""
    return get_config_dir() / "debug.log"


def _merge_settings(defaults: dict, overrides: dict) -> dict:
    """Overlay user settings on the defaults; nested sections merge key by key."""
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _merge_settings(current, value)
        else:
            merged[key] = value
    return merged


def load_config() -> dict[str, Any]:
    """Load config.yaml merged over the defaults.

    The file is only ever read; a missing, unreadable or non-mapping file
    yields the defaults.
    """
    try:
        data = yaml.safe_load(get_config_path().read_text())
    except (OSError, yaml.YAMLError):
        data = None
    if not isinstance(data, dict):
        return copy.deepcopy(DEFAULT_CONFIG)
    return _merge_settings(DEFAULT_CONFIG, data)


def is_debug_enabled(cfg: dict[str, Any] | None = None) -> bool:
    """Check if debug logging is enabled (env var wins over config)."""
    env = os.environ.get(DEBUG_ENV_VAR, "").strip().lower()
    if env:
        return env in ("1", "true", "yes", "on")
    if cfg is None:
        cfg = load_config()
    return bool(cfg.get("debug", False))


def get_theme(cfg: dict[str, Any] | None = None) -> Theme:
    """Build the Theme from the config's ``theme`` section."""
    if cfg is None:
        cfg = load_config()
    section = cfg.get("theme")
    return Theme.from_dict(section if isinstance(section, dict) else None)


def configure_logging(enabled: bool) -> None:
    """Send paged_menu log records to the debug log file.

    The terminal belongs to the menu while it is shown, so records never go
    to stdout/stderr.
    """
    if not enabled:
        return
    package_logger = logging.getLogger("paged_menu")
    log_path = get_log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)
