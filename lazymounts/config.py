"""Persistent JSON config helpers.

The config file remembers the UI theme and two panel preferences: whether
the selected row carries a mark, and whether only disk-backed mounts are
listed. Malformed or missing config reads as defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "lazymounts"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

THEME_KEY = "theme"
SELECTION_MARK_KEY = "show_selection_mark"
DISKS_ONLY_KEY = "disks_only"


@dataclass(frozen=True)
class Preferences:
    """Settings read from the config file; CLI flags override each one."""

    theme: str | None = None
    show_selection_mark: bool = False
    disks_only: bool = False


def load_config() -> dict[str, object]:
    """Return the top-level JSON object, ``{}`` when unreadable or not an object."""
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Write ``data`` as indented JSON; write errors are ignored."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _name(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _flag(value: object) -> bool:
    # Only explicit JSON booleans count.
    return value if isinstance(value, bool) else False


def load_preferences() -> Preferences:
    data = load_config()
    return Preferences(
        theme=_name(data.get(THEME_KEY)),
        show_selection_mark=_flag(data.get(SELECTION_MARK_KEY)),
        disks_only=_flag(data.get(DISKS_ONLY_KEY)),
    )


def save_theme_name(theme_name: str) -> None:
    """Remember ``theme_name`` for later runs, keeping other keys."""
    name = _name(theme_name)
    if name is None:
        return
    data = load_config()
    data[THEME_KEY] = name
    save_config(data)


__all__ = [
    "CONFIG_PATH",
    "Preferences",
    "load_config",
    "load_preferences",
    "save_config",
    "save_theme_name",
]
