"""Persistent JSON config helpers.

Stores the navigation mode, mini-info, xtree-mode and hidden-directory
preferences, delete confirmation, and the UI theme name. All access is defensive: malformed or
missing config falls back to defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

import structlog
from platformdirs import user_config_dir

from ..navigation import TraversalMode

APP_NAME = "lazytree"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TreeSettings:
    """Effective persisted preferences with defaults applied."""

    navigation_mode: TraversalMode = TraversalMode.LINEAR
    show_mini_info: bool = True
    confirm_delete: bool = True
    xtree_mode: bool = False
    show_hidden: bool = False
    theme: str | None = None


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("config_unreadable", path=str(CONFIG_PATH), error=str(exc))
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Write failures are logged and otherwise ignored; preferences are a
    convenience, never a reason to abort.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("config_save_failed", path=str(CONFIG_PATH), error=str(exc))


def _load_bool(key: str, default: bool) -> bool:
    """Only explicit JSON booleans are accepted; anything else yields ``default``."""
    value = load_config().get(key)
    return value if isinstance(value, bool) else default


def _save_value(key: str, value: object) -> None:
    config = load_config()
    config[key] = value
    save_config(config)


def load_navigation_mode() -> TraversalMode:
    value = load_config().get("navigation_mode")
    if isinstance(value, str):
        try:
            return TraversalMode(value.strip().lower())
        except ValueError:
            pass
    return TraversalMode.LINEAR


def save_navigation_mode(mode: TraversalMode) -> None:
    _save_value("navigation_mode", TraversalMode(mode).value)


def load_show_mini_info() -> bool:
    return _load_bool("show_mini_info", True)


def load_confirm_delete() -> bool:
    return _load_bool("confirm_delete", True)


def load_xtree_mode() -> bool:
    """Whether a panel changes directory as the selection moves."""
    return _load_bool("xtree_mode", False)


def load_show_hidden() -> bool:
    """Return persisted hidden-directory visibility preference."""
    return _load_bool("show_hidden", False)


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_settings() -> TreeSettings:
    """Read every preference once into a ``TreeSettings`` snapshot."""
    return TreeSettings(
        navigation_mode=load_navigation_mode(),
        show_mini_info=load_show_mini_info(),
        confirm_delete=load_confirm_delete(),
        xtree_mode=load_xtree_mode(),
        show_hidden=load_show_hidden(),
        theme=load_theme_name(),
    )
