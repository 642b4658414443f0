"""Persistent JSON config and keybinds-file helpers.

Stores the UI theme, HTTP tuning and default provider in ``config.json`` and
keybinds in ``keybinds.conf``, both under the platform config directory.
All access is defensive: malformed or missing files fall back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir, user_log_dir

from ..input.keybinds import Keybinds, KeybindsError

logger = logging.getLogger(__name__)

APP_NAME = "lazychan"
CONFIG_FILENAME = "config.json"
KEYBINDS_FILENAME = "keybinds.conf"
LOG_FILENAME = "lazychan.log"
CONFIG_DIR = Path(user_config_dir(APP_NAME, appauthor=False))
CONFIG_PATH = CONFIG_DIR / CONFIG_FILENAME
KEYBINDS_PATH = CONFIG_DIR / KEYBINDS_FILENAME
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME

DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_MAX_RETRIES = 2


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON, ignoring write failures."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)


def load_default_provider() -> str | None:
    value = load_config().get("provider")
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def load_request_timeout() -> float:
    """Return the HTTP timeout in seconds; non-positive values are ignored."""
    value = load_config().get("request_timeout")
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return DEFAULT_REQUEST_TIMEOUT
    return float(value)


def load_max_retries() -> int:
    value = load_config().get("max_retries")
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return DEFAULT_MAX_RETRIES
    return value


def read_or_create_keybinds_file() -> str:
    """Return keybinds file contents, writing the default file on first run."""
    if not KEYBINDS_PATH.exists():
        contents = Keybinds.default_file_contents()
        KEYBINDS_PATH.parent.mkdir(parents=True, exist_ok=True)
        KEYBINDS_PATH.write_text(contents, encoding="utf-8")
        return contents
    return KEYBINDS_PATH.read_text(encoding="utf-8")


def load_keybinds() -> tuple[Keybinds, str | None]:
    """Load keybinds, returning defaults plus a diagnostic when the file is bad."""
    try:
        contents = read_or_create_keybinds_file()
    except OSError as exc:
        logger.warning("could not read keybinds file %s: %s", KEYBINDS_PATH, exc)
        return Keybinds(), f"Keybinds file unavailable: {exc}"
    try:
        return Keybinds.parse_from_file(contents), None
    except KeybindsError as exc:
        logger.error("invalid keybinds file %s: %s", KEYBINDS_PATH, exc)
        return Keybinds(), f"{exc}; using default keybinds"
