"""Helpers for loading default command-line options from TOML files."""

from __future__ import annotations

import copy
import os
import sys
import tomllib
from pathlib import Path
from typing import Any
from typing import cast

import structlog

logger = structlog.getLogger("findup")

CONFIG_ENV = "FINDUP_CONFIG"

DEFAULT_SETTINGS: dict[str, Any] = {
    "search": {
        "start_directory": ".",
        "flag_file": "",
        "stop_directory": "",
    },
    "output": {
        "quiet": False,
    },
}


class SettingsError(Exception):
    """Raised when an explicitly requested settings file is unusable."""


def load_settings(path: str | os.PathLike[str] | None = None) -> dict[str, Any]:
    """Return built-in defaults merged with the overrides of a settings file.

    An explicit ``path`` (or the file named by ``FINDUP_CONFIG``) must exist
    and parse. Without one the per-user file is read if present and silently
    skipped otherwise.
    """
    explicit = path or os.environ.get(CONFIG_ENV) or None
    if explicit:
        settings_path = Path(explicit).expanduser()
        overrides = _read_settings_file(settings_path, required=True)
    else:
        settings_path = user_settings_path()
        overrides = _read_settings_file(settings_path)
    logger.debug("loaded settings", path=str(settings_path), overrides=overrides)
    return _merge_dicts(copy.deepcopy(DEFAULT_SETTINGS), overrides)


def get_setting(
    settings: dict[str, Any],
    group: str,
    key: str,
    fallback: Any = None,
) -> Any:
    """Retrieve a specific setting with an optional fallback."""
    grouped = settings.get(group, {})
    if not isinstance(grouped, dict):
        return fallback
    return copy.deepcopy(grouped.get(key, fallback))


def user_settings_path() -> Path:
    """Return the platform specific location of the per-user settings file."""
    home = Path.home()
    if sys.platform.startswith("win"):
        base_dir = Path(os.environ.get("APPDATA", home))
    elif sys.platform == "darwin":
        base_dir = home / "Library" / "Application Support"
    else:
        base_dir = Path(os.environ.get("XDG_CONFIG_HOME") or home / ".config")
    return base_dir / "findup" / "settings.toml"


def _merge_dicts(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    for key, value in overrides.items():
        if isinstance(value, dict) and key in base and isinstance(base[key], dict):
            nested_base = cast(dict[str, Any], base[key])
            nested_override = cast(dict[str, Any], value)
            base[key] = _merge_dicts(nested_base, nested_override)
        else:
            base[key] = value
    return base


def _read_settings_file(path: Path, *, required: bool = False) -> dict[str, Any]:
    if not path.is_file():
        if required:
            msg = f"settings file not found: {path}"
            raise SettingsError(msg)
        return {}
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        if required:
            msg = f"cannot read settings file {path}: {exc}"
            raise SettingsError(msg) from exc
        logger.warning("ignoring unreadable settings file", path=str(path), error=str(exc))
        return {}
