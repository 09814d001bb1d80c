"""Per-user directories for chattext configuration and the message archive."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import NamedTuple

APP_NAME = "chattext"


class _DirRule(NamedTuple):
    override: str
    windows_env: str
    windows_default: tuple[str, ...]
    xdg_env: str
    xdg_default: tuple[str, ...]


_CONFIG = _DirRule(
    "CHATTEXT_CONFIG_DIR", "APPDATA", ("AppData", "Roaming"), "XDG_CONFIG_HOME", (".config",)
)
_DATA = _DirRule(
    "CHATTEXT_DATA_DIR", "LOCALAPPDATA", ("AppData", "Local"), "XDG_DATA_HOME", (".local", "share")
)


def get_platform() -> str:
    if sys.platform == "win32":
        return "windows"
    if sys.platform == "darwin":
        return "macos"
    return "linux"


def _resolve(rule: _DirRule) -> Path:
    override = os.environ.get(rule.override)
    if override:
        return Path(override)

    home = Path.home()
    platform = get_platform()
    if platform == "windows":
        return Path(os.environ.get(rule.windows_env) or home.joinpath(*rule.windows_default)) / APP_NAME
    if platform == "macos":
        return home / "Library" / "Application Support" / APP_NAME
    return Path(os.environ.get(rule.xdg_env) or home.joinpath(*rule.xdg_default)) / APP_NAME


def get_config_dir() -> Path:
    return _resolve(_CONFIG)


def get_data_dir() -> Path:
    return _resolve(_DATA)


def default_config_file() -> Path | None:
    """``config.yaml`` in the config directory, if the user has created one."""
    path = get_config_dir() / "config.yaml"
    return path if path.is_file() else None
