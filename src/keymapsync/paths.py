#!/usr/bin/env python3
"""Default locations of the native keybinding and shared keymap files."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping

# Default location of the shared cross-editor keymap file.
DEFAULT_SHARED_CONFIG_PATH: str = "~/.config/onekeymap/onekeymap.json"


def _home_dir(env: Mapping[str, str]) -> str:
    return env.get("HOME") or env.get("USERPROFILE") or ""


def resolve_home(path: str, env: Mapping[str, str] | None = None) -> str:
    """Expand a leading "~/" to the user's home directory.

    Args:
        path: A path that may start with "~/".
        env: Environment to read HOME/USERPROFILE from; os.environ by default.

    Returns:
        The path with the home prefix expanded, or path unchanged.
    """
    if env is None:
        env = os.environ
    if path.startswith("~/"):
        return os.path.join(_home_dir(env), path[2:])
    return path


def default_keybindings_path(
    platform: str | None = None, env: Mapping[str, str] | None = None
) -> str:
    """Return the VS Code user keybindings.json path for a platform.

    Args:
        platform: A sys.platform value; the running platform by default.
        env: Environment to read HOME/USERPROFILE/APPDATA from.

    Returns:
        Absolute path to keybindings.json.
    """
    if platform is None:
        platform = sys.platform
    if env is None:
        env = os.environ
    if platform == "darwin":
        return os.path.join(_home_dir(env), "Library/Application Support/Code/User/keybindings.json")
    if platform.startswith("linux"):
        return os.path.join(_home_dir(env), ".config/Code/User/keybindings.json")
    return os.path.join(env.get("APPDATA", ""), "Code/User/keybindings.json")
