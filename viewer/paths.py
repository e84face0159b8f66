"""
viewer/paths.py -- Path resolution for frozen and development modes.

Handles sys._MEIPASS detection for PyInstaller bundles, uses platformdirs
for the user data directory, and decides where the archive document is
read from.
"""

from __future__ import annotations

import os
import sys

from platformdirs import user_data_dir

_APP_NAME = "UnityArchiveViewer"
_APP_AUTHOR = "UnityArchive"

DATA_FILE_NAME = "data.json"
DATA_ENV_VAR = "UNITY_ARCHIVE_DATA"


def is_frozen() -> bool:
    """Return True if running from a PyInstaller bundle."""
    return getattr(sys, "frozen", False) and hasattr(sys, "_MEIPASS")


def get_bundle_dir() -> str:
    """Return the bundle directory (PyInstaller _MEIPASS or project root)."""
    if is_frozen():
        return sys._MEIPASS  # type: ignore[attr-defined]
    # Development mode: project root is one level up from viewer/
    return os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def get_user_data_dir() -> str:
    """Return the platform-appropriate user data directory."""
    path = user_data_dir(_APP_NAME, _APP_AUTHOR)
    os.makedirs(path, exist_ok=True)
    return path


def resolve_data_source(cli_value: str | None = None) -> str:
    """Return the path or URL of the archive document.

    Precedence: the ``--data`` option, then ``$UNITY_ARCHIVE_DATA``, then
    ``data.json`` in the user data directory if present, and finally
    ``data.json`` in the bundle directory.
    """
    if cli_value:
        return cli_value

    env_value = os.environ.get(DATA_ENV_VAR, "").strip()
    if env_value:
        return env_value

    user_copy = os.path.join(user_data_dir(_APP_NAME, _APP_AUTHOR), DATA_FILE_NAME)
    if os.path.isfile(user_copy):
        return user_copy

    return os.path.join(get_bundle_dir(), DATA_FILE_NAME)
