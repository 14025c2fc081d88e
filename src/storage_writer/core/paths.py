# src/storage_writer/core/paths.py
"""Data directory resolution.

Path templates use two placeholders:
- $HOME: the user's home directory
- $BASE: the client's data directory
"""

import os
import sys
from pathlib import Path

# Subpath of the CSV sink's output file
WATCHED_STORAGE_PATH = "$BASE/watched_storage"


def _home_dir() -> str:
    return str(Path.home())


def default_data_path() -> str:
    """Return the platform default data directory of the client."""
    home = _home_dir()
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA", os.path.join(home, "AppData", "Roaming"))
        return os.path.join(appdata, "Parity", "Ethereum")
    if sys.platform == "darwin":
        return os.path.join(home, "Library", "Application Support", "io.parity.ethereum")
    return os.path.join(home, ".local", "share", "io.parity.ethereum")


def replace_home(base: str, arg: str) -> str:
    """Substitute $HOME and $BASE in a path template.

    A leading ``~`` in either value is expanded as well. Separators are
    normalized to the platform's.

    Args:
        base: Data directory substituted for $BASE.
        arg: Path template, e.g. "$BASE/watched_storage".

    Returns:
        The resolved path.
    """
    home = _home_dir()
    # $BASE first: the data directory may itself be written relative to $HOME
    resolved = arg.replace("$BASE", base).replace("$HOME", home)
    return os.path.normpath(os.path.expanduser(resolved))
