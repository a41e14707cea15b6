"""Locations of the files junkctl reads and writes.

junkctl keeps everything in two XDG base directories:

- ``$XDG_CONFIG_HOME/junkctl/`` (default ``~/.config/junkctl/``)
    - ``config.toml``: scan roots, depth limits, worker count, extensions
      and whether cleanups are recorded. Written by ``junkctl config init``.
    - ``theme.toml``: optional overrides for the bundled color theme.
- ``$XDG_STATE_HOME/junkctl/`` (default ``~/.local/state/junkctl/``)
    - ``history.jsonl``: one line per cleanup, listed by ``junkctl history``.
    - ``last-scan.json``: the latest scan, replayed by ``junkctl clean --last``.

The config file is optional and only read. The state directory is created
on the first write.
"""

import os
from pathlib import Path

APP_NAME = "junkctl"

CONFIG_FILENAME = "config.toml"
THEME_FILENAME = "theme.toml"
HISTORY_FILENAME = "history.jsonl"
LAST_SCAN_FILENAME = "last-scan.json"


def _app_dir(env_var: str, fallback: str) -> Path:
    """Resolve junkctl's directory below an XDG base directory.

    An empty environment variable counts as unset.

    Args:
        env_var: XDG variable name, e.g. ``XDG_STATE_HOME``.
        fallback: Base directory relative to home when the variable is unset.
    """
    base = os.environ.get(env_var)
    return (Path(base) if base else Path.home() / fallback) / APP_NAME


def get_config_dir() -> Path:
    """Directory holding config.toml and theme.toml."""
    return _app_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Directory holding the cleanup history and the cached last scan."""
    return _app_dir("XDG_STATE_HOME", ".local/state")


def get_config_path() -> Path:
    """Path of the scan and cleanup settings file."""
    return get_config_dir() / CONFIG_FILENAME


def get_user_theme_path() -> Path:
    """Path of the user's color overrides, merged over the bundled theme."""
    return get_config_dir() / THEME_FILENAME


def ensure_state_dir() -> Path:
    """Create the state directory before the history or scan cache is written.

    Returns:
        The state directory.

    Raises:
        RuntimeError: If the directory cannot be created. The message names
            the directory so the CLI can show it as is.
    """
    path = get_state_dir()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        raise RuntimeError(f"Cannot create state directory {path}: Permission denied") from e
    except OSError as e:
        raise RuntimeError(f"Cannot create state directory {path}: {e}") from e
    return path
