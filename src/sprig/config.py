"""Settings management with XDG paths, atomic writes, and precedence resolution.

This module handles the persistent settings of the ``sprig`` command-line
host (framework state itself is never persisted):

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.sprig/`` on macOS and Windows. See :func:`get_config_dir`.
* **Global config** -- A single :class:`~sprig.models.GlobalConfig` JSON
  file holding the active plugin list, plugin options, output and render
  preferences.
* **Project config** -- An optional ``./sprig.json`` whose ``plugins`` key
  pins the active plugin list for one project.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags, the
  ``SPRIG_PLUGINS`` environment variable, project config, and global config
  into the effective configuration.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`).
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from sprig.exceptions import SettingsError
from sprig.models import GlobalConfig

_APP_NAME = "sprig"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "sprig.json"
PLUGINS_ENV_VAR = "SPRIG_PLUGINS"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform follows the XDG Base Directory layout (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/sprig/`` (default ``~/.config/sprig/``).
    On macOS/Windows: ``~/.sprig/``.

    Returns:
        Absolute path to the configuration directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_CONFIG_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".config"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is removed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def _global_config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the config directory.

    Returns:
        The deserialised :class:`~sprig.models.GlobalConfig`, or a default
        instance if the file does not exist.

    Raises:
        SettingsError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise SettingsError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    _atomic_write(_global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./sprig.json``.

    Returns:
        The parsed JSON as a dict, or ``None`` if the file does not exist.

    Raises:
        SettingsError: If the file exists but is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise SettingsError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SettingsError(f"Project config at {path} must be a JSON object")
    return data


def _split_names(value: str) -> list[str]:
    return [name.strip() for name in value.split(",") if name.strip()]


# --- Precedence resolution ---


def resolve_config(
    cli_plugins: Optional[list[str]] = None,
    cli_format: Optional[str] = None,
) -> GlobalConfig:
    """Resolve settings with the full precedence chain.

    Precedence for the active plugin list (high to low):
        1. CLI ``--plugin`` flags (``cli_plugins``)
        2. ``SPRIG_PLUGINS`` environment variable (comma separated)
        3. Project config ``./sprig.json`` (``"plugins": [...]``)
        4. User config (``plugins.enabled``)
        5. Default: every registered plugin

    Returns:
        The effective :class:`~sprig.models.GlobalConfig`.
    """
    config = load_global_config()

    project = load_project_config()
    if project is not None and isinstance(project.get("plugins"), list):
        config.plugins.enabled = [str(name) for name in project["plugins"]]

    env_plugins = os.environ.get(PLUGINS_ENV_VAR)
    if env_plugins:
        config.plugins.enabled = _split_names(env_plugins)

    if cli_plugins:
        config.plugins.enabled = list(cli_plugins)

    if cli_format is not None:
        config.output.format = cli_format

    return config
