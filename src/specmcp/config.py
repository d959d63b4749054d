"""Where settings live, how they are read and written, and which document is the default.

Directories
    Linux and the BSDs follow the XDG base directory layout
    (``$XDG_CONFIG_HOME/specmcp``, ``$XDG_DATA_HOME/specmcp``); other
    platforms keep everything under ``~/.specmcp``.

Files
    ``config.json`` in the config directory holds the
    :class:`~specmcp.models.GlobalConfig`.  An optional ``specmcp.json`` in
    the working directory can pin ``default_spec`` for one project.  Writes
    go through :func:`_atomic_write`, so a crash never leaves a half-written
    file behind.

Default document
    :func:`resolve_default_spec` decides which document a query reads when
    the caller does not name one.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from specmcp.exceptions import ConfigError
from specmcp.models import GlobalConfig

_APP_NAME = "specmcp"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "specmcp.json"

DEFAULT_SPEC = "openapi.yaml"
"""Document queried when nothing else names one."""

SPEC_ENV_VAR = "SPECMCP_SPEC"

# kind -> (environment variable, default location relative to $HOME)
_XDG_DIRS = {
    "config": ("XDG_CONFIG_HOME", (".config",)),
    "data": ("XDG_DATA_HOME", (".local", "share")),
}


def _is_xdg_platform() -> bool:
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _app_dir(kind: str) -> Path:
    """Return (and create) the application directory of *kind*."""
    if _is_xdg_platform():
        env_var, home_parts = _XDG_DIRS[kind]
        root = Path(os.environ.get(env_var) or Path.home().joinpath(*home_parts))
        path = root / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Directory holding ``config.json``, created on first use."""
    return _app_dir("config")


def get_data_dir() -> Path:
    """Directory whose ``logs/`` holds crash logs, created on first use."""
    return _app_dir("data")


def _atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* in one rename.

    The text is written to a sibling temp file, flushed to disk and renamed
    over *path*.  If anything fails the temp file is removed and *path* is
    left as it was.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


def _read_json_object(path: Path, label: str) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Invalid {label} config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {label} config at {path}: expected a JSON object")
    return data


def load_global_config() -> GlobalConfig:
    """Read ``config.json``; a missing file yields the defaults.

    Raises:
        ConfigError: If the file is not a JSON object or does not validate.
    """
    path = get_config_dir() / _CONFIG_FILENAME
    if not path.is_file():
        return GlobalConfig()
    data = _read_json_object(path, "global")
    try:
        return GlobalConfig.model_validate(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Write *config* to ``config.json``."""
    text = json.dumps(config.model_dump(mode="json"), indent=2) + "\n"
    _atomic_write(get_config_dir() / _CONFIG_FILENAME, text)


def load_project_config() -> Optional[dict[str, Any]]:
    """Read ``./specmcp.json`` if there is one.

    Raises:
        ConfigError: If the file is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    return _read_json_object(path, "project")


def resolve_default_spec(
    cli_spec: Optional[str] = None,
    global_cfg: Optional[GlobalConfig] = None,
) -> str:
    """Pick the document to query when the caller names none.

    The first of these that is set wins:

    1. *cli_spec* (a command-line argument),
    2. the ``SPECMCP_SPEC`` environment variable,
    3. ``default_spec`` in ``./specmcp.json``,
    4. ``default_spec`` in the global config (*global_cfg*, or read from
       disk when not given),
    5. ``openapi.yaml`` in the working directory.
    """
    if cli_spec:
        return cli_spec
    if os.environ.get(SPEC_ENV_VAR):
        return os.environ[SPEC_ENV_VAR]

    project = load_project_config() or {}
    if project.get("default_spec"):
        return str(project["default_spec"])

    if global_cfg is None:
        global_cfg = load_global_config()
    return global_cfg.default_spec or DEFAULT_SPEC
