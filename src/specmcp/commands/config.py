"""``specmcp config`` -- inspect and edit the user's global settings.

Settings live in ``config.json`` under the config directory (see
:func:`~specmcp.config.get_config_dir`) and are validated as a
:class:`~specmcp.models.GlobalConfig` before every save.
"""

from __future__ import annotations

from typing import Any

import typer

from specmcp.exceptions import InvalidUsageError
from specmcp.exit_codes import EXIT_INVALID_USAGE
from specmcp.output import error, format_result, info, success


config_app = typer.Typer(no_args_is_help=True)

_UNSET_WORDS = ("none", "null", "")


def _assign(data: dict[str, Any], dotted_key: str, raw: str) -> Any:
    """Store *raw* at *dotted_key* inside *data*, coerced to the current type.

    Returns:
        The value actually stored.

    Raises:
        InvalidUsageError: If the key does not name a setting, or the value
            does not fit it.
    """
    *parents, leaf = dotted_key.split(".")
    section = data
    for part in parents:
        section = section.get(part)
        if not isinstance(section, dict):
            raise InvalidUsageError(f"Invalid config key: {dotted_key}")
    if leaf not in section or isinstance(section[leaf], dict):
        raise InvalidUsageError(f"Unknown config key: {dotted_key}")

    current = section[leaf]
    value: Any = raw
    if isinstance(current, int):
        try:
            value = int(raw)
        except ValueError:
            raise InvalidUsageError(
                f"Expected integer for {dotted_key}, got: {raw}"
            ) from None
    elif raw.lower() in _UNSET_WORDS:
        # Only optional settings (default_spec) survive validation as None.
        value = None

    section[leaf] = value
    return value


@config_app.command("show")
def config_show() -> None:
    """Print the effective configuration.

    The config directory goes to stderr, the settings to stdout.
    """
    from specmcp.config import get_config_dir, load_global_config

    info(f"Config directory: {get_config_dir()}")
    format_result(load_global_config().model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Setting in dot notation, e.g. 'server.transport'."),
    value: str = typer.Argument(help="New value ('none' clears default_spec)."),
) -> None:
    """Change one setting.

    Example::

        specmcp config set default_spec ./api/openapi.yaml
        specmcp config set output.line_width 120
    """
    from specmcp.config import load_global_config, save_global_config
    from specmcp.models import GlobalConfig

    data = load_global_config().model_dump(mode="json")
    try:
        stored = _assign(data, key, value)
        updated = GlobalConfig.model_validate(data)
    except InvalidUsageError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    except ValueError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=EXIT_INVALID_USAGE) from None

    save_global_config(updated)
    success(f"{key} = {stored}")


@config_app.command("reset")
def config_reset(ctx: typer.Context) -> None:
    """Restore every setting to its default.

    Prompts first unless the global ``--force`` flag was given.
    """
    from specmcp.config import save_global_config
    from specmcp.models import GlobalConfig

    forced = bool(ctx.obj and ctx.obj.get("force"))
    if not forced and not typer.confirm("Discard all settings and restore defaults?"):
        info("Cancelled.")
        raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Settings restored to defaults.")
