"""The ``specmcp`` command: root options, sub-command wiring and process exit.

Sub-commands:

* ``specmcp serve [SPEC]`` -- run the MCP server (:mod:`specmcp.commands.serve`).
* ``specmcp query NAME ...`` -- answer one query in the terminal
  (:mod:`specmcp.commands.query`).
* ``specmcp config show|set|reset`` -- edit settings
  (:mod:`specmcp.commands.config`).

:func:`main` is the console-script entry point.  A
:class:`~specmcp.exceptions.SpecmcpError` that escapes a command ends the
process with that error's exit code; anything else is a bug, and its
traceback is saved to a crash log under :func:`~specmcp.config.get_data_dir`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer

from specmcp import __version__
from specmcp.commands.config import config_app
from specmcp.commands.query import query_app
from specmcp.commands.serve import serve_command
from specmcp.exit_codes import EXIT_GENERIC_FAILURE

EXIT_INTERRUPTED = 130

app = typer.Typer(
    name="specmcp",
    help="Answer structured queries about an OpenAPI document, over MCP or the terminal.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("serve")(serve_command)
app.add_typer(query_app, name="query", help="Run a single query and print the answer.")
app.add_typer(config_app, name="config", help="Show or change settings.")


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f"specmcp {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Print the version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="Print answers as JSON."),
    no_color: bool = typer.Option(False, "--no-color", help="Never use colour."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print answers and errors."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print debug notes to stderr."),
    force: bool = typer.Option(False, "--force", "-f", help="Do not ask for confirmation."),
) -> None:
    """Set up output and settings shared by every sub-command.

    ``ctx.obj`` receives ``config`` (the loaded
    :class:`~specmcp.models.GlobalConfig`), ``force`` and ``verbose``.  A
    broken config file is reported and replaced by the defaults, so that
    ``specmcp config reset`` can still repair it.
    """
    from specmcp.config import load_global_config
    from specmcp.exceptions import ConfigError
    from specmcp.models import GlobalConfig
    from specmcp.output import OutputFormat, OutputManager, set_output

    problem = None
    try:
        config = load_global_config()
    except ConfigError as exc:
        config, problem = GlobalConfig(), str(exc)

    if json_output:
        fmt = OutputFormat.JSON
    elif config.output.format in {f.value for f in OutputFormat}:
        fmt = OutputFormat(config.output.format)
    else:
        fmt = OutputFormat.AUTO

    output = OutputManager(
        format=fmt,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
        line_width=config.output.line_width,
    )
    set_output(output)
    if problem:
        output.error(f"{problem} -- using defaults")

    ctx.ensure_object(dict)
    ctx.obj.update(config=config, force=force, verbose=verbose)


def _on_sigint(signum: int, frame: Any) -> None:  # noqa: ANN401
    sys.stderr.write("\nCancelled.\n")
    sys.exit(EXIT_INTERRUPTED)


def _write_crash_log() -> str:
    """Save the current traceback and return the log file's path."""
    from specmcp.config import get_data_dir

    log_dir = get_data_dir() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"crash-{datetime.now():%Y%m%d-%H%M%S}.log"
    log_file.write_text(f"specmcp {__version__}\n{traceback.format_exc()}", encoding="utf-8")
    return str(log_file)


def main() -> None:
    """Run the CLI and translate failures into exit codes."""
    signal.signal(signal.SIGINT, _on_sigint)
    try:
        app()
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        from specmcp.exceptions import SpecmcpError
        from specmcp.output import error

        if isinstance(exc, SpecmcpError):
            error(str(exc))
            sys.exit(exc.exit_code)
        error(f"Unexpected error. Debug log: {_write_crash_log()}")
        sys.exit(EXIT_GENERIC_FAILURE)
