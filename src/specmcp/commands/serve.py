"""Serve command -- run the MCP server.

``specmcp serve [SPEC]`` starts a Model Context Protocol server that exposes
every query as a tool.  SPEC becomes the document tools read when a call
does not name one.
"""

from __future__ import annotations

from typing import Optional

import typer


def serve_command(
    ctx: typer.Context,
    spec: Optional[str] = typer.Argument(
        None, help="Default OpenAPI document (defaults to openapi.yaml)."
    ),
    transport: Optional[str] = typer.Option(
        None, "--transport", "-t", help="MCP transport: stdio, sse, streamable-http."
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Log level for stderr (DEBUG, INFO, WARNING, ...)."
    ),
) -> None:
    """Run the MCP server.

    Args:
        ctx: Typer context carrying the loaded global config.
        spec: Default document for tool calls without ``openapiSchemaPath``.
        transport: Overrides ``server.transport`` from the config.
        log_level: Overrides ``server.log_level`` from the config.

    Example::

        specmcp serve petstore.yaml
        specmcp serve --transport sse --log-level INFO
    """
    from specmcp.models import GlobalConfig
    from specmcp.server import configure_logging, run_server

    config: GlobalConfig = (ctx.obj or {}).get("config") or GlobalConfig()
    if ctx.obj and ctx.obj.get("verbose") and log_level is None:
        log_level = "DEBUG"
    configure_logging(log_level or config.server.log_level)

    run_server(
        default_spec=spec,
        transport=transport or config.server.transport,
        line_width=config.output.line_width,
    )
