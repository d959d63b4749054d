"""specmcp -- Answer structured queries about an OpenAPI document.

This package loads an OpenAPI 3.x description from disk (or a URL) and
answers small, targeted questions about it: which endpoints exist, what a
request body looks like, which examples a response carries, where a pattern
occurs. Every answer is rendered as a single YAML text block so that an agent
(or a human at a terminal) can read it without walking the raw document.

The queries are served over the Model Context Protocol::

    specmcp serve openapi.yaml

and are also available directly from the command line::

    specmcp query get-endpoint /pets post --spec openapi.yaml

Modules:
    app: Typer application factory and CLI entry point.
    dispatcher: Query registry; load, extract, render.
    server: MCP server exposing every query as a tool.
    models: Pydantic models shared across the package.
    config: XDG-aware configuration and default-spec resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: YAML rendering and stdout/stderr discipline.
"""

__version__ = "1.0.0"
