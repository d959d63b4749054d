"""Query commands -- ask the document a question from the terminal.

Provides the ``specmcp query`` sub-command group, one command per query the
MCP server offers.  Each command loads the document named by ``--spec`` (or
the configured default), runs the query and prints the answer to stdout:
YAML when piped, highlighted YAML on a terminal, JSON with ``--json``.

"Not found" answers are printed like any other answer and exit 0.  A
document that cannot be loaded exits 7; an invalid search pattern exits 8.
"""

from __future__ import annotations

from typing import Any, Optional

import typer

from specmcp.exceptions import SpecmcpError
from specmcp.models import ExampleKind
from specmcp.output import debug, error, format_result


query_app = typer.Typer(no_args_is_help=True)

_SPEC_HELP = "OpenAPI document (file path or URL). Defaults to the configured document."


def _run(ctx: typer.Context, query_name: str, spec: Optional[str], **arguments: Any) -> None:
    """Resolve the document, run *query_name* and print the answer.

    Raises:
        typer.Exit: With the error's exit code when the document cannot be
            loaded, the pattern is invalid, or the configuration is broken.
    """
    from specmcp.config import resolve_default_spec
    from specmcp.dispatcher import execute_query

    global_cfg = ctx.obj.get("config") if ctx.obj else None
    try:
        spec_path = resolve_default_spec(spec, global_cfg)
        debug(f"Querying {spec_path}")
        result = execute_query(query_name, spec_path, **arguments)
    except SpecmcpError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    format_result(result)


@query_app.command("list-endpoints")
def list_endpoints(
    ctx: typer.Context,
    spec: Optional[str] = typer.Option(None, "--spec", "-s", help=_SPEC_HELP),
) -> None:
    """List every path with its methods and summaries.

    Example::

        specmcp query list-endpoints --spec petstore.yaml
    """
    _run(ctx, "list-endpoints", spec)


@query_app.command("get-endpoint")
def get_endpoint(
    ctx: typer.Context,
    path: str = typer.Argument(help="Path template, e.g. /pets/{petId}."),
    method: str = typer.Argument(help="HTTP method, any case."),
    spec: Optional[str] = typer.Option(None, "--spec", "-s", help=_SPEC_HELP),
) -> None:
    """Show everything one operation declares.

    Example::

        specmcp query get-endpoint /pets post
    """
    _run(ctx, "get-endpoint", spec, path=path, method=method)


@query_app.command("get-request-body")
def get_request_body(
    ctx: typer.Context,
    path: str = typer.Argument(help="Path template."),
    method: str = typer.Argument(help="HTTP method, any case."),
    spec: Optional[str] = typer.Option(None, "--spec", "-s", help=_SPEC_HELP),
) -> None:
    """Show the request body of one operation."""
    _run(ctx, "get-request-body", spec, path=path, method=method)


@query_app.command("get-response-schema")
def get_response_schema(
    ctx: typer.Context,
    path: str = typer.Argument(help="Path template."),
    method: str = typer.Argument(help="HTTP method, any case."),
    status_code: str = typer.Option(
        "200", "--status-code", "-c", help="Status code; falls back to 'default'."
    ),
    spec: Optional[str] = typer.Option(None, "--spec", "-s", help=_SPEC_HELP),
) -> None:
    """Show one response of an operation.

    Example::

        specmcp query get-response-schema /pets/{petId} get -c 404
    """
    _run(
        ctx,
        "get-response-schema",
        spec,
        path=path,
        method=method,
        status_code=status_code,
    )


@query_app.command("get-path-parameters")
def get_path_parameters(
    ctx: typer.Context,
    path: str = typer.Argument(help="Path template."),
    method: Optional[str] = typer.Option(
        None, "--method", "-m", help="Also include this method's parameters."
    ),
    spec: Optional[str] = typer.Option(None, "--spec", "-s", help=_SPEC_HELP),
) -> None:
    """Show the parameters of a path, and optionally of one of its methods."""
    _run(ctx, "get-path-parameters", spec, path=path, method=method)


@query_app.command("list-components")
def list_components(
    ctx: typer.Context,
    spec: Optional[str] = typer.Option(None, "--spec", "-s", help=_SPEC_HELP),
) -> None:
    """List component names grouped by category."""
    _run(ctx, "list-components", spec)


@query_app.command("get-component")
def get_component(
    ctx: typer.Context,
    component_type: str = typer.Argument(
        metavar="TYPE", help="Component type (schemas, parameters, responses, ...)."
    ),
    name: str = typer.Argument(help="Component name."),
    spec: Optional[str] = typer.Option(None, "--spec", "-s", help=_SPEC_HELP),
) -> None:
    """Show the full definition of one component.

    Example::

        specmcp query get-component schemas Pet
    """
    _run(ctx, "get-component", spec, component_type=component_type, name=name)


@query_app.command("list-security-schemes")
def list_security_schemes(
    ctx: typer.Context,
    spec: Optional[str] = typer.Option(None, "--spec", "-s", help=_SPEC_HELP),
) -> None:
    """Summarise the document's security schemes."""
    _run(ctx, "list-security-schemes", spec)


@query_app.command("get-examples")
def get_examples(
    ctx: typer.Context,
    kind: ExampleKind = typer.Argument(metavar="TYPE", help="request, response or component."),
    path: Optional[str] = typer.Option(None, "--path", help="Path template (request/response)."),
    method: Optional[str] = typer.Option(None, "--method", "-m", help="HTTP method (request/response)."),
    status_code: Optional[str] = typer.Option(
        None,
        "--status-code",
        "-c",
        help="Response status code. Without it the first declared response is used.",
    ),
    component_type: Optional[str] = typer.Option(None, "--component-type", help="Component type."),
    component_name: Optional[str] = typer.Option(None, "--component-name", help="Component name."),
    spec: Optional[str] = typer.Option(None, "--spec", "-s", help=_SPEC_HELP),
) -> None:
    """Show the examples of a request body, a response or a component.

    Example::

        specmcp query get-examples response --path /pets/{petId} -m get -c 200
        specmcp query get-examples component --component-type schemas --component-name Pet
    """
    _run(
        ctx,
        "get-examples",
        spec,
        kind=kind.value,
        path=path,
        method=method,
        status_code=status_code,
        component_type=component_type,
        component_name=component_name,
    )


@query_app.command("search-schema")
def search_schema(
    ctx: typer.Context,
    pattern: str = typer.Argument(help="Case-insensitive regular expression."),
    spec: Optional[str] = typer.Option(None, "--spec", "-s", help=_SPEC_HELP),
) -> None:
    """Search paths, operations, parameters, components and security schemes.

    Example::

        specmcp query search-schema 'pet(s)?$'
    """
    _run(ctx, "search-schema", spec, pattern=pattern)
