"""MCP server exposing every query as a tool.

Each tool answers with exactly one text block -- the rendered output of
:func:`~specmcp.dispatcher.run_query`.  "Not found" answers are ordinary
text results; only a document that cannot be loaded and an invalid search
pattern surface as tool errors.

Tool arguments keep the protocol's camelCase names (``openapiSchemaPath``,
``statusCode``, ``componentType``, ``componentName``) and are mapped onto
the extractors' keyword arguments here.

Every tool accepts an optional ``openapiSchemaPath``.  When a call omits
it, the server's default document is queried (see
:func:`~specmcp.config.resolve_default_spec`).  The document is re-read on
every call.

stdout carries the protocol; all logging goes to stderr.
"""

from __future__ import annotations

import logging
from typing import Annotated, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import Field
from rich.console import Console
from rich.logging import RichHandler

from specmcp import __version__
from specmcp.config import resolve_default_spec
from specmcp.dispatcher import QUERIES, run_query
from specmcp.output import DEFAULT_LINE_WIDTH

logger = logging.getLogger(__name__)

SERVER_NAME = "OpenAPI Schema"

SERVER_INSTRUCTIONS = f"""\
Provides OpenAPI schema information for schema files (specmcp {__version__}).

Start with list-endpoints or search-schema to find what you need, then use
get-endpoint, get-request-body, get-response-schema or get-component for
details. Paths must be given exactly as templated in the document, for
example /pets/{{petId}}. "Not found" answers list the valid alternatives.
"""

SpecPath = Annotated[
    Optional[str],
    Field(description="Path to the OpenAPI schema file (defaults to the server's document)"),
]
ApiPath = Annotated[str, Field(description="API path template, e.g. /pets/{petId}")]
Method = Annotated[str, Field(description="HTTP method, any case")]


def create_server(
    default_spec: Optional[str] = None,
    line_width: int = DEFAULT_LINE_WIDTH,
) -> FastMCP:
    """Create the MCP server with all tools registered.

    Args:
        default_spec: Document used when a call gives no
            ``openapiSchemaPath``; resolved through
            :func:`~specmcp.config.resolve_default_spec`.
        line_width: Preferred line width of rendered YAML.

    Returns:
        FastMCP server instance.
    """
    fallback_spec = resolve_default_spec(default_spec)
    logger.info("Default OpenAPI document: %s", fallback_spec)

    mcp = FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS)

    def _run(query_name: str, spec_path: Optional[str], **arguments: object) -> str:
        return run_query(
            query_name,
            spec_path or fallback_spec,
            line_width=line_width,
            **arguments,
        )

    def _describe(query_name: str) -> str:
        return QUERIES[query_name].description

    @mcp.tool(name="list-endpoints", description=_describe("list-endpoints"))
    def list_endpoints(openapiSchemaPath: SpecPath = None) -> str:
        return _run("list-endpoints", openapiSchemaPath)

    @mcp.tool(name="get-endpoint", description=_describe("get-endpoint"))
    def get_endpoint(
        path: ApiPath,
        method: Method,
        openapiSchemaPath: SpecPath = None,
    ) -> str:
        return _run("get-endpoint", openapiSchemaPath, path=path, method=method)

    @mcp.tool(name="get-request-body", description=_describe("get-request-body"))
    def get_request_body(
        path: ApiPath,
        method: Method,
        openapiSchemaPath: SpecPath = None,
    ) -> str:
        return _run("get-request-body", openapiSchemaPath, path=path, method=method)

    @mcp.tool(name="get-response-schema", description=_describe("get-response-schema"))
    def get_response_schema(
        path: ApiPath,
        method: Method,
        statusCode: Annotated[str, Field(description="Status code, e.g. 200 or default")] = "200",
        openapiSchemaPath: SpecPath = None,
    ) -> str:
        return _run(
            "get-response-schema",
            openapiSchemaPath,
            path=path,
            method=method,
            status_code=statusCode,
        )

    @mcp.tool(name="get-path-parameters", description=_describe("get-path-parameters"))
    def get_path_parameters(
        path: ApiPath,
        method: Annotated[
            Optional[str], Field(description="HTTP method whose parameters are appended")
        ] = None,
        openapiSchemaPath: SpecPath = None,
    ) -> str:
        return _run("get-path-parameters", openapiSchemaPath, path=path, method=method)

    @mcp.tool(name="list-components", description=_describe("list-components"))
    def list_components(openapiSchemaPath: SpecPath = None) -> str:
        return _run("list-components", openapiSchemaPath)

    @mcp.tool(name="get-component", description=_describe("get-component"))
    def get_component(
        type: Annotated[str, Field(description="Component type (e.g., schemas, parameters, responses)")],
        name: Annotated[str, Field(description="Component name")],
        openapiSchemaPath: SpecPath = None,
    ) -> str:
        return _run("get-component", openapiSchemaPath, component_type=type, name=name)

    @mcp.tool(name="list-security-schemes", description=_describe("list-security-schemes"))
    def list_security_schemes(openapiSchemaPath: SpecPath = None) -> str:
        return _run("list-security-schemes", openapiSchemaPath)

    @mcp.tool(name="get-examples", description=_describe("get-examples"))
    def get_examples(
        type: Annotated[str, Field(description="Type of example to retrieve: request, response or component")],
        path: Annotated[Optional[str], Field(description="API path (required for request/response examples)")] = None,
        method: Annotated[Optional[str], Field(description="HTTP method (required for request/response examples)")] = None,
        statusCode: Annotated[Optional[str], Field(description="Status code (for response examples)")] = None,
        componentType: Annotated[Optional[str], Field(description="Component type (required for component examples)")] = None,
        componentName: Annotated[Optional[str], Field(description="Component name (required for component examples)")] = None,
        openapiSchemaPath: SpecPath = None,
    ) -> str:
        return _run(
            "get-examples",
            openapiSchemaPath,
            kind=type,
            path=path,
            method=method,
            status_code=statusCode,
            component_type=componentType,
            component_name=componentName,
        )

    @mcp.tool(name="search-schema", description=_describe("search-schema"))
    def search_schema(
        pattern: Annotated[str, Field(description="Search pattern (case-insensitive regular expression)")],
        openapiSchemaPath: SpecPath = None,
    ) -> str:
        return _run("search-schema", openapiSchemaPath, pattern=pattern)

    return mcp


def configure_logging(level: str = "WARNING") -> None:
    """Send log records to stderr through Rich, leaving stdout to the protocol."""
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(level=level.upper(), format="%(message)s", handlers=[handler], force=True)


def run_server(
    default_spec: Optional[str] = None,
    transport: str = "stdio",
    line_width: int = DEFAULT_LINE_WIDTH,
) -> None:
    """Create the server and serve it until the client disconnects.

    Args:
        default_spec: Document used when a call does not name one.
        transport: MCP transport (``stdio``, ``sse`` or ``streamable-http``).
        line_width: Preferred line width of rendered YAML.
    """
    mcp = create_server(default_spec, line_width=line_width)
    logger.info("Serving %d tools over %s", len(QUERIES), transport)
    mcp.run(transport=transport)
