"""Query registry and the load -> extract -> render pipeline.

:data:`QUERIES` maps each external query name (``list-endpoints``,
``get-endpoint``, ...) to the extractor that answers it.  :func:`run_query`
is the single entry point used by both the MCP server and the CLI: it loads
the document afresh, runs the extractor and renders the answer as one text
block.

Documents are never cached between calls.  Two calls naming the same file
read it twice, so an edit made between them is always visible.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable

from specmcp.exceptions import InvalidUsageError
from specmcp.output import DEFAULT_LINE_WIDTH, render_result
from specmcp.parser.loader import load_spec
from specmcp.query import (
    get_component,
    get_endpoint,
    get_examples,
    get_path_parameters,
    get_request_body,
    get_response_schema,
    list_components,
    list_endpoints,
    list_security_schemes,
    search_schema,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryDefinition:
    """One named query.

    Attributes:
        name: External, hyphenated query name.
        description: One-line description shown to MCP clients and in
            ``--help``.
        handler: Extractor called as ``handler(document, **arguments)``.
    """

    name: str
    description: str
    handler: Callable[..., Any]


QUERIES: dict[str, QueryDefinition] = {
    q.name: q
    for q in (
        QueryDefinition(
            "list-endpoints",
            "Lists all API paths and their HTTP methods with summaries, organized by path",
            list_endpoints,
        ),
        QueryDefinition(
            "get-endpoint",
            "Gets detailed information about a specific API endpoint",
            get_endpoint,
        ),
        QueryDefinition(
            "get-request-body",
            "Gets the request body schema for a specific endpoint",
            get_request_body,
        ),
        QueryDefinition(
            "get-response-schema",
            "Gets the response schema for a specific endpoint, method, and status code "
            "(falls back to the default response)",
            get_response_schema,
        ),
        QueryDefinition(
            "get-path-parameters",
            "Gets the parameters for a specific path, optionally including those of one method",
            get_path_parameters,
        ),
        QueryDefinition(
            "list-components",
            "Lists all schema components (schemas, parameters, responses, etc.)",
            list_components,
        ),
        QueryDefinition(
            "get-component",
            "Gets detailed definition for a specific component",
            get_component,
        ),
        QueryDefinition(
            "list-security-schemes",
            "Lists all available security schemes",
            list_security_schemes,
        ),
        QueryDefinition(
            "get-examples",
            "Gets examples for a specific component or endpoint. For response examples "
            "without a status code, the first response declared in the document is used",
            get_examples,
        ),
        QueryDefinition(
            "search-schema",
            "Searches paths, operations, parameters, components and security schemes "
            "for a case-insensitive regular expression",
            search_schema,
        ),
    )
}


def get_query(name: str) -> QueryDefinition:
    """Look up a query by its external name.

    Raises:
        InvalidUsageError: If no query has that name.
    """
    try:
        return QUERIES[name]
    except KeyError:
        raise InvalidUsageError(
            f"Unknown query '{name}'. Available queries: {', '.join(QUERIES)}"
        ) from None


def execute_query(query_name: str, spec_path: str, **arguments: Any) -> Any:
    """Load *spec_path* and run the query *query_name* against it.

    Returns:
        The extractor's structured result (a tree, a
        :class:`~specmcp.models.SearchResult` or a
        :class:`~specmcp.models.Diagnostic`).

    Raises:
        InvalidUsageError: If the query is unknown or the arguments do not
            fit its signature.
        SpecParseError: If the document cannot be loaded.
        PatternError: If a search pattern does not compile.
    """
    query = get_query(query_name)
    signature = inspect.signature(query.handler)
    try:
        signature.bind(None, **arguments)
    except TypeError as exc:
        raise InvalidUsageError(f"Invalid arguments for {query_name}: {exc}") from None

    logger.debug("Running %s on %s with %r", query_name, spec_path, arguments)
    document = load_spec(spec_path)
    return query.handler(document, **arguments)


def run_query(
    query_name: str,
    spec_path: str,
    line_width: int = DEFAULT_LINE_WIDTH,
    **arguments: Any,
) -> str:
    """Run a query and render its answer as a single text block.

    Example::

        run_query("get-endpoint", "petstore.yaml", path="/pets", method="post")
    """
    result = execute_query(query_name, spec_path, **arguments)
    return render_result(result, line_width=line_width)
