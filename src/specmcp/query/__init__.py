"""The query engine: read-only views over a loaded OpenAPI document.

* :mod:`~specmcp.query.navigator` -- resolve ``(path, method)`` to an
  operation.
* :mod:`~specmcp.query.extractors` -- endpoint, body, response, parameter,
  component and security-scheme views.
* :mod:`~specmcp.query.examples` -- example sets for request bodies,
  responses and components.
* :mod:`~specmcp.query.search` -- case-insensitive pattern search across the
  whole document.

Every function here takes the document as its first argument and either
returns a result tree or a :class:`~specmcp.models.Diagnostic`.  None of them
mutate the document.
"""

from specmcp.query.examples import get_examples
from specmcp.query.extractors import (
    get_component,
    get_endpoint,
    get_path_parameters,
    get_request_body,
    get_response_schema,
    list_components,
    list_endpoints,
    list_security_schemes,
)
from specmcp.query.navigator import HTTP_METHODS, iter_operations, resolve_operation
from specmcp.query.search import search_schema

__all__ = [
    "HTTP_METHODS",
    "get_component",
    "get_endpoint",
    "get_examples",
    "get_path_parameters",
    "get_request_body",
    "get_response_schema",
    "iter_operations",
    "list_components",
    "list_endpoints",
    "list_security_schemes",
    "resolve_operation",
    "search_schema",
]
