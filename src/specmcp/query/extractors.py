"""Extract small, targeted views from a loaded OpenAPI document.

Each public function here backs one query of the same (hyphenated) name and
returns either a plain ``dict``/``list`` tree or a
:class:`~specmcp.models.Diagnostic`.  The policy is the same throughout:

* A missing document *section* (no ``paths``, no ``components``) yields an
  empty result, not an error.
* A missing *navigation key* (path, method, status code, component) yields a
  Diagnostic naming what was looked up and, where the document makes it
  cheap, the valid alternatives.

Values are cut out of the document unchanged; ``$ref`` pointers are left as
written.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from specmcp.exceptions import OperationNotFoundError, PathNotFoundError
from specmcp.models import Diagnostic
from specmcp.parser.tree import as_mapping, get_mapping, get_sequence, string_keys
from specmcp.query.navigator import (
    HTTP_METHODS,
    find_operation,
    get_path_item,
    resolve_operation,
)

Result = Union[dict[str, Any], list[Any], Diagnostic]

_ENDPOINT_FIELDS = (
    "summary",
    "description",
    "tags",
    "parameters",
    "requestBody",
    "responses",
    "security",
    "deprecated",
)

# Type-specific fields reported by list_security_schemes, besides type and
# description. oauth2 is handled separately (flow names only).
_SCHEME_FIELDS = {
    "apiKey": ("in", "name"),
    "http": ("scheme",),
}


def _pick(node: dict[str, Any], keys: tuple[str, ...]) -> dict[str, Any]:
    """Copy the *keys* present in *node*, in *keys* order."""
    return {key: node[key] for key in keys if key in node}


def list_endpoints(doc: dict[str, Any]) -> dict[str, Any]:
    """List every path with its methods and summaries.

    Returns:
        ``{path: {METHOD: summary}}`` in document order.  Operations
        without a summary read ``"No summary"``.  A path item without any
        operation still appears, mapped to an empty dict.
    """
    endpoints: dict[str, Any] = {}
    for path, path_item in get_mapping(doc, "paths").items():
        methods: dict[str, str] = {}
        for name, operation in as_mapping(path_item).items():
            if not isinstance(name, str) or name.lower() not in HTTP_METHODS:
                continue
            summary = as_mapping(operation).get("summary")
            methods[name.upper()] = summary if summary else "No summary"
        endpoints[str(path)] = methods
    return endpoints


def get_endpoint(doc: dict[str, Any], path: str, method: str) -> Result:
    """Return the full record of one operation.

    The record always starts with ``path`` and the upper-cased ``method``;
    the remaining fields (summary, description, tags, parameters,
    requestBody, responses, security, deprecated) are copied when the
    operation defines them.
    """
    try:
        operation = resolve_operation(doc, path, method)
    except OperationNotFoundError as exc:
        return Diagnostic(message=str(exc))

    record: dict[str, Any] = {"path": path, "method": method.upper()}
    record.update(_pick(operation, _ENDPOINT_FIELDS))
    return record


def get_request_body(doc: dict[str, Any], path: str, method: str) -> Result:
    """Return the ``requestBody`` node of one operation."""
    try:
        operation = resolve_operation(doc, path, method)
    except OperationNotFoundError as exc:
        return Diagnostic(message=str(exc))

    request_body = operation.get("requestBody")
    if request_body is None:
        return Diagnostic(
            message=f"No request body defined for {method.upper()} {path}"
        )
    return request_body


def get_response_schema(
    doc: dict[str, Any],
    path: str,
    method: str,
    status_code: str = "200",
) -> Result:
    """Return the response node for *status_code*.

    Falls back to the ``default`` response when the exact status code is
    not declared.  When neither exists, the diagnostic lists the declared
    status codes in document order.
    """
    try:
        operation = resolve_operation(doc, path, method)
    except OperationNotFoundError as exc:
        return Diagnostic(message=str(exc))

    raw_responses = operation.get("responses")
    if not isinstance(raw_responses, dict):
        return Diagnostic(message=f"No responses defined for {method.upper()} {path}")

    responses = string_keys(raw_responses)
    response = responses.get(str(status_code))
    if response is None:
        response = responses.get("default")
    if response is None:
        return Diagnostic(
            message=(
                f"No response for status code {status_code} (or default) found for "
                f"{method.upper()} {path}.\n"
                f"Available status codes: {', '.join(responses)}"
            )
        )
    return response


def get_path_parameters(
    doc: dict[str, Any],
    path: str,
    method: Optional[str] = None,
) -> Result:
    """Return the parameters that apply to *path* (and *method*, if given).

    Path-item parameters come first, followed by the operation's own
    parameters.  The two lists are concatenated as-is: an operation-level
    parameter that overrides a path-level one of the same name appears
    twice.  An unknown *method* contributes nothing.
    """
    try:
        path_item = get_path_item(doc, path)
    except PathNotFoundError as exc:
        return Diagnostic(message=str(exc))

    parameters = list(get_sequence(path_item, "parameters"))
    if method:
        operation = find_operation(path_item, method)
        if operation is not None:
            parameters.extend(get_sequence(operation, "parameters"))

    if not parameters:
        prefix = f"{method.upper()} " if method else ""
        return Diagnostic(message=f"No parameters found for {prefix}{path}")
    return parameters


def list_components(doc: dict[str, Any]) -> dict[str, list[str]]:
    """List component names per category, in document order.

    Categories whose value is not a mapping are skipped.
    """
    result: dict[str, list[str]] = {}
    for category, items in get_mapping(doc, "components").items():
        if isinstance(items, dict):
            result[str(category)] = [str(name) for name in items]
    return result


def get_component(doc: dict[str, Any], component_type: str, name: str) -> Result:
    """Return the full definition of ``components[component_type][name]``."""
    components = string_keys(get_mapping(doc, "components"))
    category = components.get(component_type)
    if not isinstance(category, dict):
        return Diagnostic(
            message=(
                f"Component type '{component_type}' not found. "
                f"Available types: {', '.join(components)}"
            )
        )

    items = string_keys(category)
    component = items.get(name)
    if component is None:
        return Diagnostic(
            message=(
                f"Component '{name}' not found in '{component_type}'. "
                f"Available components: {', '.join(items)}"
            )
        )
    return component


def list_security_schemes(doc: dict[str, Any]) -> Result:
    """Summarise every security scheme.

    Each entry carries ``type`` and ``description`` plus the fields that
    matter for its type: ``in``/``name`` for ``apiKey``, ``scheme`` for
    ``http`` and the list of flow names for ``oauth2``.  A document with
    no security schemes yields a diagnostic rather than an empty mapping.
    """
    schemes = get_mapping(get_mapping(doc, "components"), "securitySchemes")
    result: dict[str, Any] = {}
    for name, raw_scheme in schemes.items():
        scheme = as_mapping(raw_scheme)
        scheme_type = scheme.get("type")
        entry = _pick(scheme, ("type", "description"))
        if scheme_type == "oauth2":
            entry["flows"] = [str(flow) for flow in get_mapping(scheme, "flows")]
        elif isinstance(scheme_type, str):
            entry.update(_pick(scheme, _SCHEME_FIELDS.get(scheme_type, ())))
        result[str(name)] = entry

    if not result:
        return Diagnostic(message="No security schemes defined in this API")
    return result
