"""Collect examples for request bodies, responses and components.

For a ``content`` mapping (media type -> media type object) the example set
of each media type is:

* its ``examples`` map, verbatim, when present;
* otherwise ``{"default": {"value": <example>}}`` when it has a single
  ``example``;
* otherwise nothing.

The result is keyed by media type.  An empty result becomes a
:class:`~specmcp.models.Diagnostic`.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from specmcp.exceptions import InvalidUsageError, OperationNotFoundError
from specmcp.models import Diagnostic, ExampleKind
from specmcp.parser.tree import as_mapping, get_mapping, string_keys
from specmcp.query.navigator import resolve_operation

Result = Union[dict[str, Any], Diagnostic]


def collect_examples(content: dict[str, Any]) -> dict[str, Any]:
    """Build the media-type-keyed example map for one ``content`` node."""
    examples: dict[str, Any] = {}
    for media_type, raw_media in content.items():
        media = as_mapping(raw_media)
        if media.get("examples") is not None:
            examples[str(media_type)] = media["examples"]
        elif media.get("example") is not None:
            examples[str(media_type)] = {"default": {"value": media["example"]}}
    return examples


def get_examples(
    doc: dict[str, Any],
    kind: str,
    path: Optional[str] = None,
    method: Optional[str] = None,
    status_code: Optional[str] = None,
    component_type: Optional[str] = None,
    component_name: Optional[str] = None,
) -> Result:
    """Return the examples of a request body, a response, or a component.

    Args:
        doc: The loaded document.
        kind: ``"request"``, ``"response"`` or ``"component"``.
        path: Path template (request and response examples).
        method: HTTP method (request and response examples).
        status_code: Response status code.  When omitted, the *first*
            response declared by the operation is used, in document order.
        component_type: Component category, e.g. ``"schemas"``.
        component_name: Component name within *component_type*.

    Raises:
        InvalidUsageError: If *kind* is not one of the three example kinds.
    """
    try:
        example_kind = ExampleKind(kind)
    except ValueError:
        expected = ", ".join(k.value for k in ExampleKind)
        raise InvalidUsageError(
            f"Unknown example type '{kind}'. Expected one of: {expected}"
        ) from None

    if example_kind == ExampleKind.REQUEST:
        return _request_examples(doc, path, method)
    if example_kind == ExampleKind.RESPONSE:
        return _response_examples(doc, path, method, status_code)
    return _component_examples(doc, component_type, component_name)


def _find_operation(
    doc: dict[str, Any], path: str, method: str
) -> Optional[dict[str, Any]]:
    try:
        return resolve_operation(doc, path, method)
    except OperationNotFoundError:
        return None


def _request_examples(
    doc: dict[str, Any], path: Optional[str], method: Optional[str]
) -> Result:
    if not path or not method:
        return Diagnostic(message="Path and method are required for request examples")

    operation = _find_operation(doc, path, method)
    if operation is None:
        return Diagnostic(message=f"Operation {method.upper()} {path} not found")

    content = as_mapping(operation.get("requestBody")).get("content")
    if not isinstance(content, dict):
        return Diagnostic(message=f"No request body defined for {method.upper()} {path}")

    examples = collect_examples(content)
    if not examples:
        return Diagnostic(message=f"No examples found for {method.upper()} {path} request")
    return examples


def _response_examples(
    doc: dict[str, Any],
    path: Optional[str],
    method: Optional[str],
    status_code: Optional[str],
) -> Result:
    if not path or not method:
        return Diagnostic(message="Path and method are required for response examples")

    operation = _find_operation(doc, path, method)
    if operation is None:
        return Diagnostic(message=f"Operation {method.upper()} {path} not found")

    raw_responses = operation.get("responses")
    if not isinstance(raw_responses, dict) or not raw_responses:
        return Diagnostic(message=f"No responses defined for {method.upper()} {path}")

    responses = string_keys(raw_responses)
    if status_code:
        response = responses.get(str(status_code))
    else:
        # First declared response wins; not necessarily the success one.
        response = next(iter(responses.values()))
    if response is None:
        return Diagnostic(
            message=(
                f"Response {status_code} not found for {method.upper()} {path}. "
                f"Available: {', '.join(responses)}"
            )
        )

    content = as_mapping(response).get("content")
    if not isinstance(content, dict):
        return Diagnostic(message="No content defined in response")

    examples = collect_examples(content)
    if not examples:
        suffix = f" {status_code}" if status_code else ""
        return Diagnostic(
            message=f"No examples found for {method.upper()} {path} response{suffix}"
        )
    return examples


def _component_examples(
    doc: dict[str, Any],
    component_type: Optional[str],
    component_name: Optional[str],
) -> Result:
    if not component_type or not component_name:
        return Diagnostic(
            message="Component type and name are required for component examples"
        )

    category = string_keys(get_mapping(doc, "components")).get(component_type)
    component = string_keys(as_mapping(category)).get(component_name)
    if component is None:
        return Diagnostic(
            message=f"Component {component_type}.{component_name} not found"
        )

    component = as_mapping(component)
    if component.get("examples") is not None:
        return component["examples"]
    if component.get("example") is not None:
        return {"default": component["example"]}
    return Diagnostic(
        message=f"No examples found for component {component_type}.{component_name}"
    )
