"""Resolve a ``(path, method)`` address to an operation node.

Path lookup is an exact string match against the path template as written in
the document, braces included: ``/pets/{petId}`` matches, ``/pets/1`` does
not.  Method lookup is case-insensitive but restricted to :data:`HTTP_METHODS`,
so non-operation keys of a path item (``parameters``, ``summary``,
``servers``) can never be returned as an operation.
"""

from __future__ import annotations

from typing import Any, Iterator

from specmcp.exceptions import MethodNotFoundError, PathNotFoundError
from specmcp.models import HTTPMethod
from specmcp.parser.tree import as_mapping, get_mapping

HTTP_METHODS: tuple[str, ...] = tuple(m.value for m in HTTPMethod)
"""Lower-case HTTP methods in canonical scan order."""


def get_path_item(doc: dict[str, Any], path: str) -> dict[str, Any]:
    """Return the path item for *path*.

    Raises:
        PathNotFoundError: If *path* is missing from ``doc["paths"]`` or its
            value is not a mapping.
    """
    paths = get_mapping(doc, "paths")
    path_item = paths.get(path)
    if not isinstance(path_item, dict):
        raise PathNotFoundError(path)
    return path_item


def find_operation(path_item: dict[str, Any], method: str) -> dict[str, Any] | None:
    """Return the operation for *method* in *path_item*, or ``None``.

    Both *method* and the path item's keys are compared case-insensitively.
    """
    key = method.lower()
    if key not in HTTP_METHODS:
        return None
    for name, operation in path_item.items():
        if isinstance(name, str) and name.lower() == key and isinstance(operation, dict):
            return operation
    return None


def resolve_operation(doc: dict[str, Any], path: str, method: str) -> dict[str, Any]:
    """Resolve *path* and *method* to an operation node.

    Args:
        doc: The loaded document.
        path: Path template exactly as written in the document.
        method: HTTP method, any case.

    Returns:
        The operation mapping.

    Raises:
        PathNotFoundError: If the path is absent.
        MethodNotFoundError: If the path exists but has no such operation.
    """
    operation = find_operation(get_path_item(doc, path), method)
    if operation is None:
        raise MethodNotFoundError(path, method)
    return operation


def iter_operations(doc: dict[str, Any]) -> Iterator[tuple[str, str, dict[str, Any]]]:
    """Yield ``(path, method, operation)`` for every operation in the document.

    Paths come in document order, methods within a path in
    :data:`HTTP_METHODS` order.
    """
    for path, path_item in get_mapping(doc, "paths").items():
        path_item = as_mapping(path_item)
        for method in HTTP_METHODS:
            operation = find_operation(path_item, method)
            if operation is not None:
                yield str(path), method, operation
