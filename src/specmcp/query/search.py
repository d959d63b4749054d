"""Case-insensitive pattern search across an OpenAPI document.

The pattern is used as a regular expression exactly as given; it is not
escaped, so ``pet.*id`` and ``^/users`` work as expected and an invalid
expression is reported as a :class:`~specmcp.exceptions.PatternError`.

Matches are collected into five independent categories of a
:class:`~specmcp.models.SearchResult`:

========================  ============================================  =========================
Category                  Matched against                               Recorded as
========================  ============================================  =========================
``paths``                 the path template                             ``/pets/{petId}``
``operations``            summary, description, any tag                 ``GET /pets``
``parameters``            parameter name or description                 ``limit (GET /pets)``
``components``            component name or description                 ``schemas.Pet``
``securitySchemes``       scheme name or description                    ``ApiKeyAuth``
========================  ============================================  =========================

Paths are visited in document order, methods in canonical order, and
components in document order within each category, so repeated searches
produce identical results.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional, Union

from specmcp.exceptions import PatternError
from specmcp.models import Diagnostic, SearchResult
from specmcp.parser.tree import as_mapping, get_mapping, get_sequence, get_text
from specmcp.query.navigator import iter_operations

logger = logging.getLogger(__name__)


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile *pattern* case-insensitively.

    Raises:
        PatternError: If *pattern* is not a valid regular expression.
    """
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as exc:
        raise PatternError(f"Invalid search pattern '{pattern}': {exc}") from exc


def _matches(regex: re.Pattern[str], *values: Optional[str]) -> bool:
    return any(value is not None and regex.search(value) for value in values)


def _tags(operation: dict[str, Any]) -> list[str]:
    return [
        str(tag)
        for tag in get_sequence(operation, "tags")
        if not isinstance(tag, (dict, list)) and tag is not None
    ]


def search_schema(doc: dict[str, Any], pattern: str) -> Union[SearchResult, Diagnostic]:
    """Search *doc* for *pattern*.

    Returns:
        A :class:`~specmcp.models.SearchResult` holding at least one match,
        or a diagnostic naming the pattern when nothing matched.

    Raises:
        PatternError: If *pattern* does not compile.
    """
    regex = compile_pattern(pattern)
    result = SearchResult()

    for path in get_mapping(doc, "paths"):
        if regex.search(str(path)):
            result.paths.append(str(path))

    for path, method, operation in iter_operations(doc):
        label = f"{method.upper()} {path}"
        if _matches(
            regex,
            get_text(operation, "summary"),
            get_text(operation, "description"),
            *_tags(operation),
        ):
            result.operations.append(label)

        for raw_param in get_sequence(operation, "parameters"):
            param = as_mapping(raw_param)
            name = get_text(param, "name")
            if _matches(regex, name, get_text(param, "description")):
                result.parameters.append(f"{name} ({label})")

    components = get_mapping(doc, "components")
    for category, items in components.items():
        if not isinstance(items, dict):
            continue
        for name, component in items.items():
            if _matches(regex, str(name), get_text(component, "description")):
                result.components.append(f"{category}.{name}")

    for name, scheme in get_mapping(components, "securitySchemes").items():
        if _matches(regex, str(name), get_text(scheme, "description")):
            result.security_schemes.append(str(name))

    if result.is_empty():
        logger.debug("No matches for pattern %r", pattern)
        return Diagnostic(message=f'No matches found for "{pattern}"')
    return result
