"""Total accessors for the loosely-typed document tree.

An OpenAPI document arrives as nested ``dict``/``list``/scalar values with no
schema enforced: any field may be missing, and a field that should be a
mapping may turn out to be a string or ``None``.  The helpers here never raise
for such input.  They return an empty mapping, an empty list, or ``None``
instead, so that every extractor can be written as if the document were
well-formed.
"""

from __future__ import annotations

from typing import Any, Optional


def as_mapping(value: Any) -> dict[str, Any]:
    """Return *value* if it is a mapping, otherwise an empty dict."""
    return value if isinstance(value, dict) else {}


def get_mapping(node: Any, key: str) -> dict[str, Any]:
    """Return ``node[key]`` if *node* is a mapping and the value is a mapping.

    Example::

        get_mapping({"paths": {"/a": {}}}, "paths")   # {"/a": {}}
        get_mapping({"paths": None}, "paths")          # {}
    """
    return as_mapping(as_mapping(node).get(key))


def get_sequence(node: Any, key: str) -> list[Any]:
    """Return ``node[key]`` if it is a list, otherwise an empty list."""
    value = as_mapping(node).get(key)
    return value if isinstance(value, list) else []


def get_text(node: Any, key: str) -> Optional[str]:
    """Return ``node[key]`` as a string, or ``None`` when absent.

    Non-string scalars (a numeric ``description``, say) are converted with
    ``str`` so that pattern matching can still look at them.
    """
    value = as_mapping(node).get(key)
    if value is None or isinstance(value, (dict, list)):
        return None
    return value if isinstance(value, str) else str(value)


def string_keys(mapping: dict[Any, Any]) -> dict[str, Any]:
    """Return a copy of *mapping* with every key converted to ``str``.

    YAML reads an unquoted ``200:`` response key as the integer ``200``;
    callers look status codes and component names up by their string form.
    """
    return {str(key): value for key, value in mapping.items()}
