"""OpenAPI document loading and generic tree access.

* :mod:`~specmcp.parser.loader` -- I/O layer (file, URL, stdin) plus format
  detection.  Every query calls :func:`load_spec` anew; nothing is cached.
* :mod:`~specmcp.parser.tree` -- total accessor helpers for walking the
  loosely-typed document without raising on absent or malformed fields.
"""

from specmcp.parser.loader import load_spec
from specmcp.parser.tree import (
    as_mapping,
    get_mapping,
    get_sequence,
    get_text,
    string_keys,
)

__all__ = [
    "load_spec",
    "as_mapping",
    "get_mapping",
    "get_sequence",
    "get_text",
    "string_keys",
]
