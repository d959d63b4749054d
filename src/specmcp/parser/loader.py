"""Read an OpenAPI document into a plain ``dict`` tree.

A *source* is one of:

* ``-`` -- the document is read from stdin;
* an ``http://`` or ``https://`` URL -- fetched with :mod:`httpx`;
* anything else -- a file path, relative paths resolved against the
  current working directory.

JSON and YAML are both accepted.  A format hint (file suffix, or the
response ``content-type``) only decides the order in which the two parsers
are tried; with a ``json`` hint a JSON syntax error is reported directly.

The document is taken as written: no OpenAPI schema validation, no ``$ref``
resolution, no caching.  Callers reload on every query.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from specmcp.exceptions import SpecParseError

logger = logging.getLogger(__name__)

FETCH_TIMEOUT = 30.0

_SUFFIX_HINTS = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}


def load_spec(source: str) -> dict[str, Any]:
    """Load the document named by *source*.

    Args:
        source: A file path, an http(s) URL, or ``'-'`` for stdin.

    Returns:
        The root mapping of the document, keys in document order.

    Raises:
        SpecParseError: If the source cannot be read, is empty, does not
            parse, or its root is not a mapping.
    """
    if source == "-":
        return _load_from_stdin()
    if source.startswith(("http://", "https://")):
        return _load_from_url(source)
    return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    try:
        text = sys.stdin.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc
    if not text.strip():
        raise SpecParseError("No input received from stdin")
    return _parse_content(text)


def _load_from_url(url: str) -> dict[str, Any]:
    """Fetch *url* and parse the body, using ``content-type`` as the hint."""
    logger.debug("GET %s", url)
    try:
        response = httpx.get(url, timeout=FETCH_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} while fetching {url}"
        ) from exc
    except httpx.HTTPError as exc:
        raise SpecParseError(f"Failed to fetch {url}: {exc}") from exc

    media_type = response.headers.get("content-type", "").lower()
    if "json" in media_type:
        hint = "json"
    elif "yaml" in media_type or "yml" in media_type:
        hint = "yaml"
    else:
        hint = ""
    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    """Read and parse the file at *path*.

    The suffix (``.json``, ``.yaml``, ``.yml``) picks the parser tried first;
    any other suffix tries JSON, then YAML.
    """
    resolved = Path(path).expanduser().resolve()
    if not resolved.is_file():
        raise SpecParseError(f"Spec file not found: {path}")

    logger.debug("Reading %s", resolved)
    try:
        text = resolved.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SpecParseError(f"Cannot read {path}: {exc}") from exc
    if not text.strip():
        raise SpecParseError(f"Spec file is empty: {path}")

    return _parse_content(text, hint=_SUFFIX_HINTS.get(resolved.suffix.lower(), ""))


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Decode *content* as JSON or YAML and check that the root is a mapping.

    Args:
        content: Raw document text.
        hint: ``"json"``, ``"yaml"`` or empty.  ``"yaml"`` skips the JSON
            attempt; ``"json"`` makes a JSON error final.

    Raises:
        SpecParseError: If neither parser accepts the text, or the root
            value is not a mapping.
    """
    problems: list[str] = []

    if hint != "yaml":
        try:
            return _require_mapping(json.loads(content))
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
            problems.append(f"JSON: {exc}")

    try:
        return _require_mapping(yaml.safe_load(content))
    except yaml.YAMLError as exc:
        problems.append(f"YAML: {exc}")

    raise SpecParseError(
        "Failed to parse spec as JSON or YAML\n" + "\n".join(f"  {p}" for p in problems)
    )


def _require_mapping(value: Any) -> dict[str, Any]:
    if isinstance(value, dict):
        return value
    kind = "empty document" if value is None else type(value).__name__
    raise SpecParseError(f"Spec must be a JSON/YAML object (got {kind})")
