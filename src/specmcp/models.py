"""Canonical Pydantic models shared across all specmcp modules.

The models fall into two groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`OutputConfig`, :class:`ServerConfig` and :class:`GlobalConfig`.

**Query models** -- produced by the extractors and the search engine and
consumed by the renderer:
    :class:`HTTPMethod`, :class:`ExampleKind`, :class:`Diagnostic` and
    :class:`SearchResult`.

Query results other than these two models are plain ``dict``/``list`` trees
cut straight out of the document, so that nothing the document says is lost
or reshaped on the way to the renderer.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Configuration ---


class OutputConfig(BaseModel):
    """Output preferences for the command-line interface."""

    format: str = Field(
        default="auto", description="Output format: auto, yaml, json, rich"
    )
    line_width: int = Field(
        default=100, description="Preferred line width of rendered YAML"
    )


class ServerConfig(BaseModel):
    """Settings for ``specmcp serve``."""

    transport: str = Field(
        default="stdio", description="MCP transport: stdio, sse, streamable-http"
    )
    log_level: str = Field(
        default="WARNING", description="Log level for messages written to stderr"
    )


class GlobalConfig(BaseModel):
    """Root configuration object persisted as ``config.json``.

    Loaded by :func:`~specmcp.config.load_global_config` and saved by
    :func:`~specmcp.config.save_global_config`. Every field has a default,
    so a missing file behaves like an empty one.
    """

    default_spec: Optional[str] = Field(
        default=None,
        description="Document queried when a call does not name one",
    )
    output: OutputConfig = Field(default_factory=OutputConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


# --- Query models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods an OpenAPI path item may define, in canonical scan order."""

    GET = "get"
    POST = "post"
    PUT = "put"
    DELETE = "delete"
    PATCH = "patch"
    OPTIONS = "options"
    HEAD = "head"


class ExampleKind(str, enum.Enum):
    """Where ``get-examples`` looks for examples."""

    REQUEST = "request"
    RESPONSE = "response"
    COMPONENT = "component"


class Diagnostic(BaseModel):
    """A recovered "not found" or "no data" answer.

    Diagnostics travel the same rendering path as successful results; the
    renderer emits :attr:`message` verbatim instead of YAML.

    Example::

        Diagnostic(message="Path /cats not found")
    """

    model_config = ConfigDict(frozen=True)

    message: str

    def __str__(self) -> str:
        return self.message


class SearchResult(BaseModel):
    """Matches of one search pattern, grouped by where they were found.

    Each category is an ordered list of match descriptors:

    * ``paths`` -- the path template, e.g. ``/pets/{petId}``.
    * ``operations`` -- ``"METHOD path"``.
    * ``components`` -- ``"category.name"``.
    * ``parameters`` -- ``"name (METHOD path)"``.
    * ``securitySchemes`` -- the scheme name.
    """

    model_config = ConfigDict(populate_by_name=True)

    paths: list[str] = Field(default_factory=list)
    operations: list[str] = Field(default_factory=list)
    components: list[str] = Field(default_factory=list)
    parameters: list[str] = Field(default_factory=list)
    security_schemes: list[str] = Field(
        default_factory=list, alias="securitySchemes"
    )

    def is_empty(self) -> bool:
        """Return ``True`` when no category holds a match."""
        return not any(self.to_tree())

    def to_tree(self) -> dict[str, Any]:
        """Return the result as a plain dict, omitting empty categories."""
        return {
            key: value
            for key, value in self.model_dump(by_alias=True).items()
            if value
        }
