"""Turn query results into text, and keep the CLI's streams apart.

Rendering
    :func:`render_result` produces the single text block every query answers
    with: the bare sentence of a :class:`~specmcp.models.Diagnostic`, or
    block-style YAML for anything else.  The YAML keeps the document's key
    order, wraps near ``line_width`` columns and never uses anchors or
    aliases, so a subtree referenced twice is printed twice.

Terminal output
    :class:`OutputManager` writes answers to stdout and everything else
    (errors, progress, debug notes) to stderr, in the manner recommended by
    `clig.dev <https://clig.dev/>`_.  On an interactive terminal answers are
    syntax-highlighted by Rich; ``NO_COLOR``, ``TERM=dumb`` and
    ``--no-color`` turn colour off.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

import yaml
from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax

from specmcp.models import Diagnostic, SearchResult

DEFAULT_LINE_WIDTH = 100


class _NoAliasDumper(yaml.SafeDumper):
    """SafeDumper that writes repeated objects in full instead of as aliases."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


def to_yaml(data: Any, line_width: int = DEFAULT_LINE_WIDTH) -> str:
    """Serialise *data* as block-style YAML ending in a newline."""
    return yaml.dump(
        data,
        Dumper=_NoAliasDumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=line_width,
    )


def to_tree(result: Any) -> Any:
    """Convert a query result into plain dicts and lists.

    :class:`~specmcp.models.SearchResult` drops its empty categories;
    other Pydantic models are dumped by alias; plain trees pass through.
    """
    if isinstance(result, SearchResult):
        return result.to_tree()
    if isinstance(result, BaseModel):
        return result.model_dump(by_alias=True)
    return result


def render_result(result: Any, line_width: int = DEFAULT_LINE_WIDTH) -> str:
    """Render a query result as the single text block returned to callers.

    Example::

        render_result(Diagnostic(message="Path /cats not found"))
        # 'Path /cats not found'
        render_result({"/pets": {"GET": "List all pets"}})
        # '/pets:\\n  GET: List all pets\\n'
    """
    if isinstance(result, Diagnostic):
        return result.message
    return to_yaml(to_tree(result), line_width=line_width)


class OutputFormat(str, Enum):
    """How answers are written to stdout.

    ``AUTO`` becomes ``RICH`` on a colour-capable TTY and ``YAML`` elsewhere.
    """

    AUTO = "auto"
    YAML = "yaml"
    JSON = "json"
    RICH = "rich"


class OutputManager:
    """Owns stdout and stderr for one CLI invocation.

    Args:
        format: Requested answer format; ``AUTO`` is resolved here.
        no_color: Disable colour even on a terminal.
        quiet: Drop :meth:`info` and :meth:`success` messages.
        verbose: Show :meth:`debug` messages.
        line_width: Preferred width of rendered YAML.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
        line_width: int = DEFAULT_LINE_WIDTH,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._line_width = line_width

        if format != OutputFormat.AUTO:
            self._format = format
        elif _is_tty() and not self._no_color:
            self._format = OutputFormat.RICH
        else:
            self._format = OutputFormat.YAML

        self._console = Console(file=sys.stdout, no_color=self._no_color, force_terminal=True)
        self._err_console = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        """The resolved output format."""
        return self._format

    def format_result(self, result: Any) -> None:
        """Write one query answer to stdout.

        JSON mode dumps the result tree (a diagnostic becomes
        ``{"message": ...}``); Rich mode highlights YAML answers; diagnostics
        and YAML mode print the rendered text as is.
        """
        if self._format == OutputFormat.JSON:
            tree = to_tree(result)
            self.print_data(json.dumps(tree, indent=2, ensure_ascii=False, default=str))
            return

        text = render_result(result, line_width=self._line_width)
        if self._format == OutputFormat.RICH and not isinstance(result, Diagnostic):
            self._console.print(Syntax(text.rstrip("\n"), "yaml", theme="monokai", word_wrap=True))
        else:
            self.print_data(text)

    def print_data(self, text: str) -> None:
        """Print *text* to stdout with exactly one trailing newline."""
        print(text.rstrip("\n"), file=sys.stdout, flush=True)

    def _note(self, message: str, markup: str, plain_prefix: str = "") -> None:
        if self._no_color:
            print(f"{plain_prefix}{message}", file=sys.stderr, flush=True)
        else:
            self._err_console.print(markup.format(message=escape(message)))

    def info(self, message: str) -> None:
        if not self._quiet:
            self._note(message, "{message}")

    def success(self, message: str) -> None:
        if not self._quiet:
            self._note(message, "[green]{message}[/green]")

    def error(self, message: str) -> None:
        """Report a failure on stderr; shown even with ``--quiet``."""
        self._note(message, "[bold red]Error:[/bold red] {message}", plain_prefix="Error: ")

    def debug(self, message: str) -> None:
        if self._verbose:
            self._note(message, "[dim]\\[debug] {message}[/dim]", plain_prefix="[debug] ")


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """``NO_COLOR`` (any value) or ``TERM=dumb`` disables colour."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# Process-wide manager, installed by the CLI callback.
_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating a default one."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager (tests use this between runs)."""
    global _output
    _output = None


def format_result(result: Any) -> None:
    get_output().format_result(result)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
