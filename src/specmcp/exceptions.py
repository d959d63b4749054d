"""Exception hierarchy for specmcp.

All exceptions inherit from :class:`SpecmcpError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specmcp.exit_codes`.
The top-level error handler in :func:`specmcp.app.main` catches
``SpecmcpError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    SpecmcpError (exit 1)
    +-- InvalidUsageError        (exit 2)
    +-- OperationNotFoundError   (exit 4)
    |   +-- PathNotFoundError
    |   +-- MethodNotFoundError
    +-- SpecParseError           (exit 7)
    +-- PatternError             (exit 8)
    +-- ConfigError              (exit 1)

Only :class:`SpecParseError` and :class:`PatternError` ever reach a caller of
a query.  The navigator raises :class:`OperationNotFoundError` subclasses, but
the extractors turn them into :class:`~specmcp.models.Diagnostic` results.
"""

from specmcp.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_PATTERN_ERROR,
    EXIT_SPEC_PARSE_ERROR,
)


class SpecmcpError(Exception):
    """Base exception for all specmcp errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`specmcp.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SpecmcpError):
    """Raised for unknown query names or invalid query arguments."""

    exit_code = EXIT_INVALID_USAGE


class OperationNotFoundError(SpecmcpError):
    """Raised when a ``(path, method)`` address does not resolve to an operation."""

    exit_code = EXIT_NOT_FOUND


class PathNotFoundError(OperationNotFoundError):
    """Raised when the path template is not a key of the document's ``paths``."""

    def __init__(self, path: str):
        super().__init__(f"Path {path} not found")
        self.path = path


class MethodNotFoundError(OperationNotFoundError):
    """Raised when the path exists but defines no operation for the method."""

    def __init__(self, path: str, method: str):
        super().__init__(f"Method {method} not found for path {path}")
        self.path = path
        self.method = method


class SpecParseError(SpecmcpError):
    """Raised when the OpenAPI document cannot be read or parsed."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class PatternError(SpecmcpError):
    """Raised when a search pattern is not a valid regular expression."""

    exit_code = EXIT_PATTERN_ERROR


class ConfigError(SpecmcpError):
    """Raised for configuration problems (invalid JSON, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE
