"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~specmcp.exceptions.SpecmcpError` subclass.
Shell wrappers can inspect the exit code to tell a broken document apart from
a bad search pattern without parsing stderr.

Example::

    $ specmcp query search-schema '(' --spec openapi.yaml
    $ echo $?
    8   # EXIT_PATTERN_ERROR -- the regular expression did not compile
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_NOT_FOUND = 4
"""A path or method named on the command line does not exist in the document."""

EXIT_SPEC_PARSE_ERROR = 7
"""The OpenAPI document could not be loaded or parsed."""

EXIT_PATTERN_ERROR = 8
"""A search pattern is not a valid regular expression."""
