"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~dtsgen.exceptions.DtsgenError` subclass.
Build scripts can inspect the exit code to tell a bad descriptor from a
filesystem problem without parsing stderr.

Example::

    $ dtsgen generate ./descriptors
    $ echo $?
    6   # EXIT_PARTIAL_FAILURE -- some descriptors could not be converted
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments (reported by Typer)."""

EXIT_INVALID_TYPE = 3
"""A qualified type name could not be translated."""

EXIT_PARSE_ERROR = 4
"""A descriptor file was not well-formed or did not have the expected shape."""

EXIT_IO_ERROR = 5
"""A filesystem read or write failed."""

EXIT_PARTIAL_FAILURE = 6
"""At least one descriptor failed while the rest of the tree was generated."""

EXIT_INTERRUPTED = 130
"""The run was cancelled with Ctrl-C (128 + SIGINT)."""
