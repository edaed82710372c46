"""Exception hierarchy for dtsgen.

All exceptions inherit from :class:`DtsgenError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`dtsgen.exit_codes`.
The top-level error handler in :func:`dtsgen.app.main` catches
``DtsgenError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    DtsgenError (exit 1)
    +-- ConfigError         (exit 1)
    +-- InvalidTypeError    (exit 3)
    +-- ParseError          (exit 4)
    +-- IOError_            (exit 5)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from dtsgen.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_TYPE,
    EXIT_IO_ERROR,
    EXIT_PARSE_ERROR,
)


class DtsgenError(Exception):
    """Base exception for all dtsgen errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`dtsgen.exit_codes`. The entry point catches
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


class ConfigError(DtsgenError):
    """Raised for configuration problems (invalid ``dtsgen.json``, bad values)."""

    exit_code = EXIT_GENERIC_FAILURE


class InvalidTypeError(DtsgenError):
    """Raised when a qualified type name ends in a separator (e.g. ``java.util.``)."""

    exit_code = EXIT_INVALID_TYPE

    def __init__(self, type_name: str):
        super().__init__(f"Invalid type: {type_name!r} has no name after the last '.'")
        self.type_name = type_name


class _PathError(DtsgenError):
    """Error tied to a file on disk. ``path`` is ``None`` when unknown."""

    def __init__(self, message: str, path: Optional[Path | str] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class ParseError(_PathError):
    """Raised when a descriptor file is not well-formed or has the wrong shape."""

    exit_code = EXIT_PARSE_ERROR


class IOError_(_PathError):
    """Raised on filesystem failures (missing directory, permission denied, disk full).

    Named with a trailing underscore to avoid shadowing the built-in
    ``IOError``.
    """

    exit_code = EXIT_IO_ERROR
