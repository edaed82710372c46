"""Load class descriptors from disk.

Descriptor files are normally JSON, as written by the Java extraction tool.
YAML is accepted as well: content is parsed as JSON first and falls back to
YAML, the same detection order used for any structured text input.

The public entry points are:

* :func:`load_descriptor` -- Read, parse and validate one file.
* :func:`parse_descriptor` -- Validate an already-parsed mapping.

Validation only goes as far as building a
:class:`~dtsgen.models.ClassDescriptor`; unknown keys are ignored.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from dtsgen.exceptions import IOError_, ParseError
from dtsgen.models import ClassDescriptor


def load_descriptor(path: str | Path) -> ClassDescriptor:
    """Load a class descriptor from a local file.

    Args:
        path: Path to a ``.json`` (or YAML) descriptor file.

    Returns:
        The validated descriptor.

    Raises:
        IOError_: If the file cannot be read.
        ParseError: If the content is not well-formed or lacks a required key.
    """
    file_path = Path(path)
    try:
        content = file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(f"Descriptor {file_path} is not valid UTF-8: {exc}", path=file_path) from exc
    except OSError as exc:
        raise IOError_(f"Failed to read descriptor {file_path}: {exc}", path=file_path) from exc

    if not content.strip():
        raise ParseError(f"Descriptor file is empty: {file_path}", path=file_path)

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    data = _parse_content(content, hint=hint, path=file_path)
    return parse_descriptor(data, path=file_path)


def parse_descriptor(data: Any, path: Optional[Path] = None) -> ClassDescriptor:  # noqa: ANN401
    """Build a :class:`ClassDescriptor` from parsed JSON/YAML data.

    Raises:
        ParseError: If *data* is not an object or does not have the
            descriptor shape.
    """
    where = f" in {path}" if path is not None else ""
    if not isinstance(data, dict):
        raise ParseError(
            f"Descriptor must be a JSON/YAML object (got {type(data).__name__}){where}",
            path=path,
        )
    try:
        return ClassDescriptor.model_validate(data)
    except ValidationError as exc:
        raise ParseError(f"Invalid descriptor{where}: {_summarize(exc)}", path=path) from exc


def _parse_content(content: str, hint: str = "", path: Optional[Path] = None) -> Any:  # noqa: ANN401
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.
    A 'json' hint disables the fallback: a ``.json`` file that is not valid
    JSON is reported as such rather than being reinterpreted.

    Raises:
        ParseError: If the content cannot be parsed.
    """
    json_error: Exception | None = None

    if hint != "yaml":
        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise ParseError(f"Invalid JSON in {path}: {exc}", path=path) from exc

    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as exc:
        msg = f"Failed to parse {path} as JSON or YAML"
        if json_error:
            msg += f"\n  JSON error: {json_error}"
        msg += f"\n  YAML error: {exc}"
        raise ParseError(msg, path=path) from exc


def _summarize(exc: ValidationError) -> str:
    """Condense a Pydantic error into ``loc: msg`` pairs on one line."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)
