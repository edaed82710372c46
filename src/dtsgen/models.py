"""Canonical Pydantic models shared across all dtsgen modules.

The models fall into three groups:

**Descriptor models** -- the shape of one input file, as written by the Java
extraction tool. Field names follow the camelCase keys of the JSON files
(``superClass``, ``returnType``, ``isStatic``) through aliases:
    :class:`ConstructorDescriptor`, :class:`MethodDescriptor`,
    :class:`FieldDescriptor`, and :class:`ClassDescriptor`.

**Configuration model** -- :class:`GeneratorConfig`, resolved by
:func:`dtsgen.config.resolve_config`.

**Run results** -- :class:`FileStatus`, :class:`FileResult` and
:class:`GenerationReport`, produced by :func:`dtsgen.driver.generate`.

Descriptor models are frozen: a descriptor is read-only once loaded.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Descriptors ---

_DESCRIPTOR_CONFIG = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class ConstructorDescriptor(BaseModel):
    """One constructor overload.

    ``params`` maps parameter name to qualified type name. Dict ordering is
    the declaration order and is preserved in the generated signature.
    """

    model_config = _DESCRIPTOR_CONFIG

    params: dict[str, str]


class MethodDescriptor(BaseModel):
    """A method signature."""

    model_config = _DESCRIPTOR_CONFIG

    name: str
    params: dict[str, str]
    return_type: str = Field(alias="returnType")
    is_static: bool = Field(default=False, alias="isStatic")


class FieldDescriptor(BaseModel):
    """A field declaration."""

    model_config = _DESCRIPTOR_CONFIG

    name: str
    type: str
    is_static: bool = Field(default=False, alias="isStatic")


class ClassDescriptor(BaseModel):
    """One declared Java type.

    ``constructors`` and ``fields`` are ``None`` when the key is absent from
    the descriptor and an empty list when it is present but empty. Both
    render the same way; the distinction is kept for callers that care.

    Example::

        ClassDescriptor.model_validate({
            "name": "com.example.Dog",
            "superClass": "com.example.Animal",
            "methods": [
                {"name": "bark", "params": {}, "returnType": "void", "isStatic": False},
            ],
        })
    """

    model_config = _DESCRIPTOR_CONFIG

    name: str
    super_class: Optional[str] = Field(default=None, alias="superClass")
    constructors: Optional[list[ConstructorDescriptor]] = None
    methods: list[MethodDescriptor]
    fields: Optional[list[FieldDescriptor]] = None

    @property
    def short_name(self) -> str:
        """The declared type's name without its package prefix."""
        return self.name.rpartition(".")[2]


# --- Configuration ---


class GeneratorConfig(BaseModel):
    """Effective generator settings.

    Loaded from ``./dtsgen.json`` and environment variables, then
    overridden by CLI flags. See :func:`dtsgen.config.resolve_config`.
    """

    model_config = ConfigDict(extra="forbid")

    source_dir: str = Field(
        default="JvTypeGen/output/json",
        description="Root directory scanned for descriptor files",
    )
    descriptor_suffix: str = Field(
        default=".json", description="File suffix identifying descriptor files"
    )
    declaration_suffix: str = Field(
        default=".d.ts", description="Suffix of the generated sibling files"
    )
    fail_fast: bool = Field(
        default=False,
        description="Abort on the first failing descriptor instead of logging and continuing",
    )


# --- Run results ---


class FileStatus(str, enum.Enum):
    """Outcome of processing one descriptor file."""

    WRITTEN = "written"
    UNCHANGED = "unchanged"
    PLANNED = "planned"
    FAILED = "failed"


class FileResult(BaseModel):
    """Outcome for a single descriptor."""

    source: str
    output: Optional[str] = None
    status: FileStatus
    error: Optional[str] = None
    exit_code: Optional[int] = None


class GenerationReport(BaseModel):
    """Aggregate result of one :func:`dtsgen.driver.generate` run."""

    source_dir: str
    dry_run: bool = False
    files: list[FileResult] = Field(default_factory=list)

    def count(self, status: FileStatus) -> int:
        """Number of files that ended with *status*."""
        return sum(1 for f in self.files if f.status == status)

    @property
    def failed(self) -> list[FileResult]:
        """Results for files that could not be generated."""
        return [f for f in self.files if f.status == FileStatus.FAILED]

    @property
    def ok(self) -> bool:
        """``True`` when no file failed."""
        return not self.failed
